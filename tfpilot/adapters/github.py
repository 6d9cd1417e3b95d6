"""GitHub API adapter (issue comments on a pull request)."""

from typing import Any, Dict, List

import requests

from tfpilot.adapters.base import CommentPlatformAdapter, GitPlatformError
from tfpilot.models import PrComment, PullRequestContext

ACCEPT = "application/vnd.github.v3+json"
CONTENT_TYPE = "application/json"


def _comment_from_api(data: Dict[str, Any]) -> PrComment:
    return PrComment(id=data["id"], body=data.get("body") or "")


class GitHubAdapter(CommentPlatformAdapter):
    """GitHub REST implementation using the URLs from the event payload."""

    def __init__(self, token: str, timeout: float = 30.0) -> None:
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = ACCEPT

    def _request(
        self,
        method: str,
        url: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> requests.Response:
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def _json(self, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise GitPlatformError(f"{resp.status_code}: response is not JSON: {e}", status_code=resp.status_code) from e

    def list_comments(self, context: PullRequestContext) -> List[PrComment]:
        resp = self._request("GET", context.comments_url)
        data = self._json(resp) or []
        if not isinstance(data, list):
            raise GitPlatformError(f"{resp.status_code}: expected a list of comments", status_code=resp.status_code)
        return [_comment_from_api(d) for d in data if isinstance(d, dict) and "id" in d]

    def create_comment(self, context: PullRequestContext, body: str) -> PrComment:
        resp = self._request(
            "POST",
            context.comments_url,
            json={"body": body},
            headers={"Content-Type": CONTENT_TYPE},
        )
        data = self._json(resp)
        if not isinstance(data, dict) or "id" not in data:
            raise GitPlatformError(f"{resp.status_code}: unexpected comment payload", status_code=resp.status_code)
        return _comment_from_api(data)

    def delete_comment(self, context: PullRequestContext, comment_id: int) -> None:
        url = f"{context.issue_comment_url.rstrip('/')}/{comment_id}"
        self._request("DELETE", url)
