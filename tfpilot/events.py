"""CI event payload: extract the pull request context.

Reads the JSON document at GITHUB_EVENT_PATH. Only pull_request.number,
pull_request.comments_url and repository.issue_comment_url are used; the
latter carries a "{/number}" URI template suffix that is stripped.
"""

import json
from pathlib import Path
from typing import Any, Dict

from tfpilot.models import PullRequestContext

URI_TEMPLATE_SUFFIX = "{/number}"

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


class EventPayloadError(Exception):
    """Raised when the event payload cannot be read or lacks PR fields."""

    pass


def read_event(event_path: Path) -> Dict[str, Any]:
    """Load the event payload JSON."""
    try:
        data = json.loads(event_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise EventPayloadError(f"Cannot read event payload {event_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Event payload {event_path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise EventPayloadError(f"Event payload {event_path} is not a JSON object")
    return data


def pull_request_context_from_event(data: Dict[str, Any]) -> PullRequestContext | None:
    """Build PullRequestContext from a payload; None when it is not a PR event."""
    pr = data.get("pull_request") or {}
    number = pr.get("number")
    if number is None:
        return None
    comments_url = pr.get("comments_url")
    issue_comment_url = (data.get("repository") or {}).get("issue_comment_url")
    if not comments_url or not issue_comment_url:
        raise EventPayloadError("pull_request.comments_url or repository.issue_comment_url missing in event")
    return PullRequestContext(
        number=int(number),
        comments_url=comments_url,
        issue_comment_url=issue_comment_url.replace(URI_TEMPLATE_SUFFIX, ""),
    )


def load_pull_request_context(event_path: Path) -> PullRequestContext | None:
    """Read the payload at event_path and return its PR context, if any."""
    return pull_request_context_from_event(read_event(event_path))


def is_pull_request_event(event_name: str | None) -> bool:
    """True for pull_request* events; an unset name is not treated as a non-PR event."""
    if not event_name:
        return True
    return event_name in PULL_REQUEST_EVENTS
