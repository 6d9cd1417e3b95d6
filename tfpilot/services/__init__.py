"""Services: change detection, terraform runner, plan formatting, comment reconciliation."""
