"""Services for todolist-cli: the task store, projections, persistence and config."""
