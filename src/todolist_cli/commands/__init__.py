"""CLI commands for todolist-cli."""
