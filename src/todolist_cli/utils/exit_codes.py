"""
Exit codes for todolist-cli.

Semantic exit codes so scripts can tell what went wrong without parsing
output.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error (e.g. blank title)
ERROR_INVALID_ARGS = 2

# Task not found
ERROR_NOT_FOUND = 5

# Import document rejected
ERROR_IMPORT = 7

# Task storage unreadable or unwritable
ERROR_PERSISTENCE = 8


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_IMPORT: "ERROR_IMPORT",
        ERROR_PERSISTENCE: "ERROR_PERSISTENCE",
    }
    return code_names.get(code, f"UNKNOWN({code})")

