"""Exit codes shared by CLI commands."""

SUCCESS_EXIT_CODE = 0
VALIDATION_EXIT_CODE = 2
NO_DATA_EXIT_CODE = 3
DATA_INTEGRITY_EXIT_CODE = 4
SYSTEM_EXIT_CODE = 5

__all__ = [
    "SUCCESS_EXIT_CODE",
    "VALIDATION_EXIT_CODE",
    "NO_DATA_EXIT_CODE",
    "DATA_INTEGRITY_EXIT_CODE",
    "SYSTEM_EXIT_CODE",
]
