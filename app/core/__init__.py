"""
Employee Records Service Core Module.

Exports core utilities and configurations.
"""

from app.core.config import settings
from app.core.exceptions import (
    DuplicateEmployeeError,
    EmployeeNotFoundError,
    EmployeeServiceError,
    InvalidInputError,
    register_exception_handlers,
)
from app.core.logging import get_logger, setup_logging

__all__ = [
    # Config
    "settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "EmployeeServiceError",
    "InvalidInputError",
    "EmployeeNotFoundError",
    "DuplicateEmployeeError",
    "register_exception_handlers",
]
