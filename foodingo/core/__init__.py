"""
Core module initialization.
Exports configuration, logging utilities and exceptions.
"""

from foodingo.core.config import (
    get_settings,
    setup_logging,
    Settings,
    EnvironmentMode,
)
from foodingo.core.exceptions import (
    FoodingoError,
    ApiError,
    ApiAuthError,
    ApiConnectionError,
    ApiTimeoutError,
    StorageError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "FoodingoError",
    "ApiError",
    "ApiAuthError",
    "ApiConnectionError",
    "ApiTimeoutError",
    "StorageError",
]
