"""
Error Handling Module
---------------------
Typed errors for the fallible edges of the palette: loading the command
catalogue and reading configuration.

Ranking itself never raises; a bad query is treated as an empty one.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional
import logging


class ErrorCategory(Enum):
    """Categories of errors for handling decisions."""
    CATALOGUE_MISSING = auto()  # Catalogue file not found
    CATALOGUE_INVALID = auto()  # Catalogue unreadable or a record failed validation
    CONFIG_INVALID = auto()     # Configuration file unreadable


class PaletteError(Exception):
    """Base error with a category and optional structured details."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.category.name}: {self.message})"


class CatalogueError(PaletteError):
    """Raised when a command catalogue cannot be loaded."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.CATALOGUE_INVALID,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, category, details)


class ConfigError(PaletteError):
    """Raised when the configuration file is present but unusable."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCategory.CONFIG_INVALID, details)


_USER_MESSAGES = {
    ErrorCategory.CATALOGUE_MISSING: "Command catalogue not found.",
    ErrorCategory.CATALOGUE_INVALID: "Command catalogue is invalid.",
    ErrorCategory.CONFIG_INVALID: "Configuration file is invalid.",
}


def describe_error(error: PaletteError) -> str:
    """User-facing one-liner for an error."""
    headline = _USER_MESSAGES.get(error.category, "An error occurred.")
    return f"{headline} {error.message}"


def log_error(error: PaletteError, logger: Optional[logging.Logger] = None) -> None:
    """Log an error with its category and details."""
    logger = logger or logging.getLogger("palette.errors")
    logger.error(
        f"{error.category.name}: {error.message}",
        extra={"details": error.details},
    )
