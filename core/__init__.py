# Core module - typed errors shared by the catalogue, config and CLI layers

from .errors import (
    CatalogueError,
    ConfigError,
    ErrorCategory,
    PaletteError,
    describe_error,
    log_error,
)

__all__ = [
    "CatalogueError", "ConfigError", "ErrorCategory", "PaletteError",
    "describe_error", "log_error",
]
