# Infrastructure module - Logging and configuration

from .config import ConfigManager
from .logging import (
    get_logger, configure_logging, reset_logging,
    SessionContext, get_session_id, generate_session_id,
)

__all__ = [
    # Config
    "ConfigManager",
    # Logging
    "get_logger",
    "configure_logging",
    "reset_logging",
    "SessionContext",
    "get_session_id",
    "generate_session_id",
]
