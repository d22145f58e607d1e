"""
Palette Centralized Logging
---------------------------
Structured logging with session_id propagation, so every search and
dynamic keyword update can be traced back to the palette session that
caused it.

Design:
- Every palette session (open -> close) gets a unique session_id
- Console output goes through Rich, file output is JSON lines
- Clear severity discipline: DEBUG=per-query detail, INFO=state, ERROR=abort

Usage:
    from infra.logging import get_logger, SessionContext

    logger = get_logger("commands.search")

    with SessionContext() as session_id:
        logger.info("Palette opened")
"""

import contextvars
import json
import logging
import logging.handlers
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER = "palette"

# Context variable for session_id - thread-safe and async-safe
_session_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "session_id", default=None
)


def generate_session_id() -> str:
    """Generate a unique session ID."""
    return f"session_{uuid.uuid4().hex[:12]}"


def get_session_id() -> Optional[str]:
    """Get the current session ID from context."""
    return _session_id_var.get()


class SessionContext:
    """
    Context manager for session scoping.

    Usage:
        with SessionContext() as session_id:
            # All logs within this block carry session_id
            logger.info("Searching...")
    """

    def __init__(self, session_id: Optional[str] = None):
        self._session_id = session_id or generate_session_id()
        self._token: Optional[contextvars.Token] = None

    @property
    def session_id(self) -> str:
        return self._session_id

    def __enter__(self) -> str:
        self._token = _session_id_var.set(self._session_id)
        return self._session_id

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _session_id_var.reset(self._token)
            self._token = None


class SessionIdFilter(logging.Filter):
    """Logging filter that adds session_id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "session_id", None) is None:
            record.session_id = get_session_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    EXTRA_FIELDS = ("command_id", "tokens", "hits", "details")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, "session_id", "-"),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in self.EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


# Global configuration state
_logging_initialized = False
_log_file_path: Optional[Path] = None


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    console: bool = True,
    file: bool = False,
    console_obj: Optional[Console] = None,
) -> None:
    """
    Configure the palette logging system. Later calls are no-ops.

    Args:
        level: Logging level (default INFO)
        log_dir: Directory for log files (default: ./logs)
        console: Enable Rich console output (stderr)
        file: Enable JSON file output
        console_obj: Rich console to log through
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized:
        return

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    session_filter = SessionIdFilter()

    if console:
        console_handler = RichHandler(
            console=console_obj or Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(level)
        console_handler.addFilter(session_filter)
        root_logger.addHandler(console_handler)

    if file:
        log_path = Path(log_dir) if log_dir else Path("logs")
        log_path.mkdir(parents=True, exist_ok=True)
        _log_file_path = log_path / "palette.log"

        file_handler = logging.handlers.RotatingFileHandler(
            _log_file_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(session_filter)
        root_logger.addHandler(file_handler)

    _logging_initialized = True


def reset_logging() -> None:
    """Detach palette handlers so configure_logging() can run again."""
    global _logging_initialized, _log_file_path

    root_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    _logging_initialized = False
    _log_file_path = None


def get_log_file_path() -> Optional[Path]:
    return _log_file_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the palette namespace.

    Args:
        name: Logger name (prefixed with 'palette.' if not already)
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
