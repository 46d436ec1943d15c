"""
Hotellook Client Logging
------------------------
Structured logging with request_id propagation for call traceability.

Design:
- Every endpoint call gets a unique request_id
- request_id propagates to every record logged during that call
- Console output through Rich, file output as JSON lines
- Severity discipline: DEBUG=wire traffic, WARNING=refused call, ERROR=failure

Usage:
    from infra.logging import get_logger, RequestContext

    logger = get_logger("api.client")

    with RequestContext() as request_id:
        logger.debug("GET lookup.json")
"""

import contextvars
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Context variable for request_id - thread-safe and async-safe
_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return _request_id_var.get()


class RequestContext:
    """
    Context manager for request scoping.

    Usage:
        with RequestContext() as request_id:
            # All logs within this block carry request_id
            logger.debug("Calling upstream...")
    """

    def __init__(self, request_id: Optional[str] = None):
        self._request_id = request_id or generate_request_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _request_id_var.set(self._request_id)
        return self._request_id

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    EXTRA_KEYS = ("endpoint", "status_code", "elapsed_ms", "signed")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in self.EXTRA_KEYS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry)


class FileRotatingHandler(logging.FileHandler):
    """Simple file handler with size-based rotation."""

    MAX_BYTES = 10 * 1024 * 1024  # 10 MB
    BACKUP_COUNT = 3

    def __init__(self, filename: str, max_bytes: int = None, backup_count: int = None):
        self._base_path = Path(filename)
        self._max_bytes = max_bytes or self.MAX_BYTES
        self._backup_count = backup_count or self.BACKUP_COUNT

        self._base_path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(str(self._base_path), mode="a", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if self._base_path.exists() and self._base_path.stat().st_size > self._max_bytes:
            self._rotate()

        super().emit(record)

    def _rotate(self) -> None:
        """Rotate log files."""
        self.close()

        for i in range(self._backup_count - 1, 0, -1):
            src = self._base_path.with_suffix(f".{i}.log")
            dst = self._base_path.with_suffix(f".{i + 1}.log")
            if src.exists():
                src.replace(dst)

        if self._base_path.exists():
            self._base_path.replace(self._base_path.with_suffix(".1.log"))

        self.stream = self._open()


_logging_initialized = False


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    console: bool = True,
    file: bool = False,
) -> None:
    """
    Configure the client logging system.

    Args:
        level: Logging level (default INFO)
        log_dir: Directory for log files (default: ./logs)
        console: Enable Rich console output
        file: Enable JSON file output
    """
    global _logging_initialized

    if _logging_initialized:
        return

    root_logger = logging.getLogger("hotellook")
    root_logger.setLevel(logging.DEBUG if file else level)
    root_logger.handlers.clear()

    request_filter = RequestIdFilter()

    if console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("[%(request_id)s] %(message)s"))
        console_handler.addFilter(request_filter)
        root_logger.addHandler(console_handler)

    if file:
        log_path = Path(log_dir) if log_dir else Path("logs")
        file_handler = FileRotatingHandler(str(log_path / "hotellook.log"))
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(request_filter)
        root_logger.addHandler(file_handler)

    _logging_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger in the hotellook namespace.

    Args:
        name: Logger name (prefixed with 'hotellook.' if not already)
    """
    if not name.startswith("hotellook"):
        name = f"hotellook.{name}"

    return logging.getLogger(name)
