# Infrastructure module - Logging and configuration

from .logging import (
    get_logger, configure_logging, RequestContext,
    get_request_id, generate_request_id
)
from .config import ClientConfig, ConfigManager, load_credentials

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "RequestContext",
    "get_request_id",
    "generate_request_id",
    # Config
    "ClientConfig",
    "ConfigManager",
    "load_credentials",
]
