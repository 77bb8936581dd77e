"""Core module initialization."""

from .config_manager import ConfigManager, ClientConfig, LoggingConfig, LogLevel
from .logging_config import (
    setup_logging,
    configure_logging,
    get_logger,
    set_activity_id,
    reset_activity_id,
    activity_scope,
)

__all__ = [
    "ConfigManager",
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "setup_logging",
    "configure_logging",
    "get_logger",
    "set_activity_id",
    "reset_activity_id",
    "activity_scope",
]
