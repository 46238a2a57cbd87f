"""
Shared module - Cross-cutting concerns

Utilities, constants and enums used across several layers:
- Environment names and log levels
- Structured logging configuration
- Docker secret resolution for environment variables

It must not depend on Infrastructure or Frameworks beyond logging.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
