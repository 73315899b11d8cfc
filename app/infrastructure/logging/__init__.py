"""Structured logging infrastructure.

Centralized structlog configuration for the application.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
    logger,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "logger",
]
