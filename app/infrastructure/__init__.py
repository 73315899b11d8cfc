"""Infrastructure modules for the application.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (get_module_logger, logger)
- i18n: Locale resolution and translation catalogs
- services: Application-scoped providers (get_settings, get_i18n_engine)
"""

# Configuration
from infrastructure.configuration import settings

# Observability
from infrastructure.logging import get_module_logger, logger

__all__ = [
    # Configuration
    "settings",
    # Observability
    "get_module_logger",
    "logger",
]
