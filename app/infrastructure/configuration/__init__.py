"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation and locale resolution settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    fallback = settings.i18n.fallback_language
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.i18n import I18nSettings

__all__ = ["Settings", "I18nSettings", "settings"]
