"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.i18n import I18nEngine, create_engine_from_settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Tests clear the cache between runs so environment overrides apply.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_i18n_engine() -> I18nEngine:
    """
    Get application-scoped i18n engine singleton.

    Translations are loaded on first call, so a broken translations directory
    surfaces as a LoadError at startup rather than inside a request.

    Returns:
        I18nEngine: Cached engine built from settings.i18n.

    Raises:
        LoadError: If the configured translations cannot be loaded.
    """
    return create_engine_from_settings(get_settings().i18n)
