"""
Dependency injection services.

Provides application-scoped provider functions for core infrastructure.
"""

from infrastructure.services.providers import (
    get_settings,
    get_i18n_engine,
)

__all__ = [
    "get_settings",
    "get_i18n_engine",
]
