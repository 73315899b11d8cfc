"""Factory functions for creating i18n components.

Provides convenience functions for building an I18nEngine either from
explicit arguments or from application settings.
"""

from pathlib import Path
from typing import List, Optional, Sequence

import structlog
from infrastructure.configuration import I18nSettings
from infrastructure.i18n.engine import I18nEngine
from infrastructure.i18n.resolvers import (
    AcceptLanguageResolver,
    CookieResolver,
    HeaderResolver,
    LocaleResolver,
    QueryResolver,
)
from infrastructure.i18n.translator import MissingHandler

logger = structlog.get_logger()

# This file is at .../app/infrastructure/i18n/factory.py
APP_ROOT = Path(__file__).resolve().parents[2]


def create_engine(
    path: Path,
    fallback_language: str = "en",
    resolvers: Optional[Sequence[LocaleResolver]] = None,
    require_fallback: bool = True,
    on_missing: Optional[MissingHandler] = None,
    supported_only: bool = False,
    preload: bool = True,
) -> I18nEngine:
    """Create and configure an I18nEngine instance.

    Args:
        path: Directory containing per-locale translation files
        fallback_language: Locale used when nothing else resolves (default: en)
        resolvers: Resolvers in priority order (default: query then header)
        require_fallback: Refuse loads without the fallback locale (default: True)
        on_missing: Optional callback for keys missing in every locale
        supported_only: Skip resolved locales with no catalog (default: False)
        preload: Whether to load translations immediately (default: True)

    Returns:
        I18nEngine: Configured engine

    Raises:
        LoadError: If preload is set and translations cannot be loaded

    Usage:
        engine = create_engine(
            path=Path("locales"),
            fallback_language="en",
            resolvers=[QueryResolver(["lang", "locale", "l"]), HeaderResolver()],
        )
    """
    if resolvers is None:
        resolvers = [QueryResolver(), HeaderResolver()]

    engine = I18nEngine(
        path=Path(path),
        fallback_language=fallback_language,
        resolvers=resolvers,
        require_fallback=require_fallback,
        on_missing=on_missing,
        supported_only=supported_only,
    )

    if preload:
        engine.start()
    else:
        logger.info("i18n_engine_created_lazy", translations_dir=str(path))

    return engine


def build_resolvers(i18n_settings: I18nSettings) -> List[LocaleResolver]:
    """Build the default resolver order: query, cookie, then header."""
    resolvers: List[LocaleResolver] = [QueryResolver(i18n_settings.query_parameters)]
    if i18n_settings.cookie_names:
        resolvers.append(CookieResolver(i18n_settings.cookie_names))
    if i18n_settings.weighted_header:
        resolvers.append(AcceptLanguageResolver(header=i18n_settings.header_name))
    else:
        resolvers.append(HeaderResolver(header=i18n_settings.header_name))
    return resolvers


def resolve_translations_dir(path: str) -> Path:
    """Resolve a configured translations path.

    Relative paths (such as the default "locales") are taken from the
    application root rather than the working directory.
    """
    translations_dir = Path(path)
    if not translations_dir.is_absolute():
        translations_dir = APP_ROOT / translations_dir
    return translations_dir


def create_engine_from_settings(
    i18n_settings: I18nSettings,
    on_missing: Optional[MissingHandler] = None,
    preload: bool = True,
) -> I18nEngine:
    """Create an I18nEngine from I18nSettings.

    Args:
        i18n_settings: Settings section (usually settings.i18n)
        on_missing: Optional callback for keys missing in every locale
        preload: Whether to load translations immediately (default: True)
    """
    return create_engine(
        path=resolve_translations_dir(i18n_settings.path),
        fallback_language=i18n_settings.fallback_language,
        resolvers=build_resolvers(i18n_settings),
        require_fallback=i18n_settings.require_fallback,
        on_missing=on_missing,
        supported_only=i18n_settings.supported_only,
        preload=preload,
    )
