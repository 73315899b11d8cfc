"""i18n system - request locale resolution and translation catalogs.

Resolves a locale for each incoming request through an ordered chain of
strategies, then serves translations for that locale with fallback to a
configured default language.

Main components:
- models: TranslationKey, TranslationCatalog, CatalogSet, RequestContext
- loader: TranslationLoader and FileTranslationLoader
- store: TranslationStore with atomic reload
- translator: Translator with fallback and interpolation
- resolvers: LocaleResolver strategies and LanguageNegotiator
- chain: ResolverChain
- engine: I18nEngine facade and BoundTranslator
"""

from infrastructure.i18n.chain import ResolverChain
from infrastructure.i18n.engine import BoundTranslator, I18nEngine
from infrastructure.i18n.exceptions import (
    I18nError,
    LoadError,
    MissingTranslationError,
)
from infrastructure.i18n.factory import create_engine, create_engine_from_settings
from infrastructure.i18n.loader import FileTranslationLoader, TranslationLoader
from infrastructure.i18n.models import (
    CatalogSet,
    RequestContext,
    TranslationCatalog,
    TranslationKey,
    normalize_locale,
)
from infrastructure.i18n.resolvers import (
    AcceptLanguageResolver,
    CookieResolver,
    HeaderResolver,
    LanguageNegotiator,
    LocaleResolver,
    QueryResolver,
)
from infrastructure.i18n.store import TranslationStore
from infrastructure.i18n.translator import Translator, interpolate

__all__ = [
    "I18nError",
    "LoadError",
    "MissingTranslationError",
    "TranslationKey",
    "TranslationCatalog",
    "CatalogSet",
    "RequestContext",
    "normalize_locale",
    "TranslationLoader",
    "FileTranslationLoader",
    "TranslationStore",
    "Translator",
    "interpolate",
    "LocaleResolver",
    "QueryResolver",
    "HeaderResolver",
    "AcceptLanguageResolver",
    "CookieResolver",
    "LanguageNegotiator",
    "ResolverChain",
    "I18nEngine",
    "BoundTranslator",
    "create_engine",
    "create_engine_from_settings",
]
