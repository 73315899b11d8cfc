"""Translation service for retrieving and interpolating translated messages.

Lookups never raise into the caller: a key missing from both the requested
and the fallback locale comes back as the raw key string.
"""

import re
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from infrastructure.i18n.exceptions import MissingTranslationError
from infrastructure.i18n.models import CatalogSet, TranslationKey, normalize_locale
from infrastructure.i18n.store import TranslationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()

Arguments = Union[Mapping[str, Any], Sequence[Any], None]
MissingHandler = Callable[[MissingTranslationError], None]

# {{name}} is matched first so it is consumed as a whole token.
PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}|\{([A-Za-z0-9_]+)\}")


def interpolate(template: str, args: Arguments = None) -> str:
    """Substitute {name} and {{name}} placeholders in a template.

    A mapping fills placeholders by name. A sequence fills numeric
    placeholders ({0}, {1}) by position. Placeholders without a matching
    argument are left verbatim.

    Args:
        template: Message template.
        args: Mapping or sequence of values, or None.

    Returns:
        Interpolated message.
    """
    if not args or isinstance(args, (str, bytes)):
        return template

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1) or match.group(2)
        if isinstance(args, Mapping):
            if name in args:
                return str(args[name])
        elif name.isdecimal() and int(name) < len(args):
            return str(args[int(name)])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


class Translator:
    """Service for translating messages with fallback and interpolation.

    Attributes:
        store: TranslationStore providing the current CatalogSet.
        fallback_locale: Normalized locale consulted when a key is missing.
        on_missing: Optional callback notified of keys missing everywhere.
    """

    def __init__(
        self,
        store: TranslationStore,
        fallback_locale: str = "en",
        on_missing: Optional[MissingHandler] = None,
    ):
        self.store = store
        self.fallback_locale = normalize_locale(fallback_locale)
        self.on_missing = on_missing
        logger.info("initialized_translator", fallback_locale=self.fallback_locale)

    def translate(
        self,
        locale: Optional[str],
        key: str,
        args: Arguments = None,
        snapshot: Optional[CatalogSet] = None,
    ) -> str:
        """Retrieve and interpolate a translated message.

        Falls back to fallback_locale if the key is not found in the
        requested locale, then to the raw key.

        Args:
            locale: Locale to translate to.
            key: Dot-separated translation key.
            args: Optional values for placeholder interpolation.
            snapshot: CatalogSet to read; defaults to the store's current one.

        Returns:
            Translated and interpolated message, or key if not found.
        """
        catalog_set = snapshot if snapshot is not None else self.store.snapshot
        locale = normalize_locale(locale) or self.fallback_locale

        template = self._lookup(catalog_set, locale, key)
        if template is None and locale != self.fallback_locale:
            template = self._lookup(catalog_set, self.fallback_locale, key)
            if template is not None:
                logger.debug(
                    "used_fallback_translation",
                    key=key,
                    requested_locale=locale,
                    fallback_locale=self.fallback_locale,
                )

        if template is None:
            self._report_missing(key, locale)
            return key

        return interpolate(template, args)

    def has_message(self, locale: str, key: str) -> bool:
        """Check if translation exists for key in locale, without fallback."""
        return self._lookup(self.store.snapshot, normalize_locale(locale), key) is not None

    def available_locales(self) -> List[str]:
        """Get list of loaded locales."""
        snapshot = self.store.snapshot
        return snapshot.locales if snapshot else []

    def _lookup(
        self, catalog_set: Optional[CatalogSet], locale: Optional[str], key: str
    ) -> Optional[str]:
        if catalog_set is None:
            return None
        catalog = catalog_set.get(locale)
        if catalog is None:
            return None
        try:
            translation_key = TranslationKey.from_string(key)
        except ValueError:
            return None
        return catalog.get_message(translation_key)

    def _report_missing(self, key: str, locale: str) -> None:
        logger.warning(
            "translation_not_found",
            key=key,
            locale=locale,
            fallback_locale=self.fallback_locale,
        )
        if self.on_missing is None:
            return
        try:
            self.on_missing(MissingTranslationError(key, locale, self.fallback_locale))
        except Exception:  # pylint: disable=broad-except
            logger.exception("missing_translation_callback_failed", key=key)
