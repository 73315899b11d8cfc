"""Translation store holding the published catalog set.

The store owns a single reference to an immutable CatalogSet. Loads build a
complete new CatalogSet off to the side and publish it with one reference
assignment, so readers never observe a partially updated tree. Writers are
serialized with a lock; readers take no lock.
"""

import dataclasses
import threading
from pathlib import Path
from typing import Callable, List, Optional

from infrastructure.i18n.exceptions import LoadError
from infrastructure.i18n.loader import FileTranslationLoader, TranslationLoader
from infrastructure.i18n.models import CatalogSet, TranslationCatalog, normalize_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()

CatalogListener = Callable[[CatalogSet], None]


class TranslationStore:
    """Process-wide holder of the current CatalogSet.

    Attributes:
        loader: TranslationLoader used by reload().
        fallback_locale: Normalized locale that must be present when
            require_fallback is set.
        require_fallback: Reject loads that do not contain fallback_locale.
    """

    def __init__(
        self,
        loader: Optional[TranslationLoader] = None,
        fallback_locale: str = "en",
        require_fallback: bool = True,
    ):
        self.loader = loader
        self.fallback_locale = normalize_locale(fallback_locale)
        self.require_fallback = require_fallback
        self._snapshot: Optional[CatalogSet] = None
        self._write_lock = threading.Lock()
        self._listeners: List[CatalogListener] = []

    @property
    def snapshot(self) -> Optional[CatalogSet]:
        """Currently published CatalogSet, or None before the first load."""
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version if self._snapshot else 0

    def get(self, locale: Optional[str]) -> Optional[TranslationCatalog]:
        """Look up a locale in the current snapshot."""
        snapshot = self._snapshot
        return snapshot.get(locale) if snapshot else None

    def load(self, path: Optional[Path] = None) -> CatalogSet:
        """Load translations and publish them.

        When path is given, a FileTranslationLoader for it replaces the
        current loader, but only once the load succeeds.

        Args:
            path: Optional directory of translation files.

        Returns:
            The newly published CatalogSet.

        Raises:
            LoadError: If loading fails; the previous snapshot stays published.
        """
        loader = FileTranslationLoader(path) if path is not None else self.loader
        if loader is None:
            raise LoadError("No translation loader or path configured")

        with self._write_lock:
            try:
                catalog_set = loader.load()
                self._check_fallback(catalog_set)
            except LoadError as e:
                logger.error(
                    "translation_load_failed",
                    error=str(e),
                    path=e.path,
                    serving_version=self.version,
                )
                raise

            published = dataclasses.replace(catalog_set, version=self.version + 1)
            self.loader = loader
            self._snapshot = published

        logger.info(
            "published_catalog_set",
            version=published.version,
            locales=published.locales,
        )
        self._notify(published)
        return published

    def reload(self) -> CatalogSet:
        """Re-run the configured loader and swap in the result.

        Raises:
            LoadError: If loading fails; the previous snapshot stays published.
        """
        return self.load()

    def add_listener(self, listener: CatalogListener) -> None:
        """Register a callback invoked with each newly published CatalogSet."""
        self._listeners.append(listener)

    def _check_fallback(self, catalog_set: CatalogSet) -> None:
        if self.fallback_locale in catalog_set:
            return
        if self.require_fallback:
            raise LoadError(
                f"Fallback locale {self.fallback_locale} has no translations; "
                f"loaded locales: {catalog_set.locales}"
            )
        logger.warning(
            "fallback_locale_missing",
            fallback_locale=self.fallback_locale,
            locales=catalog_set.locales,
        )

    def _notify(self, catalog_set: CatalogSet) -> None:
        for listener in list(self._listeners):
            try:
                listener(catalog_set)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "catalog_listener_failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    version=catalog_set.version,
                )
