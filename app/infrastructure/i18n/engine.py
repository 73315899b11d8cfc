"""Engine facade composing locale resolution and translation.

Usage:
    engine = I18nEngine(
        path=Path("locales"),
        fallback_language="en",
        resolvers=[QueryResolver(["lang", "locale", "l"]), HeaderResolver()],
    )
    engine.start()

    t = engine.bind(RequestContext(query_params={"lang": "nl"}))
    t("hello")  # "Hallo"
"""

from pathlib import Path
from typing import Iterable, Optional

from infrastructure.i18n.chain import ResolverChain
from infrastructure.i18n.loader import FileTranslationLoader
from infrastructure.i18n.models import CatalogSet, RequestContext
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.i18n.store import TranslationStore
from infrastructure.i18n.translator import Arguments, MissingHandler, Translator
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class BoundTranslator:
    """Translate function pinned to one locale and one CatalogSet.

    Created per request by I18nEngine.bind() and passed explicitly to the
    code that renders text. A reload during the request does not change
    what it returns.

    Attributes:
        locale: Locale resolved for the request.
        snapshot: CatalogSet active when the request was bound.
    """

    def __init__(
        self,
        translator: Translator,
        locale: str,
        snapshot: Optional[CatalogSet],
    ):
        self._translator = translator
        self.locale = locale
        self.snapshot = snapshot

    @property
    def version(self) -> int:
        return self.snapshot.version if self.snapshot else 0

    def __call__(self, key: str, args: Arguments = None) -> str:
        return self._translator.translate(
            self.locale, key, args, snapshot=self.snapshot
        )

    def __repr__(self) -> str:
        return f"BoundTranslator(locale={self.locale!r}, version={self.version})"


class I18nEngine:
    """Resolves request locales and serves translations with fallback.

    Attributes:
        fallback_language: Normalized fallback locale.
        store: TranslationStore holding the published CatalogSet.
        translator: Translator reading from the store.
        chain: ResolverChain built from the configured resolvers.
        supported_only: Only accept resolved locales that have a catalog.
    """

    def __init__(
        self,
        path: Path,
        fallback_language: str,
        resolvers: Iterable[LocaleResolver],
        *,
        require_fallback: bool = True,
        on_missing: Optional[MissingHandler] = None,
        supported_only: bool = False,
    ):
        self.chain = ResolverChain(resolvers, fallback_language)
        self.fallback_language = self.chain.fallback_locale
        self.store = TranslationStore(
            loader=FileTranslationLoader(path),
            fallback_locale=self.fallback_language,
            require_fallback=require_fallback,
        )
        self.translator = Translator(
            self.store,
            fallback_locale=self.fallback_language,
            on_missing=on_missing,
        )
        self.supported_only = supported_only

    @property
    def is_started(self) -> bool:
        return self.store.snapshot is not None

    def start(self) -> CatalogSet:
        """Perform the initial load.

        Raises:
            LoadError: If translations cannot be loaded.
        """
        catalog_set = self.store.load()
        logger.info(
            "i18n_engine_started",
            fallback_language=self.fallback_language,
            resolvers=[repr(resolver) for resolver in self.chain.resolvers],
            locales=catalog_set.locales,
        )
        return catalog_set

    def reload(self) -> CatalogSet:
        """Reload translations, keeping the current ones on failure.

        Raises:
            LoadError: If the reload fails.
        """
        return self.store.reload()

    def resolve_locale(
        self, context: RequestContext, snapshot: Optional[CatalogSet] = None
    ) -> str:
        """Run the resolver chain for a request."""
        is_supported = None
        if self.supported_only:
            catalog_set = snapshot if snapshot is not None else self.store.snapshot
            if catalog_set is not None:
                is_supported = catalog_set.__contains__
        return self.chain.resolve(context, is_supported=is_supported)

    def bind(self, context: RequestContext) -> BoundTranslator:
        """Resolve the request's locale once and return its translate function.

        Args:
            context: Read-only request context.

        Returns:
            BoundTranslator fixed to the resolved locale and current snapshot.
        """
        snapshot = self.store.snapshot
        locale = self.resolve_locale(context, snapshot)
        return BoundTranslator(self.translator, locale, snapshot)

    def translate(self, locale: str, key: str, args: Arguments = None) -> str:
        """Translate outside of a request against the current snapshot."""
        return self.translator.translate(locale, key, args)
