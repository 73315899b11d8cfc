"""Locale resolution strategies for determining the request's preferred language.

Each resolver inspects one source of a RequestContext (query string,
headers, cookies) and returns a candidate locale or None. Resolvers are
stateless apart from their own configuration; ordering and the final
fallback are handled by ResolverChain.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog
from infrastructure.i18n.models import RequestContext, normalize_locale

logger = structlog.get_logger().bind(component="i18n.resolver")

DEFAULT_QUERY_KEYS = ("lang", "locale", "l")


class LocaleResolver(ABC):
    """Single strategy for extracting a locale from a request."""

    @abstractmethod
    def resolve(self, context: RequestContext) -> Optional[str]:
        """Return a normalized locale identifier, or None if absent.

        Args:
            context: Read-only request context.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class QueryResolver(LocaleResolver):
    """Reads the locale from query parameters.

    When several configured keys are present, the first key in the
    configured list wins regardless of their order in the request.
    """

    def __init__(self, keys: Sequence[str] = DEFAULT_QUERY_KEYS):
        self.keys: Tuple[str, ...] = tuple(keys)

    def resolve(self, context: RequestContext) -> Optional[str]:
        for key in self.keys:
            locale = normalize_locale(context.get_query(key))
            if locale:
                return locale
        return None

    def __repr__(self) -> str:
        return f"QueryResolver(keys={list(self.keys)!r})"


class CookieResolver(LocaleResolver):
    """Reads the locale from the first configured cookie that is set."""

    def __init__(self, cookies: Sequence[str] = ("lang",)):
        self.cookies: Tuple[str, ...] = tuple(cookies)

    def resolve(self, context: RequestContext) -> Optional[str]:
        for name in self.cookies:
            locale = normalize_locale(context.get_cookie(name))
            if locale:
                return locale
        return None

    def __repr__(self) -> str:
        return f"CookieResolver(cookies={list(self.cookies)!r})"


def parse_accept_language(header: Optional[str]) -> List[Tuple[str, float]]:
    """Parse an Accept-Language value into (tag, quality) pairs.

    Parses "en-US,en;q=0.9,fr-FR;q=0.8" into
    [("en-US", 1.0), ("en", 0.9), ("fr-FR", 0.8)] keeping header order.
    A malformed quality counts as 1.0.
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        lang_range = part.split(";")[0].strip()
        if not lang_range:
            continue
        quality = 1.0

        if ";" in part and "q=" in part:
            try:
                quality = float(part.split("q=")[1])
            except ValueError:
                quality = 1.0

        preferences.append((lang_range, quality))
    return preferences


class HeaderResolver(LocaleResolver):
    """Takes the first language tag of an Accept-Language style header.

    Weighting is otherwise ignored: "nl;q=0.5,en" resolves to "nl". Tags
    marked q=0 (not acceptable) and a leading "*" wildcard are skipped.
    """

    def __init__(self, header: str = "accept-language"):
        self.header = header

    def resolve(self, context: RequestContext) -> Optional[str]:
        for lang_range, quality in parse_accept_language(
            context.get_header(self.header)
        ):
            if lang_range != "*" and quality > 0:
                return normalize_locale(lang_range)
        return None

    def __repr__(self) -> str:
        return f"HeaderResolver(header={self.header!r})"


class AcceptLanguageResolver(LocaleResolver):
    """Weighted Accept-Language negotiation.

    Orders tags by quality (stable for ties) and drops q=0 and "*". With
    supported locales, returns the best supported match; without, returns
    the highest weighted tag.
    """

    def __init__(
        self,
        supported: Optional[Iterable[str]] = None,
        header: str = "accept-language",
    ):
        self.supported: Optional[List[str]] = (
            [normalize_locale(locale) for locale in supported]
            if supported is not None
            else None
        )
        self.header = header

    def resolve(self, context: RequestContext) -> Optional[str]:
        preferences = parse_accept_language(context.get_header(self.header))
        requested = [
            normalize_locale(lang_range)
            for lang_range, quality in sorted(
                preferences, key=lambda x: x[1], reverse=True
            )
            if lang_range != "*" and quality > 0
        ]
        if not requested:
            return None
        if self.supported is None:
            return requested[0]

        match = LanguageNegotiator.find_best_match(requested, self.supported)
        if match is None:
            logger.debug("no_matching_locale_in_header", requested=requested)
        return match

    def __repr__(self) -> str:
        return f"AcceptLanguageResolver(supported={self.supported!r})"


class LanguageNegotiator:
    """Matches requested language tags against the locales that have catalogs.

    Only the two cases locale resolution needs are covered: an exact tag
    match, and a regional tag such as "nl-BE" settling for its base "nl".
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Return True if a catalog locale can serve a requested tag.

        Comparison is case-insensitive. Unless strict is set, tags sharing
        the primary subtag also match ("nl-BE" and "nl", "en-US" and "en-GB").
        """
        if requested.lower() == available.lower():
            return True
        if strict:
            return False
        return requested.split("-")[0].lower() == available.split("-")[0].lower()

    @staticmethod
    def find_best_match(
        requested: Sequence[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Pick the catalog locale for the most preferred requested tag.

        Each requested tag is tried in order; for one tag an exact catalog
        match beats a primary-subtag match. Returns default when no tag can
        be served.
        """
        for tag in requested:
            exact = [locale for locale in available if locale.lower() == tag.lower()]
            if exact:
                return exact[0]
            partial = [
                locale
                for locale in available
                if LanguageNegotiator.matches_language(tag, locale)
            ]
            if partial:
                return partial[0]
        return default
