"""Translation models for i18n system.

Defines core data structures for managing translations and locales.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


def normalize_locale(value: Optional[str]) -> Optional[str]:
    """Normalize a locale identifier for comparison.

    Locale identifiers are case-insensitive. Underscores are accepted as
    separators (e.g., "pt_BR" becomes "pt-br").

    Args:
        value: Raw locale string (e.g., " NL ", "en_US").

    Returns:
        Normalized identifier, or None if value is None or blank.
    """
    if value is None:
        return None
    normalized = str(value).strip().replace("_", "-").lower()
    return normalized or None


def freeze_tree(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only deep copy of a catalog tree.

    Args:
        data: Nested dict of segment -> template or subtree.

    Returns:
        MappingProxyType at every level.
    """
    frozen: Dict[str, Any] = {}
    for segment, value in data.items():
        if isinstance(value, Mapping):
            frozen[segment] = freeze_tree(value)
        else:
            frozen[segment] = value
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class TranslationKey:
    """Represents a dot-delimited path into a catalog tree.

    Keys are hierarchical (e.g., "hello", "errors.auth.expired").
    Frozen to ensure immutability and hashability for caching.

    Attributes:
        segments: Path segments in descending order.
    """

    segments: Tuple[str, ...]

    def __str__(self) -> str:
        """Return full dot-separated key path."""
        return ".".join(self.segments)

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from dot-separated string.

        Args:
            key_string: Dot-separated key (e.g., "hello.greeting").

        Returns:
            TranslationKey instance.

        Raises:
            ValueError: If key_string is empty or contains an empty segment.
        """
        if not key_string:
            raise ValueError("Translation key must not be empty")
        segments = tuple(key_string.split("."))
        if any(not segment for segment in segments):
            raise ValueError(f"Translation key has an empty segment: {key_string}")
        return cls(segments=segments)


@dataclass(frozen=True)
class TranslationCatalog:
    """Container for translations in a specific locale.

    Attributes:
        locale: Normalized locale identifier this catalog is for.
        messages: Read-only nested tree {segment: template | subtree}.
        sources: Files the catalog was built from, in merge order.
    """

    locale: str
    messages: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    sources: Tuple[str, ...] = ()

    def get_message(self, key: TranslationKey) -> Optional[str]:
        """Retrieve a translation template by key.

        Args:
            key: TranslationKey to descend.

        Returns:
            Template string, or None if the path is missing or ends on a subtree.
        """
        node: Any = self.messages
        for segment in key.segments:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node if isinstance(node, str) else None

    def has_message(self, key: TranslationKey) -> bool:
        """Check if a string leaf exists for given key."""
        return self.get_message(key) is not None

    def keys(self) -> List[str]:
        """List every dotted leaf key in the catalog, sorted."""
        return sorted(self._walk(self.messages, ()))

    def _walk(self, node: Mapping[str, Any], prefix: Tuple[str, ...]) -> Iterator[str]:
        for segment, value in node.items():
            path = prefix + (segment,)
            if isinstance(value, Mapping):
                yield from self._walk(value, path)
            else:
                yield ".".join(path)


@dataclass(frozen=True)
class CatalogSet:
    """Immutable, versioned snapshot of every loaded locale.

    A new CatalogSet is built on every successful load and replaces the
    previous one wholesale.

    Attributes:
        catalogs: Normalized locale -> TranslationCatalog.
        version: Publish counter, 0 until published by a store.
        loaded_at: Timestamp (ISO 8601) when the files were read.
    """

    catalogs: Mapping[str, TranslationCatalog] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: int = 0
    loaded_at: Optional[str] = None

    def get(self, locale: Optional[str]) -> Optional[TranslationCatalog]:
        """Look up the catalog for a locale, or None if not loaded."""
        normalized = normalize_locale(locale)
        if normalized is None:
            return None
        return self.catalogs.get(normalized)

    @property
    def locales(self) -> List[str]:
        """Sorted list of loaded locales."""
        return sorted(self.catalogs.keys())

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and self.get(locale) is not None


def _first_value(value: Any) -> Optional[str]:
    """Collapse repeated query values (e.g. ?lang=nl&lang=en) to the first."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else None
    return str(value)


@dataclass(frozen=True)
class RequestContext:
    """Read-only view of the parts of a request used for locale resolution.

    Header names are matched case-insensitively.

    Attributes:
        query_params: Query parameter name -> value.
        headers: Header name -> value.
        cookies: Cookie name -> value.
    """

    query_params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "query_params", MappingProxyType(dict(self.query_params))
        )
        object.__setattr__(
            self,
            "headers",
            MappingProxyType({str(k).lower(): v for k, v in self.headers.items()}),
        )
        object.__setattr__(self, "cookies", MappingProxyType(dict(self.cookies)))

    def get_query(self, name: str) -> Optional[str]:
        return _first_value(self.query_params.get(name))

    def get_header(self, name: str) -> Optional[str]:
        return _first_value(self.headers.get(name.lower()))

    def get_cookie(self, name: str) -> Optional[str]:
        return _first_value(self.cookies.get(name))
