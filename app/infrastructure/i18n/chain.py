"""Ordered resolver chain producing exactly one locale per request."""

from typing import Callable, Iterable, Optional, Tuple

from infrastructure.i18n.models import RequestContext, normalize_locale
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.logging import get_module_logger

logger = get_module_logger()

SupportedPredicate = Callable[[str], bool]


class ResolverChain:
    """Runs resolvers in priority order and returns the first answer.

    The chain only depends on the LocaleResolver capability, so new
    strategies plug in without changes here. Resolution never fails: with
    no answer from any resolver the fallback locale is returned.

    Attributes:
        resolvers: Resolvers in priority order.
        fallback_locale: Normalized locale returned when nothing resolves.
    """

    def __init__(
        self,
        resolvers: Iterable[LocaleResolver],
        fallback_locale: str,
    ):
        self.resolvers: Tuple[LocaleResolver, ...] = tuple(resolvers)
        self.fallback_locale = normalize_locale(fallback_locale)
        if self.fallback_locale is None:
            raise ValueError("Fallback locale must not be empty")

    def resolve(
        self,
        context: RequestContext,
        is_supported: Optional[SupportedPredicate] = None,
    ) -> str:
        """Resolve the locale for a request.

        Args:
            context: Read-only request context.
            is_supported: Optional predicate; candidates it rejects are
                skipped as if the resolver had returned nothing.

        Returns:
            Normalized locale identifier.
        """
        for resolver in self.resolvers:
            try:
                candidate = normalize_locale(resolver.resolve(context))
            except Exception:  # pylint: disable=broad-except
                logger.exception("resolver_failed", resolver=repr(resolver))
                continue

            if candidate is None:
                continue
            if is_supported is not None and not is_supported(candidate):
                logger.debug(
                    "skipped_unsupported_locale",
                    resolver=repr(resolver),
                    locale=candidate,
                )
                continue

            logger.debug("resolved_locale", resolver=repr(resolver), locale=candidate)
            return candidate

        return self.fallback_locale
