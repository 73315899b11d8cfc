"""Custom exceptions for the i18n system.

Load failures are surfaced to the host at startup and reload. Missing
translations are reported through logging and the optional callback, never
raised into request handling.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            engine.reload()
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class LoadError(I18nError):
    """Raised when translation files cannot be read or parsed.

    The previously published catalog set keeps serving when this is raised
    from a reload.

    Attributes:
        path: File or directory that caused the failure, if known.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MissingTranslationError(I18nError):
    """Describes a key found in neither the requested nor the fallback locale.

    Passed to the ``on_missing`` callback for observability. The translator
    returns the raw key instead of raising this.

    Attributes:
        key: The translation key that was looked up.
        locale: The requested locale.
        fallback_locale: The fallback locale that was also consulted.
    """

    def __init__(self, key: str, locale: str, fallback_locale: str):
        super().__init__(
            f"Translation not found for key {key} in {locale} "
            f"or fallback {fallback_locale}"
        )
        self.key = key
        self.locale = locale
        self.fallback_locale = fallback_locale
