"""Internationalization infrastructure settings."""

import json
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import NoDecode, SettingsConfigDict

from infrastructure.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Locale resolution and translation catalog configuration.

    Environment Variables:
        I18N_PATH: Directory containing per-locale translation files (default: locales)
        I18N_FALLBACK_LANGUAGE: Locale used when nothing else resolves (default: en)
        I18N_QUERY_PARAMETERS: Accepted query parameter names, in priority order
            (default: lang,locale,l)
        I18N_COOKIE_NAMES: Accepted cookie names (default: lang)
        I18N_HEADER_NAME: Header carrying the language preference
            (default: accept-language)
        I18N_WEIGHTED_HEADER: Use q-weighted Accept-Language negotiation instead
            of taking the first tag (default: False)
        I18N_REQUIRE_FALLBACK: Refuse to load when the fallback locale has no
            translations (default: True)
        I18N_SUPPORTED_ONLY: Ignore resolved locales that have no catalog
            (default: False)

    List values accept a JSON array or a comma-separated string.

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        path = settings.i18n.path
        fallback = settings.i18n.fallback_language
        ```
    """

    path: str = Field(
        default="locales",
        alias="I18N_PATH",
        description="Directory containing per-locale translation files",
    )
    fallback_language: str = Field(
        default="en",
        alias="I18N_FALLBACK_LANGUAGE",
        description="Locale used when no resolver produces one",
    )
    query_parameters: Annotated[List[str], NoDecode] = Field(
        default=["lang", "locale", "l"],
        alias="I18N_QUERY_PARAMETERS",
        description="Query parameter names checked in priority order",
    )
    cookie_names: Annotated[List[str], NoDecode] = Field(
        default=["lang"],
        alias="I18N_COOKIE_NAMES",
        description="Cookie names checked in priority order",
    )
    header_name: str = Field(
        default="accept-language",
        alias="I18N_HEADER_NAME",
        description="Header carrying the language preference",
    )
    weighted_header: bool = Field(
        default=False,
        alias="I18N_WEIGHTED_HEADER",
        description="Negotiate Accept-Language by quality instead of first tag",
    )
    require_fallback: bool = Field(
        default=True,
        alias="I18N_REQUIRE_FALLBACK",
        description="Fail loads that have no catalog for the fallback language",
    )
    supported_only: bool = Field(
        default=False,
        alias="I18N_SUPPORTED_ONLY",
        description="Skip resolved locales that have no loaded catalog",
    )

    model_config = SettingsConfigDict(populate_by_name=True)

    @field_validator("query_parameters", "cookie_names", mode="before")
    @classmethod
    def split_names(cls, v: Any) -> Any:
        """Accept JSON arrays and comma-separated strings."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @field_validator("fallback_language")
    @classmethod
    def validate_fallback_language(cls, v: str) -> str:
        """Reject a blank fallback language."""
        if not v.strip():
            raise ValueError("I18N_FALLBACK_LANGUAGE must not be empty")
        return v.strip()
