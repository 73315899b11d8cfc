"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    HELLO_TRANSLATIONS,
    make_catalog_set,
    make_request_context,
    make_translation_catalog,
    write_translations,
)

__all__ = [
    "HELLO_TRANSLATIONS",
    "make_catalog_set",
    "make_request_context",
    "make_translation_catalog",
    "write_translations",
]
