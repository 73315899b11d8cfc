"""Feature-level fixtures for i18n system tests.

Provides translation directories, stores and translators for locale
resolution and translation scenarios.
"""

import json

import pytest
import yaml

from infrastructure.i18n import FileTranslationLoader, TranslationStore, Translator
from tests.factories.i18n import write_translations


@pytest.fixture
def hello_translations_dir(tmp_path):
    """Directory with en.json ("Hello") and nl.json ("Hallo")."""
    return write_translations(tmp_path / "i18n")


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory mixing every supported layout.

    Returns a directory structure like:
    - en.json                 (whole tree)
    - incident.en-US.yml      (namespace file, merged at top level)
    - nl/incident.yaml        (nested under "incident")
    - nl.yml                  (whole tree)
    - README.md               (ignored)
    """
    en_tree = {
        "hello": "Hello",
        "greeting": {
            "named": "Hello, {name}",
            "formal": "Good day, {{title}} {name}",
        },
        "only_in_english": "English only",
    }
    with open(tmp_path / "en.json", "w", encoding="utf-8") as f:
        json.dump(en_tree, f)

    en_us_incident = {
        "incident": {
            "created": "Incident {{incident_id}} created",
            "resolved": "Incident {{incident_id}} resolved",
        }
    }
    with open(tmp_path / "incident.en-US.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_us_incident, f)

    nl_tree = {
        "hello": "Hallo",
        "greeting": {"named": "Hallo, {name}"},
    }
    with open(tmp_path / "nl.yml", "w", encoding="utf-8") as f:
        yaml.dump(nl_tree, f, allow_unicode=True)

    (tmp_path / "nl").mkdir()
    nl_incident = {
        "created": "Incident {{incident_id}} aangemaakt",
    }
    with open(tmp_path / "nl" / "incident.yaml", "w", encoding="utf-8") as f:
        yaml.dump(nl_incident, f, allow_unicode=True)

    (tmp_path / "README.md").write_text("not a translation file")

    return tmp_path


@pytest.fixture
def file_loader(temp_translations_dir):
    """Create FileTranslationLoader for temporary translations directory."""
    return FileTranslationLoader(temp_translations_dir)


@pytest.fixture
def store(file_loader):
    """TranslationStore loaded from temp_translations_dir, fallback en."""
    translation_store = TranslationStore(loader=file_loader, fallback_locale="en")
    translation_store.load()
    return translation_store


@pytest.fixture
def missing_events():
    """List collecting MissingTranslationError notifications."""
    return []


@pytest.fixture
def translator(store, missing_events):
    """Translator over the loaded store, recording missing keys."""
    return Translator(store, fallback_locale="en", on_missing=missing_events.append)


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_nl": "nl",
        "specific_en_us": "en-US",
        "with_quality": "en-US,en;q=0.9,fr;q=0.8",
        "reordered_quality": "fr;q=0.5,nl-BE;q=0.9,de",
        "wildcard_first": "*,nl;q=0.8",
        "invalid_quality": "en;q=invalid,fr",
        "zero_quality": "de;q=0,nl;q=0.5",
    }
