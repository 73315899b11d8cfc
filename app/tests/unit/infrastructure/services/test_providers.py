"""Unit tests for infrastructure.services providers."""

import pytest

from infrastructure import services
from infrastructure.i18n import LoadError
from infrastructure.services.providers import get_i18n_engine, get_settings
from tests.factories.i18n import write_translations


class TestProviders:
    """Tests for the application-scoped providers."""

    def test_get_settings_is_cached(self):
        """get_settings() returns one instance per process."""
        assert get_settings() is get_settings()

    def test_get_i18n_engine_loads_eagerly(self, monkeypatch, tmp_path):
        """get_i18n_engine() returns a started, cached engine."""
        write_translations(tmp_path)
        monkeypatch.setenv("I18N_PATH", str(tmp_path))

        engine = get_i18n_engine()

        assert engine.is_started
        assert get_i18n_engine() is engine

    def test_get_i18n_engine_raises_load_error(self, monkeypatch, tmp_path):
        """A missing translations directory surfaces as LoadError."""
        monkeypatch.setenv("I18N_PATH", str(tmp_path / "missing"))

        with pytest.raises(LoadError):
            get_i18n_engine()

    def test_exports(self):
        """The package exposes providers only."""
        assert sorted(services.__all__) == ["get_i18n_engine", "get_settings"]
        assert not hasattr(services, "I18nEngineDep")
        assert not hasattr(services, "SettingsDep")
