"""End-to-end tests for per-request translation over HTTP.

A small FastAPI app exposes GET /hello, rendering the "hello" key through
the TranslatorDep dependency.
"""

from typing import Optional

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from api.dependencies.i18n import (
    TranslatorDep,
    i18n_lifespan,
    request_context_from_request,
    setup_i18n,
)
from infrastructure.i18n import HeaderResolver, LoadError, QueryResolver, create_engine
from infrastructure.services.providers import get_i18n_engine
from tests.factories.i18n import write_translations


def render_greeting(t, name=None):
    """Downstream rendering code receives the translator explicitly."""
    if name:
        return t("greeting", {"name": name})
    return t("hello")


@pytest.fixture
def engine(tmp_path):
    """Engine over en/nl hello catalogs, query resolver before header."""
    translations_dir = write_translations(
        tmp_path / "i18n",
        {
            "en": {"hello": "Hello", "greeting": "Hello, {name}"},
            "nl": {"hello": "Hallo", "greeting": "Hallo, {name}"},
        },
    )
    return create_engine(
        path=translations_dir,
        fallback_language="en",
        resolvers=[QueryResolver(["lang", "locale", "l"]), HeaderResolver()],
    )


@pytest.fixture
def app(engine):
    """FastAPI app with the engine attached."""
    application = FastAPI()
    setup_i18n(application, engine)

    @application.get("/hello", response_class=PlainTextResponse)
    def hello(t: TranslatorDep, name: Optional[str] = None):
        return render_greeting(t, name)

    @application.get("/locale")
    def locale(t: TranslatorDep):
        return {"locale": t.locale, "version": t.version}

    return application


@pytest.fixture
def client(app):
    """TestClient for the app."""
    return TestClient(app)


class TestHelloEndpoint:
    """Tests for GET /hello translation."""

    def test_hello_returns_translation(self, client):
        """/GET hello should return the fallback translation."""
        response = client.get("/hello")
        assert response.status_code == 200
        assert response.text == "Hello"

    def test_query_resolver(self, client):
        """/GET hello should return the right language for ?lang and ?l."""
        response = client.get("/hello", params={"lang": "nl"})
        assert response.status_code == 200
        assert response.text == "Hallo"

        response = client.get("/hello", params={"l": "nl"})
        assert response.status_code == 200
        assert response.text == "Hallo"

    def test_accept_language(self, client):
        """/GET hello should honour the accept-language header."""
        response = client.get("/hello", headers={"accept-language": "nl"})
        assert response.status_code == 200
        assert response.text == "Hallo"

    def test_query_beats_header(self, client):
        """The query resolver is configured first and wins."""
        response = client.get(
            "/hello", params={"lang": "en"}, headers={"accept-language": "nl"}
        )
        assert response.text == "Hello"

    def test_interpolation(self, client):
        """Arguments are interpolated into the resolved template."""
        response = client.get("/hello", params={"lang": "nl", "name": "Ada"})
        assert response.text == "Hallo, Ada"

    def test_locale_not_shared_between_requests(self, client):
        """Each request resolves its own locale."""
        assert client.get("/locale", params={"lang": "nl"}).json()["locale"] == "nl"
        assert client.get("/locale").json()["locale"] == "en"

    def test_reload_visible_to_next_request(self, client, engine, tmp_path):
        """Requests after a reload see the new catalog version."""
        write_translations(tmp_path / "i18n", {"en": {"hello": "Hi"}})

        engine.reload()

        assert client.get("/hello").text == "Hi"
        assert client.get("/locale").json()["version"] == 2


class TestRequestContextAdapter:
    """Tests for request_context_from_request()."""

    def test_adapter_reads_query_headers_and_cookies(self):
        """The adapter exposes query, headers and cookies read-only."""
        application = FastAPI()
        captured = {}

        @application.get("/inspect")
        def inspect_request(request: Request):
            context = request_context_from_request(request)
            captured["lang"] = context.get_query("lang")
            captured["header"] = context.get_header("Accept-Language")
            captured["cookie"] = context.get_cookie("lang")
            return {}

        client = TestClient(application)
        client.cookies.set("lang", "de")
        client.get(
            "/inspect?lang=nl&lang=en",
            headers={"Accept-Language": "fr"},
        )

        assert captured == {"lang": "nl", "header": "fr", "cookie": "de"}


class TestStartupWiring:
    """Tests for building the engine at startup."""

    def test_lifespan_attaches_settings_engine(self, monkeypatch, tmp_path):
        """The lifespan builds the settings engine before serving requests."""
        write_translations(tmp_path)
        monkeypatch.setenv("I18N_PATH", str(tmp_path))

        application = FastAPI(lifespan=i18n_lifespan)

        @application.get("/hello", response_class=PlainTextResponse)
        def hello(t: TranslatorDep):
            return t("hello")

        with TestClient(application) as client:
            assert application.state.i18n is get_i18n_engine()
            assert client.get("/hello", params={"lang": "nl"}).text == "Hallo"

    def test_misconfigured_app_fails_at_startup(self, monkeypatch, tmp_path):
        """A missing translations directory stops startup, not a request."""
        monkeypatch.setenv("I18N_PATH", str(tmp_path / "missing"))

        application = FastAPI(lifespan=i18n_lifespan)

        with pytest.raises(LoadError):
            with TestClient(application):
                pass

    def test_setup_i18n_without_engine_uses_settings(self, monkeypatch, tmp_path):
        """setup_i18n() builds the settings engine eagerly when none is given."""
        write_translations(tmp_path)
        monkeypatch.setenv("I18N_PATH", str(tmp_path))
        application = FastAPI()

        engine = setup_i18n(application)

        assert engine.is_started
        assert application.state.i18n is engine

    def test_unconfigured_app_does_not_load_per_request(self, monkeypatch, tmp_path):
        """Without setup_i18n requests fail clearly and nothing is loaded."""
        monkeypatch.setenv("I18N_PATH", str(tmp_path / "missing"))
        application = FastAPI()

        @application.get("/hello", response_class=PlainTextResponse)
        def hello(t: TranslatorDep):
            return t("hello")

        client = TestClient(application)

        with pytest.raises(RuntimeError, match="setup_i18n"):
            client.get("/hello")
        assert get_i18n_engine.cache_info().currsize == 0
