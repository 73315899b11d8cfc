"""FastAPI wiring for per-request translation.

The engine is built once at startup and lives on ``app.state.i18n``. Each
request gets its own BoundTranslator through the ``TranslatorDep``
dependency; route handlers pass it explicitly to whatever renders text.

Example:
    app = FastAPI(lifespan=i18n_lifespan)

    @app.get("/hello")
    def hello(t: TranslatorDep):
        return PlainTextResponse(t("hello"))
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request

from infrastructure.i18n import BoundTranslator, I18nEngine, RequestContext
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_i18n_engine

logger = get_module_logger()


def setup_i18n(app: FastAPI, engine: Optional[I18nEngine] = None) -> I18nEngine:
    """Attach an i18n engine to the FastAPI application.

    Without an explicit engine the settings-built singleton is created here,
    so a broken translations directory fails application startup.

    Raises:
        LoadError: If the settings-built engine cannot load translations.
    """
    if engine is None:
        engine = get_i18n_engine()
    app.state.i18n = engine
    logger.info("i18n_engine_attached", version=engine.store.version)
    return engine


@asynccontextmanager
async def i18n_lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_i18n(app)
    yield


def request_context_from_request(request: Request) -> RequestContext:
    """Build a read-only RequestContext from a Starlette request.

    Repeated query parameters keep every value; resolvers use the first.
    """
    query_params = {
        name: request.query_params.getlist(name)
        for name in request.query_params.keys()
    }
    return RequestContext(
        query_params=query_params,
        headers=dict(request.headers),
        cookies=dict(request.cookies),
    )


def get_engine(request: Request) -> I18nEngine:
    """
    Returns the engine attached to the app at startup.

    Raises:
        RuntimeError: If setup_i18n was never called for this app.
    """
    engine = getattr(request.app.state, "i18n", None)
    if engine is None:
        raise RuntimeError("i18n engine not configured; call setup_i18n at startup")
    return engine


def get_translator(
    request: Request,
    engine: Annotated[I18nEngine, Depends(get_engine)],
) -> BoundTranslator:
    """Resolve the request's locale and return its translate function."""
    return engine.bind(request_context_from_request(request))


TranslatorDep = Annotated[BoundTranslator, Depends(get_translator)]
