import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wysiwym.config import settings
from wysiwym.exception_handlers import register_exception_handlers
from wysiwym.middleware.logging import StructuredLoggingMiddleware
from wysiwym.plugins.loader import initialize_plugins
from wysiwym.plugins.registry import KindRegistry, kind_registry
from wysiwym.routes.editor import router as editor_router
from wysiwym.services.schema_service import build_schema

logger = logging.getLogger(__name__)


def create_app(registry: KindRegistry | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        registry: A registry that is already filled. When omitted, the global
                  registry is filled with the plugins enabled in settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if registry is None:
            if not kind_registry.frozen:
                initialize_plugins(kind_registry, settings.enabled_plugins)
            app.state.registry = kind_registry
        else:
            app.state.registry = registry
        app.state.schema = build_schema(app.state.registry)
        logger.info("Editor schema ready: %s", app.state.schema)
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Doc model ⇄ editor tree conversion for the WYSIWYM editing surface",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(editor_router, prefix="/api/v1/editor")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": settings.app_version}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("wysiwym").setLevel(logging.DEBUG)

    return app
