"""HTTP process entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from time import monotonic

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from string_analyzer.api.errors import register_exception_handlers
from string_analyzer.api.routes import router
from string_analyzer.app import App, create_app
from string_analyzer.config.logging import configure_logging
from string_analyzer.config.settings import load_settings

logger = logging.getLogger(__name__)

API_TITLE = "String Analyzer API"
API_VERSION = "1.0.0"


def create_api(app: App) -> FastAPI:
    """Build the FastAPI application around an application container.

    The container's resources are opened on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(_api: FastAPI) -> AsyncIterator[None]:
        await app.start()
        try:
            yield
        finally:
            logger.info("shutting down")
            await app.stop()

    api = FastAPI(
        title=API_TITLE,
        description="Analyzes strings and stores their computed properties",
        version=API_VERSION,
        lifespan=lifespan,
    )
    api.state.container = app

    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @api.middleware("http")
    async def log_latency(
            request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = monotonic()
        response = await call_next(request)
        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled %s %s status=%d latency_ms=%d",
            request.method,
            request.url.path,
            response.status_code,
            latency_ms,
        )
        return response

    register_exception_handlers(api)
    api.include_router(router, prefix=app.settings.api_prefix)

    @api.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"message": API_TITLE, "version": API_VERSION, "docs": "/docs"}

    @api.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return api


def build_api() -> FastAPI:
    """Application factory used by uvicorn."""

    settings = load_settings()
    configure_logging(settings.log_level)
    return create_api(create_app(settings))


def main() -> None:
    """Run the HTTP server."""

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "string_analyzer.api.main:build_api",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
