"""
FastAPI application entry point for the WebRender service.

Run with ``webrender`` (console script) or
``uvicorn --factory webrender.main:create_app``.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .errors import RenderError
from .api.routes import error_response, router
from .util.renderer import PageRenderer

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup / shutdown hooks."""
    settings = app.state.settings
    logger.info(
        "WebRender starting up (chrome=%s, max_concurrent_renders=%s) ...",
        settings.chrome_path or "bundled", settings.max_concurrent_renders or "unbounded",
    )
    yield
    logger.info("WebRender shutting down ...")


async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
    return error_response(exc.message, exc.status_code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Compose the application: settings, renderer and routes."""
    settings = settings or get_settings()

    app = FastAPI(
        title="WebRender",
        description="Render URLs or HTML in headless Chromium to images, PDFs or markup.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.renderer = PageRenderer(settings)
    app.add_exception_handler(RenderError, render_error_handler)
    app.include_router(router)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting WebRender server on :%d", settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
