"""
FastAPI route definitions for the WebRender service.

- ANY /webrender — render a URL (or the request body as HTML) to an image,
  PDF or serialized DOM.
- GET /health    — liveness probe; never touches the browser.

Query parameters of /webrender:
    url        The URL to render; "base64:" prefix is decoded   (default: body)
    width      Browser window width                              (default: 1280)
    height     Browser window height                             (default: 1024)
    scale      Display scale factor                              (default: 1.0)
    mobile     Emulate a mobile device                           (default: false)
    touch      The device is touch capable                       (default: false)
    landscape  Device orientation                                (default: false)
    emulate    Emulate a named Playwright device profile
    mimetype   ';'-separated list of acceptable output types     (default: image/png)
    full       Capture the full webpage                          (default: false)
    alpha      Allow transparent backgrounds                     (default: false)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from .schemas import ErrorResponse, HealthResponse, RenderRequest
from ..errors import PayloadTooLargeError, RenderError
from ..util.renderer import PageRenderer

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


async def read_body(request: Request, limit: int) -> str:
    """Read the raw request body as text, refusing anything over ``limit`` bytes."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(f"Request body exceeds the {limit} byte limit")

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError(f"Request body exceeds the {limit} byte limit")
        chunks.append(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace")


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    """Build the JSON error envelope and log one record for it."""
    logger.error(
        "[webrender] Request failed (%d): %s", status_code, message,
        extra={"error_message": message, "http_status_code": status_code},
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Service health check endpoint."""
    return HealthResponse()


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------

@router.api_route(
    "/webrender",
    methods=ALL_METHODS,
    tags=["render"],
    responses={
        200: {"content": {"image/png": {}, "application/pdf": {}, "text/html": {}}},
        400: {"model": ErrorResponse},
        406: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
async def webrender(request: Request, renderer: PageRenderer = Depends(get_renderer)):
    """
    Render a URL (or the request body as HTML) in headless Chromium.

    Any failure is returned as {"error": message}: 406 when no output type
    can be negotiated, otherwise 400 (413 for an oversized body).
    """
    settings = request.app.state.settings
    try:
        body = await read_body(request, settings.body_limit_bytes)
        render_request = RenderRequest.from_query(request.query_params, body)
        output = await renderer.render(render_request)
    except RenderError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        return error_response(str(e) or e.__class__.__name__)

    return Response(
        content=output,
        media_type=render_request.mimetype,
        headers={"Content-Disposition": "inline"},
    )
