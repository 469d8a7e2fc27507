"""
Pydantic schemas for API request / response models.
"""

from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import RenderError
from ..util.params import (
    MIMETYPES,
    negotiate_mimetype,
    normalize_url,
    parse_bool,
    parse_dimension,
    parse_scale,
)

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 1024


# ---------------------------------------------------------------------------
# Render request
# ---------------------------------------------------------------------------

class RenderRequest(BaseModel):
    """Every option recognised by /webrender, after parsing and defaults."""

    model_config = ConfigDict(frozen=True)

    url: Optional[str] = Field(default=None, description="Normalized URL to navigate to")
    html: Optional[str] = Field(default=None, description="Markup to render when no URL is given")
    width: int = Field(default=DEFAULT_WIDTH, description="Viewport width in pixels")
    height: int = Field(default=DEFAULT_HEIGHT, description="Viewport height in pixels")
    scale: float = Field(default=1.0, description="Device scale factor")
    mobile: bool = Field(default=False, description="Emulate a mobile device")
    touch: bool = Field(default=False, description="The device is touch capable")
    landscape: bool = Field(default=False, description="Landscape device orientation")
    emulate: Optional[str] = Field(default=None, description="Named Playwright device profile")
    mimetype: str = Field(default="image/png", description="Negotiated output MIME type")
    full: bool = Field(default=False, description="Capture the full scrollable page")
    alpha: bool = Field(default=False, description="Allow transparent backgrounds")

    @property
    def capture_kind(self) -> str:
        """One of png | jpeg | webp | pdf | html | text."""
        return MIMETYPES[self.mimetype]

    @classmethod
    def from_query(cls, query: Mapping[str, str], body: str = "") -> "RenderRequest":
        """
        Build a request from raw query parameters and the decoded body.

        Output-type negotiation runs first so a bad ?mimetype is always a 406.

        Raises:
            NegotiationError: no supported ?mimetype.
            RenderError: any other invalid parameter.
        """
        mimetype = negotiate_mimetype(query.get("mimetype"))

        url = query.get("url") or None
        html = None
        if url:
            url = normalize_url(url)
        elif body:
            html = body
        else:
            raise RenderError("Nothing to render: pass ?url or send HTML markup as the request body")

        return cls(
            url=url,
            html=html,
            width=parse_dimension("width", query.get("width"), DEFAULT_WIDTH),
            height=parse_dimension("height", query.get("height"), DEFAULT_HEIGHT),
            scale=parse_scale(query.get("scale")),
            mobile=parse_bool(query.get("mobile")),
            touch=parse_bool(query.get("touch")),
            landscape=parse_bool(query.get("landscape")),
            emulate=query.get("emulate") or None,
            mimetype=mimetype,
            full=parse_bool(query.get("full")),
            alpha=parse_bool(query.get("alpha")),
        )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    """JSON error envelope."""
    error: str = Field(..., description="Human-readable failure message")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str = "webrender"
