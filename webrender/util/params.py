"""
Query-parameter parsing helpers for the /webrender endpoint.

Parsing is deliberately permissive: numbers use leading-digit semantics
("800px" -> 800) and booleans accept true/false words or a leading integer.
"""

import re
import base64
import binascii

from ..errors import NegotiationError, RenderError

DEFAULT_MIMETYPE = "image/png"

# Supported output types -> capture kind.
MIMETYPES = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/webp": "webp",
    "application/pdf": "pdf",
    "text/html": "html",
    "text/plain": "text",
    "text/xml": "text",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_HTTP_SCHEME = re.compile(r"^https?://")
_BASE64_PREFIX = "base64:"


def parse_leading_int(value: str) -> int | None:
    """Return the integer at the start of ``value``, or None if there is none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_leading_float(value: str) -> float | None:
    """Return the number at the start of ``value``, or None if there is none."""
    match = _LEADING_FLOAT.match(value)
    return float(match.group(1)) if match else None


def parse_bool(value: str | None) -> bool:
    """
    Permissive truthy parser.

    Absent or empty -> False; "true"/"false" in any case map directly;
    anything else is True only when its leading integer is greater than zero.
    """
    if not value:
        return False

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    number = parse_leading_int(value)
    return number is not None and number > 0


def parse_dimension(name: str, value: str | None, default: int) -> int:
    if not value:
        return default
    number = parse_leading_int(value)
    if number is None:
        raise RenderError(f"Invalid ?{name}: expected an integer, got {value!r}")
    return number


def parse_scale(value: str | None, default: float = 1.0) -> float:
    if not value:
        return default
    number = parse_leading_float(value)
    if number is None:
        raise RenderError(f"Invalid ?scale: expected a number, got {value!r}")
    return number


def negotiate_mimetype(value: str | None) -> str:
    """
    Pick the output type from a ';'-separated list of MIME types.

    The first entry (case-insensitive) found in MIMETYPES wins.

    Raises:
        NegotiationError: none of the entries is supported.
    """
    for candidate in (value or DEFAULT_MIMETYPE).split(";"):
        mimetype = candidate.strip().lower()
        if mimetype in MIMETYPES:
            return mimetype

    raise NegotiationError(
        "Must request a supported output type using ?mimetype "
        f"(one of: {', '.join(MIMETYPES)})"
    )


def _b64decode_lenient(data: str) -> bytes:
    """Decode standard or URL-safe base64, tolerating missing padding."""
    data = data.strip().replace("-", "+").replace("_", "/")
    data += "=" * (-len(data) % 4)
    return base64.b64decode(data)


def normalize_url(url: str) -> str:
    """
    Decode a ``base64:``-prefixed URL and ensure it has an http(s) scheme.

    >>> normalize_url("base64:aHR0cDovL2V4YW1wbGUuY29t")
    'http://example.com'
    >>> normalize_url("example.com")
    'https://example.com'
    """
    if url.startswith(_BASE64_PREFIX):
        try:
            url = _b64decode_lenient(url[len(_BASE64_PREFIX):]).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError) as e:
            raise RenderError(f"Invalid base64-encoded ?url: {e}") from e

    if not _HTTP_SCHEME.match(url):
        url = f"https://{url}"
    return url
