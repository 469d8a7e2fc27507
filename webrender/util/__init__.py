"""
Utility functions: query-parameter parsing and the Playwright renderer.
"""

from .params import MIMETYPES, negotiate_mimetype, normalize_url, parse_bool
from .renderer import PageRenderer

__all__ = [
    "MIMETYPES",
    "negotiate_mimetype",
    "normalize_url",
    "parse_bool",
    "PageRenderer",
]
