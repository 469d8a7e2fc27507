"""
Unit tests for query-parameter parsing.

Usage:
    pytest tests/test_params.py -v
"""

import pytest

from webrender.errors import NegotiationError, RenderError
from webrender.util.params import (
    MIMETYPES,
    negotiate_mimetype,
    normalize_url,
    parse_bool,
    parse_dimension,
    parse_scale,
)


# ---------------------------------------------------------------------------
# parse_bool
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value", [None, "", "false", "FALSE", "False", "0", "-1", "no", "abc"])
def test_parse_bool_falsy(value):
    assert parse_bool(value) is False


@pytest.mark.parametrize("value", ["true", "TRUE", "True", "1", "2", "10px", " 3"])
def test_parse_bool_truthy(value):
    assert parse_bool(value) is True


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def test_parse_dimension_defaults_when_absent():
    assert parse_dimension("width", None, 1280) == 1280
    assert parse_dimension("width", "", 1280) == 1280


def test_parse_dimension_uses_leading_integer():
    assert parse_dimension("width", "800", 1280) == 800
    assert parse_dimension("width", "800px", 1280) == 800
    assert parse_dimension("height", "0", 1024) == 0


def test_parse_dimension_rejects_non_numeric():
    with pytest.raises(RenderError) as exc:
        parse_dimension("height", "tall", 1024)
    assert exc.value.status_code == 400
    assert "height" in str(exc.value)


def test_parse_scale():
    assert parse_scale(None) == 1.0
    assert parse_scale("2") == 2.0
    assert parse_scale("1.5x") == 1.5
    assert parse_scale(".5") == 0.5
    with pytest.raises(RenderError):
        parse_scale("big")


# ---------------------------------------------------------------------------
# MIME type negotiation
# ---------------------------------------------------------------------------

def test_negotiate_defaults_to_png():
    assert negotiate_mimetype(None) == "image/png"
    assert negotiate_mimetype("") == "image/png"


@pytest.mark.parametrize("mimetype", list(MIMETYPES))
def test_negotiate_every_supported_type(mimetype):
    assert negotiate_mimetype(mimetype) == mimetype


def test_negotiate_is_case_insensitive():
    assert negotiate_mimetype("Application/PDF") == "application/pdf"


def test_negotiate_first_supported_entry_wins():
    assert negotiate_mimetype("image/gif;text/html;image/png") == "text/html"
    assert negotiate_mimetype("image/jpeg; application/pdf") == "image/jpeg"


@pytest.mark.parametrize("value", ["image/gif", "video/mp4;audio/ogg", ";;", "garbage"])
def test_negotiate_unsupported_raises_406(value):
    with pytest.raises(NegotiationError) as exc:
        negotiate_mimetype(value)
    assert exc.value.status_code == 406


# ---------------------------------------------------------------------------
# URL normalization
# ---------------------------------------------------------------------------

def test_normalize_adds_https_scheme():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("example.com/path?q=1") == "https://example.com/path?q=1"


def test_normalize_keeps_http_and_https():
    assert normalize_url("http://example.com") == "http://example.com"
    assert normalize_url("https://example.com") == "https://example.com"


def test_normalize_decodes_base64():
    assert normalize_url("base64:aHR0cDovL2V4YW1wbGUuY29t") == "http://example.com"


def test_normalize_decodes_base64_without_padding_then_adds_scheme():
    # "example.org" -> ZXhhbXBsZS5vcmc=
    assert normalize_url("base64:ZXhhbXBsZS5vcmc") == "https://example.org"


def test_normalize_rejects_broken_base64():
    with pytest.raises(RenderError):
        normalize_url("base64:a")
