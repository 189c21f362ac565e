"""Tests for response helpers and on-demand decoding."""

from __future__ import annotations

import pytest

from packages.fluent_http import (
    EntityMapper,
    HttpMethod,
    MissingMapperError,
    Request,
    Response,
    UnsupportedTypeError,
)


def _response(
    *, mapper: EntityMapper | None, body: bytes = b"", status_code: int = 200
) -> Response:
    """Return a response bound to a GET request using ``mapper``."""
    request = Request(method=HttpMethod.GET, url="http://a.test/x", mapper=mapper)
    return Response(
        status_code=status_code,
        request=request,
        headers={"Content-Type": "application/json"},
        body=body,
    )


def test_decode_uses_request_mapper() -> None:
    """decode should deserialize the body with the mapper of its request."""
    response = _response(mapper=EntityMapper.with_defaults(), body=b'{"a":1}')

    assert response.decode(dict) == {"a": 1}


def test_decode_without_mapper_raises_missing_mapper() -> None:
    """decode should fail loudly when no mapper was resolved for the request."""
    with pytest.raises(MissingMapperError):
        _response(mapper=None, body=b"{}").decode(dict)


def test_decode_unregistered_type_raises_unsupported_type() -> None:
    """decode should propagate UnsupportedTypeError for unknown targets."""
    with pytest.raises(UnsupportedTypeError):
        _response(mapper=EntityMapper(), body=b"{}").decode(dict)


def test_header_lookup_is_case_insensitive() -> None:
    """header should match names regardless of case and honor defaults."""
    response = _response(mapper=None)

    assert response.header("content-type") == "application/json"
    assert response.header("X-Missing") is None
    assert response.header("X-Missing", "fallback") == "fallback"


@pytest.mark.parametrize(
    ("status_code", "ok"), [(200, True), (204, True), (301, False), (500, False)]
)
def test_ok_reflects_2xx_range(status_code: int, ok: bool) -> None:
    """ok should be True only for 2xx responses."""
    assert _response(mapper=None, status_code=status_code).ok is ok


def test_text_replaces_invalid_utf8() -> None:
    """text should decode UTF-8 and replace undecodable bytes."""
    assert _response(mapper=None, body=b"caf\xc3\xa9 \xff").text == "café �"
