"""Test Accept-Encoding negotiation."""

from __future__ import annotations

import pytest

from gzip_handler.helpers import encoding


@pytest.mark.parametrize(
    ("header_value", "expected"),
    [
        ("", {}),
        ("gzip", {"gzip": 1.0}),
        ("gzip, deflate, br", {"gzip": 1.0, "deflate": 1.0, "br": 1.0}),
        ("GZip;q=0.8, identity;q=0.1", {"gzip": 0.8, "identity": 0.1}),
        ("gzip;q=invalid", {"gzip": 1.0}),
        (" , gzip ,", {"gzip": 1.0}),
        ("*;q=0", {"*": 0.0}),
    ],
)
def test_parse_accept_encoding(header_value: str, expected: dict[str, float]) -> None:
    """Test parsing of Accept-Encoding values."""
    assert encoding.parse_accept_encoding(header_value) == expected


@pytest.mark.parametrize(
    "header_value",
    [
        "gzip",
        "GZIP",
        "deflate, gzip",
        "gzip;q=0.5",
        "br;q=1.0, gzip;q=0.8, *;q=0.1",
    ],
)
def test_accepts_gzip(header_value: str) -> None:
    """Test Accept-Encoding values that allow gzip."""
    assert encoding.accepts_gzip(header_value)


@pytest.mark.parametrize(
    "header_value",
    [
        "",
        "identity",
        "deflate, br",
        "x-gzip",
        "gzip;q=0",
        "gzip; q=0.000",
    ],
)
def test_does_not_accept_gzip(header_value: str) -> None:
    """Test Accept-Encoding values that rule out gzip."""
    assert not encoding.accepts_gzip(header_value)
