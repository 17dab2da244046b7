"""Content types that are worth compressing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Set

# Compressible types from https://www.fastly.com/blog/new-gzip-settings-and-deciding-what-compress
COMPRESSIBLE_MIMES: frozenset[str] = frozenset({
    "text/html",
    "application/x-javascript",
    "text/css",
    "application/javascript",
    "text/javascript",
    "text/plain",
    "text/xml",
    "application/json",
    "application/vnd.ms-fontobject",
    "application/x-font-opentype",
    "application/x-font-truetype",
    "application/x-font-ttf",
    "application/xml",
    "font/eot",
    "font/opentype",
    "font/otf",
    "image/svg+xml",
    "image/vnd.microsoft.icon",
    # other types
    "application/vnd.geo+json",
    "application/cap+xml",
    "text/csv",
})


def base_content_type(value: str) -> str:
    """Drop any parameters (``charset``, ``version``...) from a Content-Type value.

    Examples:
        >>> base_content_type("text/html; charset=utf-8")
        'text/html'
        >>> base_content_type(" application/json ")
        'application/json'
    """
    media_type, _, _ = value.partition(";")
    return media_type.strip()


def is_compressible(content_type: str, mime_types: Set[str] = COMPRESSIBLE_MIMES) -> bool:
    """Whether a response with this Content-Type should be gzipped."""
    return base_content_type(content_type).lower() in mime_types
