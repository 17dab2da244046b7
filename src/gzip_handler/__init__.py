"""Transparent gzip compression for ASGI responses."""

from __future__ import annotations

from gzip_handler.config import GzipConfig
from gzip_handler.exceptions import (
    GzipHandlerError,
    ResponseAlreadyStartedError,
    ResponseNotStartedError,
    ResponseStateError,
)
from gzip_handler.helpers.sniff import detect_content_type
from gzip_handler.middleware import GzipMiddleware, gzip_handler
from gzip_handler.mimes import COMPRESSIBLE_MIMES, base_content_type, is_compressible
from gzip_handler.writer import Decision, SniffingWriter

__all__ = [
    "COMPRESSIBLE_MIMES",
    "Decision",
    "GzipConfig",
    "GzipHandlerError",
    "GzipMiddleware",
    "ResponseAlreadyStartedError",
    "ResponseNotStartedError",
    "ResponseStateError",
    "SniffingWriter",
    "base_content_type",
    "detect_content_type",
    "gzip_handler",
    "is_compressible",
]
