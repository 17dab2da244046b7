"""Exceptions raised by the gzip middleware."""

from __future__ import annotations


class GzipHandlerError(Exception):
    """Base class for gzip middleware errors."""


class ResponseStateError(GzipHandlerError, RuntimeError):
    """The wrapped application broke the ASGI response message order."""


class ResponseNotStartedError(ResponseStateError):
    """A body message was sent before ``http.response.start``."""

    def __init__(self) -> None:
        super().__init__("Response body sent before 'http.response.start'")


class ResponseAlreadyStartedError(ResponseStateError):
    """``http.response.start`` was sent more than once."""

    def __init__(self) -> None:
        super().__init__("'http.response.start' sent more than once")
