"""Starlette-compatible middleware for transparent gzip response compression.

Clients that accept gzip get their compressible responses gzipped on the fly,
whether the application streams the body or sends it at once. When the
application does not declare a Content-Type, one is sniffed from the first
bytes of the body.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from starlette.datastructures import Headers, MutableHeaders

from gzip_handler.config import GzipConfig
from gzip_handler.helpers.encoding import accepts_gzip
from gzip_handler.writer import SniffingWriter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

VARY_HEADER = "Accept-Encoding"


def add_vary_header(message: Message) -> None:
    """Mark a response start message as varying on Accept-Encoding."""
    headers = MutableHeaders(scope=message)
    varies = {item.strip().lower() for item in headers.get("vary", "").split(",")}
    if VARY_HEADER.lower() not in varies:
        headers.add_vary_header(VARY_HEADER)


class GzipMiddleware:
    """Middleware that gzips responses of compressible content types.

    Responses to requests whose Accept-Encoding allows gzip carry
    ``Vary: Accept-Encoding``, compressed or not.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        compresslevel: int = 6,
        mime_types: Iterable[str] | None = None,
    ) -> None:
        """Initialize the gzip middleware.

        Args:
            app: The ASGI application
            compresslevel: gzip compression level, from 0 to 9
            mime_types: Base content types to compress, instead of the default allow-list
        """
        self.app = app
        options: dict[str, Any] = {"compresslevel": compresslevel}
        if mime_types is not None:
            options["mime_types"] = mime_types
        self.config = GzipConfig.model_validate(options)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Handle the ASGI request.

        Args:
            scope: The ASGI scope
            receive: The receive callable
            send: The send callable
        """
        if scope["type"] != "http":  # pragma: no cover
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if not accepts_gzip(headers.get("accept-encoding", "")):
            logger.debug("Client does not accept gzip, not compressing %s", scope.get("path"))
            await self.app(scope, receive, send)
            return

        async def send_with_vary(message: Message) -> None:
            if message["type"] == "http.response.start":
                add_vary_header(message)
            await send(message)

        writer = SniffingWriter(send_with_vary, config=self.config)
        try:
            await self.app(scope, receive, writer)
        except BaseException:
            writer.release()
            raise
        else:
            await writer.finish()


def gzip_handler(app: ASGIApp, **options: Any) -> GzipMiddleware:  # noqa: ANN401
    """Wrap an ASGI application to support transparent gzip encoding."""
    return GzipMiddleware(app, **options)
