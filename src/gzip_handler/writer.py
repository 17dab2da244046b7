"""Response writer that commits to gzip or pass-through on the first body chunk."""

from __future__ import annotations

import enum
import gzip
import io
import logging
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from gzip_handler import exceptions
from gzip_handler.helpers import sniff
from gzip_handler.helpers.encoding import GZIP
from gzip_handler.mimes import is_compressible

if TYPE_CHECKING:
    from starlette.types import Message, Send

    from gzip_handler.config import GzipConfig

logger = logging.getLogger(__name__)


class Decision(enum.Enum):
    """How the body of a response is written."""

    UNDECIDED = enum.auto()
    COMPRESS = enum.auto()
    PASSTHROUGH = enum.auto()


class SniffingWriter:
    """Drop-in ASGI ``send`` that gzips compressible response bodies.

    The ``http.response.start`` message is held back until the first body bytes
    arrive. At that point the Content-Type is known (declared by the application,
    or sniffed from those bytes), the response is committed to the gzip or the
    pass-through path, and the headers are forwarded with the matching
    Content-Encoding. The decision holds for the rest of the response.
    """

    content_encoding = GZIP

    def __init__(self, send: Send, *, config: GzipConfig) -> None:
        """Initialize the writer.

        Args:
            send: The ASGI send callable of the real response
            config: Compression level and compressible content types
        """
        self.send = send
        self.mime_types = config.mime_types
        self.decision = Decision.UNDECIDED
        self.initial_message: Message | None = None
        self.compresslevel = config.compresslevel
        self.finished = False
        self.gzip_buffer = io.BytesIO()
        self.gzip_file: gzip.GzipFile | None = None

    async def __call__(self, message: Message) -> None:
        """Route an ASGI message sent by the application."""
        match message["type"]:
            case "http.response.start":
                if self.initial_message is not None:
                    raise exceptions.ResponseAlreadyStartedError
                self.initial_message = {**message, "headers": list(message.get("headers", []))}
            case "http.response.body":
                await self.write(message.get("body", b""), more_body=message.get("more_body", False))
            case _:
                if self.decision is Decision.UNDECIDED and self.initial_message is not None:
                    await self._commit(Decision.PASSTHROUGH)
                await self.send(message)

    async def write(self, body: bytes, *, more_body: bool = False) -> None:
        """Write a chunk of the response body.

        The first non-empty chunk decides whether the response is compressed.
        Empty chunks before that are dropped, and a response that ends without
        any body bytes is never sniffed nor compressed.

        Args:
            body: The next chunk of the body, possibly empty
            more_body: Whether more chunks follow this one
        """
        if self.initial_message is None:
            raise exceptions.ResponseNotStartedError

        if self.decision is Decision.UNDECIDED:
            if not body and more_body:
                return
            headers = MutableHeaders(raw=self.initial_message["headers"])
            await self._commit(self._classify(headers, body) if body else Decision.PASSTHROUGH)

        if self.gzip_file is not None:
            self.gzip_file.write(body)
            if not more_body:
                self.gzip_file.close()
            body = self._drain()

        if not more_body:
            self.finished = True

        await self.send({"type": "http.response.body", "body": body, "more_body": more_body})

    async def finish(self) -> None:
        """End a response the application left open and close the gzip stream."""
        try:
            if self.initial_message is not None and not self.finished:
                logger.debug("Application returned before ending the response body")
                await self.write(b"", more_body=False)
        finally:
            self.release()

    def release(self) -> None:
        """Close the gzip stream without sending anything else."""
        if self.gzip_file is None or self.gzip_file.closed:
            return

        logger.warning("Response aborted before the end of the gzip stream")
        self.gzip_file.close()

    def _classify(self, headers: MutableHeaders, body: bytes) -> Decision:
        if not headers.get("content-type"):
            headers["Content-Type"] = sniff.detect_content_type(body)
            logger.debug("Sniffed Content-Type %s", headers["content-type"])

        content_type = headers["content-type"]
        if "content-encoding" in headers:
            logger.debug("Response already encoded as %s", headers["content-encoding"])
            return Decision.PASSTHROUGH

        if not is_compressible(content_type, self.mime_types):
            logger.debug("Not compressing %s response", content_type)
            return Decision.PASSTHROUGH

        headers["Content-Encoding"] = self.content_encoding
        # The declared length is that of the uncompressed body
        del headers["Content-Length"]
        return Decision.COMPRESS

    async def _commit(self, decision: Decision) -> None:
        self.decision = decision
        if decision is Decision.COMPRESS:
            self.gzip_file = gzip.GzipFile(
                mode="wb",
                fileobj=self.gzip_buffer,
                compresslevel=self.compresslevel,
                mtime=0,
            )
        await self.send(self.initial_message)  # type: ignore[arg-type]

    def _drain(self) -> bytes:
        data = self.gzip_buffer.getvalue()
        self.gzip_buffer.seek(0)
        self.gzip_buffer.truncate()
        return data
