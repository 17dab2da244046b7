"""Content-Type detection for responses that do not declare one.

Implements the byte-pattern part of the WHATWG MIME Sniffing Standard
(https://mimesniff.spec.whatwg.org/), the same heuristic browsers apply to
untyped responses. Binary magic numbers are matched with ``filetype``.
"""

from __future__ import annotations

import logging

import filetype

logger = logging.getLogger(__name__)

# The algorithm never looks further than this into the body.
SNIFF_LEN = 512

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"

_HTML_TAGS: tuple[bytes, ...] = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_EXACT_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    # byte order marks
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_PLAIN),
    # fonts
    (b"OTTO", "font/otf"),
    (b"\x00\x01\x00\x00", "font/ttf"),
    (b"ttcf", "font/collection"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
)

# Embedded OpenType fonts are only identified by the "LP" magic at this offset
_EOT_MAGIC_OFFSET = 34

_BINARY_BYTES = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)],
)


def _is_html(data: bytes) -> bool:
    for tag in _HTML_TAGS:
        if len(data) <= len(tag):
            continue
        if data[: len(tag)].upper() == tag and data[len(tag)] in _TAG_TERMINATORS:
            return True
    return False


def _is_binary(data: bytes) -> bool:
    return any(byte in _BINARY_BYTES for byte in data)


def detect_content_type(data: bytes) -> str:
    """Guess the Content-Type of a response body from its leading bytes.

    Args:
        data: The first bytes of the body; only ``SNIFF_LEN`` of them are considered

    Returns:
        A MIME type, ``application/octet-stream`` when nothing more specific matches

    Examples:
        >>> detect_content_type(b"<html><body>hi</body></html>")
        'text/html; charset=utf-8'
        >>> detect_content_type(b'{"key": "value"}')
        'text/plain; charset=utf-8'
        >>> detect_content_type(b"\\x89PNG\\r\\n\\x1a\\n")
        'image/png'
    """
    data = bytes(data[:SNIFF_LEN])
    if not data:
        return TEXT_PLAIN

    stripped = data.lstrip(_WHITESPACE)
    if _is_html(stripped):
        return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for signature, content_type in _EXACT_SIGNATURES:
        if data.startswith(signature):
            return content_type

    if (kind := filetype.guess(data)) is not None:
        logger.debug("Matched %s magic number", kind.extension)
        return kind.mime

    if data[_EOT_MAGIC_OFFSET : _EOT_MAGIC_OFFSET + 2] == b"LP":
        return "application/vnd.ms-fontobject"

    return OCTET_STREAM if _is_binary(data) else TEXT_PLAIN
