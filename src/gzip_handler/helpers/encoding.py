"""Accept-Encoding negotiation."""

from __future__ import annotations

import contextlib

GZIP = "gzip"


def parse_accept_encoding(header_value: str) -> dict[str, float]:
    """Parse an Accept-Encoding header into content codings and their quality values.

    Args:
        header_value: Value of the Accept-Encoding header

    Returns:
        A mapping of lowercase content coding to its ``q`` value

    Examples:
        >>> parse_accept_encoding("gzip, deflate")
        {'gzip': 1.0, 'deflate': 1.0}
        >>> parse_accept_encoding("GZIP;q=0.5")
        {'gzip': 0.5}
        >>> parse_accept_encoding("")
        {}
    """
    codings: dict[str, float] = {}
    for item in header_value.split(","):
        coding, *params = (part.strip() for part in item.split(";"))
        if not coding:
            continue

        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                with contextlib.suppress(ValueError):
                    quality = float(value)

        codings[coding.lower()] = quality

    return codings


def accepts_gzip(header_value: str) -> bool:
    """Whether the client can decode a gzip response body.

    A ``gzip`` coding with ``q=0`` is an explicit refusal.

    Examples:
        >>> accepts_gzip("gzip, deflate, br")
        True
        >>> accepts_gzip("deflate")
        False
        >>> accepts_gzip("gzip;q=0")
        False
    """
    return parse_accept_encoding(header_value).get(GZIP, 0.0) > 0
