"""Middleware options."""

from __future__ import annotations

import zlib

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gzip_handler.mimes import COMPRESSIBLE_MIMES


class GzipConfig(BaseModel):
    """Options shared by every response the middleware handles."""

    model_config = ConfigDict(frozen=True)

    compresslevel: int = Field(
        default=6,
        ge=zlib.Z_NO_COMPRESSION,
        le=zlib.Z_BEST_COMPRESSION,
        description="The gzip compression level.",
    )
    mime_types: frozenset[str] = Field(
        default=COMPRESSIBLE_MIMES,
        description="Base content types that get compressed.",
    )

    @field_validator("mime_types", mode="after")
    @classmethod
    def _normalize_mime_types(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(mime.strip().lower() for mime in value)
