"""zlib compression of object data."""

from __future__ import annotations

import zlib

__all__ = ["CompressionError", "compress", "decompress"]


class CompressionError(Exception):
    """Raised when data cannot be compressed or decompressed."""


def compress(data: bytes) -> bytes:
    """Compress ``data`` with zlib at the best compression level."""
    try:
        return zlib.compress(bytes(data), zlib.Z_BEST_COMPRESSION)
    except zlib.error as exc:
        raise CompressionError(str(exc)) from exc


def decompress(data: bytes) -> bytes:
    """Decompress a complete zlib stream."""
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as exc:
        raise CompressionError(str(exc)) from exc