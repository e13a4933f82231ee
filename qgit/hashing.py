"""SHA-1 digests and their hexadecimal form."""

from __future__ import annotations

import hashlib

__all__ = ["sha1_hash", "sha1_hex"]

_DIGEST_SIZE = 20


def sha1_hash(data: bytes) -> bytes:
    """Return the 20-byte raw SHA-1 digest of ``data``."""
    return hashlib.sha1(bytes(data)).digest()


def sha1_hex(digest: bytes) -> str:
    """Return the 40-character lower-case hex form of a raw digest."""
    digest = bytes(digest)
    if len(digest) != _DIGEST_SIZE:
        raise ValueError(f"a SHA-1 digest is {_DIGEST_SIZE} bytes, got {len(digest)}")
    return digest.hex()