"""Stored objects: ``<type> <size>\\0<payload>``, zlib-compressed."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass

from .compress import CompressionError, compress, decompress
from .fs import PERM_DIR, PERM_FILE, mkdirp
from .hashing import sha1_hash, sha1_hex
from .repo import Repository

__all__ = ["ObjectType", "ObjectError", "GitObject"]


class ObjectError(Exception):
    """Raised when an object cannot be decoded."""


class ObjectType(enum.IntEnum):
    """The kinds of stored object."""

    COMMIT = 1
    TREE = 2
    BLOB = 3
    TAG = 4

    @property
    def label(self) -> str:
        """The name used in the object header."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "ObjectType":
        """Return the type named ``label``; ObjectError if there is none."""
        for kind in cls:
            if kind.label == label:
                return kind
        raise ObjectError(f"unknown object type '{label}'")


@dataclass
class GitObject:
    """An object's type and payload, with its hex name once computed."""

    type: ObjectType
    payload: bytes
    sha1: str = ""

    @property
    def size(self) -> int:
        """The length of the payload in bytes."""
        return len(self.payload)

    @classmethod
    def from_file(cls, type: ObjectType, filename: str | os.PathLike[str]) -> "GitObject":
        """Make an object of ``type`` holding the bytes of ``filename``."""
        with open(filename, "rb") as stream:
            data = stream.read()
        return cls(ObjectType(type), data)

    def raw(self) -> bytes:
        """Return the uncompressed stored form of the object."""
        header = f"{self.type.label} {self.size}".encode("ascii")
        return header + b"\0" + self.payload

    def hash(self) -> str:
        """Compute, record and return the object's hex SHA-1 name."""
        self.sha1 = sha1_hex(sha1_hash(self.raw()))
        return self.sha1

    def write(self, repo: Repository) -> str:
        """Store the object compressed in ``repo``; return its path."""
        if not self.sha1:
            self.hash()
        data = compress(self.raw())
        path = repo.object_path(self.sha1)
        try:
            mkdirp(os.path.dirname(path), PERM_DIR)
        except FileExistsError:
            pass
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PERM_FILE)
        with os.fdopen(fd, "wb") as stream:
            stream.write(data)
        return path

    @classmethod
    def read(cls, repo: Repository, sha1: str) -> "GitObject":
        """Load the object named ``sha1`` from ``repo``.

        ``OSError`` is raised when the file cannot be read and
        :class:`ObjectError` when its content is not a valid object.
        """
        with open(repo.object_path(sha1), "rb") as stream:
            stored = stream.read()
        try:
            data = decompress(stored)
        except CompressionError as exc:
            raise ObjectError(f"corrupt object '{sha1}': {exc}") from exc

        header, nul, body = data.partition(b"\0")
        if not nul:
            raise ObjectError(f"object '{sha1}' has no header")
        fields = header.split()
        if len(fields) < 2:
            raise ObjectError(f"object '{sha1}' has a malformed header")
        kind = ObjectType.from_label(fields[0].decode("ascii", errors="replace"))
        try:
            size = int(fields[1])
        except ValueError as exc:
            raise ObjectError(f"object '{sha1}' has a malformed size") from exc
        if size < 0 or size > len(body):
            raise ObjectError(f"object '{sha1}' is truncated")
        return cls(kind, body[:size], sha1)