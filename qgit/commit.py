"""Commit objects: header lines, a blank line, then the message."""

from __future__ import annotations

from dataclasses import dataclass, field

from .objects import GitObject

__all__ = ["Commit"]

_SHA1_HEX_LEN = 40


@dataclass
class Commit:
    """The fields of a commit object."""

    tree: str = ""
    parents: list[str] = field(default_factory=list)
    author: str | None = None
    committer: str | None = None
    message: str = ""

    @classmethod
    def parse(cls, obj: GitObject) -> "Commit":
        """Read the header fields and message of a commit object's payload."""
        text = obj.payload.decode("utf-8", errors="surrogateescape")
        commit = cls()
        pos = 0
        while pos < len(text) and text[pos] != "\n":
            space = text.find(" ", pos)
            if space == -1:
                break
            key = text[pos:space]
            eol = text.find("\n", space + 1)
            if eol == -1:
                eol = len(text)
            value = text[space + 1 : eol]
            pos = min(eol + 1, len(text))
            if key == "tree":
                commit.tree = value[:_SHA1_HEX_LEN]
            elif key == "parent":
                commit.parents.append(value)
            elif key == "author":
                commit.author = value
            elif key == "committer":
                commit.committer = value
        if pos < len(text) and text[pos] == "\n":
            pos += 1
        commit.message = text[pos:]
        return commit