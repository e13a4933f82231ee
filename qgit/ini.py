"""A small INI file reader and writer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import IO

__all__ = ["IniError", "IniFile"]

_SPACE = " \t\r\v\f"


class IniError(Exception):
    """Raised when an INI file cannot be read, parsed or written."""


@dataclass
class _Entry:
    key: str
    value: str | None


class IniFile:
    """Sections of key/value entries, kept in the order they were added."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self.filename = os.fspath(filename)
        self._text: str | None = None
        self._sections: dict[str, list[_Entry]] = {}

    @classmethod
    def open(cls, filename: str | os.PathLike[str]) -> "IniFile":
        """Load a non-empty file; call :meth:`parse` to read its entries."""
        ini = cls(filename)
        try:
            with open(ini.filename, "rb") as stream:
                data = stream.read()
        except OSError as exc:
            raise IniError(f"cannot open '{ini.filename}': {exc}") from exc
        if not data:
            raise IniError(f"'{ini.filename}' is empty")
        ini._text = data.decode("utf-8", errors="surrogateescape")
        return ini

    @classmethod
    def create(cls, filename: str | os.PathLike[str]) -> "IniFile":
        """Return an empty INI file bound to ``filename``."""
        return cls(filename)

    def parse(self) -> None:
        """Read the entries of the loaded text."""
        if self._text is None:
            return
        text = self._text.split("\0", 1)[0]
        section: str | None = None
        for raw in text.split("\n"):
            line = raw.lstrip(_SPACE)
            if not line or line[0] in ";#":
                continue
            if line[0] == "[":
                body = line[1:].lstrip(_SPACE)
                end = body.find("]")
                section = body[:end].rstrip(_SPACE) if end != -1 else None
                continue
            key, sep, value = line.partition("=")
            if section is None:
                raise IniError(f"entry outside of a section: '{line}'")
            self._put(section, key.rstrip(_SPACE), value.strip(_SPACE) if sep else None)

    def _put(self, section: str, key: str, value: str | None) -> None:
        self._sections.setdefault(section, []).append(_Entry(key, value))

    def _find(self, section: str, key: str) -> _Entry | None:
        return next((e for e in self._sections.get(section, ()) if e.key == key), None)

    def get(self, section: str, key: str) -> str | None:
        """Return the value of ``key`` in ``section``, or None."""
        entry = self._find(section, key)
        return entry.value if entry else None

    def set(self, section: str, key: str, value: str | None) -> None:
        """Set ``key`` in ``section``, adding the section if needed."""
        entry = self._find(section, key)
        if entry:
            entry.value = value
        else:
            self._put(section, key, value)

    def unset(self, section: str, key: str) -> None:
        """Remove ``key`` from ``section``; KeyError if it is absent."""
        entry = self._find(section, key)
        if entry is None:
            raise KeyError(f"{section}.{key}")
        self._sections[section].remove(entry)

    def format(self) -> str:
        """Return every entry as ``section.key=value`` lines."""
        return "".join(
            f"{name}.{entry.key}={entry.value or ''}\n"
            for name, entries in self._sections.items()
            for entry in entries
        )

    def print(self, stream: IO[str]) -> int:
        """Write :meth:`format` output to ``stream``; return characters written."""
        text = self.format()
        stream.write(text)
        return len(text)

    def write(self) -> int:
        """Save to the file this object is bound to."""
        return self.write_to(self.filename)

    def write_to(self, filename: str | os.PathLike[str]) -> int:
        """Save through a lock file renamed over ``filename``; return characters written."""
        filename = os.fspath(filename)
        lock = f"{filename}.lock"
        chunks = []
        for name, entries in self._sections.items():
            chunks.append(f"[{name}]\n")
            chunks.extend(f"\t{e.key}={e.value or ''}\n" for e in entries)
        text = "".join(chunks)
        try:
            with open(lock, "w", encoding="utf-8", errors="surrogateescape") as stream:
                stream.write(text)
        except OSError as exc:
            raise IniError(f"cannot write '{lock}': {exc}") from exc
        try:
            os.replace(lock, filename)
        except OSError as exc:
            try:
                os.unlink(lock)
            except OSError:
                pass
            raise IniError(f"cannot replace '{filename}': {exc}") from exc
        return len(text)