"""File-system helpers."""

from __future__ import annotations

import os
from itertools import accumulate

__all__ = ["PERM_DIR", "PERM_FILE", "mkdirp"]

PERM_DIR = 0o755
PERM_FILE = 0o644


def mkdirp(path: str | os.PathLike[str], mode: int = PERM_DIR) -> None:
    """Create ``path`` and any missing parents.

    Raises ``FileExistsError`` if ``path`` itself already exists, and other
    ``OSError`` subclasses if a directory cannot be made.
    """
    path = os.fspath(path)
    try:
        os.mkdir(path, mode)
        return
    except OSError:
        pass

    head, sep, rest = path[:1], "/", path[1:]
    parts = rest.split(sep)
    parts[0] = head + parts[0]
    prefixes = list(accumulate(parts, lambda a, b: a + sep + b))[:-1]
    for prefix in prefixes:
        if not prefix:
            continue
        try:
            os.mkdir(prefix, mode)
        except FileExistsError:
            pass

    os.mkdir(path, mode)