"""Repositories: the work tree and its ``.qgit`` directory."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .fs import PERM_DIR, mkdirp
from .ini import IniFile

__all__ = ["Repository"]

_LAYOUT = (
    "objects/info",
    "objects/pack",
    "refs/heads",
    "refs/tags",
)

_DESCRIPTION = (
    "Unnamed repository; edit this file 'description' to name the repository.\n"
)


@dataclass
class Repository:
    """A repository rooted at ``worktree`` with its data in ``qgit``."""

    worktree: str
    qgit: str
    bare: bool = False
    reinit: bool = False

    @classmethod
    def open(cls, abspath: str | os.PathLike[str]) -> "Repository | None":
        """Open the repository whose work tree is ``abspath``, or return None."""
        abspath = os.fspath(abspath)
        qgit = f"{abspath}/.qgit"
        if not os.path.isdir(qgit):
            return None
        return cls(worktree=abspath, qgit=qgit)

    @classmethod
    def create(
        cls, abspath: str | os.PathLike[str], branch: str, bare: bool = False
    ) -> "Repository":
        """Create a repository in ``abspath`` whose HEAD points at ``branch``.

        If a ``.qgit`` directory already exists it is left untouched and the
        returned repository has ``reinit`` set.
        """
        abspath = os.fspath(abspath)
        repo = cls(worktree=abspath, qgit=f"{abspath}/.qgit", bare=bare)
        if os.path.isdir(repo.qgit):
            repo.reinit = True
            return repo

        for sub in _LAYOUT:
            try:
                mkdirp(f"{repo.qgit}/{sub}", PERM_DIR)
            except FileExistsError:
                pass

        with open(f"{repo.qgit}/description", "w", encoding="utf-8") as stream:
            stream.write(_DESCRIPTION)
        with open(f"{repo.qgit}/HEAD", "w", encoding="utf-8") as stream:
            stream.write(f"ref: refs/heads/{branch}\n")

        config = IniFile.create(f"{repo.qgit}/config")
        config.set("core", "repositoryformatversion", "0")
        config.set("core", "filemode", "true")
        config.set("core", "bare", "true" if bare else "false")
        config.write()
        return repo

    @classmethod
    def find(cls, path: str | os.PathLike[str] = ".") -> "Repository | None":
        """Find the repository containing ``path`` or one of its ancestors."""
        try:
            current = os.path.realpath(os.fspath(path), strict=True)
        except OSError:
            return None
        while True:
            if os.path.isdir(f"{current}/.qgit"):
                return cls.open(current)
            try:
                parent = os.path.realpath(f"{current}/..", strict=True)
            except OSError:
                return None
            if parent == "/":
                return None
            current = parent

    def object_path(self, sha1: str) -> str:
        """Return where the object with hex name ``sha1`` is stored."""
        if len(sha1) < 2:
            raise ValueError(f"object name too short: '{sha1}'")
        return f"{self.qgit}/objects/{sha1[:2]}/{sha1[2:]}"