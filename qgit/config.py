"""Locating and loading the global and repository configuration files."""

from __future__ import annotations

import os

from .ini import IniError, IniFile

__all__ = ["global_config", "cwd_config"]


def _load(path: str) -> IniFile | None:
    try:
        ini = IniFile.open(path)
        ini.parse()
    except IniError:
        return None
    return ini


def global_config() -> IniFile | None:
    """Return the user's ``~/.qgitconfig``.

    When the file does not exist yet, an empty configuration bound to that
    path is returned. None is returned when ``HOME`` is unset or the file
    cannot be read or parsed.
    """
    home = os.environ.get("HOME")
    if home is None:
        return None
    path = f"{home}/.qgitconfig"
    if not os.path.isfile(path):
        return IniFile.create(path)
    return _load(path)


def cwd_config() -> IniFile | None:
    """Return the configuration of the repository in the current directory.

    None is returned when there is no readable ``.qgit/config`` here.
    """
    path = os.path.join(os.getcwd(), ".qgit", "config")
    return _load(path)