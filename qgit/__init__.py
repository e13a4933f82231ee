"""A simplified git-like version control system: zlib-compressed, SHA-1
addressed objects in a ``.qgit`` directory, INI configuration and the
``qgit`` command."""

__version__ = "0.1.0"