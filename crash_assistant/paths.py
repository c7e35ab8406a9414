"""
Path helpers shared by discovery and resolution.
"""

import os


def normalize_path(path: str) -> str:
    """
    Canonical absolute form of `path`.

    Expands "~", makes the path absolute and collapses "." / ".." lexically.
    Symlinks are NOT resolved, so a normalized path still names the entry
    the user (or find) reported.
    """
    return os.path.abspath(os.path.expanduser(path))


def path_extension(path: str) -> str:
    """
    Lowercased extension without the dot ("" if none).

    Bundles are directories, so a trailing separator is ignored:
    "/x/Foo.app/" -> "app", "/x/Foo.app.dSYM" -> "dsym".
    """
    stripped = path.rstrip(os.sep) or path
    return os.path.splitext(stripped)[1][1:].lower()
