from __future__ import annotations

import posixpath
from pathlib import PurePosixPath


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def relative_uri(path: str, base: str) -> str:
    """
    Return a stable, POSIX-style path for reporting output.

    Backslash separators are normalized first so the result does not depend
    on the host that produced the lint results. The path is expressed
    relative to `base` when possible; absolute paths outside `base` are
    expressed with `..` segments, and anything else is returned normalized
    but otherwise unchanged.

    This never touches the filesystem or the current working directory.
    """

    posix_path = to_posix(path)
    posix_base = to_posix(base)
    if not posix_base:
        return posixpath.normpath(posix_path)

    pure_path = PurePosixPath(posixpath.normpath(posix_path))
    pure_base = PurePosixPath(posixpath.normpath(posix_base))
    try:
        return pure_path.relative_to(pure_base).as_posix()
    except ValueError:
        pass

    if pure_path.is_absolute() and pure_base.is_absolute():
        return posixpath.relpath(pure_path.as_posix(), pure_base.as_posix())
    return pure_path.as_posix()
