"""Target directory inspection and post-order removal helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable

__all__ = [
    "can_safely_overwrite",
    "count_entries",
    "empty_directory",
    "post_order_traverse",
    "remove_tree",
]


LOGGER = logging.getLogger(__name__)

PathCallback = Callable[[Path], None]


def can_safely_overwrite(path: str | Path) -> bool:
    """Return ``True`` when ``path`` is missing or is an empty directory.

    Only the immediate listing is inspected. A path that exists but is not a
    directory can never be written into and is reported as unsafe.
    """

    target = Path(path)
    if not target.exists():
        return True
    if not target.is_dir():
        return False
    return next(target.iterdir(), None) is None


def count_entries(path: str | Path, *, ignore: Iterable[str] = ()) -> int:
    """Return the number of immediate entries in ``path`` not named in ``ignore``."""

    target = Path(path)
    if not target.is_dir():
        return 0
    skipped = set(ignore)
    return sum(1 for entry in target.iterdir() if entry.name not in skipped)


def post_order_traverse(
    path: str | Path,
    on_directory: PathCallback,
    on_file: PathCallback,
) -> None:
    """Visit everything below ``path`` children first.

    ``on_file`` receives every entry that is not a real directory, symbolic
    links included, so links are never descended into. ``on_directory`` is
    called for a subdirectory only after all of its children were visited.
    ``path`` itself is not visited.
    """

    with os.scandir(path) as entries:
        children = list(entries)

    for entry in children:
        child = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            post_order_traverse(child, on_directory, on_file)
            on_directory(child)
        else:
            on_file(child)


def empty_directory(path: str | Path) -> None:
    """Delete every entry below ``path`` while keeping ``path`` itself.

    Calling this on an already empty directory performs no deletions. Errors
    raised by the filesystem propagate and may leave the tree partially
    emptied.
    """

    LOGGER.debug("emptying directory path=%s", path)
    post_order_traverse(path, on_directory=Path.rmdir, on_file=Path.unlink)


def remove_tree(path: str | Path) -> None:
    """Delete ``path`` together with everything below it.

    A missing ``path`` is ignored. A symbolic link is unlinked without touching
    its target.
    """

    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink()
        return
    if not target.exists():
        return

    LOGGER.debug("removing tree path=%s", target)
    empty_directory(target)
    target.rmdir()
