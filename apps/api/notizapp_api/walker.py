from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path


def _sorted_entries(directory: str) -> Iterator[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return iter(())
    return iter(entries)


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every file below ``root`` depth-first, in name order.

    Directories that cannot be opened are skipped. Symlinked directories are
    never entered, so the walk cannot cycle.
    """
    stack = [_sorted_entries(os.fspath(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                stack.append(_sorted_entries(entry.path))
                continue
            if entry.is_symlink() and entry.is_dir():
                continue
        except OSError:
            continue
        yield Path(entry.path)
