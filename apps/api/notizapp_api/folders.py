from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .domain.exceptions import PathError
from .notes import is_note_file
from .walker import walk_files

logger = logging.getLogger("notizapp.storage")


def list_folders(root_path: Path) -> list[str]:
    folders: list[str] = []
    with os.scandir(root_path) as it:
        for entry in it:
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                folders.append(entry.name)
    return folders


def create_folder(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def rename_folder(root_path: Path, old_name: str, new_name: str) -> None:
    root = Path(root_path)
    os.rename(root / old_name, root / new_name)
    logger.info("folder_rename", extra={"old": old_name, "new": new_name})


def delete_folder_recursive(path: Path) -> None:
    shutil.rmtree(path)
    logger.info("folder_delete", extra={"path": str(path)})


def free_target(root: Path, source: Path) -> Path:
    """First path in ``root`` named like ``source`` that does not exist yet.

    ``a.md`` becomes ``a_1.md``, ``a_2.md`` and so on when taken.
    """
    target = root / source.name
    counter = 1
    while target.exists():
        target = root / f"{source.stem}_{counter}{source.suffix}"
        counter += 1
    return target


def delete_folder_move_contents(folder_path: Path, root_path: Path) -> None:
    folder = Path(folder_path)
    root = Path(root_path)
    folder_abs = folder.resolve()
    root_abs = root.resolve()
    if folder_abs == root_abs or folder_abs in root_abs.parents:
        raise PathError("folder_contains_root")

    moved = 0
    for file_path in walk_files(folder):
        if not is_note_file(file_path):
            continue
        target = free_target(root, file_path)
        os.rename(file_path, target)
        moved += 1
    shutil.rmtree(folder)
    logger.info("folder_delete_move_contents", extra={"path": str(folder), "moved": moved})
