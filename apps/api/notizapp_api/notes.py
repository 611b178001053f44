from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from .domain.entities import Note
from .util import atomic_write_text, rfc3339_from_timestamp, rfc3339_now
from .walker import walk_files

NOTE_SUFFIX = ".md"

logger = logging.getLogger("notizapp.storage")


def is_note_file(path: Path) -> bool:
    return path.suffix == NOTE_SUFFIX


def _updated_at(st: os.stat_result) -> str:
    try:
        return rfc3339_from_timestamp(st.st_mtime)
    except (OverflowError, OSError, ValueError):
        return rfc3339_now()


def folder_of(root: Path, file_path: Path) -> str:
    parent = PurePosixPath(file_path.relative_to(root).parent.as_posix())
    return "" if parent == PurePosixPath(".") else parent.as_posix()


def list_notes(root_path: Path) -> list[Note]:
    root = Path(root_path)
    notes: list[Note] = []
    for file_path in walk_files(root):
        if not is_note_file(file_path):
            continue
        content = file_path.read_text(encoding="utf-8")
        st = file_path.stat()
        notes.append(
            Note(
                filename=file_path.name,
                folder=folder_of(root, file_path),
                content=content,
                updated_at=_updated_at(st),
            )
        )
    return notes


def save_note(root_path: Path, filename: str, content: str) -> None:
    path = Path(root_path) / filename
    atomic_write_text(path, content)
    logger.debug("note_save", extra={"path": str(path), "chars": len(content)})


def delete_note(root_path: Path, filename: str) -> None:
    path = Path(root_path) / filename
    path.unlink()
    logger.info("note_delete", extra={"path": str(path)})


def rename_note(root_path: Path, old_filename: str, new_filename: str) -> None:
    root = Path(root_path)
    old_path = root / old_filename
    new_path = root / new_filename
    os.rename(old_path, new_path)
    logger.info("note_rename", extra={"old": str(old_path), "new": str(new_path)})
