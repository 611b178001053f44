from __future__ import annotations

from pathlib import Path, PurePosixPath

from . import folders, metadata, notes
from .domain.entities import Note
from .domain.exceptions import PathError
from .domain.schemas import AppMetadata


def _clean_relative(path: str) -> PurePosixPath:
    if "\x00" in path:
        raise PathError("path_contains_nul")

    cleaned = path.strip().replace("\\", "/")
    if not cleaned:
        raise PathError("path_empty")

    p = PurePosixPath(cleaned)
    if not p.parts:
        raise PathError("path_empty")
    if p.is_absolute():
        raise PathError("path_absolute_not_allowed")
    if ".." in p.parts:
        raise PathError("path_traversal_not_allowed")
    return p


def normalize_note_path(path: str) -> str:
    p = _clean_relative(path)
    if p.suffix != notes.NOTE_SUFFIX:
        p = p.with_name(p.name + notes.NOTE_SUFFIX)
    return p.as_posix()


def normalize_folder_path(path: str) -> str:
    return _clean_relative(path).as_posix()


class Vault:
    """The storage operations bound to one root directory.

    Callers hand in paths relative to the root; they are validated before
    anything touches the disk.
    """

    def __init__(self, vault_dir: Path) -> None:
        self.vault_dir = Path(vault_dir)

    def _abs_path(self, rel_path: str) -> Path:
        abs_path = (self.vault_dir / PurePosixPath(rel_path)).resolve()
        root = self.vault_dir.resolve()
        if root not in abs_path.parents and abs_path != root:
            raise PathError("path_outside_vault")
        return abs_path

    def list_notes(self) -> list[Note]:
        return notes.list_notes(self.vault_dir)

    def save_note(self, filename: str, content: str) -> str:
        note_path = normalize_note_path(filename)
        self._abs_path(note_path)
        notes.save_note(self.vault_dir, note_path, content)
        return note_path

    def delete_note(self, filename: str) -> str:
        note_path = normalize_note_path(filename)
        self._abs_path(note_path)
        notes.delete_note(self.vault_dir, note_path)
        return note_path

    def rename_note(self, old_filename: str, new_filename: str) -> str:
        old_path = normalize_note_path(old_filename)
        new_path = normalize_note_path(new_filename)
        self._abs_path(old_path)
        self._abs_path(new_path)
        notes.rename_note(self.vault_dir, old_path, new_path)
        return new_path

    def list_folders(self) -> list[str]:
        return folders.list_folders(self.vault_dir)

    def create_folder(self, name: str) -> str:
        folder = normalize_folder_path(name)
        folders.create_folder(self._abs_path(folder))
        return folder

    def rename_folder(self, old_name: str, new_name: str) -> str:
        old_folder = normalize_folder_path(old_name)
        new_folder = normalize_folder_path(new_name)
        self._abs_path(old_folder)
        self._abs_path(new_folder)
        folders.rename_folder(self.vault_dir, old_folder, new_folder)
        return new_folder

    def delete_folder_recursive(self, name: str) -> None:
        folders.delete_folder_recursive(self._abs_path(normalize_folder_path(name)))

    def delete_folder_move_contents(self, name: str) -> None:
        folders.delete_folder_move_contents(self._abs_path(normalize_folder_path(name)), self.vault_dir)

    def read_metadata(self) -> AppMetadata:
        return metadata.read_metadata(self.vault_dir)

    def save_metadata(self, data: AppMetadata) -> None:
        metadata.save_metadata(self.vault_dir, data)

    def folder_path(self, name: str | None = None) -> Path:
        if name is None:
            return self.vault_dir.resolve()
        return self._abs_path(normalize_folder_path(name))
