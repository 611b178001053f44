from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AppMetadata(BaseModel):
    """Sidecar document kept next to the notes.

    ``folders`` and ``settings`` belong to the UI and are passed through
    untouched, so they stay plain JSON values.
    """

    model_config = ConfigDict(populate_by_name=True)

    folders: Any
    pinned_notes: list[str] = Field(default_factory=list, alias="pinnedNotes")
    folder_order: Optional[list[str]] = Field(default=None, alias="folderOrder")
    settings: Optional[Any] = None


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    folder: str
    content: str
    updated_at: str = Field(alias="updatedAt")


class NoteSaveIn(BaseModel):
    content: str


class NoteRenameIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_filename: str = Field(alias="oldFilename")
    new_filename: str = Field(alias="newFilename")


class FolderCreateIn(BaseModel):
    path: str


class FolderRenameIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_name: str = Field(alias="oldName")
    new_name: str = Field(alias="newName")


class WatchIn(BaseModel):
    path: Optional[str] = None


class WatchOut(BaseModel):
    watching: bool
    path: Optional[str] = None
    changes: int = 0


class VersionOut(BaseModel):
    version: str


FolderDeleteMode = Literal["recursive", "move"]
