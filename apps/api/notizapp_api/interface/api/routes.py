import logging

from fastapi import APIRouter, Depends, Query, Request

from notizapp_api.config import Settings
from notizapp_api.dependencies import get_change_feed, get_settings, get_vault, get_watch_service
from notizapp_api.domain.exceptions import PathError
from notizapp_api.domain.schemas import (
    AppMetadata,
    FolderCreateIn,
    FolderDeleteMode,
    FolderRenameIn,
    NoteOut,
    NoteRenameIn,
    NoteSaveIn,
    VersionOut,
    WatchIn,
    WatchOut,
)
from notizapp_api.vault import Vault
from notizapp_api.watch import ChangeFeed, WatchService

router = APIRouter()
logger = logging.getLogger("notizapp.api")


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/version", response_model=VersionOut)
def version(settings: Settings = Depends(get_settings)):
    return VersionOut(version=settings.app_version)


@router.get("/notes", response_model=list[NoteOut])
def list_notes(vault: Vault = Depends(get_vault)):
    return [NoteOut(**n.__dict__) for n in vault.list_notes()]


@router.post("/notes/rename")
def rename_note(payload: NoteRenameIn, request: Request, vault: Vault = Depends(get_vault)):
    new_path = vault.rename_note(payload.old_filename, payload.new_filename)
    logger.info("note_rename", extra={"rid": request.state.request_id, "path": new_path})
    return {"ok": True, "filename": new_path}


@router.put("/notes/{filename:path}")
def save_note(filename: str, payload: NoteSaveIn, vault: Vault = Depends(get_vault)):
    note_path = vault.save_note(filename, payload.content)
    return {"ok": True, "filename": note_path}


@router.delete("/notes/{filename:path}")
def delete_note(filename: str, request: Request, vault: Vault = Depends(get_vault)):
    note_path = vault.delete_note(filename)
    logger.info("note_delete", extra={"rid": request.state.request_id, "path": note_path})
    return {"ok": True}


@router.get("/folders", response_model=list[str])
def list_folders(vault: Vault = Depends(get_vault)):
    return vault.list_folders()


@router.post("/folders")
def create_folder(payload: FolderCreateIn, vault: Vault = Depends(get_vault)):
    return {"ok": True, "path": vault.create_folder(payload.path)}


@router.post("/folders/rename")
def rename_folder(payload: FolderRenameIn, vault: Vault = Depends(get_vault)):
    return {"ok": True, "path": vault.rename_folder(payload.old_name, payload.new_name)}


@router.delete("/folders/{name:path}")
def delete_folder(
    name: str,
    request: Request,
    mode: FolderDeleteMode = Query("move"),
    vault: Vault = Depends(get_vault),
):
    if mode == "recursive":
        vault.delete_folder_recursive(name)
    else:
        vault.delete_folder_move_contents(name)
    logger.info("folder_delete", extra={"rid": request.state.request_id, "path": name, "mode": mode})
    return {"ok": True}


@router.get("/metadata", response_model=AppMetadata)
def read_metadata(vault: Vault = Depends(get_vault)):
    return vault.read_metadata()


@router.put("/metadata")
def save_metadata(payload: AppMetadata, vault: Vault = Depends(get_vault)):
    vault.save_metadata(payload)
    return {"ok": True}


@router.post("/watch", response_model=WatchOut)
def start_watch(
    payload: WatchIn,
    vault: Vault = Depends(get_vault),
    watcher: WatchService = Depends(get_watch_service),
    feed: ChangeFeed = Depends(get_change_feed),
):
    path = vault.folder_path(payload.path)
    watcher.start_watch(path)
    return WatchOut(watching=True, path=str(path), changes=feed.changes)


@router.get("/watch", response_model=WatchOut)
def watch_status(
    watcher: WatchService = Depends(get_watch_service),
    feed: ChangeFeed = Depends(get_change_feed),
):
    path = watcher.watched_path
    return WatchOut(watching=path is not None, path=str(path) if path else None, changes=feed.changes)
