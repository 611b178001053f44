from __future__ import annotations

import json
import logging
from pathlib import Path

from .domain.schemas import AppMetadata
from .util import atomic_write_json

CONFIG_FILENAME = "notizapp-config.json"
LEGACY_FILENAME = ".notizapp-metadata.json"

logger = logging.getLogger("notizapp.storage")


def empty_metadata() -> AppMetadata:
    return AppMetadata(folders={}, pinned_notes=[], folder_order=None, settings=None)


def config_path(root_path: Path) -> Path:
    return Path(root_path) / CONFIG_FILENAME


def legacy_path(root_path: Path) -> Path:
    return Path(root_path) / LEGACY_FILENAME


def _has_folder_groupings(path: Path) -> bool | None:
    """Whether the current file carries a non-empty ``folders`` object.

    Returns None when the file cannot be read or parsed at all.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    folders = data.get("folders") if isinstance(data, dict) else None
    return isinstance(folders, dict) and bool(folders)


def needs_migration(root_path: Path) -> bool:
    current = config_path(root_path)
    legacy = legacy_path(root_path)
    if not legacy.exists():
        return False
    if not current.exists():
        return True
    # A current file without folder groupings has not been populated yet.
    return _has_folder_groupings(current) is False


def migrate_legacy(root_path: Path) -> None:
    current = config_path(root_path)
    legacy = legacy_path(root_path)
    try:
        current.write_bytes(legacy.read_bytes())
    except OSError as e:
        logger.warning("metadata_migration_failed", extra={"root": str(root_path), "error": str(e)})
        return
    logger.info("metadata_migrated", extra={"root": str(root_path)})


def read_metadata(root_path: Path) -> AppMetadata:
    if needs_migration(root_path):
        migrate_legacy(root_path)

    current = config_path(root_path)
    if not current.exists():
        return empty_metadata()
    try:
        return AppMetadata.model_validate_json(current.read_bytes())
    except (OSError, ValueError) as e:
        logger.warning("metadata_unreadable", extra={"path": str(current), "error": str(e)})
        return empty_metadata()


def save_metadata(root_path: Path, metadata: AppMetadata) -> None:
    atomic_write_json(config_path(root_path), metadata.model_dump(mode="json", by_alias=True))
