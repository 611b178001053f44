from functools import lru_cache

from notizapp_api.config import load_settings
from notizapp_api.vault import Vault
from notizapp_api.watch import ChangeFeed, WatchService


@lru_cache()
def get_settings():
    return load_settings()


@lru_cache()
def get_vault():
    settings = get_settings()
    return Vault(settings.vault_dir)


@lru_cache()
def get_change_feed():
    return ChangeFeed()


@lru_cache()
def get_watch_service():
    return WatchService(get_change_feed())


def reset_dependencies() -> None:
    for dep in (get_settings, get_vault, get_change_feed, get_watch_service):
        dep.cache_clear()
