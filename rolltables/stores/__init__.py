"""Backingstore implementations and the factory that picks one from settings."""

from __future__ import annotations

from rolltables.config import Settings, settings
from rolltables.stores.base import Backingstore
from rolltables.stores.database import DatabaseStore
from rolltables.stores.filestore import FileStore


def open_store(config: Settings | None = None) -> Backingstore:
    """Build the Backingstore named by ``config.store_backend``.

    Args:
        config: Settings to read. Defaults to the process settings.

    Returns:
        A DatabaseStore or a FileStore.
    """
    config = config or settings
    if config.store_backend == "file":
        return FileStore(config.table_directory)
    return DatabaseStore(config.database_url, echo=config.database_echo)


__all__ = ["Backingstore", "DatabaseStore", "FileStore", "open_store"]
