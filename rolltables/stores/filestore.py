"""Table store that keeps one JSON file per table in a directory."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError

from rolltables.config import settings
from rolltables.errors import TableDoesNotExistError, TableInvalidError
from rolltables.stores.base import listing_entry
from rolltables.tables import Table

logger = logging.getLogger(__name__)


class FileStore:
    """JSON file Backingstore.

    Tables are held in memory and written through to ``<hash>.json`` in the
    store's directory, where the hash comes from the table name only. Every
    ``*.json`` file already in the directory is read on construction; files
    that cannot be read or are not tables are skipped.

    Args:
        location: Directory for table files, created if missing. Defaults to
            ``settings.table_directory``.
    """

    def __init__(self, location: str | Path | None = None) -> None:
        self._lock = threading.RLock()
        self._location = Path(location if location is not None else settings.table_directory)
        self._location.mkdir(parents=True, exist_ok=True)
        self._tables: dict[str, Table] = {}

        for path in sorted(self._location.glob("*.json")):
            if not path.is_file():
                continue
            try:
                table = Table.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, ValidationError) as exc:
                logger.warning("Skipping unreadable table file %s: %s", path, exc)
                continue
            if not table.meta.name:
                logger.warning("Skipping table file %s with no table name", path)
                continue
            self._tables[table.meta.name] = table

    @property
    def location(self) -> Path:
        return self._location

    def _path_for(self, table: Table) -> Path:
        return self._location / f"{table.hash()}.json"

    def save_table(self, table: Table) -> None:
        if table.meta.name == "":
            raise TableInvalidError()

        with self._lock:
            fd, tmp_name = tempfile.mkstemp(dir=self._location, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(table.model_dump_json())
                os.replace(tmp_name, self._path_for(table))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            self._tables[table.meta.name] = table
        logger.debug("Saved table %s to %s", table.meta.name, self._path_for(table))

    def get_table(self, name: str) -> Table:
        with self._lock:
            table = self._tables.get(name)
            if table is None:
                raise TableDoesNotExistError()
            return table

    def delete_table(self, name: str) -> None:
        with self._lock:
            table = self._tables.pop(name, None)
            if table is None:
                raise TableDoesNotExistError()
            self._path_for(table).unlink(missing_ok=True)
        logger.debug("Deleted table %s", name)

    def list_tables(self) -> list[str]:
        with self._lock:
            return sorted(
                listing_entry(t.meta.name, t.meta.roll_expression, t.meta.rollable_table)
                for t in self._tables.values()
            )

    def close(self) -> None:
        """Nothing to release; every save is already on disk."""
