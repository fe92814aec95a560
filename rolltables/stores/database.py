"""Table store backed by an embedded SQL database (SQLite by default)."""

from __future__ import annotations

import logging
import threading

from sqlalchemy import select

from rolltables.config import settings
from rolltables.database import Base, make_engine, make_session_factory
from rolltables.errors import TableDoesNotExistError, TableInvalidError
from rolltables.models import TableRecord
from rolltables.stores.base import listing_entry
from rolltables.tables import Table

logger = logging.getLogger(__name__)


class DatabaseStore:
    """SQLAlchemy-backed Backingstore.

    Each table is one ``table_records`` row holding the serialized table.
    The schema is created on construction if it does not exist yet.

    Args:
        url: SQLAlchemy database URL. Defaults to ``settings.database_url``.
        echo: Log emitted SQL. Defaults to ``settings.database_echo``.
    """

    def __init__(self, url: str | None = None, *, echo: bool | None = None) -> None:
        self._lock = threading.RLock()
        self._engine = make_engine(
            url or settings.database_url,
            echo=settings.database_echo if echo is None else echo,
        )
        Base.metadata.create_all(self._engine)
        self._session_factory = make_session_factory(self._engine)

    def save_table(self, table: Table) -> None:
        if table.meta.name == "":
            raise TableInvalidError()

        payload = table.model_dump(mode="json")
        with self._lock, self._session_factory() as session, session.begin():
            record = session.get(TableRecord, table.meta.name)
            if record is None:
                session.add(
                    TableRecord(
                        name=table.meta.name,
                        roll_expression=table.meta.roll_expression,
                        rollable_table=table.meta.rollable_table,
                        payload=payload,
                    )
                )
            else:
                record.roll_expression = table.meta.roll_expression
                record.rollable_table = table.meta.rollable_table
                record.payload = payload
        logger.debug("Saved table %s", table.meta.name)

    def get_table(self, name: str) -> Table:
        with self._lock, self._session_factory() as session:
            record = session.get(TableRecord, name)
            if record is None:
                raise TableDoesNotExistError()
            return Table.model_validate(record.payload)

    def delete_table(self, name: str) -> None:
        with self._lock, self._session_factory() as session, session.begin():
            record = session.get(TableRecord, name)
            if record is None:
                raise TableDoesNotExistError()
            session.delete(record)
        logger.debug("Deleted table %s", name)

    def list_tables(self) -> list[str]:
        with self._lock, self._session_factory() as session:
            records = session.scalars(select(TableRecord)).all()
            return sorted(
                listing_entry(r.name, r.roll_expression, r.rollable_table) for r in records
            )

    def close(self) -> None:
        """Release the engine's pooled connections."""
        self._engine.dispose()
