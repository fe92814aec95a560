"""The persistence contract every table store satisfies."""

from __future__ import annotations

from typing import Protocol

from rolltables.tables import Table


class Backingstore(Protocol):
    """Interface for saving and loading whole tables by name.

    Implementations serialize every operation behind one lock per store
    instance.
    """

    def save_table(self, table: Table) -> None:
        """Insert or replace the table stored under ``table.meta.name``.

        Raises:
            TableInvalidError: If the table has no name. Nothing is written.
        """
        ...

    def get_table(self, name: str) -> Table:
        """Return the table stored under name.

        Raises:
            TableDoesNotExistError: If no such table is stored.
        """
        ...

    def delete_table(self, name: str) -> None:
        """Remove the table stored under name.

        Raises:
            TableDoesNotExistError: If no such table is stored.
        """
        ...

    def list_tables(self) -> list[str]:
        """Return "name,roll_expression,true|false" entries sorted ascending."""
        ...

    def close(self) -> None:
        """Release any resources the store holds."""
        ...


def listing_entry(name: str, roll_expression: str, rollable_table: bool) -> str:
    """Format one list_tables() entry."""
    return f"{name},{roll_expression},{'true' if rollable_table else 'false'}"
