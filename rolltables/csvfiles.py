"""Read and write table records as CSV files."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from pathlib import Path

from rolltables.errors import InvalidRowError


def read_csv(path: str | Path) -> list[list[str]]:
    """Return every record in the CSV file at path, header included.

    Raises:
        InvalidRowError: If the file is not UTF-8 or is not well-formed CSV.
        OSError: If the file cannot be opened.
    """
    with open(path, newline="", encoding="utf-8") as f:
        try:
            return [record for record in csv.reader(f, strict=True)]
        except UnicodeDecodeError as exc:
            raise InvalidRowError(f"{path} is not valid UTF-8: {exc.reason}") from exc
        except csv.Error as exc:
            raise InvalidRowError(f"{path} is not valid CSV: {exc}") from exc


def write_csv(path: str | Path, records: Iterable[Sequence[str]]) -> None:
    """Write records to path as CSV, replacing any existing file."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(records)
