"""Roll table data model and its lookup engine.

A table is loaded once from CSV-style records:

  D6,   Result
  1-2,  You rolled a 1 or 2
  3,    Fight {{1d4}} rats
  ...

The first record is the header. When the table has a roll expression the
first column of every data row is its die roll, either a single integer or an
inclusive ``start-end`` range. Tables without a roll expression key rows by
position and are sampled uniformly.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from rolltables.dice import DiceRoller, get_roller, outcome_count
from rolltables.errors import (
    InvalidRowError,
    NotRollableError,
    RollNotValidError,
    TableMismatchError,
)
from rolltables.expressions import ExactRequest, parse_expression
from rolltables.placeholders import roll_string, rollable_string

logger = logging.getLogger(__name__)

# Optional sign then digits, no surrounding whitespace.
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# ---------------------------------------------------------------------------
# Roll ranges
# ---------------------------------------------------------------------------


def _parse_int(value: str) -> int | None:
    if _INTEGER_RE.fullmatch(value) is None:
        return None
    return int(value)


def _range_bounds(value: str) -> tuple[int, int] | None:
    parts = value.split("-")
    if len(parts) != 2:
        return None
    start = _parse_int(parts[0])
    end = _parse_int(parts[1])
    if start is None or end is None:
        return None
    return start, end


def ranged_roll(value: str) -> bool:
    """Return True if value is a ``start-end`` roll range such as "3-4"."""
    return _range_bounds(value) is not None


def roll_in_range(roll: int, roll_range: str) -> bool:
    """Return True if roll falls inside roll_range, both ends inclusive."""
    bounds = _range_bounds(roll_range)
    if bounds is None:
        return False
    start, end = bounds
    return start <= roll <= end


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Meta(BaseModel):
    """Descriptive data for a table."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    title: str = ""
    flavor_text: str = ""
    campaign: str = ""
    headers: list[str] = Field(default_factory=list)
    column_count: int = 0
    rollable_table: bool = False
    roll_expression: str = ""


class Row(BaseModel):
    """One table entry.

    ``die_roll`` is the lookup key: the rolled value (or range start) for
    rollable tables, the 1-based position otherwise.
    """

    model_config = ConfigDict(frozen=True)

    die_roll: int
    roll_range: str = ""
    has_roll_expression: bool = False
    results: list[str] = Field(default_factory=list)


class Table(BaseModel):
    """A named roll table: metadata plus ordered rows."""

    model_config = ConfigDict(frozen=True)

    meta: Meta = Field(default_factory=Meta)
    rows: list[Row] = Field(default_factory=list)

    def header(self) -> list[str]:
        """Return the table's column names."""
        return list(self.meta.headers)

    def records(self) -> list[list[str]]:
        """Return the header followed by every row, placeholders left unrolled."""
        return [self.header()] + [list(row.results) for row in self.rows]

    def hash(self) -> str:
        """Return a stable identifier derived from the table name only."""
        return hashlib.md5(self.meta.name.encode("utf-8"), usedforsecurity=False).hexdigest()

    def _find_row(self, roll: int) -> Row | None:
        for row in self.rows:
            if row.die_roll == roll:
                return row
        for row in self.rows:
            if row.roll_range and roll_in_range(roll, row.roll_range):
                return row
        return None

    def get_row(self, roll: int, dice: DiceRoller | None = None) -> list[str]:
        """Return the results of the row matching roll.

        An exact die roll match wins over a range match. Placeholders in the
        row are rolled fresh on every call.

        Args:
            roll: The die value to look up.
            dice: Roller for embedded placeholders. Defaults to the shared roller.

        Returns:
            The row's fields.

        Raises:
            RollNotValidError: If no row covers roll.
        """
        row = self._find_row(roll)
        if row is None:
            raise RollNotValidError("roll value is not valid for this table")
        if row.has_roll_expression:
            return [roll_string(value, dice) for value in row.results]
        return list(row.results)

    def random_row(self, dice: DiceRoller | None = None) -> tuple[list[str], int]:
        """Roll on the table.

        Rollable tables roll their own expression; other tables pick one of
        their rows uniformly.

        Returns:
            Tuple of (row fields, die value used).

        Raises:
            DiceError: If the table's roll expression is invalid.
            RollNotValidError: If the roll lands outside every row.
        """
        dice = dice or get_roller()
        if self.meta.rollable_table:
            _, roll = dice.roll_expression(self.meta.roll_expression)
        else:
            if not self.rows:
                raise RollNotValidError("table has no rows to roll on")
            _, roll = dice.roll(1, len(self.rows))
        return self.get_row(roll, dice), roll

    def expression(self, expression: str, dice: DiceRoller | None = None) -> list[list[str]]:
        """Evaluate a table expression such as "2?npc", "3#npc" or "uni:6?npc".

        Args:
            expression: The expression text. Its table name must be this table's.
            dice: Roller for table and placeholder rolls.

        Returns:
            The header followed by the selected rows, in the order selected.

        Raises:
            ExpressionError: If the expression is malformed.
            TableMismatchError: If the expression names another table.
            NotRollableError: If this table has no roll expression.
            RollNotValidError: If a requested or rolled value matches no row.
        """
        request = parse_expression(expression)
        if request.table != self.meta.name:
            raise TableMismatchError(
                f"table [{self.meta.name}] does not match expression [{expression}]"
            )
        if not self.meta.rollable_table:
            raise NotRollableError(f"table [{self.meta.name}] is not a rollable table")

        data = [self.header()]
        if isinstance(request, ExactRequest):
            data.append(self.get_row(request.row_number, dice))
        elif request.unique:
            data.extend(self._unique_rows(request.count, dice))
        else:
            for _ in range(request.count):
                row, _ = self.random_row(dice)
                data.append(row)
        return data

    def _unique_rows(self, count: int, dice: DiceRoller | None) -> list[list[str]]:
        # Stop once no unseen die value is left to roll.
        limit = min(len(self.rows), outcome_count(self.meta.roll_expression))
        seen: set[int] = set()
        rows: list[list[str]] = []
        while len(rows) < count and len(seen) < limit:
            row, roll = self.random_row(dice)
            if roll in seen:
                continue
            seen.add(roll)
            rows.append(row)
        return rows


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load(
    records: Sequence[Sequence[str]],
    name: str,
    roll_expression: str = "",
    *,
    title: str = "",
    flavor_text: str = "",
    campaign: str = "",
) -> Table:
    """Build a table from CSV-style records.

    Args:
        records: Header record followed by data records.
        name: Table name, also its storage key.
        roll_expression: Dice notation for rolling on the table, e.g. "d6".
            Empty for a table sampled uniformly by position.
        title: Optional display title.
        flavor_text: Optional descriptive text.
        campaign: Optional campaign the table belongs to.

    Returns:
        The loaded table.

    Raises:
        InvalidRowError: If the header is missing, a record has the wrong
            number of fields, or a rollable row's first column is neither an
            integer nor a range. No table is produced.
    """
    if not records:
        raise InvalidRowError("table requires a header record")

    headers = list(records[0])
    rollable = roll_expression != ""
    rows: list[Row] = []

    for position, record in enumerate(records[1:], start=1):
        fields = list(record)
        if len(fields) != len(headers):
            raise InvalidRowError(
                f"row {position} has {len(fields)} fields, expected {len(headers)}"
            )

        roll_range = ""
        if not rollable:
            die_roll = position
        else:
            first = fields[0] if fields else ""
            bounds = _range_bounds(first)
            if bounds is not None:
                roll_range = first
                die_roll = bounds[0]
            else:
                value = _parse_int(first)
                if value is None:
                    raise InvalidRowError(
                        "first column must be an integer since it represents a die roll"
                    )
                die_roll = value

        rows.append(
            Row(
                die_roll=die_roll,
                roll_range=roll_range,
                has_roll_expression=any(rollable_string(value) for value in fields),
                results=fields,
            )
        )

    meta = Meta(
        name=name,
        title=title,
        flavor_text=flavor_text,
        campaign=campaign,
        headers=headers,
        column_count=len(headers),
        rollable_table=rollable,
        roll_expression=roll_expression,
    )
    logger.debug("Loaded table %s with %d rows", name, len(rows))
    return Table(meta=meta, rows=rows)
