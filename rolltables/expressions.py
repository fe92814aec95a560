"""Parser for table expressions.

A table expression asks a table for rows:

  ?npc        one random row from npc
  2?npc       two random rows, duplicates allowed
  uni:3?npc   three random rows with distinct die values
  4#npc       the row for a roll of 4

Parsing happens once, up front, and yields either a RandomRequest or an
ExactRequest; evaluation lives on Table.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from rolltables.errors import InvalidExpressionError, MissingRowNumberError

UNIQUE_PREFIX = "uni:"
RANDOM_OPERATOR = "?"
EXACT_OPERATOR = "#"

_DIGITS = frozenset(string.digits)
_TABLE_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_.-")

_INVALID_MESSAGE = (
    "not a valid table expression, must be ?table or n?table or n#table "
    "(e.g. ?npc, 2?npc, 3#npc)"
)
_MISSING_ROW_MESSAGE = (
    "not a valid table expression, a request to show a specific row must include a row number"
)


@dataclass(frozen=True)
class RandomRequest:
    """Request for ``count`` random rows, optionally with distinct die values."""

    table: str
    count: int = 1
    unique: bool = False


@dataclass(frozen=True)
class ExactRequest:
    """Request for the row matching a specific roll."""

    table: str
    row_number: int


TableExpression = RandomRequest | ExactRequest


def parse_expression(expression: str) -> TableExpression:
    """Parse a table expression.

    Args:
        expression: Expression text, e.g. "uni:2?npc".

    Returns:
        A RandomRequest for ``?`` expressions or an ExactRequest for ``#``.

    Raises:
        InvalidExpressionError: If the text does not match the grammar.
        MissingRowNumberError: If a ``#`` expression has no row number, or 0.
    """
    text = expression
    unique = text.startswith(UNIQUE_PREFIX)
    if unique:
        text = text[len(UNIQUE_PREFIX) :]

    pos = 0
    while pos < len(text) and text[pos] in _DIGITS:
        pos += 1
    number = int(text[:pos]) if pos else 0

    if pos >= len(text) or text[pos] not in (RANDOM_OPERATOR, EXACT_OPERATOR):
        raise InvalidExpressionError(_INVALID_MESSAGE)
    operator = text[pos]

    table = text[pos + 1 :]
    if not table or not set(table) <= _TABLE_NAME_CHARS:
        raise InvalidExpressionError(_INVALID_MESSAGE)

    if operator == RANDOM_OPERATOR:
        return RandomRequest(table=table, count=number or 1, unique=unique)

    if number == 0:
        raise MissingRowNumberError(_MISSING_ROW_MESSAGE)
    return ExactRequest(table=table, row_number=number)
