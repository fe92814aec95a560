"""Exceptions raised by roll tables and their stores."""

from __future__ import annotations


class TableError(Exception):
    """Base class for every table, expression and store failure."""


class InvalidRowError(TableError):
    """Raised when load input cannot be turned into a table."""


class TableInvalidError(TableError):
    """Raised when a table without a name is saved."""

    def __init__(self, message: str = "table invalid") -> None:
        super().__init__(message)


class TableDoesNotExistError(TableError):
    """Raised when a store has no table under the requested name."""

    def __init__(self, message: str = "table does not exist") -> None:
        super().__init__(message)


class ExpressionError(TableError):
    """Base class for table expression syntax errors."""


class InvalidExpressionError(ExpressionError):
    """Raised when a table expression does not match the grammar."""


class MissingRowNumberError(ExpressionError):
    """Raised when a ``#`` request does not name a row."""


class TableMismatchError(TableError):
    """Raised when an expression names a different table than the one queried."""


class NotRollableError(TableError):
    """Raised when a roll is requested from a table without a roll expression."""


class RollNotValidError(TableError):
    """Raised when no row matches a roll value."""
