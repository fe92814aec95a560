"""Dice rolling engine used by roll tables.

Supports standard notation: XdY, XdY+Z, XdY-Z, dY.
Examples: 2d6, d20, 3d10+2, 2d6-1.
"""

from __future__ import annotations

import random
import re

_NOTATION_RE = re.compile(
    r"^(?P<count>[1-9]\d*)?d(?P<sides>[1-9]\d*)(?P<mod>[+-]\d+)?$",
    re.IGNORECASE,
)

_MAX_DICE = 100
_MAX_SIDES = 1000


class DiceError(ValueError):
    """Raised when a dice notation is invalid."""


def parse(notation: str) -> tuple[int, int, int]:
    """Parse dice notation into (count, sides, modifier).

    Args:
        notation: Dice notation string, e.g. "2d6+3".

    Returns:
        Tuple of (number of dice, sides per die, flat modifier).

    Raises:
        DiceError: If the notation is invalid or out of range.
    """
    m = _NOTATION_RE.match(notation.strip())
    if not m:
        raise DiceError(f"Invalid dice notation: {notation!r}")

    count = int(m.group("count") or 1)
    sides = int(m.group("sides"))
    modifier = int(m.group("mod") or 0)

    if count > _MAX_DICE:
        raise DiceError(f"Too many dice: {count} (max {_MAX_DICE})")
    if sides > _MAX_SIDES:
        raise DiceError(f"Too many sides: {sides} (max {_MAX_SIDES})")

    return count, sides, modifier


def outcome_count(notation: str) -> int:
    """Return how many distinct totals the notation can produce.

    Raises:
        DiceError: If the notation is invalid.
    """
    count, sides, _ = parse(notation)
    return count * (sides - 1) + 1


class DiceRoller:
    """Rolls dice from its own random source.

    Tables take a roller explicitly so callers can supply a seeded or
    scripted one; code that does not care uses the shared default.

    Args:
        rng: Random source to draw from. A fresh ``random.Random`` by default.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def roll(self, count: int, sides: int) -> tuple[list[int], int]:
        """Roll ``count`` dice with ``sides`` faces.

        Returns:
            Tuple of (individual die results, their sum).

        Raises:
            DiceError: If count is negative or sides is less than one.
        """
        if count < 0:
            raise DiceError(f"Cannot roll a negative number of dice: {count}")
        if sides < 1:
            raise DiceError(f"A die needs at least one side: {sides}")
        rolls = [self._rng.randint(1, sides) for _ in range(count)]
        return rolls, sum(rolls)

    def roll_expression(self, notation: str) -> tuple[list[int], int]:
        """Roll dice described by notation.

        Args:
            notation: Dice notation string, e.g. "2d6+3".

        Returns:
            Tuple of (individual die results, total including the modifier).

        Raises:
            DiceError: If the notation is invalid.
        """
        count, sides, modifier = parse(notation)
        rolls, total = self.roll(count, sides)
        return rolls, total + modifier


_default_roller = DiceRoller()


def get_roller() -> DiceRoller:
    """Return the shared default roller."""
    return _default_roller
