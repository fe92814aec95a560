"""Shared test fixtures for the rolltables test suite.

Record fixtures
---------------
test_csv, ranged_csv, ranged_with_expression_csv, bad_csv
    CSV-style records as the loader receives them. Placeholders in test_csv
    only use one-sided dice, so their rolled text is predictable.

Dice fixtures
-------------
seeded_dice
    A DiceRoller over a fixed-seed Random, for repeatable sampling.
scripted_dice
    Factory for a ScriptedDice that returns queued totals in order.

Store fixtures
--------------
store  (parametrized)
    Runs each test once against a DatabaseStore on a temporary SQLite file and
    once against a FileStore in a temporary directory.
"""

from __future__ import annotations

import random
from collections.abc import Iterator

import pytest

from rolltables.dice import DiceRoller
from rolltables.stores import DatabaseStore, FileStore
from rolltables.stores.base import Backingstore


class ScriptedDice(DiceRoller):
    """Roller that returns queued totals instead of rolling."""

    def __init__(self, totals: list[int]) -> None:
        super().__init__()
        self._totals = list(totals)
        self.calls: list[str] = []

    def roll(self, count: int, sides: int) -> tuple[list[int], int]:
        self.calls.append(f"{count}d{sides}")
        total = self._totals.pop(0)
        return [total], total

    def roll_expression(self, notation: str) -> tuple[list[int], int]:
        self.calls.append(notation)
        total = self._totals.pop(0)
        return [total], total


@pytest.fixture
def test_csv() -> list[list[str]]:
    return [
        ["D6", "Result", "Description"],
        ["1", "Fight {{1d1}} rats", "The party runs across some dirty rats."],
        ["2", "No encounter", "Nothing to see here."],
        ["3", "A wolf can be heard nearby", "If the party is careful they may avoid the wolf."],
        ["4", "{{1d1+1}} bats attack", "Angry bats swarm and attack the party."],
        ["5", "I can see you, can you see me?", "A whisper can be heard in the trees."],
        ["6", "A pile of bones covers {{1d1}}GP", "You found some loot."],
    ]


@pytest.fixture
def ranged_csv() -> list[list[str]]:
    return [
        ["D6", "Result"],
        ["1-2", "You rolled a 1 or 2"],
        ["3-4", "You rolled a 3 or 4"],
        ["5-6", "You rolled a 5 or 6"],
    ]


@pytest.fixture
def ranged_with_expression_csv() -> list[list[str]]:
    return [
        ["D6", "Result"],
        ["1-2", "You rolled a 1 or 2"],
        ["3-4", "You rolled a 3 or 4, bonus {{1d1+1}}"],
        ["5-6", "You rolled a 5 or 6"],
    ]


@pytest.fixture
def bad_csv() -> list[list[str]]:
    return [
        ["D3", "Result", "Description"],
        ["A", "Fight {{1d1}} rats", "The party runs across some dirty rats."],
        ["2:8", "No encounter", "Nothing to see here."],
        ["3", "A wolf can be heard nearby", "If the party is careful they may avoid the wolf."],
    ]


@pytest.fixture
def seeded_dice() -> DiceRoller:
    return DiceRoller(random.Random(1234))


@pytest.fixture
def scripted_dice():
    return ScriptedDice


@pytest.fixture(params=["database", "file"])
def store(request, tmp_path) -> Iterator[Backingstore]:
    """Each store backend, isolated in tmp_path."""
    if request.param == "database":
        backend: Backingstore = DatabaseStore(f"sqlite:///{tmp_path / 'tables.db'}")
    else:
        backend = FileStore(tmp_path / "tables")
    yield backend
    backend.close()
