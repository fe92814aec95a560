"""Inline ``{{2d6+1}}`` roll placeholders embedded in table text.

A placeholder is re-rolled every time the text is read, so the same row can
read "Fight 3 rats" on one lookup and "Fight 5 rats" on the next.
"""

from __future__ import annotations

import itertools
import logging
import re

from rolltables.dice import DiceError, DiceRoller, get_roller

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(
    r"{{\s*(?P<num>[0-9]*)d(?P<sides>[0-9]+)(?P<mod>[+-])?(?P<mod_num>[0-9]+)?\s*}}"
)

# Occurrences past this many are left as written.
MAX_SUBSTITUTIONS = 99


def rollable_string(value: str) -> bool:
    """Return True if value contains at least one roll placeholder."""
    return PLACEHOLDER_RE.search(value) is not None


def roll_string(value: str, dice: DiceRoller | None = None) -> str:
    """Replace each roll placeholder in value with a freshly rolled total.

    Substitution is all-or-nothing: if any placeholder fails to evaluate the
    original text is returned unchanged.

    Args:
        value: Text that may contain placeholders.
        dice: Roller used for the placeholders. Defaults to the shared roller.

    Returns:
        The text with every evaluated placeholder replaced by its total.
    """
    dice = dice or get_roller()
    rolled = value
    for match in itertools.islice(PLACEHOLDER_RE.finditer(value), MAX_SUBSTITUTIONS):
        placeholder = match.group(0)
        notation = placeholder.replace("{{", "").replace("}}", "").strip()
        try:
            _, total = dice.roll_expression(notation)
        except DiceError:
            logger.debug("Leaving %r unrolled, %s does not evaluate", value, placeholder)
            return value
        rolled = rolled.replace(placeholder, str(total), 1)
    return rolled
