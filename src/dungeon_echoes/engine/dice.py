"""Dice rolling for the turn resolver.

Every random number the engine uses comes from a DiceRoller, rolled with
the d20 library. Tests substitute any object with the same ``roll``
method to force exact outcomes.

Example:
    >>> roller = DiceRoller(seed=7)
    >>> 1 <= roller.roll(20) <= 20
    True
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

import d20

from dungeon_echoes.core.exceptions import DiceRollError
from dungeon_echoes.core.logging import get_logger


logger = get_logger(__name__)

_T = TypeVar("_T")


class Roller(Protocol):
    """Anything that can roll a single die."""

    def roll(self, sides: int) -> int: ...


class DiceRoller:
    """Uniform single-die roller backed by the d20 library.

    d20 draws from the ``random`` module, so seeding reseeds the module
    generator and makes subsequent rolls reproducible.
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def reseed(self, seed: int) -> None:
        self._seed = seed
        random.seed(seed)

    def roll(self, sides: int) -> int:
        """Roll one die.

        Args:
            sides: Number of faces, at least 1.

        Returns:
            An integer uniformly distributed in ``[1, sides]``.

        Raises:
            DiceRollError: If ``sides`` is not a positive integer.
        """
        if isinstance(sides, bool) or not isinstance(sides, int) or sides < 1:
            raise DiceRollError(f"Cannot roll a die with {sides!r} sides", expression=f"1d{sides}")

        result = d20.roll(f"1d{sides}").total
        logger.debug("Die rolled", sides=sides, result=result)
        return result


def choose(roller: Roller, options: Sequence[_T]) -> _T:
    """Pick one option uniformly using a single roll.

    A single option is returned without consuming a roll.

    Raises:
        DiceRollError: If ``options`` is empty.
    """
    if not options:
        raise DiceRollError("Cannot choose from an empty sequence")
    if len(options) == 1:
        return options[0]
    return options[roller.roll(len(options)) - 1]


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def roll(sides: int) -> int:
    """Roll one die with the shared module roller."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller.roll(sides)


__all__ = [
    "Roller",
    "DiceRoller",
    "choose",
    "roll",
]
