"""Random numbers, labelled by the decision they feed."""

import random
from enum import IntEnum
from typing import Protocol


class RandomSite(IntEnum):
    """Every place the game rolls, numbered after the original labels."""

    PLUGH_VOICE = 7
    FOREST_FORK = 22
    BEDQUILT_SOUTH = 34
    SWISS_CHEESE_SOUTH = 39
    DWARVES_WAKE = 60
    KNIFE_THROW = 65
    BEDQUILT_UP = 361
    BEDQUILT_UP_FORK = 362
    SWISS_CHEESE_NORTH = 371
    SWISS_CHEESE_NORTH_FORK = 372
    DARK_FALL = 5014
    DWARF_DODGE = 5307
    UNKNOWN_WORD = 30001
    UNKNOWN_WORD_SHRUG = 30002


class RandomOracle(Protocol):
    def __call__(self, site: RandomSite) -> float:
        """Return a number in [0, 1) for the roll at ``site``."""
        ...


class SeededOracle:
    """Draws from :class:`random.Random`; the same seed replays a game."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def __call__(self, site: RandomSite) -> float:
        return self._random.random()
