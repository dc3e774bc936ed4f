"""The states of the turn engine."""

from enum import Enum, auto


class Phase(Enum):
    """Where the game is in its loop.

    A turn runs ARRIVE → DWARVES → DESCRIBE → SETTLE → LIST_OBJECTS →
    PROMPT → LISTEN → LOOKUP, then on through the word's own phases until
    it comes back to ARRIVE (something moved) or PROMPT/LISTEN (it did not).
    """

    SETUP = auto()
    ARRIVE = auto()
    DWARVES = auto()
    DESCRIBE = auto()
    SETTLE = auto()
    LIST_OBJECTS = auto()
    # Clear the pending verb and object, then read
    PROMPT = auto()
    # Read, keeping whatever verb or object is pending
    LISTEN = auto()
    LOOKUP = auto()
    NEXT_WORD = auto()
    VERB = auto()
    NOUN = auto()
    ACT = auto()
    ACT_ALONE = auto()
    CONFUSED = auto()
    MOVE = auto()
    TRAVEL = auto()
    TRANSFER = auto()
    TERMINATED = auto()
