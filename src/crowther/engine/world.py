"""Immutable data structures for the game world.

Built once from the world-data feed at startup and never mutated; all
per-game changes live in :class:`~crowther.engine.state.GameState`.
"""

from dataclasses import dataclass, field
from enum import IntEnum

# Table sizes of the original program
ROOM_LIMIT = 300
OBJECT_LIMIT = 100
OBJECT_TEXT_LIMIT = 200
MESSAGE_LIMIT = 100
TEXT_LINE_LIMIT = 1000
VOCABULARY_LIMIT = 1000
TRAVEL_LIMIT = 1000

# Travel keyword that matches any word
WILDCARD = 1
# Keywords are stored modulo this value
KEYWORD_LIMIT = 1024

LIGHTED_ROOMS = frozenset(range(1, 11))
# Rooms that move the player on at once, without asking for input
FORCED_ROOMS = frozenset({16, 20, 21, 22, 23, 24, 25, 26, 31, 32, 79})

# Text that a message or description renders as: one string per line
Text = tuple[str, ...]


class PseudoRoom(IntEnum):
    """Travel destinations that run a handler instead of naming a room."""

    FOREST_FORK = 300
    GRATE_DOWN = 301
    GRATE_UP = 302
    PIT_DESCENT = 303
    MIST_ASCENT = 304
    FISSURE_LEAP = 305
    FISSURE_CROSSING = 306
    KING_NORTH = 307
    KING_SOUTH = 308
    KING_WEST = 309
    DEPRESSION = 310
    BEDQUILT_SOUTH = 311
    BEDQUILT_UP = 312
    SWISS_CHEESE_NORTH = 313
    # Present in the map but missing from the original dispatch table
    SWISS_CHEESE_SOUTH = 314


_PSEUDO_ROOMS = frozenset(PseudoRoom)


def is_destination(number: int) -> bool:
    """Whether a map record may send the player to ``number``."""
    return 0 < number < PseudoRoom.FOREST_FORK or number in _PSEUDO_ROOMS


class WordKind(IntEnum):
    """Vocabulary categories, numbered as ``code // 1000``."""

    MOTION = 0
    OBJECT = 1
    VERB = 2
    ADVICE = 3


class Keyword(IntEnum):
    """Motion keywords the program treats specially."""

    FORWARD = 7
    BACK = 8
    OUT = 11
    CRAWL = 17
    IN = 19
    NULL = 21
    UP = 29
    DOWN = 30
    LEFT = 36
    RIGHT = 37
    EAST = 43
    WEST = 44
    NORTH = 45
    SOUTH = 46
    XYZZY = 48
    DEPRESSION = 49
    ENTRANCE = 50
    LOOK = 57
    CAVE = 67
    TURN = 68


class Verb(IntEnum):
    TAKE = 1
    DROP = 2
    DUMMY = 3
    OPEN = 4
    HOLD = 5
    LOCK = 6
    ON = 7
    OFF = 8
    STRIKE = 9
    CALM = 10
    GO = 11
    ATTACK = 12
    POUR = 13
    EAT = 14
    DRINK = 15
    RUB = 16


@dataclass(frozen=True)
class TravelEdge:
    """One map record: any of ``keywords`` leads to ``destination``."""

    destination: int
    keywords: tuple[int, ...]

    def accepts(self, keyword: int) -> bool:
        return WILDCARD in self.keywords or keyword in self.keywords


@dataclass(frozen=True)
class Room:
    """A location in the cave."""

    number: int
    long_description: Text = ()
    short_description: Text = ()
    edges: tuple[TravelEdge, ...] = ()
    lighted: bool = False
    forced: bool = False


@dataclass(frozen=True)
class VocabularyEntry:
    """A word and the code it stands for."""

    word: str
    code: int

    @property
    def kind(self) -> WordKind:
        return WordKind(self.code // 1000)

    @property
    def value(self) -> int:
        """The motion keyword, object, verb, or message number."""
        return self.code % 1000


@dataclass(frozen=True)
class World:
    """The complete game world, loaded from advent.dat."""

    rooms: dict[int, Room] = field(default_factory=dict)
    # Object presence text by object number; number + 100 is the text
    # used once the object's property is set
    object_texts: dict[int, Text] = field(default_factory=dict)
    messages: dict[int, Text] = field(default_factory=dict)
    vocabulary: tuple[VocabularyEntry, ...] = ()

    def room(self, number: int) -> Room:
        return self.rooms[number]
