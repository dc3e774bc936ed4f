"""Mutable per-game state.

One GameState belongs to one running game. Object places use the
original encoding: a room number, :data:`CARRIED`, or :data:`NOWHERE`.
"""

from dataclasses import dataclass, field

from .words import BLANK
from .world import OBJECT_LIMIT

# Special object places
CARRIED = -1
NOWHERE = 0
# Where a killed bird goes
LIMBO = 300

# Starting room
START_ROOM = 1
# Previous room before the player has ever moved
NEVER_MOVED = 9999

# Object numbers
KEYS = 1
LAMP = 2
GRATE = 3
CAGE = 4
ROD = 5
STEPS = 6
BIRD = 7
GRATE_BELOW = 8
STEPS_BELOW = 9
NUGGET = 10
SNAKE = 11
FISSURE = 12
DIAMONDS = 13
SILVER = 14
JEWELS = 15
COINS = 16
DWARF = 17
KNIFE = 18
FOOD = 19
WATER = 20
AXE = 21

# Where each object starts; objects not listed start nowhere
INITIAL_PLACES = {
    KEYS: 3,
    LAMP: 3,
    GRATE: 8,
    CAGE: 10,
    ROD: 11,
    STEPS: 14,
    BIRD: 13,
    GRATE_BELOW: 9,
    STEPS_BELOW: 15,
    NUGGET: 18,
    SNAKE: 19,
    FISSURE: 17,
    DIAMONDS: 27,
    SILVER: 28,
    JEWELS: 29,
    COINS: 30,
    FOOD: 3,
    WATER: 3,
}

FIXED_OBJECTS = frozenset({GRATE, STEPS, GRATE_BELOW, STEPS_BELOW, SNAKE, FISSURE})

DWARF_COUNT = 3


@dataclass
class Dwarf:
    room: int = 0
    previous_room: int = 0
    seen: bool = False


@dataclass
class GameState:
    """Everything a game changes as it runs."""

    # Where the player is, and where the current move is taking them
    room: int = START_ROOM
    destination: int = START_ROOM
    previous_room: int = NEVER_MOVED

    # Object id → place
    places: dict[int, int] = field(default_factory=dict)
    fixed: set[int] = field(default_factory=set)
    # Object id → property (0 for every object at the start)
    props: dict[int, int] = field(
        default_factory=lambda: dict.fromkeys(range(1, OBJECT_LIMIT + 1), 0)
    )
    # Room → objects lying there, most recently dropped first
    room_objects: dict[int, list[int]] = field(default_factory=dict)

    # Room → visits mod 5; the long description shows at 0
    visits: dict[int, int] = field(default_factory=dict)

    dark: bool = False
    west_count: int = 0
    detail_count: int = 0
    # Never cleared once set
    first_turn: bool = True
    trouble: int = 0

    # 0 dormant, 1 armed, then a counter driving the dwarf routes
    dwarf_stage: int = 0
    dwarves: list[Dwarf] = field(
        default_factory=lambda: [Dwarf() for _ in range(DWARF_COUNT)]
    )

    # Command in progress; verb and object survive a re-read of input
    verb: int = 0
    obj: int = 0
    # Value of the last word looked up: motion keyword, object or verb
    code: int = 0
    speech: int = 0
    word: str = BLANK
    second_word: str = BLANK
    tail: str = BLANK
    two_words: bool = False

    def spoken_word(self) -> str:
        """The current word as typed, with its tail when there is one."""
        if self.tail != BLANK:
            return self.word + self.tail
        return self.word

    def objects_at(self, room: int) -> list[int]:
        return self.room_objects.setdefault(room, [])

    def is_here(self, obj: int) -> bool:
        """Whether ``obj`` lies in the player's room or is carried."""
        return self.places.get(obj, NOWHERE) in (self.room, CARRIED)

    def is_carried(self, obj: int) -> bool:
        return self.places.get(obj, NOWHERE) == CARRIED

    def carry(self, obj: int) -> None:
        """Pick ``obj`` up from the player's room."""
        self.places[obj] = CARRIED
        self.remove(obj)

    def remove(self, obj: int) -> None:
        """Take ``obj`` out of the player's room's chain, if it is there."""
        objects = self.objects_at(self.room)
        if obj in objects:
            objects.remove(obj)

    def put(self, obj: int, room: int) -> None:
        """Place ``obj`` at the head of ``room``'s chain."""
        self.objects_at(room).insert(0, obj)
        self.places[obj] = room


def reset_placements(state: GameState) -> None:
    """Lay the objects out for a new game and clear the per-game counters.

    Properties, dwarf slots and the previous room are left as they are,
    so a restart after a fatal leap keeps an unlocked grate unlocked.
    """
    state.places = {obj: INITIAL_PLACES.get(obj, NOWHERE) for obj in range(1, OBJECT_LIMIT + 1)}
    state.fixed = set(FIXED_OBJECTS)
    state.room_objects = {}
    for obj, place in state.places.items():
        if place != NOWHERE:
            state.objects_at(place).append(obj)
    state.visits = {}
    state.dwarf_stage = 0
    state.first_turn = True
    state.west_count = 0
    state.detail_count = 0


def new_game_state() -> GameState:
    """Create a fresh state with every object in its starting place."""
    state = GameState()
    reset_placements(state)
    return state
