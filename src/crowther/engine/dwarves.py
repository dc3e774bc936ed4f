"""The dwarves: dormant until the player reaches the Hall of Mists.

Once awake, each turn walks three dwarves along a fixed route. A dwarf
that meets the player follows them around the deeper cave and throws a
knife when it was already in the room the turn before.
"""

from typing import TYPE_CHECKING

from ..logging import get_logger
from .oracle import RandomSite
from .phases import Phase
from .state import AXE, NOWHERE, Dwarf
from .terminal import PauseOutcome

if TYPE_CHECKING:
    from .game import Game

logger = get_logger(__name__)

# Entering this room wakes the dwarves
WAKE_ROOM = 15
# Dwarves stop following the player at or above these rooms
FOLLOW_ABOVE = 14

# Route stops 1-15, shared by all three dwarves at different offsets
ROUTE = (36, 28, 19, 30, 62, 60, 41, 27, 17, 15, 19, 28, 36, 300, 300)

# Message numbers
DWARF_BLOCKS = 2
DWARVES_ARMED = 3
ONE_DWARF = 4
KNIFE_THROWN = 5
ONE_OF_MANY_HITS = 6
ALL_MISS = 7
MISSED = 52


def route_stop(stop: int) -> int:
    """Room for a route position; off either end of the route is nowhere."""
    if 1 <= stop <= len(ROUTE):
        return ROUTE[stop - 1]
    return NOWHERE


def dwarf_phase(game: "Game") -> Phase:
    state = game.state
    if state.dwarf_stage == 0:
        if state.room == WAKE_ROOM:
            state.dwarf_stage = 1
        return Phase.DESCRIBE
    if state.dwarf_stage == 1:
        if game.roll(RandomSite.DWARVES_WAKE) > 0.05:
            return Phase.DESCRIBE
        state.dwarf_stage = 2
        state.dwarves = [Dwarf() for _ in state.dwarves]
        game.speak(DWARVES_ARMED)
        state.put(AXE, state.room)
        logger.info("dwarves_armed", room=state.room)
        return Phase.DESCRIBE

    state.dwarf_stage += 1
    present = attacks = hits = 0
    for slot, dwarf in enumerate(state.dwarves, start=1):
        stop = 2 * slot + state.dwarf_stage
        if stop < 8:
            continue
        if stop > 23 and not dwarf.seen:
            continue
        dwarf.previous_room = dwarf.room
        if not (dwarf.seen and state.room > FOLLOW_ABOVE):
            dwarf.room = route_stop(stop - 8)
            dwarf.seen = False
            if state.room not in (dwarf.room, dwarf.previous_room):
                continue
        dwarf.seen = True
        dwarf.room = state.room
        present += 1
        if dwarf.previous_room != dwarf.room:
            continue
        attacks += 1
        if game.roll(RandomSite.KNIFE_THROW) < 0.1:
            hits += 1
    return _report(game, present, attacks, hits)


def _report(game: "Game", present: int, attacks: int, hits: int) -> Phase:
    if present == 0:
        return Phase.DESCRIBE
    if present == 1:
        game.speak(ONE_DWARF)
    else:
        game.say(f"THERE ARE {present} THREATENING LITTLE DWARVES IN THE ROOM WITH YOU.\n")
    if attacks == 0:
        return Phase.DESCRIBE
    logger.info("dwarf_attack", room=game.state.room, attacks=attacks, hits=hits)

    if attacks == 1:
        game.speak(KNIFE_THROWN)
        game.speak(MISSED + hits)
        if hits == 0:
            return Phase.DESCRIBE
    else:
        game.say(f" {attacks} OF THEM THROW KNIVES AT YOU!\n")
        if hits == 0:
            game.speak(ALL_MISS)
            return Phase.DESCRIBE
        if hits == 1:
            game.speak(ONE_OF_MANY_HITS)
        else:
            game.say(f" {hits} OF THEM GET YOU.\n")

    if game.pause("GAMES OVER") is PauseOutcome.TERMINATE:
        return Phase.TERMINATED
    return Phase.DESCRIBE
