"""Movement: following the map, and the pseudo-rooms that decide for it."""

from typing import TYPE_CHECKING

from ..logging import get_logger
from .errors import TransferOutOfRange
from .oracle import RandomSite
from .phases import Phase
from .state import FISSURE, GRATE, NUGGET, SNAKE
from .terminal import PauseOutcome
from .world import Keyword, PseudoRoom, Verb

if TYPE_CHECKING:
    from .game import Game

logger = get_logger(__name__)

# Message numbers
FELL_IN_PIT = 23
DONT_UNDERSTAND = 13
COMPASS_HINT = 14
NO_MORE_DETAIL = 15
NOT_ALLOWED_CAVE = 57
NOT_ALLOWED_CAVE_INSIDE = 58
CRAWLED_BACK = 56

DETAIL_LIMIT = 3
# Rooms below this are outside the cave
CAVE_ENTRANCE = 8

_NO_WAY = (Keyword.EAST, Keyword.WEST, Keyword.NORTH, Keyword.SOUTH, Keyword.UP, Keyword.DOWN)
_WHICH_WAY_FACING = (Keyword.FORWARD, Keyword.BACK, Keyword.LEFT, Keyword.RIGHT, Keyword.TURN)
_IN_OR_OUT = (Keyword.OUT, Keyword.IN)


def move(game: "Game") -> Phase:
    """Moving in the dark may end in a pit."""
    state = game.state
    if state.dark and game.roll(RandomSite.DARK_FALL) <= 0.25:
        game.speak(FELL_IN_PIT)
        logger.info("player_fell", room=state.room)
        if game.pause("GAME IS OVER") is PauseOutcome.TERMINATE:
            return Phase.TERMINATED
        return Phase.PROMPT
    return Phase.TRAVEL


def _failure_message(code: int, verb: int) -> int:
    message = 12
    if code in _NO_WAY:
        message = 9
    if code in _WHICH_WAY_FACING:
        message = 10
    if code in _IN_OR_OUT:
        message = 11
    if verb == Verb.TAKE:
        message = 59
    if code == Keyword.XYZZY:
        message = 42
    if code == Keyword.CRAWL:
        message = 80
    return message


def travel(game: "Game") -> Phase:
    """Resolve the keyword in :attr:`GameState.code` against the room's map."""
    state = game.state
    room = game.world.room(state.room)

    if not room.edges:
        game.speak(DONT_UNDERSTAND)
        state.destination = state.room
        if not state.first_turn:
            game.speak(COMPASS_HINT)
        return Phase.TRANSFER

    match state.code:
        case Keyword.LOOK:
            if state.detail_count < DETAIL_LIMIT:
                game.speak(NO_MORE_DETAIL)
            state.detail_count += 1
            state.destination = state.room
            state.visits[state.room] = 0
            return Phase.ARRIVE
        case Keyword.CAVE:
            if state.room < CAVE_ENTRANCE:
                game.speak(NOT_ALLOWED_CAVE)
            else:
                game.speak(NOT_ALLOWED_CAVE_INSIDE)
            state.destination = state.room
            return Phase.ARRIVE
        case Keyword.BACK:
            state.previous_room, state.destination = state.destination, state.previous_room
            return Phase.TRANSFER

    state.previous_room = state.destination
    for edge in room.edges:
        if edge.accepts(state.code):
            state.destination = edge.destination
            return Phase.TRANSFER

    game.speak(_failure_message(state.code, state.verb))
    return Phase.ARRIVE


def _crawl_back(game: "Game") -> int:
    game.speak(CRAWLED_BACK)
    return 65


def _out_of_range(destination: int, room: int) -> TransferOutOfRange:
    logger.error("transfer_out_of_range", destination=destination, room=room)
    return TransferOutOfRange(destination, room)


def transfer(game: "Game") -> Phase:
    """Turn a pseudo-room destination into a real room."""
    state = game.state
    destination = state.destination
    if destination < PseudoRoom.FOREST_FORK:
        return Phase.ARRIVE
    try:
        pseudo = PseudoRoom(destination)
    except ValueError:
        raise _out_of_range(destination, state.room) from None
    logger.debug("pseudo_room", pseudo=pseudo.name, room=state.room)

    props = state.props
    match pseudo:
        case PseudoRoom.FOREST_FORK:
            state.destination = 5 if game.roll(RandomSite.FOREST_FORK) > 0.5 else 6
        case PseudoRoom.GRATE_DOWN:
            state.destination = 9 if props[GRATE] else 23
        case PseudoRoom.GRATE_UP:
            state.destination = 8 if props[GRATE] else 9
        case PseudoRoom.PIT_DESCENT:
            # Carrying the nugget down leads to a room that never lets go
            state.destination = 20 if state.is_carried(NUGGET) else 15
        case PseudoRoom.MIST_ASCENT:
            state.destination = 22 if state.is_carried(NUGGET) else 14
        case PseudoRoom.FISSURE_LEAP:
            logger.info("player_leapt", room=state.room)
            if game.pause("GAME IS OVER") is PauseOutcome.TERMINATE:
                return Phase.TERMINATED
            logger.info("game_restarted")
            return Phase.SETUP
        case PseudoRoom.FISSURE_CROSSING:
            state.destination = 27 if props[FISSURE] else 31
        case PseudoRoom.KING_NORTH:
            state.destination = 28 if props[SNAKE] else 32
        case PseudoRoom.KING_SOUTH:
            state.destination = 29 if props[SNAKE] else 32
        case PseudoRoom.KING_WEST:
            state.destination = 30 if props[SNAKE] else 32
        case PseudoRoom.DEPRESSION:
            state.destination = 8 if props[GRATE] else 9
        case PseudoRoom.BEDQUILT_SOUTH:
            if game.roll(RandomSite.BEDQUILT_SOUTH) > 0.2:
                state.destination = _crawl_back(game)
            else:
                state.destination = 68
        case PseudoRoom.BEDQUILT_UP:
            if game.roll(RandomSite.BEDQUILT_UP) > 0.2:
                state.destination = _crawl_back(game)
            else:
                state.destination = 39
                if game.roll(RandomSite.BEDQUILT_UP_FORK) > 0.5:
                    state.destination = 70
        case PseudoRoom.SWISS_CHEESE_NORTH:
            state.destination = 66
            if game.roll(RandomSite.SWISS_CHEESE_NORTH) > 0.4:
                game.speak(CRAWLED_BACK)
            else:
                state.destination = 71
                if game.roll(RandomSite.SWISS_CHEESE_NORTH_FORK) > 0.25:
                    state.destination = 72
        case PseudoRoom.SWISS_CHEESE_SOUTH:
            if game.strict_transfers:
                raise _out_of_range(destination, state.room)
            state.destination = 66
            if game.roll(RandomSite.SWISS_CHEESE_SOUTH) > 0.2:
                game.speak(CRAWLED_BACK)
            else:
                state.destination = 77
    return Phase.ARRIVE
