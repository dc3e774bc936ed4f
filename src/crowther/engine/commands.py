"""Verb handlers.

:func:`act` runs the pending verb on the pending object; :func:`act_alone`
runs a verb typed on its own. Each handler returns the next phase, most
often PROMPT after a message.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..logging import get_logger
from .oracle import RandomSite
from .phases import Phase
from .state import (
    BIRD,
    CAGE,
    FISSURE,
    FOOD,
    GRATE,
    GRATE_BELOW,
    KEYS,
    KNIFE,
    LAMP,
    LIMBO,
    ROD,
    SNAKE,
    WATER,
)
from .words import BLANK
from .world import Keyword, Verb

if TYPE_CHECKING:
    from .game import Game

logger = get_logger(__name__)

# What a verb says when it cannot be done, before any handler changes it
DEFAULT_SPEECH = {
    Verb.TAKE: 24,
    Verb.DROP: 29,
    Verb.DUMMY: 0,
    Verb.OPEN: 31,
    Verb.HOLD: 0,
    Verb.LOCK: 31,
    Verb.ON: 38,
    Verb.OFF: 38,
    Verb.STRIKE: 42,
    Verb.CALM: 42,
    Verb.GO: 43,
    Verb.ATTACK: 46,
    Verb.POUR: 77,
    Verb.EAT: 71,
    Verb.DRINK: 73,
    Verb.RUB: 75,
}

OK = 54
SNAKE_DRIVEN_OFF = 30
GRATE_ROOMS = (8, 9)


def _ok(game: "Game") -> Phase:
    game.speak(OK)
    return Phase.PROMPT


def _say(game: "Game", message: int) -> Phase:
    game.speak(message)
    return Phase.PROMPT


def _refuse(game: "Game") -> Phase:
    """Speak the verb's current message."""
    return _say(game, game.state.speech)


def what(game: "Game") -> Phase:
    """Ask for the missing object, keeping the verb pending."""
    state = game.state
    if state.tail != BLANK:
        game.say(f" {state.word}{state.tail} WHAT?\n")
    else:
        game.say(f"  {state.word} WHAT?\n")
    return Phase.LISTEN


def _take(game: "Game") -> Phase:
    state = game.state
    obj = state.obj
    if obj == KNIFE:
        return _ok(game)
    if state.places[obj] != state.room:
        return _refuse(game)
    if obj in state.fixed:
        return _say(game, 25)
    if obj == BIRD:
        if state.is_carried(ROD):
            return _say(game, 26)
        if not state.is_here(CAGE):
            return _say(game, 27)
    state.carry(obj)
    logger.debug("object_taken", obj=obj, room=state.room)
    return _ok(game)


def _drop(game: "Game") -> Phase:
    state = game.state
    obj = state.obj
    if obj == KNIFE:
        return _ok(game)
    if not state.is_carried(obj):
        return _refuse(game)
    if obj == BIRD and state.room == 19 and state.props[SNAKE] != 1:
        game.speak(SNAKE_DRIVEN_OFF)
        state.props[SNAKE] = 1
    else:
        game.speak(OK)
    state.put(obj, state.room)
    logger.debug("object_dropped", obj=obj, room=state.room)
    return Phase.PROMPT


def _dummy(game: "Game") -> Phase:
    return Phase.CONFUSED


def _lock(game: "Game") -> Phase:
    """OPEN and LOCK: only the grate has a lock."""
    state = game.state
    if not state.is_here(KEYS):
        return _refuse(game)
    if state.obj == CAGE:
        return _say(game, 32)
    if state.obj == KEYS:
        return _say(game, 55)
    if state.obj != GRATE:
        return _say(game, 33)

    if state.verb == Verb.OPEN:
        if state.props[GRATE]:
            return _say(game, 36)
        state.props[GRATE] = state.props[GRATE_BELOW] = 1
        logger.info("grate_unlocked", room=state.room)
        return _say(game, 37)
    if state.props[GRATE]:
        state.props[GRATE] = state.props[GRATE_BELOW] = 0
        logger.info("grate_locked", room=state.room)
        return _say(game, 35)
    return _say(game, 34)


def _hold(game: "Game") -> Phase:
    return _ok(game)


def _lamp_on(game: "Game") -> Phase:
    state = game.state
    if not state.is_here(LAMP):
        return _refuse(game)
    state.props[LAMP] = 1
    state.dark = False
    return _say(game, 39)


def _lamp_off(game: "Game") -> Phase:
    state = game.state
    if not state.is_here(LAMP):
        return _refuse(game)
    state.props[LAMP] = 0
    return _say(game, 40)


def _strike(game: "Game") -> Phase:
    state = game.state
    if state.obj != FISSURE:
        return _refuse(game)
    # The crystal bridge appears with the room's objects
    state.props[FISSURE] = 1
    return Phase.LIST_OBJECTS


def _attack(game: "Game") -> Phase:
    state = game.state
    for dwarf in state.dwarves:
        if not dwarf.seen:
            continue
        if game.roll(RandomSite.DWARF_DODGE) > 0.4:
            game.speak(48)
        else:
            dwarf.room = dwarf.previous_room = 0
            dwarf.seen = False
            logger.info("dwarf_killed", room=state.room)
            game.speak(47)
        # The fight ends the turn as a move that goes nowhere
        state.code = Keyword.NULL
        return Phase.MOVE

    if state.obj == 0:
        return what(game)
    if state.obj == SNAKE:
        return _refuse(game)
    if state.obj == BIRD:
        game.speak(45)
        state.places[BIRD] = LIMBO
        state.remove(BIRD)
        return _ok(game)
    return _say(game, 44)


def _pour(game: "Game") -> Phase:
    state = game.state
    if state.obj != WATER:
        state.speech = 78
    state.props[WATER] = 1
    return _refuse(game)


def _consume(game: "Game", obj: int, message: int) -> Phase:
    state = game.state
    if state.is_here(obj) and state.props[obj] == 0 and state.obj == obj:
        state.props[obj] = 1
        state.speech = message
    return _refuse(game)


def _eat(game: "Game") -> Phase:
    return _consume(game, FOOD, 72)


def _drink(game: "Game") -> Phase:
    return _consume(game, WATER, 74)


def _rub(game: "Game") -> Phase:
    if game.state.obj != LAMP:
        game.state.speech = 76
    return _refuse(game)


_VERB_HANDLERS: dict[Verb, Callable[["Game"], Phase]] = {
    Verb.TAKE: _take,
    Verb.DROP: _drop,
    Verb.DUMMY: _dummy,
    Verb.OPEN: _lock,
    Verb.HOLD: _hold,
    Verb.LOCK: _lock,
    Verb.ON: _lamp_on,
    Verb.OFF: _lamp_off,
    Verb.STRIKE: _strike,
    Verb.CALM: _refuse,
    Verb.GO: _refuse,
    Verb.ATTACK: _attack,
    Verb.POUR: _pour,
    Verb.EAT: _eat,
    Verb.DRINK: _drink,
    Verb.RUB: _rub,
}


def act(game: "Game") -> Phase:
    """Carry out the pending verb on the pending object."""
    return _VERB_HANDLERS[Verb(game.state.verb)](game)


def _take_only_object(game: "Game") -> Phase:
    state = game.state
    objects = state.objects_at(state.room)
    if len(objects) != 1 or any(dwarf.seen for dwarf in state.dwarves):
        return what(game)
    state.obj = objects[0]
    return act(game)


def _lock_alone(game: "Game") -> Phase:
    state = game.state
    if state.room not in GRATE_ROOMS:
        return _say(game, 28)
    state.obj = GRATE
    return act(game)


def act_alone(game: "Game") -> Phase:
    """Carry out a verb typed without an object."""
    match Verb(game.state.verb):
        case Verb.TAKE:
            return _take_only_object(game)
        case Verb.OPEN | Verb.LOCK:
            return _lock_alone(game)
        case Verb.HOLD:
            return _ok(game)
        case Verb.ON:
            return _lamp_on(game)
        case Verb.OFF:
            return _lamp_off(game)
        case Verb.GO:
            return _refuse(game)
        case Verb.ATTACK:
            return _attack(game)
        case (
            Verb.DROP | Verb.DUMMY | Verb.STRIKE | Verb.CALM
            | Verb.POUR | Verb.EAT | Verb.DRINK | Verb.RUB
        ):
            return what(game)
