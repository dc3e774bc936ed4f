"""The turn engine: one game, advanced a phase at a time.

Each phase handler takes the :class:`Game`, does its work, and returns
the phase to run next. The handlers for movement, dwarves, and verbs
live in their own modules; this one holds the loop and the phases that
describe the room and read the player's words.
"""

from collections.abc import Callable

from ..logging import get_logger
from . import commands, dwarves, travel
from .oracle import RandomOracle, RandomSite
from .parser import Command, parse
from .phases import Phase
from .state import (
    BIRD,
    GRATE,
    LAMP,
    NUGGET,
    ROD,
    SNAKE,
    START_ROOM,
    STEPS,
    STEPS_BELOW,
    GameState,
    new_game_state,
    reset_placements,
)
from .terminal import PauseOutcome, Terminal, pause
from .vocabulary import resolve
from .words import BLANK, encode
from .world import Keyword, Text, Verb, WordKind, World

logger = get_logger(__name__)

ENTER = encode("ENTER")
STREAM = encode("STREA")
WATER = encode("WATER")
WEST = encode("WEST")
NO = encode("NO")
N = encode("N")

# Rooms above the grate, and the grate-side rooms below it
_DEPRESSION_APPROACHES = (1, 4, 7)
_BELOW_GRATE = range(10, 15)

# Message numbers
OK = 54
HOW_TO_PLAY = 65
WELCOME = 1
WATER_STREAM = 70
WEST_HINT = 17
PLUGH_VOICE = 8
TOO_DARK = 16
DONT_KNOW = 60
WHAT = 61
DONT_UNDERSTAND = 13
TROUBLE_ANSWERS = {
    # room: (question, answer on yes)
    13: (18, 19),
    19: (20, 21),
    8: (62, 63),
}
ROD_HINT = 22


class Game:
    """A single running game.

    ``oracle`` supplies every random number, so a test can script them.
    With ``strict_transfers`` the one map destination that has no
    handler is an error instead of being routed to its neighbour's.
    """

    def __init__(
        self,
        world: World,
        terminal: Terminal,
        oracle: RandomOracle,
        *,
        strict_transfers: bool = False,
        state: GameState | None = None,
    ):
        self.world = world
        self.terminal = terminal
        self.oracle = oracle
        self.strict_transfers = strict_transfers
        self.state = state if state is not None else new_game_state()
        self.phase = Phase.SETUP

    # -- output ------------------------------------------------------------

    def say(self, text: str) -> None:
        self.terminal.write(text)

    def show(self, text: Text) -> None:
        """Write each line of ``text``, then a blank line; nothing if empty."""
        if text:
            self.terminal.write("".join(line + "\n" for line in text) + "\n")

    def speak(self, number: int) -> None:
        self.show(self.world.messages.get(number, ()))

    # -- input -------------------------------------------------------------

    def read(self) -> Command:
        return parse(self.terminal.read_line())

    def roll(self, site: RandomSite) -> float:
        return self.oracle(site)

    def pause(self, message: str) -> PauseOutcome:
        return pause(self.terminal, message)

    def ask(self, question: int, yes_message: int, no_message: int) -> bool:
        """Ask a yes/no question; anything but NO or N counts as yes."""
        self.speak(question)
        answer = self.read().first_word
        if answer in (NO, N):
            if no_message:
                self.speak(no_message)
            return False
        if yes_message:
            self.speak(yes_message)
        return True

    # -- loop --------------------------------------------------------------

    def step(self) -> Phase:
        """Run the current phase and move on to the next one."""
        self.phase = _HANDLERS[self.phase](self)
        return self.phase

    def run(self) -> None:
        """Play until the player terminates at a PAUSE."""
        while self.phase is not Phase.TERMINATED:
            self.step()
        logger.info("game_terminated", room=self.state.room)


def _setup(game: Game) -> Phase:
    state = game.state
    reset_placements(state)
    if game.pause("INIT DONE") is PauseOutcome.TERMINATE:
        return Phase.TERMINATED
    game.ask(HOW_TO_PLAY, WELCOME, 0)
    state.room = state.destination = START_ROOM
    logger.info("game_started")
    return Phase.ARRIVE


def _arrive(game: Game) -> Phase:
    state = game.state
    game.terminal.arrived(state.destination)
    logger.debug("room_entered", room=state.destination, previous=state.room)
    # A dwarf standing where the player came from bars the way back
    for dwarf in state.dwarves:
        if dwarf.seen and dwarf.previous_room == state.destination:
            state.destination = state.room
            game.speak(dwarves.DWARF_BLOCKS)
            break
    state.room = state.destination
    return Phase.DWARVES


def _describe(game: Game) -> Phase:
    state = game.state
    room = game.world.room(state.room)
    text = room.short_description
    if state.visits.get(room.number, 0) == 0 or not text:
        text = room.long_description
    game.show(text)
    if room.forced:
        return Phase.TRAVEL
    if room.number == 33 and game.roll(RandomSite.PLUGH_VOICE) < 0.25:
        game.speak(PLUGH_VOICE)
    return Phase.SETTLE


def _settle(game: Game) -> Phase:
    state = game.state
    room = game.world.room(state.room)
    state.trouble = 0
    state.visits[room.number] = (state.visits.get(room.number, 0) + 1) % 5
    state.dark = not (room.lighted or (state.is_here(LAMP) and state.props[LAMP] == 1))
    if state.dark:
        game.speak(TOO_DARK)
    return Phase.LIST_OBJECTS


def _list_objects(game: Game) -> Phase:
    state = game.state
    for obj in state.objects_at(state.room):
        if obj in (STEPS, STEPS_BELOW) and state.is_carried(NUGGET):
            continue
        key = obj + 100 if state.props[obj] else obj
        game.show(game.world.object_texts.get(key, ()))
    return Phase.PROMPT


def _prompt(game: Game) -> Phase:
    state = game.state
    state.verb = 0
    state.obj = 0
    state.two_words = False
    return Phase.LISTEN


def _listen(game: Game) -> Phase:
    state = game.state
    command = game.read()
    state.two_words = command.multi_word
    state.word = command.first_word
    # A one-word line keeps the second word of the line before it
    if command.second_word is not None:
        state.second_word = command.second_word
    state.tail = command.tail_word

    if state.word == ENTER and state.second_word in (STREAM, WATER):
        game.speak(WATER_STREAM)
        return Phase.PROMPT
    if state.word == ENTER and state.two_words:
        state.word = state.second_word
        state.tail = BLANK
        state.two_words = False
    if state.word == WEST:
        state.west_count += 1
        if state.west_count == 10:
            game.speak(WEST_HINT)
    return Phase.LOOKUP


def _lookup(game: Game) -> Phase:
    state = game.state
    entry = resolve(game.world, state.word)
    if entry is None:
        return Phase.CONFUSED
    state.code = entry.value
    match entry.kind:
        case WordKind.MOTION:
            return Phase.MOVE
        case WordKind.OBJECT:
            return Phase.NOUN
        case WordKind.VERB:
            return Phase.VERB
        case WordKind.ADVICE:
            game.speak(entry.value)
            return Phase.PROMPT


def _next_word(game: Game) -> Phase:
    state = game.state
    state.word = state.second_word
    state.tail = BLANK
    state.two_words = False
    return Phase.LOOKUP


def _verb(game: Game) -> Phase:
    state = game.state
    state.verb = state.code
    state.speech = commands.DEFAULT_SPEECH[Verb(state.verb)]
    if state.two_words:
        return Phase.NEXT_WORD
    if state.obj:
        return Phase.ACT
    return Phase.ACT_ALONE


def _noun(game: Game) -> Phase:
    state = game.state
    state.obj = state.code
    if state.two_words:
        return Phase.NEXT_WORD
    if state.is_here(state.obj):
        if state.verb:
            return Phase.ACT
        game.say(f" WHAT DO YOU WANT TO DO WITH THE {state.spoken_word()}?\n")
        return Phase.LISTEN
    # Naming the grate from nearby walks to it
    if state.obj == GRATE:
        if state.room in _DEPRESSION_APPROACHES:
            state.code = Keyword.DEPRESSION
            return Phase.MOVE
        if state.room in _BELOW_GRATE:
            state.code = Keyword.ENTRANCE
            return Phase.MOVE
    game.say(f" I SEE NO {state.spoken_word()} HERE.\n")
    return Phase.PROMPT


def _confused(game: Game) -> Phase:
    state = game.state
    state.speech = DONT_KNOW
    if game.roll(RandomSite.UNKNOWN_WORD) > 0.8:
        state.speech = WHAT
    if game.roll(RandomSite.UNKNOWN_WORD_SHRUG) > 0.8:
        state.speech = DONT_UNDERSTAND
    game.speak(state.speech)
    state.trouble += 1
    if state.trouble != 3:
        return Phase.LISTEN

    logger.debug("player_confused", room=state.room, word=state.word)
    room = state.room
    stuck = (
        (room == 13 and state.places[BIRD] == 13 and state.is_carried(ROD))
        or (room == 19 and state.props[SNAKE] == 0 and not state.is_carried(BIRD))
        or (room == 8 and state.props[GRATE] == 0)
    )
    if stuck:
        question, answer = TROUBLE_ANSWERS[room]
        if game.ask(question, answer, OK):
            return Phase.LISTEN
        return Phase.PROMPT
    if state.is_here(ROD) and state.obj == ROD:
        game.speak(ROD_HINT)
    return Phase.LISTEN


_HANDLERS: dict[Phase, Callable[[Game], Phase]] = {
    Phase.SETUP: _setup,
    Phase.ARRIVE: _arrive,
    Phase.DWARVES: dwarves.dwarf_phase,
    Phase.DESCRIBE: _describe,
    Phase.SETTLE: _settle,
    Phase.LIST_OBJECTS: _list_objects,
    Phase.PROMPT: _prompt,
    Phase.LISTEN: _listen,
    Phase.LOOKUP: _lookup,
    Phase.NEXT_WORD: _next_word,
    Phase.VERB: _verb,
    Phase.NOUN: _noun,
    Phase.ACT: commands.act,
    Phase.ACT_ALONE: commands.act_alone,
    Phase.CONFUSED: _confused,
    Phase.MOVE: travel.move,
    Phase.TRAVEL: travel.travel,
    Phase.TRANSFER: travel.transfer,
}
