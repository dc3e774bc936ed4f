"""Shared test fixtures for Crowther's Adventure."""

from collections import deque
from collections.abc import Callable, Iterable

import pytest

from crowther.app import _get_data_path
from crowther.engine.errors import EndOfInput
from crowther.engine.game import Game
from crowther.engine.loader import load_world
from crowther.engine.oracle import RandomSite
from crowther.engine.phases import Phase
from crowther.engine.terminal import Terminal
from crowther.engine.world import World

STOP = "<stop>"

# (command, room the command should lead to, random value it should use);
# a row with an empty command adds to the row above it
Row = tuple[str, int, float]


class ScriptFinished(Exception):
    """The script reached its stop row."""


class ScriptedTerminal(Terminal):
    """Replays a script, checking every arrival and serving every roll."""

    def __init__(self, rows: list[Row]):
        self.rows = rows
        self.index = 0
        self.expected_rooms: deque[int] = deque()
        self.randoms: deque[float] = deque()
        self.arrivals: list[int] = []
        self.output: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self.output)

    def read_line(self) -> str:
        assert not self.expected_rooms, f"never reached {list(self.expected_rooms)}"
        assert not self.randoms, f"unused random values {list(self.randoms)}"
        line, room, value = self.rows[self.index]
        if line == STOP:
            raise ScriptFinished
        while True:
            if room:
                self.expected_rooms.append(room)
            if value >= 0:
                self.randoms.append(value)
            self.index += 1
            command, room, value = self.rows[self.index]
            if command:
                return line

    def write(self, text: str) -> None:
        self.output.append(text)

    def arrived(self, room: int) -> None:
        if not self.expected_rooms and self.rows[self.index][0] == STOP:
            raise ScriptFinished
        assert self.expected_rooms, f"unexpected arrival at {room}"
        assert room == self.expected_rooms.popleft()
        self.arrivals.append(room)

    def roll(self, site: RandomSite) -> float:
        assert self.randoms, f"unscripted roll at {site.name}"
        return self.randoms.popleft()


class LineTerminal(Terminal):
    """Feeds fixed lines, then runs out."""

    def __init__(self, lines: Iterable[str]):
        self.lines = deque(lines)
        self.output: list[str] = []
        self.arrivals: list[int] = []

    @property
    def text(self) -> str:
        return "".join(self.output)

    def read_line(self) -> str:
        if not self.lines:
            raise EndOfInput("script exhausted")
        return self.lines.popleft()

    def write(self, text: str) -> None:
        self.output.append(text)

    def arrived(self, room: int) -> None:
        self.arrivals.append(room)


@pytest.fixture(scope="session")
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def play(world: World) -> Callable[..., ScriptedTerminal]:
    """Run a script from the first PAUSE to its stop row."""

    def _play(rows: list[Row], strict_transfers: bool = False) -> ScriptedTerminal:
        terminal = ScriptedTerminal(rows)
        game = Game(world, terminal, terminal.roll, strict_transfers=strict_transfers)
        with pytest.raises(ScriptFinished):
            game.run()
        return terminal

    return _play


@pytest.fixture
def new_game(world: World) -> Callable[..., Game]:
    """A game already set up in ``room``, about to arrive there.

    Every roll returns ``random``; the default wakes no dwarf, trips no
    one in the dark and picks the plainest message.
    """

    def _new_game(lines: Iterable[str], room: int = 1, random: float = 0.5) -> Game:
        terminal = LineTerminal(lines)
        game = Game(world, terminal, lambda site: random)
        game.state.room = game.state.destination = room
        game.phase = Phase.ARRIVE
        return game

    return _new_game


@pytest.fixture
def play_out() -> Callable[[Game], str]:
    """Run a game until its input is used up; return what it wrote."""

    def _play_out(game: Game) -> str:
        with pytest.raises(EndOfInput):
            game.run()
        return game.terminal.text

    return _play_out
