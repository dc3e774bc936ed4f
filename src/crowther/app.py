"""Game factory for Crowther's Adventure."""

from functools import partial
from importlib import resources
from pathlib import Path

from .config import Config
from .console import ConsoleTerminal
from .engine.game import Game
from .engine.loader import load_world
from .engine.oracle import SeededOracle
from .engine.terminal import Terminal, pause
from .logging import get_logger

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate advent.dat via importlib.resources (works when installed in a venv)."""
    return resources.files("crowther.data").joinpath("advent.dat")


def create_game(config: Config | None = None, terminal: Terminal | None = None) -> Game:
    """Load the world and set up a game that talks to ``terminal``.

    A table overflow while loading pauses on the same terminal the game
    will use.
    """
    config = config or Config.from_env()
    terminal = terminal or ConsoleTerminal()

    data_path = config.data_file or _get_data_path()
    logger.debug("loading_world", data_file=str(data_path))
    world = load_world(data_path, pause=partial(pause, terminal))

    return Game(
        world,
        terminal,
        SeededOracle(config.seed),
        strict_transfers=config.strict_transfers,
    )
