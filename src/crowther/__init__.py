"""Will Crowther's 1977 Colossal Cave Adventure."""

import sys

import structlog

from .app import create_game
from .config import Config
from .console import BANNER, ConsoleTerminal
from .engine.errors import AdventureError, EndOfInput, Terminated
from .logging import configure_logging, get_logger

__all__ = ["main", "create_game", "Config"]


def main() -> None:
    """Entry point for the adventure console."""
    config = Config.from_env()

    configure_logging(config)
    if config.seed is not None:
        structlog.contextvars.bind_contextvars(seed=config.seed)

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        data_file=str(config.data_file) if config.data_file else None,
        strict_transfers=config.strict_transfers,
        log_level=config.log_level,
    )

    terminal = ConsoleTerminal()
    terminal.write(BANNER)
    try:
        game = create_game(config, terminal)
        game.run()
    except KeyboardInterrupt:
        logger.info("interrupted")
        sys.exit(130)
    except EndOfInput:
        logger.info("input_exhausted")
        sys.exit(1)
    except Terminated:
        pass
    except AdventureError as exc:
        logger.error("fatal_error", error=str(exc))
        print(f"exception: {exc}", file=sys.stderr)
        sys.exit(1)

    # Terminating at a PAUSE is the only way a game ends
    terminal.write("EXECUTION TERMINATED.\n")
    sys.exit(1)
