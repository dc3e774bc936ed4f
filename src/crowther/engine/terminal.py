"""The player's side of the conversation, and the PAUSE interaction."""

from enum import Enum

from ..logging import get_logger

logger = get_logger(__name__)

RESUME_PROMPT = "TO RESUME EXECUTION, TYPE: G\nTO TERMINATE THE PROGRAM, TYPE: X\n"


class PauseOutcome(Enum):
    RESUME = "G"
    TERMINATE = "X"


class Terminal:
    """Where input comes from and narration goes.

    Subclasses supply :meth:`read_line` and :meth:`write`. :meth:`arrived`
    is called with every room the game moves the player towards, before
    any dwarf gets a chance to block the way.
    """

    def read_line(self) -> str:
        raise NotImplementedError

    def write(self, text: str) -> None:
        raise NotImplementedError

    def arrived(self, room: int) -> None:
        pass


def pause(terminal: Terminal, message: str) -> PauseOutcome:
    """Show a PAUSE message and wait for G or X."""
    logger.info("pause_requested", message=message)
    terminal.write(f"PAUSE: {message}\n")
    while True:
        terminal.write(RESUME_PROMPT)
        answer = terminal.read_line().upper()
        if answer == PauseOutcome.RESUME.value:
            terminal.write("EXECUTION RESUMED\n\n")
            return PauseOutcome.RESUME
        if answer == PauseOutcome.TERMINATE.value:
            return PauseOutcome.TERMINATE
