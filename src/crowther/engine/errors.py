"""Exceptions raised by the interpreter."""


class AdventureError(Exception):
    """Base class for every interpreter failure."""


class TooLong(AdventureError, ValueError):
    """More than five characters were given to the single-word encoder."""

    def __init__(self, text: str):
        super().__init__(f"more than 5 characters: {text!r}")
        self.text = text


class WorldDataError(AdventureError):
    """The world-data feed is malformed or overflows a table."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class TransferOutOfRange(AdventureError):
    """Movement resolved to a destination with no room and no handler."""

    def __init__(self, destination: int, room: int):
        super().__init__(f"transfer to {destination} from room {room} is out of range")
        self.destination = destination
        self.room = room


class EndOfInput(AdventureError):
    """The input source has no more lines."""


class Terminated(AdventureError):
    """The player answered X at a PAUSE raised outside the turn loop."""
