"""The terminal on stdin and stdout."""

import sys
from typing import BinaryIO, TextIO

from .engine.errors import EndOfInput
from .engine.terminal import Terminal

# Printed once, before the game's first PAUSE
BANNER = "Will Crowther's Colossal Cave Adventure (77-03-31)\nTo quit hit Ctrl-C\n\n"


class ConsoleTerminal(Terminal):
    """Reads commands a line at a time and writes narration as it comes.

    Input is read as bytes, one character per byte; the word codec keeps
    the low seven bits of each, so no input can fail to decode.
    """

    def __init__(self, stdin: BinaryIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin.buffer
        self.stdout = stdout or sys.stdout

    def read_line(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EndOfInput("no more input")
        return line.decode("latin-1").rstrip("\r\n")

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()
