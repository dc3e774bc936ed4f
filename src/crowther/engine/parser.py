"""Turn one line of player input into a two-word command.

Input is read as four five-character windows (twenty characters; the rest
of the line is ignored) with a fifth blank window after them. The first
word is everything before the first space, cut to five characters. The
second word is the five characters starting at the first non-space that
follows a space, so it may run into whatever comes after it. The tail is
always characters 6-10 of the input.

    >>> parse("WHO ARE YOU")
    Command(multi_word=True, first_word='WHO  ', second_word='ARE Y', tail_word='RE YO')
"""

from dataclasses import dataclass

from .words import BLANK, WORD_LENGTH, chunk

WINDOWS = 4


@dataclass(frozen=True)
class Command:
    """The parsed form of one input line.

    ``second_word`` is ``None`` when only one word was typed.
    """

    multi_word: bool
    first_word: str
    second_word: str | None
    tail_word: str


def parse(line: str) -> Command:
    """Tokenize a raw input line."""
    windows = chunk(line)[:WINDOWS]
    windows += [BLANK] * (WINDOWS + 1 - len(windows))
    text = "".join(windows)

    first = windows[0]
    second = None
    seen_space = False
    for position in range(WINDOWS * WORD_LENGTH):
        if text[position] == " ":
            if not seen_space:
                seen_space = True
                if position < WORD_LENGTH:
                    first = text[:position].ljust(WORD_LENGTH)
            continue
        if seen_space:
            second = text[position : position + WORD_LENGTH]
            break

    return Command(
        multi_word=second is not None,
        first_word=first,
        second_word=second,
        tail_word=windows[1],
    )
