"""Five-character words, the unit of both vocabulary and stored narration.

The original packed five 7-bit characters into one machine word. Here a
word is a plain ``str`` of exactly :data:`WORD_LENGTH` characters: 7-bit,
upper-cased, right-padded with spaces.
"""

from .errors import TooLong

WORD_LENGTH = 5
BLANK = " " * WORD_LENGTH

_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")


def upper(text: str) -> str:
    """Upper-case ASCII letters only; everything else passes through."""
    return text.translate(_UPPER)


def encode(text: str) -> str:
    """Pack up to five characters into a word."""
    if len(text) > WORD_LENGTH:
        raise TooLong(text)
    return "".join(chr(ord(ch) & 0x7F) for ch in upper(text)).ljust(WORD_LENGTH)


def decode(word: str) -> str:
    """Return the display form of a word, exactly five characters."""
    return encode(word)


def chunk(text: str) -> list[str]:
    """Split text into consecutive words; the last one is padded."""
    return [encode(text[i : i + WORD_LENGTH]) for i in range(0, len(text), WORD_LENGTH)]
