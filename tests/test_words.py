"""Tests for five-character words."""

import pytest

from crowther.engine.errors import TooLong
from crowther.engine.words import BLANK, chunk, decode, encode, upper


def test_encode_pads_and_upper_cases():
    """Short words are upper-cased and padded to five characters."""
    assert encode("go") == "GO   "
    assert encode("") == BLANK
    assert encode("XYZZY") == "XYZZY"


def test_encode_rejects_long_words():
    """Six characters do not fit in a word."""
    with pytest.raises(TooLong) as excinfo:
        encode("PLUGHS")
    assert excinfo.value.text == "PLUGHS"
    assert isinstance(excinfo.value, ValueError)


def test_encode_masks_to_seven_bits():
    """Characters beyond ASCII lose their high bit."""
    assert encode("é") == chr(0xE9 & 0x7F) + "    "


def test_upper_leaves_non_ascii_letters_alone():
    """Only a-z are upper-cased."""
    assert upper("straße") == "STRAßE"


def test_decode_is_exactly_five_characters():
    """Decoding gives the display form, padding included."""
    assert decode("ROD") == "ROD  "


def test_chunk_pads_the_last_word():
    """Text splits into words with only the last one padded."""
    assert chunk("HELLO THERE") == ["HELLO", " THER", "E    "]
    assert chunk("") == []
