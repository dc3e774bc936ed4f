"""Tests for the two-word command parser."""

from crowther.engine.parser import parse
from crowther.engine.words import BLANK


def test_single_word():
    """One word leaves the second word unset."""
    command = parse("xyzzy")
    assert not command.multi_word
    assert command.first_word == "XYZZY"
    assert command.second_word is None
    assert command.tail_word == BLANK


def test_long_single_word():
    """A word longer than five characters is cut, and its overflow is the tail."""
    command = parse("Supercalifragilisticexpialidocious          ")
    assert not command.multi_word
    assert command.first_word == "SUPER"
    assert command.second_word is None
    assert command.tail_word == "CALIF"


def test_second_word_after_many_spaces():
    """The second word starts at the first non-space after the first word."""
    command = parse("go           west")
    assert command.multi_word
    assert command.first_word == "GO   "
    assert command.second_word == "WEST "
    assert command.tail_word == BLANK


def test_second_word_runs_on():
    """The second word is five characters from where it starts, spaces and all."""
    command = parse("WHO ARE YOU")
    assert command.multi_word
    assert command.first_word == "WHO  "
    assert command.second_word == "ARE Y"
    assert command.tail_word == "RE YO"


def test_only_twenty_characters_are_scanned():
    """A second word beyond the twentieth character is never seen."""
    command = parse("a" * 20 + " lamp")
    assert not command.multi_word
    assert command.second_word is None


def test_leading_space_blanks_the_first_word():
    """A line starting with a space has a blank first word."""
    command = parse(" take lamp")
    assert command.first_word == BLANK
    assert command.second_word == "TAKE "
    assert command.multi_word


def test_empty_line():
    """An empty line is a single blank word."""
    command = parse("")
    assert command.first_word == BLANK
    assert command.second_word is None
