"""Parse the 77-03-31 advent.dat feed into a World.

The feed is a series of sections, each introduced by a line holding its
kind. Every record starts with a number; ``-1`` ends a section and a kind
of ``0`` ends the feed. Blank lines before a number are skipped, the way
a list-directed READ skips them.

Text records (kinds 1, 2, 5, 6) are ``id`` followed by the text in
five-character chunks; consecutive lines with one id form one block.
Map records (kind 3) are ``source destination keyword...``; vocabulary
records (kind 4) are ``code word``.
"""

import re
from collections.abc import Callable, Iterable
from enum import IntEnum
from pathlib import Path

from ..logging import get_logger
from .errors import Terminated, WorldDataError
from .terminal import PauseOutcome
from .words import BLANK, WORD_LENGTH, chunk, encode
from .world import (
    FORCED_ROOMS,
    KEYWORD_LIMIT,
    LIGHTED_ROOMS,
    MESSAGE_LIMIT,
    OBJECT_LIMIT,
    ROOM_LIMIT,
    TEXT_LINE_LIMIT,
    TRAVEL_LIMIT,
    VOCABULARY_LIMIT,
    Room,
    TravelEdge,
    VocabularyEntry,
    WordKind,
    World,
    is_destination,
)

logger = get_logger(__name__)

# Chunks read from a text line, and how many of them are ever shown
CHUNKS_READ = 20
CHUNKS_SHOWN = 18
KEYWORDS_PER_RECORD = 10
VERB_COUNT = 16

Pause = Callable[[str], PauseOutcome]

_LEADING_NUMBER = re.compile(r"\s*(-?\d+)(.*)")


class FeedSection(IntEnum):
    END = 0
    LONG_DESCRIPTIONS = 1
    SHORT_DESCRIPTIONS = 2
    MAP = 3
    VOCABULARY = 4
    OBJECT_TEXTS = 5
    MESSAGES = 6


class _Feed:
    """Hands out ``(number, rest of line)`` records."""

    def __init__(self, lines: Iterable[str]):
        self._lines = enumerate(lines, start=1)
        self.line_number = 0

    def record(self) -> tuple[int, str]:
        for self.line_number, line in self._lines:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            match = _LEADING_NUMBER.match(line)
            if match is None:
                raise WorldDataError(f"expected a number, got {line!r}", self.line_number)
            return int(match[1]), match[2]
        raise WorldDataError("feed ended before its closing 0", self.line_number)

    def error(self, message: str) -> WorldDataError:
        return WorldDataError(message, self.line_number)


def _text_line(rest: str) -> str:
    """Store a text line as its chunks up to the last non-blank one shown."""
    words = chunk(rest.lstrip(" ")[: CHUNKS_READ * WORD_LENGTH])[:CHUNKS_SHOWN]
    while words and words[-1] == BLANK:
        words.pop()
    return "".join(words)


def _object_text_keys(number: int) -> tuple[int, ...]:
    # 2xx serves both property states of object xx
    if number >= 200:
        return (number - 100, number - 200)
    return (number,)


def _numbers(rest: str) -> list[int]:
    """Leading integers of a map record; reading stops at the first non-number."""
    numbers = []
    for token in rest.split():
        try:
            numbers.append(int(token))
        except ValueError:
            break
    return numbers


class _WorldBuilder:
    def __init__(self, feed: _Feed, pause: Pause | None):
        self.feed = feed
        self.pause = pause
        self.long: dict[int, list[str]] = {}
        self.short: dict[int, list[str]] = {}
        self.object_texts: dict[int, list[str]] = {}
        self.messages: dict[int, list[str]] = {}
        self.edges: dict[int, list[TravelEdge]] = {}
        self.vocabulary: list[VocabularyEntry] = []
        self.text_lines = 0
        self.travel_entries = 0
        # Slots used in the shared line table: text lines and travel entries
        # count against the same limit, and the map starts it over.
        self.position = 0
        self.map_read = False

    def _overflow(self, message: str) -> None:
        """PAUSE on a full table; only a resume returns."""
        if self.pause is None:
            raise self.feed.error(message)
        if self.pause(message) is PauseOutcome.TERMINATE:
            raise Terminated(message)

    def read_text(self, section: FeedSection) -> None:
        while True:
            number, rest = self.feed.record()
            if number == -1:
                return
            self._store_text(section, number, _text_line(rest))

    def _store_text(self, section: FeedSection, number: int, line: str) -> None:
        if self.position >= TEXT_LINE_LIMIT - 1:
            raise self.feed.error("text table overflow")
        match section:
            case FeedSection.LONG_DESCRIPTIONS | FeedSection.SHORT_DESCRIPTIONS:
                if not 0 < number <= ROOM_LIMIT:
                    raise self.feed.error(f"room {number} out of range")
                table = self.long if section is FeedSection.LONG_DESCRIPTIONS else self.short
                table.setdefault(number, []).append(line)
            case FeedSection.OBJECT_TEXTS:
                if not 0 < number <= ROOM_LIMIT:
                    raise self.feed.error(f"object text {number} out of range")
                for key in _object_text_keys(number):
                    self.object_texts.setdefault(key, []).append(line)
            case FeedSection.MESSAGES:
                if not 0 < number <= MESSAGE_LIMIT:
                    raise self.feed.error(f"message {number} out of range")
                self.messages.setdefault(number, []).append(line)
        self.text_lines += 1
        self.position += 1
        if self.position == TEXT_LINE_LIMIT - 1:
            self._overflow("TOO MANY LINES")
            # Resuming falls into the object-text branch with the same id
            # and an unread, empty line; the next text line then overflows.
            for key in _object_text_keys(number):
                self.object_texts.setdefault(key, []).append("")
            self.position += 1

    def read_map(self) -> None:
        if self.map_read:
            raise self.feed.error("second map section")
        self.map_read = True
        self.position = 0
        last_source = None
        while True:
            source, rest = self.feed.record()
            if source == -1:
                return
            numbers = _numbers(rest)
            destination = numbers[0] if numbers else 0
            keywords = []
            for keyword in numbers[1 : KEYWORDS_PER_RECORD + 1]:
                if keyword == 0:
                    break
                keywords.append(keyword)

            if not 0 < source < ROOM_LIMIT:
                raise self.feed.error(f"source room {source} out of range")
            if not is_destination(destination):
                raise self.feed.error(f"destination {destination} out of range")
            if not keywords:
                raise self.feed.error(f"map record for room {source} has no keywords")
            if any(not 0 < keyword < KEYWORD_LIMIT for keyword in keywords):
                raise self.feed.error(f"keyword out of range in {keywords}")
            if source in self.edges and source != last_source:
                raise self.feed.error(f"map records for room {source} are not contiguous")

            self.travel_entries += len(keywords)
            self.position += len(keywords)
            if self.position >= TRAVEL_LIMIT - 1:
                raise self.feed.error("travel table overflow")
            self.edges.setdefault(source, []).append(TravelEdge(destination, tuple(keywords)))
            last_source = source

    def read_vocabulary(self) -> bool:
        """Read keywords; False means the feed was abandoned after an overflow."""
        for _ in range(VOCABULARY_LIMIT):
            code, rest = self.feed.record()
            if code == -1:
                return True
            word = encode(rest.lstrip(" ")[:WORD_LENGTH])
            self._check_code(code)
            self.vocabulary.append(VocabularyEntry(word, code))
        self._overflow("TOO MANY WORDS")
        # Resuming falls straight into game setup; the rest of the feed is
        # never read.
        return False

    def _check_code(self, code: int) -> None:
        kind, value = divmod(code, 1000)
        valid = {
            WordKind.MOTION: True,
            WordKind.OBJECT: 0 < value <= OBJECT_LIMIT,
            WordKind.VERB: 0 < value <= VERB_COUNT,
            WordKind.ADVICE: True,
        }.get(kind, False)
        if not valid:
            raise self.feed.error(f"vocabulary code {code} out of range")

    def build(self) -> World:
        rooms = {
            number: Room(
                number=number,
                long_description=tuple(self.long.get(number, ())),
                short_description=tuple(self.short.get(number, ())),
                edges=tuple(self.edges.get(number, ())),
                lighted=number in LIGHTED_ROOMS,
                forced=number in FORCED_ROOMS,
            )
            for number in range(1, ROOM_LIMIT + 1)
        }
        return World(
            rooms=rooms,
            object_texts={k: tuple(v) for k, v in self.object_texts.items()},
            messages={k: tuple(v) for k, v in self.messages.items()},
            vocabulary=tuple(self.vocabulary),
        )


def parse_feed(lines: Iterable[str], pause: Pause | None = None) -> World:
    """Build a World from the lines of a feed.

    ``pause`` is asked what to do when a table overflows; without one an
    overflow is a :class:`WorldDataError`.
    """
    feed = _Feed(lines)
    builder = _WorldBuilder(feed, pause)

    while True:
        kind, _ = feed.record()
        try:
            section = FeedSection(kind)
        except ValueError:
            raise feed.error(f"unknown section kind {kind}") from None
        logger.debug("world_feed_section", section=section.name, line=feed.line_number)

        match section:
            case FeedSection.END:
                break
            case FeedSection.MAP:
                builder.read_map()
            case FeedSection.VOCABULARY:
                if not builder.read_vocabulary():
                    break
            case _:
                builder.read_text(section)

    world = builder.build()
    logger.info(
        "world_loaded",
        rooms=sum(1 for room in world.rooms.values() if room.long_description),
        messages=len(world.messages),
        vocabulary=len(world.vocabulary),
        text_lines=builder.text_lines,
        travel_entries=builder.travel_entries,
    )
    return world


def load_world(data_path: Path, pause: Pause | None = None) -> World:
    """Parse advent.dat and return a populated World."""
    with data_path.open() as fh:
        return parse_feed(fh, pause)
