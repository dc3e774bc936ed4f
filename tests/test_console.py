"""Tests for the console terminal, the PAUSE interaction and the entry point."""

import io

import pytest

from crowther import main
from crowther.console import BANNER, ConsoleTerminal
from crowther.engine.errors import EndOfInput
from crowther.engine.parser import parse
from crowther.engine.terminal import RESUME_PROMPT, PauseOutcome, pause


def _console(data: bytes) -> ConsoleTerminal:
    return ConsoleTerminal(stdin=io.BytesIO(data), stdout=io.StringIO())


def _stdin(data: bytes) -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")


def test_read_line_strips_line_ending():
    terminal = _console(b"get lamp\r\nwest\n")
    assert terminal.read_line() == "get lamp"
    assert terminal.read_line() == "west"


def test_read_line_at_end_of_input():
    """Running out of input is an error, not an empty command."""
    terminal = _console(b"")
    with pytest.raises(EndOfInput):
        terminal.read_line()


def test_empty_line_is_not_end_of_input():
    assert _console(b"\n").read_line() == ""


def test_read_line_takes_any_bytes():
    """Bytes that are not UTF-8 still read, one character each."""
    line = _console(b"\xff\xfe lamp\n").read_line()
    assert line == "\xff\xfe lamp"
    command = parse(line)
    assert command.first_word == "\x7f~   "
    assert command.second_word == "LAMP "


def test_multibyte_input_counts_bytes():
    """A two-byte character takes two of the five places in a word."""
    line = _console("é123456\n".encode("utf-8")).read_line()
    assert len(line) == 8
    assert parse(line).first_word == "\x43\x29123"
    assert parse(line).tail_word == "456  "


def test_write():
    terminal = _console(b"")
    terminal.write("OK   \n")
    assert terminal.stdout.getvalue() == "OK   \n"


def test_pause_resume():
    """G resumes, in either case."""
    terminal = _console(b"g\n")
    assert pause(terminal, "INIT DONE") is PauseOutcome.RESUME
    assert terminal.stdout.getvalue() == (
        "PAUSE: INIT DONE\n" + RESUME_PROMPT + "EXECUTION RESUMED\n\n"
    )


def test_pause_terminate():
    terminal = _console(b"X\n")
    assert pause(terminal, "GAME IS OVER") is PauseOutcome.TERMINATE
    assert terminal.stdout.getvalue().endswith(RESUME_PROMPT)


def test_pause_asks_again():
    """Anything but G or X repeats the choice."""
    terminal = _console(b"yes\n\nG\n")
    assert pause(terminal, "GAMES OVER") is PauseOutcome.RESUME
    assert terminal.stdout.getvalue().count(RESUME_PROMPT) == 3


def test_pause_at_end_of_input():
    with pytest.raises(EndOfInput):
        pause(_console(b"maybe\n"), "INIT DONE")


@pytest.fixture
def quiet_logs(tmp_path, monkeypatch):
    monkeypatch.setenv("ADVENTURE_LOG_FILE", str(tmp_path / "adventure.log"))
    monkeypatch.delenv("ADVENTURE_DATA_FILE", raising=False)
    monkeypatch.delenv("ADVENTURE_STRICT_TRANSFERS", raising=False)
    monkeypatch.delenv("ADVENTURE_JSON_LOGS", raising=False)


def test_main_terminated(quiet_logs, monkeypatch, capsys):
    """X at the first PAUSE ends the program the way the original did."""
    monkeypatch.setattr("sys.stdin", _stdin(b"x\n"))
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert out.startswith(BANNER + "PAUSE: INIT DONE\n")
    assert out.endswith("EXECUTION TERMINATED.\n")


def test_main_prints_banner_once(quiet_logs, monkeypatch, capsys):
    """The banner tells the player how to quit, before anything else."""
    monkeypatch.setattr("sys.stdin", _stdin(b"x\n"))
    with pytest.raises(SystemExit):
        main()
    out = capsys.readouterr().out
    assert out.count("To quit hit Ctrl-C\n") == 1


def test_main_end_of_input(quiet_logs, monkeypatch, capsys):
    """Input that runs out mid-game exits with an error status."""
    monkeypatch.setattr("sys.stdin", _stdin(b"g\nno\nwest\n"))
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    assert "EXECUTION TERMINATED." not in capsys.readouterr().out


def test_main_survives_undecodable_input(quiet_logs, monkeypatch, capsys):
    """Raw non-UTF-8 bytes are just an unknown word."""
    monkeypatch.setattr("sys.stdin", _stdin(b"g\nno\n\xff\xfe lamp\n"))
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert any(
        reply in captured.out
        for reply in ("I DON'T KNOW THAT WORD.", "WHAT?", "I DON'T UNDERSTAND THAT!")
    )
    assert "exception" not in captured.err


def test_main_reports_fatal_errors(quiet_logs, monkeypatch, capsys):
    """A transfer with nowhere to go is reported on stderr."""
    monkeypatch.setattr("sys.stdin", _stdin(b"g\nno\nback\n"))
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    assert "exception: transfer to 9999 from room 1 is out of range" in capsys.readouterr().err
