import builtins
import io
import json

import pytest

from agda_mode.session import ReplState
from agda_mode.tac.file_io import Repl
from agda_mode.tac.input import HELP
from agda_mode.tac.interact import PLAIN_HELP, help_text, ion

NO_GOALS = json.dumps(
    {
        "kind": "DisplayInfo",
        "info": {
            "kind": "AllGoalsWarnings",
            "visibleGoals": [],
            "invisibleGoals": [],
            "warnings": [],
            "errors": [],
        },
    }
)
POINTS = json.dumps({"kind": "InteractionPoints", "interactionPoints": []})


class FakeWriter:
    def __init__(self):
        self.data = bytearray()
        self.closed = False

    def write(self, chunk):
        self.data += chunk

    async def drain(self):
        pass

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


class FakeReader:
    def __init__(self, lines):
        self._lines = list(lines)

    async def readline(self):
        if not self._lines:
            return b""
        return (self._lines.pop(0) + "\n").encode("utf-8")


async def make_repl(tmp_path, plain):
    path = tmp_path / "Demo.agda"
    text = "module Demo where\n"
    handle = open(path, "w+", encoding="utf-8")
    handle.write(text)
    handle.flush()
    writer = FakeWriter()
    state = await ReplState.from_io(writer, FakeReader(["JSON> " + NO_GOALS, POINTS]), path)
    repl = Repl(state, handle, path, text)
    repl.is_plain = plain
    return repl, writer, handle


def test_help_text_plain():
    assert help_text(True) == "You're in the plain REPL (with `--plain` flag)."


def test_help_text_rich_mentions_plain_flag():
    rich = help_text(False)
    assert rich != PLAIN_HELP
    assert "--plain" in rich


@pytest.mark.asyncio
async def test_plain_exit_aborts_and_closes(tmp_path, monkeypatch, capsys):
    repl, writer, handle = await make_repl(tmp_path, plain=True)
    monkeypatch.setattr("sys.stdin", io.StringIO("exit\n"))
    try:
        await ion(repl)
    finally:
        handle.close()
    assert "Cmd_abort" in writer.data.decode("utf-8")
    assert writer.closed
    assert "No goals." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_plain_help_then_eof(tmp_path, monkeypatch, capsys):
    repl, writer, handle = await make_repl(tmp_path, plain=True)
    monkeypatch.setattr("sys.stdin", io.StringIO("help\n"))
    try:
        await ion(repl)
    finally:
        handle.close()
    out = capsys.readouterr().out
    assert PLAIN_HELP in out
    assert all(entry in out for entry in HELP)
    assert "Cmd_abort" not in writer.data.decode("utf-8")
    assert not writer.closed


@pytest.mark.asyncio
async def test_rich_eof_reports_interrupted(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    repl, writer, handle = await make_repl(tmp_path, plain=False)

    def fake_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)
    try:
        await ion(repl)
    finally:
        handle.close()
    out = capsys.readouterr().out
    assert "Interrupted" in out
    assert not writer.closed


@pytest.mark.asyncio
async def test_rich_interrupt_is_ignored_then_exit(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    repl, writer, handle = await make_repl(tmp_path, plain=False)
    events = iter([KeyboardInterrupt(), "  exit  "])

    def fake_input(prompt=""):
        event = next(events)
        if isinstance(event, BaseException):
            raise event
        return event

    monkeypatch.setattr(builtins, "input", fake_input)
    try:
        await ion(repl)
    finally:
        handle.close()
    assert writer.closed
    assert "Cmd_abort" in writer.data.decode("utf-8")