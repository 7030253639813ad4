import pytest

from agda_mode import debug


@pytest.fixture(autouse=True)
def _reset_hooks():
    debug.dont_debug_command()
    debug.dont_debug_response()
    yield
    debug.dont_debug_command()
    debug.dont_debug_response()


def test_no_hook_reports_false():
    assert debug.debug_command("x") is False
    assert debug.debug_response("y") is False


def test_command_hook_receives_text():
    seen = []
    debug.debug_command_via(seen.append)
    assert debug.debug_command("[CMD]: abc") is True
    assert seen == ["[CMD]: abc"]
    assert debug.debug_response("other") is False


def test_response_hook_receives_text():
    seen = []
    debug.debug_response_via(seen.append)
    assert debug.debug_response("[RES]: r") is True
    assert seen == ["[RES]: r"]


def test_dont_debug_removes_hook():
    seen = []
    debug.debug_command_via(seen.append)
    debug.dont_debug_command()
    assert debug.debug_command("gone") is False
    assert seen == []


def test_toggle_command(capsys):
    debug.toggle_debug_command()
    assert capsys.readouterr().out == "Command debug mode is ON\n"
    assert debug.debug_command("hello") is True
    assert capsys.readouterr().out == "hello"
    debug.toggle_debug_command()
    assert capsys.readouterr().out == "Command debug mode is OFF\n"
    assert debug.debug_command("hello") is False


def test_toggle_response(capsys):
    debug.toggle_debug_response()
    assert capsys.readouterr().out == "Response debug mode is ON\n"
    assert debug.debug_response("data") is True
    assert capsys.readouterr().out == "data"
    debug.toggle_debug_response()
    assert capsys.readouterr().out == "Response debug mode is OFF\n"
    assert debug.debug_response("data") is False