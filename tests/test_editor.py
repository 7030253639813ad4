from agda_mode.tac.editor import CliEditor
from agda_mode.tac.input import values


def test_complete_unique():
    assert CliEditor().complete("dump", 4) == (0, ["dump-proof"])


def test_complete_after_whitespace():
    assert CliEditor().complete("  ex", 4) == (2, ["exit"])


def test_complete_empty_gives_everything():
    assert CliEditor().complete("", 0) == (0, list(values()))


def test_complete_prefix_invariant():
    start, candidates = CliEditor().complete("li", 2)
    assert start == 0
    assert candidates
    assert all(word.startswith("li") for word in candidates)
    assert "list-goals" in candidates


def test_complete_only_whitespace():
    assert CliEditor().complete("   ", 0) == (0, [])


def test_readline_completer():
    editor = CliEditor()
    assert editor.readline_completer("he", 0) == "help"
    assert editor.readline_completer("he", 1) is None