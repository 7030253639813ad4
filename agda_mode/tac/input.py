"""Parse a line typed at the REPL into a structured command."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto


class InputKind(Enum):
    DEFINE = auto()
    PUSH_LINE = auto()
    POP_LINE = auto()
    DUMP_PROOF = auto()
    SHOW_LINE = auto()
    GIVE = auto()
    SPLIT = auto()
    RELOAD = auto()
    CONTEXT = auto()
    READ_TO_END = auto()
    HELP = auto()
    LIST_GOALS = auto()
    INTRO_PATTERN = auto()
    SEARCH_MODULE = auto()
    EXIT = auto()
    INFER = auto()
    SIMPLIFY = auto()
    NORMALIZE = auto()
    TYPE = auto()
    UNKNOWN = auto()
    TOGGLE_DEBUG_COMMAND = auto()
    TOGGLE_DEBUG_RESPONSE = auto()


@dataclass(frozen=True)
class UserInput:
    """A parsed command.

    ``number`` is the goal number (or the line index for ``SHOW_LINE``);
    ``text`` is the command's text argument, or for ``UNKNOWN`` an
    explanation of what went wrong, if there is one.
    """

    kind: InputKind
    number: int | None = None
    text: str | None = None


_VALUES = (
    "help",
    "define",
    "line-push",
    "line-pop",
    "line-show",
    "context",
    "fill",
    "dump-proof",
    "split",
    "give",
    "reload",
    "intro-pattern",
    "read-to-end",
    "list-goals",
    "find-in-module",
    "infer",
    "simpl",
    "norm",
    "deduce",
    "type",
    "exit",
    "quit",
    "debug-response",
    "debug-command",
)

HELP = (
    "help: print this message.",
    "define <name>: define a function, with the given `name`.",
    "line-push <line>: push a `line` to the agda file, with leading whitespaces preserved.",
    "line-pop: pop the last line of the agda file.",
    "line-show <line>: show the `line`-th line.",
    "list-goals: list the goals and their line number.",
    "reload: let agda reload the current file.",
    "dump-proof: print the agda file.",
    "intro-pattern <goal> <var>: introduce a pattern of name `var` in `goal`.",
    "find-in-module: find a definition in the current module. (mysterious API)",
    "read-to-end: consume all available agda responses, for debugging agda-tac only.",
    "fill <goal> <code>: fill the `goal` with `code` (alias: give).",
    "infer <goal> <code>: infer the type of `code` under the context of `goal` (alias: deduce).",
    "norm <goal> <code>: normalize `code` in `goal` (alias: simpl).",
    "split <goal> <var>: case-split the variable of name `var` in `goal`.",
    "type <goal>: show the type of the `goal`.",
    "exit: exit the REPL (alias: quit).",
)

_BAD_GOAL = "I cannot parse the goal number."
_NO_GOAL = "please specify a goal."
_INT = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_EXACT = {
    "reload": InputKind.RELOAD,
    "list-goals": InputKind.LIST_GOALS,
    "dump-proof": InputKind.DUMP_PROOF,
    "line-pop": InputKind.POP_LINE,
}

_EXACT_LATE = {
    "exit": InputKind.EXIT,
    "quit": InputKind.EXIT,
    "read-to-end": InputKind.READ_TO_END,
    "debug-response": InputKind.TOGGLE_DEBUG_RESPONSE,
    "debug-command": InputKind.TOGGLE_DEBUG_COMMAND,
}

_GOAL_ONLY = (
    ("type", InputKind.TYPE),
    ("context", InputKind.CONTEXT),
    ("line-show", InputKind.SHOW_LINE),
)

_GOAL_AND_TEXT = (
    (("fill", "give"), "fill", "give", InputKind.GIVE),
    (("infer", "deduce"), "infer", "deduce", InputKind.INFER),
    (("simpl",), "simpl", "", InputKind.SIMPLIFY),
    (("intro-pattern",), "intro-pattern", "", InputKind.INTRO_PATTERN),
    (("norm",), "norm", "", InputKind.NORMALIZE),
    (("split",), "split", "", InputKind.SPLIT),
)


def values() -> tuple[str, ...]:
    """All command words, in completion order."""
    return _VALUES


def _strip_all(text: str, prefix: str) -> str:
    """Remove every leading repetition of ``prefix``."""
    if not prefix:
        return text
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _parse_goal(text: str) -> int | None:
    if not _INT.fullmatch(text):
        return None
    number = int(text)
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def _goal_only(line: str, cmd: str, kind: InputKind) -> UserInput:
    number = _parse_goal(_strip_all(line, cmd).strip())
    if number is None:
        return UserInput(InputKind.UNKNOWN, text=_BAD_GOAL)
    return UserInput(kind, number)


def _goal_and_text(line: str, cmd: str, alias: str, kind: InputKind) -> UserInput:
    rest = _strip_all(_strip_all(line, cmd), alias).lstrip()
    space = rest.find(" ")
    if space < 0:
        return UserInput(InputKind.UNKNOWN, text=_NO_GOAL)
    number = _parse_goal(rest[:space].strip())
    if number is None:
        return UserInput(InputKind.UNKNOWN, text=_BAD_GOAL)
    return UserInput(kind, number, rest[space:].strip())


def parse_input(line: str) -> UserInput:
    """Turn a line of user input into a command."""
    if line == "help":
        return UserInput(InputKind.HELP)
    if line.startswith("define"):
        return UserInput(InputKind.DEFINE, text=_strip_all(line, "define").lstrip())
    if line.startswith("line-push "):
        return UserInput(InputKind.PUSH_LINE, text=_strip_all(line, "line-push "))
    for cmd, kind in _GOAL_ONLY:
        if line.startswith(cmd):
            return _goal_only(line, cmd, kind)
    for prefixes, cmd, alias, kind in _GOAL_AND_TEXT:
        if line.startswith(prefixes):
            return _goal_and_text(line, cmd, alias, kind)
    if line in _EXACT:
        return UserInput(_EXACT[line])
    if line.startswith("find-in-module"):
        return UserInput(
            InputKind.SEARCH_MODULE, text=_strip_all(line, "find-in-module").strip()
        )
    if line in _EXACT_LATE:
        return UserInput(_EXACT_LATE[line])
    return UserInput(InputKind.UNKNOWN)