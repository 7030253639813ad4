"""Commands sent to Agda's interaction mode, and their wire format."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Sequence, Union

from agda_mode.base import ComputeMode, HaskellBool, Remove, Rewrite, UseForce
from agda_mode.pos import Interval, Pos

PathLike = Union[str, "os.PathLike[str]"]

_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
}


def _quote(text: str) -> str:
    """Render a string as a quoted, escaped literal."""
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif not ch.isprintable():
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


def _quote_list(items: Sequence[str]) -> str:
    return "[" + ", ".join(_quote(item) for item in items) + "]"


def _path(path: PathLike) -> str:
    return '"' + os.fspath(path) + '"'


def format_pos(pos: Pos) -> str:
    return f"(Pn () {pos.pos} {pos.line} {pos.col})"


def format_range(interval: Interval | None) -> str:
    """Render an optional interval as an Agda range expression."""
    if interval is None:
        return "noRange"
    file_part = "Nothing" if interval.file is None else f"(Just (mkAbsolute {_quote(interval.file)}))"
    return (
        f"(intervalsToRange {file_part} "
        f"[Interval {format_pos(interval.start)} {format_pos(interval.end)}])"
    )


@dataclass(frozen=True)
class GoalInput:
    """Text inside a goal, with the goal's number and optional range."""

    goal_id: int
    range: Interval | None = None
    code: str = ""

    @classmethod
    def simple(cls, goal_id: int) -> GoalInput:
        return cls.no_range(goal_id, "")

    @classmethod
    def no_range(cls, goal_id: int, code: str) -> GoalInput:
        return cls(goal_id, None, code)

    def __str__(self) -> str:
        return f"{self.goal_id} {format_range(self.range)} {_quote(self.code)}"


@dataclass(frozen=True)
class InputWithRewrite:
    input: GoalInput
    rewrite: Rewrite = field(default_factory=Rewrite.default)

    @classmethod
    def from_goal(cls, goal_input: GoalInput) -> InputWithRewrite:
        return cls(goal_input)

    def __str__(self) -> str:
        return f"{self.rewrite.value} {self.input}"


class HighlightingLevel(Enum):
    """How much highlighting is sent to the user interface."""

    NONE = "None"
    NON_INTERACTIVE = "NonInteractive"
    INTERACTIVE = "Interactive"


class HighlightingMethod(Enum):
    """How highlighting is sent to the user interface."""

    DIRECT = "Direct"
    INDIRECT = "Indirect"


class Cmd:
    """An interaction command; ``str()`` gives its wire form."""

    _tag: ClassVar[str] = ""

    def _args(self) -> list[str] | None:
        return None

    def __str__(self) -> str:
        args = self._args()
        if args is None:
            return self._tag
        return "( " + " ".join([self._tag, *args]) + " )"


@dataclass
class IOTCM:
    """A command together with the file and highlighting settings."""

    file: PathLike
    command: Cmd
    level: HighlightingLevel = HighlightingLevel.NON_INTERACTIVE
    method: HighlightingMethod = HighlightingMethod.DIRECT

    @classmethod
    def simple(cls, file: PathLike, command: Cmd) -> IOTCM:
        return cls(file, command)

    def __str__(self) -> str:
        return (
            f"IOTCM {_path(self.file)} {self.level.value} "
            f"{self.method.value} {self.command}"
        )

    def to_string(self) -> str:
        """The command line to write to Agda, newline included."""
        return f"{self}\n"


@dataclass(frozen=True)
class _GoalCmd(Cmd):
    goal: GoalInput

    def _args(self) -> list[str] | None:
        return [str(self.goal)]


@dataclass(frozen=True)
class _InfoCmd(Cmd):
    info: InputWithRewrite

    def _args(self) -> list[str] | None:
        return [str(self.info)]


@dataclass(frozen=True)
class Load(Cmd):
    path: PathLike
    flags: tuple[str, ...] = ()
    _tag = "Cmd_load"

    def _args(self) -> list[str] | None:
        return [_path(self.path), _quote_list(self.flags)]


@dataclass(frozen=True)
class Compile(Cmd):
    backend: str
    path: PathLike
    flags: tuple[str, ...] = ()
    _tag = "Cmd_compile"

    def _args(self) -> list[str] | None:
        return [_quote(self.backend), _path(self.path), _quote_list(self.flags)]


@dataclass(frozen=True)
class Constraints(Cmd):
    _tag = "Cmd_constraints"


@dataclass(frozen=True)
class Metas(Cmd):
    _tag = "Cmd_metas"


@dataclass(frozen=True)
class ShowModuleContentsToplevel(Cmd):
    rewrite: Rewrite
    search: str
    _tag = "Cmd_show_module_contents_toplevel"

    def _args(self) -> list[str] | None:
        return [self.rewrite.value, _quote(self.search)]


@dataclass(frozen=True)
class SearchAboutToplevel(Cmd):
    rewrite: Rewrite
    search: str
    _tag = "Cmd_search_about_toplevel"

    def _args(self) -> list[str] | None:
        return [self.rewrite.value, _quote(self.search)]


@dataclass(frozen=True)
class SolveAll(Cmd):
    rewrite: Rewrite
    _tag = "Cmd_solveAll"

    def _args(self) -> list[str] | None:
        return [self.rewrite.value]


class SolveOne(_InfoCmd):
    _tag = "Cmd_solveOne"


class AutoOne(_GoalCmd):
    _tag = "Cmd_autoOne"


@dataclass(frozen=True)
class AutoAll(Cmd):
    _tag = "Cmd_autoAll"


@dataclass(frozen=True)
class InferToplevel(Cmd):
    rewrite: Rewrite
    code: str
    _tag = "Cmd_infer_toplevel"

    def _args(self) -> list[str] | None:
        return [self.rewrite.value, _quote(self.code)]


@dataclass(frozen=True)
class ComputeToplevel(Cmd):
    compute_mode: ComputeMode
    code: str
    _tag = "Cmd_compute_toplevel"

    def _args(self) -> list[str] | None:
        return [self.compute_mode.value, _quote(self.code)]


@dataclass(frozen=True)
class LoadHighlightingInfo(Cmd):
    path: PathLike
    _tag = "Cmd_load_highlighting_info"

    def _args(self) -> list[str] | None:
        return [_path(self.path)]


@dataclass(frozen=True)
class TokenHighlighting(Cmd):
    path: PathLike
    remove: Remove
    _tag = "Cmd_tokenHighlighting"

    def __str__(self) -> str:
        return f"( {self._tag} {_path(self.path)} {self.remove.value} "


class Highlight(_GoalCmd):
    _tag = "Cmd_highlight"


@dataclass(frozen=True)
class ShowImplicitArgs(Cmd):
    show: bool
    _tag = "ShowImplicitArgs"

    def _args(self) -> list[str] | None:
        return [HaskellBool.from_bool(self.show).value]


@dataclass(frozen=True)
class ToggleImplicitArgs(Cmd):
    _tag = "ToggleImplicitArgs"


@dataclass(frozen=True)
class Give(Cmd):
    force: UseForce
    goal: GoalInput
    _tag = "Cmd_give"

    def _args(self) -> list[str] | None:
        return [self.force.value, str(self.goal)]


class Refine(_GoalCmd):
    _tag = "Cmd_refine"


@dataclass(frozen=True)
class Intro(Cmd):
    dunno: bool
    goal: GoalInput
    _tag = "Cmd_intro"

    def _args(self) -> list[str] | None:
        return [HaskellBool.from_bool(self.dunno).value, str(self.goal)]


class RefineOrIntro(Intro):
    _tag = "Cmd_refine_or_intro"


class Context(_InfoCmd):
    _tag = "Cmd_context"


class HelperFunction(_InfoCmd):
    _tag = "Cmd_helper_function"


class Infer(_InfoCmd):
    _tag = "Cmd_infer"


class GoalType(_InfoCmd):
    _tag = "Cmd_goal_type"


class ElaborateGive(_InfoCmd):
    _tag = "Cmd_elaborate_give"


class GoalTypeContext(_InfoCmd):
    _tag = "Cmd_goal_type_context"


class GoalTypeContextInfer(_InfoCmd):
    _tag = "Cmd_goal_type_context_infer"


class GoalTypeContextCheck(_InfoCmd):
    _tag = "Cmd_goal_type_context_check"


class ShowModuleContents(_InfoCmd):
    _tag = "Cmd_show_module_contents"


class MakeCase(_GoalCmd):
    _tag = "Cmd_make_case"


@dataclass(frozen=True)
class Compute(Cmd):
    compute_mode: ComputeMode
    goal: GoalInput
    _tag = "Cmd_compute"

    def _args(self) -> list[str] | None:
        return [self.compute_mode.value, str(self.goal)]


class WhyInScope(_GoalCmd):
    _tag = "Cmd_why_in_scope"


@dataclass(frozen=True)
class WhyInScopeToplevel(Cmd):
    name: str
    _tag = "Cmd_why_in_scope_toplevel"

    def _args(self) -> list[str] | None:
        return [_quote(self.name)]


@dataclass(frozen=True)
class ShowVersion(Cmd):
    _tag = "Cmd_show_version"


@dataclass(frozen=True)
class Abort(Cmd):
    _tag = "Cmd_abort"


def load_simple(path: PathLike) -> Load:
    return Load(path)


def goal_type(goal_input: GoalInput) -> GoalType:
    return GoalType(InputWithRewrite.from_goal(goal_input))


def context(goal_input: GoalInput) -> Context:
    return Context(InputWithRewrite.from_goal(goal_input))


def split(goal_input: GoalInput) -> MakeCase:
    return MakeCase(goal_input)


def search_module(search: str) -> ShowModuleContentsToplevel:
    return ShowModuleContentsToplevel(Rewrite.default(), search)


def infer(goal_input: GoalInput) -> Infer:
    return Infer(InputWithRewrite.from_goal(goal_input))


def give(goal_input: GoalInput) -> Give:
    return Give(UseForce.WITHOUT_FORCE, goal_input)