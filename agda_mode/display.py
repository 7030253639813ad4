"""Display information: what Agda asks the front end to show."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from agda_mode.base import Cohesion, ComputeMode, Hiding, Relevance
from agda_mode.constraints import (
    OutputConstraint,
    OutputForm,
    parse_invisible_goal,
    parse_visible_goal,
)
from agda_mode.goals import GoalSpecific, ResponseContextEntry
from agda_mode.pos import InteractionPoint


@dataclass(frozen=True)
class CommandState:
    interaction_points: tuple[InteractionPoint, ...] = ()
    current_file: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> CommandState:
        return cls(
            interaction_points=tuple(
                InteractionPoint.from_json(p) for p in data["interactionPoints"]
            ),
            current_file=str(data["currentFile"]),
        )


@dataclass(frozen=True)
class AgdaError:
    message: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> AgdaError:
        message = data.get("message")
        return cls(None if message is None else str(message))

    def __str__(self) -> str:
        return "Unknown error" if self.message is None else self.message


@dataclass(frozen=True)
class NamedPrettyTCM:
    name: str
    term: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> NamedPrettyTCM:
        return cls(str(data["name"]), str(data["term"]))


@dataclass(frozen=True)
class TelescopicItem:
    """One item of a module's telescope."""

    dom: str
    name: str | None
    finite: bool
    cohesion: Cohesion
    relevance: Relevance
    hiding: Hiding

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TelescopicItem:
        name = data.get("name")
        return cls(
            dom=str(data["dom"]),
            name=None if name is None else str(name),
            finite=bool(data["finite"]),
            cohesion=Cohesion(data["cohesion"]),
            relevance=Relevance(data["relevance"]),
            hiding=Hiding(data["hiding"]),
        )


@dataclass(frozen=True)
class TCWarning:
    message: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TCWarning:
        return cls(str(data["message"]))


class DisplayInfo(ABC):
    """Something displayed in the front end."""


DisplayInfo.register(GoalSpecific)


@dataclass(frozen=True)
class CompilationOk(DisplayInfo):
    warnings: str
    errors: str


@dataclass(frozen=True)
class Constraints(DisplayInfo):
    constraints: tuple[OutputForm, ...]


@dataclass(frozen=True)
class AllGoalsWarnings(DisplayInfo):
    visible_goals: tuple[OutputConstraint, ...]
    invisible_goals: tuple[OutputConstraint, ...]
    warnings: tuple[TCWarning, ...]
    errors: tuple[TCWarning, ...]


@dataclass(frozen=True)
class Time(DisplayInfo):
    time: str


@dataclass(frozen=True)
class Error(DisplayInfo):
    error: AgdaError


@dataclass(frozen=True)
class IntroNotFound(DisplayInfo):
    pass


@dataclass(frozen=True)
class IntroConstructorUnknown(DisplayInfo):
    constructors: tuple[str, ...]


@dataclass(frozen=True)
class Auto(DisplayInfo):
    info: str


@dataclass(frozen=True)
class ModuleContents(DisplayInfo):
    names: tuple[str, ...]
    contents: tuple[NamedPrettyTCM, ...]
    telescope: tuple[TelescopicItem, ...]


@dataclass(frozen=True)
class SearchAbout(DisplayInfo):
    search: str
    results: tuple[NamedPrettyTCM, ...]


@dataclass(frozen=True)
class WhyInScope(DisplayInfo):
    thing: str
    filepath: str
    message: str


@dataclass(frozen=True)
class NormalForm(DisplayInfo):
    compute_mode: ComputeMode
    command_state: CommandState
    time: str
    expr: str


@dataclass(frozen=True)
class InferredType(DisplayInfo):
    command_state: CommandState
    time: str
    expr: str


@dataclass(frozen=True)
class Context(DisplayInfo):
    interaction_point: InteractionPoint
    context: tuple[ResponseContextEntry, ...]


@dataclass(frozen=True)
class Version(DisplayInfo):
    version: str


def _all_goals_warnings(d: Mapping[str, Any]) -> AllGoalsWarnings:
    return AllGoalsWarnings(
        visible_goals=tuple(parse_visible_goal(g) for g in d["visibleGoals"]),
        invisible_goals=tuple(parse_invisible_goal(g) for g in d["invisibleGoals"]),
        warnings=tuple(TCWarning.from_json(w) for w in d["warnings"]),
        errors=tuple(TCWarning.from_json(e) for e in d["errors"]),
    )


_PARSERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "CompilationOk": lambda d: CompilationOk(str(d["warnings"]), str(d["errors"])),
    "Constraints": lambda d: Constraints(
        tuple(OutputForm.from_json(c) for c in d["constraints"])
    ),
    "AllGoalsWarnings": _all_goals_warnings,
    "Time": lambda d: Time(str(d["time"])),
    "Error": lambda d: Error(AgdaError.from_json(d["error"])),
    "IntroNotFound": lambda d: IntroNotFound(),
    "IntroConstructorUnknown": lambda d: IntroConstructorUnknown(
        tuple(str(c) for c in d["constructors"])
    ),
    "Auto": lambda d: Auto(str(d["info"])),
    "ModuleContents": lambda d: ModuleContents(
        names=tuple(str(n) for n in d["names"]),
        contents=tuple(NamedPrettyTCM.from_json(c) for c in d["contents"]),
        telescope=tuple(TelescopicItem.from_json(t) for t in d["telescope"]),
    ),
    "SearchAbout": lambda d: SearchAbout(
        str(d["search"]), tuple(NamedPrettyTCM.from_json(r) for r in d["results"])
    ),
    "WhyInScope": lambda d: WhyInScope(str(d["thing"]), str(d["filepath"]), str(d["message"])),
    "NormalForm": lambda d: NormalForm(
        ComputeMode(d["computeMode"]),
        CommandState.from_json(d["commandState"]),
        str(d["time"]),
        str(d["expr"]),
    ),
    "InferredType": lambda d: InferredType(
        CommandState.from_json(d["commandState"]), str(d["time"]), str(d["expr"])
    ),
    "Context": lambda d: Context(
        InteractionPoint.from_json(d["interactionPoint"]),
        tuple(ResponseContextEntry.from_json(e) for e in d["context"]),
    ),
    "Version": lambda d: Version(str(d["version"])),
    "GoalSpecific": GoalSpecific.from_json,
}


def parse_display_info(data: Mapping[str, Any]) -> DisplayInfo:
    """Build display information from its JSON form, dispatching on ``kind``."""
    kind = data.get("kind")
    parser = _PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise ValueError(f"unknown display info kind: {kind!r}")
    return parser(data)