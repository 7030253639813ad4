"""Goal information and give-action results reported by Agda."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from agda_mode.base import ComputeMode, Rewrite
from agda_mode.pos import InteractionPoint


@dataclass(frozen=True)
class ResponseContextEntry:
    original_name: str
    reified_name: str
    binding: str
    in_scope: bool

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ResponseContextEntry:
        return cls(
            original_name=str(data["originalName"]),
            reified_name=str(data["reifiedName"]),
            binding=str(data["binding"]),
            in_scope=bool(data["inScope"]),
        )


class GoalTypeAux:
    """Extra information accompanying a goal type."""


@dataclass(frozen=True)
class GoalOnly(GoalTypeAux):
    pass


@dataclass(frozen=True)
class GoalAndHave(GoalTypeAux):
    expr: str


@dataclass(frozen=True)
class GoalAndElaboration(GoalTypeAux):
    term: str


def parse_goal_type_aux(data: Mapping[str, Any]) -> GoalTypeAux:
    kind = data.get("kind")
    if kind == "GoalOnly":
        return GoalOnly()
    if kind == "GoalAndHave":
        return GoalAndHave(str(data["expr"]))
    if kind == "GoalAndElaboration":
        return GoalAndElaboration(str(data["term"]))
    raise ValueError(f"unknown goal type aux kind: {kind!r}")


class GoalInfo:
    """Information about one goal."""


@dataclass(frozen=True)
class GoalType(GoalInfo):
    rewrite: Rewrite
    type_aux: GoalTypeAux
    type: str
    entries: tuple[ResponseContextEntry, ...]
    boundary: tuple[str, ...]
    output_forms: tuple[str, ...]


@dataclass(frozen=True)
class HelperFunction(GoalInfo):
    signature: str


@dataclass(frozen=True)
class NormalForm(GoalInfo):
    compute_mode: ComputeMode
    expr: str


@dataclass(frozen=True)
class CurrentGoal(GoalInfo):
    rewrite: Rewrite
    type: str


@dataclass(frozen=True)
class InferredType(GoalInfo):
    expr: str


def _goal_type(data: Mapping[str, Any]) -> GoalType:
    return GoalType(
        rewrite=Rewrite(data["rewrite"]),
        type_aux=parse_goal_type_aux(data["typeAux"]),
        type=str(data["type"]),
        entries=tuple(ResponseContextEntry.from_json(e) for e in data["entries"]),
        boundary=tuple(str(b) for b in data["boundary"]),
        output_forms=tuple(str(o) for o in data["outputForms"]),
    )


_GOAL_INFO_PARSERS: dict[str, Callable[[Mapping[str, Any]], GoalInfo]] = {
    "HelperFunction": lambda d: HelperFunction(str(d["signature"])),
    "NormalForm": lambda d: NormalForm(ComputeMode(d["computeMode"]), str(d["expr"])),
    "GoalType": _goal_type,
    "CurrentGoal": lambda d: CurrentGoal(Rewrite(d["rewrite"]), str(d["type"])),
    "InferredType": lambda d: InferredType(str(d["expr"])),
}


def parse_goal_info(data: Mapping[str, Any]) -> GoalInfo:
    kind = data.get("kind")
    parser = _GOAL_INFO_PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise ValueError(f"unknown goal info kind: {kind!r}")
    return parser(data)


@dataclass(frozen=True)
class GoalSpecific:
    interaction_point: InteractionPoint
    goal_info: GoalInfo

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> GoalSpecific:
        return cls(
            interaction_point=InteractionPoint.from_json(data["interactionPoint"]),
            goal_info=parse_goal_info(data["goalInfo"]),
        )


@dataclass(frozen=True)
class GiveResult:
    """Replacement text for a goal, or whether to parenthesise its contents."""

    text: str | None = None
    paren: bool | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> GiveResult:
        text = data.get("str")
        paren = data.get("paren")
        return cls(
            text=None if text is None else str(text),
            paren=None if paren is None else bool(paren),
        )

    def value(self) -> str | bool:
        """The replacement string, or the parenthesisation flag."""
        if self.text is not None and self.paren is None:
            return self.text
        if self.text is None and self.paren is not None:
            return self.paren
        raise ValueError("give result must carry exactly one of a string or a paren flag")


@dataclass(frozen=True)
class GiveAction:
    give_result: GiveResult
    interaction_point: InteractionPoint

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> GiveAction:
        return cls(
            give_result=GiveResult.from_json(data["giveResult"]),
            interaction_point=InteractionPoint.from_json(data["interactionPoint"]),
        )