"""Responses produced by Agda's JSON interaction mode."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from agda_mode.base import TokenBased
from agda_mode.display import DisplayInfo, parse_display_info
from agda_mode.goals import GiveAction
from agda_mode.pos import InteractionPoint


@dataclass(frozen=True)
class Status:
    """Status information."""

    show_implicit_arguments: bool = False
    checked: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Status:
        return cls(
            show_implicit_arguments=bool(data["showImplicitArguments"]),
            checked=bool(data["checked"]),
        )


class MakeCaseVariant(Enum):
    FUNCTION = "Function"
    EXTENDED_LAMBDA = "ExtendedLambda"


@dataclass(frozen=True)
class OneSolution:
    interaction_point: InteractionPoint
    expression: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> OneSolution:
        return cls(
            interaction_point=InteractionPoint.from_json(data["interactionPoint"]),
            expression=str(data["expression"]),
        )


@dataclass(frozen=True)
class DefinitionSite:
    """Where a highlighted name is defined."""

    filepath: str
    position: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> DefinitionSite:
        return cls(filepath=str(data["filepath"]), position=int(data["position"]))


@dataclass(frozen=True)
class AspectHighlight:
    """Highlighting information for one token."""

    range: tuple[int, int]
    atoms: tuple[str, ...]
    token_based: TokenBased
    note: str | None = None
    definition_site: DefinitionSite | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> AspectHighlight:
        start, end = data["range"]
        note = data.get("note")
        site = data.get("definitionSite")
        return cls(
            range=(int(start), int(end)),
            atoms=tuple(str(atom) for atom in data["atoms"]),
            token_based=TokenBased(data["tokenBased"]),
            note=None if note is None else str(note),
            definition_site=None if site is None else DefinitionSite.from_json(site),
        )


@dataclass(frozen=True)
class Highlighting:
    """A list of token highlighting information."""

    remove: bool
    payload: tuple[AspectHighlight, ...]

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Highlighting:
        return cls(
            remove=bool(data["remove"]),
            payload=tuple(AspectHighlight.from_json(item) for item in data["payload"]),
        )


class Resp:
    """A response from Agda."""


@dataclass(frozen=True)
class HighlightingInfo(Resp):
    """Highlighting sent directly, or the path of a file that holds it."""

    info: Highlighting | None = None
    filepath: str | None = None
    direct: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> HighlightingInfo:
        info = data.get("info")
        filepath = data.get("filepath")
        return cls(
            info=None if info is None else Highlighting.from_json(info),
            filepath=None if filepath is None else str(filepath),
            direct=bool(data["direct"]),
        )

    def content(self) -> Highlighting | str:
        """The highlighting itself when direct, otherwise the file path."""
        if self.direct:
            if self.info is None:
                raise ValueError("direct highlighting info carries no highlighting")
            return self.info
        if self.filepath is None:
            raise ValueError("indirect highlighting info carries no file path")
        return self.filepath


@dataclass(frozen=True)
class StatusResponse(Resp):
    status: Status


@dataclass(frozen=True)
class JumpToError(Resp):
    filepath: str
    position: int


@dataclass(frozen=True)
class InteractionPoints(Resp):
    interaction_points: tuple[InteractionPoint, ...]


@dataclass(frozen=True)
class GiveActionResponse(Resp):
    action: GiveAction


@dataclass(frozen=True)
class MakeCase(Resp):
    """A case split: the printed clauses that replace the split line."""

    variant: MakeCaseVariant
    interaction_point: InteractionPoint
    clauses: tuple[str, ...]

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> MakeCase:
        return cls(
            variant=MakeCaseVariant(data["variant"]),
            interaction_point=InteractionPoint.from_json(data["interactionPoint"]),
            clauses=tuple(str(clause) for clause in data["clauses"]),
        )


@dataclass(frozen=True)
class SolveAll(Resp):
    """Solutions for one or more meta-variables."""

    solutions: tuple[OneSolution, ...]


@dataclass(frozen=True)
class DisplayInfoResponse(Resp):
    info: DisplayInfo | None


@dataclass(frozen=True)
class RunningInfo(Resp):
    debug_level: int
    message: str


@dataclass(frozen=True)
class ClearRunningInfo(Resp):
    pass


@dataclass(frozen=True)
class ClearHighlighting(Resp):
    token_based: TokenBased


@dataclass(frozen=True)
class DoneAborting(Resp):
    """Sent when an abort command has completed."""


def _display_info(data: Mapping[str, Any]) -> DisplayInfoResponse:
    info = data.get("info")
    return DisplayInfoResponse(None if info is None else parse_display_info(info))


_PARSERS: dict[str, Callable[[Mapping[str, Any]], Resp]] = {
    "HighlightingInfo": HighlightingInfo.from_json,
    "Status": lambda d: StatusResponse(Status.from_json(d["status"])),
    "JumpToError": lambda d: JumpToError(str(d["filepath"]), int(d["position"])),
    "InteractionPoints": lambda d: InteractionPoints(
        tuple(InteractionPoint.from_json(p) for p in d["interactionPoints"])
    ),
    "GiveAction": lambda d: GiveActionResponse(GiveAction.from_json(d)),
    "MakeCase": MakeCase.from_json,
    "SolveAll": lambda d: SolveAll(tuple(OneSolution.from_json(s) for s in d["solutions"])),
    "DisplayInfo": _display_info,
    "RunningInfo": lambda d: RunningInfo(int(d["debugLevel"]), str(d["message"])),
    "ClearRunningInfo": lambda d: ClearRunningInfo(),
    "ClearHighlighting": lambda d: ClearHighlighting(TokenBased(d["tokenBased"])),
    "DoneAborting": lambda d: DoneAborting(),
}


def parse_response(data: Mapping[str, Any]) -> Resp:
    """Build a response from its JSON object, dispatching on ``kind``."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    kind = data.get("kind")
    parser = _PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise ValueError(f"unknown response kind: {kind!r}")
    try:
        return parser(data)
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed {kind} response: {exc!r}") from exc


def loads(text: str) -> Resp:
    """Parse one JSON response."""
    return parse_response(json.loads(text))