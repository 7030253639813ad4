"""Output constraints: user goals and unsolved metas reported by Agda."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from agda_mode.base import Comparison, Polarity
from agda_mode.pos import InteractionPoint, Interval, NamedMeta

ParseObj = Callable[[Any], Any]


def _bracketed(items: Any) -> str:
    return "[" + ", ".join(str(item) for item in items) + "]"


class OutputConstraint:
    """A constraint over objects (goals, metas or printed names)."""

    def objs(self) -> list:
        """All constraint objects this constraint mentions, in order."""
        return []

    def __str__(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class FindInstanceCandidate:
    type: str
    value: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> FindInstanceCandidate:
        return cls(type=str(data["type"]), value=str(data["value"]))

    def __str__(self) -> str:
        return f"{self.value} : {self.type}"


@dataclass(frozen=True)
class OfType(OutputConstraint):
    constraint_obj: Any
    type: str

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        return f"{self.constraint_obj} : {self.type}"


@dataclass(frozen=True)
class CmpInType(OutputConstraint):
    constraint_objs: tuple
    type: str
    comparison: Comparison

    def objs(self) -> list:
        return list(self.constraint_objs)

    def __str__(self) -> str:
        a, b = self.constraint_objs
        return f"{a} {self.comparison} {b} of type {self.type}"


@dataclass(frozen=True)
class CmpElim(OutputConstraint):
    constraint_objs: tuple
    type: str
    polarities: tuple

    def objs(self) -> list:
        left, right = self.constraint_objs
        return [*left, *right]

    def __str__(self) -> str:
        left, right = self.constraint_objs
        polarities = "[" + ", ".join(p.value for p in self.polarities) + "]"
        return f"{_bracketed(left)} {polarities} {_bracketed(right)} of type {self.type}"


@dataclass(frozen=True)
class _JustSomething(OutputConstraint):
    constraint_obj: Any

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        return str(self.constraint_obj)


class JustType(_JustSomething):
    pass


class JustSort(_JustSomething):
    pass


@dataclass(frozen=True)
class _CmpSomething(OutputConstraint):
    constraint_objs: tuple
    comparison: Comparison

    def objs(self) -> list:
        return list(self.constraint_objs)

    def __str__(self) -> str:
        a, b = self.constraint_objs
        return f"{a} {self.comparison} {b}"


class CmpTypes(_CmpSomething):
    pass


class CmpLevels(_CmpSomething):
    pass


class CmpTeles(_CmpSomething):
    pass


class CmpSorts(_CmpSomething):
    pass


@dataclass(frozen=True)
class Assign(OutputConstraint):
    constraint_obj: Any
    value: str

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        return f"{self.constraint_obj} := {self.value}"


@dataclass(frozen=True)
class TypedAssign(OutputConstraint):
    constraint_obj: Any
    type: str
    value: str

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        return f"{self.constraint_obj} := {self.value} :? {self.type}"


@dataclass(frozen=True)
class PostponedCheckArgs(OutputConstraint):
    constraint_obj: Any
    of_type: str
    arguments: tuple
    type: str

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        args = "".join(f" {argument}" for argument in self.arguments)
        return f"{self.constraint_obj} := ({self.of_type}{args}) ?: {self.type}"


@dataclass(frozen=True)
class IsEmptyType(OutputConstraint):
    type: str

    def __str__(self) -> str:
        return f"Is empty: {self.type}"


@dataclass(frozen=True)
class SizeLtSat(OutputConstraint):
    type: str

    def __str__(self) -> str:
        return f"Not empty type of sizes: {self.type}"


@dataclass(frozen=True)
class FindInstanceOF(OutputConstraint):
    constraint_obj: Any
    type: str
    candidates: tuple

    def objs(self) -> list:
        return [self.constraint_obj]

    def __str__(self) -> str:
        head = f"Resolve instance argument {self.constraint_obj} : {self.type}, candidates: "
        return head + "".join(f"{candidate}, " for candidate in self.candidates)


@dataclass(frozen=True)
class PTSInstance(OutputConstraint):
    constraint_objs: tuple

    def objs(self) -> list:
        return list(self.constraint_objs)

    def __str__(self) -> str:
        a, b = self.constraint_objs
        return f"PTS Instance for {a}, {b}"


@dataclass(frozen=True)
class PostponedCheckFunDef(OutputConstraint):
    name: str
    type: str

    def __str__(self) -> str:
        return f"Check definition of {self.name} : {self.type}"


def _pair(data: Mapping[str, Any], parse_obj: ParseObj) -> tuple:
    a, b = data["constraintObjs"]
    return (parse_obj(a), parse_obj(b))


def _cmp(cls: type) -> Callable[[Mapping[str, Any], ParseObj], OutputConstraint]:
    def parse(data: Mapping[str, Any], parse_obj: ParseObj) -> OutputConstraint:
        return cls(_pair(data, parse_obj), Comparison(data["comparison"]))

    return parse


def _just(cls: type) -> Callable[[Mapping[str, Any], ParseObj], OutputConstraint]:
    def parse(data: Mapping[str, Any], parse_obj: ParseObj) -> OutputConstraint:
        return cls(parse_obj(data["constraintObj"]))

    return parse


def _cmp_elim(data: Mapping[str, Any], parse_obj: ParseObj) -> CmpElim:
    left, right = data["constraintObjs"]
    return CmpElim(
        (tuple(parse_obj(x) for x in left), tuple(parse_obj(y) for y in right)),
        str(data["type"]),
        tuple(Polarity(p) for p in data["polarities"]),
    )


_PARSERS: dict[str, Callable[[Mapping[str, Any], ParseObj], OutputConstraint]] = {
    "OfType": lambda d, p: OfType(p(d["constraintObj"]), str(d["type"])),
    "CmpInType": lambda d, p: CmpInType(
        _pair(d, p), str(d["type"]), Comparison(d["comparison"])
    ),
    "CmpElim": _cmp_elim,
    "JustType": _just(JustType),
    "JustSort": _just(JustSort),
    "CmpTypes": _cmp(CmpTypes),
    "CmpLevels": _cmp(CmpLevels),
    "CmpTeles": _cmp(CmpTeles),
    "CmpSorts": _cmp(CmpSorts),
    "Assign": lambda d, p: Assign(p(d["constraintObj"]), str(d["value"])),
    "TypedAssign": lambda d, p: TypedAssign(
        p(d["constraintObj"]), str(d["type"]), str(d["value"])
    ),
    "PostponedCheckArgs": lambda d, p: PostponedCheckArgs(
        p(d["constraintObj"]),
        str(d["ofType"]),
        tuple(str(a) for a in d["arguments"]),
        str(d["type"]),
    ),
    "IsEmptyType": lambda d, p: IsEmptyType(str(d["type"])),
    "SizeLtSat": lambda d, p: SizeLtSat(str(d["type"])),
    "FindInstanceOF": lambda d, p: FindInstanceOF(
        p(d["constraintObj"]),
        str(d["type"]),
        tuple(FindInstanceCandidate.from_json(c) for c in d["candidates"]),
    ),
    "PTSInstance": lambda d, p: PTSInstance(_pair(d, p)),
    "PostponedCheckFunDef": lambda d, p: PostponedCheckFunDef(str(d["name"]), str(d["type"])),
}


def parse_constraint(data: Mapping[str, Any], parse_obj: ParseObj) -> OutputConstraint:
    """Build a constraint from its JSON form, parsing objects with ``parse_obj``."""
    kind = data.get("kind")
    parser = _PARSERS.get(kind) if isinstance(kind, str) else None
    if parser is None:
        raise ValueError(f"unknown output constraint kind: {kind!r}")
    return parser(data, parse_obj)


def parse_visible_goal(data: Mapping[str, Any]) -> OutputConstraint:
    """A constraint whose objects are interaction points."""
    return parse_constraint(data, InteractionPoint.from_json)


def parse_invisible_goal(data: Mapping[str, Any]) -> OutputConstraint:
    """A constraint whose objects are named metas."""
    return parse_constraint(data, NamedMeta.from_json)


@dataclass(frozen=True)
class OutputForm:
    range: tuple[Interval, ...]
    problems: tuple[int, ...]
    constraint: OutputConstraint

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> OutputForm:
        return cls(
            range=tuple(Interval.from_json(item) for item in data["range"]),
            problems=tuple(int(p) for p in data["problems"]),
            constraint=parse_constraint(data["constraint"], str),
        )