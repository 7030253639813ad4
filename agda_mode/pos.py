"""Positions and ranges in Agda source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Pos:
    """A position in a file: character offset, line and column."""

    pos: int = 0
    line: int = 0
    col: int = 0

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Pos:
        return cls(pos=int(data["pos"]), line=int(data["line"]), col=int(data["col"]))


@dataclass(frozen=True)
class Interval:
    """A span between two positions, optionally in a named file."""

    file: str | None = None
    start: Pos = field(default_factory=Pos)
    end: Pos = field(default_factory=Pos)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Interval:
        return cls(
            file=data.get("file"),
            start=Pos.from_json(data["start"]),
            end=Pos.from_json(data["end"]),
        )

    def range(self) -> range:
        return self.range_shift_left(0)

    def range_shift_left(self, shift: int) -> range:
        if shift > self.start.pos or shift > self.end.pos:
            raise ValueError(f"cannot shift interval starting at {self.start.pos} left by {shift}")
        return range(self.start.pos - shift, self.end.pos - shift)

    def range_shift_right(self, shift: int) -> range:
        return range(self.start.pos + shift, self.end.pos + shift)


@dataclass(frozen=True)
class InteractionPoint:
    """A goal in the source, identified by its number."""

    id: int
    range: tuple[Interval, ...] = ()

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> InteractionPoint:
        return cls(
            id=int(data["id"]),
            range=tuple(Interval.from_json(item) for item in data["range"]),
        )

    def the_interval(self) -> Interval:
        """The single interval this goal occupies."""
        if len(self.range) != 1:
            raise ValueError(
                f"interaction point {self.id} has {len(self.range)} intervals, expected one"
            )
        return self.range[0]

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class NamedMeta:
    """An unsolved meta-variable with its name and location."""

    name: str
    range: tuple[Interval, ...] = ()

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> NamedMeta:
        return cls(
            name=str(data["name"]),
            range=tuple(Interval.from_json(item) for item in data["range"]),
        )

    def __str__(self) -> str:
        return self.name