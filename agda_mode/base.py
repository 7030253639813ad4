"""Enumerations shared by Agda commands and responses."""

from __future__ import annotations

from enum import Enum


class Rewrite(Enum):
    """How far an expression is normalised before it is shown."""

    AS_IS = "AsIs"
    INSTANTIATED = "Instantiated"
    HEAD_NORMAL = "HeadNormal"
    SIMPLIFIED = "Simplified"
    NORMALISED = "Normalised"

    @classmethod
    def default(cls) -> Rewrite:
        return cls.SIMPLIFIED


class ComputeMode(Enum):
    """Mode of computation and result display for compute commands."""

    DEFAULT_COMPUTE = "DefaultCompute"
    IGNORE_ABSTRACT = "IgnoreAbstract"
    USE_SHOW_INSTANCE = "UseShowInstance"

    @classmethod
    def default(cls) -> ComputeMode:
        return cls.DEFAULT_COMPUTE


class Comparison(Enum):
    CMP_EQ = "CmpEq"
    CMP_LEQ = "CmpLeq"

    def __str__(self) -> str:
        return "==" if self is Comparison.CMP_EQ else "<="


class CompareDirection(Enum):
    """A comparison that may also point the other way (``>=``)."""

    DIR_EQ = "DirEq"
    DIR_LEQ = "DirLeq"
    DIR_GEQ = "DirGeq"

    @classmethod
    def from_comparison(cls, comparison: Comparison) -> CompareDirection:
        if comparison is Comparison.CMP_EQ:
            return cls.DIR_EQ
        return cls.DIR_LEQ


class Polarity(Enum):
    """Polarity for equality and subtype checking."""

    COVARIANT = "Covariant"
    CONTRAVARIANT = "Contravariant"
    INVARIANT = "Invariant"
    NONVARIANT = "Nonvariant"

    def __str__(self) -> str:
        return _POLARITY_SYMBOLS[self]


_POLARITY_SYMBOLS = {
    Polarity.COVARIANT: "+",
    Polarity.CONTRAVARIANT: "-",
    Polarity.INVARIANT: "*",
    Polarity.NONVARIANT: "_",
}


class UseForce(Enum):
    """Whether safety checks such as termination are skipped."""

    WITH_FORCE = "WithForce"
    WITHOUT_FORCE = "WithoutForce"


class Remove(Enum):
    REMOVE = "Remove"
    KEEP = "Keep"


class TokenBased(Enum):
    """Whether highlighting is based only on lexer information."""

    TOKEN_BASED = "TokenBased"
    NOT_ONLY_TOKEN_BASED = "NotOnlyTokenBased"

    @classmethod
    def default(cls) -> TokenBased:
        return cls.NOT_ONLY_TOKEN_BASED


class Hiding(Enum):
    YES_OVERLAP = "YesOverlap"
    NO_OVERLAP = "NoOverlap"
    HIDDEN = "Hidden"
    NOT_HIDDEN = "NotHidden"


class Relevance(Enum):
    RELEVANT = "Relevant"
    NON_STRICT = "NonStrict"
    IRRELEVANT = "Irrelevant"


class Cohesion(Enum):
    FLAT = "Flat"
    CONTINUOUS = "Continuous"
    SHARP = "Sharp"
    SQUASH = "Squash"


class HaskellBool(Enum):
    """A boolean spelled the way Haskell spells it."""

    TRUE = "True"
    FALSE = "False"

    @classmethod
    def from_bool(cls, value: bool) -> HaskellBool:
        return cls.TRUE if value else cls.FALSE

    def __bool__(self) -> bool:
        return self is HaskellBool.TRUE