import pytest

from agda_mode.base import (
    Cohesion,
    CompareDirection,
    Comparison,
    ComputeMode,
    HaskellBool,
    Hiding,
    Polarity,
    Relevance,
    Remove,
    Rewrite,
    TokenBased,
    UseForce,
)


def test_comparison_symbols():
    assert str(Comparison("CmpEq")) == "=="
    assert str(Comparison("CmpLeq")) == "<="
    assert Comparison.CMP_EQ.__str__() == "=="


@pytest.mark.parametrize(
    "polarity, symbol",
    [
        (Polarity.COVARIANT, "+"),
        (Polarity.CONTRAVARIANT, "-"),
        (Polarity.INVARIANT, "*"),
        (Polarity.NONVARIANT, "_"),
    ],
)
def test_polarity_symbols(polarity, symbol):
    assert str(polarity) == symbol


def test_defaults():
    assert Rewrite.default() is Rewrite.SIMPLIFIED
    assert ComputeMode.default() is ComputeMode.DEFAULT_COMPUTE
    assert TokenBased.default() is TokenBased.NOT_ONLY_TOKEN_BASED


def test_compare_direction_from_comparison():
    assert CompareDirection.from_comparison(Comparison.CMP_EQ) is CompareDirection.DIR_EQ
    assert CompareDirection.from_comparison(Comparison.CMP_LEQ) is CompareDirection.DIR_LEQ


@pytest.mark.parametrize("value", [True, False])
def test_haskell_bool_round_trip(value):
    hb = HaskellBool.from_bool(value)
    assert bool(hb) is value
    assert hb.value == str(value)


def test_wire_names_parse():
    assert Rewrite("Normalised") is Rewrite.NORMALISED
    assert Cohesion("Flat") is Cohesion.FLAT
    assert Hiding("NotHidden") is Hiding.NOT_HIDDEN


def test_unknown_wire_name_rejected():
    with pytest.raises(ValueError):
        Rewrite("Whatever")


@pytest.mark.parametrize(
    "enum_cls",
    [Rewrite, ComputeMode, Comparison, CompareDirection, Polarity, UseForce,
     Remove, TokenBased, Hiding, Relevance, Cohesion, HaskellBool],
)
def test_every_member_round_trips(enum_cls):
    for member in enum_cls:
        assert enum_cls(member.value) is member