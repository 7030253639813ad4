import pytest

from agda_mode.base import Cohesion, ComputeMode, Hiding, Relevance
from agda_mode.constraints import OfType
from agda_mode.display import (
    AgdaError,
    AllGoalsWarnings,
    CommandState,
    Context,
    DisplayInfo,
    Error,
    IntroNotFound,
    ModuleContents,
    NormalForm,
    TelescopicItem,
    Version,
    parse_display_info,
)
from agda_mode.goals import GoalSpecific, InferredType as GoalInferredType

RANGE = [{"end": {"col": 11, "line": 3, "pos": 50}, "start": {"col": 10, "line": 3, "pos": 49}}]
MESSAGE = "1,21-22\nGeneralizable variable SmallLib.b is not supported here\nwhen scope checking b"


def test_error_info():
    info = parse_display_info({"error": {"message": MESSAGE}, "kind": "Error", "warnings": []})
    assert isinstance(info, Error)
    assert info.error.message == MESSAGE
    assert str(info.error) == MESSAGE


def test_agda_error_without_message():
    assert str(AgdaError.from_json({})) == "Unknown error"


def test_all_goals_warnings():
    info = parse_display_info(
        {
            "errors": [],
            "invisibleGoals": [
                {"kind": "JustSort", "constraintObj": {"name": "_0", "range": RANGE}}
            ],
            "kind": "AllGoalsWarnings",
            "visibleGoals": [
                {"kind": "OfType", "constraintObj": {"id": 0, "range": RANGE}, "type": "_0"},
                {"kind": "OfType", "constraintObj": {"id": 1, "range": RANGE}, "type": "?0"},
            ],
            "warnings": [],
        }
    )
    assert isinstance(info, AllGoalsWarnings)
    assert len(info.visible_goals) == 2
    assert len(info.invisible_goals) == 1
    assert info.warnings == ()
    assert info.errors == ()
    assert isinstance(info.visible_goals[1], OfType)
    assert info.visible_goals[1].type == "?0"


def test_all_goals_warnings_with_error():
    info = parse_display_info(
        {
            "errors": [{"message": "missing definition"}],
            "invisibleGoals": [],
            "kind": "AllGoalsWarnings",
            "visibleGoals": [],
            "warnings": [],
        }
    )
    assert [e.message for e in info.errors] == ["missing definition"]


def test_goal_specific_is_display_info():
    info = parse_display_info(
        {
            "kind": "GoalSpecific",
            "interactionPoint": {"id": 2, "range": RANGE},
            "goalInfo": {"kind": "InferredType", "expr": "Nat"},
        }
    )
    assert isinstance(info, GoalSpecific)
    assert isinstance(info, DisplayInfo)
    assert info.goal_info == GoalInferredType("Nat")


def test_normal_form_with_command_state():
    info = parse_display_info(
        {
            "kind": "NormalForm",
            "computeMode": "DefaultCompute",
            "commandState": {"interactionPoints": [{"id": 0, "range": RANGE}], "currentFile": "A.agda"},
            "time": "0ms",
            "expr": "zero",
        }
    )
    assert isinstance(info, NormalForm)
    assert info.compute_mode is ComputeMode.DEFAULT_COMPUTE
    assert info.command_state.current_file == "A.agda"
    assert info.command_state.interaction_points[0].id == 0


def test_context_info():
    info = parse_display_info(
        {
            "kind": "Context",
            "interactionPoint": {"id": 0, "range": RANGE},
            "context": [
                {"originalName": "n", "reifiedName": "n", "binding": "Nat", "inScope": False}
            ],
        }
    )
    assert isinstance(info, Context)
    assert info.context[0].binding == "Nat"
    assert info.context[0].in_scope is False


def test_module_contents_telescope():
    info = parse_display_info(
        {
            "kind": "ModuleContents",
            "names": ["f"],
            "contents": [{"name": "f", "term": "Nat"}],
            "telescope": [
                {
                    "dom": "A",
                    "name": None,
                    "finite": False,
                    "cohesion": "Continuous",
                    "relevance": "Relevant",
                    "hiding": "NotHidden",
                }
            ],
        }
    )
    assert isinstance(info, ModuleContents)
    assert info.contents[0].term == "Nat"
    assert info.telescope == (
        TelescopicItem("A", None, False, Cohesion.CONTINUOUS, Relevance.RELEVANT, Hiding.NOT_HIDDEN),
    )


def test_simple_variants():
    assert parse_display_info({"kind": "Version", "version": "2.6.1"}) == Version("2.6.1")
    assert parse_display_info({"kind": "IntroNotFound"}) == IntroNotFound()


def test_command_state_defaults_roundtrip():
    state = CommandState.from_json({"interactionPoints": [], "currentFile": ""})
    assert state == CommandState()


def test_unknown_display_kind():
    with pytest.raises(ValueError):
        parse_display_info({"kind": "Mystery"})