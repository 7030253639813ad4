import json

import pytest

from agda_mode.base import TokenBased
from agda_mode.display import AllGoalsWarnings, Error
from agda_mode.resp import (
    ClearHighlighting,
    DefinitionSite,
    DisplayInfoResponse,
    DoneAborting,
    GiveActionResponse,
    Highlighting,
    HighlightingInfo,
    InteractionPoints,
    JumpToError,
    MakeCase,
    MakeCaseVariant,
    RunningInfo,
    SolveAll,
    StatusResponse,
    loads,
    parse_response,
)

INTERVAL = {
    "end": {"col": 11, "line": 3, "pos": 50},
    "start": {"col": 10, "line": 3, "pos": 49},
}


def point(ident):
    return {"id": ident, "range": [INTERVAL]}


def test_deserialize_status():
    text = """{
        "kind":"Status",
        "status": {
            "checked":false,
            "showImplicitArguments":false,
            "showIrrelevantArguments":false
        }
    }"""
    resp = loads(text)
    assert isinstance(resp, StatusResponse)
    assert resp.status.show_implicit_arguments is False
    assert resp.status.checked is False


def test_deserialize_displayinfo():
    text = """{
        "kind":"DisplayInfo",
        "info":{
            "errors":[],
            "invisibleGoals":[
                {
                    "kind":"JustSort",
                    "constraintObj":{
                        "name":"_0",
                        "range":[
                            {
                                "end":{ "col":11, "line":3, "pos":50 },
                                "start":{ "col":10, "line":3, "pos":49 }
                            }
                        ]
                    }
                }
            ],
            "kind":"AllGoalsWarnings",
            "visibleGoals":[
                {
                    "kind":"OfType",
                    "constraintObj":{
                        "id":0,
                        "range":[
                            {
                                "end":{ "col":11, "line":3, "pos":50 },
                                "start":{ "col":10, "line":3, "pos":49 }
                            }
                        ]
                    },
                    "type":"_0"
                },
                {
                    "kind":"OfType",
                    "constraintObj":{
                        "id":1,
                        "range":[
                            {
                                "end":{ "col":11, "line":4, "pos":61 },
                                "start":{ "col":10, "line":4, "pos":60 }
                            }
                        ]
                    },
                    "type":"?0"
                }
            ],
            "warnings":[]
        }
    }"""
    resp = loads(text)
    assert isinstance(resp, DisplayInfoResponse)
    agw = resp.info
    assert isinstance(agw, AllGoalsWarnings)
    assert len(agw.visible_goals) == 2
    assert len(agw.invisible_goals) == 1
    assert agw.warnings == ()
    assert agw.errors == ()


def test_deserialize_error():
    text = """{
        "info":{
            "error":{
                "message":"1,21-22\\nGeneralizable variable SmallLib.b is not supported here\\nwhen scope checking b"
            },
            "kind":"Error",
            "warnings":[]
        },
        "kind":"DisplayInfo"
    }"""
    resp = loads(text)
    assert isinstance(resp, DisplayInfoResponse)
    assert isinstance(resp.info, Error)
    assert resp.info.error.message == (
        "1,21-22\nGeneralizable variable SmallLib.b is not supported here\n"
        "when scope checking b"
    )


def test_deserialize_displayinfo2():
    text = """{
        "info":{
            "errors":[
                {
                    "message":"/repo/agda-mode/agda-tac/Demo.agda:6.1-7: error: [MissingDefinitions]\\nThe following names are declared but not accompanied by a\\ndefinition: lemma2"
                }
            ],
            "invisibleGoals":[],
            "kind":"AllGoalsWarnings",
            "visibleGoals":[],
            "warnings":[]
        },
        "kind":"DisplayInfo"
    }"""
    resp = loads(text)
    agw = resp.info
    assert isinstance(agw, AllGoalsWarnings)
    assert agw.visible_goals == ()
    assert agw.invisible_goals == ()
    assert agw.warnings == ()
    assert len(agw.errors) == 1


def test_display_info_without_info():
    resp = parse_response({"kind": "DisplayInfo", "info": None})
    assert resp == DisplayInfoResponse(None)


def test_direct_highlighting_content():
    data = {
        "kind": "HighlightingInfo",
        "direct": True,
        "info": {
            "remove": False,
            "payload": [
                {
                    "range": [1, 7],
                    "atoms": ["keyword"],
                    "tokenBased": "TokenBased",
                    "note": None,
                    "definitionSite": {"filepath": "/lib/Nat.agda", "position": 42},
                }
            ],
        },
    }
    resp = parse_response(data)
    assert isinstance(resp, HighlightingInfo)
    content = resp.content()
    assert isinstance(content, Highlighting)
    assert content.remove is False
    aspect = content.payload[0]
    assert aspect.range == (1, 7)
    assert aspect.atoms == ("keyword",)
    assert aspect.token_based is TokenBased.TOKEN_BASED
    assert aspect.note is None
    assert aspect.definition_site == DefinitionSite("/lib/Nat.agda", 42)


def test_indirect_highlighting_content():
    resp = parse_response({"kind": "HighlightingInfo", "direct": False, "filepath": "/tmp/hl"})
    assert resp.content() == "/tmp/hl"


def test_direct_highlighting_without_info_raises():
    resp = parse_response({"kind": "HighlightingInfo", "direct": True})
    with pytest.raises(ValueError):
        resp.content()


def test_interaction_points():
    resp = parse_response({"kind": "InteractionPoints", "interactionPoints": [point(0), point(1)]})
    assert isinstance(resp, InteractionPoints)
    assert [p.id for p in resp.interaction_points] == [0, 1]


def test_give_action():
    resp = parse_response(
        {"kind": "GiveAction", "giveResult": {"str": "zero"}, "interactionPoint": point(2)}
    )
    assert isinstance(resp, GiveActionResponse)
    assert resp.action.give_result.value() == "zero"
    assert resp.action.interaction_point.id == 2


def test_make_case():
    resp = parse_response(
        {
            "kind": "MakeCase",
            "variant": "Function",
            "interactionPoint": point(0),
            "clauses": ["f zero = ?", "f (suc n) = ?"],
        }
    )
    assert isinstance(resp, MakeCase)
    assert resp.variant is MakeCaseVariant.FUNCTION
    assert resp.clauses == ("f zero = ?", "f (suc n) = ?")
    assert resp.interaction_point.the_interval().start.line == 3


def test_solve_all():
    resp = parse_response(
        {"kind": "SolveAll", "solutions": [{"interactionPoint": point(0), "expression": "refl"}]}
    )
    assert isinstance(resp, SolveAll)
    assert [s.expression for s in resp.solutions] == ["refl"]


def test_small_responses():
    assert loads(json.dumps({"kind": "JumpToError", "filepath": "/a.agda", "position": 5})) == (
        JumpToError("/a.agda", 5)
    )
    assert loads('{"kind":"RunningInfo","debugLevel":1,"message":"Checking"}') == RunningInfo(
        1, "Checking"
    )
    assert loads('{"kind":"ClearHighlighting","tokenBased":"NotOnlyTokenBased"}') == (
        ClearHighlighting(TokenBased.NOT_ONLY_TOKEN_BASED)
    )
    assert loads('{"kind":"DoneAborting"}') == DoneAborting()


def test_unknown_kind_raises():
    with pytest.raises(ValueError, match="unknown response kind"):
        loads('{"kind":"Nonsense"}')


def test_missing_field_raises():
    with pytest.raises(ValueError):
        loads('{"kind":"JumpToError","filepath":"/a.agda"}')


def test_non_object_raises():
    with pytest.raises(ValueError):
        loads("[1, 2]")


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        loads("{not json")