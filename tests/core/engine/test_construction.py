#!/usr/bin/env python3
import pytest

from strictdto.core.engine.construction import build_values, current_depth, nesting_guard
from strictdto.core.engine.diagnostics import DiagnosticCollector
from strictdto.core.exceptions import DataTransferObjectError, NestingDepthError
from strictdto.core.settings import get_settings
from sample_dtos import NestedParent, Node, WithAlias


# --- build_values --- #

def test_build_values_returns_field_values():
    values = build_values(NestedParent, {"name": "p", "child": {"name": "c"}})
    assert values["name"] == "p"
    assert values["child"].name == "c"


def test_build_values_non_strict_fills_the_collector():
    collector = DiagnosticCollector("sample_dtos.NestedParent")
    values = build_values(NestedParent, {"name": 1}, collector=collector, strict=False)

    assert values == {}
    assert len(collector) == 2


def test_build_values_strict_raises():
    with pytest.raises(DataTransferObjectError):
        build_values(NestedParent, {})


def test_build_values_rejects_non_mappings():
    with pytest.raises(TypeError, match=r"expects a mapping, got str"):
        build_values(NestedParent, "nope")  # type: ignore[arg-type]


def test_build_values_does_not_mutate_input():
    raw = {"Name": "Alice"}
    build_values(WithAlias, raw)
    assert raw == {"Name": "Alice"}


# --- Depth guard --- #

def test_nesting_guard_tracks_depth():
    assert current_depth() == 0
    with nesting_guard("x", 2) as depth:
        assert depth == 1
        with nesting_guard("x", 2) as inner:
            assert inner == 2
            with pytest.raises(NestingDepthError):
                with nesting_guard("x", 2):
                    pass
    assert current_depth() == 0


def test_self_referential_input_hits_the_depth_limit():
    get_settings(config_override={"max_depth": 5})
    data = {"name": "loop"}
    data["child"] = data

    with pytest.raises(NestingDepthError) as excinfo:
        Node(data)
    assert excinfo.value.max_depth == 5
    assert current_depth() == 0


def test_deep_but_finite_nesting_is_fine():
    data = {"name": "leaf"}
    for i in range(10):
        data = {"name": f"n{i}", "child": data}

    node = Node(data)
    assert node.name == "n9"
    assert node.child.child.name == "n7"
