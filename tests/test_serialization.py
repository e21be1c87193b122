"""Tests for the JSON array-of-pairs encoding."""

from __future__ import annotations

import json
import logging
from fractions import Fraction

import numpy as np
import pytest

from intensity_segments import (
    Breakpoint,
    IntensitySegments,
    InvalidValueError,
    SerializationError,
    dumps,
    loads,
)


def test_dumps_uses_compact_separators() -> None:
    assert dumps([(10, 1), (30, 0)]) == "[[10,1],[30,0]]"
    assert dumps([]) == "[]"


def test_dumps_converts_numpy_and_fraction_numbers() -> None:
    text = dumps([(np.int64(1), Fraction(1, 4)), (np.float64(2.5), 0)])

    assert json.loads(text) == [[1, 0.25], [2.5, 0]]


def test_loads_returns_breakpoints() -> None:
    assert loads("[[10,1],[20,2.5],[30,0]]") == (
        Breakpoint(10, 1),
        Breakpoint(20, 2.5),
        Breakpoint(30, 0),
    )


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        "[[1]]",
        "[[1,2,3]]",
        "[1]",
        '[["a",1]]',
        "[[1,true]]",
        "[[NaN,1]]",
        "[[1,Infinity]]",
        "[[2,1],[1,0]]",
        "[[1,1],[1,0]]",
    ],
)
def test_loads_rejects_malformed_payloads(text: str) -> None:
    with pytest.raises(SerializationError):
        loads(text)


def test_loads_chains_json_syntax_errors() -> None:
    with pytest.raises(SerializationError) as excinfo:
        loads("[[1,2]")

    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)
    assert excinfo.value.category == "serialization"
    assert excinfo.value.context["line"] == 1


def test_store_json_round_trip_preserves_breakpoints() -> None:
    original = IntensitySegments()
    original.add(10, 30, 1)
    original.add(20, 40, 2)
    original.set(25, 35, -1)

    restored = IntensitySegments.from_json(original.to_json())

    assert restored.query() == original.query()
    assert str(restored) == "[[10,1],[20,3],[25,-1],[35,2],[40,0]]"


def test_from_breakpoints_accepts_non_canonical_pairs() -> None:
    restored = IntensitySegments.from_breakpoints([(0, 1), (5, 1), (10, 0)])

    assert str(restored) == "[[0,1],[10,0]]"


def test_from_breakpoints_then_set() -> None:
    restored = IntensitySegments.from_breakpoints([(0, 2), (10, 0)])
    restored.set(4, 6, 0)

    assert str(restored) == "[[0,2],[4,0],[6,2],[10,0]]"


def test_from_breakpoints_rejects_unsorted_positions() -> None:
    with pytest.raises(SerializationError):
        IntensitySegments.from_breakpoints([(10, 1), (5, 0)])


def test_from_breakpoints_rejects_malformed_pairs() -> None:
    with pytest.raises(SerializationError):
        IntensitySegments.from_breakpoints([(10, 1, 2)])


def test_from_breakpoints_rejects_non_finite_values() -> None:
    with pytest.raises(InvalidValueError):
        IntensitySegments.from_breakpoints([(0, float("nan")), (1, 0)])


def test_from_breakpoints_empty() -> None:
    assert IntensitySegments.from_breakpoints([]).query() == ()


@pytest.mark.parametrize("pairs", [[(10, 1)], [(10, 1), (20, 2)], [(0, -1.5)]])
def test_from_breakpoints_rejects_open_final_value(pairs: list) -> None:
    with pytest.raises(SerializationError) as excinfo:
        IntensitySegments.from_breakpoints(pairs)

    assert excinfo.value.context["position"] == pairs[-1][0]
    assert excinfo.value.context["value"] == pairs[-1][1]


def test_from_json_rejects_open_final_value() -> None:
    with pytest.raises(SerializationError):
        IntensitySegments.from_json("[[10,1],[20,2]]")


def test_set_after_from_json_preserves_both_flanks() -> None:
    restored = IntensitySegments.from_json("[[10,1],[50,0]]")

    restored.set(20, 30, 5)

    assert str(restored) == "[[10,1],[20,5],[30,1],[50,0]]"
    assert restored.value_at(12) == 1
    assert restored.value_at(40) == 1
    assert restored.value_at(100) == 0
    assert restored.query()[-1].value == 0


def test_rejected_payloads_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="intensity_segments")

    with pytest.raises(SerializationError):
        loads("[[2,1],[1,0]]")
    with pytest.raises(SerializationError):
        IntensitySegments.from_breakpoints([(10, 1)])

    records = [
        record
        for record in caplog.records
        if getattr(record, "event", None) == "intensity.error"
    ]
    assert [record.category for record in records] == ["serialization", "serialization"]
    assert all(record.levelno == logging.DEBUG for record in records)
