"""Tests for complexity_insight.metrics.halstead."""

import math

import pytest

from complexity_insight.metrics.halstead import (
    ReservedKey,
    derive_halstead,
    disambiguate,
    record,
)
from complexity_insight.models import FunctionReport, HalsteadItemState, HalsteadState


def _state(op_distinct, op_total, nd_distinct, nd_total) -> HalsteadState:
    return HalsteadState(
        operators=HalsteadItemState(distinct=op_distinct, total=op_total),
        operands=HalsteadItemState(distinct=nd_distinct, total=nd_total),
    )


class TestRecord:
    """Tests for distinct/total token accounting."""

    def test_first_occurrence_counts_distinct(self):
        report = FunctionReport()
        record(report, "operators", "+")
        assert report.halstead.operators.distinct == 1
        assert report.halstead.operators.total == 1
        assert list(report.halstead.operators.identifiers) == ["+"]

    def test_repeat_only_counts_total(self):
        report = FunctionReport()
        for _ in range(3):
            record(report, "operands", "x")
        assert report.halstead.operands.distinct == 1
        assert report.halstead.operands.total == 3

    def test_metrics_are_independent(self):
        report = FunctionReport()
        record(report, "operators", "x")
        record(report, "operands", "x")
        assert report.halstead.operators.distinct == 1
        assert report.halstead.operands.distinct == 1

    def test_insertion_order_preserved(self):
        report = FunctionReport()
        for token in ["c", "a", "b", "a"]:
            record(report, "operands", token)
        assert list(report.halstead.operands.identifiers) == ["c", "a", "b"]

    def test_distinct_never_exceeds_total(self):
        report = FunctionReport()
        for token in ["a", "b", "a", 1, 1.5, "b", None]:
            record(report, "operands", token)
        item = report.halstead.operands
        assert item.distinct == len(item.identifiers)
        assert item.distinct <= item.total

    def test_reserved_name_keeps_its_text(self):
        report = FunctionReport()
        record(report, "operators", "distinct")
        record(report, "operators", "total")
        item = report.halstead.operators
        assert item.distinct == 2
        assert item.total == 2
        assert item.names == ["distinct", "total"]

    def test_reserved_name_still_deduplicates(self):
        report = FunctionReport()
        record(report, "operands", "identifiers")
        record(report, "operands", "identifiers")
        assert report.halstead.operands.distinct == 1
        assert report.halstead.operands.total == 2

    def test_underscored_token_distinct_from_reserved_name(self):
        report = FunctionReport()
        record(report, "operands", "length")
        record(report, "operands", "_length")
        item = report.halstead.operands
        assert item.distinct == 2
        assert item.total == 2
        assert item.names == ["length", "_length"]

    def test_reserved_name_serializes_as_written(self):
        report = FunctionReport()
        record(report, "operators", "time")
        assert report.halstead.operators.to_dict()["identifiers"] == ["time"]

    def test_unknown_metric_rejected(self):
        with pytest.raises(ValueError):
            record(FunctionReport(), "keywords", "if")


class TestDisambiguate:
    def test_plain_identifier_unchanged(self):
        assert disambiguate("foo") == "foo"

    def test_non_string_unchanged(self):
        assert disambiguate(42) == 42

    def test_field_names_get_reserved_key(self):
        assert disambiguate("operators") == ReservedKey("operators")
        assert disambiguate("effort") == ReservedKey("effort")

    def test_reserved_key_never_equals_token_text(self):
        assert disambiguate("length") != "_length"
        assert disambiguate("length") != "length"


class TestDeriveHalstead:
    """Tests for the derived Halstead measures."""

    def test_empty_state_is_all_zero(self):
        state = derive_halstead(HalsteadState())
        assert state.length == 0
        assert state.vocabulary == 0
        assert state.difficulty == 0
        assert state.volume == 0
        assert state.effort == 0
        assert state.bugs == 0
        assert state.time == 0

    def test_known_values(self):
        # n1=2, N1=2, n2=2, N2=2
        state = derive_halstead(_state(2, 2, 2, 2))
        assert state.length == 4
        assert state.vocabulary == 4
        assert state.difficulty == pytest.approx(1.0)
        assert state.volume == pytest.approx(8.0)
        assert state.effort == pytest.approx(8.0)
        assert state.bugs == pytest.approx(8.0 / 3000)
        assert state.time == pytest.approx(8.0 / 18)

    def test_difficulty_uses_operand_ratio(self):
        # n1=4, n2=2, N2=6 -> D = 2 * 3
        state = derive_halstead(_state(4, 5, 2, 6))
        assert state.difficulty == pytest.approx(6.0)
        assert state.volume == pytest.approx(11 * math.log2(6))

    def test_no_operands_ratio_is_one(self):
        state = derive_halstead(_state(3, 4, 0, 0))
        assert state.difficulty == pytest.approx(1.5)

    def test_single_token_vocabulary_has_zero_volume(self):
        state = derive_halstead(_state(1, 5, 0, 0))
        assert state.vocabulary == 1
        assert state.volume == 0
        assert state.effort == 0
