"""Unit tests for permission conditions."""

import pytest

from agrigov.domain.value_objects import Condition, ConditionOperator


class TestConditionConstruction:
    def test_operator_string_is_converted(self) -> None:
        cond = Condition("amount", "less_than", 100)
        assert cond.operator is ConditionOperator.LESS_THAN

    def test_unknown_operator_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown condition operator"):
            Condition("amount", "between", (1, 2))

    def test_empty_field_raises(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            Condition("", ConditionOperator.EQUALS, 1)

    def test_in_requires_collection(self) -> None:
        with pytest.raises(ValueError, match="collection"):
            Condition("farm", ConditionOperator.IN, "north")


class TestConditionEvaluate:
    @pytest.mark.parametrize(
        ("operator", "expected", "actual", "result"),
        [
            (ConditionOperator.EQUALS, "north", "north", True),
            (ConditionOperator.EQUALS, "north", "south", False),
            (ConditionOperator.NOT_EQUALS, "north", "south", True),
            (ConditionOperator.IN, ["north", "east"], "east", True),
            (ConditionOperator.IN, ["north", "east"], "west", False),
            (ConditionOperator.NOT_IN, ["north"], "west", True),
            (ConditionOperator.CONTAINS, "cattle", ["cattle", "sheep"], True),
            (ConditionOperator.CONTAINS, "goats", ["cattle", "sheep"], False),
            (ConditionOperator.GREATER_THAN, 10, 11, True),
            (ConditionOperator.GREATER_THAN, 10, 10, False),
            (ConditionOperator.LESS_THAN, 10000, 9999.5, True),
            (ConditionOperator.LESS_THAN, 10000, 10000, False),
        ],
    )
    def test_operators(self, operator, expected, actual, result) -> None:
        assert Condition("f", operator, expected).evaluate({"f": actual}) is result

    def test_missing_field_is_false(self) -> None:
        assert Condition("f", ConditionOperator.NOT_EQUALS, 1).evaluate({}) is False

    def test_incomparable_values_are_false(self) -> None:
        assert Condition("f", ConditionOperator.GREATER_THAN, 10).evaluate({"f": "eleven"}) is False
