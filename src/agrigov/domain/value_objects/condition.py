"""Permission conditions - closed set of operators evaluated against a context."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ConditionOperator(StrEnum):
    """Operators a permission condition may use."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


def _equals(actual: Any, expected: Any) -> bool:
    return actual == expected


def _not_equals(actual: Any, expected: Any) -> bool:
    return actual != expected


def _in(actual: Any, expected: Any) -> bool:
    return actual in expected


def _not_in(actual: Any, expected: Any) -> bool:
    return actual not in expected


def _contains(actual: Any, expected: Any) -> bool:
    return expected in actual


def _greater_than(actual: Any, expected: Any) -> bool:
    return actual > expected


def _less_than(actual: Any, expected: Any) -> bool:
    return actual < expected


EVALUATORS: Mapping[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _equals,
    ConditionOperator.NOT_EQUALS: _not_equals,
    ConditionOperator.IN: _in,
    ConditionOperator.NOT_IN: _not_in,
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.GREATER_THAN: _greater_than,
    ConditionOperator.LESS_THAN: _less_than,
}

_MISSING = object()


@dataclass(frozen=True)
class Condition:
    """Condition on a context field, e.g. `amount less_than 10000`.

    The operator is validated on construction: an unknown operator raises
    ValueError instead of silently never matching.
    """

    field: str
    operator: ConditionOperator
    value: Any
    description: str = ""

    def __post_init__(self) -> None:
        if not self.field:
            raise ValueError("Condition field must be a non-empty string")
        try:
            operator = ConditionOperator(self.operator)
        except ValueError:
            raise ValueError(f"Unknown condition operator: {self.operator!r}") from None
        object.__setattr__(self, "operator", operator)
        if operator in (ConditionOperator.IN, ConditionOperator.NOT_IN) and isinstance(
            self.value, str
        ):
            raise ValueError(f"Operator {operator} requires a collection value")

    def evaluate(self, context: Mapping[str, Any]) -> bool:
        """Return True when the context satisfies the condition.

        A missing field or incomparable values never satisfy a condition.
        """
        actual = context.get(self.field, _MISSING)
        if actual is _MISSING:
            return False
        try:
            return bool(EVALUATORS[self.operator](actual, self.value))
        except TypeError:
            return False
