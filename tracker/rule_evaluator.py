"""
Rule Evaluator for the daily tracker.

Evaluates one condition rule against one day's metrics. Malformed rules
(unknown metric or comparator) never raise: they evaluate to False with a
diagnostic reason.
"""
from numbers import Real
from typing import Any, Optional

from tracker.describer import format_value
from tracker.logger import get_logger
from tracker.models import (
    Comparator,
    ConditionRule,
    DailyMetricSnapshot,
    Metric,
    RuleOutcome,
    coerce_enum,
)

logger = get_logger("rule_evaluator")


def _as_number(value: Any) -> Optional[float]:
    # booleans order as 0/1
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Real):
        return value
    return None


def _strictly_equal(actual: Any, expected: Any) -> bool:
    # a boolean never equals a number
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def compare(actual: Any, comparator: Comparator, expected: Any) -> bool:
    """Apply comparator; operands that cannot be ordered compare False."""
    if comparator is Comparator.EQ:
        return _strictly_equal(actual, expected)
    if comparator is Comparator.NE:
        return not _strictly_equal(actual, expected)

    left, right = _as_number(actual), _as_number(expected)
    if left is None or right is None:
        return False
    if comparator is Comparator.LT:
        return left < right
    if comparator is Comparator.GT:
        return left > right
    if comparator is Comparator.LE:
        return left <= right
    return left >= right


def evaluate_rule(rule: ConditionRule, snapshot: DailyMetricSnapshot) -> RuleOutcome:
    """
    Evaluate a single condition rule against a metric snapshot.

    Returns:
        RuleOutcome with the boolean result and a reason such as
        "energy(3) < 5 = true".
    """
    metric = coerce_enum(Metric, rule.metric)
    if not isinstance(metric, Metric):
        logger.warning("Unknown metric in condition rule: %r", rule.metric)
        return RuleOutcome(False, f"Unknown metric: {format_value(rule.metric)}")

    comparator = coerce_enum(Comparator, rule.comparator)
    if not isinstance(comparator, Comparator):
        logger.warning("Unknown comparator in condition rule: %r", rule.comparator)
        return RuleOutcome(False, f"Unknown comparator: {format_value(rule.comparator)}")

    actual = snapshot.value_of(metric)
    result = compare(actual, comparator, rule.value)
    reason = (
        f"{metric.value}({format_value(actual)}) {comparator.value} "
        f"{format_value(rule.value)} = {format_value(result)}"
    )
    return RuleOutcome(result, reason)
