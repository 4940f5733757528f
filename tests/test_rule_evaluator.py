import pytest

from tracker.models import Comparator, ConditionRule, DailyMetricSnapshot, Metric
from tracker.rule_evaluator import evaluate_rule


def _snapshot(**overrides) -> DailyMetricSnapshot:
    values = dict(mood=6, energy=3, productivity=7, sleep=8.0, exercise=False)
    values.update(overrides)
    return DailyMetricSnapshot(**values)


@pytest.mark.parametrize(
    "metric, value",
    [
        (Metric.MOOD, 6),
        (Metric.ENERGY, 3),
        (Metric.PRODUCTIVITY, 7),
        (Metric.SLEEP, 8.0),
        (Metric.EXERCISE, False),
    ],
)
def test_equal_comparator_matches_snapshot_value(metric, value):
    outcome = evaluate_rule(ConditionRule(metric, Comparator.EQ, value), _snapshot())
    assert outcome.result is True


def test_reason_string_shows_actual_value_and_result():
    outcome = evaluate_rule(ConditionRule(Metric.ENERGY, Comparator.LT, 5), _snapshot())

    assert outcome.result is True
    assert outcome.reason == "energy(3) < 5 = true"


def test_reason_renders_booleans_and_whole_floats_like_the_ui():
    outcome = evaluate_rule(ConditionRule(Metric.EXERCISE, Comparator.NE, True), _snapshot())
    assert outcome.reason == "exercise(false) != true = true"

    outcome = evaluate_rule(ConditionRule(Metric.SLEEP, Comparator.GE, 7.5), _snapshot(sleep=6.5))
    assert outcome.result is False
    assert outcome.reason == "sleep(6.5) >= 7.5 = false"


@pytest.mark.parametrize(
    "comparator, threshold, expected",
    [
        (Comparator.LT, 5, False),
        (Comparator.GT, 5, True),
        (Comparator.LE, 6, True),
        (Comparator.GE, 7, False),
        (Comparator.NE, 6, False),
    ],
)
def test_numeric_comparators(comparator, threshold, expected):
    outcome = evaluate_rule(ConditionRule(Metric.MOOD, comparator, threshold), _snapshot())
    assert outcome.result is expected


def test_unknown_metric_fails_closed_with_reason():
    rule = ConditionRule.from_dict({"metric": "bogus", "comparator": "<", "value": 1})

    outcome = evaluate_rule(rule, _snapshot())

    assert outcome.result is False
    assert outcome.reason == "Unknown metric: bogus"


def test_unknown_comparator_fails_closed_with_reason():
    rule = ConditionRule.from_dict({"metric": "mood", "comparator": "~", "value": 1})

    outcome = evaluate_rule(rule, _snapshot())

    assert outcome.result is False
    assert outcome.reason == "Unknown comparator: ~"


def test_plain_string_metric_is_accepted():
    outcome = evaluate_rule(ConditionRule("mood", "<", 7), _snapshot())
    assert outcome.result is True


def test_boolean_never_equals_number():
    assert evaluate_rule(ConditionRule(Metric.EXERCISE, Comparator.EQ, 0), _snapshot()).result is False
    assert evaluate_rule(ConditionRule(Metric.EXERCISE, Comparator.NE, 0), _snapshot()).result is True


def test_ordering_on_boolean_metric_is_deterministic():
    snapshot = _snapshot(exercise=True)

    assert evaluate_rule(ConditionRule(Metric.EXERCISE, Comparator.GT, True), snapshot).result is False
    assert evaluate_rule(ConditionRule(Metric.EXERCISE, Comparator.GT, False), snapshot).result is True


def test_non_numeric_threshold_compares_false_without_raising():
    outcome = evaluate_rule(ConditionRule(Metric.MOOD, Comparator.LT, "high"), _snapshot())

    assert outcome.result is False
    assert outcome.reason == "mood(6) < high = false"
