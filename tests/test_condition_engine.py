from tracker.condition_engine import (
    CONDITIONS_MET_REASON,
    CONDITIONS_NOT_MET_REASON,
    NO_CONDITIONS_REASON,
    evaluate_multiple_tasks,
    evaluate_task_conditions,
    fold_rule_results,
)
from tracker.models import (
    Comparator,
    ConditionRule,
    CoreTask,
    DailyMetricSnapshot,
    LogicOperator,
    Metric,
)


def _snapshot(**overrides) -> DailyMetricSnapshot:
    values = dict(mood=5, energy=5, productivity=5, sleep=7.0, exercise=False)
    values.update(overrides)
    return DailyMetricSnapshot(**values)


def _task(task_id="t1", rules=None, default_active=True) -> CoreTask:
    return CoreTask.new(f"task-{task_id}", task_id=task_id, condition_rules=rules, default_active=default_active)


def test_no_rules_uses_default_active_and_never_skips():
    for default_active in (True, False):
        for snapshot in (_snapshot(), _snapshot(mood=1, exercise=True)):
            result = evaluate_task_conditions(_task(default_active=default_active), snapshot)

            assert result.is_active is default_active
            assert result.is_skipped is False
            assert result.evaluated_rules == []
            assert result.final_reason == NO_CONDITIONS_REASON


def test_fold_is_left_to_right_without_precedence():
    rules = [
        ConditionRule(Metric.ENERGY, Comparator.LT, 5),
        ConditionRule(Metric.MOOD, Comparator.LT, 5, LogicOperator.OR),
        ConditionRule(Metric.SLEEP, Comparator.GE, 7, LogicOperator.AND),
    ]

    result = evaluate_task_conditions(_task(rules=rules), _snapshot(energy=3, mood=8, sleep=8))

    assert [e.result for e in result.evaluated_rules] == [True, False, True]
    assert result.is_active is True
    assert result.is_skipped is False
    assert result.final_reason == CONDITIONS_MET_REASON


def test_fold_differs_from_and_before_or_grouping():
    # A OR B AND C with A=true, B=true, C=false:
    # sequential ((A or B) and C) = false; precedence (A or (B and C)) = true
    assert fold_rule_results([True, True, False], [None, LogicOperator.OR, LogicOperator.AND]) is False


def test_missing_or_unknown_operator_combines_as_and():
    assert fold_rule_results([True, False], [None, None]) is False
    assert fold_rule_results([True, False], [None, "XOR"]) is False
    assert fold_rule_results([False, True], [None, "OR"]) is True


def test_operator_on_first_rule_is_ignored():
    assert fold_rule_results([False], [LogicOperator.OR]) is False


def test_every_rule_is_evaluated_even_after_verdict_is_settled():
    rules = [
        ConditionRule(Metric.ENERGY, Comparator.GT, 9),
        ConditionRule(Metric.MOOD, Comparator.EQ, 5),
        ConditionRule.from_dict({"metric": "bogus", "comparator": "<", "value": 1, "logicOperator": "AND"}),
    ]

    result = evaluate_task_conditions(_task(rules=rules), _snapshot())

    assert len(result.evaluated_rules) == 3
    assert result.evaluated_rules[2].reason == "Unknown metric: bogus"
    assert result.is_active is False
    assert result.final_reason == CONDITIONS_NOT_MET_REASON


def test_single_unknown_metric_rule_skips_task():
    rule = ConditionRule.from_dict({"metric": "bogus", "comparator": "<", "value": 1})

    result = evaluate_task_conditions(_task(rules=[rule], default_active=True), _snapshot())

    assert result.is_active is False
    assert result.is_skipped is True


def test_evaluate_multiple_tasks_keeps_order_and_ids():
    tasks = [
        _task("a", rules=[ConditionRule(Metric.EXERCISE, Comparator.EQ, False)]),
        _task("b"),
        _task("c", rules=[ConditionRule(Metric.SLEEP, Comparator.LT, 6)]),
    ]

    results = evaluate_multiple_tasks(tasks, _snapshot())

    assert [r.task_id for r in results] == ["a", "b", "c"]
    assert [r.is_active for r in results] == [True, True, False]
