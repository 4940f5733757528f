"""
Condition Evaluation Engine.

Folds a task's ordered rule list into one "should be active" verdict.
The fold is strictly left to right with no operator precedence:
[A, B(OR), C(AND)] is ((A or B) and C).
"""
from typing import List, Sequence

from tracker.models import (
    CoreTask,
    DailyMetricSnapshot,
    LogicOperator,
    RuleEvaluation,
    TaskEvaluationResult,
    coerce_enum,
)
from tracker.rule_evaluator import evaluate_rule

NO_CONDITIONS_REASON = "No conditions defined, using default active state"
CONDITIONS_MET_REASON = "Conditions met - task is active"
CONDITIONS_NOT_MET_REASON = "Conditions not met - task is skipped"


def fold_rule_results(results: Sequence[bool], operators: Sequence) -> bool:
    """
    Combine per-rule results left to right.

    operators[i] is the logic operator of rule i; the first one is ignored
    and anything other than OR combines as AND.
    """
    verdict = results[0]
    for result, operator in zip(results[1:], operators[1:]):
        if coerce_enum(LogicOperator, operator) is LogicOperator.OR:
            verdict = verdict or result
        else:
            verdict = verdict and result
    return verdict


def evaluate_task_conditions(task: CoreTask, snapshot: DailyMetricSnapshot) -> TaskEvaluationResult:
    """Evaluate all condition rules of a task against a snapshot."""
    if not task.condition_rules:
        return TaskEvaluationResult(
            task_id=task.id,
            is_active=task.default_active,
            is_skipped=False,
            final_reason=NO_CONDITIONS_REASON,
        )

    evaluated: List[RuleEvaluation] = []
    for rule in task.condition_rules:
        outcome = evaluate_rule(rule, snapshot)
        evaluated.append(RuleEvaluation(rule=rule, result=outcome.result, reason=outcome.reason))

    verdict = fold_rule_results(
        [e.result for e in evaluated],
        [rule.logic_operator for rule in task.condition_rules],
    )

    return TaskEvaluationResult(
        task_id=task.id,
        is_active=verdict,
        is_skipped=not verdict,
        evaluated_rules=evaluated,
        final_reason=CONDITIONS_MET_REASON if verdict else CONDITIONS_NOT_MET_REASON,
    )


def evaluate_multiple_tasks(
    tasks: Sequence[CoreTask], snapshot: DailyMetricSnapshot
) -> List[TaskEvaluationResult]:
    return [evaluate_task_conditions(task, snapshot) for task in tasks]
