# Conditional task activation: rule evaluation, verdict folding and the
# override-aware task state machine, plus the repository/service around them.

from tracker.condition_engine import evaluate_multiple_tasks, evaluate_task_conditions
from tracker.describer import describe_condition_rules
from tracker.models import (
    Comparator,
    ConditionRule,
    CoreTask,
    DailyMetricSnapshot,
    LogicOperator,
    Metric,
    TaskEvaluationResult,
)
from tracker.rule_evaluator import evaluate_rule
from tracker.rule_validator import validate_condition_rules
from tracker.task_state import (
    load_for_date,
    override_status,
    reset_override,
    toggle_completion,
    update_tasks_from_evaluation,
)

__all__ = [
    "Comparator",
    "ConditionRule",
    "CoreTask",
    "DailyMetricSnapshot",
    "LogicOperator",
    "Metric",
    "TaskEvaluationResult",
    "describe_condition_rules",
    "evaluate_multiple_tasks",
    "evaluate_rule",
    "evaluate_task_conditions",
    "load_for_date",
    "override_status",
    "reset_override",
    "toggle_completion",
    "update_tasks_from_evaluation",
    "validate_condition_rules",
]
