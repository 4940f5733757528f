"""
Ready-made condition rule sets for common supplement scenarios, and the
task factory used when the user adds a new item.
"""
from typing import Dict, List, Optional

from tracker.models import (
    Comparator,
    ConditionRule,
    CoreTask,
    LogicOperator,
    Metric,
    Priority,
    TaskType,
)

SAMPLE_CONDITION_RULES: Dict[str, List[ConditionRule]] = {
    "low_energy": [
        ConditionRule(Metric.ENERGY, Comparator.LT, 5),
    ],
    "low_mood": [
        ConditionRule(Metric.MOOD, Comparator.LT, 5),
    ],
    "poor_sleep": [
        ConditionRule(Metric.SLEEP, Comparator.LT, 7),
    ],
    "low_energy_or_mood": [
        ConditionRule(Metric.ENERGY, Comparator.LT, 5),
        ConditionRule(Metric.MOOD, Comparator.LT, 5, LogicOperator.OR),
    ],
    "high_energy_and_good_mood": [
        ConditionRule(Metric.ENERGY, Comparator.GT, 7),
        ConditionRule(Metric.MOOD, Comparator.GT, 7, LogicOperator.AND),
    ],
    "no_exercise": [
        ConditionRule(Metric.EXERCISE, Comparator.EQ, False),
    ],
}


def get_preset(name: str) -> List[ConditionRule]:
    """Return a copy of a named preset; KeyError for unknown names."""
    return list(SAMPLE_CONDITION_RULES[name])


def create_task(
    title: str = "New Supplement",
    category: str = "general",
    *,
    task_type: TaskType = TaskType.SUPPLEMENT,
    description: str = "",
    priority: Priority = Priority.MEDIUM,
    condition_rules: Optional[List[ConditionRule]] = None,
    default_active: bool = True,
    task_id: Optional[str] = None,
    dosage: Optional[str] = None,
    timing: Optional[str] = None,
    frequency: Optional[str] = None,
) -> CoreTask:
    return CoreTask.new(
        title,
        category,
        task_type=task_type,
        description=description,
        priority=priority,
        condition_rules=condition_rules,
        default_active=default_active,
        task_id=task_id,
        dosage=dosage,
        timing=timing,
        frequency=frequency,
    )
