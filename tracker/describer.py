"""
Human-readable rendering of condition rules.
"""
from enum import Enum
from typing import Any, Sequence

from tracker.models import ConditionRule


def format_value(value: Any) -> str:
    """Render a metric value the way the tracker UI displays it."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe_rule(rule: ConditionRule) -> str:
    return f"{format_value(rule.metric)} {format_value(rule.comparator)} {format_value(rule.value)}"


def describe_condition_rules(rules: Sequence[ConditionRule]) -> str:
    """
    Describe a rule list for the skipped-task explanation.

    Rules after the first carry their logic operator as a prefix when one is
    set; an absent operator is shown without a prefix even though it folds
    as AND.
    """
    if not rules:
        return "No conditions"

    descriptions = []
    for index, rule in enumerate(rules):
        description = describe_rule(rule)
        if index > 0 and rule.logic_operator:
            description = f"{format_value(rule.logic_operator)} {description}"
        descriptions.append(description)

    return " ".join(descriptions)
