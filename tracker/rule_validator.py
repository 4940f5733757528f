"""
Authoring-time validation of condition rules.

Advisory only: evaluation never calls this, and malformed stored rules go
through the evaluator's soft-failure path instead.
"""
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Sequence

from tracker.describer import format_value
from tracker.models import Comparator, ConditionRule, LogicOperator, Metric, coerce_enum


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self):
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_condition_rules(rules: Sequence[ConditionRule]) -> ValidationResult:
    """
    Check every rule and report all violations, tagged with the 1-based rule
    index. Never raises.
    """
    errors: List[str] = []

    for index, rule in enumerate(rules or []):
        position = index + 1
        metric = coerce_enum(Metric, rule.metric)
        comparator = coerce_enum(Comparator, rule.comparator)

        if not isinstance(metric, Metric):
            errors.append(f"Invalid metric '{format_value(rule.metric)}' in rule {position}")

        if not isinstance(comparator, Comparator):
            errors.append(f"Invalid comparator '{format_value(rule.comparator)}' in rule {position}")

        if metric is Metric.EXERCISE:
            if not isinstance(rule.value, bool):
                errors.append(f"Exercise metric requires boolean value in rule {position}")
            if isinstance(comparator, Comparator) and comparator.is_ordering:
                errors.append(
                    f"Comparator '{comparator.value}' is not meaningful for boolean metric "
                    f"'exercise' in rule {position}"
                )
        elif not _is_number(rule.value):
            errors.append(f"Metric '{format_value(rule.metric)}' requires numeric value in rule {position}")

        if rule.logic_operator is not None:
            if index == 0:
                errors.append("Logic operator is not allowed on the first rule (rule 1)")
            elif not isinstance(coerce_enum(LogicOperator, rule.logic_operator), LogicOperator):
                errors.append(
                    f"Invalid logic operator '{format_value(rule.logic_operator)}' in rule {position}"
                )

    return ValidationResult(is_valid=not errors, errors=errors)
