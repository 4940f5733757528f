"""
Core Data Models for the daily tracker.

Daily metric snapshots, condition rules, recurring tasks and the transient
evaluation results produced for them.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Metric(str, Enum):
    MOOD = "mood"
    ENERGY = "energy"
    PRODUCTIVITY = "productivity"
    SLEEP = "sleep"
    EXERCISE = "exercise"

    @property
    def is_boolean(self) -> bool:
        return self is Metric.EXERCISE


NUMERIC_METRICS = (Metric.MOOD, Metric.ENERGY, Metric.PRODUCTIVITY, Metric.SLEEP)
BOOLEAN_METRICS = (Metric.EXERCISE,)


class Comparator(str, Enum):
    LT = "<"
    GT = ">"
    EQ = "="
    LE = "<="
    GE = ">="
    NE = "!="

    @property
    def is_ordering(self) -> bool:
        return self in (Comparator.LT, Comparator.GT, Comparator.LE, Comparator.GE)


class LogicOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class TaskType(str, Enum):
    SUPPLEMENT = "supplement"
    ROUTINE = "routine"
    GOAL = "goal"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def coerce_enum(enum_cls, raw):
    """Return the enum member for raw, or raw itself when unrecognized."""
    if raw is None or isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except (ValueError, TypeError):
        return raw


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class DailyMetricSnapshot:
    """One day's recorded metrics (read-only for the engine)."""
    mood: int
    energy: int
    productivity: int
    sleep: float
    exercise: bool
    date: Optional[str] = None  # ISO date the entry belongs to

    def value_of(self, metric: Metric) -> Union[int, float, bool]:
        return getattr(self, metric.value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyMetricSnapshot":
        return cls(
            mood=data.get("mood", 0),
            energy=data.get("energy", 0),
            productivity=data.get("productivity", 0),
            sleep=data.get("sleep", 0),
            exercise=bool(data.get("exercise", False)),
            date=data.get("date"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "mood": self.mood,
            "energy": self.energy,
            "productivity": self.productivity,
            "sleep": self.sleep,
            "exercise": self.exercise,
        }
        if self.date is not None:
            data["date"] = self.date
        return data


@dataclass(frozen=True)
class ConditionRule:
    """
    A single comparison of one metric against a threshold.

    metric/comparator/logic_operator hold enum members when recognized and
    the raw stored string otherwise, so malformed persisted rules still load
    and are resolved by the evaluator's soft-failure path.
    """
    metric: Union[Metric, str]
    comparator: Union[Comparator, str]
    value: Union[int, float, bool]
    logic_operator: Optional[Union[LogicOperator, str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConditionRule":
        return cls(
            metric=coerce_enum(Metric, data.get("metric")),
            comparator=coerce_enum(Comparator, data.get("comparator")),
            value=data.get("value"),
            logic_operator=coerce_enum(LogicOperator, data.get("logicOperator")),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "metric": _enum_value(self.metric),
            "comparator": _enum_value(self.comparator),
            "value": self.value,
        }
        if self.logic_operator is not None:
            data["logicOperator"] = _enum_value(self.logic_operator)
        return data


@dataclass
class CoreTask:
    """
    A recurring item (supplement / routine / goal).

    is_active and is_skipped are complementary for conditional tasks;
    is_overridden freezes them against automatic evaluation;
    is_completed is independent of both.
    """
    id: str
    title: str
    description: str = ""
    task_type: TaskType = TaskType.SUPPLEMENT
    category: str = "general"
    priority: Priority = Priority.MEDIUM
    condition_rules: List[ConditionRule] = field(default_factory=list)
    default_active: bool = True
    is_active: bool = True
    is_skipped: bool = False
    is_overridden: bool = False
    is_completed: bool = False
    streak_count: int = 0
    # supplement details; None when the record never had them
    dosage: Optional[str] = None
    timing: Optional[str] = None  # morning | afternoon | evening | with_meal | before_bed
    frequency: Optional[str] = None  # daily | weekly | as_needed
    # stored keys this model does not know, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_condition_rules(self) -> bool:
        return bool(self.condition_rules)

    @classmethod
    def new(
        cls,
        title: str,
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
    ) -> "CoreTask":
        """Create a task in its initial lifecycle state."""
        supplement = task_type is TaskType.SUPPLEMENT
        return cls(
            id=task_id or f"task_{uuid.uuid4().hex[:12]}",
            title=title,
            description=description,
            task_type=task_type,
            category=category,
            priority=priority,
            condition_rules=list(condition_rules or []),
            default_active=default_active,
            is_active=default_active,
            is_skipped=not default_active,
            is_overridden=False,
            is_completed=False,
            dosage=dosage if dosage is not None else ("" if supplement else None),
            timing=timing or ("morning" if supplement else None),
            frequency=frequency or ("daily" if supplement else None),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoreTask":
        default_active = bool(data.get("defaultActive", True))
        is_active = bool(data.get("isActive", default_active))
        extra = {key: value for key, value in data.items() if key not in TASK_RECORD_KEYS}
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            task_type=coerce_enum(TaskType, data.get("type", TaskType.SUPPLEMENT.value)),
            category=data.get("category", "general"),
            priority=coerce_enum(Priority, data.get("priority", Priority.MEDIUM.value)),
            condition_rules=[ConditionRule.from_dict(r) for r in data.get("conditionRules") or []],
            default_active=default_active,
            is_active=is_active,
            is_skipped=bool(data.get("isSkipped", not is_active)),
            is_overridden=bool(data.get("isOverridden", False)),
            is_completed=bool(data.get("isCompleted", False)),
            streak_count=int(data.get("streakCount", 0) or 0),
            dosage=data.get("dosage"),
            timing=data.get("timing"),
            frequency=data.get("frequency"),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": _enum_value(self.task_type),
            "category": self.category,
            "priority": _enum_value(self.priority),
            "conditionRules": [r.to_dict() for r in self.condition_rules],
            "defaultActive": self.default_active,
            "isActive": self.is_active,
            "isSkipped": self.is_skipped,
            "isOverridden": self.is_overridden,
            "isCompleted": self.is_completed,
            "streakCount": self.streak_count,
        })
        for key in ("dosage", "timing", "frequency"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


TASK_RECORD_KEYS = frozenset({
    "id", "title", "description", "type", "category", "priority", "conditionRules",
    "defaultActive", "isActive", "isSkipped", "isOverridden", "isCompleted", "streakCount",
    "dosage", "timing", "frequency",
})


@dataclass(frozen=True)
class RuleOutcome:
    result: bool
    reason: str


@dataclass
class RuleEvaluation:
    """Diagnostic entry for one evaluated rule."""
    rule: ConditionRule
    result: bool
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.rule.to_dict(), "result": self.result, "reason": self.reason}


@dataclass
class TaskEvaluationResult:
    """Transient, never persisted. Computed even for overridden tasks."""
    task_id: str
    is_active: bool
    is_skipped: bool
    evaluated_rules: List[RuleEvaluation] = field(default_factory=list)
    final_reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taskId": self.task_id,
            "isActive": self.is_active,
            "isSkipped": self.is_skipped,
            "evaluatedRules": [e.to_dict() for e in self.evaluated_rules],
            "finalReason": self.final_reason,
        }
