"""
Task State Machine.

Reconciles evaluation verdicts with the persisted per-task flags. A task is
in one of AutoActive / AutoSkipped / OverriddenActive / OverriddenSkipped,
crossed with the independent completion bit.

Every operation returns a new list of copied tasks and leaves its input
untouched. Unknown task ids and missing snapshots never raise; they degrade
to a no-op or to the default-active fallback.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from tracker.condition_engine import evaluate_multiple_tasks, evaluate_task_conditions
from tracker.logger import get_logger
from tracker.models import CoreTask, DailyMetricSnapshot, TaskEvaluationResult

logger = get_logger("task_state")

STATUS_ACTIVE = "active"
STATUS_SKIPPED = "skipped"
STATUS_COMPLETED = "completed"
STATUS_OVERRIDDEN = "overridden"


@dataclass
class LoadResult:
    tasks: List[CoreTask]
    evaluation_results: List[TaskEvaluationResult] = field(default_factory=list)
    snapshot: Optional[DailyMetricSnapshot] = None


@dataclass(frozen=True)
class StatusSummary:
    total: int
    active: int
    skipped: int
    completed: int
    overridden: int
    pending: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "active": self.active,
            "skipped": self.skipped,
            "completed": self.completed,
            "overridden": self.overridden,
            "pending": self.pending,
        }


def _fallback_flags(task: CoreTask) -> CoreTask:
    # no data cannot satisfy a condition, so conditional tasks count as skipped
    return replace(
        task,
        is_active=task.default_active,
        is_skipped=(not task.default_active) and task.has_condition_rules,
    )


def _with_task(tasks: Sequence[CoreTask], task_id: str, change) -> List[CoreTask]:
    """Copy tasks, applying change() to the one matching task_id."""
    updated = []
    found = False
    for task in tasks:
        if task.id == task_id:
            found = True
            updated.append(change(task))
        else:
            updated.append(replace(task))
    if not found:
        logger.debug("Task %s not found, nothing to change", task_id)
    return updated


def update_tasks_from_evaluation(
    tasks: Sequence[CoreTask], results: Sequence[TaskEvaluationResult]
) -> List[CoreTask]:
    """
    Write evaluation verdicts back to non-overridden tasks.

    Overridden tasks keep their frozen flags; the result is still available
    to callers for display.
    """
    by_id = {result.task_id: result for result in results}
    updated = []
    for task in tasks:
        result = by_id.get(task.id)
        if result is not None and not task.is_overridden:
            updated.append(replace(task, is_active=result.is_active, is_skipped=result.is_skipped))
        else:
            updated.append(replace(task))
    return updated


def override_status(tasks: Sequence[CoreTask], task_id: str, force_active: bool) -> List[CoreTask]:
    """Force a task active or skipped until the override is reset."""
    logger.info("Override task %s -> %s", task_id, "active" if force_active else "skipped")
    return _with_task(
        tasks,
        task_id,
        lambda task: replace(
            task, is_overridden=True, is_active=force_active, is_skipped=not force_active
        ),
    )


def reset_override(
    tasks: Sequence[CoreTask], task_id: str, snapshot: Optional[DailyMetricSnapshot]
) -> List[CoreTask]:
    """
    Return a task to automatic evaluation and re-evaluate it immediately.

    Without a snapshot the task falls back to its default active state.
    """
    def change(task: CoreTask) -> CoreTask:
        task = replace(task, is_overridden=False)
        if snapshot is None:
            return _fallback_flags(task)
        result = evaluate_task_conditions(task, snapshot)
        return replace(task, is_active=result.is_active, is_skipped=result.is_skipped)

    logger.info("Reset override for task %s", task_id)
    return _with_task(tasks, task_id, change)


def toggle_completion(tasks: Sequence[CoreTask], task_id: str) -> List[CoreTask]:
    return _with_task(tasks, task_id, lambda task: replace(task, is_completed=not task.is_completed))


def apply_missing_snapshot_fallback(tasks: Sequence[CoreTask]) -> List[CoreTask]:
    """Default-active fallback for a day without recorded metrics."""
    return [replace(task) if task.is_overridden else _fallback_flags(task) for task in tasks]


def process_tasks_for_snapshot(
    tasks: Sequence[CoreTask], snapshot: DailyMetricSnapshot
) -> List[CoreTask]:
    return update_tasks_from_evaluation(tasks, evaluate_multiple_tasks(tasks, snapshot))


def load_for_date(
    tasks: Sequence[CoreTask], snapshot: Optional[DailyMetricSnapshot]
) -> LoadResult:
    """
    Merge a day's metrics into the stored task list.

    Args:
        tasks: tasks as loaded by the repository
        snapshot: the day's metrics, or None when nothing was recorded

    Returns:
        LoadResult with the merged tasks and, when a snapshot exists, the
        evaluation results for every task (overridden ones included).
    """
    if snapshot is None:
        logger.info("No metrics recorded, using default active states for %d tasks", len(tasks))
        return LoadResult(tasks=apply_missing_snapshot_fallback(tasks))

    results = evaluate_multiple_tasks(tasks, snapshot)
    return LoadResult(
        tasks=update_tasks_from_evaluation(tasks, results),
        evaluation_results=results,
        snapshot=snapshot,
    )


def summarize_status(tasks: Sequence[CoreTask]) -> StatusSummary:
    active = sum(1 for t in tasks if t.is_active and not t.is_skipped)
    completed = sum(1 for t in tasks if t.is_completed)
    return StatusSummary(
        total=len(tasks),
        active=active,
        skipped=sum(1 for t in tasks if t.is_skipped),
        completed=completed,
        overridden=sum(1 for t in tasks if t.is_overridden),
        pending=active - completed,
    )


def filter_tasks_by_status(tasks: Sequence[CoreTask], status: str) -> List[CoreTask]:
    """Select tasks by display status; an unknown status selects everything."""
    if status == STATUS_ACTIVE:
        return [t for t in tasks if t.is_active and not t.is_skipped]
    if status == STATUS_SKIPPED:
        return [t for t in tasks if t.is_skipped and not t.is_overridden]
    if status == STATUS_COMPLETED:
        return [t for t in tasks if t.is_completed]
    if status == STATUS_OVERRIDDEN:
        return [t for t in tasks if t.is_overridden]
    return list(tasks)


def skipped_with_override(tasks: Sequence[CoreTask]) -> List[CoreTask]:
    """Skipped conditional tasks the user may still force active."""
    return [
        t for t in tasks
        if t.is_skipped and not t.is_overridden and t.has_condition_rules
    ]


TIMING_LABELS = {
    "morning": "Morning",
    "afternoon": "Afternoon",
    "evening": "Evening",
    "with_meal": "With meals",
    "before_bed": "Before bed",
}
ANY_TIME = "any_time"


def get_timing_display(timing: Optional[str]) -> str:
    return TIMING_LABELS.get(timing, "Any time")


def group_tasks_by_timing(tasks: Sequence[CoreTask]) -> Dict[str, List[CoreTask]]:
    """Group tasks by supplement timing; missing or unknown timings go to any_time."""
    grouped: Dict[str, List[CoreTask]] = {timing: [] for timing in TIMING_LABELS}
    grouped[ANY_TIME] = []
    for task in tasks:
        key = task.timing if task.timing in TIMING_LABELS else ANY_TIME
        grouped[key].append(task)
    return grouped
