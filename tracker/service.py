"""
Task Activation Service.

Orchestrates repository I/O around the pure activation engine: load the
day's tasks and metrics, run the state machine, save the result.
Unlike the engine, the service reports unknown task ids with
TaskNotFoundError so the HTTP and CLI layers can tell the user.
"""
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence

from tracker import task_state
from tracker.config_manager import SystemConfig, config as default_config
from tracker.exceptions import RuleValidationError, TaskNotFoundError
from tracker.logger import get_logger
from tracker.models import ConditionRule, CoreTask, DailyMetricSnapshot
from tracker.repository import JsonTaskRepository, TaskRepository
from tracker.rule_validator import validate_condition_rules

logger = get_logger("service")


def resolve_day(day: Optional[str] = None) -> str:
    """Normalise an ISO date string, defaulting to today."""
    if not day:
        return date.today().isoformat()
    return date.fromisoformat(day).isoformat()


class TaskActivationService:
    """Application-facing entry point for conditional tasks."""

    def __init__(
        self,
        repository: Optional[TaskRepository] = None,
        config: Optional[SystemConfig] = None,
    ):
        self.config = config or default_config
        self.repository = repository or JsonTaskRepository(config=self.config)

    def _require_task(self, tasks: Sequence[CoreTask], task_id: str) -> CoreTask:
        for task in tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def _check_rules(self, rules: Sequence[ConditionRule]) -> None:
        validation = validate_condition_rules(rules)
        if validation.is_valid:
            return
        if self.config.REJECT_INVALID_RULES:
            raise RuleValidationError(validation.errors)
        logger.warning("Saving condition rules with validation errors: %s", validation.errors)

    def load_for_date(self, day: Optional[str] = None) -> task_state.LoadResult:
        """Evaluate every task for a day and persist the merged flags."""
        day = resolve_day(day)
        tasks, snapshot = self.repository.load_tasks_and_snapshot(day)
        result = task_state.load_for_date(tasks, snapshot)
        self.repository.save_tasks(result.tasks)
        logger.info(
            "Loaded %d tasks for %s (%s)",
            len(result.tasks), day, "evaluated" if snapshot else "no metrics recorded",
        )
        return result

    def override(self, task_id: str, force_active: bool) -> List[CoreTask]:
        tasks = self.repository.load_tasks()
        self._require_task(tasks, task_id)
        tasks = task_state.override_status(tasks, task_id, force_active)
        self.repository.save_tasks(tasks)
        return tasks

    def reset_override(self, task_id: str, day: Optional[str] = None) -> List[CoreTask]:
        tasks, snapshot = self.repository.load_tasks_and_snapshot(resolve_day(day))
        self._require_task(tasks, task_id)
        tasks = task_state.reset_override(tasks, task_id, snapshot)
        self.repository.save_tasks(tasks)
        return tasks

    def toggle_completion(self, task_id: str) -> List[CoreTask]:
        tasks = self.repository.load_tasks()
        self._require_task(tasks, task_id)
        tasks = task_state.toggle_completion(tasks, task_id)
        self.repository.save_tasks(tasks)
        return tasks

    def add_task(self, task: CoreTask, day: Optional[str] = None) -> List[CoreTask]:
        """Validate a new task's rules, store it and evaluate it for the day."""
        day = resolve_day(day)
        self._check_rules(task.condition_rules)
        tasks = self.repository.load_tasks() + [task]
        self.repository.save_tasks(tasks)
        return self.load_for_date(day).tasks

    def update_rules(
        self, task_id: str, rules: Sequence[ConditionRule], day: Optional[str] = None
    ) -> List[CoreTask]:
        day = resolve_day(day)
        self._check_rules(rules)
        tasks = self.repository.load_tasks()
        self._require_task(tasks, task_id)
        tasks = [
            replace(task, condition_rules=list(rules)) if task.id == task_id else task
            for task in tasks
        ]
        self.repository.save_tasks(tasks)
        return self.load_for_date(day).tasks

    def delete_task(self, task_id: str) -> List[CoreTask]:
        tasks = self.repository.load_tasks()
        self._require_task(tasks, task_id)
        tasks = [task for task in tasks if task.id != task_id]
        self.repository.save_tasks(tasks)
        return tasks

    def record_snapshot(self, snapshot: DailyMetricSnapshot) -> task_state.LoadResult:
        """Store a day's metrics and re-evaluate the tasks against them."""
        # entries are keyed by the normalised ISO date
        snapshot = replace(snapshot, date=resolve_day(snapshot.date))
        self.repository.save_snapshot(snapshot)
        return self.load_for_date(snapshot.date)

    def status_summary(self, day: Optional[str] = None) -> task_state.StatusSummary:
        return task_state.summarize_status(self.load_for_date(day).tasks)
