"""
CLI command: tracker tasks
Inspect and steer conditional tasks for a day.
"""
import json
from pathlib import Path
from typing import List, Optional

import click

from tracker.describer import describe_condition_rules
from tracker.exceptions import TrackerError
from tracker.models import ConditionRule, CoreTask
from tracker.presets import SAMPLE_CONDITION_RULES
from tracker.repository import JsonTaskRepository
from tracker.rule_validator import validate_condition_rules
from tracker.service import TaskActivationService
from tracker.task_state import filter_tasks_by_status, summarize_status

STATUS_CHOICES = ["all", "active", "skipped", "completed", "overridden"]


def _parse_rules(raw: str) -> List[ConditionRule]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"rules must be a JSON list: {e}")
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise click.BadParameter("rules must be a JSON list of objects")
    return [ConditionRule.from_dict(item) for item in data]


def _task_line(task: CoreTask) -> str:
    done = "x" if task.is_completed else " "
    state = "active" if task.is_active else "skipped"
    if task.is_overridden:
        state += " (overridden)"
    rules = describe_condition_rules(task.condition_rules)
    return f"[{done}] {task.title} ({task.id}) - {state} - {rules}"


def _fail(error: Exception):
    message = error.get_user_message() if isinstance(error, TrackerError) else str(error)
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding tasks.json and entries.json")
@click.pass_context
def tasks(ctx, data_dir: Optional[Path]):
    """Conditional task commands"""
    ctx.obj = TaskActivationService(JsonTaskRepository(data_dir))


@tasks.command("list")
@click.option("--date", "day", default=None, help="ISO date, defaults to today")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default="all")
@click.option("--explain", is_flag=True, help="Show how each rule evaluated")
@click.pass_obj
def list_tasks(service: TaskActivationService, day: Optional[str], status: str, explain: bool):
    """List tasks evaluated for a day"""
    try:
        result = service.load_for_date(day)
    except (TrackerError, ValueError) as e:
        _fail(e)

    if result.snapshot is None:
        click.echo("No metrics recorded for this day, using default states")

    evaluations = {r.task_id: r for r in result.evaluation_results}
    for task in filter_tasks_by_status(result.tasks, status):
        click.echo(_task_line(task))
        evaluation = evaluations.get(task.id)
        if explain and evaluation:
            for entry in evaluation.evaluated_rules:
                click.echo(f"    {entry.reason}")
            click.echo(f"    {evaluation.final_reason}")

    summary = summarize_status(result.tasks)
    click.echo(
        f"{summary.total} tasks: {summary.active} active, {summary.skipped} skipped, "
        f"{summary.completed} completed, {summary.overridden} overridden"
    )


@tasks.command()
@click.argument("task_id")
@click.option("--active/--skip", "force_active", default=True, help="Force the task active or skipped")
@click.pass_obj
def override(service: TaskActivationService, task_id: str, force_active: bool):
    """Manually force a task's status"""
    try:
        service.override(task_id, force_active)
    except (TrackerError, ValueError) as e:
        _fail(e)
    click.echo(f"{task_id} forced {'active' if force_active else 'skipped'}")


@tasks.command()
@click.argument("task_id")
@click.option("--date", "day", default=None, help="ISO date, defaults to today")
@click.pass_obj
def reset(service: TaskActivationService, task_id: str, day: Optional[str]):
    """Return a task to automatic evaluation"""
    try:
        updated = service.reset_override(task_id, day)
    except (TrackerError, ValueError) as e:
        _fail(e)
    task = next(t for t in updated if t.id == task_id)
    click.echo(f"{task_id} is {'active' if task.is_active else 'skipped'}")


@tasks.command()
@click.argument("task_id")
@click.pass_obj
def toggle(service: TaskActivationService, task_id: str):
    """Mark a task done / not done"""
    try:
        updated = service.toggle_completion(task_id)
    except (TrackerError, ValueError) as e:
        _fail(e)
    task = next(t for t in updated if t.id == task_id)
    click.echo(f"{task_id} {'completed' if task.is_completed else 'not completed'}")


@tasks.command()
@click.argument("rules")
def validate(rules: str):
    """Validate a JSON list of condition rules"""
    result = validate_condition_rules(_parse_rules(rules))
    if result.is_valid:
        click.echo("Rules are valid")
        return
    for error in result.errors:
        click.echo(f"  - {error}", err=True)
    raise SystemExit(1)


@tasks.command()
@click.argument("rules")
def describe(rules: str):
    """Describe a JSON list of condition rules"""
    click.echo(describe_condition_rules(_parse_rules(rules)))


@tasks.command()
def presets():
    """Show the sample rule sets"""
    for name, rules in SAMPLE_CONDITION_RULES.items():
        click.echo(f"{name}: {describe_condition_rules(rules)}")


if __name__ == "__main__":
    tasks()
