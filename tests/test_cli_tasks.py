import json

from click.testing import CliRunner

from cli.tasks_cmd import tasks
from tracker.models import Comparator, ConditionRule, CoreTask, DailyMetricSnapshot, Metric
from tracker.repository import JsonTaskRepository

DAY = "2026-03-14"


def _seed(tmp_path):
    repo = JsonTaskRepository(tmp_path)
    repo.save_tasks([
        CoreTask.new("Iron", task_id="iron", condition_rules=[ConditionRule(Metric.ENERGY, Comparator.LT, 5)]),
    ])
    repo.save_snapshot(DailyMetricSnapshot(mood=5, energy=3, productivity=5, sleep=6.5, exercise=False, date=DAY))
    return repo


def _run(tmp_path, *args):
    return CliRunner().invoke(tasks, ["--data-dir", str(tmp_path), *args])


def test_list_explains_rule_evaluation(tmp_path):
    _seed(tmp_path)

    result = _run(tmp_path, "list", "--date", DAY, "--explain")

    assert result.exit_code == 0
    assert "[ ] Iron (iron) - active - energy < 5" in result.output
    assert "energy(3) < 5 = true" in result.output
    assert "1 tasks: 1 active, 0 skipped, 0 completed, 0 overridden" in result.output


def test_override_toggle_and_reset(tmp_path):
    repo = _seed(tmp_path)

    assert _run(tmp_path, "override", "iron", "--skip").exit_code == 0
    assert repo.load_tasks()[0].is_overridden is True

    result = _run(tmp_path, "toggle", "iron")
    assert "iron completed" in result.output

    result = _run(tmp_path, "reset", "iron", "--date", DAY)
    assert result.exit_code == 0
    assert "iron is active" in result.output
    assert repo.load_tasks()[0].is_completed is True


def test_unknown_task_exits_non_zero(tmp_path):
    result = _run(tmp_path, "toggle", "ghost")

    assert result.exit_code == 1
    assert "Task not found: ghost" in result.output


def test_validate_reports_errors(tmp_path):
    rules = json.dumps([{"metric": "exercise", "comparator": "<", "value": 5}])

    result = _run(tmp_path, "validate", rules)

    assert result.exit_code == 1
    assert "Exercise metric requires boolean value in rule 1" in result.output


def test_describe_and_presets(tmp_path):
    rules = json.dumps([
        {"metric": "energy", "comparator": "<", "value": 5},
        {"metric": "mood", "comparator": "<", "value": 5, "logicOperator": "OR"},
    ])
    assert _run(tmp_path, "describe", rules).output.strip() == "energy < 5 OR mood < 5"

    output = _run(tmp_path, "presets").output
    assert "low_energy_or_mood: energy < 5 OR mood < 5" in output
    assert "no_exercise: exercise = false" in output


def test_bad_date_is_reported_without_traceback(tmp_path):
    _seed(tmp_path)

    for args in (("list", "--date", "someday"), ("reset", "iron", "--date", "someday")):
        result = _run(tmp_path, *args)

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, ValueError)
