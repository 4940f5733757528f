from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from tracker.describer import describe_condition_rules
from tracker.exceptions import RuleValidationError, StateError, TaskNotFoundError
from tracker.models import ConditionRule, CoreTask, DailyMetricSnapshot, Priority, TaskType
from tracker.presets import create_task
from tracker.rule_validator import validate_condition_rules
from tracker.service import TaskActivationService
from tracker.task_state import LoadResult, skipped_with_override, summarize_status

router = APIRouter()


class RuleModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    metric: str
    comparator: str
    value: Any = None
    logic_operator: Optional[str] = Field(default=None, alias="logicOperator")

    def to_rule(self) -> ConditionRule:
        return ConditionRule.from_dict(self.model_dump(by_alias=True, exclude_none=True))


class RulesRequest(BaseModel):
    rules: List[RuleModel] = Field(default_factory=list)


class OverrideRequest(BaseModel):
    force_active: bool


class CreateTaskRequest(BaseModel):
    title: str
    category: str = "general"
    description: str = ""
    task_type: TaskType = TaskType.SUPPLEMENT
    priority: Priority = Priority.MEDIUM
    default_active: bool = True
    dosage: Optional[str] = None
    timing: Optional[str] = None
    frequency: Optional[str] = None
    rules: List[RuleModel] = Field(default_factory=list)


class SnapshotRequest(BaseModel):
    mood: int = Field(ge=1, le=10)
    energy: int = Field(ge=1, le=10)
    productivity: int = Field(ge=1, le=10)
    sleep: float = Field(ge=0)
    exercise: bool
    date: Optional[str] = None


def get_service() -> TaskActivationService:
    return TaskActivationService()


def _tasks_payload(tasks: List[CoreTask]) -> Dict[str, Any]:
    return {
        "tasks": [task.to_dict() for task in tasks],
        "summary": summarize_status(tasks).to_dict(),
    }


def _load_payload(result: LoadResult) -> Dict[str, Any]:
    payload = _tasks_payload(result.tasks)
    payload["snapshot"] = result.snapshot.to_dict() if result.snapshot else None
    payload["evaluations"] = [r.to_dict() for r in result.evaluation_results]
    payload["skipped_with_override"] = [t.id for t in skipped_with_override(result.tasks)]
    return payload


def _call(func, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except RuleValidationError as e:
        raise HTTPException(status_code=400, detail={"message": e.message, "errors": e.errors})
    except StateError as e:
        raise HTTPException(status_code=500, detail=e.get_user_message())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/")
def list_tasks(date: Optional[str] = None, service: TaskActivationService = Depends(get_service)):
    return _load_payload(_call(service.load_for_date, date))


@router.get("/summary")
def get_summary(date: Optional[str] = None, service: TaskActivationService = Depends(get_service)):
    return _call(service.status_summary, date).to_dict()


@router.post("/")
def add_task(
    req: CreateTaskRequest,
    date: Optional[str] = None,
    service: TaskActivationService = Depends(get_service),
):
    task = create_task(
        req.title,
        req.category,
        task_type=req.task_type,
        description=req.description,
        priority=req.priority,
        condition_rules=[r.to_rule() for r in req.rules],
        default_active=req.default_active,
        dosage=req.dosage,
        timing=req.timing,
        frequency=req.frequency,
    )
    payload = _tasks_payload(_call(service.add_task, task, date))
    payload["task_id"] = task.id
    return payload


@router.post("/snapshots")
def record_snapshot(req: SnapshotRequest, service: TaskActivationService = Depends(get_service)):
    snapshot = DailyMetricSnapshot(
        mood=req.mood,
        energy=req.energy,
        productivity=req.productivity,
        sleep=req.sleep,
        exercise=req.exercise,
        date=req.date,
    )
    return _load_payload(_call(service.record_snapshot, snapshot))


@router.post("/rules/validate")
def validate_rules(req: RulesRequest):
    return validate_condition_rules([r.to_rule() for r in req.rules]).to_dict()


@router.post("/rules/describe")
def describe_rules(req: RulesRequest):
    return {"description": describe_condition_rules([r.to_rule() for r in req.rules])}


@router.post("/{task_id}/override")
def override_task(
    task_id: str, req: OverrideRequest, service: TaskActivationService = Depends(get_service)
):
    return _tasks_payload(_call(service.override, task_id, req.force_active))


@router.post("/{task_id}/reset-override")
def reset_task_override(
    task_id: str, date: Optional[str] = None, service: TaskActivationService = Depends(get_service)
):
    return _tasks_payload(_call(service.reset_override, task_id, date))


@router.post("/{task_id}/toggle-completion")
def toggle_task_completion(task_id: str, service: TaskActivationService = Depends(get_service)):
    return _tasks_payload(_call(service.toggle_completion, task_id))


@router.put("/{task_id}/rules")
def update_task_rules(
    task_id: str,
    req: RulesRequest,
    date: Optional[str] = None,
    service: TaskActivationService = Depends(get_service),
):
    rules = [r.to_rule() for r in req.rules]
    return _tasks_payload(_call(service.update_rules, task_id, rules, date))


@router.delete("/{task_id}")
def delete_task(task_id: str, service: TaskActivationService = Depends(get_service)):
    return _tasks_payload(_call(service.delete_task, task_id))
