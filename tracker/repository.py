"""
Task / daily-entry repository.

The activation engine only ever receives already-loaded values; this module
is the persistence collaborator that produces them. The JSON implementation
keeps two files in the data dir:
- tasks.json: list of task records
- entries.json: mapping of ISO date -> daily metric entry
"""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tracker.config_manager import SystemConfig, config as default_config
from tracker.exceptions import StateError
from tracker.logger import get_logger
from tracker.models import CoreTask, DailyMetricSnapshot
from tracker.paths import DATA_DIR

logger = get_logger("repository")


class TaskRepository(ABC):
    """Storage interface consumed by the activation service."""

    @abstractmethod
    def load_tasks(self) -> List[CoreTask]:
        ...

    @abstractmethod
    def save_tasks(self, tasks: Sequence[CoreTask]) -> None:
        ...

    @abstractmethod
    def load_snapshot(self, day: str) -> Optional[DailyMetricSnapshot]:
        ...

    @abstractmethod
    def save_snapshot(self, snapshot: DailyMetricSnapshot) -> None:
        ...

    def load_tasks_and_snapshot(self, day: str) -> Tuple[List[CoreTask], Optional[DailyMetricSnapshot]]:
        return self.load_tasks(), self.load_snapshot(day)


class JsonTaskRepository(TaskRepository):
    """File-backed repository; every save rewrites the whole file."""

    def __init__(self, data_dir: Optional[Path] = None, config: Optional[SystemConfig] = None):
        config = config or default_config
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR
        self.tasks_path = self.data_dir / config.TASKS_FILENAME
        self.entries_path = self.data_dir / config.ENTRIES_FILENAME

    def _read_json(self, path: Path, empty: Any) -> Any:
        if not path.exists():
            return empty
        raw = path.read_text(encoding="utf-8")
        if not raw.strip():
            return empty
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {path.name}: {e}")
            raise StateError(f"Cannot parse {path}: {e}", corrupted_data=raw[:200]) from e
        if not isinstance(data, type(empty)):
            raise StateError(
                f"Unexpected top-level {type(data).__name__} in {path}", corrupted_data=raw[:200]
            )
        return data

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load_tasks(self) -> List[CoreTask]:
        records = self._read_json(self.tasks_path, [])
        return [CoreTask.from_dict(record) for record in records]

    def save_tasks(self, tasks: Sequence[CoreTask]) -> None:
        self._write_json(self.tasks_path, [task.to_dict() for task in tasks])
        logger.info(f"Saved {len(tasks)} tasks to {self.tasks_path.name}")

    def _load_entries(self) -> Dict[str, Any]:
        return self._read_json(self.entries_path, {})

    def load_snapshot(self, day: str) -> Optional[DailyMetricSnapshot]:
        entry = self._load_entries().get(day)
        if entry is None:
            return None
        return DailyMetricSnapshot.from_dict({**entry, "date": day})

    def save_snapshot(self, snapshot: DailyMetricSnapshot) -> None:
        if not snapshot.date:
            raise ValueError("snapshot.date is required to store a daily entry")
        entries = self._load_entries()
        entries[snapshot.date] = snapshot.to_dict()
        self._write_json(self.entries_path, entries)
        logger.info(f"Saved daily entry for {snapshot.date}")
