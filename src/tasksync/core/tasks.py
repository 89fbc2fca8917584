"""Pure task domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class Task:
    """An immutable to-do item. Same entity iff ids match (see is_same_entity)."""

    id: str
    title: str = ""
    description: str = ""
    completed: bool = False

    @classmethod
    def create(cls, title: str, description: str = "", task_id: str | None = None) -> "Task":
        """Create a new active task, generating an id if none is given."""
        return cls(
            id=task_id or str(uuid.uuid4()),
            title=title,
            description=description,
        )

    @property
    def is_active(self) -> bool:
        return not self.completed

    @property
    def is_empty(self) -> bool:
        return not self.title.strip() and not self.description.strip()

    @property
    def title_for_list(self) -> str:
        """Title if present, otherwise the description."""
        if self.title.strip():
            return self.title
        return self.description

    def is_same_entity(self, other: "Task") -> bool:
        return self.id == other.id

    def with_completed(self, completed: bool) -> "Task":
        """Copy of this task with the completed flag changed."""
        return replace(self, completed=completed)

    def to_api(self) -> dict:
        """Serialize for the remote backend."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a remote backend response."""
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            completed=bool(data.get("completed", False)),
        )


class TasksFilterType(Enum):
    """Which tasks a listing should show."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def filter_tasks(tasks: list[Task], filter_type: TasksFilterType) -> list[Task]:
    """
    Filter tasks by completion state, keeping order.

    Pure function - no I/O.
    """
    match filter_type:
        case TasksFilterType.ACTIVE:
            return [t for t in tasks if t.is_active]
        case TasksFilterType.COMPLETED:
            return [t for t in tasks if t.completed]
        case _:
            return list(tasks)


@dataclass
class TaskStats:
    """Counts of active and completed tasks."""

    active: int = 0
    completed: int = 0

    @property
    def total(self) -> int:
        return self.active + self.completed

    @property
    def completed_percent(self) -> float:
        if not self.total:
            return 0.0
        return 100.0 * self.completed / self.total


def count_tasks(tasks: list[Task]) -> TaskStats:
    """Count active vs completed tasks."""
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(active=len(tasks) - completed, completed=completed)
