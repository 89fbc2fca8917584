"""Task data source interface."""

from typing import Protocol

from tasksync.core.tasks import Task


class TaskDataSource(Protocol):
    """
    Interface shared by the local store, the remote backend and the repository.

    Reads return None when the source has no data. That is not an error:
    callers fall through to the next source.
    """

    def list_tasks(self) -> list[Task] | None:
        """List all tasks. Returns None if the source has none."""
        ...

    def get_task(self, task_id: str) -> Task | None:
        """Get one task by id. Returns None if not found."""
        ...

    def save_task(self, task: Task) -> None:
        """Insert or replace a task."""
        ...

    def complete_task(self, task: Task | str) -> None:
        """Mark a task completed, given the task or its id."""
        ...

    def activate_task(self, task: Task | str) -> None:
        """Mark a task active, given the task or its id."""
        ...

    def clear_completed_tasks(self) -> None:
        """Delete all completed tasks."""
        ...

    def refresh_tasks(self) -> None:
        """Request a reload on the next listing."""
        ...

    def delete_all_tasks(self) -> None:
        """Delete every task."""
        ...

    def delete_task(self, task_id: str) -> None:
        """Delete one task. Missing ids are ignored."""
        ...
