"""Simulated remote backend - in-process, with artificial latency."""

import time

from tasksync.core.tasks import Task


class FakeTaskRemote:
    """
    In-memory stand-in for the remote backend.

    Implements TaskDataSource protocol. Reads sleep for `latency` seconds to
    simulate a network round trip.
    """

    def __init__(self, latency: float = 0.0, tasks: list[Task] | None = None):
        self.latency = latency
        self._tasks: dict[str, Task] = {}
        if tasks:
            self.add_tasks(*tasks)

    def add_tasks(self, *tasks: Task) -> None:
        """Seed the backend."""
        for task in tasks:
            self._tasks[task.id] = task

    def _wait(self) -> None:
        if self.latency:
            time.sleep(self.latency)

    def list_tasks(self) -> list[Task] | None:
        self._wait()
        if not self._tasks:
            return None
        return list(self._tasks.values())

    def get_task(self, task_id: str) -> Task | None:
        self._wait()
        return self._tasks.get(task_id)

    def save_task(self, task: Task) -> None:
        self._tasks[task.id] = task

    def complete_task(self, task: Task | str) -> None:
        if isinstance(task, Task):
            self._tasks[task.id] = task.with_completed(True)

    def activate_task(self, task: Task | str) -> None:
        if isinstance(task, Task):
            self._tasks[task.id] = task.with_completed(False)

    def clear_completed_tasks(self) -> None:
        self._tasks = {k: t for k, t in self._tasks.items() if not t.completed}

    def refresh_tasks(self) -> None:
        pass

    def delete_all_tasks(self) -> None:
        self._tasks.clear()

    def delete_task(self, task_id: str) -> None:
        self._tasks.pop(task_id, None)
