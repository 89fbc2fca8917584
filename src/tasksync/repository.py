"""Task repository - keeps the cache, local store and remote backend in step.

Reads are served from the in-memory cache when possible, then the local
store, then the remote backend. Writes go to the remote backend and the local
store, and always update the cache.

The repository does no locking. All calls must come from a single thread.
"""

import logging
from typing import TypeVar

from tasksync.core.tasks import Task
from tasksync.errors import TaskNotCachedError
from tasksync.ports.task_source import TaskDataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _require(value: T | None, name: str) -> T:
    if value is None:
        raise ValueError(f"{name} must not be None")
    return value


class TaskRepository:
    """
    Cache coordinator over a remote and a local TaskDataSource.

    Implements TaskDataSource protocol itself, so callers can use it wherever
    a data source is expected.
    """

    def __init__(self, remote: TaskDataSource, local: TaskDataSource):
        self._remote = _require(remote, "remote")
        self._local = _require(local, "local")
        self._cache: dict[str, Task] = {}
        # When set, the cache must not be used for listings until refreshed
        self._cache_is_dirty = False

    @property
    def cache_is_dirty(self) -> bool:
        return self._cache_is_dirty

    @property
    def cached_tasks(self) -> dict[str, Task]:
        """Snapshot of the cache, keyed by task id."""
        return dict(self._cache)

    # ============== Reads ==============

    def get_all_tasks(self) -> list[Task] | None:
        """
        List all tasks.

        A clean cache answers immediately. A dirty cache always goes to the
        remote backend, skipping the local store, and on success replaces both
        the cache and the local store with what the backend returned.

        Returns None if the remote backend has no data.
        """
        if not self._cache_is_dirty:
            return list(self._cache.values())

        return self._get_tasks_from_remote()

    def list_tasks(self) -> list[Task] | None:
        """List all tasks (alias for get_all_tasks)."""
        return self.get_all_tasks()

    def get_task(self, task_id: str) -> Task | None:
        """
        Get a task from the cache, the local store or the remote backend,
        whichever has it first.

        Returns None if no tier has the task.
        """
        _require(task_id, "task_id")

        cached = self._get_cached(task_id)
        if cached is not None:
            logger.debug(f"Cache hit for task {task_id}")
            return cached

        task = self._local.get_task(task_id)
        if task is None:
            logger.info(f"Task {task_id} not in local store, asking remote")
            task = self._remote.get_task(task_id)
        if task is None:
            logger.info(f"Task {task_id} not available from any source")
            return None

        self._cache[task.id] = task
        return task

    # ============== Writes ==============

    def save_task(self, task: Task) -> None:
        _require(task, "task")
        self._remote.save_task(task)
        self._local.save_task(task)
        self._cache[task.id] = task

    def complete_task(self, task: Task | str) -> None:
        """Mark a task completed. An id must already be in the cache."""
        task = self._resolve(_require(task, "task"))
        self._remote.complete_task(task)
        self._local.complete_task(task)
        self._cache[task.id] = task.with_completed(True)

    def activate_task(self, task: Task | str) -> None:
        """Mark a task active. An id must already be in the cache."""
        task = self._resolve(_require(task, "task"))
        self._remote.activate_task(task)
        self._local.activate_task(task)
        self._cache[task.id] = task.with_completed(False)

    def clear_completed_tasks(self) -> None:
        self._remote.clear_completed_tasks()
        self._local.clear_completed_tasks()
        self._cache = {k: t for k, t in self._cache.items() if not t.completed}

    def refresh_tasks(self) -> None:
        """Force the next listing to reload from the remote backend."""
        self._cache_is_dirty = True

    def delete_all_tasks(self) -> None:
        self._remote.delete_all_tasks()
        self._local.delete_all_tasks()
        self._cache.clear()

    def delete_task(self, task_id: str) -> None:
        _require(task_id, "task_id")
        self._remote.delete_task(task_id)
        self._local.delete_task(task_id)
        self._cache.pop(task_id, None)

    # ============== Internals ==============

    def _get_tasks_from_remote(self) -> list[Task] | None:
        tasks = self._remote.list_tasks()
        if tasks is None:
            logger.info("Remote has no tasks, cache stays dirty")
            return None

        self._refresh_cache(tasks)
        self._refresh_local(tasks)
        logger.info(f"Refreshed {len(tasks)} tasks from remote")
        return list(self._cache.values())

    def _refresh_cache(self, tasks: list[Task]) -> None:
        self._cache.clear()
        for task in tasks:
            self._cache[task.id] = task
        self._cache_is_dirty = False

    def _refresh_local(self, tasks: list[Task]) -> None:
        self._local.delete_all_tasks()
        for task in tasks:
            self._local.save_task(task)

    def _get_cached(self, task_id: str) -> Task | None:
        # An empty cache is never probed
        if not self._cache:
            return None
        return self._cache.get(task_id)

    def _resolve(self, task: Task | str) -> Task:
        """Turn an id into its cached task. Ids are not looked up in the stores."""
        if isinstance(task, Task):
            return task
        cached = self._get_cached(task)
        if cached is None:
            raise TaskNotCachedError(task)
        return cached


_instance: TaskRepository | None = None


def get_repository(remote: TaskDataSource, local: TaskDataSource) -> TaskRepository:
    """Return the shared repository, creating it on first use.

    The data sources are only used on the call that creates the instance.
    """
    global _instance
    if _instance is None:
        _instance = TaskRepository(remote, local)
    return _instance


def destroy_repository() -> None:
    """Drop the shared repository so the next get_repository() builds a new one."""
    global _instance
    _instance = None
