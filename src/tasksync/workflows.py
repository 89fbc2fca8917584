"""Shared workflow layer between the CLI and other front ends.

Builds the repository from configuration and wraps the use cases a task
list screen needs: loading with a filter, adding, and statistics.
"""

import logging

from .adapters.fake_remote import FakeTaskRemote
from .adapters.http_remote import HttpTaskRemote
from .adapters.sqlite_store import SqliteTaskStore
from .config import Config
from .core.tasks import Task, TasksFilterType, TaskStats, count_tasks, filter_tasks
from .errors import ConfigError, TaskSyncError
from .ports.task_source import TaskDataSource
from .repository import TaskRepository

logger = logging.getLogger(__name__)


def build_local(config: Config) -> SqliteTaskStore:
    """Open the on-device store from config."""
    return SqliteTaskStore(config.database_path)


def build_remote(config: Config, local: TaskDataSource | None = None) -> TaskDataSource:
    """
    Create the remote backend from config.

    Without a REMOTE_URL a simulated backend is used, seeded from the local
    store so a standalone install still sees its own tasks.
    """
    if config.uses_fake_remote:
        seed = local.list_tasks() if local is not None else None
        logger.debug("No REMOTE_URL configured, using simulated backend")
        return FakeTaskRemote(latency=config.fake_remote_latency, tasks=seed)

    if not config.remote_url.startswith(("http://", "https://")):
        raise ConfigError(f"REMOTE_URL must be an http(s) URL, got {config.remote_url!r}")
    return HttpTaskRemote.from_config(config)


def build_repository(config: Config) -> TaskRepository:
    """Wire a repository to the configured local store and remote backend."""
    local = build_local(config)
    remote = build_remote(config, local)
    return TaskRepository(remote, local)


def load_tasks(
    repository: TaskRepository,
    filter_type: TasksFilterType = TasksFilterType.ALL,
    force_update: bool = False,
) -> list[Task] | None:
    """Load tasks for display. Returns None if no source has any."""
    if force_update:
        repository.refresh_tasks()
    tasks = repository.get_all_tasks()
    if tasks is None:
        return None
    return filter_tasks(tasks, filter_type)


def add_task(repository: TaskRepository, title: str, description: str = "") -> Task:
    """Create and save a new task. Empty tasks are rejected."""
    task = Task.create(title.strip(), description.strip())
    if task.is_empty:
        raise TaskSyncError("Task must have a title or a description")
    repository.save_task(task)
    logger.info(f"Added task {task.id}")
    return task


def task_statistics(repository: TaskRepository, force_update: bool = False) -> TaskStats:
    """Count active and completed tasks."""
    tasks = load_tasks(repository, force_update=force_update)
    return count_tasks(tasks or [])
