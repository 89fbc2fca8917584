"""Exceptions raised by tasksync."""


class TaskSyncError(Exception):
    """Base class for tasksync errors."""

    pass


class TaskNotCachedError(TaskSyncError, LookupError):
    """Raised when an id-based update targets a task that is not in the cache."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} is not cached; load it before updating by id")
        self.task_id = task_id


class RemoteError(TaskSyncError):
    """Raised when the remote backend rejects a request."""

    pass


class ConfigError(TaskSyncError):
    """Raised when configuration is unusable."""

    pass
