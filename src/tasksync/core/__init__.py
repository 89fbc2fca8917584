"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TasksFilterType, TaskStats, count_tasks, filter_tasks

__all__ = [
    "Task",
    "TasksFilterType",
    "TaskStats",
    "count_tasks",
    "filter_tasks",
]
