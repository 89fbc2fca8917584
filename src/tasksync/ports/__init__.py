"""Ports - interfaces/protocols for external dependencies."""

from .task_source import TaskDataSource

__all__ = [
    "TaskDataSource",
]
