"""Adapters - I/O implementations of ports."""

from .fake_remote import FakeTaskRemote
from .http_remote import HttpTaskRemote
from .sqlite_store import SqliteTaskStore

__all__ = [
    "FakeTaskRemote",
    "HttpTaskRemote",
    "SqliteTaskStore",
]
