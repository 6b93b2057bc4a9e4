"""Data models for the task manager.

Python attributes use snake_case while the JSON document keeps the
camelCase keys of the established file format (``dueDate``, ``nextId``,
``filterStatus``), so existing data files stay readable.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from taskmanager.errors import MalformedDocumentError

PENDING = "pending"
COMPLETED = "completed"
STATUSES: Tuple[str, ...] = (PENDING, COMPLETED)

FILTER_ALL = "all"
FILTER_OPTIONS: Tuple[str, ...] = (FILTER_ALL, PENDING, COMPLETED)


@dataclass
class Task:
    """A single to-do entry.

    Fields:
        id: Positive integer, unique within a document, never reused.
        title: Non-empty title; also usable as an identifier.
        due_date: ``YYYY-MM-DD`` string (format only, not calendar-checked).
        status: One of: "pending", "completed".
    """
    id: int
    title: str
    due_date: str
    status: str = PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'dueDate': self.due_date,
            'status': self.status,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Task":
        if not isinstance(raw, Mapping):
            raise MalformedDocumentError(f"task entry is not an object: {raw!r}")
        tid = raw.get('id')
        # bool is an int subclass; reject it explicitly
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise MalformedDocumentError(f"task id must be an integer: {tid!r}")
        if tid < 1:
            raise MalformedDocumentError(f"task id must be positive: {tid}")
        title = raw.get('title')
        due_date = raw.get('dueDate')
        if not isinstance(title, str) or not isinstance(due_date, str):
            raise MalformedDocumentError(f"task {tid} needs string title and dueDate")
        status = raw.get('status', PENDING)
        if status not in STATUSES:
            raise MalformedDocumentError(f"task {tid} has unknown status {status!r}")
        return cls(id=tid, title=title, due_date=due_date, status=status)


@dataclass
class Preferences:
    filter_status: str = FILTER_ALL

    def to_dict(self) -> Dict[str, Any]:
        return {'filterStatus': self.filter_status}

    @classmethod
    def from_dict(cls, raw: Any) -> "Preferences":
        if not isinstance(raw, Mapping):
            raise MalformedDocumentError("preferences must be an object")
        value = raw.get('filterStatus', FILTER_ALL)
        if value not in FILTER_OPTIONS:
            raise MalformedDocumentError(f"unknown filterStatus {value!r}")
        return cls(filter_status=value)


@dataclass
class Document:
    """The persisted aggregate: tasks, id counter and preferences.

    ``next_id`` is strictly greater than every id ever handed out by this
    document; ``from_dict`` raises it if a file carries a stale counter.
    """
    tasks: List[Task] = field(default_factory=list)
    next_id: int = 1
    preferences: Preferences = field(default_factory=Preferences)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tasks': [t.to_dict() for t in self.tasks],
            'nextId': self.next_id,
            'preferences': self.preferences.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Document":
        if not isinstance(raw, Mapping):
            raise MalformedDocumentError("document root must be an object")
        raw_tasks = raw.get('tasks') or []
        if not isinstance(raw_tasks, list):
            raise MalformedDocumentError("'tasks' must be an array")
        tasks = [Task.from_dict(item) for item in raw_tasks]
        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            raise MalformedDocumentError("duplicate task ids")
        next_id = raw.get('nextId') or 1
        if not isinstance(next_id, int) or isinstance(next_id, bool):
            raise MalformedDocumentError(f"'nextId' must be an integer: {next_id!r}")
        if next_id < 1:
            raise MalformedDocumentError(f"'nextId' must be positive: {next_id}")
        if ids:
            next_id = max(next_id, max(ids) + 1)
        preferences = Preferences.from_dict(raw.get('preferences') or {})
        return cls(tasks=tasks, next_id=next_id, preferences=preferences)
