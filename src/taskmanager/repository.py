"""Task repository: in-memory task collection, id management and queries.

Identifier resolution: a string that parses as an integer is looked up by
id only; anything else is matched against titles exactly (case-sensitive).
A task whose title is a number therefore cannot be reached by its title.
This is long-standing behaviour and is kept as-is.
"""
import logging
import re
from typing import List, Optional, Tuple

from taskmanager.errors import TaskNotFoundError, ValidationError
from taskmanager.models import (
    COMPLETED,
    FILTER_ALL,
    FILTER_OPTIONS,
    PENDING,
    Document,
    Preferences,
    Task,
)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ID_RE = re.compile(r"[+-]?\d+", re.ASCII)

logger = logging.getLogger(__name__)


def is_valid_title(title: Optional[str]) -> bool:
    return bool(title and title.strip())


def is_valid_due_date(value: Optional[str]) -> bool:
    # format only; "2024-13-45" is accepted
    return bool(value) and DATE_RE.match(value) is not None


def _parse_id(identifier: str) -> Optional[int]:
    # plain ASCII digits with an optional sign; "1_0", " 2" and non-ASCII digits are titles
    if ID_RE.fullmatch(identifier) is None:
        return None
    return int(identifier)


class TaskRepository:
    def __init__(self, document: Optional[Document] = None):
        self.document: Document = document if document is not None else Document()

    # -------------------- accessors --------------------
    @property
    def tasks(self) -> List[Task]:
        return self.document.tasks

    @property
    def next_id(self) -> int:
        return self.document.next_id

    @property
    def preferences(self) -> Preferences:
        return self.document.preferences

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self.document.next_id
        self.document.next_id += 1
        return nid

    # -------------------- lookup --------------------
    def find_by_id_or_title(self, identifier: str) -> Optional[Task]:
        """Resolve ``identifier`` to a task, numeric id first.

        No title fallback is attempted for a numeric identifier.
        """
        tid = _parse_id(identifier)
        if tid is not None:
            return next((t for t in self.tasks if t.id == tid), None)
        return next((t for t in self.tasks if t.title == identifier), None)

    def _resolve(self, identifier: str) -> Task:
        if not identifier:
            raise ValidationError("You must enter a task ID or title.")
        task = self.find_by_id_or_title(identifier)
        if task is None:
            raise TaskNotFoundError(identifier)
        return task

    # -------------------- task operations --------------------
    def add(self, title: str, due_date: str) -> Task:
        if not is_valid_title(title):
            raise ValidationError("Task title cannot be empty.")
        if not is_valid_due_date(due_date):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
        task = Task(id=self._allocate_id(), title=title, due_date=due_date, status=PENDING)
        self.tasks.append(task)
        logger.debug("Added task %d (%r)", task.id, task.title)
        return task

    def complete(self, identifier: str) -> Tuple[Task, bool]:
        """Mark a task completed.

        Returns ``(task, changed)``; ``changed`` is False when the task was
        already completed, in which case nothing is modified.
        """
        task = self._resolve(identifier)
        if task.status == COMPLETED:
            return task, False
        task.status = COMPLETED
        logger.debug("Completed task %d", task.id)
        return task, True

    def update(self, identifier: str, new_title: Optional[str] = None,
               new_due_date: Optional[str] = None) -> Task:
        """Change title and/or due date; ``None`` keeps the current value.

        Both values are validated before either is applied.
        """
        task = self._resolve(identifier)
        if new_title is not None and not is_valid_title(new_title):
            raise ValidationError("Task title cannot be empty.")
        if new_due_date is not None and not is_valid_due_date(new_due_date):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
        if new_title is not None:
            task.title = new_title
        if new_due_date is not None:
            task.due_date = new_due_date
        logger.debug("Updated task %d", task.id)
        return task

    def delete(self, identifier: str) -> Task:
        task = self._resolve(identifier)
        self.tasks.remove(task)
        logger.debug("Deleted task %d", task.id)
        return task

    def set_preference(self, filter_status: str) -> Preferences:
        if filter_status not in FILTER_OPTIONS:
            raise ValidationError("Invalid filter option.")
        self.preferences.filter_status = filter_status
        return self.preferences

    # -------------------- queries --------------------
    def list_tasks(self, filter_status: Optional[str] = None) -> List[Task]:
        """Tasks in insertion order, filtered by status.

        ``filter_status`` defaults to the stored preference.
        """
        if filter_status is None:
            filter_status = self.preferences.filter_status
        if filter_status not in FILTER_OPTIONS:
            raise ValidationError("Invalid filter option.")
        if filter_status == FILTER_ALL:
            return list(self.tasks)
        return [t for t in self.tasks if t.status == filter_status]

    def search(self, keyword: str) -> List[Task]:
        """Title substring (case-insensitive) or exact due date match.

        Always scans every task regardless of the display preference.
        """
        if not keyword or not keyword.strip():
            raise ValidationError("Search keyword cannot be empty.")
        needle = keyword.casefold()
        return [
            t for t in self.tasks
            if needle in t.title.strip().casefold() or t.due_date == keyword
        ]

    def __str__(self) -> str:
        pending = sum(1 for t in self.tasks if t.status == PENDING)
        return f'{len(self.tasks)} tasks ({pending} pending), next id {self.next_id}'
