"""Interactive command loop for the task manager.

One command per line; each command asks for its own arguments. Mutating
commands flush the whole document once after they succeed, before the
confirmation is printed. A failed flush is reported but the in-memory
change is kept.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple

from taskmanager.errors import TaskNotFoundError, ValidationError
from taskmanager.models import FILTER_OPTIONS, Task
from taskmanager.repository import TaskRepository
from taskmanager.storage import Storage
from taskmanager.theme import (
    color, BOLD, ERROR_COLOR, HEADER_COLOR, NOTICE_COLOR, STATUS_COLOR, SUCCESS_COLOR,
)

PROMPT = "task-manager> "
TABLE_HEADER = "ID | Title               | Due Date   | Status"
TABLE_RULE = "---|---------------------|------------|---------"

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


def format_row(task: Task) -> str:
    # pad on plain text first; colour only the trailing status cell
    status = color(task.status, STATUS_COLOR.get(task.status, ''))
    return f"{task.id:<2} | {task.title:<19} | {task.due_date} | {status}"


def render_table(tasks: Iterable[Task]) -> List[str]:
    lines = ["", color("Tasks:", HEADER_COLOR, BOLD), TABLE_HEADER, TABLE_RULE]
    lines.extend(format_row(t) for t in tasks)
    lines.append("")
    return lines


class CLI:
    def __init__(self, repository: TaskRepository, storage: Storage,
                 input_fn: Callable[[str], str] = input):
        self.repository: TaskRepository = repository
        self.storage: Storage = storage
        self.input_fn = input_fn
        self.state: SessionState = SessionState.RUNNING
        # insertion order is the order shown by `help`
        self.commands: Dict[str, Tuple[Callable[[], bool], str]] = {
            'add-task': (self._add, "Add a new task"),
            'list-tasks': (self._list, "List tasks (respects preferences)"),
            'complete-task': (self._complete, "Mark a task as completed (by ID or exact title)"),
            'update-task': (self._update, "Update title or due date of a task (by ID or exact title)"),
            'delete-task': (self._delete, "Delete a task (by ID or exact title)"),
            'search-tasks': (self._search, "Search tasks by title or due date"),
            'set-preference': (self._set_preference, "Set display preferences (filter by status)"),
            'help': (self._help, "Show this help message"),
            'exit': (self._exit, "Exit the application"),
        }

    def run(self) -> None:
        """Read lines until `exit` or end of input."""
        print("Welcome to Task Manager!")
        print("Type 'help' to see available commands.")
        self.state = SessionState.RUNNING
        while self.state is SessionState.RUNNING:
            try:
                line = self.input_fn(PROMPT).strip()
                if not self.dispatch(line):
                    self.state = SessionState.STOPPED
            except (EOFError, KeyboardInterrupt):
                # end of input, even inside a command's prompts, is a silent exit
                print()
                self.state = SessionState.STOPPED

    # -------------------- command dispatch --------------------
    def dispatch(self, line: str) -> bool:
        """Run one command; False means the session should stop."""
        entry = self.commands.get(line.strip())
        if entry is None:
            self._error(f'Unknown command: "{line}". Type \'help\' to see available commands.')
            return True
        handler, _ = entry
        return handler()

    # ---- output helpers ----
    def _ask(self, question: str) -> str:
        return self.input_fn(question).strip()

    @staticmethod
    def _ok(message: str) -> None:
        print(color(message, SUCCESS_COLOR))

    @staticmethod
    def _error(message: str) -> None:
        print(color(message, ERROR_COLOR))

    @staticmethod
    def _notice(message: str) -> None:
        print(color(message, NOTICE_COLOR))

    def _flush(self) -> bool:
        """Single save attempt of the whole document; no retry."""
        if self.storage.save(self.repository.document):
            return True
        self._error("Changes kept in memory but not saved.")
        return False

    # -------------------- commands --------------------
    def _add(self) -> bool:
        title = self._ask("Enter task title: ")
        if not title:
            self._error("Task title cannot be empty.")
            return True
        due_date = self._ask("Enter due date (YYYY-MM-DD): ")
        try:
            task = self.repository.add(title, due_date)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        self._flush()
        self._ok(f'Task "{task.title}" added successfully.')
        return True

    def _list(self) -> bool:
        tasks = self.repository.list_tasks()
        if not tasks:
            self._notice("No tasks found.")
            return True
        for line in render_table(tasks):
            print(line)
        return True

    def _complete(self) -> bool:
        identifier = self._ask("Enter task ID or exact task title to mark as complete: ")
        try:
            task, changed = self.repository.complete(identifier)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        except TaskNotFoundError:
            self._error("Task not found.")
            return True
        if not changed:
            self._notice(f'Task "{task.title}" is already completed.')
            return True
        self._flush()
        self._ok(f'Task "{task.title}" marked as completed.')
        return True

    def _update(self) -> bool:
        identifier = self._ask("Enter task ID or exact task title to update: ")
        if not identifier:
            self._error("You must enter a task ID or title.")
            return True
        task = self.repository.find_by_id_or_title(identifier)
        if task is None:
            self._error("Task not found.")
            return True
        new_title = self._ask(f'Enter new title (leave empty to keep current: "{task.title}"): ')
        new_due_date = self._ask(
            f"Enter new due date (YYYY-MM-DD) (leave empty to keep current: {task.due_date}): ")
        try:
            task = self.repository.update(identifier, new_title or None, new_due_date or None)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        self._flush()
        self._ok(f'Task "{task.title}" updated successfully.')
        return True

    def _delete(self) -> bool:
        identifier = self._ask("Enter task ID or exact task title to delete: ")
        try:
            task = self.repository.delete(identifier)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        except TaskNotFoundError:
            self._error("Task not found.")
            return True
        self._flush()
        self._ok(f'Task "{task.title}" deleted successfully.')
        return True

    def _search(self) -> bool:
        keyword = self._ask("Enter keyword to search in title or exact due date (YYYY-MM-DD): ")
        try:
            results = self.repository.search(keyword)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        if not results:
            self._notice("No matching tasks found.")
            return True
        for line in render_table(results):
            print(line)
        return True

    def _set_preference(self) -> bool:
        options = ", ".join(FILTER_OPTIONS)
        print(f"Current filterStatus: {self.repository.preferences.filter_status} (Options: {options})")
        value = self._ask(f"Enter task display filter ({options}): ")
        try:
            self.repository.set_preference(value)
        except ValidationError as exc:
            self._error(str(exc))
            return True
        self._flush()
        self._ok(f'Preferences updated: filterStatus = "{value}"')
        return True

    def _help(self) -> bool:
        print("\nAvailable commands:")
        for name, (_, description) in self.commands.items():
            print(f"- {name}: {description}")
        print()
        return True

    def _exit(self) -> bool:
        print("Exiting task manager. Goodbye!")
        self.state = SessionState.STOPPED
        logger.debug("Session ended: %s", self.repository)
        return False
