"""Exception types raised by the repository and the store.

Every command-level failure is reported to the operator and the session
continues; none of these ends the process.
"""


class TaskManagerError(Exception):
    """Base class for task manager errors."""


class ValidationError(TaskManagerError):
    """Bad user input: empty/malformed title or date, empty keyword, etc."""


class TaskNotFoundError(TaskManagerError):
    def __init__(self, identifier: str):
        super().__init__(f"No task matches {identifier!r}")
        self.identifier = identifier


class PersistenceError(TaskManagerError):
    """Reading or writing the data file failed."""


class MalformedDocumentError(PersistenceError):
    """The data file parsed but does not have the expected shape."""
