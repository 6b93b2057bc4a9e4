"""Persistence (load/save) of the task document.

The whole document is rewritten on every save. A missing file is a normal
first run; an unreadable or malformed file is reported and replaced by an
empty in-memory document, which the next mutating command will write over.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from taskmanager.errors import MalformedDocumentError
from taskmanager.models import Document

DEFAULT_DATA_FILE = Path('tasks.json')

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, path: Union[str, Path] = DEFAULT_DATA_FILE):
        self.path: Path = Path(path)
        self.last_error: Optional[str] = None

    def load(self) -> Document:
        """Load the document from disk.

        Missing file -> empty default document (not an error).
        Unreadable / invalid JSON / wrong shape -> error logged, empty default
        document returned. Never raises.
        """
        self.last_error = None
        if not self.path.exists():
            logger.debug("No data file at %s; starting with an empty document", self.path)
            return Document()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            document = Document.from_dict(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, MalformedDocumentError) as exc:
            self.last_error = str(exc)
            logger.error("Error loading data from %s: %s", self.path, exc)
            return Document()
        logger.debug("Loaded %d task(s) from %s", len(document.tasks), self.path)
        return document

    def save(self, document: Document) -> bool:
        """Overwrite the data file with ``document`` (pretty-printed).

        Returns False if the write failed; the caller's in-memory state is
        left as it is and no retry is made.
        """
        self.last_error = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(document.to_dict(), indent=2)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as exc:
            self.last_error = str(exc)
            logger.error("Error saving data to %s: %s", self.path, exc)
            return False
        logger.debug("Saved %d task(s) to %s", len(document.tasks), self.path)
        return True
