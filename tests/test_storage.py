# tests/test_storage.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from taskmanager.errors import MalformedDocumentError
from taskmanager.models import COMPLETED, Document, Preferences, Task
from taskmanager.repository import TaskRepository
from taskmanager.storage import Storage


def test_missing_file_yields_default_document(data_file: Path, caplog) -> None:
    store = Storage(data_file)

    with caplog.at_level(logging.ERROR):
        doc = store.load()

    assert doc == Document()
    assert doc.next_id == 1
    assert doc.preferences.filter_status == "all"
    assert store.last_error is None
    assert not caplog.records


def test_round_trip(data_file: Path) -> None:
    store = Storage(data_file)
    doc = Document(
        tasks=[
            Task(id=1, title="Write report", due_date="2024-03-01", status=COMPLETED),
            Task(id=4, title="Ship", due_date="2024-04-01"),
        ],
        next_id=7,
        preferences=Preferences(filter_status="pending"),
    )

    assert store.save(doc) is True
    assert store.load() == doc


def test_file_uses_camel_case_keys(data_file: Path) -> None:
    Storage(data_file).save(Document(tasks=[Task(id=1, title="a", due_date="2024-01-01")], next_id=2))

    raw = json.loads(data_file.read_text(encoding="utf-8"))

    assert raw == {
        "tasks": [{"id": 1, "title": "a", "dueDate": "2024-01-01", "status": "pending"}],
        "nextId": 2,
        "preferences": {"filterStatus": "all"},
    }


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    store = Storage(tmp_path / "nested" / "dir" / "tasks.json")

    assert store.save(Document()) is True
    assert store.path.exists()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"tasks": {"id": 1}}',
        '{"tasks": [{"id": "1", "title": "a", "dueDate": "2024-01-01", "status": "pending"}]}',
        '{"tasks": [{"id": 1, "title": "a", "dueDate": "2024-01-01", "status": "done"}]}',
        '{"tasks": [], "preferences": {"filterStatus": "bogus"}}',
        '{"tasks": [], "nextId": "3"}',
        '{"tasks": [], "nextId": -4}',
        '{"tasks": [{"id": 0, "title": "a", "dueDate": "2024-01-01", "status": "pending"}]}',
        '{"tasks": [{"id": -2, "title": "a", "dueDate": "2024-01-01", "status": "pending"}]}',
    ],
)
def test_malformed_file_is_reported_and_defaults(data_file: Path, caplog, content: str) -> None:
    data_file.write_text(content, encoding="utf-8")
    store = Storage(data_file)

    with caplog.at_level(logging.ERROR, logger="taskmanager.storage"):
        doc = store.load()

    assert doc == Document()
    assert store.last_error
    assert any("Error loading data" in r.getMessage() for r in caplog.records)


def test_unreadable_file_is_reported(tmp_path: Path, caplog) -> None:
    # a directory in place of the file triggers an OSError on open
    path = tmp_path / "tasks.json"
    path.mkdir()
    store = Storage(path)

    with caplog.at_level(logging.ERROR, logger="taskmanager.storage"):
        doc = store.load()

    assert doc == Document()
    assert store.last_error


def test_save_failure_is_reported_not_raised(tmp_path: Path, caplog) -> None:
    path = tmp_path / "tasks.json"
    path.mkdir()
    store = Storage(path)

    with caplog.at_level(logging.ERROR, logger="taskmanager.storage"):
        ok = store.save(Document())

    assert ok is False
    assert store.last_error
    assert any("Error saving data" in r.getMessage() for r in caplog.records)


def test_missing_keys_fall_back_to_defaults() -> None:
    doc = Document.from_dict({})

    assert doc == Document()


def test_stale_next_id_is_raised_above_existing_ids() -> None:
    doc = Document.from_dict({
        "tasks": [{"id": 9, "title": "a", "dueDate": "2024-01-01", "status": "pending"}],
        "nextId": 2,
    })

    assert doc.next_id == 10


def test_negative_next_id_never_reaches_add(data_file: Path) -> None:
    data_file.write_text('{"tasks": [], "nextId": -4}', encoding="utf-8")

    repo = TaskRepository(Storage(data_file).load())

    assert repo.add("x", "2024-01-01").id == 1


def test_duplicate_ids_are_malformed() -> None:
    entry = {"id": 1, "title": "a", "dueDate": "2024-01-01", "status": "pending"}
    with pytest.raises(MalformedDocumentError):
        Document.from_dict({"tasks": [entry, dict(entry)]})


def test_boolean_id_is_malformed() -> None:
    with pytest.raises(MalformedDocumentError):
        Task.from_dict({"id": True, "title": "a", "dueDate": "2024-01-01"})
