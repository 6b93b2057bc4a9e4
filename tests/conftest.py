# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskmanager.cli import CLI
from taskmanager.repository import TaskRepository

from .fakes import RecordingStorage, ScriptedInput


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def storage(data_file: Path) -> RecordingStorage:
    return RecordingStorage(data_file)


@pytest.fixture()
def repository() -> TaskRepository:
    return TaskRepository()


@pytest.fixture()
def scripted() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture()
def cli(repository: TaskRepository, storage: RecordingStorage, scripted: ScriptedInput) -> CLI:
    """
    CLI wired to a fresh repository, a tmp-file store and scripted input.

    Push answers with `scripted.feed(...)` before calling `cli.dispatch(...)`.
    """
    return CLI(repository, storage, input_fn=scripted)
