"""Shared fixtures for minitodo tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from minitodo.models import Todo
from minitodo.store import TodoStore


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Drop handlers the CLI attaches so log files are closed between tests."""
    yield
    logger = logging.getLogger("minitodo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


@pytest.fixture
def sample_todos() -> list[Todo]:
    """A small mixed list of todos."""
    return [
        Todo(text="Buy milk", category="Home"),
        Todo(text="Write report", category="Work", due_date=datetime(2024, 3, 1)),
        Todo(text="Call plumber", category="home", done=True),
        Todo(text="Review PR", category="Work", done=True),
        Todo(text="Read book"),
    ]


@pytest.fixture
def store(sample_todos: list[Todo]) -> TodoStore:
    """A store pre-filled with the sample todos, first item selected."""
    store = TodoStore()
    store.replace_all(sample_todos)
    store.selected = 0
    return store
