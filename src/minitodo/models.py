"""Data models for minitodo."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# Field buffers hold MAX_LENGTH bytes including the terminator
MAX_LENGTH = 128
MAX_TODOS = 100


def bound_text(value: str, max_length: int = MAX_LENGTH) -> str:
    """Truncate a string so its UTF-8 form fits a ``max_length`` byte field.

    One byte is kept for the terminator and the cut never splits a character.
    """
    raw = value.encode("utf-8")
    if len(raw) < max_length:
        return value
    return raw[: max_length - 1].decode("utf-8", errors="ignore")


@dataclass
class Todo:
    """A single todo item."""

    text: str
    category: str = ""
    due_date: datetime | None = None
    done: bool = False
