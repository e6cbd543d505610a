"""Binary persistence for the todo store.

The file is a little-endian ``int32`` count followed by that many fixed-size
records laid out like the equivalent C struct on x86-64::

    char    text[128]
    char    category[128]
    int64   due_date      (epoch seconds, 0 = none)
    int32   done
    4 bytes padding

There is no magic number, version or checksum. Short or foreign files decode
into whatever complete records they contain.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable
from pathlib import Path

from minitodo.dates import from_epoch, to_epoch
from minitodo.models import MAX_LENGTH, MAX_TODOS, Todo, bound_text
from minitodo.store import TodoStore

logger = logging.getLogger(__name__)

COUNT_FORMAT = struct.Struct("<i")
RECORD_FORMAT = struct.Struct(f"<{MAX_LENGTH}s{MAX_LENGTH}sqi4x")


def _encode_field(value: str) -> bytes:
    return bound_text(value).encode("utf-8")


def _decode_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def encode(todos: Iterable[Todo]) -> bytes:
    """Serialise todos in store order."""
    records = [
        RECORD_FORMAT.pack(
            _encode_field(todo.text),
            _encode_field(todo.category),
            to_epoch(todo.due_date),
            1 if todo.done else 0,
        )
        for todo in todos
    ]
    return COUNT_FORMAT.pack(len(records)) + b"".join(records)


def decode(data: bytes, max_todos: int = MAX_TODOS) -> list[Todo]:
    """Deserialise as many complete records as the header and data allow."""
    if len(data) < COUNT_FORMAT.size:
        return []

    (count,) = COUNT_FORMAT.unpack_from(data)
    if count < 0 or count > max_todos:
        logger.warning("Record count %d out of range, clamping to %d", count, max_todos)
        count = max(0, min(count, max_todos))

    available = (len(data) - COUNT_FORMAT.size) // RECORD_FORMAT.size
    if available < count:
        logger.warning("Data holds %d of %d records", available, count)
        count = available

    todos = []
    for position in range(count):
        offset = COUNT_FORMAT.size + position * RECORD_FORMAT.size
        text, category, due, done = RECORD_FORMAT.unpack_from(data, offset)
        todos.append(
            Todo(
                text=_decode_field(text),
                category=_decode_field(category),
                due_date=from_epoch(due),
                done=done != 0,
            )
        )
    return todos


def load_store(store: TodoStore, path: Path) -> bool:
    """Replace the store contents with the file at ``path``.

    A missing or unreadable file leaves the store empty.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.info("Could not read %s: %s", path, exc)
        store.replace_all([])
        return False

    store.replace_all(decode(data, store.max_todos))
    logger.debug("Loaded %d todos from %s", len(store), path)
    return True


def save_store(store: TodoStore, path: Path) -> bool:
    """Write the store to ``path``. Failures are logged and otherwise ignored."""
    try:
        path.write_bytes(encode(store))
    except OSError as exc:
        logger.warning("Could not save todos to %s: %s", path, exc)
        return False

    logger.debug("Saved %d todos to %s", len(store), path)
    return True
