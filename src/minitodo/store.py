"""Todo store - the bounded, ordered collection behind the list view.

Every mutation returns True when it changed something and False when it was
rejected. Rejections are never raised: the UI ignores the result, while tests
and logs use it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from minitodo.dates import parse_due_date
from minitodo.models import MAX_LENGTH, MAX_TODOS, Todo, bound_text

logger = logging.getLogger(__name__)


class TodoStore:
    """Ordered todos plus the currently selected store index."""

    def __init__(self, max_todos: int = MAX_TODOS, max_length: int = MAX_LENGTH) -> None:
        self.max_todos = max_todos
        self.max_length = max_length
        self._todos: list[Todo] = []
        self._selected = 0

    def __len__(self) -> int:
        return len(self._todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self._todos)

    def __getitem__(self, index: int) -> Todo:
        return self._todos[index]

    @property
    def todos(self) -> list[Todo]:
        """A copy of the todos in store order."""
        return list(self._todos)

    @property
    def is_full(self) -> bool:
        return len(self._todos) >= self.max_todos

    @property
    def selected(self) -> int | None:
        """The selected store index, or None while the store is empty."""
        if not self._todos:
            return None
        return self._selected

    @selected.setter
    def selected(self, index: int) -> None:
        if not self._todos:
            self._selected = 0
            return
        self._selected = max(0, min(index, len(self._todos) - 1))

    @property
    def selected_todo(self) -> Todo | None:
        index = self.selected
        return None if index is None else self._todos[index]

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._todos)

    def create(self, text: str) -> bool:
        """Append a new pending todo and select it.

        Empty text and a full store are both rejected.
        """
        if not text:
            return False
        if self.is_full:
            logger.debug("Store full at %d todos, create ignored", self.max_todos)
            return False

        self._todos.append(Todo(text=bound_text(text, self.max_length)))
        self._selected = len(self._todos) - 1
        return True

    def delete(self, index: int) -> bool:
        """Remove a todo, shifting every later todo one place left.

        The selection only steps back by one when it fell off the end; it is
        not recomputed onto a particular neighbour.
        """
        if not self._valid(index):
            return False

        self._todos.pop(index)
        if self._selected >= len(self._todos) and self._selected > 0:
            self._selected -= 1
        return True

    def toggle(self, index: int) -> bool:
        """Flip the done flag."""
        if not self._valid(index):
            return False
        todo = self._todos[index]
        todo.done = not todo.done
        return True

    def edit_text(self, index: int, new_text: str) -> bool:
        """Replace the text. Empty input means cancel, not clear."""
        if not self._valid(index) or not new_text:
            return False
        self._todos[index].text = bound_text(new_text, self.max_length)
        return True

    def set_category(self, index: int, new_category: str) -> bool:
        """Replace the category. Empty input clears it."""
        if not self._valid(index):
            return False
        self._todos[index].category = bound_text(new_category, self.max_length)
        return True

    def set_due_date(self, index: int, date_string: str) -> bool:
        """Set the due date from ``YYYY-M-D`` input, or clear it on empty input.

        Input that does not parse to a real calendar day leaves the existing
        due date untouched.
        """
        if not self._valid(index):
            return False

        if not date_string:
            self._todos[index].due_date = None
            return True

        due = parse_due_date(date_string)
        if due is None:
            logger.debug("Ignoring unparsable due date %r", date_string)
            return False

        self._todos[index].due_date = due
        return True

    def replace_all(self, todos: Iterable[Todo]) -> None:
        """Overwrite the contents, keeping at most ``max_todos`` entries."""
        self._todos = [
            Todo(
                text=bound_text(todo.text, self.max_length),
                category=bound_text(todo.category, self.max_length),
                due_date=todo.due_date,
                done=todo.done,
            )
            for todo in todos
        ][: self.max_todos]
        self.selected = self._selected
