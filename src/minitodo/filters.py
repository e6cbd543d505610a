"""Filter and search engine over the todo store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from minitodo.models import Todo
from minitodo.store import TodoStore

ViewState = Literal["empty", "no_matches", "ok"]


class StatusFilter(Enum):
    """Which todos to show by done flag."""

    ALL = "All"
    PENDING = "Pending"
    DONE = "Done"

    def next(self) -> StatusFilter:
        """The next filter in the All -> Pending -> Done cycle."""
        members = list(StatusFilter)
        return members[(members.index(self) + 1) % len(members)]


@dataclass
class FilterConfig:
    """Category, status and search filters for the current session."""

    category_filter: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    search_term: str = ""

    @property
    def is_active(self) -> bool:
        return bool(
            self.category_filter
            or self.search_term
            or self.status_filter is not StatusFilter.ALL
        )

    def cycle_status(self) -> StatusFilter:
        """Advance the status filter and return the new value."""
        self.status_filter = self.status_filter.next()
        return self.status_filter

    def reset(self) -> None:
        """Clear all three filters at once."""
        self.category_filter = ""
        self.status_filter = StatusFilter.ALL
        self.search_term = ""

    def describe(self) -> str:
        """Header line summarising the active filters."""
        category = self.category_filter or "All"
        search = self.search_term or "None"
        return f"Filter: {category} | Status: {self.status_filter.value} | Search: {search}"


def matches(todo: Todo, filters: FilterConfig) -> bool:
    """Check a single todo against every active filter."""
    if filters.status_filter is StatusFilter.PENDING and todo.done:
        return False
    if filters.status_filter is StatusFilter.DONE and not todo.done:
        return False

    if filters.category_filter and (
        todo.category.casefold() != filters.category_filter.casefold()
    ):
        return False

    if filters.search_term:
        needle = filters.search_term.casefold()
        if needle not in todo.text.casefold() and needle not in todo.category.casefold():
            return False

    return True


def visible(store: TodoStore, filters: FilterConfig) -> list[int]:
    """Store indices that pass the filters, in ascending order."""
    return [index for index, todo in enumerate(store) if matches(todo, filters)]


def view_state(store: TodoStore, filters: FilterConfig) -> ViewState:
    """Tell an empty store apart from a filter that matches nothing."""
    if len(store) == 0:
        return "empty"
    if not visible(store, filters):
        return "no_matches"
    return "ok"
