"""Tests for minitodo.terminal module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import pytest

from minitodo.codec import load_store
from minitodo.filters import StatusFilter
from minitodo.session import Session
from minitodo.store import TodoStore
from minitodo.terminal import (
    EMPTY_STORE_MESSAGE,
    FOOTER,
    NO_MATCHES_MESSAGE,
    TITLE,
    Color,
    event_loop,
    render,
)


@dataclass
class Cell:
    """One recorded write."""

    row: int
    col: int
    text: str
    color: Color | None
    bold: bool
    reverse: bool


@dataclass
class FakeTerminal:
    """Terminal double that records writes and replays scripted input."""

    rows: int = 24
    cols: int = 80
    keys: list[int | str] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)
    writes: list[Cell] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)
    refreshes: int = 0

    def size(self) -> tuple[int, int]:
        return self.rows, self.cols

    def clear(self) -> None:
        self.writes = []

    def refresh(self) -> None:
        self.refreshes += 1

    def write(
        self,
        row: int,
        col: int,
        text: str,
        color: Color | None = None,
        bold: bool = False,
        reverse: bool = False,
    ) -> None:
        self.writes.append(Cell(row, col, text, color, bold, reverse))

    def read_key(self) -> int:
        key = self.keys.pop(0)
        return ord(key) if isinstance(key, str) else key

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.lines.pop(0)

    def at(self, row: int) -> list[Cell]:
        return [cell for cell in self.writes if cell.row == row]

    def text_at(self, row: int) -> str:
        return "".join(cell.text for cell in self.at(row))


NOW = datetime(2024, 3, 1, 12, 0)


class TestRender:
    """Tests for render()."""

    def test_header_and_footer(self, store: TodoStore) -> None:
        """Test the title, filter line and footer are drawn."""
        term = FakeTerminal()
        render(term, Session(store), NOW)
        assert term.at(0)[0].text == TITLE
        assert term.at(0)[0].bold is True
        assert term.text_at(1) == "Filter: All | Status: All | Search: None"
        assert term.text_at(23) == FOOTER
        assert term.refreshes == 1

    def test_rows_and_highlight(self, store: TodoStore) -> None:
        """Test each visible todo gets a row and the selection is reversed."""
        store.selected = 2
        term = FakeTerminal()
        render(term, Session(store), NOW)

        assert term.at(3)[0].text == "[ ] "
        assert term.at(3)[1].text == "Buy milk"
        assert all(not cell.reverse for cell in term.at(3))

        selected = term.at(5)
        assert selected[0].text == "[X] "
        assert selected[1].color is Color.DONE
        assert all(cell.reverse for cell in selected)

    def test_category_after_text(self, store: TodoStore) -> None:
        """Test the category is drawn in blue one column after the text."""
        term = FakeTerminal()
        render(term, Session(store), NOW)
        category = term.at(3)[2]
        assert category.text == "(Home)"
        assert category.col == 4 + len("Buy milk") + 1
        assert category.color is Color.CATEGORY

    @pytest.mark.parametrize(
        ("now", "color"),
        [
            (datetime(2024, 3, 2), Color.OVERDUE),
            (datetime(2024, 2, 28, 12, 0), Color.DUE_SOON),
            (datetime(2024, 2, 20), None),
        ],
    )
    def test_due_date_colors(self, store: TodoStore, now: datetime, color: Color | None) -> None:
        """Test due dates are right-aligned and coloured by urgency."""
        term = FakeTerminal()
        render(term, Session(store), now)
        due = term.at(4)[-1]
        assert due.text == "2024-03-01"
        assert due.col == 80 - len("2024-03-01") - 1
        assert due.color is color

    def test_filtered_rows_only(self, store: TodoStore) -> None:
        """Test hidden todos are not drawn."""
        session = Session(store)
        session.filters.status_filter = StatusFilter.DONE
        term = FakeTerminal()
        render(term, session, NOW)
        assert "Call plumber" in term.text_at(3)
        assert "Review PR" in term.text_at(4)
        assert term.at(5) == []

    def test_empty_store_message(self) -> None:
        """Test the empty store has its own message."""
        term = FakeTerminal()
        render(term, Session(), NOW)
        assert term.text_at(3) == EMPTY_STORE_MESSAGE

    def test_no_matches_message(self, store: TodoStore) -> None:
        """Test a filter with no hits shows the no-matches message."""
        session = Session(store)
        session.filters.search_term = "zzz"
        term = FakeTerminal()
        render(term, session, NOW)
        assert term.text_at(3) == NO_MATCHES_MESSAGE

    def test_rows_stop_above_prompt(self, store: TodoStore) -> None:
        """Test the list never overwrites the prompt or footer rows."""
        term = FakeTerminal(rows=6)
        render(term, Session(store), NOW)
        drawn = {cell.row for cell in term.writes}
        assert 4 not in drawn
        assert 3 in drawn


class TestEventLoop:
    """Tests for event_loop()."""

    def test_add_and_quit_saves(self, temp_project: Path) -> None:
        """Test a scripted add followed by quit persists the todo."""
        path = temp_project / ".todos.dat"
        session = Session()
        term = FakeTerminal(keys=["a", "D", "q"], lines=["Pay rent", "2024-05-01"])

        event_loop(term, session, path)

        assert term.prompts == ["New todo: ", "Due date (YYYY-MM-DD or blank to clear): "]
        reloaded = TodoStore()
        load_store(reloaded, path)
        assert [todo.text for todo in reloaded] == ["Pay rent"]
        assert reloaded[0].due_date == datetime(2024, 5, 1)

    def test_filter_keys_do_not_prompt(self, store: TodoStore, temp_project: Path) -> None:
        """Test f and r act immediately without reading a line."""
        session = Session(store)
        term = FakeTerminal(keys=["f", "f", "r", "q"])
        event_loop(term, session, temp_project / ".todos.dat")
        assert term.prompts == []
        assert session.filters.is_active is False
