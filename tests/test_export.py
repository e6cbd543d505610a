"""Tests for minitodo.export module."""

from __future__ import annotations

from datetime import datetime

from minitodo.export import render_markdown
from minitodo.models import Todo


class TestRenderMarkdown:
    """Tests for render_markdown."""

    def test_checklist(self, sample_todos: list[Todo]) -> None:
        """Test todos render as a checklist in store order."""
        output = render_markdown(sample_todos, now=datetime(2024, 3, 5))
        assert output == (
            "# Todos\n"
            "\n"
            "- [ ] Buy milk (Home)\n"
            "- [ ] Write report (Work) - due 2024-03-01 (overdue)\n"
            "- [x] Call plumber (home)\n"
            "- [x] Review PR (Work)\n"
            "- [ ] Read book\n"
            "\n"
            "2/5 done"
        )

    def test_not_overdue_before_due(self) -> None:
        """Test a future due date has no overdue marker."""
        todo = Todo(text="Plan trip", due_date=datetime(2024, 6, 1))
        output = render_markdown([todo], now=datetime(2024, 5, 1))
        assert "- [ ] Plan trip - due 2024-06-01\n" in output
        assert "overdue" not in output

    def test_done_never_overdue(self) -> None:
        """Test completed todos are not flagged overdue."""
        todo = Todo(text="Old", due_date=datetime(2020, 1, 1), done=True)
        assert "overdue" not in render_markdown([todo], now=datetime(2024, 1, 1))

    def test_empty(self) -> None:
        """Test an empty list says so."""
        assert render_markdown([]) == "# Todos\n\nNo todos.\n\n0/0 done"
