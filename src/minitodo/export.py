"""Markdown export of the todo list."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from jinja2 import BaseLoader, Environment

from minitodo.dates import due_status, format_date
from minitodo.models import Todo

DEFAULT_TEMPLATE = """\
# Todos

{% for todo in todos %}
- [{{ 'x' if todo.done else ' ' }}] {{ todo.text }}{{ todo.suffix }}
{% else %}
No todos.
{% endfor %}

{{ done_count }}/{{ total_count }} done
"""


def _suffix(todo: Todo, now: datetime) -> str:
    """Category and due date annotations for one checklist line."""
    parts = []
    if todo.category:
        parts.append(f" ({todo.category})")
    if todo.due_date is not None:
        parts.append(f" - due {format_date(todo.due_date)}")
        if not todo.done and due_status(todo.due_date, now) == "overdue":
            parts.append(" (overdue)")
    return "".join(parts)


def render_markdown(
    todos: Iterable[Todo],
    now: datetime | None = None,
    template: str = DEFAULT_TEMPLATE,
) -> str:
    """Render todos as a Markdown checklist in store order."""
    if now is None:
        now = datetime.now()

    items = [
        {"text": todo.text, "done": todo.done, "suffix": _suffix(todo, now)}
        for todo in todos
    ]

    env = Environment(loader=BaseLoader(), trim_blocks=True)
    return env.from_string(template).render(
        todos=items,
        done_count=sum(1 for item in items if item["done"]),
        total_count=len(items),
    )
