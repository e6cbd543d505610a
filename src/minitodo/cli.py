"""CLI interface for minitodo."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from minitodo import __version__
from minitodo.codec import load_store
from minitodo.config import TodoConfig, configure_logging
from minitodo.dates import due_status, format_date
from minitodo.filters import FilterConfig, StatusFilter, visible
from minitodo.store import TodoStore

console = Console()


def _load(config: TodoConfig) -> TodoStore:
    store = TodoStore(max_todos=config.max_todos, max_length=config.max_length)
    load_store(store, Path(config.data_file))
    return store


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="minitodo")
@click.pass_context
def main(ctx: click.Context) -> None:
    """minitodo - a minimal terminal todo list.

    Run without a command to open the full-screen list.

    \b
    Keys:
      j/k, arrows   move the selection
      a  add        d  delete       space  toggle done
      e  edit       D  due date     c      set category
      C  filter by category         f      cycle status filter
      /  search     r  reset filters        q  save and quit
    """
    ctx.ensure_object(dict)
    config = TodoConfig.load()
    configure_logging(config)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        from minitodo.terminal import run_tui

        run_tui(config)


@main.command("list")
@click.option(
    "--status",
    "-s",
    type=click.Choice(["all", "pending", "done"]),
    default="all",
    help="Show only pending or done todos",
)
@click.option("--category", "-c", default="", help="Show only this category")
@click.option("--search", "-q", "search", default="", help="Match text or category")
@click.pass_context
def list_command(ctx: click.Context, status: str, category: str, search: str) -> None:
    """List todos without opening the full-screen view."""
    config: TodoConfig = ctx.obj["config"]
    store = _load(config)

    filters = FilterConfig(
        category_filter=category,
        status_filter=StatusFilter[status.upper()],
        search_term=search,
    )

    if len(store) == 0:
        console.print("[dim]No todos yet.[/dim]")
        return

    indices = visible(store, filters)
    if not indices:
        console.print("[yellow]No matching todos found.[/yellow]")
        return

    now = datetime.now()
    table = Table(title="Todos")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Done", justify="center")
    table.add_column("Todo")
    table.add_column("Category", style="blue")
    table.add_column("Due")

    for index in indices:
        todo = store[index]
        due = ""
        if todo.due_date is not None:
            due = format_date(todo.due_date)
            state = due_status(todo.due_date, now, config.due_soon_days)
            if state == "overdue":
                due = f"[red]{due}[/red]"
            elif state == "due_soon":
                due = f"[yellow]{due}[/yellow]"
        text = escape(todo.text)
        table.add_row(
            str(index + 1),
            "[green]✓[/green]" if todo.done else "○",
            f"[green]{text}[/green]" if todo.done else text,
            escape(todo.category),
            due,
        )

    console.print(table)
    done_count = sum(1 for todo in store if todo.done)
    console.print(f"[dim]{done_count}/{len(store)} done[/dim]")


@main.command("export")
@click.pass_context
def export_command(ctx: click.Context) -> None:
    """Print the list as a Markdown checklist."""
    from minitodo.export import render_markdown

    config: TodoConfig = ctx.obj["config"]
    store = _load(config)
    click.echo(render_markdown(store))


if __name__ == "__main__":
    main()
