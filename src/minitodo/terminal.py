"""Curses terminal service and list view rendering."""

from __future__ import annotations

import curses
import logging
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Protocol

from minitodo.codec import load_store, save_store
from minitodo.config import TodoConfig
from minitodo.dates import due_status, format_date
from minitodo.filters import view_state
from minitodo.session import Action, Session
from minitodo.store import TodoStore

logger = logging.getLogger(__name__)

TITLE = "MINIMAL TODO TUI"
FOOTER = (
    "a:Add d:Delete Space:Toggle e:Edit D:Due c:Set-Cat C:Filter-Cat "
    "f:Filter-Status /:Search r:Reset q:Quit"
)
EMPTY_STORE_MESSAGE = "No todos yet. Press 'a' to add one."
NO_MATCHES_MESSAGE = "No matching todos found."

# First row of the list, below the title and filter lines
LIST_TOP = 3


class Color(IntEnum):
    """Colour pair numbers for the fixed palette."""

    DONE = 1
    OVERDUE = 2
    DUE_SOON = 3
    CATEGORY = 4


PALETTE: dict[Color, int] = {
    Color.DONE: curses.COLOR_GREEN,
    Color.OVERDUE: curses.COLOR_RED,
    Color.DUE_SOON: curses.COLOR_YELLOW,
    Color.CATEGORY: curses.COLOR_BLUE,
}


class Terminal(Protocol):
    """What the renderer and event loop need from a terminal."""

    def size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def refresh(self) -> None: ...

    def write(
        self,
        row: int,
        col: int,
        text: str,
        color: Color | None = None,
        bold: bool = False,
        reverse: bool = False,
    ) -> None: ...

    def read_key(self) -> int: ...

    def read_line(self, prompt: str) -> str: ...


class CursesTerminal:
    """Terminal service backed by a curses window."""

    def __init__(self, stdscr: curses.window, max_length: int = 128) -> None:
        self._screen = stdscr
        self._max_length = max_length
        self._colors = False

        curses.cbreak()
        curses.noecho()
        stdscr.keypad(True)
        self._set_cursor(0)

        if curses.has_colors():
            curses.start_color()
            for pair, foreground in PALETTE.items():
                curses.init_pair(pair, foreground, curses.COLOR_BLACK)
            self._colors = True

    @staticmethod
    def _set_cursor(visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass

    def size(self) -> tuple[int, int]:
        rows, cols = self._screen.getmaxyx()
        return rows, cols

    def clear(self) -> None:
        self._screen.erase()

    def refresh(self) -> None:
        self._screen.refresh()

    def write(
        self,
        row: int,
        col: int,
        text: str,
        color: Color | None = None,
        bold: bool = False,
        reverse: bool = False,
    ) -> None:
        """Draw text at a cell, clipped to the window."""
        rows, cols = self.size()
        if not 0 <= row < rows or not 0 <= col < cols:
            return

        attr = curses.A_NORMAL
        if color is not None and self._colors:
            attr |= curses.color_pair(color)
        if bold:
            attr |= curses.A_BOLD
        if reverse:
            attr |= curses.A_REVERSE

        try:
            self._screen.addnstr(row, col, text, cols - col, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass

    def read_key(self) -> int:
        return self._screen.getch()

    def read_line(self, prompt: str) -> str:
        """Read one echoed line on the prompt row, terminated by enter."""
        rows, _ = self.size()
        row = max(rows - 2, 0)

        self.write(row, 0, prompt)
        self._screen.move(row, min(len(prompt), self.size()[1] - 1))
        self._screen.clrtoeol()

        curses.echo()
        self._set_cursor(1)
        try:
            raw = self._screen.getstr(self._max_length - 1)
        finally:
            curses.noecho()
            self._set_cursor(0)

        return raw.decode("utf-8", errors="replace")


def render(
    term: Terminal,
    session: Session,
    now: datetime | None = None,
    soon_days: int = 2,
) -> None:
    """Draw the header, the visible todos and the footer."""
    if now is None:
        now = datetime.now()

    rows, cols = term.size()
    store = session.store
    term.clear()

    term.write(0, 0, TITLE, bold=True)
    term.write(1, 0, session.filters.describe())

    row = LIST_TOP
    # Keep the prompt and footer rows free
    last_row = rows - 3
    selected = store.selected

    for index in session.visible():
        if row > last_row:
            break

        todo = store[index]
        highlight = index == selected

        term.write(row, 0, f"[{'X' if todo.done else ' '}] ", reverse=highlight)
        term.write(
            row,
            4,
            todo.text,
            color=Color.DONE if todo.done else None,
            reverse=highlight,
        )

        if todo.category:
            term.write(
                row,
                4 + len(todo.text) + 1,
                f"({todo.category})",
                color=Color.CATEGORY,
                reverse=highlight,
            )

        if todo.due_date is not None:
            label = format_date(todo.due_date)
            status = due_status(todo.due_date, now, soon_days)
            color = {"overdue": Color.OVERDUE, "due_soon": Color.DUE_SOON}.get(status)
            term.write(
                row,
                max(cols - len(label) - 1, 0),
                label,
                color=color,
                reverse=highlight,
            )

        row += 1

    state = view_state(store, session.filters)
    if state == "empty":
        term.write(row, 0, EMPTY_STORE_MESSAGE)
    elif state == "no_matches":
        term.write(row, 0, NO_MATCHES_MESSAGE)

    term.write(rows - 1, 0, FOOTER)
    term.refresh()


def event_loop(term: Terminal, session: Session, data_path: Path, soon_days: int = 2) -> None:
    """Render, read a key, dispatch; save on quit."""
    while True:
        render(term, session, soon_days=soon_days)
        action = session.handle_key(term.read_key())

        if action is Action.CAPTURE:
            prompt = session.prompt or ""
            session.commit_capture(term.read_line(prompt))
        elif action is Action.QUIT:
            save_store(session.store, data_path)
            return


def run_tui(config: TodoConfig) -> None:
    """Load the todo file, run the interface, save on quit."""
    data_path = Path(config.data_file)
    store = TodoStore(max_todos=config.max_todos, max_length=config.max_length)
    load_store(store, data_path)
    session = Session(store, navigation=config.navigation)

    def _main(stdscr: curses.window) -> None:
        term = CursesTerminal(stdscr, max_length=config.max_length)
        event_loop(term, session, data_path, soon_days=config.due_soon_days)

    # wrapper restores the terminal only after the loop has saved
    curses.wrapper(_main)
    logger.debug("Session ended with %d todos", len(store))
