"""Interaction state machine for the todo list UI.

A ``Session`` owns the store, the filters and the input mode. Keys arrive
one at a time through ``handle_key``; commands that need a line of text
switch the session into capture mode, and the line is handed back through
``commit_capture``. Keyboard and screen I/O live in ``minitodo.terminal``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal

from minitodo.filters import FilterConfig, visible
from minitodo.models import bound_text
from minitodo.store import TodoStore

logger = logging.getLogger(__name__)

# curses key codes for the arrow keys
KEY_DOWN = 0o402
KEY_UP = 0o403


class Mode(Enum):
    """Input modes."""

    BROWSING = "browsing"
    CAPTURING = "capturing"


class CapturePurpose(Enum):
    """What a captured line of text will be used for."""

    NEW_TODO = "new_todo"
    EDIT_TODO = "edit_todo"
    SET_CATEGORY = "set_category"
    SET_DUE_DATE = "set_due_date"
    SET_CATEGORY_FILTER = "set_category_filter"
    SET_SEARCH_TERM = "set_search_term"


class Action(Enum):
    """What the event loop should do after a key."""

    NONE = "none"
    REDRAW = "redraw"
    CAPTURE = "capture"
    QUIT = "quit"


PROMPTS: dict[CapturePurpose, str] = {
    CapturePurpose.NEW_TODO: "New todo: ",
    CapturePurpose.EDIT_TODO: "Edit todo: ",
    CapturePurpose.SET_CATEGORY: "Category: ",
    CapturePurpose.SET_DUE_DATE: "Due date (YYYY-MM-DD or blank to clear): ",
    CapturePurpose.SET_CATEGORY_FILTER: "Filter by category (blank for all): ",
    CapturePurpose.SET_SEARCH_TERM: "Search: ",
}

# Commands that act on the selected todo and do nothing on an empty store
ITEM_CAPTURES: dict[str, CapturePurpose] = {
    "e": CapturePurpose.EDIT_TODO,
    "D": CapturePurpose.SET_DUE_DATE,
    "c": CapturePurpose.SET_CATEGORY,
}


class Session:
    """State of one interactive session."""

    def __init__(
        self,
        store: TodoStore | None = None,
        filters: FilterConfig | None = None,
        navigation: Literal["raw", "visible"] = "raw",
    ) -> None:
        self.store = store if store is not None else TodoStore()
        self.filters = filters if filters is not None else FilterConfig()
        self.navigation = navigation
        self.mode = Mode.BROWSING
        self.purpose: CapturePurpose | None = None
        self._target: int | None = None

    @property
    def prompt(self) -> str | None:
        """Prompt text for the active capture, None while browsing."""
        if self.purpose is None:
            return None
        return PROMPTS[self.purpose]

    def visible(self) -> list[int]:
        return visible(self.store, self.filters)

    def handle_key(self, key: int | str) -> Action:
        """Dispatch a single key pressed while browsing."""
        if self.mode is Mode.CAPTURING:
            return Action.NONE

        if isinstance(key, int):
            if key == KEY_DOWN:
                return self.move(1)
            if key == KEY_UP:
                return self.move(-1)
            if not 0 <= key < 0x110000:
                return Action.NONE
            key = chr(key)

        if key == "q":
            return Action.QUIT
        if key == "j":
            return self.move(1)
        if key == "k":
            return self.move(-1)
        if key == "a":
            return self.begin_capture(CapturePurpose.NEW_TODO)
        if key == "C":
            return self.begin_capture(CapturePurpose.SET_CATEGORY_FILTER)
        if key == "/":
            return self.begin_capture(CapturePurpose.SET_SEARCH_TERM)
        if key == "f":
            self.filters.cycle_status()
            self.store.selected = 0
            return Action.REDRAW
        if key == "r":
            self.filters.reset()
            return Action.REDRAW

        selected = self.store.selected
        if selected is None:
            return Action.NONE

        if key == "d":
            self.store.delete(selected)
            return Action.REDRAW
        if key == " ":
            self.store.toggle(selected)
            return Action.REDRAW
        if key in ITEM_CAPTURES:
            return self.begin_capture(ITEM_CAPTURES[key])

        return Action.NONE

    def move(self, step: int) -> Action:
        """Move the selection one row up (-1) or down (+1)."""
        selected = self.store.selected
        if selected is None:
            return Action.NONE

        if self.navigation == "visible":
            rows = self.visible()
            if step > 0:
                candidates = [index for index in rows if index > selected]
                target = candidates[0] if candidates else None
            else:
                candidates = [index for index in rows if index < selected]
                target = candidates[-1] if candidates else None
            if target is None:
                return Action.NONE
            self.store.selected = target
        else:
            self.store.selected = selected + step

        return Action.REDRAW

    def begin_capture(self, purpose: CapturePurpose) -> Action:
        """Switch to capture mode for ``purpose``."""
        self.mode = Mode.CAPTURING
        self.purpose = purpose
        self._target = self.store.selected
        return Action.CAPTURE

    def cancel_capture(self) -> None:
        """Leave capture mode without applying anything."""
        self.mode = Mode.BROWSING
        self.purpose = None
        self._target = None

    def commit_capture(self, text: str) -> bool:
        """Apply a captured line to the operation it was requested for.

        Returns whether the underlying store or filter changed.
        """
        purpose, target = self.purpose, self._target
        self.cancel_capture()
        if purpose is None:
            return False

        text = text.rstrip("\r\n")
        store = self.store

        if purpose is CapturePurpose.NEW_TODO:
            return store.create(text)

        if purpose is CapturePurpose.SET_CATEGORY_FILTER:
            self.filters.category_filter = bound_text(text, store.max_length)
            store.selected = 0
            return True

        if purpose is CapturePurpose.SET_SEARCH_TERM:
            self.filters.search_term = bound_text(text, store.max_length)
            store.selected = 0
            return True

        if target is None:
            return False

        if purpose is CapturePurpose.EDIT_TODO:
            changed = store.edit_text(target, text)
        elif purpose is CapturePurpose.SET_CATEGORY:
            changed = store.set_category(target, text)
        else:
            changed = store.set_due_date(target, text)

        if not changed:
            logger.debug("Capture for %s left todo %d unchanged", purpose.value, target)
        return changed
