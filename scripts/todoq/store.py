"""
In-memory task collection and selection state.

TaskStore is the only owner of the task list. Everything else reads the
immutable snapshots it hands out or calls its mutation methods.

Index-based operations (remove, toggle, update) treat an out-of-range
index as a no-op and return False instead of raising, so a stale cursor
value never ends the session.

Observers run synchronously after each collection change, in the order
they subscribed. Cursor and modal changes do not notify them.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from todoq.models import SelectionState, Task

logger = logging.getLogger(__name__)

Observer = Callable[[Sequence[Task]], None]


def clamp_cursor(i: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(i, length - 1))


class TaskStore:
    """Ordered task list plus cursor and modal state."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = []
        self._cursor = 0
        self._modal_open = False
        self._observers: list[Observer] = []
        if tasks:
            self._tasks = list(tasks)
            self._check_unique(self._tasks)

    # -------------------- observers --------------------
    def subscribe(self, observer: Observer) -> None:
        """Register an observer called with each new collection snapshot."""
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._observers.remove(observer)

    def _notify(self) -> None:
        snapshot = self.tasks
        for observer in list(self._observers):
            observer(snapshot)

    # -------------------- queries --------------------
    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def modal_open(self) -> bool:
        return self._modal_open

    @property
    def selection(self) -> SelectionState:
        return SelectionState(cursor=self._cursor, modal_open=self._modal_open)

    def current(self) -> Task | None:
        """Task under the cursor, or None when the list is empty."""
        if self._in_range(self._cursor):
            return self._tasks[self._cursor]
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._tasks)

    @staticmethod
    def _check_unique(tasks: Sequence[Task]) -> None:
        ids = [t.id for t in tasks]
        if len(ids) != len(set(ids)):
            raise ValueError("task ids must be unique")

    # -------------------- collection mutations --------------------
    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Swap in a whole collection (startup hydration). The cursor is left alone."""
        new_tasks = list(tasks)
        self._check_unique(new_tasks)
        self._tasks = new_tasks
        self._notify()

    def add(self, title: str) -> Task:
        """Append a new task. Empty titles are accepted."""
        existing = {t.id for t in self._tasks}
        task = Task.create(title)
        while task.id in existing:
            task = Task.create(title, created_at=task.created_at)
        self._tasks.append(task)
        self._notify()
        return task

    def remove_at(self, index: int) -> bool:
        if not self._in_range(index):
            logger.debug("remove_at(%d) ignored, length %d", index, len(self._tasks))
            return False
        del self._tasks[index]
        self._cursor = clamp_cursor(self._cursor, len(self._tasks))
        self._notify()
        return True

    def toggle_done_at(self, index: int) -> bool:
        if not self._in_range(index):
            logger.debug("toggle_done_at(%d) ignored, length %d", index, len(self._tasks))
            return False
        self._tasks[index] = self._tasks[index].toggled()
        self._notify()
        return True

    def update_fields(self, index: int, title: str, detail: str, tags: Iterable[str]) -> bool:
        """Replace title, detail and tags of one task; id, created_at and done are kept."""
        if not self._in_range(index):
            logger.debug("update_fields(%d) ignored, length %d", index, len(self._tasks))
            return False
        self._tasks[index] = self._tasks[index].with_fields(title=title, detail=detail, tags=tags)
        self._notify()
        return True

    def update_detail_tags(self, index: int, detail: str, tags: Iterable[str]) -> bool:
        if not self._in_range(index):
            logger.debug("update_detail_tags(%d) ignored, length %d", index, len(self._tasks))
            return False
        self._tasks[index] = self._tasks[index].with_fields(detail=detail, tags=tags)
        self._notify()
        return True

    # -------------------- selection --------------------
    def set_cursor(self, i: int) -> int:
        self._cursor = clamp_cursor(i, len(self._tasks))
        return self._cursor

    def move_cursor(self, delta: int) -> int:
        return self.set_cursor(self._cursor + delta)

    def open_modal(self) -> None:
        self._modal_open = True

    def close_modal(self) -> None:
        self._modal_open = False
