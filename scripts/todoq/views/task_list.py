"""Task list panel: paints only the visible window around the cursor."""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text
from textual.widgets import Static

from todoq.config import Theme
from todoq.models import Task
from todoq.store import TaskStore
from todoq.window import visible_window

EMPTY_MESSAGE = "Empty. Press 'a' to add."


def format_row(task: Task, selected: bool) -> str:
    mark = "▶" if selected else " "
    status = "[x]" if task.done else "[ ]"
    title = task.title.replace("\n", " ")
    return f"{mark} {status} {title}"


class TaskListPanel(Static):
    """Bordered list of tasks with the cursor row highlighted.

    Never paints more rows than the panel can show, so the cursor row
    stays on screen even when the configured window is taller.
    """

    DEFAULT_CSS = """
    TaskListPanel {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }
    """

    def __init__(self, store: TaskStore, window_size: int, theme: Theme, **kwargs) -> None:
        super().__init__(**kwargs)
        self._task_store = store
        self._rows_in_window = window_size
        self._list_theme = theme
        self.visible_range: tuple[int, int] = (0, 0)

    def on_mount(self) -> None:
        self.refresh_rows()

    def on_resize(self) -> None:
        self.refresh_rows()

    def rows_that_fit(self, height: int = 0) -> int:
        """Configured window size, capped at the panel height once laid out."""
        if height > 0:
            return min(self._rows_in_window, height)
        return self._rows_in_window

    def render_rows(self, width: int = 0, height: int = 0) -> Text:
        theme = self._list_theme
        tasks = self._task_store.tasks
        if not tasks:
            self.visible_range = (0, 0)
            return Text(EMPTY_MESSAGE, style=theme.dim)

        cursor = self._task_store.cursor
        start, end = visible_window(cursor, len(tasks), self.rows_that_fit(height))
        self.visible_range = (start, end)

        text = Text()
        for idx in range(start, end):
            selected = idx == cursor
            row = format_row(tasks[idx], selected)
            pad = max(0, width - cell_len(row))
            style = theme.dim if tasks[idx].done else theme.fg
            if selected:
                style = f"{style} on {theme.selection}"
            offset = len(text)
            text.append(row + " " * pad, style=style)
            if selected:
                # cursor marker
                text.stylize(f"bold {theme.accent}", offset, offset + 1)
            if idx < end - 1:
                text.append("\n")
        return text

    def refresh_rows(self) -> None:
        size = self.content_size
        self.update(self.render_rows(size.width, size.height))
