"""
todoq TUI application.

Keys are resolved through the configurable keymap and applied to the
TaskStore. The store's autosave observer writes every change to disk
before the key handler returns.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from textual import events
from textual.app import App, ComposeResult
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Label

from todoq import export
from todoq.config import AppConfig
from todoq.errors import WriteError
from todoq.keymap import action_for
from todoq.store import TaskStore
from todoq.views.edit_modal import EditResult, EditTaskScreen
from todoq.views.task_list import TaskListPanel

logger = logging.getLogger(__name__)

HELP_LINE = "j/k:move g/G:top/bottom a:add x:toggle d:delete enter/o:edit m:md export c:csv export q:quit"
NEW_TASK_TITLE = "New task"


class TodoqApp(App):
    """Single-queue task manager."""

    TITLE = "LazyQueue"
    SUB_TITLE = "single queue"

    CSS = """
    Screen {
        background: $surface;
    }

    #help {
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        store: TaskStore,
        config: AppConfig,
        startup_warning: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.app_config = config
        self._startup_warning = startup_warning
        self._key_actions: dict[str, Callable[[], None]] = {
            "up": lambda: self.store.move_cursor(-1),
            "down": lambda: self.store.move_cursor(1),
            "top": lambda: self.store.set_cursor(0),
            "bottom": lambda: self.store.set_cursor(len(self.store) - 1),
            "toggleDone": lambda: self.apply(self.store.toggle_done_at, self.store.cursor),
            "delete": lambda: self.apply(self.store.remove_at, self.store.cursor),
            "add": self.add_task,
            "openModal": self.open_editor,
            "quit": self.exit,
            "exportMd": lambda: self.export_tasks("md"),
            "exportCsv": lambda: self.export_tasks("csv"),
        }

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label(HELP_LINE, id="help")
        yield TaskListPanel(self.store, self.app_config.list_window_size, self.app_config.theme, id="task-list")
        yield Footer()

    def on_mount(self) -> None:
        if self._startup_warning:
            self.notify(self._startup_warning, title="Data file", severity="warning", timeout=15)

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        action = self.resolve_action(event.key, event.character)
        if action is None:
            return
        event.stop()
        event.prevent_default()
        self._key_actions[action]()
        self.refresh_list()

    def resolve_action(self, key: str, character: str | None) -> str | None:
        action = action_for(self.app_config.keymap, key, character)
        if action is not None and action not in self._key_actions:
            logger.debug("Unknown action %s bound to %s", action, key)
            return None
        return action

    def refresh_list(self) -> None:
        self.query_one(TaskListPanel).refresh_rows()

    def apply(self, mutation: Callable[..., Any], *args: Any) -> Any:
        """Run a store mutation, reporting a failed save instead of crashing."""
        try:
            return mutation(*args)
        except WriteError as e:
            logger.error("Autosave failed: %s", e)
            self.notify(str(e), title="Save failed", severity="error", timeout=15)
            return None

    def add_task(self) -> None:
        task = self.apply(self.store.add, NEW_TASK_TITLE)
        if task is None:
            return
        self.store.set_cursor(len(self.store) - 1)
        self.open_editor()

    def open_editor(self) -> None:
        task = self.store.current()
        if task is None:
            return
        index = self.store.cursor
        self.store.open_modal()

        def on_close(result: EditResult | None) -> None:
            self.store.close_modal()
            if result is not None:
                self.apply(self.store.update_fields, index, result.title, result.detail, result.tags)
            self.refresh_list()

        self.push_screen(EditTaskScreen(task), on_close)

    def export_tasks(self, fmt: str) -> None:
        writer = export.export_markdown if fmt == "md" else export.export_csv
        try:
            path = writer(self.app_config.export_dir, self.store.tasks)
        except WriteError as e:
            self.notify(str(e), title="Export failed", severity="error", timeout=15)
            return
        label = "Markdown" if fmt == "md" else "CSV"
        self.notify(f"Exported {label}: {path}")


def run(store: TaskStore, config: AppConfig, startup_warning: str | None = None) -> None:
    """Run the TUI application."""
    app = TodoqApp(store, config, startup_warning=startup_warning)
    app.run()
