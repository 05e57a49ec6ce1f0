"""Edit panel for a single task."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label

from todoq.models import Task, parse_tags


@dataclass(frozen=True)
class EditResult:
    title: str
    detail: str
    tags: tuple[str, ...]


class EditTaskScreen(ModalScreen[EditResult | None]):
    """Modal with title, detail and tag inputs.

    Enter in any input saves and closes; Escape closes without saving.
    """

    BINDINGS = [
        ("escape", "cancel", "Close"),
    ]

    DEFAULT_CSS = """
    EditTaskScreen {
        align: center middle;
    }

    EditTaskScreen #editor {
        width: 80%;
        height: auto;
        border: round $accent;
        padding: 1;
        background: $surface;
    }

    EditTaskScreen .field-label {
        color: $text-muted;
    }

    EditTaskScreen .hint {
        color: $text-muted;
        margin-top: 1;
    }
    """

    def __init__(self, task: Task, **kwargs) -> None:
        super().__init__(**kwargs)
        self._edited = task

    def compose(self) -> ComposeResult:
        with Vertical(id="editor"):
            yield Label(f"Edit: {self._edited.title}", classes="title")
            yield Label("Title", classes="field-label")
            yield Input(value=self._edited.title, id="title")
            yield Label("Detail", classes="field-label")
            yield Input(value=self._edited.detail, placeholder="(none)", id="detail")
            yield Label("Tags (comma separated)", classes="field-label")
            yield Input(value=", ".join(self._edited.tags), placeholder="(none)", id="tags")
            yield Label("Enter: save   Esc: close", classes="hint")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def collect(self) -> EditResult:
        return EditResult(
            title=self.query_one("#title", Input).value,
            detail=self.query_one("#detail", Input).value,
            tags=parse_tags(self.query_one("#tags", Input).value),
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(self.collect())

    def action_cancel(self) -> None:
        self.dismiss(None)
