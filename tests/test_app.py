"""Tests for app.py - key handling in the Textual UI."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from textual.widgets import Footer, Header, Input

from todoq.app import NEW_TASK_TITLE, TodoqApp
from todoq.config import AppConfig
from todoq.models import Task
from todoq.persistence import AutoSaver, load_all
from todoq.store import TaskStore
from todoq.views.edit_modal import EditTaskScreen
from todoq.views.task_list import TaskListPanel, format_row


def make_tasks(n: int) -> list[Task]:
    return [Task(id=f"t{i}", title=f"Task {i}", created_at=1_700_000_000_000 + i) for i in range(n)]


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        data_path=tmp_path / "data.json",
        export_dir=tmp_path / "export",
        list_window_size=5,
        log_dir=tmp_path / "logs",
    )


def make_app(config: AppConfig, n: int = 5, **kwargs) -> TodoqApp:
    store = TaskStore(make_tasks(n))
    store.subscribe(AutoSaver(config.data_path))
    return TodoqApp(store, config, **kwargs)


def run_keys(app: TodoqApp, *keys: str) -> None:
    """Start the app headless, press keys, then stop it."""

    async def _run() -> None:
        async with app.run_test() as pilot:
            await pilot.press(*keys)
            await pilot.pause()

    asyncio.run(_run())


class TestNavigation:
    """Tests for cursor movement keys."""

    def test_down_and_up(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "j", "j", "down", "k")
        assert app.store.cursor == 2

    def test_top_and_bottom(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "G")
        assert app.store.cursor == 4
        app2 = make_app(config)
        run_keys(app2, "G", "g")
        assert app2.store.cursor == 0

    def test_movement_does_not_save(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "j", "k")
        assert not config.data_path.exists()

    def test_list_paints_only_the_window(self, config: AppConfig) -> None:
        app = make_app(config, n=50)
        app.store.set_cursor(40)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                panel = app.query_one(TaskListPanel)
                assert panel.visible_range == (38, 43)
                text = panel.render_rows().plain
                assert format_row(app.store.tasks[40], True) in text
                assert "Task 37" not in text
                assert "Task 43" not in text

        asyncio.run(_run())

    def test_cursor_stays_visible_at_bottom_of_long_list(self, tmp_path: Path) -> None:
        config = AppConfig(
            data_path=tmp_path / "data.json",
            export_dir=tmp_path / "export",
            log_dir=tmp_path / "logs",
        )
        app = make_app(config, n=100)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.press("G")
                await pilot.pause()
                panel = app.query_one(TaskListPanel)
                height = panel.content_size.height
                start, end = panel.visible_range
                assert 0 < height < config.list_window_size
                assert end == 100
                assert end - start <= height
                assert app.store.cursor - start < height

        asyncio.run(_run())

    def test_cursor_marker_uses_accent(self, config: AppConfig) -> None:
        app = make_app(config, n=3)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                panel = app.query_one(TaskListPanel)
                text = panel.render_rows()
                accent = f"bold {config.theme.accent}"
                assert any(span.style == accent and span.start == 0 for span in text.spans)

        asyncio.run(_run())


class TestMutations:
    """Tests for keys that change the task list."""

    def test_toggle_is_saved_immediately(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "j", "x")
        assert app.store.tasks[1].done is True
        assert load_all(config.data_path)[1].done is True

    def test_delete_current(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "G", "d")
        assert len(app.store) == 4
        assert app.store.cursor == 3
        assert [t.id for t in load_all(config.data_path)] == ["t0", "t1", "t2", "t3"]

    def test_delete_on_empty_list_is_harmless(self, config: AppConfig) -> None:
        app = make_app(config, n=0)
        run_keys(app, "d", "x", "enter")
        assert len(app.store) == 0
        assert not app.store.modal_open

    def test_write_error_is_reported_not_raised(self, config: AppConfig, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = TaskStore(make_tasks(2))
        store.subscribe(AutoSaver(blocker / "data.json"))
        app = TodoqApp(store, config)
        notes: list[tuple[str, str]] = []
        app.notify = lambda message, **kw: notes.append((message, kw.get("severity", "information")))

        run_keys(app, "x")

        assert store.tasks[0].done is True
        assert notes and notes[0][1] == "error"


class TestEditor:
    """Tests for the edit modal."""

    def test_enter_opens_and_saves(self, config: AppConfig) -> None:
        app = make_app(config)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.press("j", "enter")
                await pilot.pause()
                assert isinstance(app.screen, EditTaskScreen)
                assert app.store.modal_open is True

                app.screen.query_one("#title", Input).value = "Edited"
                app.screen.query_one("#detail", Input).value = "More info"
                app.screen.query_one("#tags", Input).value = "a, b,,"
                await pilot.press("enter")
                await pilot.pause()

                assert not isinstance(app.screen, EditTaskScreen)

        asyncio.run(_run())

        task = app.store.tasks[1]
        assert (task.title, task.detail, task.tags) == ("Edited", "More info", ("a", "b"))
        assert task.id == "t1"
        assert app.store.modal_open is False
        assert load_all(config.data_path)[1].title == "Edited"

    def test_escape_discards(self, config: AppConfig) -> None:
        app = make_app(config)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.press("o")
                await pilot.pause()
                app.screen.query_one("#title", Input).value = "Nope"
                await pilot.press("escape")
                await pilot.pause()

        asyncio.run(_run())

        assert app.store.tasks[0].title == "Task 0"
        assert app.store.modal_open is False

    def test_add_appends_and_opens_editor(self, config: AppConfig) -> None:
        app = make_app(config, n=2)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.press("a")
                await pilot.pause()
                assert isinstance(app.screen, EditTaskScreen)
                assert app.screen.query_one("#title", Input).value == NEW_TASK_TITLE

        asyncio.run(_run())

        assert len(app.store) == 3
        assert app.store.cursor == 2
        assert app.store.tasks[2].title == NEW_TASK_TITLE
        assert len(load_all(config.data_path)) == 3


class TestExportKeys:
    """Tests for export shortcuts."""

    def test_markdown_and_csv(self, config: AppConfig) -> None:
        app = make_app(config)
        run_keys(app, "m", "c")
        names = sorted(p.suffix for p in config.export_dir.iterdir())
        assert names == [".csv", ".md"]


class TestLayout:
    """Tests for the screen furniture."""

    def test_header_list_and_footer(self, config: AppConfig) -> None:
        app = make_app(config)

        async def _run() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.query_one(Header)
                assert app.query_one(TaskListPanel)
                assert app.query_one(Footer)

        asyncio.run(_run())


class TestStartupWarning:
    """Tests for the corrupt-file warning."""

    def test_warning_is_shown(self, config: AppConfig) -> None:
        app = make_app(config, startup_warning="data file unreadable")
        notes: list[tuple[str, str]] = []
        app.notify = lambda message, **kw: notes.append((message, kw.get("severity", "information")))

        run_keys(app)

        assert notes == [("data file unreadable", "warning")]
