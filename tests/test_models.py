"""Tests for models.py and logging_setup.py."""

import logging
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from todoq.logging_setup import setup_logging
from todoq.models import SelectionState, Task, now_ms, parse_tags


class TestTask:
    """Tests for the Task value type."""

    def test_create_sets_id_and_timestamp(self) -> None:
        before = now_ms()
        task = Task.create("Title")
        assert task.id
        assert before <= task.created_at <= now_ms()
        assert task.done is False

    def test_create_rejects_non_string(self) -> None:
        with pytest.raises(TypeError):
            Task.create(42)  # type: ignore[arg-type]

    def test_from_dict_defaults(self) -> None:
        task = Task.from_dict({"id": "a", "title": "T", "createdAt": 10})
        assert task.detail == ""
        assert task.tags == ()
        assert task.done is False

    def test_from_dict_null_optionals(self) -> None:
        task = Task.from_dict({"id": "a", "title": "T", "createdAt": 10, "detail": None, "tags": None, "done": None})
        assert task.detail == ""
        assert task.tags == ()
        assert task.done is False

    @pytest.mark.parametrize("done", ["false", "true", 0, 1, []])
    def test_from_dict_rejects_non_boolean_done(self, done: object) -> None:
        with pytest.raises(ValueError):
            Task.from_dict({"id": "a", "title": "T", "createdAt": 10, "done": done})

    def test_to_dict_omits_empty_optionals(self) -> None:
        assert Task(id="a", title="T", created_at=1).to_dict() == {
            "id": "a",
            "title": "T",
            "createdAt": 1,
            "done": False,
        }

    def test_to_dict_round_trip(self) -> None:
        task = Task(id="a", title="T", created_at=1, detail="d", tags=("x",), done=True)
        assert Task.from_dict(task.to_dict()) == task

    def test_with_fields_keeps_identity(self) -> None:
        task = Task(id="a", title="T", created_at=1, done=True)
        changed = task.with_fields(title="U", tags=["z"])
        assert (changed.id, changed.created_at, changed.done) == ("a", 1, True)
        assert changed.title == "U"
        assert changed.tags == ("z",)

    def test_tasks_are_immutable(self) -> None:
        task = Task(id="a", title="T", created_at=1)
        with pytest.raises(AttributeError):
            task.title = "changed"  # type: ignore[misc]


class TestHelpers:
    """Tests for small helpers."""

    def test_parse_tags(self) -> None:
        assert parse_tags(" work, home ,, ") == ("work", "home")
        assert parse_tags("") == ()

    def test_selection_defaults(self) -> None:
        assert SelectionState() == SelectionState(cursor=0, modal_open=False, filter="")


class TestSetupLogging:
    """Tests for file logging."""

    def test_logs_go_to_file(self, tmp_path: Path) -> None:
        logger = logging.getLogger("todoq")
        try:
            log_file = setup_logging(tmp_path / "logs")
            logging.getLogger("todoq.persistence").error("disk on fire")
            for h in logger.handlers:
                h.flush()

            assert log_file == tmp_path / "logs" / "todoq.log"
            assert "ERROR todoq.persistence: disk on fire" in log_file.read_text()
        finally:
            for h in list(logger.handlers):
                logger.removeHandler(h)
                h.close()
            logger.propagate = True
            logging.captureWarnings(False)

    def test_repeated_setup_keeps_one_handler(self, tmp_path: Path) -> None:
        logger = logging.getLogger("todoq")
        try:
            setup_logging(tmp_path)
            setup_logging(tmp_path)
            assert len(logger.handlers) == 1
        finally:
            for h in list(logger.handlers):
                logger.removeHandler(h)
                h.close()
            logger.propagate = True
            logging.captureWarnings(False)
