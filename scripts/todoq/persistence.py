"""
Reading and writing the task list file.

The file holds a single JSON object ``{"todos": [...]}``. Two load paths
exist: ``load_all`` reads everything at once, ``load_chunked`` yields the
list in bounded slices. ``save`` always writes the whole collection.
"""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from todoq.errors import ParseError, WriteError
from todoq.models import Task, now_ms

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

STATUS_OK = "ok"
STATUS_MISSING = "missing"
STATUS_CORRUPT = "corrupt"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load that keeps a missing file apart from a corrupt one."""

    status: str
    tasks: list[Task] = field(default_factory=list)
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


def _parse_document(path: Path, raw: str) -> list[Task]:
    """Parse file contents into tasks, raising ParseError on any problem."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(path, f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ParseError(path, "top-level value is not an object")
    todos = data.get("todos", [])
    if not isinstance(todos, list):
        raise ParseError(path, '"todos" is not a list')

    tasks: list[Task] = []
    seen: set[str] = set()
    for i, entry in enumerate(todos):
        try:
            task = Task.from_dict(entry)
        except ValueError as e:
            raise ParseError(path, f"entry {i}: {e}") from e
        if task.id in seen:
            raise ParseError(path, f"entry {i}: duplicate id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


def _read(path: Path) -> list[Task]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(path, str(e)) from e
    return _parse_document(path, raw)


def load(path: Path) -> LoadResult:
    """Load the task list, reporting missing and corrupt files separately."""
    path = Path(path)
    if not path.exists():
        return LoadResult(STATUS_MISSING)
    try:
        tasks = _read(path)
    except ParseError as e:
        logger.error("%s", e)
        return LoadResult(STATUS_CORRUPT, error=e)
    logger.debug("Loaded %d tasks from %s", len(tasks), path)
    return LoadResult(STATUS_OK, tasks)


def load_all(path: Path) -> list[Task]:
    """Blocking full read.

    A missing file gives an empty list. So does a corrupt one: the error is
    logged and otherwise dropped. Use ``load`` to tell the two apart.
    """
    return load(path).tasks


def load_chunked(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[list[Task]]:
    """Yield the persisted tasks in order, at most ``chunk_size`` at a time.

    Nothing is yielded when the file is absent or unreadable, so zero chunks
    can mean a missing file, an empty list or a corrupt file.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    path = Path(path)
    if not path.exists():
        return
    try:
        tasks = _read(path)
    except ParseError as e:
        logger.error("Chunked load failed: %s", e)
        return
    for start in range(0, len(tasks), chunk_size):
        yield tasks[start:start + chunk_size]


def hydrate(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> LoadResult:
    """Drain the chunked load into one list.

    Zero chunks means a missing, empty or corrupt file; the full ``load``
    then tells those cases apart.
    """
    tasks: list[Task] = []
    for chunk in load_chunked(path, chunk_size):
        tasks.extend(chunk)
    if not tasks:
        return load(path)
    return LoadResult(STATUS_OK, tasks)


def save(path: Path, tasks: Iterable[Task]) -> None:
    """Write the whole collection to ``path``.

    Writes to a temporary sibling first, then renames over the target.
    Raises WriteError if the disk refuses.
    """
    path = Path(path)
    payload = {"todos": [t.to_dict() for t in tasks]}
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(path)
    except OSError as e:
        logger.error("Save to %s failed: %s", path, e)
        raise WriteError(path, e) from e
    logger.debug("Saved %d tasks to %s", len(payload["todos"]), path)


def backup_file(path: Path) -> Path:
    """Copy ``path`` aside as ``<name>.corrupt-<epoch-ms>`` and return the copy."""
    path = Path(path)
    target = path.with_name(f"{path.name}.corrupt-{now_ms()}")
    try:
        shutil.copy2(path, target)
    except OSError as e:
        raise WriteError(target, e) from e
    logger.warning("Copied unreadable data file %s to %s", path, target)
    return target


class AutoSaver:
    """Store observer that writes every new snapshot straight to disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.last_error: WriteError | None = None
        self.save_count = 0

    def __call__(self, tasks: Sequence[Task]) -> None:
        try:
            save(self.path, tasks)
        except WriteError as e:
            self.last_error = e
            raise
        self.last_error = None
        self.save_count += 1
