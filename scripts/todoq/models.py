"""
Data model for the task queue.

Tasks are immutable snapshots: every edit produces a new value for the
slot it replaces, so views and exporters can hold on to a collection
without copying it.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_task_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Task:
    """A single queue item."""

    id: str
    title: str
    created_at: int
    detail: str = ""
    tags: tuple[str, ...] = ()
    done: bool = False

    @classmethod
    def create(cls, title: str, *, task_id: str | None = None, created_at: int | None = None) -> Task:
        """Build a fresh task with a new id and the current timestamp."""
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, not {type(title).__name__}")
        return cls(
            id=task_id or new_task_id(),
            title=title,
            created_at=now_ms() if created_at is None else created_at,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        """Convert a persisted entry to a Task.

        Missing optional keys take their defaults here. Raises ValueError
        for entries that lack an id or title or carry the wrong types.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"task entry must be an object, got {type(data).__name__}")
        tid = data.get("id")
        title = data.get("title")
        if not isinstance(tid, str) or not tid:
            raise ValueError(f"task entry has no valid id: {tid!r}")
        if not isinstance(title, str):
            raise ValueError(f"task {tid} has no valid title")

        created_at = data.get("createdAt", 0)
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            raise ValueError(f"task {tid} has a non-numeric createdAt")

        detail = data.get("detail") or ""
        if not isinstance(detail, str):
            raise ValueError(f"task {tid} has a non-string detail")

        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError(f"task {tid} has invalid tags")

        done = data.get("done")
        if done is None:
            done = False
        elif not isinstance(done, bool):
            raise ValueError(f"task {tid} has a non-boolean done: {done!r}")

        return cls(
            id=tid,
            title=title,
            created_at=int(created_at),
            detail=detail,
            tags=tuple(tags),
            done=done,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.detail:
            data["detail"] = self.detail
        if self.tags:
            data["tags"] = list(self.tags)
        data["createdAt"] = self.created_at
        data["done"] = self.done
        return data

    def toggled(self) -> Task:
        return replace(self, done=not self.done)

    def with_fields(
        self,
        *,
        title: str | None = None,
        detail: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Task:
        """Return a copy with the given fields replaced; id, created_at and done are kept."""
        changes: dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if detail is not None:
            changes["detail"] = detail
        if tags is not None:
            changes["tags"] = tuple(tags)
        return replace(self, **changes)


@dataclass(frozen=True)
class SelectionState:
    """UI-facing selection state.

    ``filter`` is reserved for search and is always empty.
    """

    cursor: int = 0
    modal_open: bool = False
    filter: str = ""


def parse_tags(text: str) -> tuple[str, ...]:
    """Split a comma separated tag string, dropping blanks."""
    return tuple(part.strip() for part in text.split(",") if part.strip())
