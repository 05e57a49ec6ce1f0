"""Markdown and CSV exports of a task list snapshot."""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from todoq.errors import WriteError
from todoq.models import Task, now_ms

logger = logging.getLogger(__name__)

CSV_HEADER = ("id", "title", "detail", "tags", "createdAt", "done")


def render_markdown(tasks: Sequence[Task]) -> str:
    lines = ["# TODO Queue", ""]
    for t in tasks:
        mark = "x" if t.done else " "
        tag_str = f" [{', '.join(t.tags)}]" if t.tags else ""
        lines.append(f"- [{mark}] {t.title}{tag_str}")
        if t.detail:
            lines.append(t.detail)
    return "\n".join(lines)


def render_csv(tasks: Sequence[Task]) -> str:
    """CSV text; fields with a comma, quote or newline are quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for t in tasks:
        writer.writerow([
            t.id,
            t.title,
            t.detail,
            "|".join(t.tags),
            str(t.created_at),
            "1" if t.done else "0",
        ])
    return buf.getvalue()


def _write(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Export to %s failed: %s", path, e)
        raise WriteError(path, e) from e
    logger.info("Exported %s", path)
    return path


def export_markdown(directory: Path, tasks: Sequence[Task], today: datetime | None = None) -> Path:
    """Write ``todoq_<YYYY-MM-DD>.md`` into ``directory`` and return its path."""
    today = today or datetime.now(timezone.utc)
    out = Path(directory) / f"todoq_{today.strftime('%Y-%m-%d')}.md"
    return _write(out, render_markdown(tasks))


def export_csv(directory: Path, tasks: Sequence[Task], stamp_ms: int | None = None) -> Path:
    """Write ``todoq_<epoch-ms>.csv`` into ``directory`` and return its path."""
    stamp = now_ms() if stamp_ms is None else stamp_ms
    out = Path(directory) / f"todoq_{stamp}.csv"
    return _write(out, render_csv(tasks))
