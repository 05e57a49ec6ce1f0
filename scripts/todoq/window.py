"""Visible sub-range of the task list for virtual scrolling."""

from __future__ import annotations


def visible_window(cursor: int, length: int, window_size: int) -> tuple[int, int]:
    """Return ``(start, end)`` of the rows to paint, centered on ``cursor``.

    For a non-empty list ``0 <= start <= cursor < end <= length`` and
    ``end - start <= window_size``. Near the bottom of the list ``start`` is
    pulled back so the window stays full.
    """
    if length <= 0:
        return 0, 0
    window_size = max(1, window_size)
    cursor = max(0, min(cursor, length - 1))

    start = max(0, cursor - window_size // 2)
    end = min(length, start + window_size)
    start = max(0, end - window_size)
    return start, end
