"""Logging configuration.

The TUI owns the terminal, so logs go to a file only.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FILE_NAME = "todoq.log"


def setup_logging(log_dir: str | Path, *, file_level: int = logging.DEBUG) -> Path:
    """Send all ``todoq`` logs to ``<log_dir>/todoq.log``. Call once, early.

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger("todoq")
    root.setLevel(file_level)
    root.propagate = False

    # Drop handlers from an earlier call
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
