#!/usr/bin/env python3
"""
LazyTodo - single-queue TODO list for the terminal.

Usage:
    lazytodo.py                        Launch the interactive TUI
    lazytodo.py --once                 Print the queue and exit (no TUI)
    lazytodo.py --export md|csv        Write an export file, print its path
    lazytodo.py --write-sample-config  Create config.yaml if it is missing

Requirements:
    pip install textual pyyaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from todoq import export, persistence  # noqa: E402
from todoq.config import AppConfig, load_config, write_sample_config  # noqa: E402
from todoq.errors import ConfigError, WriteError  # noqa: E402
from todoq.logging_setup import setup_logging  # noqa: E402
from todoq.store import TaskStore  # noqa: E402

logger = logging.getLogger("todoq.cli")


def open_store(config: AppConfig) -> tuple[TaskStore, str | None]:
    """Hydrate a TaskStore from disk and attach the autosave observer.

    Returns the store and a warning for the user when the data file could
    not be read. An unreadable file is copied aside before anything can
    overwrite it.
    """
    result = persistence.hydrate(config.data_path)

    warning = None
    if result.status == persistence.STATUS_CORRUPT:
        backup = persistence.backup_file(config.data_path)
        warning = f"{result.error}. Starting empty; the old file was copied to {backup}"

    store = TaskStore()
    store.replace_all(result.tasks)
    store.subscribe(persistence.AutoSaver(config.data_path))
    logger.info("Opened %s with %d tasks", config.data_path, len(result.tasks))
    return store, warning


def print_once(store: TaskStore) -> int:
    """Print the queue and exit."""
    if not len(store):
        print("Empty. Run without --once and press 'a' to add.")
        return 0
    for task in store.tasks:
        mark = "x" if task.done else " "
        tags = f" [{', '.join(task.tags)}]" if task.tags else ""
        print(f"[{mark}] {task.title}{tags}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lazytodo",
        description="LazyTodo - single-queue TODO list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", type=Path, help="Path to data.json")
    parser.add_argument("--export-dir", type=Path, help="Directory for Markdown/CSV exports")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument(
        "--write-sample-config",
        action="store_true",
        help="Write config.yaml if it does not exist",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the queue once and exit (no TUI)",
    )
    parser.add_argument(
        "--export",
        choices=("md", "csv"),
        help="Write an export file and exit (no TUI)",
    )

    args = parser.parse_args(argv)

    if args.write_sample_config and write_sample_config(args.config):
        print(f"Wrote sample config to {args.config or 'default location'}")

    try:
        config = load_config(data_path=args.data, export_dir=args.export_dir, config_path=args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_dir)

    try:
        store, warning = open_store(config)
    except WriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if warning and (args.once or args.export):
        print(f"Warning: {warning}", file=sys.stderr)

    if args.once:
        return print_once(store)

    if args.export:
        writer = export.export_markdown if args.export == "md" else export.export_csv
        try:
            path = writer(config.export_dir, store.tasks)
        except WriteError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(path)
        return 0

    # Launch TUI
    try:
        from todoq.app import run
    except ImportError as e:
        print(f"TUI requires textual: {e}", file=sys.stderr)
        print("Install with: pip install textual", file=sys.stderr)
        return 1

    run(store, config, startup_warning=warning)
    return 0


if __name__ == "__main__":
    sys.exit(main())
