"""
todoq - single-queue task manager for the terminal.

Architecture:
- models.py: Task / SelectionState value types
- store.py: TaskStore, the owner of the task list and cursor
- window.py: visible sub-range for virtual scrolling
- persistence.py: JSON load (full and chunked) and write-through save
- export.py: Markdown / CSV exports
- config.py, keymap.py, logging_setup.py: ambient settings
- views/ and app.py: Textual screens and the main application
"""

__version__ = "0.1.0"
