from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""File-level progress bar for batch runs (tqdm, TTY only).

Without a TTY (pipes, CI, pytest capture) no bar is created and the tracker
does nothing, so stdout carries only the OK / FAILED / SUMMARY lines.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """One bar tick per order file; postfix shows success / failed / items."""

    def __init__(self, total_files: int, *, description: str = "Processing files") -> None:
        self.description = description
        self.current_file = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any = tqdm(total=total_files, desc=description, unit="file") if self.enabled else None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        if self.pbar is None:
            return
        self.pbar.update(1)
        self.pbar.set_description(self.description)

    def set_postfix(self, **counters: int) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(**counters)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
