from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch result models for the command line runner.

The CLI processes one or more order files in sequence; these models aggregate
per-file outcomes into the figures printed on the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics (internal helper for BatchResult)."""
    file_name: str  # ファイル名
    status: str  # success/failed
    item_count: int  # cart items in the link (0 on failure)
    elapsed_seconds: float  # ファイル処理時間
    url: str | None = None
    error_type: str | None = None  # ErrorKind value on failure


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of one CLI run."""
    success_files: int
    failed_files: int
    total_items: int  # sum of item_count over successful files
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
