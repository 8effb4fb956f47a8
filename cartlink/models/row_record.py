from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowRecord model for the order-file -> cart link pipeline.

RowRecord represents a single tabular row after header alignment, independent of
whether it came from a delimited text file or a spreadsheet.
"""

__all__ = [
    "RowRecord",
]


@dataclass(frozen=True)
class RowRecord:
    """One parsed tabular row (column name -> raw cell value).

    row_number is the 1-based position of the row in the source file, with the
    header occupying row 1. It is kept for log messages only.
    """
    row_number: int  # source row (header = 1)
    values: dict[str, Any]  # trimmed column name -> cell value (str for CSV, native for Excel)

    def get(self, column: str) -> Any:
        """Return the cell for column, or None when the column is absent."""
        return self.values.get(column)
