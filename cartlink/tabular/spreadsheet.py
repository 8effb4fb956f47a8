from __future__ import annotations

from io import BytesIO
from typing import Any

import pandas as pd

from cartlink.models.row_record import RowRecord
from cartlink.services.normalizer import stringify_cell

"""Spreadsheet (xlsx / xls) parser.

The workbook is decoded with pandas (openpyxl for xlsx, xlrd for xls; pandas
sniffs the format from the bytes, not the file name). Only the first sheet is
read. Its first row is the header, following rows are data rows.

Cells are read with dtype=object so integers stay integers; stringifying for the
cart link happens in the normalizer.
"""

__all__ = [
    "WorkbookDecodeError",
    "normalize_sheet",
    "parse_spreadsheet",
    "read_workbook",
]


class WorkbookDecodeError(Exception):
    """Raised when the bytes cannot be decoded as an Excel workbook."""


def read_workbook(content: bytes) -> pd.DataFrame | None:
    """Decode content and return the first sheet as a raw header-less DataFrame.

    Returns None for empty content or a workbook without sheets.

    Raises:
        WorkbookDecodeError: If pandas (or its engine) rejects the content.
    """
    if not content:
        return None
    try:
        with pd.ExcelFile(BytesIO(content)) as xls:
            if not xls.sheet_names:
                return None
            # 先頭シートのみ (複数シートは対象外)
            return xls.parse(xls.sheet_names[0], header=None, dtype=object)
    except Exception as e:
        raise WorkbookDecodeError(f"cannot decode workbook: {e}") from e


def _clean_cell(value: Any) -> Any:
    if pd.isna(value):
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def normalize_sheet(df: pd.DataFrame) -> list[RowRecord]:
    """Convert a raw sheet into RowRecords using its first row as header.

    Steps:
    1. Empty sheet -> []
    2. Header from row index 0 (empty header cells become "")
    3. Remaining rows become data rows; rows that are entirely empty are skipped
    """
    if df.shape[0] == 0:
        return []
    # 数値ヘッダも CSV と同じ表記にそろえる (1.0 -> "1")
    header = [stringify_cell(None if pd.isna(c) else c) for c in df.iloc[0].tolist()]
    rows: list[RowRecord] = []
    for pos in range(1, df.shape[0]):
        raw = df.iloc[pos]
        if raw.isna().all():
            continue
        values: dict[str, Any] = {}
        for col, val in zip(header, raw.tolist(), strict=False):
            values[col] = _clean_cell(val)
        rows.append(RowRecord(row_number=pos + 1, values=values))
    return rows


def parse_spreadsheet(content: bytes) -> list[RowRecord]:
    """Decode workbook bytes and return RowRecords from its first sheet."""
    df = read_workbook(content)
    if df is None:
        return []
    return normalize_sheet(df)
