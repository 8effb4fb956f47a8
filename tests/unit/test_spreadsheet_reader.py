from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from cartlink.tabular.spreadsheet import (
    WorkbookDecodeError,
    normalize_sheet,
    parse_spreadsheet,
    read_workbook,
)


def test_first_row_is_header_and_native_values_kept(temp_workdir: Path, xlsx_factory):
    path = xlsx_factory(
        temp_workdir / "order.xlsx",
        [
            ["Product", "Variant ID", "Quantity"],
            ["  Tea  ", "gid://shopify/ProductVariant/1", 3],
            ["Coffee", "gid://shopify/ProductVariant/2", 1.5],
        ],
    )
    rows = parse_spreadsheet(path.read_bytes())
    assert len(rows) == 2
    assert rows[0].get("Product") == "Tea"
    assert rows[0].get("Quantity") == 3
    assert rows[1].get("Quantity") == 1.5
    assert rows[0].row_number == 2


def test_empty_rows_skipped_and_empty_cells_are_none(temp_workdir: Path, xlsx_factory):
    path = xlsx_factory(
        temp_workdir / "gaps.xlsx",
        [
            ["Variant ID", "Quantity"],
            ["gid://x/1", None],
            [None, None],
            ["gid://x/2", 4],
        ],
    )
    rows = parse_spreadsheet(path.read_bytes())
    assert [r.get("Variant ID") for r in rows] == ["gid://x/1", "gid://x/2"]
    assert rows[0].get("Quantity") is None


def test_only_first_sheet_is_read(temp_workdir: Path, xlsx_factory):
    path = xlsx_factory(
        temp_workdir / "multi.xlsx",
        [["Variant ID", "Quantity"], ["gid://x/1", 1]],
        extra_sheets={"Other": [["Variant ID", "Quantity"], ["gid://x/99", 9]]},
    )
    rows = parse_spreadsheet(path.read_bytes())
    assert [r.get("Variant ID") for r in rows] == ["gid://x/1"]


def test_header_only_sheet_yields_no_rows(temp_workdir: Path, xlsx_factory):
    path = xlsx_factory(temp_workdir / "header.xlsx", [["Variant ID", "Quantity"]])
    assert parse_spreadsheet(path.read_bytes()) == []


def test_empty_content_yields_no_rows():
    assert read_workbook(b"") is None
    assert parse_spreadsheet(b"") == []


def test_garbage_bytes_raise_decode_error():
    with pytest.raises(WorkbookDecodeError):
        parse_spreadsheet(b"this is not a workbook at all")


def test_truncated_zip_raises_decode_error(temp_workdir: Path, xlsx_factory):
    path = xlsx_factory(temp_workdir / "ok.xlsx", [["Variant ID", "Quantity"], ["gid://x/1", 1]])
    data = path.read_bytes()
    with pytest.raises(WorkbookDecodeError):
        parse_spreadsheet(data[: len(data) // 2])


def test_numeric_header_cells_read_like_csv_headers():
    df = pd.DataFrame(
        [[2024.0, " Variant ID ", None], ["a", "gid://x/1", 5]],
        dtype=object,
    )
    rows = normalize_sheet(df)
    assert list(rows[0].values) == ["2024", "Variant ID", ""]
    assert rows[0].get("2024") == "a"
