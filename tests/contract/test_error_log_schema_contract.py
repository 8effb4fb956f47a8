from __future__ import annotations

import json
import re

from cartlink.models.error_record import ErrorRecord
from cartlink.models.upload import ErrorKind

"""Failed-upload log line contract: fixed keys, UTC 'Z' timestamp, row -1 for file-level errors."""

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")


def test_error_log_line_schema():
    rec = ErrorRecord.create(
        file="order.xlsx",
        row=-1,
        error_type=ErrorKind.MALFORMED_FILE.value,
        message=ErrorKind.MALFORMED_FILE.message,
    )
    data = json.loads(rec.to_json_line())
    assert list(data.keys()) == ["timestamp", "file", "row", "error_type", "message"]
    assert TIMESTAMP_PATTERN.match(data["timestamp"])
    assert data["row"] == -1
    assert data["error_type"] == "MALFORMED_FILE"


def test_error_log_line_keeps_non_ascii():
    rec = ErrorRecord.create("注文.csv", -1, "EMPTY_INPUT", "x")
    assert "注文.csv" in rec.to_json_line()
