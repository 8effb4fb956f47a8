from __future__ import annotations

from cartlink.models.row_record import RowRecord

"""Delimited text (CSV) parser.

Tokenizing is a small state machine over the whole text rather than a per-line
split, so a comma or newline inside a quoted field stays part of the field and
"" inside quotes is read as one literal quote. Quotes in the middle of an
unquoted field are plain text.

Field cleanup:
- surrounding whitespace is trimmed (this also removes '\\r' from CRLF files)
- a fully quoted field loses its outer quotes and has "" unescaped
- a stray leading or trailing quote is dropped

The first non-blank record is the header. Data records map to header columns by
position; short records are padded with "" and surplus fields are ignored.
"""

__all__ = [
    "parse_delimited",
    "tokenize",
]

_QUOTE = '"'
_BOM = "\ufeff"


def tokenize(text: str, delimiter: str = ",") -> list[list[str]]:
    """Split text into records of raw (uncleaned) fields.

    A quote opens a quoted section only as the first non-blank character of a
    field; elsewhere it is a literal character (inch marks like 55" screen).
    Inside a quoted section "" is an escaped quote and a single quote closes
    the section. Quote characters are kept in the raw fields.
    """
    records: list[list[str]] = []
    fields: list[str] = []
    buf: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == _QUOTE:
                if i + 1 < n and text[i + 1] == _QUOTE:
                    buf.append(_QUOTE * 2)
                    i += 2
                    continue
                in_quotes = False
            buf.append(ch)
        elif ch == _QUOTE and not "".join(buf).strip():
            in_quotes = True
            buf.append(ch)
        elif ch == delimiter:
            fields.append("".join(buf))
            buf = []
        elif ch == "\n":
            fields.append("".join(buf))
            records.append(fields)
            fields = []
            buf = []
        else:
            buf.append(ch)
        i += 1
    fields.append("".join(buf))
    records.append(fields)
    return records


def _clean_field(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value.startswith(_QUOTE) and value.endswith(_QUOTE):
        return value[1:-1].replace('""', _QUOTE)
    if value.startswith(_QUOTE):
        value = value[1:]
    if value.endswith(_QUOTE):
        value = value[:-1]
    return value


def _is_blank(fields: list[str], delimiter: str) -> bool:
    return not delimiter.join(fields).strip()


def parse_delimited(text: str, delimiter: str = ",") -> list[RowRecord]:
    """Parse CSV text into RowRecords keyed by the header row.

    Returns an empty list for empty input or a header without data rows.
    """
    if text.startswith(_BOM):
        text = text[1:]

    header: list[str] | None = None
    rows: list[RowRecord] = []
    for index, fields in enumerate(tokenize(text, delimiter), start=1):
        if _is_blank(fields, delimiter):
            continue
        cleaned = [_clean_field(f) for f in fields]
        if header is None:
            header = cleaned
            continue
        values: dict[str, str] = {}
        for pos, column in enumerate(header):
            values[column] = cleaned[pos] if pos < len(cleaned) else ""
        rows.append(RowRecord(row_number=index, values=values))
    return rows
