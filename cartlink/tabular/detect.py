from __future__ import annotations

from enum import Enum
from pathlib import PurePath

"""File format detection by extension.

Only the trailing extension of the file name is inspected; content sniffing is
left to the spreadsheet decoder.
"""

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "TabularFormat",
    "detect_format",
    "is_accepted",
]


class TabularFormat(Enum):
    DELIMITED = "delimited"
    SPREADSHEET = "spreadsheet"


_EXTENSION_FORMATS: dict[str, TabularFormat] = {
    "csv": TabularFormat.DELIMITED,
    "xlsx": TabularFormat.SPREADSHEET,
    "xls": TabularFormat.SPREADSHEET,
}

ACCEPTED_EXTENSIONS = tuple(f".{ext}" for ext in _EXTENSION_FORMATS)


def detect_format(file_name: str) -> TabularFormat | None:
    """Return the parser variant for file_name, or None if it is not accepted.

    >>> detect_format("Order.CSV")
    <TabularFormat.DELIMITED: 'delimited'>
    >>> detect_format("order.xls")
    <TabularFormat.SPREADSHEET: 'spreadsheet'>
    >>> detect_format("order.pdf") is None
    True
    """
    suffix = PurePath(file_name).suffix
    if not suffix:
        return None
    return _EXTENSION_FORMATS.get(suffix[1:].lower())


def is_accepted(file_name: str) -> bool:
    return detect_format(file_name) is not None
