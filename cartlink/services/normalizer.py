from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from typing import Any

from ..models.cart import CartItem
from ..models.row_record import RowRecord
from ..models.upload import ErrorKind

"""Row normalization & validation service.

Turns parsed RowRecords into validated CartItems:

1. quantity text must be non-empty, not the literal "0" and numeric
2. the variant column must end in "/<digits>" (gid convention); the digits
   become the variant id
3. surviving rows keep their original order

Rows failing a check are dropped silently (DEBUG log only). Raises
CartLinkError when nothing survives a step.
"""

__all__ = [
    "CartLinkError",
    "QUANTITY_COLUMN",
    "VARIANT_COLUMN",
    "extract_variant_id",
    "is_valid_quantity",
    "normalize_records",
    "stringify_cell",
]

logger = logging.getLogger(__name__)

VARIANT_COLUMN = "Variant ID"
QUANTITY_COLUMN = "Quantity"

# gid://shopify/ProductVariant/42649849659629 -> 42649849659629
_VARIANT_ID_PATTERN = re.compile(r"/([0-9]+)\Z")
# ASCII only: float() also accepts "1_000" and non-ASCII digits
_NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class CartLinkError(Exception):
    """Pipeline failure carrying one of the upload ErrorKinds."""

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(detail or kind.message)


def stringify_cell(value: Any) -> str:
    """Render a cell value as trimmed text.

    None / NaN become "", integral floats lose their ".0" so spreadsheet
    numbers read the same as their CSV counterparts.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def is_valid_quantity(quantity: str) -> bool:
    """True when quantity is non-empty, not "0" and a finite number.

    >>> is_valid_quantity("3"), is_valid_quantity("1.5"), is_valid_quantity("0")
    (True, True, False)
    >>> is_valid_quantity(""), is_valid_quantity("abc"), is_valid_quantity("nan")
    (False, False, False)
    """
    if not quantity or quantity == "0":
        return False
    if _NUMBER_PATTERN.fullmatch(quantity) is None:
        return False
    # "1e999" overflows to inf
    return math.isfinite(float(quantity))


def extract_variant_id(raw: Any) -> str | None:
    """Return the trailing digit run after the last '/', or None."""
    match = _VARIANT_ID_PATTERN.search(stringify_cell(raw))
    return match.group(1) if match else None


def normalize_records(
    rows: Sequence[RowRecord],
    *,
    variant_column: str = VARIANT_COLUMN,
    quantity_column: str = QUANTITY_COLUMN,
) -> list[CartItem]:
    """Filter rows down to CartItems.

    Raises:
        CartLinkError: EMPTY_INPUT when rows is empty, NO_VALID_QUANTITIES when
            no row has a usable quantity, NO_VALID_VARIANT_IDS when no kept row
            has a parsable variant id.
    """
    if not rows:
        raise CartLinkError(ErrorKind.EMPTY_INPUT, "no data rows in file")

    kept: list[tuple[RowRecord, str]] = []
    for row in rows:
        quantity = stringify_cell(row.get(quantity_column))
        if not is_valid_quantity(quantity):
            logger.debug(f"row {row.row_number}: dropped, quantity={quantity!r}")
            continue
        kept.append((row, quantity))

    if not kept:
        raise CartLinkError(
            ErrorKind.NO_VALID_QUANTITIES, f"0/{len(rows)} rows have a quantity > 0"
        )

    items: list[CartItem] = []
    for row, quantity in kept:
        variant_id = extract_variant_id(row.get(variant_column))
        if variant_id is None:
            logger.debug(
                f"row {row.row_number}: dropped, {variant_column}={row.get(variant_column)!r}"
            )
            continue
        items.append(CartItem(variant_id=variant_id, quantity=quantity))

    if not items:
        raise CartLinkError(
            ErrorKind.NO_VALID_VARIANT_IDS,
            f"0/{len(kept)} rows with a quantity have a parsable {variant_column}",
        )
    return items
