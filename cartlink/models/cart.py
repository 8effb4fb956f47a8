from __future__ import annotations

from dataclasses import dataclass

"""Cart domain models.

CartItem is a validated (variant id, quantity) pair; CartLinkResult is the
success payload handed back to the presentation layer.
"""

__all__ = [
    "CartItem",
    "CartLinkResult",
]


@dataclass(frozen=True)
class CartItem:
    """A validated cart line.

    Both fields stay as text: quantity is passed through exactly as the user
    wrote it (e.g. "3", "1.5"), variant_id is the numeric tail of a gid.
    """
    variant_id: str  # ASCII digits only
    quantity: str  # numeric text, never "0"

    def serialize(self) -> str:
        """Return the cart path segment "<variant_id>:<quantity>"."""
        return f"{self.variant_id}:{self.quantity}"


@dataclass(frozen=True)
class CartLinkResult:
    url: str
    item_count: int  # >= 1
