from __future__ import annotations

from collections.abc import Sequence

from ..models.cart import CartItem, CartLinkResult

"""Cart deep-link rendering.

Wire format (consumed by the storefront, must match exactly):

    https://<shop-domain>/cart/<variantId1>:<qty1>,<variantId2>:<qty2>,...

Colons and commas are not URL-encoded.
"""


def build_cart_link(items: Sequence[CartItem], shop_domain: str) -> CartLinkResult:
    """Render items as a cart permalink on shop_domain.

    Examples:
        >>> build_cart_link([CartItem("42649849659629", "3")], "shop.example.com").url
        'https://shop.example.com/cart/42649849659629:3'
    """
    path = ",".join(item.serialize() for item in items)
    return CartLinkResult(url=f"https://{shop_domain}/cart/{path}", item_count=len(items))
