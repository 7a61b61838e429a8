"""
==============================================================================
Cart State Module
==============================================================================

Client-side cart: a mapping of product identifier to requested quantity.

Invariants:
-----------
- Quantities are positive; an update to zero or below removes the line
- A quantity never exceeds the product's stock when the stock is known

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from storefront.catalog.models import Product


def total_price(
    items: Mapping[str, int],
    products: Union[Mapping[str, Product], Iterable[Product]],
) -> Decimal:
    """
    Sum price * quantity over cart lines.

    Lines whose product is not in `products` contribute zero.

    Args:
        items: Product id to quantity
        products: Products keyed by id, or any iterable of products

    Returns:
        Cart total

    Example:
        >>> total_price({"1": 2}, [Product(id="1", name="Headphones", price="99.99")])
        Decimal('199.98')
    """
    if not isinstance(products, Mapping):
        products = {p.id: p for p in products}

    total = Decimal("0")
    for product_id, quantity in items.items():
        product = products.get(product_id)
        if product is None:
            continue
        total += product.price * quantity
    return total


class Cart:
    """
    Quantity map with add/update/remove transitions.

    Example:
        >>> cart = Cart()
        >>> cart.add(product)
        1
        >>> cart.update_quantity(product.id, 0)
        >>> len(cart)
        0
    """

    def __init__(self, items: Optional[Mapping[str, int]] = None) -> None:
        self._items: Dict[str, int] = {}
        for product_id, quantity in (items or {}).items():
            self.update_quantity(product_id, quantity)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def add(self, product: Product) -> int:
        """
        Add one unit of a product.

        Inserts the line with quantity 1 when absent. Stops at the
        product's stock, so an out-of-stock product is never added.

        Returns:
            Resulting quantity for the product (0 if not in cart)
        """
        current = self._items.get(product.id, 0)
        if current < product.stock:
            self._items[product.id] = current + 1
        return self._items.get(product.id, 0)

    def update_quantity(
        self,
        product_id: str,
        new_quantity: int,
        stock: Optional[int] = None,
    ) -> int:
        """
        Set the quantity of a line.

        Args:
            product_id: Product identifier
            new_quantity: Desired quantity; <= 0 removes the line
            stock: Stock ceiling to clamp to, when known

        Returns:
            Resulting quantity (0 when the line was removed)
        """
        if stock is not None:
            new_quantity = min(new_quantity, stock)

        if new_quantity <= 0:
            self._items.pop(product_id, None)
            return 0

        self._items[product_id] = new_quantity
        return new_quantity

    def remove(self, product_id: str) -> None:
        """Remove a line if present."""
        self._items.pop(product_id, None)

    def clear(self) -> None:
        """Empty the cart."""
        self._items.clear()

    def retain(self, product_ids: Iterable[str]) -> None:
        """Drop lines whose product id is not in `product_ids`."""
        keep = set(product_ids)
        for product_id in [pid for pid in self._items if pid not in keep]:
            del self._items[product_id]

    # =========================================================================
    # QUERIES
    # =========================================================================

    def quantity(self, product_id: str) -> int:
        """Quantity for a product (0 if absent)."""
        return self._items.get(product_id, 0)

    @property
    def items(self) -> Dict[str, int]:
        """Copy of the quantity map."""
        return dict(self._items)

    @property
    def count(self) -> int:
        """Total number of units."""
        return sum(self._items.values())

    def total_price(
        self,
        products: Union[Mapping[str, Product], Iterable[Product]],
    ) -> Decimal:
        """Cart total against the given products."""
        return total_price(self._items, products)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(list(self._items.items()))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    def __repr__(self) -> str:
        return f"Cart({self._items!r})"
