"""
Selection/overlay state: at most one product shown in detail.

    closed --view(p)--> open(p) --close()--> closed
    open(a) --view(b)--> open(b)
"""

from __future__ import annotations

from typing import Optional

from storefront.catalog.models import Product


class Selection:
    """Tracks the product currently shown in the details overlay."""

    def __init__(self) -> None:
        self._product: Optional[Product] = None

    def view(self, product: Product) -> None:
        """Open the overlay on `product`, replacing any current selection."""
        self._product = product

    def close(self) -> None:
        self._product = None

    @property
    def product(self) -> Optional[Product]:
        return self._product

    @property
    def is_open(self) -> bool:
        return self._product is not None

    @property
    def state(self) -> str:
        """'open' or 'closed'."""
        return "open" if self.is_open else "closed"

    def __repr__(self) -> str:
        if self._product is None:
            return "Selection(closed)"
        return f"Selection(open={self._product.id!r})"
