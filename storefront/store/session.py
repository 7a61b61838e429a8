"""
==============================================================================
Storefront Session Module
==============================================================================

Single owner of the page state for one storefront visitor.

State:
------
- products:  catalog snapshot (replaced wholesale on load/refresh)
- loading:   True until the first catalog load completes
- cart:      product id -> quantity
- selection: product shown in the details overlay, if any

All state changes go through the transition methods below. Invalid
intents raise AppException and leave the state untouched.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from storefront.catalog.catalog import ProductCatalog
from storefront.catalog.models import Product
from storefront.core import exceptions
from storefront.presentation.adapter import ProductPresenter

from .cart import Cart
from .selection import Selection


# Module logger
logger = logging.getLogger(__name__)


class StorefrontSession:
    """
    Cart and selection state for one visitor.

    Example:
        >>> session = StorefrontSession()
        >>> session.load(products)
        >>> session.add_to_cart("1")
        >>> session.view("2")
        >>> session.add_from_details()
        >>> session.selection.is_open
        False
    """

    def __init__(self, presenter: Optional[ProductPresenter] = None) -> None:
        self._presenter = presenter or ProductPresenter()
        self._catalog = ProductCatalog()
        self.loading = True
        self.cart = Cart()
        self.selection = Selection()

    # =========================================================================
    # CATALOG
    # =========================================================================

    @property
    def products(self) -> List[Product]:
        return self._catalog.products

    def load(self, products: Iterable[Product]) -> None:
        """
        Replace the product list.

        Cart lines and the selection are re-pointed at the new list;
        entries whose product disappeared are dropped.
        """
        self._catalog.replace(products)
        self.loading = False

        self.cart.retain(p.id for p in self._catalog.products)
        for product_id, quantity in self.cart:
            product = self._catalog.find_by_id(product_id)
            self.cart.update_quantity(product_id, quantity, stock=product.stock)

        selected = self.selection.product
        if selected is not None:
            refreshed = self._catalog.find_by_id(selected.id)
            if refreshed is None:
                self.selection.close()
            else:
                self.selection.view(refreshed)

        logger.debug(f"Session loaded {len(self._catalog)} products")

    def _product(self, product_id: Any) -> Product:
        product = self._catalog.find_by_id(str(product_id))
        if product is None:
            raise exceptions.product_not_found(str(product_id))
        return product

    # =========================================================================
    # SELECTION
    # =========================================================================

    def view(self, product_id: str) -> Product:
        """Open the details overlay for a product."""
        product = self._product(product_id)
        self.selection.view(product)
        return product

    def close_details(self) -> None:
        self.selection.close()

    # =========================================================================
    # CART
    # =========================================================================

    def add_to_cart(self, product_id: str) -> int:
        """
        Add one unit of a product.

        Raises:
            AppException: PRODUCT_NOT_FOUND, OUT_OF_STOCK

        Returns:
            Resulting quantity
        """
        product = self._product(product_id)
        if not product.in_stock:
            raise exceptions.out_of_stock(product.id)
        return self.cart.add(product)

    def add_from_details(self) -> int:
        """Add the selected product, then close the overlay."""
        product = self.selection.product
        if product is None:
            raise exceptions.nothing_selected()

        quantity = self.add_to_cart(product.id)
        self.selection.close()
        return quantity

    def update_quantity(self, product_id: str, quantity: Any) -> int:
        """
        Set a cart line quantity, clamped to the product's stock.

        Unknown products can still be removed (quantity <= 0).

        Raises:
            AppException: INVALID_QUANTITY, PRODUCT_NOT_FOUND
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise exceptions.invalid_quantity(quantity)

        product = self._catalog.find_by_id(str(product_id))
        if product is None:
            if quantity <= 0:
                return self.cart.update_quantity(str(product_id), 0)
            raise exceptions.product_not_found(str(product_id))

        return self.cart.update_quantity(product.id, quantity, stock=product.stock)

    def total_price(self) -> Decimal:
        return self.cart.total_price(self._catalog.by_id)

    # =========================================================================
    # VIEW STATE
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the whole page state."""
        selected = self.selection.product
        return {
            "loading": self.loading,
            "products": [
                self._presenter.present(p).model_dump() for p in self._catalog.products
            ],
            "selection": (
                self._presenter.present(selected).model_dump() if selected else None
            ),
            "cart": self._presenter.present_cart(self.cart, self._catalog.by_id).model_dump(),
        }
