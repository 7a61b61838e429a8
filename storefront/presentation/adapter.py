"""
==============================================================================
Product Presentation Module
==============================================================================

Stateless mapping from products and cart lines to display attributes.

Display Rules:
--------------
- Stock badge: "Out of Stock" when stock is 0, otherwise "<n> in stock"
- Prices: two decimals, rounded half up, prefixed by the currency symbol
- "Add to Cart" is disabled for out-of-stock products
- The cart "+" button is disabled once a line reaches the product's stock

==============================================================================
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Mapping, Optional, Union

from pydantic import BaseModel

from storefront.catalog.models import Product
from storefront.store.cart import Cart, total_price


OUT_OF_STOCK = "Out of Stock"

_CENT = Decimal("0.01")


def stock_badge(product: Product) -> str:
    """Badge text for a product's stock level."""
    if product.stock == 0:
        return OUT_OF_STOCK
    return f"{product.stock} in stock"


def format_price(amount: Union[Decimal, int, float, str], symbol: str = "$") -> str:
    """
    Format an amount as a two-decimal currency string.

    Example:
        >>> format_price(Decimal("199.98"))
        '$199.98'
        >>> format_price(5)
        '$5.00'
    """
    value = Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{symbol}{value:.2f}"


# =============================================================================
# VIEW MODELS
# =============================================================================

class ProductView(BaseModel):
    """Display data for a product card or the details overlay."""

    id: str
    name: str
    description: str
    category: Optional[str] = None
    image: Optional[str] = None
    price: str
    stock: int
    stock_badge: str
    stock_badge_variant: str
    can_add_to_cart: bool


class CartLineView(BaseModel):
    """One cart line as shown in the cart panel."""

    product_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str
    can_increment: bool


class CartView(BaseModel):
    """Cart panel contents."""

    lines: List[CartLineView]
    item_count: int
    total: str
    is_empty: bool
    checkout_available: bool


class ProductPresenter:
    """
    Builds view models for products and the cart.

    Example:
        >>> presenter = ProductPresenter(currency_symbol="$")
        >>> presenter.present(product).stock_badge
        '10 in stock'
    """

    def __init__(self, currency_symbol: str = "$") -> None:
        self._symbol = currency_symbol

    def format_price(self, amount: Union[Decimal, int, float, str]) -> str:
        return format_price(amount, self._symbol)

    def present(self, product: Product) -> ProductView:
        """Map a product to card/detail display data."""
        return ProductView(
            id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            image=product.image,
            price=self.format_price(product.price),
            stock=product.stock,
            stock_badge=stock_badge(product),
            stock_badge_variant="outline" if product.in_stock else "destructive",
            can_add_to_cart=product.in_stock,
        )

    def present_cart(self, cart: Cart, products: Mapping[str, Product]) -> CartView:
        """
        Map cart lines to display data.

        Lines referencing products missing from `products` are left out,
        matching how they are excluded from the total.
        """
        lines = []
        for product_id, quantity in cart:
            product = products.get(product_id)
            if product is None:
                continue
            lines.append(CartLineView(
                product_id=product_id,
                name=product.name,
                quantity=quantity,
                unit_price=self.format_price(product.price),
                line_total=self.format_price(product.price * quantity),
                can_increment=quantity < product.stock,
            ))

        return CartView(
            lines=lines,
            item_count=sum(line.quantity for line in lines),
            total=self.format_price(total_price(cart.items, products)),
            is_empty=not lines,
            checkout_available=bool(lines),
        )
