"""
Presentation Package

Display attributes for products and the cart.
"""

from .adapter import (
    OUT_OF_STOCK,
    CartLineView,
    CartView,
    ProductPresenter,
    ProductView,
    format_price,
    stock_badge,
)

__all__ = [
    "OUT_OF_STOCK",
    "CartLineView",
    "CartView",
    "ProductPresenter",
    "ProductView",
    "format_price",
    "stock_badge",
]
