"""
==============================================================================
Store Package - Page State
==============================================================================

Classes:
--------
- Cart: product id -> quantity with add/update/remove transitions
- Selection: product shown in the details overlay
- StorefrontSession (store.session): owner of catalog, cart and selection

==============================================================================
"""

from .cart import Cart, total_price
from .selection import Selection

__all__ = [
    "Cart",
    "Selection",
    "total_price",
]
