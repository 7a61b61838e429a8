"""
==============================================================================
WebSocket Package
==============================================================================

Handlers:
---------
- storefront: per-visitor cart and selection state

==============================================================================
"""

from .storefront import router as storefront_router

__all__ = ["storefront_router"]
