"""
==============================================================================
Product Catalog Module
==============================================================================

In-memory snapshot of the product list with a lookup index.

The snapshot is created on catalog load and replaced wholesale on
refresh; products are never edited in place.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import Product


# Module logger
logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Product list with an id index.

    Attributes:
        products: List of all products, in source order

    Example:
        >>> catalog = ProductCatalog(products)
        >>> catalog.find_by_id("1")
        Product(id='1', ...)
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: List[Product] = []
        self._by_id: Dict[str, Product] = {}
        self.replace(products)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> List[Product]:
        """Get all products."""
        return self._products.copy()

    @property
    def by_id(self) -> Dict[str, Product]:
        """Get a copy of the id index."""
        return dict(self._by_id)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    # =========================================================================
    # LOADING
    # =========================================================================

    def replace(self, products: Iterable[Product]) -> None:
        """Replace the whole product list and rebuild the index."""
        self._products = list(products)
        self._build_indexes()

    def _build_indexes(self) -> None:
        """Build lookup indexes."""
        self._by_id.clear()

        for product in self._products:
            if product.id in self._by_id:
                logger.warning(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Find product by identifier."""
        return self._by_id.get(product_id)

    def find_by_category(self, category: Optional[str] = None) -> List[Product]:
        """Get products in a category, or all products when no category given."""
        if category is None:
            return self._products.copy()
        return [p for p in self._products if p.category == category]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def get_categories(self) -> List[str]:
        """Get category names in first-seen order."""
        seen: Dict[str, None] = {}
        for product in self._products:
            if product.category:
                seen.setdefault(product.category, None)
        return list(seen)

    def get_stats(self) -> Dict:
        """Get catalog statistics."""
        stats = {
            "total_products": len(self._products),
            "out_of_stock": sum(1 for p in self._products if p.stock == 0),
            "categories": {}
        }

        for product in self._products:
            category = product.category or "uncategorized"
            stats["categories"][category] = stats["categories"].get(category, 0) + 1

        return stats
