"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Classes:
--------
- Product: Pydantic model for products
- ProductCatalog: in-memory product list with id index
- CatalogSource: base for sources (content service, local file)

==============================================================================
"""

from .models import Product
from .catalog import ProductCatalog
from .sources import (
    CatalogSource,
    CmsCatalogSource,
    FileCatalogSource,
    get_catalog_source,
)

__all__ = [
    "Product",
    "ProductCatalog",
    "CatalogSource",
    "CmsCatalogSource",
    "FileCatalogSource",
    "get_catalog_source",
]
