"""
==============================================================================
Catalog Sources Module
==============================================================================

Where product records come from.

Sources:
--------
- CmsCatalogSource:  queries the headless content service
- FileCatalogSource: reads a local JSON array of product records

Both fetch the whole catalog at once: either every record is returned
as a valid Product, or CatalogFetchError is raised.

==============================================================================
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from storefront.cms import ContentClient, ContentServiceError, product_query
from storefront.config import get_settings
from storefront.core import exceptions

from .models import Product


# Module logger
logger = logging.getLogger(__name__)


class CatalogSource(ABC):
    """Base class for product catalog sources."""

    name = "abstract"

    @abstractmethod
    async def fetch_products(self) -> List[Product]:
        """
        Fetch the full product list.

        Raises:
            CatalogFetchError: If the catalog cannot be fetched
        """

    @staticmethod
    def _parse_records(records: Any) -> List[Product]:
        """Validate raw records into products (all-or-nothing)."""
        if not isinstance(records, list):
            raise exceptions.catalog_fetch_failed(
                f"Expected a list of products, got {type(records).__name__}"
            )

        try:
            return [Product.model_validate(record) for record in records]
        except ValidationError as e:
            raise exceptions.catalog_fetch_failed(
                f"Invalid product record: {e.error_count()} validation error(s)"
            ) from e


class CmsCatalogSource(CatalogSource):
    """
    Catalog backed by the headless content service.

    Example:
        >>> source = CmsCatalogSource(ContentClient("tt81m3xp", "production", "2024-01-03"))
        >>> products = await source.fetch_products()
    """

    name = "cms"

    def __init__(self, client: ContentClient, document_type: str = "product") -> None:
        self._client = client
        self._query = product_query(document_type)

    async def fetch_products(self) -> List[Product]:
        try:
            records = await self._client.fetch(self._query)
        except ContentServiceError as e:
            raise exceptions.catalog_fetch_failed(str(e)) from e

        products = self._parse_records(records)
        logger.debug(f"Fetched {len(products)} products from content service")
        return products


class FileCatalogSource(CatalogSource):
    """Catalog read from a JSON file containing an array of product records."""

    name = "file"

    def __init__(self, products_file: Path) -> None:
        self._products_file = Path(products_file)

    def _read(self) -> Any:
        with self._products_file.open("r", encoding="utf-8") as f:
            return json.load(f)

    async def fetch_products(self) -> List[Product]:
        try:
            records = await asyncio.to_thread(self._read)
        except FileNotFoundError as e:
            raise exceptions.catalog_fetch_failed(
                f"Products file not found: {self._products_file}"
            ) from e
        except json.JSONDecodeError as e:
            raise exceptions.catalog_fetch_failed(f"Invalid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise exceptions.catalog_fetch_failed(
                f"Cannot read products file {self._products_file}: {e}"
            ) from e

        products = self._parse_records(records)
        logger.debug(f"Read {len(products)} products from {self._products_file}")
        return products


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_catalog_source() -> CatalogSource:
    """
    Get the configured catalog source.

    Used as a FastAPI dependency; tests override it with an in-memory source.
    """
    settings = get_settings()

    if settings.catalog_backend == "file":
        return FileCatalogSource(settings.products_path)

    return CmsCatalogSource(
        ContentClient.from_settings(settings),
        document_type=settings.cms_document_type,
    )
