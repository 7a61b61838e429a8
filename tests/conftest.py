"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides sample products, an in-memory catalog source and a test client
wired to it.

==============================================================================
"""

import pytest
from typing import Generator, List
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.catalog import CatalogSource, Product
from storefront.catalog.sources import get_catalog_source
from storefront.core import exceptions


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

class FakeCatalogSource(CatalogSource):
    """In-memory catalog source; raises CatalogFetchError when `fail` is set."""

    name = "fake"

    def __init__(self, products: List[Product], fail: bool = False):
        self.products = products
        self.fail = fail
        self.calls = 0

    async def fetch_products(self) -> List[Product]:
        self.calls += 1
        if self.fail:
            raise exceptions.catalog_fetch_failed("content service unreachable")
        return list(self.products)


@pytest.fixture
def headphones() -> Product:
    return Product(
        id="1",
        name="Wireless Headphones",
        slug="wireless-headphones",
        price="99.99",
        description="High-quality wireless headphones with noise cancellation",
        category="Electronics",
        stock=10,
        image="https://cdn.example.com/headphones.jpg",
    )


@pytest.fixture
def shoes() -> Product:
    return Product(
        id="2",
        name="Running Shoes",
        slug="running-shoes",
        price="79.99",
        description="Comfortable running shoes for all terrains",
        category="Sports",
        stock=2,
        image="https://cdn.example.com/shoes.jpg",
    )


@pytest.fixture
def sold_out() -> Product:
    return Product(
        id="3",
        name="Coffee Maker",
        slug="coffee-maker",
        price="129.99",
        description="Programmable coffee maker with built-in grinder",
        category="Home",
        stock=0,
        image="https://cdn.example.com/coffee.jpg",
    )


@pytest.fixture
def products(headphones: Product, shoes: Product, sold_out: Product) -> List[Product]:
    return [headphones, shoes, sold_out]


@pytest.fixture
def catalog_source(products: List[Product]) -> FakeCatalogSource:
    return FakeCatalogSource(products)


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def client(catalog_source: FakeCatalogSource) -> Generator[TestClient, None, None]:
    """Create test client backed by the in-memory catalog source."""
    app.dependency_overrides[get_catalog_source] = lambda: catalog_source

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
