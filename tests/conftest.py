"""Pytest configuration and fixtures"""
import os
from decimal import Decimal

import httpx
import pytest

# Set test environment variables before storefront.config is imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("CATALOG_URL", "https://catalog.test/products")
os.environ.setdefault("CATALOG_FETCH_ATTEMPTS", "1")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storefront.cart import CartStore, MemoryStore  # noqa: E402
from storefront.catalog import CatalogLoader  # noqa: E402
from storefront.models import Product  # noqa: E402
from storefront.shop import Storefront  # noqa: E402

CATALOG_URL = "https://catalog.test/products"


@pytest.fixture
def sample_products():
    """Catalog payload in the Fake Store API shape"""
    return [
        {
            "id": 1,
            "title": "Fjallraven - Foldsack No. 1 Backpack, Fits 15 Laptops",
            "price": 109.95,
            "description": "Your perfect pack for everyday use",
            "category": "men's clothing",
            "image": "https://catalog.test/img/1.jpg",
            "rating": {"rate": 3.9, "count": 120},
        },
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "price": 22.3,
            "description": "Slim-fitting style",
            "category": "men's clothing",
            "image": "https://catalog.test/img/2.jpg",
            "rating": {"rate": 4.1, "count": 259},
        },
        {
            "id": 3,
            "title": "Mens Cotton Jacket",
            "price": 55.99,
            "description": "Great outerwear jacket",
            "category": "men's clothing",
            "image": "https://catalog.test/img/3.jpg",
            "rating": {"rate": 4.7, "count": 500},
        },
    ]


@pytest.fixture
def product_p1():
    return Product(id="p1", title="Product One", price=Decimal("10.00"), image="https://catalog.test/p1.jpg")


@pytest.fixture
def product_p2():
    return Product(id="p2", title="Product Two", price=Decimal("5.00"), image="https://catalog.test/p2.jpg")


@pytest.fixture
def catalog_transport(sample_products):
    """MockTransport serving sample_products; records request count"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=sample_products)

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


@pytest.fixture
def catalog_loader(catalog_transport):
    return CatalogLoader(url=CATALOG_URL, timeout=1.0, attempts=1, transport=catalog_transport)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def cart_store(memory_store):
    return CartStore(store=memory_store, key="cart")


@pytest.fixture
def storefront(catalog_loader, cart_store):
    return Storefront(catalog=catalog_loader, cart_store=cart_store)
