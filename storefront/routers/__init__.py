"""
FastAPI Routers Package

All routers are included in api/index.py.
"""

from storefront.routers.cart import router as cart_router
from storefront.routers.pages import router as pages_router
from storefront.routers.products import router as products_router

__all__ = [
    "cart_router",
    "pages_router",
    "products_router",
]
