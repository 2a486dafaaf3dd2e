"""
Products API Router

Read-only view of the loaded catalog.
"""

from fastapi import APIRouter, Depends, HTTPException

from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.money import to_float
from storefront.models import Product
from storefront.shop import Storefront
from .deps import get_storefront

router = APIRouter(tags=["products"])


def _product_response(product: Product) -> dict:
    data = product.model_dump()
    data["price"] = to_float(product.price)
    return data


@router.get("/products")
async def get_products(storefront: Storefront = Depends(get_storefront)):
    """Catalog status and the products loaded so far."""
    state = storefront.catalog.state
    return {
        "status": state.status.value,
        "error": state.error,
        "products": [_product_response(p) for p in state.products],
    }


@router.get("/products/{product_id:path}")
async def get_product(product_id: str, storefront: Storefront = Depends(get_storefront)):
    product = storefront.catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return _product_response(product)
