"""
Cart API Router

Cart mutations and cart panel state. Every mutation responds with the full
cart summary so the client never has to recompute totals.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.errors import ERROR_CART_STORAGE, ERROR_PRODUCT_NOT_FOUND, CartStorageError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import AddToCartRequest, RemoveFromCartRequest
from storefront.shop import Storefront
from .deps import get_storefront

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _cart_response(storefront: Storefront) -> dict:
    summary = storefront.cart_store.summary()
    summary["is_open"] = storefront.panel.is_open
    return summary


@router.get("/cart")
async def get_cart(storefront: Storefront = Depends(get_storefront)):
    """Current cart with totals and panel visibility."""
    return _cart_response(storefront)


@router.post("/cart/add")
async def add_to_cart(request: AddToCartRequest, storefront: Storefront = Depends(get_storefront)):
    """Add one unit. Works for catalog products and for lines already in the cart."""
    product = storefront.find_purchasable(request.product_id)
    if product is None:
        logger.info(f"Add to cart for unknown product {sanitize_id_for_logging(request.product_id)}")
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    try:
        await storefront.add_to_cart(product)
    except CartStorageError:
        raise HTTPException(status_code=503, detail=ERROR_CART_STORAGE)

    return _cart_response(storefront)


@router.post("/cart/remove")
async def remove_from_cart(request: RemoveFromCartRequest, storefront: Storefront = Depends(get_storefront)):
    """Remove one unit; unknown ids leave the cart unchanged."""
    try:
        await storefront.remove_from_cart(request.product_id)
    except CartStorageError:
        raise HTTPException(status_code=503, detail=ERROR_CART_STORAGE)

    return _cart_response(storefront)


@router.post("/cart/toggle")
async def toggle_cart(storefront: Storefront = Depends(get_storefront)):
    storefront.toggle_cart()
    return {"is_open": storefront.panel.is_open}


@router.post("/cart/close")
async def close_cart(storefront: Storefront = Depends(get_storefront)):
    storefront.close_cart()
    return {"is_open": storefront.panel.is_open}
