"""
Page Router

Serves the rendered storefront and the form actions behind its buttons.
Each action redirects back to the page (303, so the browser re-GETs it).
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from storefront import config
from storefront.errors import ERROR_CART_STORAGE, ERROR_PRODUCT_NOT_FOUND, CartStorageError
from storefront.rendering import render_page
from storefront.shop import Storefront
from .deps import get_storefront

router = APIRouter(tags=["pages"])


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def index(storefront: Storefront = Depends(get_storefront)):
    return render_page(
        storefront.catalog.state,
        storefront.cart,
        storefront.panel.is_open,
        currency=config.CURRENCY,
    )


@router.post("/actions/add/{product_id:path}")
async def add_action(product_id: str, storefront: Storefront = Depends(get_storefront)):
    product = storefront.find_purchasable(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    try:
        await storefront.add_to_cart(product)
    except CartStorageError:
        raise HTTPException(status_code=503, detail=ERROR_CART_STORAGE)
    return _back_to_page()


@router.post("/actions/remove/{product_id:path}")
async def remove_action(product_id: str, storefront: Storefront = Depends(get_storefront)):
    try:
        await storefront.remove_from_cart(product_id)
    except CartStorageError:
        raise HTTPException(status_code=503, detail=ERROR_CART_STORAGE)
    return _back_to_page()


@router.post("/actions/toggle-cart")
async def toggle_action(storefront: Storefront = Depends(get_storefront)):
    storefront.toggle_cart()
    return _back_to_page()


@router.post("/actions/close-cart")
async def close_action(storefront: Storefront = Depends(get_storefront)):
    storefront.close_cart()
    return _back_to_page()
