"""
Page rendering.

Builds the storefront page (product grid + cart panel) as HTML. Buttons are
plain forms posting to /actions/..., which redirect back to the page.
"""
from html import escape
from typing import Iterable
from urllib.parse import quote

from storefront.cart import Cart, CartLine
from storefront.catalog import CatalogState, CatalogStatus
from storefront.models import Product
from storefront.money import format_money

TITLE_PREVIEW_LENGTH = 20

_STYLE = """
body { font-family: sans-serif; background: #f3f4f6; margin: 0; padding: 1rem; }
header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 1.5rem; }
form { display: inline; }
button { cursor: pointer; border: 0; border-radius: 4px; color: #fff; background: #3b82f6; padding: .25rem .75rem; }
.grid { display: flex; flex-wrap: wrap; justify-content: center; gap: 1rem; }
.card { background: #fff; padding: 1rem; width: 16rem; border-radius: 4px; box-shadow: 0 1px 4px rgba(0,0,0,.15); }
.card img { display: block; height: 8rem; margin: 0 auto; }
.card button { width: 100%; margin-top: .5rem; }
.notice { color: #6b7280; text-align: center; }
.cart { position: fixed; top: 0; right: 0; height: 100%; width: 20rem; overflow-y: auto;
        background: #fff; padding: 1rem; box-shadow: -2px 0 8px rgba(0,0,0,.2); }
.cart.closed { display: none; }
.cart .line { display: flex; justify-content: space-between; padding: .5rem; border-bottom: 1px solid #e5e7eb; }
.cart .close { background: none; color: #ef4444; font-weight: bold; }
.cart .minus { background: #ef4444; }
.cart .plus { background: #22c55e; }
.total { margin-top: 1rem; font-weight: bold; font-size: 1.1rem; }
"""


def preview_title(title: str) -> str:
    """First 20 characters of a title."""
    return title[:TITLE_PREVIEW_LENGTH]


def _action(path: str, label: str, css_class: str = "") -> str:
    class_attr = f' class="{css_class}"' if css_class else ""
    return (
        f'<form method="post" action="{escape(path)}">'
        f'<button type="submit"{class_attr}>{label}</button></form>'
    )


def _product_path(action: str, product_id: str) -> str:
    return f"/actions/{action}/{quote(product_id, safe='')}"


def render_product_card(product: Product, currency: str = "USD") -> str:
    image = ""
    if product.image:
        image = f'<img src="{escape(product.image)}" alt="{escape(product.title)}">'
    return (
        '<div class="card">'
        f"{image}"
        f"<h2>{escape(preview_title(product.title))}...</h2>"
        f"<p>{escape(format_money(product.price, currency))}</p>"
        f"{_action(_product_path('add', product.id), 'Add to Cart')}"
        "</div>"
    )


def render_product_grid(state: CatalogState, currency: str = "USD") -> str:
    if state.products:
        cards = "".join(render_product_card(p, currency) for p in state.products)
        return f'<main class="grid">{cards}</main>'
    if state.status is CatalogStatus.PENDING:
        return '<main class="grid"><p class="notice">Loading products...</p></main>'
    if state.status is CatalogStatus.FAILURE:
        return '<main class="grid"><p class="notice">Products are unavailable right now.</p></main>'
    return '<main class="grid"><p class="notice">No products.</p></main>'


def render_cart_line(line: CartLine) -> str:
    return (
        '<div class="line">'
        f"<span>{escape(preview_title(line.title))} ({line.quantity})</span>"
        "<div>"
        f"{_action(_product_path('remove', line.id), '-', 'minus')}"
        f"{_action(_product_path('add', line.id), '+', 'plus')}"
        "</div>"
        "</div>"
    )


def render_cart_panel(cart: Cart, is_open: bool, currency: str = "USD") -> str:
    if cart.is_empty:
        body = '<p class="notice">Your cart is empty.</p>'
    else:
        body = "".join(render_cart_line(line) for line in cart)
    state_class = "open" if is_open else "closed"
    return (
        f'<aside class="cart {state_class}">'
        '<header><h2>Your Cart</h2>'
        f"{_action('/actions/close-cart', '✕', 'close')}</header>"
        f"{body}"
        f'<div class="total">Total: {escape(format_money(cart.total, currency))}</div>'
        "</aside>"
    )


def render_header(cart: Cart) -> str:
    return (
        "<header><h1>Shopping Cart</h1>"
        f"{_action('/actions/toggle-cart', f'🛒 Cart ({cart.line_count})')}"
        "</header>"
    )


def render_page(state: CatalogState, cart: Cart, is_open: bool, currency: str = "USD") -> str:
    """Full HTML document for the storefront."""
    parts: Iterable[str] = (
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        "<title>Shopping Cart</title>",
        f"<style>{_STYLE}</style></head><body>",
        render_header(cart),
        render_product_grid(state, currency),
        render_cart_panel(cart, is_open, currency),
        "</body></html>",
    )
    return "".join(parts)
