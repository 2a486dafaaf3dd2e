"""
Shared Dependencies for Routers
"""

from fastapi import Request

from storefront.shop import Storefront, get_storefront as _default_storefront


def get_storefront(request: Request) -> Storefront:
    """Storefront attached to the app by create_app(), else the process singleton."""
    storefront = getattr(request.app.state, "storefront", None)
    return storefront if storefront is not None else _default_storefront()
