"""
Storefront controller.

Owns the catalog loader, the cart store and the cart panel. Views and
routers read state and trigger actions through this object only.
"""
import asyncio
from typing import Optional, Union

from storefront.cart import Cart, CartLine, CartPanel, CartStore
from storefront.catalog import CatalogLoader, CatalogStatus
from storefront.logging import get_logger
from storefront.models import Product

logger = get_logger(__name__)


class Storefront:
    def __init__(
        self,
        catalog: Optional[CatalogLoader] = None,
        cart_store: Optional[CartStore] = None,
        panel: Optional[CartPanel] = None,
    ):
        self.catalog = catalog or CatalogLoader()
        self.cart_store = cart_store or CartStore()
        self.panel = panel or CartPanel()
        self._catalog_task: Optional[asyncio.Task] = None

    @property
    def cart(self) -> Cart:
        return self.cart_store.cart

    async def start(self) -> None:
        """
        Restore the cart and kick off the catalog fetch.

        The fetch runs in the background; the cart is usable before it
        completes. A catalog that already left the pending state is not
        fetched again.
        """
        await self.cart_store.load()
        if self.catalog.status is CatalogStatus.PENDING and self._catalog_task is None:
            self._catalog_task = asyncio.create_task(self.catalog.load())

    async def wait_for_catalog(self) -> None:
        if self._catalog_task is not None:
            await self._catalog_task

    async def stop(self) -> None:
        """Cancel a catalog fetch still in flight at shutdown."""
        task, self._catalog_task = self._catalog_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            logger.info("Catalog fetch cancelled at shutdown")

    def find_purchasable(self, product_id: str) -> Optional[Union[Product, CartLine]]:
        """Catalog product for the id, else the cart line with that id (the "+" control)."""
        return self.catalog.get_product(product_id) or self.cart.get_line(product_id)

    async def add_to_cart(self, product: Union[Product, CartLine]) -> Cart:
        return await self.cart_store.add_to_cart(product)

    async def remove_from_cart(self, product_id: str) -> Cart:
        return await self.cart_store.remove_from_cart(product_id)

    def toggle_cart(self) -> bool:
        return self.panel.toggle()

    def close_cart(self) -> bool:
        return self.panel.close()


# Singleton instance
_storefront: Optional[Storefront] = None


def get_storefront() -> Storefront:
    """Get Storefront singleton."""
    global _storefront
    if _storefront is None:
        _storefront = Storefront()
    return _storefront
