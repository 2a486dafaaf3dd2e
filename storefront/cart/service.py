"""Cart store: current cart value plus its persisted snapshot."""
import asyncio
import json
from typing import Optional

from storefront import config
from storefront.errors import ERROR_CART_STORAGE, CartStorageError, SnapshotError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.money import format_amount, format_money, to_float
from .models import Cart, Purchasable
from .storage import KeyValueStore, create_store

logger = get_logger(__name__)


class CartStore:
    """
    Owns the cart and keeps the key-value store in step with it.

    Features:
    - Every mutation builds a new Cart value and overwrites the stored snapshot
    - Mutations are serialized: one read-modify-write-persist cycle at a time
    - Missing or corrupt snapshots load as an empty cart
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: Optional[str] = None):
        self._store = store  # Lazy initialization
        self.key = key or config.CART_STORAGE_KEY
        self._cart = Cart()
        self._lock = asyncio.Lock()

    @property
    def store(self) -> KeyValueStore:
        if self._store is None:
            self._store = create_store()
        return self._store

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def total(self):
        return self._cart.total

    async def load(self) -> Cart:
        """Restore the cart from storage; never raises."""
        try:
            raw = await self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart snapshot: {e}", exc_info=True)
            self._cart = Cart()
            return self._cart

        if not raw:
            self._cart = Cart()
            return self._cart

        try:
            self._cart = Cart.from_snapshot(json.loads(raw))
        except (json.JSONDecodeError, SnapshotError) as e:
            # Corrupted data - clear it and start empty
            logger.warning(f"Corrupted cart snapshot under '{self.key}': {e}")
            self._cart = Cart()
            try:
                await self.store.delete(self.key)
            except Exception as delete_error:
                logger.error(f"Failed to delete corrupted cart snapshot: {delete_error}")
            return self._cart

        logger.info(f"Cart restored: {self._cart.line_count} lines, {self._cart.total_items} items")
        return self._cart

    async def persist(self, cart: Cart) -> None:
        """Overwrite the stored snapshot with the given cart."""
        try:
            await self.store.set(self.key, json.dumps(cart.to_snapshot()))
        except Exception as e:
            logger.error(f"Failed to save cart snapshot: {e}", exc_info=True)
            raise CartStorageError(f"{ERROR_CART_STORAGE}: {e}") from e

    async def add_to_cart(self, product: Purchasable) -> Cart:
        """Add one unit of a product (or of an existing cart line) and persist."""
        async with self._lock:
            self._cart = self._cart.add(product)
            logger.debug(f"Added product {sanitize_id_for_logging(product.id)} to cart")
            await self.persist(self._cart)
            return self._cart

    async def remove_from_cart(self, product_id: str) -> Cart:
        """Remove one unit of a product and persist. Unknown ids are a no-op."""
        async with self._lock:
            self._cart = self._cart.remove(product_id)
            logger.debug(f"Removed one unit of {sanitize_id_for_logging(product_id)} from cart")
            await self.persist(self._cart)
            return self._cart

    def summary(self, currency: Optional[str] = None) -> dict:
        """Cart as a display-ready dict."""
        currency = currency or config.CURRENCY
        cart = self._cart
        return {
            "is_empty": cart.is_empty,
            "line_count": cart.line_count,
            "total_items": cart.total_items,
            "items": [
                {
                    "id": line.id,
                    "title": line.title,
                    "price": to_float(line.price),
                    "quantity": line.quantity,
                    "line_total": format_amount(line.line_total),
                }
                for line in cart
            ],
            "total": format_amount(cart.total),
            "total_display": format_money(cart.total, currency),
            "currency": currency,
        }
