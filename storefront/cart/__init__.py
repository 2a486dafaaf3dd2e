"""Cart package: models, storage, and store facade."""
from .models import CartLine, Cart, Purchasable
from .panel import CartPanel
from .service import CartStore
from .storage import KeyValueStore, LocalFileStore, MemoryStore, RedisStore, create_store

__all__ = [
    "CartLine",
    "Cart",
    "Purchasable",
    "CartPanel",
    "CartStore",
    "KeyValueStore",
    "LocalFileStore",
    "MemoryStore",
    "RedisStore",
    "create_store",
]
