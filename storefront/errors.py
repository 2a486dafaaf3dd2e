"""
Common Error Constants and Exceptions

Error messages live here so routers, services and tests share one wording.
"""

# Catalog errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_CATALOG_UNAVAILABLE = "Catalog unavailable"
ERROR_CATALOG_MALFORMED = "Catalog response is not a list of products"

# Cart errors
ERROR_CART_STORAGE = "Cart storage unavailable"
ERROR_CART_SNAPSHOT_CORRUPT = "Cart snapshot is corrupt"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class CatalogError(StorefrontError):
    """Catalog source could not deliver a valid product list."""


class CartStorageError(StorefrontError):
    """Key-value store failed while reading or writing the cart snapshot."""


class SnapshotError(StorefrontError):
    """Persisted cart snapshot could not be decoded."""
