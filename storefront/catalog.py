"""
Catalog Loader

Fetches the product list from the external catalog source once at startup
and keeps it in memory. The outcome is exposed as a status so callers can
tell "still loading" from "failed" from "loaded, but empty".
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront import config
from storefront.errors import ERROR_CATALOG_MALFORMED, ERROR_CATALOG_UNAVAILABLE, CatalogError
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Product

logger = get_logger(__name__)

_products_adapter = TypeAdapter(List[Product])


class CatalogStatus(str, Enum):
    """Catalog load lifecycle: pending -> success | failure."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class CatalogState:
    """Snapshot of the loader for rendering and the JSON API."""

    status: CatalogStatus
    products: List[Product]
    error: Optional[str] = None


class CatalogLoader:
    """
    Loads the product catalog.

    A failed load leaves the previous product list in place (empty on the
    first load) and records the reason; it is never raised to the caller.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        attempts: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or config.CATALOG_URL
        self.timeout = timeout if timeout is not None else config.CATALOG_TIMEOUT
        self.attempts = max(1, attempts if attempts is not None else config.CATALOG_FETCH_ATTEMPTS)
        self._transport = transport
        self._products: List[Product] = []
        self.status = CatalogStatus.PENDING
        self.error: Optional[str] = None

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    @property
    def state(self) -> CatalogState:
        return CatalogState(status=self.status, products=self.products, error=self.error)

    def get_product(self, product_id: str) -> Optional[Product]:
        product_id = str(product_id)
        return next((p for p in self._products if p.id == product_id), None)

    async def load(self) -> CatalogState:
        """Fetch the catalog and record the outcome."""
        self.status = CatalogStatus.PENDING
        try:
            products = await self._fetch()
        except CatalogError as e:
            self.status = CatalogStatus.FAILURE
            self.error = str(e)
            logger.warning(f"Catalog load failed: {sanitize_string_for_logging(self.error, 200)}")
            return self.state

        self._products = products
        self.status = CatalogStatus.SUCCESS
        self.error = None
        logger.info(f"Catalog loaded: {len(products)} products")
        return self.state

    async def _fetch(self) -> List[Product]:
        """
        GET the catalog and validate it.

        Transport errors are retried up to `attempts` times in total; bad
        status codes and malformed bodies fail immediately.

        Raises:
            CatalogError: on any failure
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=wait_exponential(multiplier=0.5, max=4),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    data = await self._get_json()
        except httpx.HTTPStatusError as e:
            raise CatalogError(f"{ERROR_CATALOG_UNAVAILABLE}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise CatalogError(f"{ERROR_CATALOG_UNAVAILABLE}: {e.__class__.__name__}: {e}") from e
        except ValueError as e:
            # Body is not JSON
            raise CatalogError(f"{ERROR_CATALOG_MALFORMED}: {e}") from e

        try:
            return _products_adapter.validate_python(data)
        except ValidationError as e:
            raise CatalogError(f"{ERROR_CATALOG_MALFORMED}: {e.error_count()} validation errors") from e

    async def _get_json(self):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            return response.json()
