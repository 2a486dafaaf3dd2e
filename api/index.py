"""
Storefront - Main FastAPI Application

Single entry point for the rendered page and the JSON API.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__, config
from storefront.logging import get_logger
from storefront.routers import cart_router, pages_router, products_router
from storefront.shop import Storefront, get_storefront

logger = get_logger(__name__)


def create_app(storefront: Optional[Storefront] = None) -> FastAPI:
    """Build the application around a storefront (the process singleton by default)."""
    storefront = storefront or get_storefront()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        # Startup: restore cart, fetch catalog in the background
        await storefront.start()
        logger.info(f"Storefront started (catalog: {storefront.catalog.url})")
        yield
        # Shutdown
        await storefront.stop()

    app = FastAPI(
        title="Storefront",
        description="Product catalog with a locally persisted shopping cart",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.storefront = storefront

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pages_router)
    app.include_router(products_router, prefix="/api")
    app.include_router(cart_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": "storefront", "catalog": storefront.catalog.status.value}

    return app


app = create_app()
