"""
Storefront configuration.

All settings come from environment variables. A `.env` file in the project
root is loaded first when present.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def _get_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


# Catalog source
CATALOG_URL = os.environ.get("CATALOG_URL", "https://fakestoreapi.com/products")
CATALOG_TIMEOUT = _get_float("CATALOG_TIMEOUT", 10.0)  # seconds
CATALOG_FETCH_ATTEMPTS = max(1, _get_int("CATALOG_FETCH_ATTEMPTS", 1))

# Cart persistence
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "local").lower()  # local | memory | redis
STORAGE_DIR = os.environ.get("STORAGE_DIR", str(Path.home() / ".storefront"))
STORAGE_SCOPE = os.environ.get("STORAGE_SCOPE", "storefront")

# Upstash Redis (STORAGE_BACKEND=redis)
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# HTTP surface
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
CURRENCY = os.environ.get("CURRENCY", "USD")
