"""Key-value stores for the cart snapshot.

Three backends share one async interface:

- LocalFileStore: one JSON file per scope, the local-storage equivalent
- MemoryStore: process-local dict
- RedisStore: Upstash Redis, keys prefixed by scope
"""
import asyncio
import json
from pathlib import Path
from typing import Dict, Optional, Protocol

from storefront import config
from storefront.db import RedisKeys, get_redis
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Scoped string-keyed store."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class LocalFileStore:
    """
    JSON file holding every key of one scope: `<directory>/<scope>.json`.

    The whole file is rewritten on each `set`. An unreadable file behaves
    like an empty scope.
    """

    def __init__(self, directory: str | Path, scope: str = "storefront"):
        self.path = Path(directory) / f"{scope}.json"

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Local store {self.path} is not valid JSON, treating as empty")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Local store {self.path} does not hold an object, treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(lambda: self._read_all().get(key))

    async def set(self, key: str, value: str) -> None:
        def _set():
            data = self._read_all()
            data[key] = value
            self._write_all(data)

        await asyncio.to_thread(_set)

    async def delete(self, key: str) -> None:
        def _delete():
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)

        await asyncio.to_thread(_delete)


class RedisStore:
    """Upstash Redis store. No TTL: the snapshot lives until overwritten."""

    def __init__(self, redis=None, scope: str = "storefront"):
        self._redis = redis  # Lazy initialization
        self.scope = scope

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    def _key(self, key: str) -> str:
        return RedisKeys.scoped_key(self.scope, key)

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self._key(key))


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    """Build the store selected by STORAGE_BACKEND."""
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "local":
        return LocalFileStore(config.STORAGE_DIR, scope=config.STORAGE_SCOPE)
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        return RedisStore(scope=config.STORAGE_SCOPE)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected local, memory or redis)")


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "LocalFileStore",
    "RedisStore",
    "create_store",
]
