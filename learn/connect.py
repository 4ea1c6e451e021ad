from __future__ import annotations

from learn.backends import ListStore
from learn.memory_backend import MemoryListStore
from learn.redis_backend import RedisListStore

STORE_BACKENDS = ("redis", "memory")


def open_list_store(
    backend: str,
    *,
    redis_url: str,
    timeout_seconds: float | None = None,
) -> ListStore:
    name = (backend or "").strip().lower()
    if name == "redis":
        return RedisListStore.from_url(redis_url, timeout_seconds=timeout_seconds)
    if name == "memory":
        return MemoryListStore()
    raise ValueError(f"unknown store backend {backend!r}; expected one of {', '.join(STORE_BACKENDS)}")
