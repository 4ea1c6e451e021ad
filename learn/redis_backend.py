from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, TypeVar

import redis
from redis import exceptions as redis_exceptions

from learn.backends import ListStore
from learn.backends import ListTransaction
from learn.backends import StoreError
from learn.backends import StoreTimeout
from learn.backends import StoreUnavailable

T = TypeVar("T")


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except redis_exceptions.TimeoutError as exc:
        raise StoreTimeout(f"store timed out: {exc}") from exc
    except redis_exceptions.ConnectionError as exc:
        raise StoreUnavailable(f"store unavailable: {exc}") from exc
    except redis_exceptions.RedisError as exc:
        raise StoreError(str(exc)) from exc


class RedisListTransaction(ListTransaction):
    def __init__(self, pipe: redis.client.Pipeline) -> None:
        self._pipe = pipe
        self._queued = False

    def _ensure_immediate(self) -> None:
        if self._queued:
            raise RuntimeError("transaction reads must happen before multi()")

    def _ensure_queued(self) -> None:
        if not self._queued:
            raise RuntimeError("transaction writes must happen after multi()")

    def length(self, key: str) -> int:
        self._ensure_immediate()
        return int(self._pipe.llen(key))

    def get_at(self, key: str, offset: int) -> str | None:
        self._ensure_immediate()
        return self._pipe.lindex(key, int(offset))

    def multi(self) -> None:
        self._ensure_immediate()
        self._pipe.multi()
        self._queued = True

    def set_at(self, key: str, offset: int, value: str) -> None:
        self._ensure_queued()
        self._pipe.lset(key, int(offset), value)

    def insert_before(self, key: str, pivot: str, value: str) -> None:
        self._ensure_queued()
        self._pipe.linsert(key, "BEFORE", pivot, value)

    def remove_by_value(self, key: str, value: str) -> None:
        self._ensure_queued()
        self._pipe.lrem(key, 1, value)

    def append(self, key: str, value: str) -> None:
        self._ensure_queued()
        self._pipe.rpush(key, value)


class RedisListStore(ListStore):
    """ListStore over a Redis server.

    Transactions use WATCH/MULTI/EXEC via ``Redis.transaction``, which re-runs
    the block whenever EXEC is aborted by a write to a watched key.
    """

    name = "redis"

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str, *, timeout_seconds: float | None = None) -> "RedisListStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )
        return cls(client)

    def ping(self) -> bool:
        with _translate_errors():
            return bool(self.client.ping())

    def length(self, key: str) -> int:
        with _translate_errors():
            return int(self.client.llen(key))

    def get_at(self, key: str, offset: int) -> str | None:
        with _translate_errors():
            return self.client.lindex(key, int(offset))

    def append(self, key: str, value: str) -> int:
        with _translate_errors():
            return int(self.client.rpush(key, value))

    def run_transaction(
        self,
        keys: Iterable[str],
        block: Callable[[ListTransaction], T],
    ) -> T:
        watched = list(keys)

        def _attempt(pipe: redis.client.Pipeline) -> T:
            return block(RedisListTransaction(pipe))

        with _translate_errors():
            return self.client.transaction(_attempt, *watched, value_from_callable=True)
