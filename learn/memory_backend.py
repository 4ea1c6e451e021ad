from __future__ import annotations

import threading
from typing import Callable, Iterable, TypeVar

from learn.backends import ListStore
from learn.backends import ListTransaction
from learn.backends import StoreError

T = TypeVar("T")


class MemoryListTransaction(ListTransaction):
    def __init__(self, store: "MemoryListStore") -> None:
        self._store = store
        self._ops: list[tuple] = []
        self._queued = False

    def length(self, key: str) -> int:
        if self._queued:
            raise RuntimeError("transaction reads must happen before multi()")
        return self._store.length(key)

    def get_at(self, key: str, offset: int) -> str | None:
        if self._queued:
            raise RuntimeError("transaction reads must happen before multi()")
        return self._store.get_at(key, offset)

    def multi(self) -> None:
        self._queued = True

    def _queue(self, *op) -> None:
        if not self._queued:
            raise RuntimeError("transaction writes must happen after multi()")
        self._ops.append(op)

    def set_at(self, key: str, offset: int, value: str) -> None:
        self._queue("set", key, int(offset), value)

    def insert_before(self, key: str, pivot: str, value: str) -> None:
        self._queue("insert_before", key, pivot, value)

    def remove_by_value(self, key: str, value: str) -> None:
        self._queue("remove", key, value)

    def append(self, key: str, value: str) -> None:
        self._queue("append", key, value)

    @property
    def ops(self) -> list[tuple]:
        return list(self._ops)


class MemoryListStore(ListStore):
    """In-process ListStore with Redis list semantics.

    Every write bumps a per-key version. ``run_transaction`` records the
    versions of the watched keys before running the block and only applies the
    queued writes if none of them moved; otherwise the block runs again.
    """

    name = "memory"

    def __init__(self, initial: dict[str, list[str]] | None = None) -> None:
        self._lock = threading.RLock()
        self._lists: dict[str, list[str]] = {}
        self._versions: dict[str, int] = {}
        self.commits = 0
        self.conflicts = 0
        for key, values in (initial or {}).items():
            if values:
                self._lists[key] = [str(v) for v in values]

    def snapshot(self, key: str) -> list[str]:
        with self._lock:
            return list(self._lists.get(key, []))

    def ping(self) -> bool:
        return True

    def length(self, key: str) -> int:
        with self._lock:
            return len(self._lists.get(key, []))

    def get_at(self, key: str, offset: int) -> str | None:
        with self._lock:
            values = self._lists.get(key, [])
            offset = int(offset)
            if offset < 0:
                offset += len(values)
            if 0 <= offset < len(values):
                return values[offset]
            return None

    def append(self, key: str, value: str) -> int:
        with self._lock:
            values = self._lists.setdefault(key, [])
            values.append(str(value))
            self._bump(key)
            return len(values)

    def run_transaction(
        self,
        keys: Iterable[str],
        block: Callable[[ListTransaction], T],
    ) -> T:
        watched = list(keys)
        while True:
            with self._lock:
                seen = {key: self._versions.get(key, 0) for key in watched}
            tx = MemoryListTransaction(self)
            value = block(tx)
            with self._lock:
                if any(self._versions.get(key, 0) != version for key, version in seen.items()):
                    self.conflicts += 1
                    continue
                self._apply(tx.ops)
                self.commits += 1
                return value

    def _bump(self, key: str) -> None:
        self._versions[key] = self._versions.get(key, 0) + 1

    def _apply(self, ops: list[tuple]) -> None:
        # Work on copies so a failing command leaves every list untouched.
        staged: dict[str, list[str]] = {}
        for op in ops:
            kind, key = op[0], op[1]
            if key not in staged:
                staged[key] = list(self._lists.get(key, []))
            values = staged[key]
            if kind == "set":
                offset, value = op[2], op[3]
                if not values:
                    raise StoreError("no such key")
                if offset < 0:
                    offset += len(values)
                if not 0 <= offset < len(values):
                    raise StoreError("index out of range")
                values[offset] = value
            elif kind == "insert_before":
                pivot, value = op[2], op[3]
                if pivot in values:
                    values.insert(values.index(pivot), value)
            elif kind == "remove":
                value = op[2]
                if value in values:
                    values.remove(value)
            elif kind == "append":
                values.append(op[2])
            else:
                raise StoreError(f"unknown list command {kind!r}")

        for key, values in staged.items():
            if values:
                self._lists[key] = values
            else:
                self._lists.pop(key, None)
            self._bump(key)
