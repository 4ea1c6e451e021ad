"""Storage interface for per-topic fact lists.

A backend holds one ordered list of strings per key and offers the handful of
list primitives a Redis list has. Positional edits are built on top of these by
``learn.store``; the backend only has to make ``run_transaction`` atomic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


class StoreError(RuntimeError):
    pass


class StoreUnavailable(StoreError):
    pass


class StoreTimeout(StoreUnavailable):
    pass


class ListTransaction(ABC):
    """Handle passed to a ``run_transaction`` block.

    Reads run immediately against the watched keys. After ``multi()`` the write
    methods are queued and applied together when the block returns, unless a
    watched key changed in the meantime, in which case the backend runs the
    block again.
    """

    @abstractmethod
    def length(self, key: str) -> int: ...

    @abstractmethod
    def get_at(self, key: str, offset: int) -> str | None: ...

    @abstractmethod
    def multi(self) -> None: ...

    @abstractmethod
    def set_at(self, key: str, offset: int, value: str) -> None: ...

    @abstractmethod
    def insert_before(self, key: str, pivot: str, value: str) -> None: ...

    @abstractmethod
    def remove_by_value(self, key: str, value: str) -> None:
        """Queue removal of the first occurrence of *value*."""

    @abstractmethod
    def append(self, key: str, value: str) -> None: ...


class ListStore(ABC):
    name = "abstract"

    @abstractmethod
    def ping(self) -> bool: ...

    @abstractmethod
    def length(self, key: str) -> int: ...

    @abstractmethod
    def get_at(self, key: str, offset: int) -> str | None:
        """Return the entry at the 0-based *offset*, or None when out of range."""

    @abstractmethod
    def append(self, key: str, value: str) -> int:
        """Append *value* and return the new length."""

    @abstractmethod
    def run_transaction(
        self,
        keys: Iterable[str],
        block: Callable[[ListTransaction], T],
    ) -> T:
        """Run *block* atomically with respect to *keys* and return its value.

        The block may be called more than once; it must not keep side effects
        from an attempt that did not commit.
        """
