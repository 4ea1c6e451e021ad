from __future__ import annotations

import uuid
from dataclasses import dataclass

from learn.backends import ListStore
from learn.backends import ListTransaction
from learn.index import wrap_index

SLOT_MARKER_PREFIX = "\x00learn-slot:"


class InvalidFact(ValueError):
    pass


@dataclass(slots=True, frozen=True)
class FactLookup:
    position: int
    length: int
    fact: str | None


@dataclass(slots=True, frozen=True)
class FactAdded:
    position: int
    length: int


@dataclass(slots=True, frozen=True)
class FactDeleted:
    position: int
    length: int
    fact: str | None

    @property
    def found(self) -> bool:
        return self.fact is not None


def new_slot_marker() -> str:
    # Unique per operation, so no stored fact can ever equal it.
    return f"{SLOT_MARKER_PREFIX}{uuid.uuid4().hex}"


def get_fact_sync(store: ListStore, topic: str, index: int) -> FactLookup:
    length = store.length(topic)
    position = wrap_index(index, length)
    if position > length:
        return FactLookup(position=position, length=length, fact=None)
    fact = store.get_at(topic, position - 1)
    return FactLookup(position=position, length=length, fact=fact)


def add_fact_sync(store: ListStore, topic: str, index: int | None, fact: str) -> FactAdded:
    """Insert *fact* so that it ends up at *index*, or append it.

    An absent index, or one that resolves past the last entry, appends. Any
    other position is filled by a single watched transaction that parks a
    marker in the target slot, inserts the fact before the marker and then
    restores the displaced entry over the marker.
    """
    if not str(fact or "").strip():
        raise InvalidFact("fact must not be empty")

    length = store.length(topic)
    if index is None or wrap_index(index, length) >= length + 1:
        new_length = store.append(topic, fact)
        return FactAdded(position=new_length, length=new_length)

    def _insert(tx: ListTransaction) -> FactAdded:
        current = tx.length(topic)
        position = wrap_index(index, current)
        if position >= current + 1:
            tx.multi()
            tx.append(topic, fact)
            return FactAdded(position=current + 1, length=current + 1)

        displaced = tx.get_at(topic, position - 1)
        marker = new_slot_marker()
        tx.multi()
        tx.set_at(topic, position - 1, marker)
        tx.insert_before(topic, marker, fact)
        tx.set_at(topic, position, displaced)
        return FactAdded(position=position, length=current + 1)

    return store.run_transaction([topic], _insert)


def delete_fact_sync(store: ListStore, topic: str, index: int) -> FactDeleted:
    """Remove the entry at *index* and return it.

    ``fact`` is None when the topic is empty or the index resolves past the
    end; ``length`` is then the unchanged length.
    """

    def _delete(tx: ListTransaction) -> FactDeleted:
        length = tx.length(topic)
        position = wrap_index(index, length)
        if position > length:
            return FactDeleted(position=position, length=length, fact=None)

        fact = tx.get_at(topic, position - 1)
        if fact is None:
            return FactDeleted(position=position, length=length, fact=None)

        marker = new_slot_marker()
        tx.multi()
        tx.set_at(topic, position - 1, marker)
        tx.remove_by_value(topic, marker)
        return FactDeleted(position=position, length=length - 1, fact=fact)

    return store.run_transaction([topic], _delete)
