from __future__ import annotations

import asyncio

from learn.backends import StoreError
from learn.parser import LearnAdd
from learn.parser import LearnCommand
from learn.parser import LearnDelete
from learn.parser import LearnQuery
from learn.replies import ReplyTemplates
from learn.store import InvalidFact
from learn.store import add_fact_sync
from learn.store import delete_fact_sync
from learn.store import get_fact_sync


def _render_failure(verb: str, topic: str, exc: Exception, templates: ReplyTemplates) -> str:
    if isinstance(exc, StoreError):
        print(f"[Learn] action={verb} result=store_error topic={topic!r} error={exc}")
    elif isinstance(exc, InvalidFact):
        print(f"[Learn] action={verb} result=rejected topic={topic!r} error={exc}")
    else:
        print(f"[Learn] action={verb} result=error topic={topic!r} error={type(exc).__name__}: {exc}")
    return templates.render_failed(verb, exc)


async def learn_add(
    topic: str,
    index: int | None,
    fact: str,
    *,
    store_lock,
    store,
    templates: ReplyTemplates,
) -> str:
    try:
        async with store_lock:
            added = await asyncio.to_thread(add_fact_sync, store, topic, index, fact)
    except Exception as e:
        return _render_failure("add", topic, e, templates)

    print(f"[Learn] action=add result=ok topic={topic!r} position={added.position} length={added.length}")
    return templates.render_added(topic, added.position, added.length)


async def learn_del(
    topic: str,
    index: int,
    *,
    store_lock,
    store,
    templates: ReplyTemplates,
) -> str:
    try:
        async with store_lock:
            deleted = await asyncio.to_thread(delete_fact_sync, store, topic, index)
    except Exception as e:
        return _render_failure("delete", topic, e, templates)

    if deleted.fact is None:
        print(f"[Learn] action=delete result=not_found topic={topic!r} index={index} length={deleted.length}")
        return templates.render_missing(topic, deleted.position, deleted.length)

    print(f"[Learn] action=delete result=ok topic={topic!r} position={deleted.position} length={deleted.length}")
    return templates.render_deleted(topic, index, deleted.position, deleted.fact)


async def learn_get(
    topic: str,
    index: int,
    *,
    store_lock,
    store,
    templates: ReplyTemplates,
) -> str:
    try:
        async with store_lock:
            lookup = await asyncio.to_thread(get_fact_sync, store, topic, index)
    except Exception as e:
        return _render_failure("get", topic, e, templates)

    if lookup.fact is None:
        return templates.render_missing(topic, lookup.position, lookup.length)
    return templates.render_found(topic, lookup.position, lookup.length, lookup.fact)


async def handle_mutation_command(
    command: LearnCommand | None,
    *,
    store_lock,
    store,
    templates: ReplyTemplates,
) -> str:
    """Apply a parsed learn command and return the reply text ("" for no reply)."""
    if isinstance(command, LearnAdd):
        return await learn_add(
            command.topic,
            command.index,
            command.fact,
            store_lock=store_lock,
            store=store,
            templates=templates,
        )
    if isinstance(command, LearnDelete):
        return await learn_del(
            command.topic,
            command.index,
            store_lock=store_lock,
            store=store,
            templates=templates,
        )
    return ""


async def handle_query(
    query: LearnQuery | None,
    *,
    store_lock,
    store,
    templates: ReplyTemplates,
) -> str:
    if query is None:
        return ""
    return await learn_get(
        query.topic,
        query.index,
        store_lock=store_lock,
        store=store,
        templates=templates,
    )
