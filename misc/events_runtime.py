from __future__ import annotations

import asyncio

import discord
from discord.ext import commands
from learn.backends import StoreError
from learn.parser import parse_query
from learn.service import handle_query
from misc.discord_gates import message_in_allowed_channels
from misc.message_routes import classify_message_route
from misc.message_routes import extract_query_payload
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


def register_runtime_events(
    bot: commands.Bot,
    *,
    deps: RuntimeDeps,
    boot: RuntimeBootDeps,
) -> None:
    @bot.event
    async def on_ready():
        print(f"LearnDB is online as {bot.user}")
        try:
            async with deps.store_lock:
                ok = await asyncio.to_thread(boot.ping_store_func)
            print(f"[Store] backend={boot.store_backend} ping={'ok' if ok else 'failed'}")
        except StoreError as e:
            print(f"[Store] backend={boot.store_backend} ping failed: {e}")

    @bot.event
    async def on_message(message: discord.Message):
        if message.author.bot:
            return
        if not message_in_allowed_channels(message, deps.allowed_channel_ids):
            return

        route = classify_message_route(message.content)
        if route == "ignore":
            return

        print(f"[Chat] <{message.author.name}> {message.content}")
        if route == "command":
            await bot.process_commands(message)
            return

        query = parse_query(extract_query_payload(message.content) or "")
        reply = await handle_query(
            query,
            store_lock=deps.store_lock,
            store=deps.store,
            templates=deps.reply_templates,
        )
        await deps.send_chunked(message.channel, reply)
