from __future__ import annotations

from learn.replies import ReplyTemplates
from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates
from misc.commands.commands_learn import register as register_learn
from misc.discord_gates import message_in_allowed_channels
from misc.events_runtime import register_runtime_events
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


def wire_bot_runtime(
    bot,
    *,
    allowed_channel_ids: set[int],
    store,
    store_lock,
    store_backend: str,
    reply_templates: ReplyTemplates,
    send_chunked,
) -> None:
    def in_allowed_channel(ctx) -> bool:
        message = getattr(ctx, "message", None)
        if message is None:
            return not allowed_channel_ids
        return message_in_allowed_channels(message, allowed_channel_ids)

    register_learn(
        bot,
        deps=CommandDeps(
            store_lock=store_lock,
            store=store,
            reply_templates=reply_templates,
            send_chunked=send_chunked,
        ),
        gates=CommandGates(
            in_allowed_channel=in_allowed_channel,
            allowed_channel_ids=allowed_channel_ids,
        ),
    )

    register_runtime_events(
        bot,
        deps=RuntimeDeps(
            store_lock=store_lock,
            store=store,
            reply_templates=reply_templates,
            send_chunked=send_chunked,
            allowed_channel_ids=allowed_channel_ids,
        ),
        boot=RuntimeBootDeps(
            store_backend=store_backend,
            ping_store_func=store.ping,
        ),
    )
