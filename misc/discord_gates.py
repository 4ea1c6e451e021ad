from __future__ import annotations

import discord


def _listening_ids(channel) -> set[int]:
    ids = {int(getattr(channel, "id", 0) or 0)}
    # Threads inherit their parent channel's allowlist entry.
    if isinstance(channel, discord.Thread) and channel.parent:
        ids.add(int(channel.parent.id))
    return ids


def message_in_allowed_channels(message: discord.Message, allowed_channel_ids: set[int]) -> bool:
    if not allowed_channel_ids or getattr(message, "guild", None) is None:
        return True
    return bool(_listening_ids(message.channel) & set(allowed_channel_ids))
