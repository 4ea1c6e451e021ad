from __future__ import annotations

import discord

from config.defaults import DISCORD_MAX_MESSAGE_LEN

# Tried in order; the first one found inside the limit wins.
_SPLIT_SEPARATORS = ("\n\n", "\n", " ")


def _split_point(text: str, limit: int) -> int:
    for sep in _SPLIT_SEPARATORS:
        at = text.rfind(sep, 0, limit)
        if at > 0:
            return at
    return limit


def chunk_text(text: str, limit: int = DISCORD_MAX_MESSAGE_LEN) -> list[str]:
    """Split a reply into Discord-sized pieces, breaking on whitespace where possible."""
    rest = text or ""
    chunks: list[str] = []
    while len(rest) > limit:
        cut = _split_point(rest, limit)
        head, rest = rest[:cut].strip(), rest[cut:].strip()
        if head:
            chunks.append(head)
    if rest or not chunks:
        chunks.append(rest)
    return chunks


async def send_chunked(channel: discord.abc.Messageable, text: str) -> None:
    if not (text or "").strip():
        return
    for part in chunk_text(text):
        await channel.send(part)
