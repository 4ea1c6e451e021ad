from __future__ import annotations

from config.defaults import COMMAND_PREFIX
from config.defaults import QUERY_PREFIX


def extract_query_payload(content: str) -> str | None:
    text = content or ""
    if not text.startswith(QUERY_PREFIX):
        return None
    payload = text[len(QUERY_PREFIX):]
    return payload if payload.strip() else None


def classify_message_route(content: str) -> str:
    if (content or "").lstrip().startswith(COMMAND_PREFIX):
        return "command"
    if extract_query_payload(content) is not None:
        return "query"
    return "ignore"
