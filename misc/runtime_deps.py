from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from learn.replies import ReplyTemplates


@dataclass(frozen=True)
class RuntimeDeps:
    store_lock: Any
    store: Any
    reply_templates: ReplyTemplates
    send_chunked: Callable
    allowed_channel_ids: set[int]


@dataclass(frozen=True)
class RuntimeBootDeps:
    store_backend: str
    ping_store_func: Callable[[], Any]
