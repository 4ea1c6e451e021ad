from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable

from learn.replies import ReplyTemplates


def _default_true(*args, **kwargs) -> bool:
    return True


@dataclass(frozen=True)
class CommandDeps:
    store_lock: Any = None
    store: Any = None
    reply_templates: ReplyTemplates = field(default_factory=ReplyTemplates)
    send_chunked: Callable | None = None


@dataclass(frozen=True)
class CommandGates:
    in_allowed_channel: Callable[[Any], bool] = _default_true
    allowed_channel_ids: set[int] = field(default_factory=set)
