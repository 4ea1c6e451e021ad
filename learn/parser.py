from __future__ import annotations

import re
from dataclasses import dataclass

LEARN_ADD_RE = re.compile(r"^([^\s\[]+)(?:\[(-?\d+)\])? (.+)$")
LEARN_DEL_RE = re.compile(r"^([^\s\[]+)\[(-?\d+)\]$")
QUERY_INDEX_RE = re.compile(r"^(.+)\[(-?\d+)\]?$")

ADD_USAGE = "Usage: `!learn add <topic>[index] <fact>`"
DEL_USAGE = "Usage: `!learn del <topic>[index]`"


@dataclass(slots=True, frozen=True)
class LearnAdd:
    topic: str
    index: int | None
    fact: str


@dataclass(slots=True, frozen=True)
class LearnDelete:
    topic: str
    index: int


@dataclass(slots=True, frozen=True)
class LearnQuery:
    topic: str
    index: int = 1


LearnCommand = LearnAdd | LearnDelete


def parse_learn_add_args(raw: str) -> LearnAdd | None:
    m = LEARN_ADD_RE.match((raw or "").strip())
    if not m:
        return None
    index = int(m.group(2)) if m.group(2) is not None else None
    return LearnAdd(topic=m.group(1), index=index, fact=m.group(3))


def parse_learn_delete_args(raw: str) -> LearnDelete | None:
    m = LEARN_DEL_RE.match((raw or "").strip())
    if not m:
        return None
    return LearnDelete(topic=m.group(1), index=int(m.group(2)))


def parse_query(text: str) -> LearnQuery | None:
    topic = re.sub(r"\s+", "_", (text or "").strip())
    if not topic:
        return None
    m = QUERY_INDEX_RE.match(topic)
    if m:
        return LearnQuery(topic=m.group(1), index=int(m.group(2)))
    return LearnQuery(topic=topic, index=1)
