from __future__ import annotations

import os
import re


def parse_id_set(raw: str | None) -> set[int]:
    if not raw:
        return set()
    out: set[int] = set()
    for tok in re.split(r"[\s,;]+", raw.strip()):
        if not tok:
            continue
        if re.fullmatch(r"\d{8,22}", tok):
            out.add(int(tok))
    return out


def env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() or default


def env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        print(f"[CFG] invalid {name}={raw!r}; falling back to {default!r}")
        return default
    if value < minimum:
        print(f"[CFG] {name}={value} is below {minimum}; falling back to {default!r}")
        return default
    return value


def resolve_allowed_channel_ids(default_ids: set[int]) -> set[int]:
    env_ids = parse_id_set(os.getenv("LEARNDB_ALLOWED_CHANNEL_IDS"))
    return env_ids if env_ids else set(default_ids)
