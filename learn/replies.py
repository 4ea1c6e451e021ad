from __future__ import annotations

import string
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

EMPTY_TOPIC_SHRUG = "¯\\\\(°\u200b_o)/¯"

TEMPLATE_FIELDS: dict[str, set[str]] = {
    "added": {"topic", "position", "length"},
    "deleted": {"topic", "index", "position", "fact"},
    "found": {"topic", "position", "length", "fact"},
    "empty_topic": {"topic"},
    "out_of_range": {"topic", "length", "position"},
    "failed": {"verb", "error"},
}


@dataclass(slots=True)
class ReplyTemplates:
    version: str = "learn_replies_v1"
    added: str = "Added {topic}[{position}/{length}]."
    deleted: str = "Deleted {topic}[{index}]: {fact}."
    found: str = "{topic}[{position}/{length}]: {fact}"
    empty_topic: str = "{topic}? " + EMPTY_TOPIC_SHRUG
    out_of_range: str = "{topic} has only {length} entries."
    failed: str = "Couldn't {verb}: {error}."

    def render_added(self, topic: str, position: int, length: int) -> str:
        return self.added.format(topic=topic, position=position, length=length)

    def render_deleted(self, topic: str, index: int, position: int, fact: str) -> str:
        return self.deleted.format(topic=topic, index=index, position=position, fact=fact)

    def render_found(self, topic: str, position: int, length: int, fact: str) -> str:
        return self.found.format(topic=topic, position=position, length=length, fact=fact)

    def render_missing(self, topic: str, position: int, length: int) -> str:
        """Reply for a lookup that hit nothing: empty topic vs. index past the end."""
        if length == 0:
            return self.empty_topic.format(topic=topic)
        return self.out_of_range.format(topic=topic, length=length, position=position)

    def render_failed(self, verb: str, error: object) -> str:
        text = str(error).strip().rstrip(".") or type(error).__name__
        return self.failed.format(verb=verb, error=text)


# Stand-in values matching the types each render_* call passes.
SAMPLE_VALUES: dict[str, Any] = {
    "topic": "colors",
    "fact": "red",
    "verb": "add",
    "error": "timeout",
    "index": 1,
    "position": 1,
    "length": 1,
}


def _unknown_placeholders(template: str, allowed: set[str]) -> set[str]:
    names: set[str] = set()
    for _literal, name, _spec, _conv in string.Formatter().parse(template):
        if name is None:
            continue
        # "{fact!r}" / "{topic.upper}" still name the base field.
        base = name.split(".", 1)[0].split("[", 1)[0]
        names.add(base)
    return {n for n in names if n not in allowed}


def _template_problem(template: str, allowed: set[str]) -> str | None:
    try:
        unknown = _unknown_placeholders(template, allowed)
    except ValueError:
        return "malformed"
    if unknown:
        return ", ".join(sorted(unknown))
    try:
        template.format(**{name: SAMPLE_VALUES[name] for name in allowed})
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        return f"does not render: {exc}"
    return None


def load_reply_templates(path: str | Path | None) -> tuple[ReplyTemplates, str | None]:
    """
    Returns (templates, warning_message). warning_message is None on clean load.
    """
    defaults = ReplyTemplates()
    if not path:
        return (defaults, "Reply templates path missing; using built-in defaults.")

    p = Path(path)
    if not p.exists():
        return (defaults, f"Reply templates file not found at {p}; using built-in defaults.")

    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except Exception as exc:
        return (defaults, f"Failed to read reply templates from {p}: {exc}; using built-in defaults.")

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return (defaults, f"Invalid reply templates format in {p}; using built-in defaults.")

    values: dict[str, Any] = {"version": str(payload.get("version") or defaults.version)}
    rejected: list[str] = []
    for f in fields(ReplyTemplates):
        if f.name == "version":
            continue
        raw = payload.get(f.name)
        if raw is None:
            values[f.name] = getattr(defaults, f.name)
            continue
        text = str(raw)
        problem = _template_problem(text, TEMPLATE_FIELDS[f.name])
        if problem:
            rejected.append(f"{f.name} ({problem})")
            values[f.name] = getattr(defaults, f.name)
        else:
            values[f.name] = text

    templates = ReplyTemplates(**values)
    if rejected:
        return (
            templates,
            f"Reply templates in {p} rejected: {'; '.join(rejected)}; "
            "using built-in defaults for those.",
        )
    return (templates, None)
