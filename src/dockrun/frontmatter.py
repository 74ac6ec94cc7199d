"""YAML front matter extraction for command markdown files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import yaml

_FRONT_MATTER_RE = re.compile(r"\A---\n(.*?)\n---", re.DOTALL)


@dataclass(slots=True)
class FrontMatter:
    present: bool
    data: dict[str, object] = field(default_factory=dict)
    error: str | None = None

    def get(self, key: str) -> object:
        return self.data.get(key)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def extract_front_matter(text: str) -> str | None:
    """Return the raw YAML between the leading ``---`` fences, or None."""
    match = _FRONT_MATTER_RE.match(normalize_newlines(text))
    if match is None:
        return None
    return match.group(1)


def strip_front_matter(text: str) -> str:
    return _FRONT_MATTER_RE.sub("", normalize_newlines(text), count=1).strip()


def parse_front_matter(text: str) -> FrontMatter:
    raw = extract_front_matter(text)
    if raw is None:
        return FrontMatter(present=False)
    try:
        loaded = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        return FrontMatter(present=True, error=str(exc))
    if loaded is None:
        return FrontMatter(present=True)
    if not isinstance(loaded, dict):
        return FrontMatter(present=True, error="front matter must be a mapping of keys to values")
    return FrontMatter(present=True, data={str(key): value for key, value in loaded.items()})
