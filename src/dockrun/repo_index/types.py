"""Types for the repository URL index."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class IndexEntry:
    path: str
    category: str | None = None
    name: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {
            "path": self.path,
            "category": self.category,
            "name": self.name,
            "description": self.description,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(slots=True)
class RepoIndex:
    """Repository URL -> IndexEntry, insertion ordered like the JSON file."""

    entries: dict[str, IndexEntry] = field(default_factory=dict)

    def __contains__(self, url: object) -> bool:
        return url in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[str, IndexEntry]]:
        return iter(self.entries.items())

    def get(self, url: str) -> IndexEntry | None:
        return self.entries.get(url)

    def set(self, url: str, entry: IndexEntry) -> bool:
        """Store ``entry`` under ``url`` and report whether anything changed."""
        changed = self.entries.get(url) != entry
        self.entries[url] = entry
        return changed

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {url: entry.to_dict() for url, entry in self.entries.items()}
