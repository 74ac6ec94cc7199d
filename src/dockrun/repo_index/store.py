"""Read and write the persisted repository index JSON file."""

from __future__ import annotations

import json
from pathlib import Path

from dockrun.errors import IndexFileError
from dockrun.repo_index.types import IndexEntry, RepoIndex


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def index_from_dict(payload: dict[str, object]) -> RepoIndex:
    index = RepoIndex()
    for url, raw in payload.items():
        # older index files mapped the URL straight to the command directory
        if isinstance(raw, str):
            index.entries[url] = IndexEntry(path=raw)
            continue
        if not isinstance(raw, dict):
            raise IndexFileError(f"index entry for {url} must be an object")
        index.entries[url] = IndexEntry(
            path=str(raw.get("path") or ""),
            category=_optional_str(raw.get("category")),
            name=_optional_str(raw.get("name")),
            description=_optional_str(raw.get("description")),
        )
    return index


def load_repo_index(path: Path) -> RepoIndex | None:
    """Load the index, or return None when the file does not exist."""
    if not path.exists():
        return None
    try:
        decoded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise IndexFileError(f"cannot parse index file {path}: {exc}") from exc
    if not isinstance(decoded, dict):
        raise IndexFileError(f"index file {path} must contain a JSON object")
    return index_from_dict(decoded)


def write_repo_index(index: RepoIndex, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    encoded = json.dumps(index.to_dict(), indent=2, ensure_ascii=False)
    path.write_text(encoded + "\n", encoding="utf-8")
    return path
