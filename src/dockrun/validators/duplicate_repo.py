"""A repository may only back one command directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from dockrun.frontmatter import parse_front_matter
from dockrun.repo_index.types import RepoIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DuplicateCheck:
    error: str | None = None
    is_update: bool = False


def validate_duplicate_repo(
    text: str, file_path: str, index: RepoIndex | None
) -> DuplicateCheck:
    front_matter = parse_front_matter(text)
    repo_url = front_matter.get("repo")
    if not front_matter.present or not isinstance(repo_url, str) or not repo_url:
        return DuplicateCheck()

    if index is None:
        logger.warning("Repo index file not found, skipping duplicate check for %s", file_path)
        return DuplicateCheck()

    existing = index.get(repo_url)
    if existing is None:
        return DuplicateCheck()

    current_dir = str(PurePosixPath(file_path).parent)
    if existing.path == current_dir:
        return DuplicateCheck(is_update=True)
    return DuplicateCheck(
        error=(
            f'Repository URL "{repo_url}" is already used in {existing.path}. '
            "Each repository can only be added once."
        )
    )
