"""Repository index package."""

from dockrun.repo_index.store import load_repo_index, write_repo_index
from dockrun.repo_index.types import IndexEntry, RepoIndex
from dockrun.repo_index.updater import files_to_process, update_repo_index

__all__ = [
    "IndexEntry",
    "RepoIndex",
    "files_to_process",
    "load_repo_index",
    "update_repo_index",
    "write_repo_index",
]
