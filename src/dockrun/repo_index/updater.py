"""Merge changed command files into the repository index."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path, PurePosixPath

from dockrun.errors import GitHubError
from dockrun.frontmatter import parse_front_matter
from dockrun.github import GitHubClient, RepoInfo, default_repo_info, parse_repo_url
from dockrun.repo_index.types import IndexEntry, RepoIndex

logger = logging.getLogger(__name__)

COMMAND_FILENAME = "docker-run.md"


def command_file_re(commands_dir: str = "commands") -> re.Pattern[str]:
    prefix = re.escape(commands_dir.strip("/"))
    return re.compile(rf"^{prefix}/[^/]+/{re.escape(COMMAND_FILENAME)}$")


def _run_git(args: list[str], cwd: Path) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=60,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.error("Error executing git %s: %s", " ".join(args), exc)
        return ""
    if result.returncode != 0:
        logger.error(
            "git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip()
        )
        return ""
    return result.stdout.strip()


def files_to_process(changed: str, *, root: Path, commands_dir: str = "commands") -> list[str]:
    """Resolve the command files to index.

    Uses the CI-provided whitespace separated list when present, falls back
    to the files touched by the last commit, then to every command file.
    """
    if changed.strip():
        logger.info("Processing changed files from CI input")
        return changed.split()

    logger.info("No changed files provided, falling back to git diff")
    pattern = command_file_re(commands_dir)
    diff = _run_git(["diff", "--name-only", "HEAD~1", "HEAD"], root)
    from_diff = [line.strip() for line in diff.splitlines() if pattern.match(line.strip())]
    if from_diff:
        return from_diff

    logger.info("Checking for any files in %s directory", commands_dir)
    base = root / commands_dir
    if not base.is_dir():
        return []
    return sorted(
        path.relative_to(root).as_posix() for path in base.glob(f"*/{COMMAND_FILENAME}")
    )


def _resolve_repo_info(
    client: GitHubClient, repo_url: str, existing: IndexEntry | None
) -> RepoInfo:
    try:
        return client.fetch_repo_info(repo_url)
    except GitHubError as exc:
        logger.error("Error fetching repo info for %s: %s", repo_url, exc)
        if existing is not None and existing.name and existing.description:
            return RepoInfo(name=existing.name, description=existing.description)
        return default_repo_info(repo_url.rstrip("/").rsplit("/", 1)[-1])


def update_repo_index(
    index: RepoIndex,
    files: list[str],
    *,
    root: Path,
    client: GitHubClient,
    commands_dir: str = "commands",
) -> bool:
    """Add or refresh index entries for ``files``; return whether any entry changed."""
    pattern = command_file_re(commands_dir)
    changes_made = False
    for file in files:
        if not pattern.match(file):
            continue
        logger.info("Processing %s", file)
        try:
            text = (root / file).read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Error reading %s: %s", file, exc)
            continue

        front_matter = parse_front_matter(text)
        repo_url = front_matter.get("repo")
        if not isinstance(repo_url, str) or not repo_url.strip():
            logger.warning("No repo URL in front matter of %s, skipping", file)
            continue
        repo_url = repo_url.strip()
        try:
            parse_repo_url(repo_url)
        except ValueError as exc:
            logger.warning("Skipping %s: %s", file, exc)
            continue

        category = front_matter.get("category")
        command_dir = str(PurePosixPath(file).parent)
        existing = index.get(repo_url)
        if existing is not None and existing.path != command_dir:
            logger.warning(
                "Repository URL %s already exists in %s, will be updated to %s",
                repo_url,
                existing.path,
                command_dir,
            )

        info = _resolve_repo_info(client, repo_url, existing)
        entry = IndexEntry(
            path=command_dir,
            category=category.strip() if isinstance(category, str) else None,
            name=info.name,
            description=info.description,
        )
        if index.set(repo_url, entry):
            changes_made = True
            logger.info(
                "Added/Updated %s -> %s (%s, Category: %s)",
                repo_url,
                command_dir,
                info.name,
                entry.category,
            )
    return changes_made
