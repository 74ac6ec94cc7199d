"""Front matter schema checks and the GitHub repository existence check."""

from __future__ import annotations

import re

from dockrun.frontmatter import parse_front_matter
from dockrun.github import GitHubClient

REPO_URL_RE = re.compile(r"^https://github\.com/[^/]+/[^/]+$")
LOGO_URL_RE = re.compile(r"^https?://.+\..+$")


def _repo_url(text: str) -> str | None:
    """Return the front matter repo URL when it is well formed."""
    front_matter = parse_front_matter(text)
    repo = front_matter.get("repo")
    if isinstance(repo, str) and REPO_URL_RE.match(repo):
        return repo
    return None


def validate_front_matter(text: str, file_path: str) -> str | None:
    front_matter = parse_front_matter(text)
    if not front_matter.present:
        return f"No front matter found in {file_path}"
    if front_matter.error is not None:
        return f"Error parsing front matter in {file_path}: {front_matter.error}"

    repo = front_matter.get("repo")
    if not repo:
        return f"Missing required field 'repo' in {file_path}"
    if not isinstance(repo, str) or not REPO_URL_RE.match(repo):
        return (
            f"Invalid repository URL format in {file_path}. "
            "Should be in format https://github.com/username/repo-name"
        )

    logo = front_matter.get("logo")
    if logo and (not isinstance(logo, str) or not LOGO_URL_RE.match(logo)):
        return f"Invalid logo URL format in {file_path}"
    return None


def verify_repository(text: str, file_path: str, client: GitHubClient) -> str | None:
    """Ask GitHub whether the front matter repository exists.

    Returns None when there is no well-formed repo URL to check; the offline
    validator reports that case.
    """
    repo = _repo_url(text)
    if repo is None:
        return None
    check = client.check_repository(repo)
    if check.exists:
        return None
    if check.error is not None:
        return f"Error checking GitHub repository {repo} for {file_path}: {check.error}"
    return f"GitHub repository {repo} does not exist or is not accessible"
