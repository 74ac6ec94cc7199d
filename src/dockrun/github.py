"""Synchronous GitHub REST client for repository existence and metadata lookups."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx

from dockrun.config import Settings
from dockrun.errors import GitHubError, RateLimitError

logger = logging.getLogger(__name__)

GITHUB_REPO_URL_RE = re.compile(r"^https://github\.com/([^/]+)/([^/]+)$")
USER_AGENT = "dockrun-indexer/1.0"


@dataclass(frozen=True, slots=True)
class RepositoryCheck:
    url: str
    exists: bool
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RepoInfo:
    name: str
    description: str


def parse_repo_url(url: str) -> tuple[str, str]:
    match = GITHUB_REPO_URL_RE.match(url.strip())
    if match is None:
        raise ValueError(f"not a GitHub repository URL: {url}")
    return match.group(1), match.group(2)


def default_repo_info(repo: str) -> RepoInfo:
    return RepoInfo(name=repo, description=f"Repository for {repo}")


def _github_headers(token: str) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class GitHubClient:
    def __init__(
        self,
        *,
        token: str = "",
        base_url: str = "https://api.github.com",
        timeout_s: float = 15.0,
        rate_limit_wait_s: float = 60.0,
        max_rate_limit_retries: int = 10,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.rate_limit_wait_s = rate_limit_wait_s
        self.max_rate_limit_retries = max_rate_limit_retries
        self._sleep = sleep
        self._client = httpx.Client(
            headers=_github_headers(token.strip()),
            timeout=timeout_s,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> GitHubClient:
        return cls(
            token=settings.github_token,
            base_url=settings.github_api_base_url,
            timeout_s=settings.github_timeout_seconds,
            rate_limit_wait_s=settings.github_rate_limit_wait_seconds,
            max_rate_limit_retries=settings.github_rate_limit_max_retries,
            transport=transport,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, *, retry_rate_limit: bool = True) -> httpx.Response:
        url = f"{self.base_url}{path}"
        attempts = 0
        while True:
            try:
                response = self._client.get(url)
            except httpx.HTTPError as exc:
                raise GitHubError(f"GitHub request to {url} failed: {exc}") from exc
            if response.status_code != 403:
                return response
            if not retry_rate_limit:
                raise RateLimitError(f"GitHub API rate limit reached: {url}")
            if attempts >= self.max_rate_limit_retries:
                raise RateLimitError(
                    f"GitHub API still rate limited after {attempts} retries: {url}"
                )
            attempts += 1
            logger.warning(
                "GitHub API rate limit reached. Waiting %s seconds before retry %d/%d",
                self.rate_limit_wait_s,
                attempts,
                self.max_rate_limit_retries,
            )
            self._sleep(self.rate_limit_wait_s)

    def get_repository(
        self, owner: str, repo: str, *, retry_rate_limit: bool = True
    ) -> dict[str, Any] | None:
        """Return the repository payload, or None when GitHub answers 404.

        With ``retry_rate_limit`` false a 403 raises RateLimitError at once
        instead of waiting out the back-off.
        """
        response = self._get(f"/repos/{owner}/{repo}", retry_rate_limit=retry_rate_limit)
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise GitHubError(
                f"GitHub API returned status code {response.status_code}",
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise GitHubError(f"Failed to parse GitHub API response: {exc}") from exc
        if not isinstance(payload, dict):
            raise GitHubError("GitHub repository payload is not an object")
        return payload

    def check_repository(self, url: str) -> RepositoryCheck:
        # validation reports a rate limited check immediately; only indexing waits
        try:
            owner, repo = parse_repo_url(url)
            payload = self.get_repository(owner, repo, retry_rate_limit=False)
        except ValueError as exc:
            return RepositoryCheck(url=url, exists=False, error=str(exc))
        except GitHubError as exc:
            return RepositoryCheck(
                url=url, exists=False, status_code=exc.status_code, error=str(exc)
            )
        if payload is None:
            return RepositoryCheck(url=url, exists=False, status_code=404)
        return RepositoryCheck(url=url, exists=True, status_code=200)

    def fetch_repo_info(self, url: str) -> RepoInfo:
        owner, repo = parse_repo_url(url)
        logger.info("Fetching information for %s/%s from GitHub API", owner, repo)
        payload = self.get_repository(owner, repo)
        if payload is None:
            logger.warning("Repository not found: %s", url)
            return default_repo_info(repo)
        defaults = default_repo_info(repo)
        name = payload.get("name")
        description = payload.get("description")
        return RepoInfo(
            name=name if isinstance(name, str) and name else defaults.name,
            description=(
                description
                if isinstance(description, str) and description
                else defaults.description
            ),
        )
