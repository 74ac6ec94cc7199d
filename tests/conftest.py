import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from dockrun.config import get_settings
from dockrun.github import GitHubClient

VALID_COMMAND = """---
repo: "https://github.com/nginx/nginx"
category: "Web"
logo: "https://nginx.org/nginx.png"
---

# Nginx

High performance web server and reverse proxy.

## Docker Run Command

```bash
docker run -d \\
  --name nginx \\
  -p 8080:80 \\
  nginx:1.25
```
"""


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for key in (
        "APP_ENV",
        "GITHUB_TOKEN",
        "GITHUB_OUTPUT",
        "GITHUB_API_BASE_URL",
        "REPO_CHECK_MODE",
        "REPO_INDEX_PATH",
        "README_PATH",
        "VALIDATION_RESULTS_PATH",
        "COMMANDS_DIR",
        "LOG_JSON",
        "GITHUB_ACTIONS",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GITHUB_RATE_LIMIT_WAIT_SECONDS", "0")
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def valid_command() -> str:
    return VALID_COMMAND


@pytest.fixture
def write_command(tmp_path: Path) -> Callable[[str, str], str]:
    """Write a command file under tmp_path and return its relative path."""

    def _write(app: str, text: str) -> str:
        relative = f"commands/{app}/docker-run.md"
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return relative

    return _write


@pytest.fixture
def github_factory() -> Callable[..., GitHubClient]:
    """Build a GitHubClient answering from ``routes`` (path -> status or (status, json))."""

    def _factory(
        routes: dict[str, object] | None = None,
        *,
        calls: list[str] | None = None,
        sleeps: list[float] | None = None,
        **kwargs: object,
    ) -> GitHubClient:
        table = routes or {}

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request.url.path)
            answer = table.get(request.url.path, 404)
            if callable(answer):
                answer = answer()
            if isinstance(answer, tuple):
                status, payload = answer
                return httpx.Response(status, json=payload)
            return httpx.Response(int(answer), json={})

        def fake_sleep(seconds: float) -> None:
            if sleeps is not None:
                sleeps.append(seconds)

        return GitHubClient(
            transport=httpx.MockTransport(handler),
            sleep=fake_sleep,
            **kwargs,
        )

    return _factory
