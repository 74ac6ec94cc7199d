import httpx
import pytest

from dockrun.config import get_settings
from dockrun.errors import GitHubError, RateLimitError
from dockrun.github import GitHubClient, RepoInfo, parse_repo_url


def test_parse_repo_url() -> None:
    assert parse_repo_url("https://github.com/nginx/nginx") == ("nginx", "nginx")
    with pytest.raises(ValueError):
        parse_repo_url("https://example.com/nginx/nginx")


def test_fetch_repo_info_uses_api_payload(github_factory) -> None:
    client = github_factory(
        {"/repos/nginx/nginx": (200, {"name": "nginx", "description": "Web server"})}
    )
    with client:
        info = client.fetch_repo_info("https://github.com/nginx/nginx")
    assert info == RepoInfo(name="nginx", description="Web server")


def test_fetch_repo_info_defaults_missing_description(github_factory) -> None:
    client = github_factory({"/repos/acme/tool": (200, {"name": "tool", "description": None})})
    with client:
        info = client.fetch_repo_info("https://github.com/acme/tool")
    assert info == RepoInfo(name="tool", description="Repository for tool")


def test_fetch_repo_info_404_uses_defaults(github_factory) -> None:
    with github_factory({}) as client:
        info = client.fetch_repo_info("https://github.com/gone/thing")
    assert info == RepoInfo(name="thing", description="Repository for thing")


def test_rate_limit_backs_off_and_retries_same_request(github_factory) -> None:
    answers = iter([403, 403, (200, {"name": "b", "description": "d"})])
    calls: list[str] = []
    sleeps: list[float] = []
    client = github_factory(
        {"/repos/a/b": lambda: next(answers)},
        calls=calls,
        sleeps=sleeps,
        rate_limit_wait_s=60.0,
    )
    with client:
        info = client.fetch_repo_info("https://github.com/a/b")
    assert info.description == "d"
    assert calls == ["/repos/a/b"] * 3
    assert sleeps == [60.0, 60.0]


def test_rate_limit_retries_are_bounded(github_factory) -> None:
    sleeps: list[float] = []
    client = github_factory({"/repos/a/b": 403}, sleeps=sleeps, max_rate_limit_retries=2)
    with client, pytest.raises(RateLimitError):
        client.get_repository("a", "b")
    assert len(sleeps) == 2


def test_unexpected_status_raises(github_factory) -> None:
    with github_factory({"/repos/a/b": 500}) as client:
        with pytest.raises(GitHubError) as excinfo:
            client.get_repository("a", "b")
    assert excinfo.value.status_code == 500
    assert "status code 500" in str(excinfo.value)


def test_check_repository_results(github_factory) -> None:
    client = github_factory({"/repos/a/b": (200, {"name": "b"}), "/repos/a/err": 502})
    with client:
        found = client.check_repository("https://github.com/a/b")
        missing = client.check_repository("https://github.com/a/missing")
        broken = client.check_repository("https://github.com/a/err")
    assert found.exists is True
    assert missing.exists is False
    assert missing.status_code == 404
    assert missing.error is None
    assert broken.exists is False
    assert broken.status_code == 502
    assert broken.error


def test_transport_errors_become_github_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    with GitHubClient(transport=httpx.MockTransport(handler)) as client:
        check = client.check_repository("https://github.com/a/b")
        with pytest.raises(GitHubError):
            client.fetch_repo_info("https://github.com/a/b")
    assert check.exists is False
    assert "network down" in (check.error or "")


def test_token_is_sent_as_bearer(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization", "")
        seen["agent"] = request.headers.get("User-Agent", "")
        return httpx.Response(200, json={"name": "b"})

    monkeypatch.setenv("GITHUB_TOKEN", "ghp_secret")
    get_settings.cache_clear()
    client = GitHubClient.from_settings(get_settings(), transport=httpx.MockTransport(handler))
    with client:
        client.get_repository("a", "b")
    assert seen["auth"] == "Bearer ghp_secret"
    assert seen["agent"].startswith("dockrun")


def test_no_token_no_authorization_header() -> None:
    seen: dict[str, bool] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["has_auth"] = "Authorization" in request.headers
        return httpx.Response(200, json={"name": "b"})

    with GitHubClient(transport=httpx.MockTransport(handler)) as client:
        client.get_repository("a", "b")
    assert seen["has_auth"] is False


def test_check_repository_does_not_wait_on_rate_limit(github_factory) -> None:
    calls: list[str] = []
    sleeps: list[float] = []
    client = github_factory({"/repos/a/b": 403}, calls=calls, sleeps=sleeps)
    with client:
        check = client.check_repository("https://github.com/a/b")
    assert check.exists is False
    assert check.status_code == 403
    assert "rate limit" in (check.error or "")
    assert calls == ["/repos/a/b"]
    assert sleeps == []
