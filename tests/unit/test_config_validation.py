import logging
from pathlib import Path

import pytest

from dockrun.config import get_settings, validate_settings
from dockrun.errors import ConfigError


def test_defaults_match_ci_layout() -> None:
    settings = get_settings()
    assert settings.repo_index_path == ".github/repo-index.json"
    assert settings.validation_results_path == ".github/validation-results.json"
    assert settings.readme_path == "README.md"
    assert settings.repo_check_mode == "block"
    validate_settings(settings)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("REPO_CHECK_MODE", "warn")
    monkeypatch.setenv("GITHUB_RATE_LIMIT_MAX_RETRIES", "2")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.github_token == "ghp_test"
    assert settings.repo_check_mode == "warn"
    assert settings.github_rate_limit_max_retries == 2


def test_invalid_values_are_reported_together(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPO_CHECK_MODE", "maybe")
    monkeypatch.setenv("GITHUB_RATE_LIMIT_WAIT_SECONDS", "-1")
    monkeypatch.setenv("GITHUB_API_BASE_URL", "ftp://example.com")
    get_settings.cache_clear()
    with pytest.raises(ConfigError) as excinfo:
        validate_settings(get_settings())
    message = str(excinfo.value)
    assert "REPO_CHECK_MODE" in message
    assert "GITHUB_RATE_LIMIT_WAIT_SECONDS" in message
    assert "GITHUB_API_BASE_URL" in message


def test_prod_without_token_only_warns(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    get_settings.cache_clear()
    with caplog.at_level(logging.WARNING):
        validate_settings(get_settings())
    assert "GITHUB_TOKEN is not set" in caplog.text


def test_resolve_relative_and_absolute(tmp_path: Path) -> None:
    settings = get_settings()
    assert settings.resolve(tmp_path, "README.md") == tmp_path / "README.md"
    absolute = tmp_path / "elsewhere" / "index.json"
    assert settings.resolve(Path("/unused"), str(absolute)) == absolute
