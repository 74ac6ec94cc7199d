"""Configuration contract for the curation tooling."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dockrun.errors import ConfigError

REPO_CHECK_MODES = ("block", "warn")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    log_json: int = Field(alias="LOG_JSON", default=0)

    github_token: str = Field(alias="GITHUB_TOKEN", default="")
    github_output: str = Field(alias="GITHUB_OUTPUT", default="")
    github_api_base_url: str = Field(alias="GITHUB_API_BASE_URL", default="https://api.github.com")
    github_timeout_seconds: float = Field(alias="GITHUB_TIMEOUT_SECONDS", default=15.0)
    github_rate_limit_wait_seconds: float = Field(
        alias="GITHUB_RATE_LIMIT_WAIT_SECONDS", default=60.0
    )
    github_rate_limit_max_retries: int = Field(alias="GITHUB_RATE_LIMIT_MAX_RETRIES", default=10)

    commands_dir: str = Field(alias="COMMANDS_DIR", default="commands")
    repo_index_path: str = Field(alias="REPO_INDEX_PATH", default=".github/repo-index.json")
    readme_path: str = Field(alias="README_PATH", default="README.md")
    validation_results_path: str = Field(
        alias="VALIDATION_RESULTS_PATH", default=".github/validation-results.json"
    )

    # block: a failed repository existence check fails validation; warn: log only
    repo_check_mode: str = Field(alias="REPO_CHECK_MODE", default="block")

    def resolve(self, root: Path, configured: str) -> Path:
        path = Path(configured)
        if path.is_absolute():
            return path
        return root / path


def validate_settings(settings: Settings) -> None:
    _logger = logging.getLogger(__name__)

    problems: list[str] = []
    if settings.repo_check_mode not in REPO_CHECK_MODES:
        problems.append(f"REPO_CHECK_MODE(one of {'|'.join(REPO_CHECK_MODES)})")
    if settings.github_rate_limit_wait_seconds < 0:
        problems.append("GITHUB_RATE_LIMIT_WAIT_SECONDS(>= 0)")
    if settings.github_rate_limit_max_retries < 0:
        problems.append("GITHUB_RATE_LIMIT_MAX_RETRIES(>= 0)")
    if settings.github_timeout_seconds <= 0:
        problems.append("GITHUB_TIMEOUT_SECONDS(> 0)")
    if not settings.commands_dir.strip():
        problems.append("COMMANDS_DIR")
    if not settings.github_api_base_url.startswith(("http://", "https://")):
        problems.append("GITHUB_API_BASE_URL(http or https URL required)")

    if problems:
        keys = ", ".join(sorted(set(problems)))
        raise ConfigError(f"invalid configuration: {keys}")

    if settings.app_env == "prod" and not settings.github_token.strip():
        _logger.warning(
            "GITHUB_TOKEN is not set; GitHub API calls are unauthenticated and rate limited"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
