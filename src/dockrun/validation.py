"""Run every validator over the changed command files and aggregate the results."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from dockrun.github import GitHubClient
from dockrun.logging import bind_context, clear_context
from dockrun.repo_index.types import RepoIndex
from dockrun.validators import (
    validate_category,
    validate_content_structure,
    validate_docker_command,
    validate_docker_image_tag,
    validate_duplicate_repo,
    validate_file_structure,
    validate_front_matter,
    verify_repository,
)
from dockrun.validators.file_structure import COMMANDS_PREFIX

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FileResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    is_update: bool = False

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class ValidationReport:
    valid: bool = True
    errors: dict[str, list[str]] = field(default_factory=dict)
    updates: list[str] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)

    @property
    def has_command_changes(self) -> bool:
        return bool(self.checked)

    def to_dict(self) -> dict[str, object]:
        return {"valid": self.valid, "errors": self.errors, "updates": self.updates}


def is_command_path(file_path: str) -> bool:
    return file_path.startswith(COMMANDS_PREFIX) and not file_path.endswith("/")


def validate_file(
    file_path: str,
    *,
    root: Path,
    index: RepoIndex | None,
    client: GitHubClient | None,
    repo_check_mode: str = "block",
) -> FileResult:
    """Validate one command file.

    A wrong path is terminal. Every other check runs independently and all of
    their errors are collected.
    """
    result = FileResult()

    structure_error = validate_file_structure(file_path)
    if structure_error:
        result.errors.append(structure_error)
        return result

    path = root / file_path
    if not path.is_file():
        result.errors.append(f"File {file_path} not found")
        return result

    try:
        text = path.read_text(encoding="utf-8")

        for error in (
            validate_front_matter(text, file_path),
            validate_content_structure(text, file_path),
            validate_docker_command(text, file_path),
            validate_docker_image_tag(text, file_path),
        ):
            if error:
                result.errors.append(error)

        duplicate = validate_duplicate_repo(text, file_path, index)
        if duplicate.error:
            result.errors.append(duplicate.error)
        result.is_update = duplicate.is_update

        category_error = validate_category(text, file_path)
        if category_error:
            result.errors.append(category_error)

        if client is not None:
            repo_error = verify_repository(text, file_path, client)
            if repo_error and repo_check_mode == "warn":
                logger.warning("%s", repo_error)
                result.warnings.append(repo_error)
            elif repo_error:
                result.errors.append(repo_error)
    except (OSError, UnicodeDecodeError) as exc:
        result.errors.append(f"Error reading or processing {file_path}: {exc}")

    return result


def validate_files(
    file_paths: list[str],
    *,
    root: Path,
    index: RepoIndex | None,
    client: GitHubClient | None,
    repo_check_mode: str = "block",
) -> ValidationReport:
    report = ValidationReport()
    for file_path in file_paths:
        if not is_command_path(file_path):
            continue
        report.checked.append(file_path)
        bind_context(file=file_path)
        try:
            logger.info("Validating %s", file_path)
            result = validate_file(
                file_path,
                root=root,
                index=index,
                client=client,
                repo_check_mode=repo_check_mode,
            )
        finally:
            clear_context()

        if not result.valid:
            report.valid = False
            report.errors[file_path] = result.errors
        elif result.is_update:
            report.updates.append(file_path)
    return report


def write_validation_results(report: ValidationReport, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path
