"""Path shape check: commands/<app>/docker-run.md."""

from __future__ import annotations

from pathlib import PurePosixPath

COMMANDS_PREFIX = "commands/"
COMMAND_FILENAME = "docker-run.md"


def validate_file_structure(file_path: str) -> str | None:
    if not file_path.startswith(COMMANDS_PREFIX):
        return f"File {file_path} is not in the commands directory"

    parts = file_path.split("/")
    if len(parts) != 3 or not parts[1]:
        return (
            f"Invalid path structure: {file_path}. "
            "Expected format: commands/app-name/docker-run.md"
        )

    filename = PurePosixPath(file_path).name
    if filename != COMMAND_FILENAME:
        return f"Invalid filename: {filename}. Expected '{COMMAND_FILENAME}'"
    return None
