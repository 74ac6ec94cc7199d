"""Shape of the ``docker run`` command: present, well prefixed, publishes a port."""

from __future__ import annotations

from dockrun.docker import (
    DOCKER_RUN_PREFIX,
    extract_docker_run_command,
    has_loose_port_mapping,
    has_port_mapping,
)
from dockrun.errors import CommandSyntaxError
from dockrun.shell import split_command_line


def validate_docker_command(text: str, file_path: str) -> str | None:
    command = extract_docker_run_command(text)
    if command is None:
        return f"No Docker run command found in a bash code block in {file_path}"
    if not command.startswith(DOCKER_RUN_PREFIX):
        return f"Invalid Docker run command in {file_path}"

    try:
        published = has_port_mapping(split_command_line(command))
    except CommandSyntaxError:
        # the image tag check reports the quoting problem
        published = has_loose_port_mapping(command)
    if not published:
        return (
            "Docker run command must include a port mapping using -p or --publish "
            f"in {file_path}"
        )
    return None
