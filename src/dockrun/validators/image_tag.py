"""The image referenced by ``docker run`` must pin a tag."""

from __future__ import annotations

from dockrun.docker import extract_docker_run_command, find_image_reference, image_has_tag
from dockrun.errors import CommandSyntaxError
from dockrun.shell import split_command_line

SUGGESTED_TAG = "latest"


def validate_docker_image_tag(text: str, file_path: str) -> str | None:
    command = extract_docker_run_command(text)
    if command is None:
        return None

    try:
        tokens = split_command_line(command)
    except CommandSyntaxError as exc:
        return f"Cannot parse the Docker run command in {file_path}: {exc}"

    image = find_image_reference(tokens)
    if image is None:
        return f"No Docker image found in the run command in {file_path}"
    if not image_has_tag(image):
        return (
            f'Docker image "{image}" in {file_path} does not specify a tag. '
            f"Please use a specific tag (e.g., {image}:{SUGGESTED_TAG})"
        )
    return None
