"""Submission validators. Each returns an error message or None."""

from dockrun.validators.category import validate_category
from dockrun.validators.content_structure import validate_content_structure
from dockrun.validators.docker_command import validate_docker_command
from dockrun.validators.duplicate_repo import DuplicateCheck, validate_duplicate_repo
from dockrun.validators.file_structure import validate_file_structure
from dockrun.validators.front_matter import validate_front_matter, verify_repository
from dockrun.validators.image_tag import validate_docker_image_tag

__all__ = [
    "DuplicateCheck",
    "validate_category",
    "validate_content_structure",
    "validate_docker_command",
    "validate_docker_image_tag",
    "validate_duplicate_repo",
    "validate_file_structure",
    "validate_front_matter",
    "verify_repository",
]
