"""Markdown body checks: title heading and the Docker Run Command section."""

from __future__ import annotations

import re

from dockrun.frontmatter import strip_front_matter

H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
RUN_SECTION_RE = re.compile(r"^#{1,2}\s+Docker Run Command\s*$", re.MULTILINE)


def validate_content_structure(text: str, file_path: str) -> str | None:
    if not text.strip():
        return f"File {file_path} is empty"

    body = strip_front_matter(text)
    if not body:
        return f"File {file_path} has no content after the front matter"
    if not H1_RE.search(body):
        return f"Missing application name (H1 heading) in {file_path}"
    # description between the title and the command section is optional
    if not RUN_SECTION_RE.search(body):
        return f'Missing "Docker Run Command" section in {file_path}'
    return None
