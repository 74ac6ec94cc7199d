"""Regenerate the README application list and table of contents from the index."""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path

from dockrun.errors import MarkerError
from dockrun.repo_index.types import RepoIndex

logger = logging.getLogger(__name__)

APP_START_MARKER = "<!-- APPLICATIONS_START -->"
APP_END_MARKER = "<!-- APPLICATIONS_END -->"
TOC_START_MARKER = "<!-- TOC_START -->"
TOC_END_MARKER = "<!-- TOC_END -->"

TOC_LEADING_ITEMS = (
    "- [What is this?](#what-is-this)",
    "- [How it works](#how-it-works)",
    "- [How to contribute](#how-to-contribute)",
    "- [Community](#community)",
    "- [Applications](#applications)",
)
TOC_TRAILING_ITEMS = ("- [License](#license)",)


@dataclass(frozen=True, slots=True)
class AppListing:
    name: str
    path: str
    description: str = ""


def _sort_key(value: str) -> tuple[str, str]:
    """Locale-style ordering: accents ignored, case-insensitive, lowercase first on ties."""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), value.swapcase()


def group_by_category(index: RepoIndex) -> dict[str, list[AppListing]]:
    """Group index entries by category, both levels sorted case-insensitively."""
    grouped: dict[str, list[AppListing]] = {}
    for repo_url, entry in index:
        name = entry.name or entry.path.rstrip("/").rsplit("/", 1)[-1]
        if not entry.category:
            logger.warning(
                'Skipping app "%s" (%s) due to missing category in repo index', name, repo_url
            )
            continue
        grouped.setdefault(entry.category, []).append(
            AppListing(name=name, path=entry.path, description=entry.description or "")
        )
    return {
        category: sorted(grouped[category], key=lambda app: _sort_key(app.name))
        for category in sorted(grouped, key=_sort_key)
    }


def render_app_list(groups: dict[str, list[AppListing]]) -> str:
    sections: list[str] = []
    for category, apps in groups.items():
        lines = []
        for app in apps:
            suffix = f" - {app.description}" if app.description else ""
            lines.append(f"- [{app.name}]({app.path}/){suffix}")
        sections.append(f"### {category}\n\n" + "\n".join(lines))
    return "\n\n".join(sections).strip()


def anchor_slug(text: str) -> str:
    slug = re.sub(r"\s+", "-", text.lower())
    return re.sub(r"[^\w-]+", "", slug)


def render_toc(categories: list[str]) -> str:
    items = [
        *TOC_LEADING_ITEMS,
        *(f"  - [{category}](#{anchor_slug(category)})" for category in categories),
        *TOC_TRAILING_ITEMS,
    ]
    return "\n".join(items)


def splice_region(document: str, start: str, end: str, content: str, *, padding: str) -> str:
    """Replace the text between ``start`` and ``end``; everything else is kept."""
    start_at = document.find(start)
    end_at = document.find(end)
    if start_at == -1 or end_at == -1 or start_at >= end_at:
        raise MarkerError(f"markers '{start}' or '{end}' not found or in wrong order")
    prefix = document[: start_at + len(start)]
    suffix = document[end_at:]
    return f"{prefix}{padding}{content}{padding}{suffix}"


def render_readme(index: RepoIndex, document: str) -> str:
    groups = group_by_category(index)
    logger.info("Found categories: %s", ", ".join(groups) or "none")

    updated = splice_region(
        document, APP_START_MARKER, APP_END_MARKER, render_app_list(groups), padding="\n\n"
    )
    try:
        updated = splice_region(
            updated, TOC_START_MARKER, TOC_END_MARKER, render_toc(list(groups)), padding="\n"
        )
    except MarkerError as exc:
        logger.error("Table of contents left untouched: %s", exc)
    return updated


def update_readme(index: RepoIndex, readme_path: Path) -> bool:
    """Rewrite ``readme_path`` when its generated regions are stale."""
    original = readme_path.read_bytes().decode("utf-8")
    updated = render_readme(index, original)
    if updated == original:
        logger.info("%s is already up-to-date", readme_path)
        return False
    readme_path.write_bytes(updated.encode("utf-8"))
    logger.info("%s updated successfully", readme_path)
    return True
