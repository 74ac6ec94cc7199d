"""GitHub Actions step outputs."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dockrun.config import Settings

logger = logging.getLogger(__name__)


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def set_output(name: str, value: object, *, settings: Settings) -> None:
    line = f"{name}={_format_value(value)}"
    if settings.github_output.strip():
        with Path(settings.github_output).open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
        logger.info("Output %s set for GitHub Actions", line)
        return
    logger.warning("GITHUB_OUTPUT environment variable not set, using legacy set-output")
    click.echo(f"::set-output name={name}::{_format_value(value)}")
