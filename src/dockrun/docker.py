"""Helpers for the ``docker run`` command embedded in command markdown files."""

from __future__ import annotations

import re
from collections.abc import Iterator

from dockrun.frontmatter import normalize_newlines

DOCKER_RUN_PREFIX = "docker run"
SHELL_FENCE_LANGS = ("bash", "sh", "shell")

_DOCKER_RUN_BLOCK_RE = re.compile(
    r"```(?:" + "|".join(SHELL_FENCE_LANGS) + r")[ \t]*\n\s*(docker\s+run\s+.+?)```",
    re.DOTALL,
)
_PORT_MAPPING_RE = re.compile(
    r"^(?:(?:\d{1,3}(?:\.\d{1,3}){3}|\[[0-9A-Fa-f:]+\]):)?"
    r"\d+(?:-\d+)?:\d+(?:-\d+)?(?:/(?:tcp|udp|sctp))?$"
)
_LOOSE_PORT_RE = re.compile(r"(?:-p|--publish)\s+\d+:\d+")

PUBLISH_FLAGS = frozenset({"-p", "--publish"})
BOOLEAN_SHORT_FLAGS = frozenset("ditPq")
BOOLEAN_LONG_FLAGS = frozenset(
    {
        "--detach",
        "--interactive",
        "--tty",
        "--rm",
        "--privileged",
        "--init",
        "--publish-all",
        "--read-only",
        "--sig-proxy",
        "--oom-kill-disable",
        "--no-healthcheck",
        "--quiet",
        "--disable-content-trust",
    }
)


def extract_docker_run_command(text: str) -> str | None:
    """Return the first ``docker run`` command found in a shell code fence."""
    match = _DOCKER_RUN_BLOCK_RE.search(normalize_newlines(text))
    if match is None:
        return None
    return match.group(1).strip()


def _flag_value_mode(token: str) -> tuple[str, bool]:
    """Return the flag name and whether its value is the following word."""
    if token.startswith("--"):
        if "=" in token:
            return token.split("=", 1)[0], False
        return token, token not in BOOLEAN_LONG_FLAGS

    bundle = token[1:]
    for position, letter in enumerate(bundle):
        if letter in BOOLEAN_SHORT_FLAGS:
            continue
        # first value-taking letter; the rest of the bundle is its attached value
        return f"-{letter}", position == len(bundle) - 1
    return token, False


def iter_run_options(tokens: list[str]) -> Iterator[tuple[str, str | None]]:
    """Yield ``(flag, value)`` pairs for the options placed before the image.

    ``tokens`` is a split command starting with ``docker run``. Boolean
    flags yield a value of None.
    """
    index = 2
    while index < len(tokens):
        token = tokens[index]
        if token == "--" or not token.startswith("-") or token == "-":
            return
        name, separate = _flag_value_mode(token)
        if separate:
            value = tokens[index + 1] if index + 1 < len(tokens) else None
            yield name, value
            index += 2
            continue
        if token.startswith("--") and "=" in token:
            yield name, token.split("=", 1)[1]
        elif not token.startswith("--") and name != token and len(name) == 2:
            attached = token[token.index(name[1]) + 1 :]
            yield name, attached or None
        else:
            yield name, None
        index += 1


def find_image_reference(tokens: list[str]) -> str | None:
    """Return the first positional argument after ``docker run`` and its options."""
    if tokens[:2] != ["docker", "run"]:
        return None
    index = 2
    while index < len(tokens):
        token = tokens[index]
        if token == "--":
            return tokens[index + 1] if index + 1 < len(tokens) else None
        if not token.startswith("-") or token == "-":
            return token
        _, separate = _flag_value_mode(token)
        index += 2 if separate else 1
    return None


def is_port_mapping(value: str) -> bool:
    return bool(_PORT_MAPPING_RE.match(value))


def has_port_mapping(tokens: list[str]) -> bool:
    return any(
        name in PUBLISH_FLAGS and value is not None and is_port_mapping(value)
        for name, value in iter_run_options(tokens)
    )


def has_loose_port_mapping(command: str) -> bool:
    """Regex fallback for commands that cannot be split into words."""
    return bool(_LOOSE_PORT_RE.search(command))


def image_has_tag(image: str) -> bool:
    """True when the image reference pins a tag or digest.

    Only a colon in the last path component is a tag; earlier colons belong
    to a registry host port (``localhost:5000/app``).
    """
    if "@" in image:
        return bool(image.split("@", 1)[1])
    last = image.rsplit("/", 1)[-1]
    name, sep, tag = last.partition(":")
    return bool(sep and name and tag)
