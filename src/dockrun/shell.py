"""Quote-aware splitting of shell command lines."""

from __future__ import annotations

import re
import shlex

from dockrun.errors import CommandSyntaxError

_CONTINUATION_RE = re.compile(r"[ \t]*\\[ \t]*\n[ \t]*")


def join_continuations(command: str) -> str:
    """Collapse backslash-newline continuations into single spaces."""
    return _CONTINUATION_RE.sub(" ", command.replace("\r\n", "\n"))


def split_command_line(command: str) -> list[str]:
    """Split a command line into words the way a POSIX shell would.

    Line continuations are joined first, quotes are honoured and removed, and
    whitespace inside quotes is kept. An unterminated quote raises
    CommandSyntaxError.
    """
    lexer = shlex.shlex(join_continuations(command), posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as exc:
        raise CommandSyntaxError(f"cannot split command line: {exc}") from exc
