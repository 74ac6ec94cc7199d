"""dockrun exception hierarchy.

All dockrun-specific exceptions inherit from DockrunError so the CLI can turn
infrastructure failures into a clean non-zero exit. Submission defects are not
exceptions: validators report them as plain error strings.
"""


class DockrunError(Exception):
    """Base exception for all dockrun errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class ConfigError(DockrunError):
    """Invalid or missing configuration."""


class GitHubError(DockrunError):
    """Error communicating with the GitHub REST API."""

    def __init__(
        self,
        message: str = "",
        *,
        status_code: int | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, retryable=retryable)
        self.status_code = status_code


class RateLimitError(GitHubError):
    """GitHub kept answering 403 after every back-off retry."""

    def __init__(self, message: str = "", *, status_code: int | None = 403) -> None:
        super().__init__(message, status_code=status_code, retryable=True)


class IndexFileError(DockrunError):
    """The repository index file exists but cannot be used."""


class MarkerError(DockrunError):
    """A generated-content marker pair is missing or out of order."""


class CommandSyntaxError(DockrunError):
    """A docker run command line cannot be split into words."""
