"""Classified errors raised while interpreting git output.

Process failures (non-zero exit) are raised by the shell gateway as
ShellError and are never re-classified here.
"""


class GitError(RuntimeError):
    """Git produced output that indicates failure or could not be understood.

    Attributes:
        output: The offending git output, when available
    """

    def __init__(self, message: str, *, output: str | None = None) -> None:
        super().__init__(message)
        self.output = output


class BranchError(GitError):
    """Unrecognized output from `git branch`."""


class TagError(GitError):
    """Invalid tag input."""


class CommitError(GitError):
    """Unrecognized output from `git log`."""


class ConfigError(ValueError):
    """config.toml is malformed or holds a value of the wrong kind."""
