"""Parsing for `git submodule status` and `git show` output."""

import re

from gitwrap.errors import GitError

# SHA-256 repositories report 64-digit object names.
OBJECT_NAME = r"(?:[0-9a-fA-F]{64}|[0-9a-fA-F]{40})"

# Status column: ' ' in sync, '+' different commit, '-' uninitialized, 'U' conflicts.
SUBMODULE_STATUS = re.compile(rf"^[+\- U]?{OBJECT_NAME} (\S+)")

SHOW_COMMIT = re.compile(rf"^commit ({OBJECT_NAME})\b")


def parse_submodule_paths(output: str) -> list[str]:
    """Extract submodule paths from `git submodule status` output.

    Raises:
        GitError: On the first line that is not a submodule status line
    """
    paths: list[str] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        match = SUBMODULE_STATUS.match(line)
        if match is None:
            raise GitError(
                f"Unexpected output from submodule status: {line!r}",
                output=output,
            )
        paths.append(match.group(1))
    return paths


def parse_show_sha(output: str) -> str:
    """Find the commit hash in `git show` output.

    Raises:
        GitError: If no 'commit <sha>' line is present
    """
    for line in output.splitlines():
        match = SHOW_COMMIT.match(line)
        if match is not None:
            return match.group(1)
    raise GitError("Unable to locate commit in show output.", output=output)
