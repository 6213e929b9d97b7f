"""Detection of git failures that exit with status zero.

Some git/platform combinations print fatal errors yet still report success.
Output from commands that are expected to succeed quietly is scanned for
known failure markers before the result is trusted.
"""

import re
from collections.abc import Iterable

from gitwrap.errors import GitError

VET_ERROR_MESSAGE = "Git exited zero but an error was detected in output."


def find_error_line(output: str, patterns: Iterable[str]) -> str | None:
    """Return the first line of output matching any pattern, or None.

    Matching is case-sensitive and applied to each line separately, so `^`
    anchors to the start of a line.
    """
    compiled = [re.compile(p) for p in patterns]
    for line in output.splitlines():
        for pattern in compiled:
            if pattern.search(line):
                return line
    return None


def vet_output(output: str, patterns: Iterable[str]) -> None:
    """Raise GitError if output contains a known failure marker.

    Args:
        output: Combined stdout/stderr from a git command that exited zero
        patterns: Regular expressions identifying error lines

    Raises:
        GitError: If any line matches; `output` holds the full text
    """
    if find_error_line(output, patterns) is not None:
        raise GitError(VET_ERROR_MESSAGE, output=output)
