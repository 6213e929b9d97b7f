"""Commit summaries parsed from `git log` output."""

import re
from dataclasses import dataclass
from datetime import UTC, datetime

from gitwrap.errors import CommitError

# Hash directive is substituted: %h (abbreviated) or %H (full).
LOG_FORMAT = "{hash} %at %aE %s"

COMMIT_INFO = re.compile(r"^([0-9A-Fa-f]+) ([0-9]+) (\S+) (.*)$")


@dataclass(frozen=True)
class Commit:
    """Summary of a single commit.

    Attributes:
        hash: Abbreviated (7 chars) or full (40 chars) commit hash
        timestamp: Author time, in UTC
        author: Author email address
        comment: Commit subject line
    """

    hash: str
    timestamp: datetime
    author: str
    comment: str

    @property
    def epoch(self) -> int:
        """Author time as a UNIX timestamp."""
        return int(self.timestamp.timestamp())

    def __str__(self) -> str:
        return f"{self.hash} {self.epoch} {self.author} {self.comment}"


def log_format(*, full_hashes: bool) -> str:
    """Build the `--format` value parsed by parse_commit_line."""
    return LOG_FORMAT.format(hash="%H" if full_hashes else "%h")


def parse_commit_line(line: str) -> Commit:
    """Parse one line of `git log --format='%h %at %aE %s'` output.

    Raises:
        CommitError: If the line does not match the expected format
    """
    text = line.rstrip("\r\n")
    match = COMMIT_INFO.match(text)
    if match is None:
        raise CommitError(f"Unrecognized commit summary {text!r}", output=line)
    return Commit(
        hash=match.group(1),
        timestamp=datetime.fromtimestamp(int(match.group(2)), tz=UTC),
        author=match.group(3),
        comment=match.group(4),
    )


def parse_log_output(output: str) -> list[Commit]:
    """Parse every non-blank line of `git log` output, preserving order."""
    return [parse_commit_line(line) for line in output.splitlines() if line.strip()]
