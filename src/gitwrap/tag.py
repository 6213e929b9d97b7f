"""Tag value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gitwrap.errors import TagError

if TYPE_CHECKING:
    from gitwrap.repository import Repository


@dataclass(frozen=True, order=True)
class Tag:
    """A git tag in a repository."""

    repo: Repository = field(compare=False, repr=False)
    name: str

    def __post_init__(self) -> None:
        if not self.name or self.name != self.name.strip():
            raise TagError(f"Invalid tag name {self.name!r}")

    def exists(self) -> bool:
        """Check whether git still lists this tag."""
        return self in self.repo.tags()

    def delete(self) -> bool:
        """Delete the tag from the local repository."""
        self.repo.vet_output(["tag", "-d", self.name])
        return True

    def __str__(self) -> str:
        return self.name


def parse_tag_names(output: str) -> list[str]:
    """Extract tag names from `git tag` output, in listing order."""
    return [line.strip() for line in output.splitlines() if line.strip()]
