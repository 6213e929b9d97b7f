"""Branch value objects and `git branch` output parsing."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, overload

from gitwrap.errors import BranchError

if TYPE_CHECKING:
    from gitwrap.repository import Repository

REMOTE_PREFIX = "remotes/"

# Anything git allows in a ref name: no whitespace and none of ~ ^ : ? * [ \
# See git-check-ref-format(1).
BRANCH_NAME = r"[^\s~^:?*\[\\]+"

# Marker column: "* " current branch, "+ " checked out in another worktree.
BRANCH_INFO = re.compile(rf"^(\* |\+ |  )?({BRANCH_NAME})( -> {BRANCH_NAME})?$")

# Pseudo-branches git lists while HEAD is detached, e.g. "(HEAD detached at 1a2b3c)"
# or "(no branch, rebasing main)". Real branch names never contain a space.
DETACHED_INFO = re.compile(r"^(\* |\+ |  )?\(.*\)$")


@dataclass(frozen=True, order=True)
class Branch:
    """A local or remote git branch.

    `fullname` never carries the `remotes/` prefix; for remote branches it
    starts with the remote name (e.g., 'origin/master').
    """

    repo: Repository = field(compare=False, repr=False)
    fullname: str
    remote: bool = False

    @classmethod
    def from_name(cls, repo: Repository, name: str) -> Branch:
        """Build a branch from a bare name; a 'remotes/' prefix makes it remote."""
        if name.startswith(REMOTE_PREFIX):
            return cls(repo, name[len(REMOTE_PREFIX) :], remote=True)
        return cls(repo, name, remote=False)

    @property
    def name(self) -> str:
        """Branch name without any remote prefix."""
        if self.remote:
            return self.fullname.split("/", 1)[-1]
        return self.fullname

    @property
    def remote_name(self) -> str | None:
        """Name of the remote this branch belongs to, or None for local branches."""
        if not self.remote:
            return None
        return self.fullname.split("/", 1)[0]

    def display(self, width: int = 40) -> str:
        """Format the branch for columnar listings."""
        suffix = " (remote)" if self.remote else ""
        return f"{self.fullname.ljust(width)}{suffix}"

    def exists(self) -> bool:
        """Check whether git still lists this branch."""
        return self in self.repo.branches()

    def delete(self) -> bool:
        """Delete the branch locally, or on its remote for remote branches."""
        if self.remote:
            remote_name, name = self.fullname.split("/", 1)
            self.repo.vet_output(["push", remote_name, f":{name}"])
        else:
            self.repo.vet_output(["branch", "-D", self.fullname])
        return True

    def __str__(self) -> str:
        return self.fullname


def parse_branch_line(repo: Repository, line: str) -> Branch | None:
    """Parse one line of `git branch -a` output.

    Returns None for lines that do not name a real branch: the detached-HEAD
    pseudo-branch and symbolic aliases such as 'remotes/origin/HEAD -> origin/master'.

    Raises:
        BranchError: If the line is not recognizable branch output
    """
    text = line.rstrip("\r\n")
    if DETACHED_INFO.match(text):
        return None

    match = BRANCH_INFO.match(text)
    if match is None:
        raise BranchError(f"Unrecognized branch info {text!r}", output=line)
    if match.group(3):
        return None
    return Branch.from_name(repo, match.group(2))


def parse_merged_names(output: str) -> list[str]:
    """Extract remote branch fullnames from `git branch -r --merged` output."""
    names: list[str] = []
    for line in output.splitlines():
        text = line.strip()
        if not text or " -> " in text:
            continue
        names.append(text)
    return names


class BranchCollection(Sequence[Branch]):
    """Ordered collection of branches from a single repository.

    Preserves insertion order; filtering methods return new collections
    bound to the same repository.
    """

    def __init__(self, repo: Repository, branches: Iterable[Branch] = ()) -> None:
        self._repo = repo
        self._branches: list[Branch] = list(branches)

    @property
    def repo(self) -> Repository:
        return self._repo

    def append(self, branch: Branch) -> None:
        self._branches.append(branch)

    def local(self) -> BranchCollection:
        """Branches that are not remote, in collection order."""
        return BranchCollection(self._repo, [b for b in self._branches if not b.remote])

    def remote(self) -> BranchCollection:
        """Remote branches, in collection order."""
        return BranchCollection(self._repo, [b for b in self._branches if b.remote])

    def merged(self, revision: str) -> BranchCollection:
        """Remote branches of this collection that are merged into revision.

        Order follows git's `branch -r --merged` listing, not this collection.
        """
        output = self._repo.git_output(["branch", "-r", "--merged", revision])
        by_fullname = {b.fullname: b for b in self._branches if b.remote}
        return BranchCollection(
            self._repo,
            [by_fullname[name] for name in parse_merged_names(output) if name in by_fullname],
        )

    def fullnames(self) -> list[str]:
        return [b.fullname for b in self._branches]

    @overload
    def __getitem__(self, index: int) -> Branch: ...

    @overload
    def __getitem__(self, index: slice) -> BranchCollection: ...

    def __getitem__(self, index: int | slice) -> Branch | BranchCollection:
        if isinstance(index, slice):
            return BranchCollection(self._repo, self._branches[index])
        return self._branches[index]

    def __len__(self) -> int:
        return len(self._branches)

    def __iter__(self) -> Iterator[Branch]:
        return iter(self._branches)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BranchCollection):
            return NotImplemented
        return self._branches == other._branches

    def __repr__(self) -> str:
        return f"BranchCollection({self.fullnames()!r})"
