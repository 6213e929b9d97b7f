"""Repository facade: one method per git subcommand.

Each method builds an argument list, runs `git` through the shell gateway
in the repository directory, and either vets the output for silent failures,
parses it into domain objects, or simply runs the command.

Nothing is cached; every query re-invokes git.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gitwrap.branch import Branch, BranchCollection, parse_branch_line
from gitwrap.commit import Commit, log_format, parse_log_output
from gitwrap.config import DEFAULT_CONFIG, GitwrapConfig
from gitwrap.errors import GitError
from gitwrap.gateway.shell.abc import Shell, ShellOptions
from gitwrap.gateway.shell.real import RealShell
from gitwrap.submodule import parse_show_sha, parse_submodule_paths
from gitwrap.tag import Tag, parse_tag_names
from gitwrap.vetting import vet_output

DEFAULT_LOGGER = logging.getLogger(__name__)


def repo_name_from_url(url: str) -> str:
    """Derive the default clone directory name from a repository URL.

    'git@github.com:foo/bar.git' -> 'bar'
    """
    tail = url.rstrip("/").rsplit("/", 1)[-1]
    tail = tail.rsplit(":", 1)[-1]
    return tail.removesuffix(".git")


class Repository:
    """A git working directory driven through the git CLI.

    Args:
        repo_dir: Working directory of the repository
        shell: Shell gateway used to run git. Defaults to RealShell().
        logger: Logger passed to the shell. Defaults to DEFAULT_LOGGER.
        config: Error patterns, env vars to clear and log defaults.
            Defaults to DEFAULT_CONFIG.
    """

    def __init__(
        self,
        repo_dir: Path | str,
        *,
        shell: Shell | None = None,
        logger: logging.Logger | None = None,
        config: GitwrapConfig | None = None,
    ) -> None:
        self._repo_dir = Path(repo_dir)
        self._shell = shell if shell is not None else RealShell()
        self._logger = logger if logger is not None else DEFAULT_LOGGER
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def repo_dir(self) -> Path:
        return self._repo_dir

    @property
    def shell(self) -> Shell:
        return self._shell

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def config(self) -> GitwrapConfig:
        return self._config

    # ============================================================================
    # Construction
    # ============================================================================

    @classmethod
    def clone_to(
        cls,
        url: str,
        destination: Path | str | None = None,
        *,
        base_dir: Path | None = None,
        shell: Shell | None = None,
        logger: logging.Logger | None = None,
        config: GitwrapConfig | None = None,
    ) -> Repository:
        """Clone url and return a repository bound to the new working directory.

        The clone runs from base_dir, which defaults to the current directory, and
        a relative destination is resolved against it. When destination is None
        the directory is named after the URL's basename (without '.git').

        Raises:
            GitError: If git reports an error or no working directory was created
        """
        base_dir = Path(base_dir).resolve() if base_dir is not None else Path.cwd()
        if destination is None:
            destination = repo_name_from_url(url)
        repo_dir = (base_dir / destination).resolve()

        cloner = cls(base_dir, shell=shell, logger=logger, config=config)
        cloner.vet_output(["clone", "--", url, str(repo_dir)])
        if not (repo_dir / ".git").is_dir():
            raise GitError(f"Failed to clone {url} to {repo_dir}")

        return cls(repo_dir, shell=cloner.shell, logger=logger, config=cloner.config)

    # ============================================================================
    # Remote Operations
    # ============================================================================

    def fetch(self, *args: str) -> bool:
        """Run `git fetch` with arbitrary arguments."""
        return self.vet_output(["fetch", *args])

    def fetch_all(self, *, prune: bool = False) -> bool:
        """Fetch branches from all remotes, then fetch tags."""
        cmd = ["fetch", "--all"]
        if prune:
            cmd.append("--prune")
        self.vet_output(cmd)
        return self.vet_output(["fetch", "--tags"])

    # ============================================================================
    # Query Operations
    # ============================================================================

    def branch_for(self, name: str) -> Branch:
        """Build a Branch for name without consulting git."""
        return Branch.from_name(self, name)

    def branches(self) -> BranchCollection:
        """List local and remote branches in git's order."""
        output = self.git_output(["branch", "-a"])
        collection = BranchCollection(self)
        for line in output.splitlines():
            if not line.strip():
                continue
            branch = parse_branch_line(self, line)
            if branch is not None:
                collection.append(branch)
        return collection

    def tag_for(self, name: str) -> Tag:
        """Build a Tag for name without consulting git."""
        return Tag(self, name)

    def tags(self) -> list[Tag]:
        """List tags in git's order."""
        output = self.git_output(["tag"])
        return [Tag(self, name) for name in parse_tag_names(output)]

    def log(
        self,
        revision: str | None = None,
        *,
        tail: int | None = None,
        skip: int | None = None,
        no_merges: bool = False,
        full_hashes: bool = False,
    ) -> list[Commit]:
        """Summarize commits reachable from revision (HEAD when None).

        Args:
            revision: Revision to start from, passed as the last argument
            tail: Maximum number of commits. Defaults to config.default_log_tail.
            skip: Number of commits to skip first
            no_merges: Exclude merge commits
            full_hashes: Report 40-character hashes instead of abbreviations
        """
        if tail is None:
            tail = self._config.default_log_tail
        cmd = ["log", f"-n{tail}", f"--format={log_format(full_hashes=full_hashes)}"]
        if skip:
            cmd.extend(["--skip", str(skip)])
        if no_merges:
            cmd.append("--no-merges")
        if revision:
            cmd.append(revision)
        return parse_log_output(self.git_output(cmd))

    def submodule_paths(self, *, recursive: bool = False) -> list[str]:
        """List submodule paths reported by `git submodule status`."""
        cmd = ["submodule", "status"]
        if recursive:
            cmd.append("--recursive")
        return parse_submodule_paths(self.git_output(cmd))

    def sha_for(self, revision: str | None = None) -> str:
        """Resolve revision (HEAD when None) to a full commit hash."""
        cmd = ["show"]
        if revision:
            cmd.append(revision)
        return parse_show_sha(self.git_output(cmd))

    # ============================================================================
    # Working Tree Operations
    # ============================================================================

    def clean(self, *args: str) -> bool:
        """Run `git clean` with arbitrary arguments."""
        return self.git_execute(["clean", *args])

    def clean_all(
        self,
        *,
        directories: bool = False,
        gitignored: bool = False,
        submodules: bool = False,
    ) -> bool:
        """Forcibly remove untracked files.

        Args:
            directories: Also remove untracked directories (-d)
            gitignored: Also remove ignored files (-x)
            submodules: Also remove untracked nested repositories (second -f)
        """
        # Without -f git only lists what it would remove.
        cmd = ["-f"]
        if submodules:
            cmd.append("-f")
        if directories:
            cmd.append("-d")
        if gitignored:
            cmd.append("-x")
        return self.clean(*cmd)

    def checkout_to(self, revision: str, *, force: bool = False) -> bool:
        """Check out revision, discarding local changes when force is set."""
        cmd = ["checkout", revision]
        if force:
            cmd.append("--force")
        return self.vet_output(cmd)

    def hard_reset_to(self, revision: str | None = None) -> bool:
        """Reset index and working tree to revision (HEAD when None)."""
        cmd = ["reset", "--hard"]
        if revision:
            cmd.append(revision)
        return self.vet_output(cmd)

    def update_submodules(self, *, recursive: bool = False) -> bool:
        """Initialize and update submodules."""
        cmd = ["submodule", "update", "--init"]
        if recursive:
            cmd.append("--recursive")
        return self.git_execute(cmd)

    # ============================================================================
    # Command Execution
    # ============================================================================

    def git_output(self, args: list[str]) -> str:
        """Run git with args and return its combined output."""
        return self._shell.output_for(["git", *args], self._shell_options())

    def git_execute(self, args: list[str]) -> bool:
        """Run git with args, logging output instead of returning it."""
        self._shell.execute(["git", *args], self._shell_options())
        return True

    def vet_output(self, args: list[str]) -> bool:
        """Run git with args and raise if the output shows a silent failure.

        Raises:
            GitError: If the output matches a configured error pattern
        """
        output = self.git_output(args)
        if output.strip():
            self._logger.info(output.strip())
        vet_output(output, self._config.error_patterns)
        return True

    def _shell_options(self) -> ShellOptions:
        return ShellOptions(
            directory=self._repo_dir,
            clear_env_vars=self._config.clear_env_vars,
            logger=self._logger,
        )

    def __repr__(self) -> str:
        return f"Repository({str(self._repo_dir)!r})"
