"""Shared helpers for tests that run the real git binary."""

import shutil
import subprocess
from pathlib import Path

import pytest

# Apply as `pytestmark = requires_git` in modules that run the git binary.
requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def init_git_repo(repo: Path, default_branch: str) -> None:
    """Initialize a repository with one commit on default_branch."""
    run_git(repo, "init", "--quiet", f"--initial-branch={default_branch}")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# Test\n", encoding="utf-8")
    run_git(repo, "add", "README.md")
    run_git(repo, "commit", "--quiet", "-m", "Initial commit")


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    init_git_repo(repo, "main")
    return repo
