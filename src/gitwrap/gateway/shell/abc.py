"""Abstract base class for running git commands.

The shell is the only place where processes are spawned. Everything above
it (vetting, parsing, the repository facade) works on captured text.
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class ShellError(RuntimeError):
    """A command exited with a non-zero status.

    Attributes:
        cmd: Command tokens that were run
        returncode: Process exit status
        output: Combined stdout/stderr captured from the process
    """

    def __init__(self, cmd: list[str], returncode: int, output: str) -> None:
        super().__init__(f"Command failed with exit code {returncode}: {shlex.join(cmd)}")
        self.cmd = cmd
        self.returncode = returncode
        self.output = output


@dataclass(frozen=True)
class ShellOptions:
    """Options passed with every command.

    Attributes:
        directory: Working directory for the command
        clear_env_vars: Environment variables removed before running
        logger: Logger that receives the command and its output
    """

    directory: Path
    clear_env_vars: tuple[str, ...]
    logger: logging.Logger


class Shell(ABC):
    """Abstract interface for running commands.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def execute(self, cmd: list[str], options: ShellOptions) -> None:
        """Run a command, logging its output as it is produced.

        Args:
            cmd: Command tokens (e.g., ["git", "clean", "-f"])
            options: Directory, environment and logger for the run

        Raises:
            ShellError: If the command exits non-zero
        """
        ...

    @abstractmethod
    def output_for(self, cmd: list[str], options: ShellOptions) -> str:
        """Run a command and return its combined stdout/stderr.

        Args:
            cmd: Command tokens (e.g., ["git", "branch", "-a"])
            options: Directory, environment and logger for the run

        Returns:
            Captured output text

        Raises:
            ShellError: If the command exits non-zero
        """
        ...
