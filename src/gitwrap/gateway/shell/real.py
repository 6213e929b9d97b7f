"""Production shell implementation using subprocess."""

import shlex
import subprocess

from gitwrap.gateway.shell.abc import Shell, ShellError, ShellOptions
from gitwrap.subprocess_utils import copied_env_for_git_subprocess


class RealShell(Shell):
    """Production implementation using subprocess.

    stderr is merged into stdout so callers see git's output in the order
    it was printed.
    """

    def execute(self, cmd: list[str], options: ShellOptions) -> None:
        """Run a command and log each output line at INFO."""
        output = self._run(cmd, options)
        for line in output.splitlines():
            options.logger.info(line)

    def output_for(self, cmd: list[str], options: ShellOptions) -> str:
        """Run a command and return its combined output without logging it.

        Callers decide whether the output is worth logging.
        """
        return self._run(cmd, options)

    def _run(self, cmd: list[str], options: ShellOptions) -> str:
        options.logger.debug("+ %s", shlex.join(cmd))
        result = subprocess.run(
            cmd,
            cwd=options.directory,
            env=copied_env_for_git_subprocess(options.clear_env_vars),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            options.logger.error(result.stdout.rstrip("\n"))
            raise ShellError(cmd, result.returncode, result.stdout)
        return result.stdout
