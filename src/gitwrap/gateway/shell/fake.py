"""Fake shell implementation for testing."""

from __future__ import annotations

from dataclasses import dataclass

from gitwrap.gateway.shell.abc import Shell, ShellError, ShellOptions


@dataclass(frozen=True)
class ShellCall:
    """A single recorded shell invocation."""

    method: str  # "execute" or "output_for"
    cmd: tuple[str, ...]
    options: ShellOptions


class FakeShell(Shell):
    """In-memory fake that returns canned output without spawning processes.

    Constructor Injection:
    ---------------------
    - outputs: Mapping of command tuple to the output it produces.
      Commands not listed produce empty output.
    - exit_codes: Mapping of command tuple to a non-zero exit status.
      Listed commands raise ShellError with their configured output.

    Mutation Tracking:
    -----------------
    - calls: Every invocation, in order, as ShellCall records
    - commands: Just the command tuples, in order
    """

    def __init__(
        self,
        *,
        outputs: dict[tuple[str, ...], str] | None = None,
        exit_codes: dict[tuple[str, ...], int] | None = None,
    ) -> None:
        self._outputs = outputs if outputs is not None else {}
        self._exit_codes = exit_codes if exit_codes is not None else {}
        self._calls: list[ShellCall] = []

    def execute(self, cmd: list[str], options: ShellOptions) -> None:
        """Record the call and raise if it is configured to fail."""
        self._run("execute", cmd, options)

    def output_for(self, cmd: list[str], options: ShellOptions) -> str:
        """Record the call and return the canned output."""
        return self._run("output_for", cmd, options)

    def _run(self, method: str, cmd: list[str], options: ShellOptions) -> str:
        key = tuple(cmd)
        self._calls.append(ShellCall(method=method, cmd=key, options=options))
        output = self._outputs.get(key, "")
        returncode = self._exit_codes.get(key, 0)
        if returncode != 0:
            raise ShellError(list(cmd), returncode, output)
        return output

    @property
    def calls(self) -> list[ShellCall]:
        """Get all recorded calls.

        This property is for test assertions only.
        """
        return self._calls.copy()

    @property
    def commands(self) -> list[tuple[str, ...]]:
        """Get the command tuples of all recorded calls, in order."""
        return [call.cmd for call in self._calls]
