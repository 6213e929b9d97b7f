"""Shell gateway for running git commands.

Import from submodules:
- abc: Shell, ShellOptions, ShellError
- real: RealShell
- fake: FakeShell
"""
