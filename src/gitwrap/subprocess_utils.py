"""Helpers for preparing git subprocess invocations."""

import os
from collections.abc import Iterable


def copied_env_for_git_subprocess(clear_env_vars: Iterable[str]) -> dict[str, str]:
    """Build an environment for a git subprocess.

    Copies os.environ, drops variables that would redirect git to another
    repository, and disables interactive credential prompts.

    Args:
        clear_env_vars: Variable names to remove (e.g., GIT_DIR)

    Returns:
        A new environment mapping; os.environ is not modified
    """
    env = os.environ.copy()
    for name in clear_env_vars:
        env.pop(name, None)
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env
