import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gitwrap.errors import ConfigError

# Some git builds (notably msysgit) exit zero after printing these.
DEFAULT_ERROR_PATTERNS = (r"^ERROR:", r"fatal:")

# Ambient git state that would point commands at a different repository.
DEFAULT_CLEAR_ENV_VARS = ("GIT_DIR", "GIT_INDEX_FILE", "GIT_WORK_TREE")

DEFAULT_LOG_TAIL = 10000


@dataclass(frozen=True)
class GitwrapConfig:
    """In-memory representation of `config.toml`.

    Example config.toml:
      [vetting]
      error_patterns = ["^ERROR:", "fatal:"]

      [shell]
      clear_env_vars = ["GIT_DIR", "GIT_INDEX_FILE", "GIT_WORK_TREE"]

      [log]
      tail = 10000
    """

    error_patterns: tuple[str, ...]
    clear_env_vars: tuple[str, ...]
    default_log_tail: int


DEFAULT_CONFIG = GitwrapConfig(
    error_patterns=DEFAULT_ERROR_PATTERNS,
    clear_env_vars=DEFAULT_CLEAR_ENV_VARS,
    default_log_tail=DEFAULT_LOG_TAIL,
)


def _string_list(cfg_path: Path, key: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{cfg_path}: {key} must be a list of strings, got {value!r}")
    return tuple(value)


def load_config(config_dir: Path) -> GitwrapConfig:
    """Load config.toml from the given directory if present; otherwise return defaults.

    Keys missing from the file keep their default values.

    Raises:
        ConfigError: If the file is not valid TOML, an error pattern is not a
            valid regular expression, or log.tail is not a positive integer
    """
    cfg_path = config_dir / "config.toml"
    if not cfg_path.exists():
        return DEFAULT_CONFIG

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{cfg_path}: {e}") from e

    vetting = data.get("vetting", {})
    patterns = vetting.get("error_patterns")
    if patterns is None:
        error_patterns = DEFAULT_CONFIG.error_patterns
    else:
        error_patterns = _string_list(cfg_path, "vetting.error_patterns", patterns)
        for pattern in error_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ConfigError(f"{cfg_path}: invalid error pattern {pattern!r}: {e}") from e

    shell = data.get("shell", {})
    env_vars = shell.get("clear_env_vars")
    if env_vars is None:
        clear_env_vars = DEFAULT_CONFIG.clear_env_vars
    else:
        clear_env_vars = _string_list(cfg_path, "shell.clear_env_vars", env_vars)

    log = data.get("log", {})
    tail = log.get("tail", DEFAULT_CONFIG.default_log_tail)
    # TOML booleans are ints to Python.
    if isinstance(tail, bool) or not isinstance(tail, int) or tail < 1:
        raise ConfigError(f"{cfg_path}: log.tail must be a positive integer, got {tail!r}")

    return GitwrapConfig(
        error_patterns=error_patterns,
        clear_env_vars=clear_env_vars,
        default_log_tail=tail,
    )
