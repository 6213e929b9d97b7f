"""Object-oriented wrapper around the git command-line tool."""

from gitwrap.branch import Branch as Branch
from gitwrap.branch import BranchCollection as BranchCollection
from gitwrap.commit import Commit as Commit
from gitwrap.config import DEFAULT_CONFIG as DEFAULT_CONFIG
from gitwrap.config import GitwrapConfig as GitwrapConfig
from gitwrap.errors import BranchError as BranchError
from gitwrap.errors import CommitError as CommitError
from gitwrap.errors import ConfigError as ConfigError
from gitwrap.errors import GitError as GitError
from gitwrap.errors import TagError as TagError
from gitwrap.gateway.shell.abc import ShellError as ShellError
from gitwrap.repository import Repository as Repository
from gitwrap.tag import Tag as Tag
