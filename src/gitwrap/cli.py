import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from gitwrap.config import DEFAULT_CONFIG, GitwrapConfig, load_config
from gitwrap.errors import ConfigError, GitError
from gitwrap.gateway.shell.abc import Shell, ShellError
from gitwrap.gateway.shell.real import RealShell
from gitwrap.repository import Repository

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@dataclass(frozen=True)
class CliContext:
    """Dependencies shared by all commands; tests inject a fake shell."""

    shell: Shell
    config: GitwrapConfig
    repo_dir: Path

    def repository(self) -> Repository:
        return Repository(self.repo_dir, shell=self.shell, config=self.config)


def create_context(*, repo_dir: Path, config_dir: Path | None) -> CliContext:
    config = load_config(config_dir) if config_dir is not None else DEFAULT_CONFIG
    return CliContext(shell=RealShell(), config=config, repo_dir=repo_dir)


@contextmanager
def _git_errors() -> Iterator[None]:
    """Report git failures as click errors instead of tracebacks."""
    try:
        yield
    except (GitError, ShellError) as e:
        raise click.ClickException(str(e)) from e


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitwrap")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--repo",
    "repo_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Repository working directory",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing config.toml",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, repo_dir: Path, config_dir: Path | None) -> None:
    """Query and drive a git working directory."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(repo_dir=repo_dir, config_dir=config_dir)
        except ConfigError as e:
            raise click.ClickException(str(e)) from e


@cli.command("branches")
@click.option("--local", "only_local", is_flag=True, help="Only local branches")
@click.option("--remote", "only_remote", is_flag=True, help="Only remote branches")
@click.option("--merged", "merged_into", metavar="REV", help="Only remote branches merged into REV")
@click.pass_obj
def branches_cmd(
    ctx: CliContext, only_local: bool, only_remote: bool, merged_into: str | None
) -> None:
    """List branches."""
    if only_local and only_remote:
        raise click.UsageError("--local and --remote are mutually exclusive")

    with _git_errors():
        branches = ctx.repository().branches()
        if only_local:
            branches = branches.local()
        if only_remote:
            branches = branches.remote()
        if merged_into is not None:
            branches = branches.merged(merged_into)

    for branch in branches:
        click.echo(branch.display().rstrip())


@cli.command("tags")
@click.pass_obj
def tags_cmd(ctx: CliContext) -> None:
    """List tags."""
    with _git_errors():
        tags = ctx.repository().tags()
    for tag in tags:
        click.echo(tag.name)


@cli.command("log")
@click.argument("revision", required=False)
@click.option("-n", "--tail", type=int, default=None, help="Maximum number of commits")
@click.option("--skip", type=int, default=None, help="Skip this many commits first")
@click.option("--no-merges", is_flag=True, help="Exclude merge commits")
@click.option("--full-hashes", is_flag=True, help="Show full 40-character hashes")
@click.pass_obj
def log_cmd(
    ctx: CliContext,
    revision: str | None,
    tail: int | None,
    skip: int | None,
    no_merges: bool,
    full_hashes: bool,
) -> None:
    """Summarize commits reachable from REVISION."""
    with _git_errors():
        commits = ctx.repository().log(
            revision, tail=tail, skip=skip, no_merges=no_merges, full_hashes=full_hashes
        )

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Hash", style="yellow", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Author", style="cyan", no_wrap=True)
    table.add_column("Comment")
    for commit in commits:
        table.add_row(
            commit.hash,
            commit.timestamp.strftime("%Y-%m-%d %H:%M"),
            commit.author,
            commit.comment,
        )

    # Use width=200 to prevent truncation in terminal environments with narrow defaults
    console = Console(width=200)
    console.print(table)


@cli.command("sha")
@click.argument("revision", required=False)
@click.pass_obj
def sha_cmd(ctx: CliContext, revision: str | None) -> None:
    """Print the full commit hash of REVISION (default HEAD)."""
    with _git_errors():
        click.echo(ctx.repository().sha_for(revision))


@cli.command("submodules")
@click.option("--recursive", is_flag=True, help="Include nested submodules")
@click.pass_obj
def submodules_cmd(ctx: CliContext, recursive: bool) -> None:
    """List submodule paths."""
    with _git_errors():
        paths = ctx.repository().submodule_paths(recursive=recursive)
    for path in paths:
        click.echo(path)


@cli.command("update-submodules")
@click.option("--recursive", is_flag=True, help="Include nested submodules")
@click.pass_obj
def update_submodules_cmd(ctx: CliContext, recursive: bool) -> None:
    """Initialize and update submodules."""
    with _git_errors():
        ctx.repository().update_submodules(recursive=recursive)


@cli.command("fetch")
@click.option("--prune", is_flag=True, help="Remove remote branches that no longer exist")
@click.pass_obj
def fetch_cmd(ctx: CliContext, prune: bool) -> None:
    """Fetch all remotes and tags."""
    with _git_errors():
        ctx.repository().fetch_all(prune=prune)


@cli.command("checkout")
@click.argument("revision")
@click.option("-f", "--force", is_flag=True, help="Discard local changes")
@click.pass_obj
def checkout_cmd(ctx: CliContext, revision: str, force: bool) -> None:
    """Check out REVISION."""
    with _git_errors():
        ctx.repository().checkout_to(revision, force=force)


@cli.command("reset")
@click.argument("revision", required=False)
@click.pass_obj
def reset_cmd(ctx: CliContext, revision: str | None) -> None:
    """Hard reset the working tree to REVISION (default HEAD)."""
    with _git_errors():
        ctx.repository().hard_reset_to(revision)


@cli.command("clean")
@click.option("-d", "--directories", is_flag=True, help="Also remove untracked directories")
@click.option("-x", "--gitignored", is_flag=True, help="Also remove ignored files")
@click.option("--submodules", is_flag=True, help="Also remove untracked nested repositories")
@click.pass_obj
def clean_cmd(ctx: CliContext, directories: bool, gitignored: bool, submodules: bool) -> None:
    """Remove untracked files."""
    with _git_errors():
        ctx.repository().clean_all(
            directories=directories, gitignored=gitignored, submodules=submodules
        )


@cli.command("clone")
@click.argument("url")
@click.argument("destination", required=False, type=click.Path(path_type=Path))
@click.pass_obj
def clone_cmd(ctx: CliContext, url: str, destination: Path | None) -> None:
    """Clone URL into DESTINATION (default: named after the URL), relative to --repo."""
    with _git_errors():
        repo = Repository.clone_to(
            url, destination, base_dir=ctx.repo_dir, shell=ctx.shell, config=ctx.config
        )
    click.echo(str(repo.repo_dir))


def main() -> None:
    """CLI entry point used by the `gitwrap` console script."""
    cli()
