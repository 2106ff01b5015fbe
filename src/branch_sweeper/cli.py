"""Command line interface for git-branch-sweeper."""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from branch_sweeper.config import DEFAULT_PATTERN, DEFAULT_REMOTE, ConfigError, SweepConfig
from branch_sweeper.git import GitError, GitRepo
from branch_sweeper.logs import err_console, setup_logging
from branch_sweeper.sweeper import BranchSweeper, SweepReport

PROG_NAME = "git-branch-sweeper"

app = typer.Typer(add_completion=False)
console = Console()


def fail(message: str) -> typer.Exit:
    """Print an error and build the matching exit."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=1)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        raise fail(str(err)) from err


def show_dry_run(report: SweepReport) -> None:
    """Print one line per branch that would be deleted."""
    for branch in report.selection.local:
        console.print(f"would delete local {escape(branch.ref)}", soft_wrap=True, highlight=False)
    for branch in report.selection.remote:
        console.print(f"would delete remote {escape(branch.ref)}", soft_wrap=True, highlight=False)


def show_applied(report: SweepReport) -> None:
    """Print deleted branches and any failures."""
    if report.deleted:
        console.print(f"[bold green]Successfully deleted {len(report.deleted)} branch(es)[/bold green] 🧹")
        result_table = Table(show_header=True, header_style="bold", show_edge=True)
        result_table.add_column("Branch", style="cyan", no_wrap=True)
        result_table.add_column("Scope", style="magenta", justify="center")
        for branch in report.deleted:
            result_table.add_row(escape(branch.ref), "remote" if branch.is_remote else "local")
        console.print(result_table)
    else:
        console.print("[yellow]No branches were deleted[/yellow] 🤔")

    if report.failed:
        console.print(f"[red]{len(report.failed)} branch(es) could not be deleted:[/red]")
        for branch, _ in report.failed:
            console.print(f"  [red]{escape(branch.ref)}[/red]", soft_wrap=True)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def sweep(
    apply: Annotated[bool, typer.Option("--apply", help="Actually delete branches (default: dry-run)")] = False,
    force: Annotated[
        bool, typer.Option("--force", help="Force delete local branches (-D) instead of -d (only with --apply)")
    ] = False,
    pattern: Annotated[
        str, typer.Option("--pattern", envvar="PATTERN", metavar="GLOB", help="Branch glob to match")
    ] = DEFAULT_PATTERN,
    remote: Annotated[str, typer.Option("--remote", envvar="REMOTE", metavar="NAME", help="Remote name")] = DEFAULT_REMOTE,
    base: Annotated[
        Optional[list[str]],
        typer.Option(
            "--base",
            metavar="BRANCH",
            help="Base branch to check merged into. Can be repeated (also via BASES env). [default: main, dev]",
        ),
    ] = None,
    protected: Annotated[
        Optional[list[str]],
        typer.Option(
            "--protected",
            metavar="NAME",
            help="Protected branch name to never delete. Can be repeated (also via PROTECTED env).",
        ),
    ] = None,
    local_only: Annotated[bool, typer.Option("--local-only", help="Only prune local branches")] = False,
    remote_only: Annotated[bool, typer.Option("--remote-only", help="Only prune remote branches")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
) -> None:
    """Safely prune merged branches (local + remote) by pattern.

    PATTERN is a glob, not a regex. Remote deletion pushes
    `--delete <branch>` to the remote.
    """
    logger = setup_logging(verbose)

    try:
        config = SweepConfig.from_options(
            remote=remote,
            pattern=pattern,
            bases=base,
            protected=protected,
            apply=apply,
            force=force,
            local_only=local_only,
            remote_only=remote_only,
        )
    except ConfigError as err:
        raise fail(str(err)) from err

    repo = get_repo(path)

    logger.debug("REMOTE=%s", config.remote)
    logger.debug("PATTERN=%s", config.pattern)
    logger.debug("BASES=%s", " ".join(config.bases))
    logger.debug("PROTECTED=%s", " ".join(sorted(config.protected)))
    logger.debug("MODE=%s", config.mode)

    try:
        report = BranchSweeper(repo, config).run()
    except GitError as err:
        raise fail(str(err)) from err

    if not report.selection:
        console.print(
            Panel(
                "[green]Your branches are clean ✨[/green]",
                style="green",
                padding=(0, 2),
                expand=False,
            )
        )
        return

    if report.applied:
        show_applied(report)
    else:
        show_dry_run(report)


def main(argv: Optional[list[str]] = None) -> None:
    """Console script entry point.

    Usage errors (unknown option, missing value) exit with status 1.
    """
    command = typer.main.get_command(app)
    try:
        command.main(args=argv, prog_name=PROG_NAME, standalone_mode=True)
    except SystemExit as exc:
        # The parser reports usage errors with status 2
        sys.exit(1 if exc.code == 2 else exc.code)


if __name__ == "__main__":
    main()
