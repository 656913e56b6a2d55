"""duck command line: init, add, commit, log, show, status."""

from contextlib import contextmanager

import click
from rich.console import Console
from rich.markup import escape

from .diff import FileStatus, LineTag
from .errors import AlreadyInitialized, CommitNotFound, DuckError
from .log_setup import setup_logging
from .repository import Repository

console = Console(highlight=False, soft_wrap=True)

_RUN_STYLES = {
    LineTag.ADDED: ("+", "green"),
    LineTag.REMOVED: ("-", "red"),
    LineTag.UNCHANGED: (" ", "bright_black"),
}


@contextmanager
def _errors():
    """Turn library failures into a message and exit status 1."""
    try:
        yield
    except (DuckError, OSError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--repo",
    "-C",
    envvar="DUCK_REPO",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory containing the .duck repository.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx, repo, verbose):
    """A tiny local version-control tool."""
    setup_logging(verbose)
    ctx.obj = Repository(repo)


@main.command()
@click.pass_obj
def init(repo: Repository):
    """Create an empty repository (safe to repeat)."""
    with _errors():
        try:
            repo.init()
        except AlreadyInitialized as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
            return
    console.print(f"Initialized empty duck repository in {escape(repo.path)}")


@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
def add(repo: Repository, paths):
    """Stage one or more files for the next commit."""
    with _errors():
        for path in paths:
            entry = repo.add(path)
            console.print(entry.hash, style="yellow")
            console.print(f"Added {escape(entry.path)}")


@main.command()
@click.argument("message")
@click.pass_obj
def commit(repo: Repository, message):
    """Record the staged files as a new commit."""
    with _errors():
        commit_hash = repo.commit(message)
    console.print(f"Commit successfully created: [yellow]{commit_hash}[/yellow]")


@main.command()
@click.pass_obj
def log(repo: Repository):
    """Show commit history, newest first."""
    with _errors():
        for commit_hash, record in repo.log():
            console.print(f"commit {commit_hash}", style="yellow")
            console.print(f"Date: {escape(record.timestamp)}")
            console.print(f"\n    {escape(record.message)}\n")


@main.command()
@click.argument("commit_hash")
@click.pass_obj
def show(repo: Repository, commit_hash):
    """Show what a commit changed relative to its parent."""
    with _errors():
        try:
            reports = repo.show(commit_hash)
        except CommitNotFound:
            console.print("Commit not found.", style="red")
            return
    for report in reports:
        console.print(f"File: {escape(report.path)}", style="bold")
        if report.status is FileStatus.FIRST_COMMIT:
            console.print("First commit", style="bright_black")
        elif report.status is FileStatus.NEW_FILE:
            console.print("New file in this commit", style="green")
        else:
            for run in report.runs:
                marker, style = _RUN_STYLES[run.tag]
                for line in run.lines:
                    console.print(f"{marker} {escape(line)}", style=style)
        console.print()


@main.command()
@click.pass_obj
def status(repo: Repository):
    """List the files staged for the next commit."""
    with _errors():
        entries = repo.staged()
    if not entries:
        console.print("Nothing staged.")
        return
    console.print("Changes to be committed:")
    for entry in entries:
        console.print(f"  {escape(entry.path)}  [yellow]{entry.hash[:7]}[/yellow]")
