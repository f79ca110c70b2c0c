"""
Explorer Core - CLI Interface.

A command-line front end for the explorer core: paste files into a
directory with collision handling, manage favorites and the directory
history, and delete entries through the trash.

Usage Examples:
    # Copy files, pasting colliding names as name_copyN
    python -m explorer_core paste notes.txt photos/ --to /backup --on-collision create_sibling

    # Move files, asking how to handle every failure
    python -m explorer_core paste notes.txt --to /backup --move

    # Favorites and recent directories
    python -m explorer_core favorite-add ~/projects --name projects
    python -m explorer_core recent --by-count
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from explorer_core.models import CollisionPolicy, PersistentState
from explorer_core.operations import (
    DeleteOutcome,
    InvalidBatchError,
    NoTrashCapability,
    Send2TrashCapability,
    delete_path,
)
from explorer_core.orchestration import PasteOrchestrator
from explorer_core.persistence import StorageManager
from explorer_core.session import ExplorerSession
from explorer_core.ui import PasteTUI

__version__ = "1.0.0"

DEFAULT_STORAGE_DIR = Path("files_explorer_persistence")
STORAGE_ENV_VAR = "EXPLORER_CORE_STORAGE"

# Initialize Typer app
app = typer.Typer(
    name="explorer-core",
    help="Explorer Core - Paste files safely and manage favorites and recent directories.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"Explorer Core v{__version__}")
        raise typer.Exit()


def validate_collision_policy(value: str) -> CollisionPolicy:
    """
    Convert a collision policy name into a CollisionPolicy.

    Raises:
        typer.BadParameter: If the name is unknown.
    """
    try:
        return CollisionPolicy(value.strip().lower().replace("-", "_"))
    except ValueError:
        names = ", ".join(policy.value for policy in CollisionPolicy)
        raise typer.BadParameter(f"Collision policy must be one of: {names}")


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def open_session(storage_dir: Path) -> ExplorerSession:
    return ExplorerSession(StorageManager(storage_dir))


StorageDirOption = typer.Option(
    DEFAULT_STORAGE_DIR,
    "--storage-dir",
    "-s",
    envvar=STORAGE_ENV_VAR,
    help="Directory holding favorites, history and explorer state.",
)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Explorer Core - Paste files safely and manage favorites and recent directories."""
    pass


@app.command()
def paste(
    sources: List[Path] = typer.Argument(..., help="Files and directories to paste."),
    destination: Path = typer.Option(
        ..., "--to", "-t", help="Directory to paste into.", exists=False
    ),
    move: bool = typer.Option(
        False, "--move", "-m", help="Delete the sources after they were pasted (cut)."
    ),
    on_collision: str = typer.Option(
        CollisionPolicy.RESOLVE_LATER.value,
        "--on-collision",
        "-c",
        help="create_sibling, resolve_later or mark_resolved.",
        callback=validate_collision_policy,
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Ask how to handle failed items.",
    ),
    max_copies: int = typer.Option(
        1000, "--max-copies", help="Maximum name_copyN candidates per collision.", min=1
    ),
    no_verify: bool = typer.Option(
        False, "--no-verify", help="Do not verify copies before deleting sources."
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", "-l", help="Path for paste log output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output."),
    storage_dir: Path = StorageDirOption,
) -> None:
    """
    Paste files and directories into a destination directory.

    Every source is pasted as destination/name. Collisions are handled by
    the --on-collision policy; in interactive mode every failed item can be
    retried, skipped or used to cancel the paste.
    """
    configure_logging(verbose)
    session = open_session(storage_dir)

    try:
        batch = session.start_paste(
            sources,
            destination,
            cut=move,
            policy=on_collision,
            max_sibling_attempts=max_copies,
            verify_copies=not no_verify,
        )
    except InvalidBatchError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        orchestrator = PasteOrchestrator(
            batch,
            tui=PasteTUI(console),
            interactive=interactive,
            log_file_path=log_file,
            verbose=verbose,
        )
        summary = orchestrator.run()
    except KeyboardInterrupt:
        batch.cancel()
        console.print("\n[yellow]Paste interrupted by user.[/yellow]")
        raise typer.Exit(130)

    if log_file:
        console.print(f"\n[dim]Log written to: {log_file}[/dim]")

    if summary.cancelled:
        raise typer.Exit(130)
    if summary.items_failed or not summary.done:
        raise typer.Exit(1)


@app.command()
def favorites(storage_dir: Path = StorageDirOption) -> None:
    """List the saved favorites."""
    session = open_session(storage_dir)
    PasteTUI(console).display_favorites(session.get_favorites())


@app.command("favorite-add")
def favorite_add(
    path: Path = typer.Argument(..., help="Directory to add."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Favorite name."),
    storage_dir: Path = StorageDirOption,
) -> None:
    """Add a directory to the favorites."""
    if not path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {path}")
        raise typer.Exit(1)

    session = open_session(storage_dir)
    try:
        added = session.add_favorite(path, name)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if not added:
        console.print(
            f"[yellow]A favorite named '{name or path.resolve().name}' already exists.[/yellow]"
        )
        raise typer.Exit(1)
    if session.favorites.has_pending_write:
        console.print("[yellow]Warning:[/yellow] Favorites could not be saved.")
        raise typer.Exit(1)
    console.print(f"[green]Added favorite:[/green] {path}")


@app.command("favorite-remove")
def favorite_remove(
    name: str = typer.Argument(..., help="Name of the favorite to remove."),
    storage_dir: Path = StorageDirOption,
) -> None:
    """Remove a favorite by name."""
    session = open_session(storage_dir)
    if not session.remove_favorite(name):
        console.print(f"[yellow]No favorite named '{name}'.[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Removed favorite:[/green] {name}")


@app.command()
def visit(
    path: Path = typer.Argument(..., help="Directory entered."),
    storage_dir: Path = StorageDirOption,
) -> None:
    """Record that a directory was entered and make it the current directory."""
    if not path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {path}")
        raise typer.Exit(1)

    session = open_session(storage_dir)
    directory = path.resolve()
    session.notify_directory_accessed(directory)
    try:
        session.storage.write(PersistentState(current_dir=directory, selected_path=None))
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not save explorer state: {e}")
        raise typer.Exit(1)


@app.command()
def recent(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of directories.", min=1),
    by_count: bool = typer.Option(
        False, "--by-count", help="Order by number of visits instead of recency."
    ),
    storage_dir: Path = StorageDirOption,
) -> None:
    """List recently entered directories."""
    session = open_session(storage_dir)
    PasteTUI(console).display_recent_directories(
        session.recent_directories(limit, by_count=by_count), by_count
    )


@app.command()
def state(storage_dir: Path = StorageDirOption) -> None:
    """Show the saved explorer state."""
    try:
        saved = StorageManager(storage_dir).read()
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"Current directory: {saved.current_dir.as_posix()}")
    selected = saved.selected_path.as_posix() if saved.selected_path else "-"
    console.print(f"Selected: {selected}")


@app.command()
def delete(
    path: Path = typer.Argument(..., help="File or directory to delete."),
    no_trash: bool = typer.Option(
        False, "--no-trash", help="Delete permanently instead of using the trash."
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Do not ask before deleting permanently."
    ),
) -> None:
    """Delete a file or directory, moving it to the trash when possible."""
    if not path.exists() and not path.is_symlink():
        console.print(f"[red]Error:[/red] Path does not exist: {path}")
        raise typer.Exit(1)

    trash = NoTrashCapability() if no_trash else Send2TrashCapability()
    tui = PasteTUI(console)
    outcome = delete_path(
        path, trash, lambda target: yes or tui.confirm_permanent_delete(target)
    )

    if outcome is DeleteOutcome.FAILED:
        console.print(f"[red]Error:[/red] Failed to delete '{path.as_posix()}'")
        raise typer.Exit(1)
    if outcome is DeleteOutcome.DECLINED:
        console.print("[yellow]Not deleted.[/yellow]")
        return
    console.print(f"[green]{outcome.value.capitalize()}:[/green] {path}")


if __name__ == "__main__":
    app()
