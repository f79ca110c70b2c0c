"""Terminal User Interface for the explorer core.

This module provides the PasteTUI class, a Rich-based interactive TUI for
reviewing paste operations, remedying failed items and listing persisted
favorites and recent directories.

Example:
    from explorer_core.ui import PasteTUI

    tui = PasteTUI()
    tui.display_paste_plan(batch)
    tui.review_failed_items(batch.get_failed_items())
    tui.display_paste_summary(summary)
"""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.prompt import Confirm, Prompt
from rich.table import Table

from explorer_core.models import (
    CollisionPolicy,
    ErrorSolution,
    FavoriteEntry,
    PasteSummary,
)
from explorer_core.operations import CollisionError, TransferBatch, TransferItem


class PasteTUI:
    """Rich-based Terminal User Interface for paste operations.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    # Prompt answers for a failed item
    ACTION_RETRY = "r"
    ACTION_SKIP = "s"
    ACTION_SIBLING = "c"
    ACTION_MARK_RESOLVED = "m"
    ACTION_CANCEL = "q"

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_paste_plan(self, batch: TransferBatch) -> None:
        """Display the destination, mode and sources of a paste operation."""
        mode = "MOVE" if batch.delete_sources_on_success else "COPY"
        header_text = (
            f"Destination: {batch.destination_dir}\n"
            f"Mode: {mode}\n"
            f"Items: {len(batch.items):,}\n"
            f"On collision: {batch.default_collision_policy.value}"
        )
        self.console.print(Panel(header_text, title="Paste", border_style="blue"))

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="cyan", width=4)
        table.add_column("Source", style="white")
        table.add_column("Target", style="dim")
        for idx, item in enumerate(batch.items, start=1):
            table.add_row(
                str(idx),
                self._truncate_name(str(item.source)),
                self._truncate_name(item.original_target.name, max_length=40),
            )
        self.console.print(table)

    def review_failed_items(self, items: List[TransferItem]) -> None:
        """Ask for a remediation of every failed item.

        Sets error_solution (and, for collisions, collision_policy_override)
        on each item. Stops asking once the operator cancels.

        Raises:
            KeyboardInterrupt: Propagated so the caller can cancel the batch.
        """
        for idx, item in enumerate(items, start=1):
            self._display_failed_item(item, idx, len(items))
            solution, policy = self.prompt_remediation(item)
            if policy is not None:
                item.collision_policy_override = policy
            item.error_solution = solution
            if solution is ErrorSolution.CANCEL:
                break

    def prompt_remediation(
        self, item: TransferItem
    ) -> Tuple[ErrorSolution, Optional[CollisionPolicy]]:
        """Prompt for the remediation of a failed item.

        Returns:
            The solution and, for a collision answered with a policy, the
            collision policy to retry with.
        """
        choices = [self.ACTION_RETRY, self.ACTION_SKIP]
        labels = ["(r)etry", "(s)kip"]
        if isinstance(item.last_error, CollisionError):
            choices += [self.ACTION_SIBLING, self.ACTION_MARK_RESOLVED]
            labels += ["(c)opy as sibling", "(m)ark resolved"]
        choices.append(self.ACTION_CANCEL)
        labels.append("(q)uit paste")

        action = Prompt.ask(", ".join(labels), choices=choices, default=self.ACTION_SKIP)

        if action == self.ACTION_SIBLING:
            return ErrorSolution.RETRY, CollisionPolicy.CREATE_SIBLING
        if action == self.ACTION_MARK_RESOLVED:
            return ErrorSolution.RETRY, CollisionPolicy.MARK_RESOLVED
        if action == self.ACTION_RETRY:
            return ErrorSolution.RETRY, None
        if action == self.ACTION_CANCEL:
            return ErrorSolution.CANCEL, None
        return ErrorSolution.SKIP, None

    def confirm_permanent_delete(self, path: Path) -> bool:
        """Ask before deleting without a trash."""
        self.console.print(
            Panel(
                f"Trash is not supported, delete [bold]{path}[/bold] anyway?\n"
                "The file will not be recoverable.",
                title="Delete file?",
                border_style="red",
            )
        )
        return Confirm.ask("Delete permanently?", default=False)

    def create_progress_callback(
        self, total_items: int
    ) -> Tuple[Progress, Callable[[int, int, TransferItem], None]]:
        """Create a progress bar and a TransferBatch progress callback.

        The Progress instance must be used as a context manager around
        TransferBatch.execute().

        Example:
            progress, callback = tui.create_progress_callback(len(sources))
            batch = TransferBatch(sources, destination, progress_callback=callback)
            with progress:
                batch.execute()
        """
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        task_id = progress.add_task("Pasting...", total=total_items)

        def callback(current_index: int, total: int, item: TransferItem) -> None:
            progress.update(
                task_id,
                completed=current_index + 1,
                description=f"Pasting {self._truncate_name(item.source.name, max_length=30)}",
            )

        return progress, callback

    def display_paste_summary(self, summary: PasteSummary) -> None:
        """Display final statistics of a paste operation."""
        if summary.cancelled:
            title, style = "Paste Cancelled", "yellow"
        elif summary.done:
            title, style = "Paste Complete", "green"
        else:
            title, style = "Paste Incomplete", "red"
        self.console.print(Panel(title, border_style=style))

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Items", f"{summary.total_items:,}")
        table.add_row("Copied", f"{summary.files_copied:,}")
        table.add_row("Copied as sibling", f"{summary.siblings_created:,}")
        table.add_row("Skipped", f"{summary.items_skipped:,}")
        table.add_row("Collisions ignored", f"{summary.collisions_ignored:,}")
        table.add_row("Sources deleted", f"{summary.sources_deleted:,}")
        table.add_row("Failed", f"{summary.items_failed:,}")
        table.add_row("Duration", self._format_duration(summary.duration))

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

    def display_favorites(self, favorites: List[FavoriteEntry]) -> None:
        if not favorites:
            self.console.print("[yellow]No favorites saved.[/yellow]")
            return
        table = Table(title="Favorites")
        table.add_column("Name", style="cyan")
        table.add_column("Path", style="white")
        for favorite in favorites:
            table.add_row(favorite.name, favorite.path.as_posix())
        self.console.print(table)

    def display_recent_directories(self, paths: List[Path], by_count: bool) -> None:
        if not paths:
            self.console.print("[yellow]No directories accessed yet.[/yellow]")
            return
        title = "Most Accessed Directories" if by_count else "Recent Directories"
        table = Table(title=title)
        table.add_column("#", justify="right", style="cyan", width=4)
        table.add_column("Directory", style="white")
        for idx, path in enumerate(paths, start=1):
            table.add_row(str(idx), path.as_posix())
        self.console.print(table)

    def _display_failed_item(self, item: TransferItem, number: int, total: int) -> None:
        text = (
            f"[bold]Source:[/bold] {item.source}\n"
            f"[bold]Target:[/bold] {item.actual_target}\n"
            f"[red]{item.last_error}[/red]"
        )
        self.console.print(
            Panel(text, title=f"Failed item {number}/{total}", border_style="red")
        )

    def _display_errors(self, errors: List[str]) -> None:
        """Display error messages in a separate panel."""
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {e}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to human-readable duration (e.g., "5m 23s")."""
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"

    def _truncate_name(self, name: str, max_length: int = 60) -> str:
        """Truncate long names with ellipsis."""
        if len(name) > max_length:
            return name[: max_length - 3] + "..."
        return name
