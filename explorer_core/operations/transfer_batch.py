"""
Paste operation covering every source of a single paste request.

Example:
    >>> batch = TransferBatch([Path("a.txt"), Path("photos")], Path("/backup"),
    ...                       default_collision_policy=CollisionPolicy.CREATE_SIBLING)
    >>> batch.execute()
    >>> for item in batch.get_failed_items():
    ...     item.error_solution = ErrorSolution.SKIP
    >>> batch.execute()
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from explorer_core.models import CollisionPolicy, PasteSummary
from explorer_core.operations.errors import InvalidBatchError, SelfContainmentError
from explorer_core.operations.transfer_item import (
    DEFAULT_MAX_SIBLING_ATTEMPTS,
    TransferConfig,
    TransferItem,
)
from explorer_core.scanning import FileHasher

# Configure module logger
logger = logging.getLogger('paste_ops')


class TransferBatch:
    """
    Pastes every source into a destination directory, optionally deleting
    the sources afterwards.

    The batch validates its input on construction and builds one TransferItem
    per distinct source. execute() drives the items; failed items are exposed
    through get_failed_items() so the caller can choose a remediation and call
    execute() again.

    Attributes:
        sources: Distinct source paths in the order given.
        items: One TransferItem per source, in the same order.
        config: Settings shared with every item.
        is_done: True once every item is done.
        is_cancelled: True once cancel() was called.
    """

    def __init__(
        self,
        sources: Iterable[Path],
        destination_dir: Path,
        delete_sources_on_success: bool = False,
        default_collision_policy: CollisionPolicy = CollisionPolicy.RESOLVE_LATER,
        max_sibling_attempts: int = DEFAULT_MAX_SIBLING_ATTEMPTS,
        verify_copies: bool = True,
        file_hasher: Optional[FileHasher] = None,
        progress_callback: Optional[Callable[[int, int, TransferItem], None]] = None,
    ) -> None:
        """
        Validate a paste request and build its items. Nothing is copied yet.

        Parameters:
            sources: Files and directories to paste. Duplicates are pasted once.
            destination_dir: Existing directory to paste into.
            delete_sources_on_success: Delete each source after its verified copy (cut and paste).
            default_collision_policy: Policy for items without an override.
            max_sibling_attempts: Limit of name_copyN candidates per collision.
            verify_copies: Compare copy and source before deleting the source.
            file_hasher: Hasher used for verification; a new one by default.
            progress_callback: Called as (index, total, item) after each item attempt.

        Raises:
            InvalidBatchError: If there are no sources, the destination is not an
                existing directory, or max_sibling_attempts is not positive.
            SelfContainmentError: If a source directory contains the destination.
        """
        self.sources: List[Path] = list(
            dict.fromkeys(Path(os.path.abspath(source)) for source in sources)
        )
        destination_dir = Path(os.path.abspath(destination_dir))

        if not self.sources:
            raise InvalidBatchError("Source file list is empty")
        if not destination_dir.exists():
            raise InvalidBatchError(f"Destination directory does not exist: {destination_dir}")
        if not destination_dir.is_dir():
            raise InvalidBatchError(f"Destination is not a directory: {destination_dir}")
        if max_sibling_attempts < 1:
            raise InvalidBatchError(
                f"max_sibling_attempts must be positive, got {max_sibling_attempts}"
            )
        for source in self.sources:
            if source.is_dir() and not source.is_symlink():
                if is_self_containing(source, destination_dir):
                    raise SelfContainmentError(source, destination_dir)

        self.config = TransferConfig(
            destination_dir=destination_dir,
            delete_sources_on_success=delete_sources_on_success,
            default_collision_policy=default_collision_policy,
            max_sibling_attempts=max_sibling_attempts,
            verify_copies=verify_copies,
        )
        self.is_done = False
        self.is_cancelled = False
        self.progress_callback = progress_callback

        hasher = file_hasher or FileHasher()
        self.items: List[TransferItem] = [
            TransferItem(source, self.config, hasher, self.cancel) for source in self.sources
        ]

        logger.debug(
            f"Created paste batch: {len(self.items)} item(s) -> {destination_dir} "
            f"(delete sources: {delete_sources_on_success}, policy: {default_collision_policy.value})"
        )

    @property
    def destination_dir(self) -> Path:
        return self.config.destination_dir

    @property
    def delete_sources_on_success(self) -> bool:
        return self.config.delete_sources_on_success

    @property
    def default_collision_policy(self) -> CollisionPolicy:
        return self.config.default_collision_policy

    def execute(self) -> None:
        """
        Attempt every item that is not done yet, in source order.

        Does nothing once the batch is done or cancelled. A failing item never
        stops the pass; only an item whose CANCEL solution cancels the batch
        does. Call again after setting error solutions to make further progress.
        """
        if self.is_done or self.is_cancelled:
            return

        total = len(self.items)
        for index, item in enumerate(self.items):
            if self.is_cancelled:
                break
            item.try_execute()
            if self.progress_callback is not None:
                self.progress_callback(index, total, item)

        self.is_done = not self.is_cancelled and all(item.is_done() for item in self.items)

        if self.is_done:
            logger.info(f"Paste into {self.destination_dir} finished")
        elif not self.is_cancelled:
            logger.info(f"Paste into {self.destination_dir}: {len(self.get_failed_items())} item(s) failed")

    def cancel(self) -> None:
        """Stop further progress. Files already pasted are kept."""
        if not self.is_cancelled:
            logger.info(f"Paste into {self.destination_dir} cancelled")
        self.is_cancelled = True

    def get_failed_items(self) -> List[TransferItem]:
        return [item for item in self.items if item.did_fail()]

    def summary(self) -> PasteSummary:
        """Aggregate the current outcome of every item."""
        summary = PasteSummary(
            total_items=len(self.items),
            cancelled=self.is_cancelled,
            done=self.is_done,
        )
        for item in self.items:
            if item.did_fail():
                summary.items_failed += 1
                summary.errors.append(f"{item.source}: {item.last_error}")
            elif item.skipped:
                summary.items_skipped += 1
            elif item.marked_resolved:
                summary.collisions_ignored += 1
            elif item.is_done():
                summary.files_copied += 1
                if item.is_sibling():
                    summary.siblings_created += 1
            if item.source_deleted:
                summary.sources_deleted += 1
        return summary


def is_self_containing(source_dir: Path, destination_dir: Path) -> bool:
    """
    Check whether pasting ``source_dir`` into ``destination_dir`` would copy
    the directory into itself or one of its descendants.

    Both paths are compared by their canonical real paths. Directories on
    different filesystems never contain each other. A destination that does
    not exist yet is checked through its parent.
    """
    source_real = source_dir.resolve()
    if destination_dir.exists():
        candidate = destination_dir.resolve()
    else:
        candidate = destination_dir.parent.resolve()

    try:
        if os.stat(source_real).st_dev != os.stat(candidate).st_dev:
            return False
    except OSError:
        return False

    return candidate == source_real or source_real in candidate.parents
