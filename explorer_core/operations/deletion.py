"""
Deleting entries from the file list.

Deletion goes through a trash collaborator when the platform supports one;
otherwise the caller must confirm a permanent delete.
"""

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence, TypeVar

from send2trash import send2trash
from send2trash.exceptions import TrashPermissionError

# Configure module logger
logger = logging.getLogger('paste_ops')

T = TypeVar("T")


class TrashCapability(Protocol):
    """Moves files to the platform trash."""

    def is_supported(self) -> bool:
        ...

    def move_to_trash(self, path: Path) -> bool:
        ...


class Send2TrashCapability:
    """Trash capability backed by the send2trash library."""

    def is_supported(self) -> bool:
        return True

    def move_to_trash(self, path: Path) -> bool:
        try:
            send2trash(str(path))
        except TrashPermissionError as e:
            logger.warning(f"Trash not permitted for {path}: {e}")
            return False
        except OSError as e:
            logger.warning(f"Could not move {path} to trash: {e}")
            return False
        return True


class NoTrashCapability:
    """Trash capability of a platform without a trash."""

    def is_supported(self) -> bool:
        return False

    def move_to_trash(self, path: Path) -> bool:
        return False


class DeleteOutcome(Enum):
    """Result of delete_path()."""
    TRASHED = "trashed"
    DELETED = "deleted"      # Permanently deleted
    DECLINED = "declined"    # Permanent delete not confirmed
    FAILED = "failed"


def delete_path(
    path: Path,
    trash: TrashCapability,
    confirm_permanent: Callable[[Path], bool],
) -> DeleteOutcome:
    """
    Delete a file or directory, preferring the trash.

    Parameters:
        path (Path): Entry to delete.
        trash (TrashCapability): Trash collaborator.
        confirm_permanent (Callable): Asked before deleting permanently when
            the trash is unsupported; returning False aborts.

    Returns:
        DeleteOutcome: What happened to ``path``.
    """
    if trash.is_supported():
        if trash.move_to_trash(path):
            logger.info(f"Moved to trash: {path}")
            return DeleteOutcome.TRASHED
        return DeleteOutcome.FAILED

    if not confirm_permanent(path):
        return DeleteOutcome.DECLINED

    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        logger.warning(f"Failed to delete {path}: {e}")
        return DeleteOutcome.FAILED

    logger.info(f"Deleted permanently: {path}")
    return DeleteOutcome.DELETED


def selection_after_delete(entries: Sequence[T], deleted: T) -> Optional[T]:
    """
    Pick the entry to select after ``deleted`` is removed from ``entries``.

    The predecessor of the deleted entry is selected. Deleting the first
    entry selects the new first entry, and deleting the last of N entries
    selects entry N-2.

    Returns:
        The entry to select, or None if nothing remains or ``deleted`` was not listed.
    """
    remaining = list(entries)
    try:
        index = remaining.index(deleted)
    except ValueError:
        return None
    del remaining[index]

    if not remaining:
        return None
    if index == 0:
        return remaining[0]
    if index >= len(remaining):
        return remaining[-1]
    return remaining[index - 1]
