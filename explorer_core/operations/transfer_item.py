"""
Per-file state machine of a paste operation.

Each TransferItem pastes one source file or directory into the destination
directory of its batch. The item progresses strictly forward through
FilePasteState; a failed attempt records the error on the item and waits for
the caller to choose an ErrorSolution.
"""

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from explorer_core.models import CollisionPolicy, ErrorSolution, ErrorState, FilePasteState
from explorer_core.operations.errors import (
    CollisionError,
    CopyVerificationError,
    PasteError,
    SiblingLimitExceededError,
    SourceVanishedError,
    TransferIOError,
    UnresolvedCollisionError,
)
from explorer_core.scanning import FileHasher

# Configure module logger
logger = logging.getLogger('paste_ops')

# Upper bound for name_copyN candidates tried per collision
DEFAULT_MAX_SIBLING_ATTEMPTS = 1000


@dataclass(frozen=True)
class TransferConfig:
    """Batch-level settings shared by every item of a paste operation."""
    destination_dir: Path
    delete_sources_on_success: bool = False
    default_collision_policy: CollisionPolicy = CollisionPolicy.RESOLVE_LATER
    max_sibling_attempts: int = DEFAULT_MAX_SIBLING_ATTEMPTS
    verify_copies: bool = True


def sibling_name(original: Path, index: int) -> Path:
    """Return the sibling of ``original`` named ``stem_copy{index}{suffix}``."""
    return original.with_name(f"{original.stem}_copy{index}{original.suffix}")


class TransferItem:
    """
    Pastes a single source into the destination directory of its batch.

    Attributes:
        source: File or directory to paste.
        original_target: destination_dir / source.name.
        actual_target: Where the source is pasted; differs from original_target
            after a CREATE_SIBLING resolution.
        state: Progress of the item.
        error_state: ERROR while the last attempt failed.
        last_error: Exception of the last failed attempt.
        collision_policy_override: Replaces the batch default policy when set.
    """

    def __init__(
        self,
        source: Path,
        config: TransferConfig,
        file_hasher: FileHasher,
        cancel_batch: Callable[[], None],
    ) -> None:
        """
        Create an item in state INIT.

        Parameters:
            source (Path): File or directory to paste.
            config (TransferConfig): Settings of the owning batch.
            file_hasher (FileHasher): Used to verify the copy before deleting the source.
            cancel_batch (Callable): Cancels the owning batch; invoked for ErrorSolution.CANCEL.
        """
        self.source = source
        self.config = config
        self.original_target = config.destination_dir / source.name
        self.actual_target = self.original_target
        self.state = FilePasteState.INIT
        self.error_state = ErrorState.NONE
        self.last_error: Optional[Exception] = None
        self.collision_policy_override: Optional[CollisionPolicy] = None

        # Outcome flags used for the summary
        self.skipped = False
        self.marked_resolved = False
        self.source_deleted = False

        self._error_solution = ErrorSolution.NONE
        self._redetect_collision = False
        self._file_hasher = file_hasher
        self._cancel_batch = cancel_batch

    def __repr__(self) -> str:
        return (
            f"TransferItem(source={self.source!r}, target={self.actual_target!r}, "
            f"state={self.state.name}, error_state={self.error_state.name})"
        )

    @property
    def error_solution(self) -> ErrorSolution:
        """Remediation applied on the next attempt of a failed item."""
        return self._error_solution

    @error_solution.setter
    def error_solution(self, solution: ErrorSolution) -> None:
        if self.error_state is not ErrorState.ERROR:
            raise ValueError(f"Cannot set an error solution, {self.source} has not failed")
        self._error_solution = solution

    def effective_collision_policy(self) -> CollisionPolicy:
        if self.collision_policy_override is not None:
            return self.collision_policy_override
        return self.config.default_collision_policy

    def is_done(self) -> bool:
        return self.state is FilePasteState.DONE

    def did_fail(self) -> bool:
        return self.error_state is ErrorState.ERROR

    def is_sibling(self) -> bool:
        """Whether the item was (or will be) pasted under a _copyN name."""
        return self.actual_target != self.original_target

    def try_execute(self) -> None:
        """
        Make as much progress as possible on this item.

        Does nothing for a done item. A failed item is only attempted again
        once an error_solution is set: SKIP marks it done without copying,
        CANCEL cancels the whole batch, RETRY clears the error and continues.
        Errors of the attempt are recorded on the item, never raised.
        """
        if self.is_done():
            return

        if self.did_fail():
            solution = self._error_solution
            if solution is ErrorSolution.NONE:
                return
            if solution is ErrorSolution.SKIP:
                self._clear_error()
                self.skipped = True
                self.state = FilePasteState.DONE
                logger.info(f"Skipped: {self.source}")
                return
            if solution is ErrorSolution.CANCEL:
                self._error_solution = ErrorSolution.NONE
                logger.info(f"Paste cancelled at: {self.source}")
                self._cancel_batch()
                return
            # Retry
            self._clear_error()
            logger.debug(f"Retrying: {self.source}")

        try:
            self._execute_unsafe()
        except PasteError as e:
            self._record_error(e)
        except OSError as e:
            error = TransferIOError(self.source, self.actual_target, f"{type(e).__name__}: {e}")
            error.__cause__ = e
            self._record_error(error)

    def _execute_unsafe(self) -> None:
        if not os.path.lexists(self.source):
            raise SourceVanishedError(self.source)

        if self.state is FilePasteState.COLLISION_DETECTED and self._redetect_collision:
            # The filesystem may have changed since the failed attempt
            self._redetect_collision = False
            self.actual_target = self.original_target
            self.state = FilePasteState.INIT

        if self.state is FilePasteState.INIT:
            self._check_for_collision()

        if self.state is FilePasteState.COLLISION_DETECTED:
            self._resolve_collision()
            if self.state is FilePasteState.DONE:
                return

        if self.state is FilePasteState.COLLISION_RESOLVED:
            self._copy_to_target()
            self.state = FilePasteState.TARGET_COPIED

        if self.state is FilePasteState.TARGET_COPIED:
            if self.config.delete_sources_on_success:
                self._delete_source()
            self.state = FilePasteState.DONE
            logger.debug(f"Done: {self.source} -> {self.actual_target}")

    def _check_for_collision(self) -> None:
        if os.path.lexists(self.actual_target):
            self.state = FilePasteState.COLLISION_DETECTED
            logger.debug(f"Collision detected: {self.actual_target}")
        else:
            self.state = FilePasteState.COLLISION_RESOLVED

    def _resolve_collision(self) -> None:
        """
        Resolve the collision at actual_target using the effective policy.

        Raises:
            UnresolvedCollisionError: For RESOLVE_LATER.
            SiblingLimitExceededError: If no free sibling name was found.
            CollisionError: If the filesystem failed during resolution.
        """
        policy = self.effective_collision_policy()

        if policy is CollisionPolicy.RESOLVE_LATER:
            raise UnresolvedCollisionError(self.source, self.original_target, self.actual_target)

        if policy is CollisionPolicy.MARK_RESOLVED:
            self.marked_resolved = True
            self.state = FilePasteState.DONE
            logger.info(f"Collision marked resolved, not copied: {self.source}")
            return

        try:
            self.actual_target = self._find_free_sibling()
        except OSError as e:
            raise CollisionError(self.source, self.original_target, self.actual_target) from e
        self.state = FilePasteState.COLLISION_RESOLVED
        logger.info(f"Collision resolved: {self.original_target.name} -> {self.actual_target.name}")

    def _find_free_sibling(self) -> Path:
        for index in range(self.config.max_sibling_attempts):
            candidate = sibling_name(self.original_target, index)
            if not os.path.lexists(candidate):
                return candidate
        self.actual_target = candidate
        raise SiblingLimitExceededError(
            self.source, self.original_target, candidate, self.config.max_sibling_attempts
        )

    def _copy_to_target(self) -> None:
        """
        Copy the source to actual_target recursively without following links.

        A target created after the collision check fails the copy instead of
        being overwritten or merged into.
        """
        target = self.actual_target
        if os.path.lexists(target):
            raise FileExistsError(errno.EEXIST, "Target already exists", str(target))

        try:
            if self.source.is_symlink():
                shutil.copy2(self.source, target, follow_symlinks=False)
            elif self.source.is_dir():
                shutil.copytree(self.source, target, symlinks=True)
            else:
                shutil.copy2(self.source, target)
        except OSError:
            self._remove_partial_copy(target)
            raise

        logger.debug(f"Copied: {self.source} -> {target}")

    def _remove_partial_copy(self, target: Path) -> None:
        if not os.path.lexists(target):
            return
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            logger.warning(f"Could not remove partial copy {target}: {e}")

    def _delete_source(self) -> None:
        if self.config.verify_copies and not self._copy_matches_source():
            raise CopyVerificationError(self.source, self.actual_target)

        try:
            if self.source.is_dir() and not self.source.is_symlink():
                shutil.rmtree(self.source)
            else:
                self.source.unlink()
        except OSError as e:
            raise TransferIOError(
                self.source, self.actual_target, f"Could not delete source: {e}"
            ) from e

        self.source_deleted = True
        logger.info(f"Deleted source after paste: {self.source}")

    def _copy_matches_source(self) -> bool:
        source, target = self.source, self.actual_target

        if source.is_symlink():
            return target.is_symlink() and os.readlink(source) == os.readlink(target)

        if source.is_dir():
            if target.is_symlink() or not target.is_dir():
                return False
            source_tree = self._file_hasher.hash_tree(source)
            return source_tree is not None and source_tree == self._file_hasher.hash_tree(target)

        source_hash = self._file_hasher.hash_file(source)
        return source_hash is not None and source_hash == self._file_hasher.hash_file(target)

    def _record_error(self, error: Exception) -> None:
        if self.state is FilePasteState.COLLISION_DETECTED:
            self._redetect_collision = True
        self.error_state = ErrorState.ERROR
        self.last_error = error
        self._error_solution = ErrorSolution.NONE
        logger.warning(f"Paste failed for {self.source}: {error}")

    def _clear_error(self) -> None:
        self.error_state = ErrorState.NONE
        self.last_error = None
        self._error_solution = ErrorSolution.NONE
