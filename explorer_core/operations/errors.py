"""
Exceptions raised by the paste engine.

Errors of a single item are recorded on its TransferItem and never escape
TransferBatch.execute(). Only batch construction raises to the caller.
"""

from pathlib import Path
from typing import Optional


class InvalidBatchError(ValueError):
    """The paste request cannot be turned into a batch."""


class SelfContainmentError(InvalidBatchError):
    """A source directory would be copied into itself or one of its descendants."""

    def __init__(self, source: Path, destination: Path) -> None:
        self.source = source
        self.destination = destination
        super().__init__(
            f"Cannot paste directory {source} into itself or its descendant {destination}"
        )


class PasteError(Exception):
    """Base class for errors recorded on a paste item."""

    def __init__(self, source: Path, message: str) -> None:
        self.source = source
        super().__init__(message)


class SourceVanishedError(PasteError):
    """The source no longer exists at copy time."""

    def __init__(self, source: Path) -> None:
        super().__init__(source, f"Source does not exist: {source}")


class CollisionError(PasteError):
    """Resolving a collision at the paste target failed."""

    def __init__(
        self,
        source: Path,
        original_target: Path,
        actual_target: Path,
        message: str = "Error while resolving paste collision.",
    ) -> None:
        self.original_target = original_target
        self.actual_target = actual_target
        super().__init__(
            source,
            f"({actual_target.as_posix()}) {message} [{source} -> {original_target}]",
        )


class UnresolvedCollisionError(CollisionError):
    """A collision is left for the caller to resolve."""

    def __init__(self, source: Path, original_target: Path, actual_target: Path) -> None:
        super().__init__(
            source, original_target, actual_target,
            "Target already exists, collision left unresolved.",
        )


class SiblingLimitExceededError(CollisionError):
    """No free sibling name was found within the attempt limit."""

    def __init__(
        self, source: Path, original_target: Path, actual_target: Path, attempts: int
    ) -> None:
        self.attempts = attempts
        super().__init__(
            source, original_target, actual_target,
            f"No free sibling name after {attempts} attempts.",
        )


class TransferIOError(PasteError):
    """Copying or deleting failed with an OS error."""

    def __init__(self, source: Path, target: Optional[Path], message: str) -> None:
        self.target = target
        super().__init__(source, message)


class CopyVerificationError(PasteError):
    """The pasted copy does not match its source, so the source is kept."""

    def __init__(self, source: Path, target: Path) -> None:
        self.target = target
        super().__init__(
            source, f"Copy at {target} does not match {source}, source not deleted"
        )
