"""File operations package for the explorer core.

This package provides the paste engine and deletion helpers:
- TransferBatch: Pastes a set of sources into a destination directory
- TransferItem: Per-source state machine driven by the batch
- delete_path, selection_after_delete: Deleting entries from the file list

Example:
    >>> from explorer_core.operations import TransferBatch
    >>> from explorer_core.models import CollisionPolicy
    >>> batch = TransferBatch(sources, destination,
    ...                       default_collision_policy=CollisionPolicy.CREATE_SIBLING)
    >>> batch.execute()
    >>> print(f"Done: {batch.is_done}, failed: {len(batch.get_failed_items())}")
"""

from .errors import (
    CollisionError,
    CopyVerificationError,
    InvalidBatchError,
    PasteError,
    SelfContainmentError,
    SiblingLimitExceededError,
    SourceVanishedError,
    TransferIOError,
    UnresolvedCollisionError,
)
from .transfer_item import TransferConfig, TransferItem, sibling_name
from .transfer_batch import TransferBatch, is_self_containing
from .deletion import (
    DeleteOutcome,
    NoTrashCapability,
    Send2TrashCapability,
    TrashCapability,
    delete_path,
    selection_after_delete,
)

__all__ = [
    "CollisionError",
    "CopyVerificationError",
    "InvalidBatchError",
    "PasteError",
    "SelfContainmentError",
    "SiblingLimitExceededError",
    "SourceVanishedError",
    "TransferIOError",
    "UnresolvedCollisionError",
    "TransferConfig",
    "TransferItem",
    "sibling_name",
    "TransferBatch",
    "is_self_containing",
    "DeleteOutcome",
    "NoTrashCapability",
    "Send2TrashCapability",
    "TrashCapability",
    "delete_path",
    "selection_after_delete",
]
