"""Explorer Core - paste engine and persisted resources of a file browser.

Pastes files and directories into a destination with per-file collision
handling, retry, skip and cancellation, and caches small persisted resource
files (favorites, recently accessed directories) by modification time.
"""

__version__ = "1.0.0"

from .models import (
    CollisionPolicy,
    ErrorSolution,
    ErrorState,
    FavoriteEntry,
    FilePasteState,
    PasteSummary,
    PersistentState,
)
from .operations import TransferBatch, TransferItem
from .persistence import CachedResource, StorageManager
from .session import ExplorerSession

__all__ = [
    "__version__",
    "CollisionPolicy",
    "ErrorSolution",
    "ErrorState",
    "FavoriteEntry",
    "FilePasteState",
    "PasteSummary",
    "PersistentState",
    "TransferBatch",
    "TransferItem",
    "CachedResource",
    "StorageManager",
    "ExplorerSession",
]


def main() -> None:
    """Entry point for the explorer-core command.

    Imports and runs the Typer app from the explorer_core.cli module.
    """
    from explorer_core.cli import app
    app()
