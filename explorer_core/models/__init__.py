"""
Models package for the explorer core.

This package provides convenient imports for all data models:
- CollisionPolicy, FilePasteState, ErrorState, ErrorSolution: Paste enums
- FavoriteEntry: Named favorite directory
- DirectoryAccessEntry, DirectoriesAccessed: Directory access history
- PersistentState: Explorer state saved between sessions
- PasteSummary: Paste operation results
"""

from .paste_state import CollisionPolicy, ErrorSolution, ErrorState, FilePasteState
from .data_models import (
    DirectoriesAccessed,
    DirectoryAccessEntry,
    FavoriteEntry,
    PasteSummary,
    PersistentState,
)

__all__ = [
    "CollisionPolicy",
    "ErrorSolution",
    "ErrorState",
    "FilePasteState",
    "DirectoriesAccessed",
    "DirectoryAccessEntry",
    "FavoriteEntry",
    "PasteSummary",
    "PersistentState",
]
