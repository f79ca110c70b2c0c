"""
Core data models for the explorer core.

This module contains the following dataclasses:
- FavoriteEntry: A named favorite directory
- DirectoryAccessEntry: A directory entered by the user and how often
- PersistentState: Explorer state saved between sessions
- PasteSummary: Results of a paste operation

and the DirectoriesAccessed history container.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class FavoriteEntry:
    """A favorite directory shown in the favorites menu."""
    name: str                         # Display name (unique)
    path: Path                        # Favorite directory


@dataclass
class DirectoryAccessEntry:
    """Represents a directory the user entered during the session."""
    path: Path                        # Entered directory
    access_count: int = 1             # Number of times entered

    def __lt__(self, other: "DirectoryAccessEntry") -> bool:
        return self.access_count < other.access_count


@dataclass
class PersistentState:
    """Explorer state written on shutdown and restored on start."""
    current_dir: Path                 # Directory shown in the file list
    selected_path: Optional[Path]     # Selected file (absolute), None if nothing selected


@dataclass
class PasteSummary:
    """Summary of a paste operation returned by TransferBatch.summary()."""
    total_items: int = 0              # Number of distinct sources
    files_copied: int = 0             # Items copied to their target
    siblings_created: int = 0         # Items copied under a _copyN name
    items_skipped: int = 0            # Items skipped by the operator
    collisions_ignored: int = 0       # Items marked resolved without copying
    sources_deleted: int = 0          # Sources removed after a verified copy
    items_failed: int = 0             # Items still in error
    errors: List[str] = field(default_factory=list)  # Error messages
    duration: float = 0.0             # Duration in seconds (set by the orchestrator)
    cancelled: bool = False           # Whether the batch was cancelled
    done: bool = False                # Whether every item is done


class DirectoriesAccessed:
    """Stores the directories the user entered, ordered by access time.

    The backing list is ordered oldest first; entering a known directory moves
    its entry to the end and increments its access count.
    """

    def __init__(self) -> None:
        self._entries: List[DirectoryAccessEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[DirectoryAccessEntry]:
        """Entries ordered oldest to newest."""
        return list(self._entries)

    def notify(self, path: Path) -> bool:
        """Record that the user entered ``path``.

        Returns:
            True if the directory was not known before, False if an existing
            entry was moved to the end.
        """
        for index, entry in enumerate(self._entries):
            if entry.path == path:
                del self._entries[index]
                entry.access_count += 1
                self._entries.append(entry)
                return False
        self._entries.append(DirectoryAccessEntry(path))
        return True

    def set_initial_entries(self, paths: List[Path]) -> None:
        """Append entries (oldest first) read from disk. Meant for an empty history."""
        self._entries.extend(DirectoryAccessEntry(path) for path in paths)

    def clear_entries(self) -> None:
        self._entries.clear()

    def sorted_by_access_time(self, max_entries: int) -> List[Path]:
        """Most recently entered directories first."""
        return [entry.path for entry in reversed(self._entries)][:max_entries]

    def sorted_by_access_count(self, max_entries: int) -> List[Path]:
        """Most frequently entered directories first; ties keep recency order."""
        by_count = sorted(reversed(self._entries), reverse=True)
        return [entry.path for entry in by_count][:max_entries]
