"""
ExplorerSession: the per-process state of the explorer.

The session owns the cached favorites and directory history. It is created
once by the front end and passed to whatever needs it; the caches live as
long as the session.

Example:
    >>> session = ExplorerSession(StorageManager(Path("files_explorer_persistence")))
    >>> session.notify_directory_accessed(Path("/data/projects"))
    >>> session.recent_directories(10)
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from explorer_core.models import CollisionPolicy, DirectoriesAccessed, FavoriteEntry
from explorer_core.operations import TransferBatch
from explorer_core.persistence import CachedResource, StorageManager

# Configure module logger
logger = logging.getLogger('storage')

# Characters that would break the name=path line format of the favorites file
INVALID_FAVORITE_NAME_CHARS = ("=", "\n", "\r")


class ExplorerSession:
    """
    Explicitly constructed owner of the explorer caches.

    Attributes:
        storage: Storage manager locating the persisted files.
        favorites: Cached favorites list.
        directories_accessed: Cached directory history.
    """

    def __init__(
        self,
        storage: StorageManager,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.favorites: CachedResource[List[FavoriteEntry]] = CachedResource(
            storage.favorites, [], clock=clock, on_write_failure=self._log_write_failure
        )
        self.directories_accessed: CachedResource[DirectoriesAccessed] = CachedResource(
            storage.directories_accessed,
            DirectoriesAccessed(),
            clock=clock,
            on_write_failure=self._log_write_failure,
        )

    @staticmethod
    def _log_write_failure(resource: CachedResource) -> None:
        logger.warning(
            f"Could not persist {getattr(resource.resource_file, 'name', 'resource')}, "
            "the change is kept in memory and written later"
        )

    def get_favorites(self) -> List[FavoriteEntry]:
        return list(self.favorites.read_and_get())

    def add_favorite(self, path: Path, name: Optional[str] = None) -> bool:
        """
        Add ``path`` as a favorite named ``name`` (the directory name by default).

        Returns:
            False if a favorite with the same name exists, True otherwise.

        Raises:
            ValueError: If the name contains ``=`` or a line break, which the
                favorites file cannot store.
        """
        path = Path(os.path.abspath(path))
        entry = FavoriteEntry(name or path.name or path.as_posix(), path)
        if any(char in entry.name for char in INVALID_FAVORITE_NAME_CHARS):
            raise ValueError(f"Favorite name must not contain '=' or line breaks: {entry.name!r}")
        favorites = self.get_favorites()
        duplicate = next((fav for fav in favorites if fav.name == entry.name), None)
        if duplicate is not None:
            logger.debug(f"New favorite {entry} has a duplicate (by name): {duplicate}")
            return False
        logger.debug(f"Adding favorite {entry}")
        favorites.append(entry)
        self.favorites.set_and_write(favorites)
        return True

    def remove_favorite(self, name: str) -> bool:
        """Remove the favorite named ``name``; False if there is none."""
        favorites = self.get_favorites()
        remaining = [fav for fav in favorites if fav.name != name]
        if len(remaining) == len(favorites):
            return False
        self.favorites.set_and_write(remaining)
        return True

    def notify_directory_accessed(self, path: Path) -> None:
        """Record that the user entered ``path``."""
        path = Path(os.path.abspath(path))

        def record(history: DirectoriesAccessed) -> DirectoriesAccessed:
            history.notify(path)
            return history

        self.directories_accessed.read_and_write(record)

    def recent_directories(self, max_entries: int, by_count: bool = False) -> List[Path]:
        """Recently entered directories, newest (or most frequent) first."""
        history = self.directories_accessed.read_and_get()
        if by_count:
            return history.sorted_by_access_count(max_entries)
        return history.sorted_by_access_time(max_entries)

    def start_paste(
        self,
        sources: Iterable[Path],
        destination_dir: Path,
        cut: bool,
        policy: CollisionPolicy = CollisionPolicy.RESOLVE_LATER,
        **options,
    ) -> TransferBatch:
        """
        Create the paste batch for a clipboard paste.

        Cut sources are deleted after they have been pasted. ``options`` are
        passed on to TransferBatch.

        Raises:
            InvalidBatchError: If the request is invalid.
        """
        return TransferBatch(
            sources,
            destination_dir,
            delete_sources_on_success=cut,
            default_collision_policy=policy,
            **options,
        )
