"""
Resource files: small UTF-8 text files holding one persisted resource.

A ResourceFile converts between the lines of its file and a typed resource.
Subclasses implement the conversion; the base class handles file access.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Generic, Iterable, List, Optional, TextIO, TypeVar

from explorer_core.models import DirectoriesAccessed, FavoriteEntry

# Configure module logger
logger = logging.getLogger('storage')

R = TypeVar("R")


def parse_key_value_lines(lines: Iterable[str]) -> Dict[str, Optional[str]]:
    """
    Parse ``key=value`` lines.

    Blank lines and lines with an empty key are skipped. A line without ``=``
    maps its key to None. Later keys replace earlier ones; insertion order is kept.
    """
    result: Dict[str, Optional[str]] = {}
    for number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        key, separator, value = line.partition("=")
        if not key.strip():
            logger.debug(f"Line {number} has an empty key and is skipped")
            continue
        result[key] = value if separator else None
    return result


def ensure_regular_file_exists(path: Path) -> bool:
    """Create ``path`` (and its parents) if missing. False if it is not a regular file."""
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            logger.info(f"{type(e).__name__}: failed to create file '{path.as_posix()}': {e}")
            return False
    return path.is_file()


class ResourceFile(ABC, Generic[R]):
    """
    A resource persisted as a whole-file text document.

    Attributes:
        name: Resource name used in log messages.
        path: Location of the file.
    """

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path

    @abstractmethod
    def write_resource(self, writer: TextIO, resource: R) -> bool:
        """Write ``resource`` to ``writer``; False if it cannot be represented."""

    @abstractmethod
    def get_updated_resource(self, lines: List[str], resource: R) -> Optional[R]:
        """Build the resource from ``lines``; ``resource`` is the currently cached value."""

    def ensure_existence(self) -> bool:
        return ensure_regular_file_exists(self.path)

    def last_modified_time(self) -> Optional[float]:
        """Modification time of the file, or None if it is not a regular file."""
        try:
            if not self.path.is_file():
                return None
            return self.path.stat().st_mtime
        except OSError:
            return None

    def read(self, prior: R) -> Optional[R]:
        """
        Read the resource from disk.

        Returns:
            The resource, or None if the file is missing, unreadable or holds
            no non-blank line.
        """
        if not self.path.is_file():
            return None
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {self.name} from {self.path}: {e}")
            return None
        if not any(line.strip() for line in lines):
            return None
        return self.get_updated_resource(lines, prior)

    def write(self, resource: R) -> bool:
        """Write the resource to disk, creating the file if needed."""
        if not self.ensure_existence():
            return False
        try:
            with open(self.path, "w", encoding="utf-8", newline="\n") as writer:
                return self.write_resource(writer, resource)
        except OSError as e:
            logger.warning(f"Could not write {self.name} to {self.path}: {e}")
            return False


class FavoritesFile(ResourceFile[List[FavoriteEntry]]):
    """Favorites as ``name=portable/path`` lines."""

    def write_resource(self, writer: TextIO, resource: List[FavoriteEntry]) -> bool:
        for favorite in resource:
            writer.write(f"{favorite.name}={favorite.path.as_posix()}\n")
        return True

    def get_updated_resource(
        self, lines: List[str], resource: List[FavoriteEntry]
    ) -> Optional[List[FavoriteEntry]]:
        entries = parse_key_value_lines(lines)
        return [
            FavoriteEntry(name, Path(value))
            for name, value in entries.items()
            if value is not None
        ]


class DirectoriesAccessedFile(ResourceFile[DirectoriesAccessed]):
    """Directory access history, one portable path per line, oldest first."""

    # Most recent directories kept when writing
    MAX_ENTRIES = 100

    def write_resource(self, writer: TextIO, resource: DirectoriesAccessed) -> bool:
        recent = resource.sorted_by_access_time(self.MAX_ENTRIES)
        for path in reversed(recent):
            writer.write(path.as_posix() + "\n")
        return True

    def get_updated_resource(
        self, lines: List[str], resource: DirectoriesAccessed
    ) -> Optional[DirectoriesAccessed]:
        resource.clear_entries()
        resource.set_initial_entries([Path(line.strip()) for line in lines if line.strip()])
        return resource
