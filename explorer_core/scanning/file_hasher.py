"""File hashing utility with caching support.

This module provides the FileHasher class for computing SHA256 hashes of files
and directory trees. The paste engine uses it to verify a copy before the
source is removed.

Example:
    >>> from explorer_core.scanning import FileHasher
    >>> hasher = FileHasher()
    >>> hash_value = hasher.hash_file(Path("/path/to/file.txt"))
    >>> if hash_value:
    ...     print(f"SHA256: {hash_value}")
"""

import hashlib
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Buffer size for chunked file reading (8KB)
CHUNK_SIZE = 8192

# Tree entries for anything that is not a regular file
DIRECTORY_MARKER = "<dir>"
LINK_PREFIX = "<link>"


class FileHasher:
    """Computes SHA256 hashes of files with caching support.

    Hashes are cached keyed by (file_path, modification_time), so a file is
    not re-hashed while unchanged and a modified file is hashed again.

    Attributes:
        _cache: Dictionary mapping (path, mtime) tuples to SHA256 hex digests.
        _errors: List of error messages encountered during hashing operations.
        _cache_hits: Counter for cache hits.
        _cache_misses: Counter for cache misses.
    """

    def __init__(self) -> None:
        """Initialize the FileHasher with an empty cache."""
        self._cache: Dict[Tuple[Path, float], str] = {}
        self._errors: List[str] = []
        self._cache_hits: int = 0
        self._cache_misses: int = 0

    def hash_file(self, file_path: Path) -> Optional[str]:
        """Compute the SHA256 hash of a regular file.

        Symbolic links are not followed; hashing a link returns None.

        Args:
            file_path: Path to the file to hash.

        Returns:
            The SHA256 hex digest of the file, or None if an error occurred.
        """
        try:
            if file_path.is_symlink() or not file_path.is_file():
                self._errors.append(f"Not a regular file: {file_path}")
                return None

            mtime = file_path.stat().st_mtime
            cache_key = (file_path.absolute(), mtime)
            if cache_key in self._cache:
                self._cache_hits += 1
                return self._cache[cache_key]

            self._cache_misses += 1
            hash_value = self._compute_hash(file_path)
            if hash_value is not None:
                self._cache[cache_key] = hash_value
            return hash_value

        except PermissionError:
            self._errors.append(f"Permission denied: {file_path}")
            return None
        except OSError as e:
            self._errors.append(f"OS error reading {file_path}: {e}")
            return None

    def hash_tree(self, root: Path) -> Optional[Dict[str, str]]:
        """Describe a directory tree for comparison.

        Maps every entry below ``root`` (relative POSIX path) to its SHA256
        hash, a directory marker, or the target of a symbolic link. Links are
        recorded, never followed.

        Returns:
            The mapping, or None if any file could not be hashed.
        """
        tree: Dict[str, str] = {}
        for current, dirs, files in os.walk(root, followlinks=False):
            current_path = Path(current)
            for name in dirs + files:
                entry = current_path / name
                relative = entry.relative_to(root).as_posix()
                if entry.is_symlink():
                    tree[relative] = LINK_PREFIX + os.readlink(entry)
                elif entry.is_dir():
                    tree[relative] = DIRECTORY_MARKER
                else:
                    hash_value = self.hash_file(entry)
                    if hash_value is None:
                        return None
                    tree[relative] = hash_value
        return tree

    def _compute_hash(self, file_path: Path) -> Optional[str]:
        """Compute SHA256 hash by reading file in chunks."""
        try:
            sha256_hash = hashlib.sha256()
            with open(file_path, "rb") as f:
                while True:
                    chunk = f.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    sha256_hash.update(chunk)
            return sha256_hash.hexdigest()

        except PermissionError:
            self._errors.append(f"Permission denied reading: {file_path}")
            return None
        except OSError as e:
            self._errors.append(f"Error reading {file_path}: {e}")
            return None

    def clear_cache(self) -> None:
        """Clear the hash cache and reset the hit/miss counters."""
        self._cache.clear()
        self._cache_hits = 0
        self._cache_misses = 0

    def get_cache_stats(self) -> Dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with 'size', 'hits' and 'misses'.
        """
        return {
            "size": len(self._cache),
            "hits": self._cache_hits,
            "misses": self._cache_misses,
        }

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during hashing operations."""
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
