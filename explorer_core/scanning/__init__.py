"""File scanning package for the explorer core.

- FileHasher: Computes SHA256 hashes of files and directory trees with an
  (path, mtime) cache; used to verify copies before a source is removed.

Example:
    >>> from explorer_core.scanning import FileHasher
    >>> hasher = FileHasher()
    >>> tree = hasher.hash_tree(Path("/data/photos"))
"""

from .file_hasher import FileHasher

__all__ = ["FileHasher"]
