"""Persistence package for the explorer core.

- ResourceFile, FavoritesFile, DirectoriesAccessedFile: Line-oriented resource files
- CachedResource: Modification-time validated cache around a resource file
- StorageManager: Location and format of all persisted files
"""

from .resource_file import (
    DirectoriesAccessedFile,
    FavoritesFile,
    ResourceFile,
    ensure_regular_file_exists,
    parse_key_value_lines,
)
from .cached_resource import CachedResource, ResourceSource
from .storage_manager import StorageManager, default_dir

__all__ = [
    "DirectoriesAccessedFile",
    "FavoritesFile",
    "ResourceFile",
    "ensure_regular_file_exists",
    "parse_key_value_lines",
    "CachedResource",
    "ResourceSource",
    "StorageManager",
    "default_dir",
]
