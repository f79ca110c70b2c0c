"""
StorageManager: location and format of every file the explorer persists.

Files below the storage directory:
- favorites.txt: favorites as name=path lines
- directories_accessed.txt: directory history, oldest first
- explorer_state.txt: currentDir and selectedFile written on shutdown
- version.txt: format version marker
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from explorer_core.models import PersistentState
from explorer_core.persistence.resource_file import (
    DirectoriesAccessedFile,
    FavoritesFile,
    parse_key_value_lines,
)

# Configure module logger
logger = logging.getLogger('storage')


def default_dir() -> Path:
    """Directory shown when no state was saved."""
    return Path.home()


class StorageManager:
    """
    Reads and writes the persisted explorer files.

    Attributes:
        storage_path: Directory holding every persisted file.
        favorites: Resource file of the favorites list.
        directories_accessed: Resource file of the directory history.
        state_file: Path of the explorer state file.
    """

    FILE_EXPLORER_STATE = "explorer_state.txt"
    FILE_VERSION = "version.txt"
    FILE_FAVORITES = "favorites.txt"
    FILE_DIRECTORIES_ACCESSED = "directories_accessed.txt"

    KEY_CURRENT_DIR = "currentDir"
    KEY_SELECTED_FILE = "selectedFile"

    VERSION = "1.0"

    def __init__(self, storage_path: Path) -> None:
        self.storage_path = Path(storage_path)
        self.favorites = FavoritesFile("favorites", self.storage_path / self.FILE_FAVORITES)
        self.directories_accessed = DirectoriesAccessedFile(
            "directoriesAccessed", self.storage_path / self.FILE_DIRECTORIES_ACCESSED
        )
        self.state_file = self.storage_path / self.FILE_EXPLORER_STATE

    @property
    def version_file(self) -> Path:
        return self.storage_path / self.FILE_VERSION

    def read(self) -> PersistentState:
        """
        Read the explorer state.

        A missing state file or currentDir falls back to the home directory;
        an empty selectedFile means nothing is selected. The version file is
        not checked.

        Raises:
            OSError: If the state file exists but cannot be read.
        """
        values: Dict[str, Optional[str]] = {}
        if self.state_file.is_file():
            logger.debug(f"Reading state file '{self.state_file.as_posix()}'")
            values = parse_key_value_lines(
                self.state_file.read_text(encoding="utf-8").splitlines()
            )
        else:
            logger.info("State file does not exist or is not a regular file")

        current = values.get(self.KEY_CURRENT_DIR)
        current_dir = Path(current) if current else default_dir()
        selected = values.get(self.KEY_SELECTED_FILE)
        selected_path = current_dir / selected if selected else None
        return PersistentState(current_dir=current_dir, selected_path=selected_path)

    def write(self, state: PersistentState) -> None:
        """
        Write the explorer state and the version marker.

        Raises:
            OSError: If the storage directory or a file cannot be written.
        """
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.version_file.write_text(self.VERSION, encoding="utf-8")

        selected = ""
        if state.selected_path is not None:
            selected = Path(os.path.relpath(state.selected_path, state.current_dir)).as_posix()

        with open(self.state_file, "w", encoding="utf-8", newline="\n") as writer:
            writer.write(f"{self.KEY_CURRENT_DIR}={state.current_dir.as_posix()}\n")
            writer.write(f"{self.KEY_SELECTED_FILE}={selected}\n")
        logger.debug(f"Wrote state file '{self.state_file.as_posix()}'")
