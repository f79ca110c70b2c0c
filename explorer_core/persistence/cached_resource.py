"""
Read-through/write-through cache around a resource file.

The cache is validated against the modification time of the backing file,
so repeated reads do not touch the disk while the file is unchanged, external
edits are picked up, and a failed write is retried on a later read.
"""

import logging
import time
from typing import Callable, Generic, Optional, Protocol, TypeVar

# Configure module logger
logger = logging.getLogger('resource_cache')

R = TypeVar("R")


class ResourceSource(Protocol[R]):
    """What CachedResource needs from a resource file."""

    def read(self, prior: R) -> Optional[R]:
        ...

    def write(self, resource: R) -> bool:
        ...

    def last_modified_time(self) -> Optional[float]:
        ...


class CachedResource(Generic[R]):
    """
    Caches the value of a resource file.

    The cached value is always the last value successfully read, written or
    adopted through set_and_write(). A failed write keeps the value and marks
    it for another write attempt.

    Attributes:
        resource_file: Collaborator reading and writing the file.
        cached_value: The current value.
        last_cache_update_time: File mtime (or wall-clock time after a failed
            write) the cached value corresponds to; None before the first load.
        last_failed_write_time: Time of the pending failed write, if any.
    """

    def __init__(
        self,
        resource_file: ResourceSource[R],
        initial_value: R,
        clock: Callable[[], float] = time.time,
        on_write_failure: Optional[Callable[["CachedResource[R]"], None]] = None,
    ) -> None:
        """
        Parameters:
            resource_file: Collaborator reading and writing the file.
            initial_value: Value served until the file is read.
            clock: Wall clock, in the same unit as file modification times.
            on_write_failure: Diagnostic callback invoked after each failed write.
        """
        self.resource_file = resource_file
        self.cached_value = initial_value
        self.last_cache_update_time: Optional[float] = None
        self.last_failed_write_time: Optional[float] = None
        self._clock = clock
        self._on_write_failure = on_write_failure

    @property
    def has_pending_write(self) -> bool:
        return self.last_failed_write_time is not None

    def read_and_get(self) -> R:
        """
        Return the current value, reading the file only if it changed.

        Never raises. If the file is unavailable or unreadable the cached
        value is returned. While the cache is fresh, a pending failed write is
        flushed if the file is still older than that write.
        """
        file_time = self.resource_file.last_modified_time()
        if file_time is None:
            return self.cached_value

        cache_time = self.last_cache_update_time
        if cache_time is not None and cache_time >= file_time:
            failed_time = self.last_failed_write_time
            if failed_time is not None and file_time < failed_time:
                logger.debug("Retrying failed write")
                self._write()
            return self.cached_value

        try:
            value = self.resource_file.read(self.cached_value)
        except OSError as e:
            logger.warning(f"Reading resource failed, serving cached value: {e}")
            return self.cached_value

        if value is None:
            # Unusable content; remember its mtime so it is not read again until edited
            self.last_cache_update_time = file_time
            return self.cached_value

        # The file is newer than anything pending, it wins
        self.cached_value = value
        self.last_cache_update_time = file_time
        self.last_failed_write_time = None
        return value

    def set_and_write(self, value: R) -> bool:
        """
        Adopt ``value`` and write it to the file.

        Returns:
            True if the write succeeded. On failure the value is still cached
            and the write is retried by a later read_and_get().
        """
        self.cached_value = value
        return self._write()

    def read_and_write(self, update: Callable[[R], Optional[R]]) -> bool:
        """
        Read the current value, apply ``update`` and write the result.

        ``update`` may mutate the value in place and return None, or return a
        replacement value.
        """
        value = self.read_and_get()
        updated = update(value)
        return self.set_and_write(value if updated is None else updated)

    def _write(self) -> bool:
        try:
            written = self.resource_file.write(self.cached_value)
        except OSError as e:
            logger.warning(f"Writing resource failed: {e}")
            written = False

        if written:
            file_time = self.resource_file.last_modified_time()
            self.last_cache_update_time = file_time if file_time is not None else self._clock()
            self.last_failed_write_time = None
            return True

        now = self._clock()
        self.last_cache_update_time = now
        self.last_failed_write_time = now
        logger.info("Write failed, cached value kept and write will be retried")
        if self._on_write_failure is not None:
            self._on_write_failure(self)
        return False
