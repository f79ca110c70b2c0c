"""PasteLogger for logging paste operations in formatted output.

This module provides the PasteLogger class that writes a structured log file
of a paste operation: header, paste plan, one section per execution pass and
a summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from explorer_core.models import PasteSummary
from explorer_core.operations import TransferBatch


class PasteLogger:
    """Logger for paste operations with structured output format.

    Usage:
        with PasteLogger(log_path) as paste_log:
            paste_log.log_header(batch)
            batch.execute()
            paste_log.log_pass(batch)
            paste_log.log_summary(batch.summary())

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None) -> None:
        """Initialize the PasteLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.

        Raises:
            OSError: If the log file location is not writable.
        """
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._pass_counter = 0

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"paste_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not a directory.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")

    def __enter__(self) -> "PasteLogger":
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self, batch: TransferBatch) -> None:
        """Write the header and the paste plan."""
        self._write_separator()
        self._write_line("Explorer Core - Paste Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "MOVE" if batch.delete_sources_on_success else "COPY"
        self._write_line(f"Mode: {mode}")
        self._write_line(f"Destination: {batch.destination_dir.as_posix()}")
        self._write_line(f"Collision policy: {batch.default_collision_policy.value}")
        self._write_line("Sources:")
        for source in batch.sources:
            self._write_line(f"- {source.as_posix()}", indent=2)
        self._write_line("")

    def log_pass(self, batch: TransferBatch) -> None:
        """Write the state of every item after an execute() pass."""
        self._pass_counter += 1
        self._write_line(
            f"[{self._format_timestamp(datetime.now())}] Pass {self._pass_counter}"
        )
        for item in batch.items:
            status = item.state.name
            if item.did_fail():
                status = f"FAILED ({item.last_error})"
            elif item.skipped:
                status = "SKIPPED"
            elif item.marked_resolved:
                status = "COLLISION IGNORED"
            line = f"{item.source.name} -> {item.actual_target.name}: {status}"
            if item.source_deleted:
                line += " (source deleted)"
            self._write_line(line, indent=2)
        if batch.is_cancelled:
            self._write_line("Paste cancelled", indent=2)
        self._write_line("")

    def log_summary(self, summary: PasteSummary) -> None:
        """Write the summary section."""
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Items: {summary.total_items:,}")
        self._write_line(f"Copied: {summary.files_copied:,}")
        self._write_line(f"Copied as sibling: {summary.siblings_created:,}")
        self._write_line(f"Skipped: {summary.items_skipped:,}")
        self._write_line(f"Collisions ignored: {summary.collisions_ignored:,}")
        self._write_line(f"Sources deleted: {summary.sources_deleted:,}")
        self._write_line(f"Failed: {summary.items_failed:,}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"- {error}", indent=2)

        self._write_line(f"Duration: {self._format_duration(summary.duration)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration as "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
