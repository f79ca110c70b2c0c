"""PasteOrchestrator for driving a paste operation to completion.

This module provides the PasteOrchestrator class that coordinates a
TransferBatch, the PasteTUI and the PasteLogger: it executes the batch with
progress tracking, asks the operator how to remedy failed items, executes
again until the batch is done or cancelled, and reports a summary.

Example:
    from explorer_core.orchestration import PasteOrchestrator

    batch = session.start_paste(sources, Path("/backup"), cut=False)
    summary = PasteOrchestrator(batch, interactive=True).run()
"""

import sys
import time
from pathlib import Path
from typing import Optional

from explorer_core.models import PasteSummary
from explorer_core.operations import TransferBatch
from explorer_core.orchestration.paste_logger import PasteLogger
from explorer_core.ui import PasteTUI


class PasteOrchestrator:
    """Drives a TransferBatch through execution and remediation passes.

    Attributes:
        batch: The paste operation to drive.
        interactive: Whether failed items are reviewed with the operator. If
            False, a single pass is executed.
        log_file_path: Optional path of a structured paste log.
        verbose: Whether to display additional details.
    """

    def __init__(
        self,
        batch: TransferBatch,
        tui: Optional[PasteTUI] = None,
        interactive: bool = True,
        log_file_path: Optional[Path] = None,
        verbose: bool = False,
    ) -> None:
        self.batch = batch
        self.interactive = interactive
        self.log_file_path = log_file_path
        self.verbose = verbose
        self._tui = tui or PasteTUI()

    def run(self) -> PasteSummary:
        """Execute the paste operation.

        Returns:
            PasteSummary of the final state of the batch.
        """
        start_time = time.time()
        self._tui.display_paste_plan(self.batch)

        paste_log: Optional[PasteLogger] = None
        if self.log_file_path is not None:
            try:
                paste_log = PasteLogger(self.log_file_path)
            except OSError as e:
                print(f"Warning: Could not create log file: {e}", file=sys.stderr)

        if paste_log is None:
            return self._run_passes(None, start_time)

        with paste_log:
            paste_log.log_header(self.batch)
            summary = self._run_passes(paste_log, start_time)
            paste_log.log_summary(summary)
            if self.verbose:
                self._tui.console.print(f"[dim]Log file: {paste_log.get_log_path()}[/dim]")
            return summary

    def _run_passes(self, paste_log: Optional[PasteLogger], start_time: float) -> PasteSummary:
        self._execute_pass(paste_log)

        while self.interactive and not self.batch.is_done and not self.batch.is_cancelled:
            failed = self.batch.get_failed_items()
            if not failed:
                break
            try:
                self._tui.review_failed_items(failed)
            except KeyboardInterrupt:
                self._tui.console.print("\n[yellow]Paste cancelled by user.[/yellow]")
                self.batch.cancel()
                break
            self._execute_pass(paste_log)

        summary = self.batch.summary()
        summary.duration = time.time() - start_time
        self._tui.display_paste_summary(summary)
        return summary

    def _execute_pass(self, paste_log: Optional[PasteLogger]) -> None:
        progress, callback = self._tui.create_progress_callback(len(self.batch.items))
        self.batch.progress_callback = callback
        try:
            with progress:
                self.batch.execute()
        finally:
            self.batch.progress_callback = None

        if paste_log is not None:
            paste_log.log_pass(self.batch)

        if self.verbose:
            failed = len(self.batch.get_failed_items())
            self._tui.console.print(
                f"[dim]Pass finished: {failed} failed item(s), "
                f"done={self.batch.is_done}, cancelled={self.batch.is_cancelled}[/dim]"
            )
