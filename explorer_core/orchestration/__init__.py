"""Workflow orchestration package for the explorer core.

This package contains orchestration components for paste operations:
- PasteLogger: Structured logging of a paste operation to a log file.
- PasteOrchestrator: Drives a paste batch through execution and remediation.
"""

from explorer_core.orchestration.paste_logger import PasteLogger
from explorer_core.orchestration.paste_orchestrator import PasteOrchestrator

__all__ = ["PasteLogger", "PasteOrchestrator"]
