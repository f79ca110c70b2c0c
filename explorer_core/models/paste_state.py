"""
Enums describing the state of a paste (transfer) operation.

- CollisionPolicy: How a name collision at the paste target is handled
- FilePasteState: Progress of a single pasted file or directory
- ErrorState: Whether the last attempt for a file failed
- ErrorSolution: Remediation chosen by the operator for a failed file
"""

from enum import Enum


class CollisionPolicy(Enum):
    """Defines how paste collisions are handled."""
    CREATE_SIBLING = "create_sibling"  # Paste next to the target as name_copyN.ext
    RESOLVE_LATER = "resolve_later"    # Leave unresolved, the caller decides later
    MARK_RESOLVED = "mark_resolved"    # Skip the copy and declare success


class FilePasteState(Enum):
    """Forward-only progress of a single paste item."""
    INIT = "init"
    COLLISION_DETECTED = "collision_detected"
    COLLISION_RESOLVED = "collision_resolved"
    TARGET_COPIED = "target_copied"    # Copied, source deletion not handled yet
    DONE = "done"


class ErrorState(Enum):
    """Error flag of a paste item."""
    NONE = "none"
    ERROR = "error"


class ErrorSolution(Enum):
    """Remediation for a failed paste item, applied on the next attempt."""
    NONE = "none"
    SKIP = "skip"
    RETRY = "retry"
    CANCEL = "cancel"
