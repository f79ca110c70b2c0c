"""Terminal UI package for the explorer core."""

from .paste_tui import PasteTUI

__all__ = ["PasteTUI"]
