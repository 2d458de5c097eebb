"""Module s2_viewport : Dimensionnement exact du viewport."""

from .types import SizingOutcome, SizingResult, ViewportTarget
from .sizer import ViewportSizer, set_viewport_size

__all__ = [
    "SizingOutcome",
    "SizingResult",
    "ViewportTarget",
    "ViewportSizer",
    "set_viewport_size",
]
