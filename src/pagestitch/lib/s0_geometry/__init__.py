"""Module s0_geometry : Points, tailles, régions et tuilage."""

from .types import Point, Size, Region, CoordinatesType, EMPTY, ORIGIN
from .tiling import get_sub_regions, sub_regions_with_fixed_size, sub_regions_with_varying_size

__all__ = [
    # Types
    "Point",
    "Size",
    "Region",
    "CoordinatesType",
    "EMPTY",
    "ORIGIN",
    # Tuilage
    "get_sub_regions",
    "sub_regions_with_fixed_size",
    "sub_regions_with_varying_size",
]
