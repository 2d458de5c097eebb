"""Types pour le module s0_geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class CoordinatesType(Enum):
    """Espace de coordonnées dans lequel une région est exprimée."""
    SCREENSHOT_AS_IS = "screenshot_as_is"   # Telle que capturée dans la capture
    CONTEXT_AS_IS = "context_as_is"         # Relative au viewport courant
    CONTEXT_RELATIVE = "context_relative"   # Relative à la page entière


@dataclass(frozen=True)
class Point:
    """Décalage en pixels (x, y)."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def scale(self, ratio: float) -> "Point":
        return Point(int(math.ceil(self.x * ratio)), int(math.ceil(self.y * ratio)))

    def to_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


ORIGIN = Point(0, 0)


@dataclass(frozen=True)
class Size:
    """Dimensions (width, height), jamais négatives."""
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Taille négative interdite: {self.width}x{self.height}")

    def scale(self, ratio: float) -> "Size":
        return Size(int(math.ceil(self.width * ratio)), int(math.ceil(self.height * ratio)))

    def covers(self, other: "Size") -> bool:
        """True si cette taille est au moins aussi grande que ``other`` sur les deux axes."""
        return self.width >= other.width and self.height >= other.height

    def to_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Region:
    """
    Rectangle entier étiqueté par son espace de coordonnées.

    L'égalité est structurelle sur (left, top, width, height) ; l'espace de
    coordonnées n'entre pas dans la comparaison.
    """
    left: int
    top: int
    width: int
    height: int
    coordinates_type: CoordinatesType = field(default=CoordinatesType.SCREENSHOT_AS_IS, compare=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Région de taille négative: {self.width}x{self.height}")

    @classmethod
    def from_location_and_size(
        cls,
        location: Point,
        size: Size,
        coordinates_type: CoordinatesType = CoordinatesType.SCREENSHOT_AS_IS,
    ) -> "Region":
        return cls(location.x, location.y, size.width, size.height, coordinates_type)

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def location(self) -> Point:
        return Point(self.left, self.top)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def middle_offset(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def is_empty(self) -> bool:
        return self == EMPTY

    def offset(self, dx: int, dy: int) -> "Region":
        return Region.from_location_and_size(self.location.offset(dx, dy), self.size, self.coordinates_type)

    def scale(self, ratio: float) -> "Region":
        """Région mise à l'échelle : la position est aussi mise à l'échelle."""
        return Region.from_location_and_size(self.location.scale(ratio), self.size.scale(ratio), self.coordinates_type)

    def with_coordinates_type(self, coordinates_type: CoordinatesType) -> "Region":
        return Region(self.left, self.top, self.width, self.height, coordinates_type)

    def contains_region(self, other: "Region") -> bool:
        return (
            self.top <= other.top
            and self.left <= other.left
            and self.bottom >= other.bottom
            and self.right >= other.right
        )

    def contains_location(self, location: Point) -> bool:
        # Intervalle fermé : les bords droit et bas sont inclus.
        return (
            self.left <= location.x <= self.right
            and self.top <= location.y <= self.bottom
        )

    def is_intersected(self, other: "Region") -> bool:
        horizontal = (self.left <= other.left <= self.right) or (other.left <= self.left <= other.right)
        vertical = (self.top <= other.top <= self.bottom) or (other.top <= self.top <= other.bottom)
        return horizontal and vertical

    def intersect(self, other: "Region") -> "Region":
        """Retourne l'intersection avec ``other`` (EMPTY si disjointes)."""
        if not self.is_intersected(other):
            return EMPTY

        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Region(left, top, right - left, bottom - top, self.coordinates_type)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.width, self.height)

    def to_box(self) -> Tuple[int, int, int, int]:
        """Boîte (left, top, right, bottom) au format PIL."""
        return (self.left, self.top, self.right, self.bottom)

    def __str__(self) -> str:
        return f"({self.left}, {self.top}) {self.width}x{self.height}, {self.coordinates_type.value}"


EMPTY = Region(0, 0, 0, 0)
