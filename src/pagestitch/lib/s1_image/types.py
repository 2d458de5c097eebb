"""Types pour le module s1_image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pagestitch.config import IMAGE_CONFIG
from pagestitch.lib.s0_geometry import Point, Region

if TYPE_CHECKING:
    from .buffer import ImageBuffer


@dataclass(frozen=True)
class ImageConfig:
    """Configuration du buffer image."""
    image_format: str = IMAGE_CONFIG['format']
    decode_enabled: bool = IMAGE_CONFIG['decode_enabled']


DEFAULT_IMAGE_CONFIG = ImageConfig()


@dataclass
class Tile:
    """Tuile capturée : région demandée, image obtenue, position atteinte."""
    region: Region
    image: "ImageBuffer"
    position: Point
