from __future__ import annotations

from typing import Iterable, Optional

from PIL import Image

from pagestitch.lib.s0_geometry import Size

from .buffer import ImageBuffer
from .types import ImageConfig, Tile


def stitch_tiles(
    entire_size: Size,
    tiles: Iterable[Tile],
    config: Optional[ImageConfig] = None,
) -> ImageBuffer:
    """
    Assemble les tuiles en une image de la taille de la page logique.

    Chaque tuile est collée à sa position atteinte, dans l'ordre fourni :
    à coordonnées égales, la dernière tuile écrite l'emporte. Les pixels qui
    débordent de la page sont ignorés.
    """
    composite = Image.new("RGB", entire_size.to_tuple(), "white")
    for tile in tiles:
        composite.paste(tile.image.image_data(), tile.position.to_tuple())
    return ImageBuffer.from_image(composite, config=config)
