"""Découpage d'une région conteneur en sous-régions (tuiles)."""

from __future__ import annotations

from typing import List

from .types import Region, Size


def _require_positive(size: Size, name: str) -> None:
    if size.width <= 0 or size.height <= 0:
        raise ValueError(f"{name} doit être strictement positive (reçu {size.width}x{size.height})")


def get_sub_regions(container: Region, sub_region_size: Size, fixed_size: bool = False) -> List[Region]:
    """
    Découpe ``container`` en sous-régions, ligne par ligne, de gauche à droite.

    Args:
        container: région à découper.
        sub_region_size: taille (maximale) de chaque sous-région.
        fixed_size: si False, les tuiles de bord sont rognées (aucun recouvrement) ;
            si True, toutes les tuiles ont exactement la taille demandée et la
            dernière ligne/colonne est recalée sur le bord (recouvrement).

    Returns:
        Liste ordonnée des sous-régions. Si la taille demandée couvre le conteneur,
        une seule région égale au conteneur est retournée.
    """
    if fixed_size:
        return sub_regions_with_fixed_size(container, sub_region_size)
    return sub_regions_with_varying_size(container, sub_region_size)


def sub_regions_with_fixed_size(container: Region, sub_region_size: Size) -> List[Region]:
    _require_positive(sub_region_size, "sub_region_size")

    width = min(sub_region_size.width, container.width)
    height = min(sub_region_size.height, container.height)

    if width == container.width and height == container.height:
        return [container]

    sub_regions: List[Region] = []
    bottom = container.top + container.height - 1
    right = container.left + container.width - 1

    current_top = container.top
    while current_top <= bottom:
        if current_top + height > bottom:
            current_top = (bottom - height) + 1

        current_left = container.left
        while current_left <= right:
            if current_left + width > right:
                current_left = (right - width) + 1

            sub_regions.append(Region(current_left, current_top, width, height, container.coordinates_type))
            current_left += width
        current_top += height

    return sub_regions


def sub_regions_with_varying_size(container: Region, max_sub_region_size: Size) -> List[Region]:
    _require_positive(max_sub_region_size, "max_sub_region_size")

    sub_regions: List[Region] = []
    bottom = container.bottom
    right = container.right

    current_top = container.top
    while current_top < bottom:
        current_bottom = min(current_top + max_sub_region_size.height, bottom)

        current_left = container.left
        while current_left < right:
            current_right = min(current_left + max_sub_region_size.width, right)
            sub_regions.append(
                Region(
                    current_left,
                    current_top,
                    current_right - current_left,
                    current_bottom - current_top,
                    container.coordinates_type,
                )
            )
            current_left += max_sub_region_size.width
        current_top += max_sub_region_size.height

    return sub_regions
