"""Providers d'échelle, de découpe et de région."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from pagestitch.lib.s0_browser import page_utils
from pagestitch.lib.s0_browser.types import DriverApi
from pagestitch.lib.s0_geometry import CoordinatesType, Region, Size
from pagestitch.lib.s1_image import ImageBuffer


# --- Échelle --------------------------------------------------------------- #

@dataclass(frozen=True)
class ScaleProvider:
    scale_ratio: float = 1.0


class ScaleProviderFactory(Protocol):
    def get_scale_provider(self, image_width: int) -> ScaleProvider: ...


class NullScaleProviderFactory:
    """Aucune mise à l'échelle."""

    def get_scale_provider(self, image_width: int) -> ScaleProvider:
        return ScaleProvider(1.0)


class FixedScaleProviderFactory:
    """Ratio fixe, quelle que soit la largeur mesurée."""

    def __init__(self, scale_ratio: float):
        if scale_ratio <= 0:
            raise ValueError(f"Ratio d'échelle invalide: {scale_ratio}")
        self.scale_ratio = scale_ratio

    def get_scale_provider(self, image_width: int) -> ScaleProvider:
        return ScaleProvider(self.scale_ratio)


class ContextBasedScaleProviderFactory:
    """
    Déduit le ratio de la largeur de l'image capturée.

    Une image de la largeur du viewport (ou de la page entière) n'est pas mise à
    l'échelle ; sinon elle est supposée capturée en pixels physiques et ramenée
    par 1 / device pixel ratio.
    """

    ALLOWED_VIEWPORT_DEVIATION = 1
    ALLOWED_ENTIRE_SIZE_DEVIATION = 10

    def __init__(self, entire_size: Size, viewport_size: Size, device_pixel_ratio: float):
        self.entire_size = entire_size
        self.viewport_size = viewport_size
        self.device_pixel_ratio = device_pixel_ratio or 1.0

    def get_scale_provider(self, image_width: int) -> ScaleProvider:
        viewport_width = self.viewport_size.width
        entire_width = self.entire_size.width
        if (abs(image_width - viewport_width) <= self.ALLOWED_VIEWPORT_DEVIATION
                or abs(image_width - entire_width) <= self.ALLOWED_ENTIRE_SIZE_DEVIATION):
            return ScaleProvider(1.0)
        return ScaleProvider(1.0 / self.device_pixel_ratio)


# --- Découpe --------------------------------------------------------------- #

class CutProvider(Protocol):
    def cut(self, image: ImageBuffer) -> ImageBuffer: ...


class NullCutProvider:
    def cut(self, image: ImageBuffer) -> ImageBuffer:
        return image


@dataclass(frozen=True)
class FixedCutProvider:
    """Retire des bordures fixes (barres système, chrome mobile)."""
    header: int = 0
    footer: int = 0
    left: int = 0
    right: int = 0

    def cut(self, image: ImageBuffer) -> ImageBuffer:
        size = image.size
        region = Region(
            self.left,
            self.header,
            max(0, size.width - self.left - self.right),
            max(0, size.height - self.header - self.footer),
        )
        return image.crop(region)


# --- Région ---------------------------------------------------------------- #

class RegionProvider(Protocol):
    def get_region(self, image: ImageBuffer) -> Region: ...


@dataclass(frozen=True)
class FixedRegionProvider:
    region: Region

    def get_region(self, image: ImageBuffer) -> Region:
        return self.region.with_coordinates_type(CoordinatesType.SCREENSHOT_AS_IS)


class ElementRegionProvider:
    """Région d'un élément (bordures comprises) dans la capture du viewport."""

    def __init__(self, driver: DriverApi, element: Any, include_borders: bool = True):
        self.driver = driver
        self.element = element
        self.include_borders = include_borders

    def get_region(self, image: ImageBuffer) -> Region:
        region = page_utils.get_element_region(self.driver, self.element, self.include_borders)
        return region.with_coordinates_type(CoordinatesType.SCREENSHOT_AS_IS)
