"""Capture d'une tuile : screenshot du viewport puis normalisation."""

from __future__ import annotations

import time
from typing import Callable, Optional

from pagestitch.lib.s0_browser import page_utils
from pagestitch.lib.s0_browser.types import DriverApi
from pagestitch.lib.s0_geometry import ORIGIN, Region, Size
from pagestitch.lib.s1_image import ImageBuffer, ImageConfig
from pagestitch.lib.s7_debug import DebugScreenshotsProvider, NullDebugScreenshotsProvider

from .providers import CutProvider, NullCutProvider, NullScaleProviderFactory, ScaleProviderFactory
from .types import CaptureSettings


class ViewportCapture:
    """
    Pipeline d'une tuile, dans cet ordre :

    attente, screenshot, découpe, rotation automatique, ratio d'échelle,
    recadrage sur la région, mise à l'échelle, rotation, coordonnées.
    """

    def __init__(
        self,
        driver: DriverApi,
        viewport_size: Size,
        settings: CaptureSettings,
        scale_provider_factory: Optional[ScaleProviderFactory] = None,
        cut_provider: Optional[CutProvider] = None,
        debug_screenshots: Optional[DebugScreenshotsProvider] = None,
        image_config: Optional[ImageConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.viewport_size = viewport_size
        self.settings = settings
        self.scale_provider_factory = scale_provider_factory or NullScaleProviderFactory()
        self.cut_provider = cut_provider or NullCutProvider()
        self.debug_screenshots = debug_screenshots or NullDebugScreenshotsProvider()
        self.image_config = image_config
        self.sleep = sleep
        self.last_scale_ratio = 1.0

    def _rotation_for(self, size: Size) -> int:
        if (self.settings.is_landscape and self.settings.automatic_rotation
                and size.height > size.width):
            return self.settings.automatic_rotation_degrees
        return self.settings.rotation_degrees

    def capture(
        self,
        region: Optional[Region] = None,
        checkpoint: Optional[Callable[[], None]] = None,
    ) -> ImageBuffer:
        if self.settings.wait_before_screenshots > 0:
            self.sleep(self.settings.wait_before_screenshots)
        if checkpoint is not None:
            checkpoint()

        image = ImageBuffer(self.driver.take_screenshot(), config=self.image_config)
        self.debug_screenshots.save(image, "original")

        image = self.cut_provider.cut(image)

        rotation = self._rotation_for(image.size)
        scale_ratio = self.scale_provider_factory.get_scale_provider(image.width).scale_ratio
        self.last_scale_ratio = scale_ratio

        if region is not None and not region.is_empty():
            image = image.crop(region.scale(1 / scale_ratio))
            self.debug_screenshots.save(image, "cropped")

        if scale_ratio != 1:
            image = image.scale(scale_ratio)
            self.debug_screenshots.save(image, "scaled")

        if rotation != 0:
            image = image.rotate(rotation)

        size = image.size
        if size.width <= self.viewport_size.width and size.height <= self.viewport_size.height:
            try:
                position = page_utils.get_current_scroll_position(self.driver)
            except Exception as e:
                print(f"[CAPTURE] Position de scroll indisponible: {e}")
                position = ORIGIN
            image.set_coordinates(position)

        return image
