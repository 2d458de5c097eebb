"""Orchestration d'une capture pleine page : mesure, tuilage, assemblage."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, List, Optional

from pagestitch.errors import (
    CaptureCancelled,
    CaptureError,
    MeasurementUnavailable,
    ResizeUnachievable,
    ScrollFailure,
)
from pagestitch.lib.s0_browser import CssTranslatePositionProvider, ScrollPositionProvider, page_utils
from pagestitch.lib.s0_browser.types import DriverApi, PositionProviderApi
from pagestitch.lib.s0_geometry import ORIGIN, CoordinatesType, Point, Region, Size, get_sub_regions
from pagestitch.lib.s1_image import ImageBuffer, ImageConfig, Tile, stitch_tiles
from pagestitch.lib.s2_viewport import SizingResult, ViewportSizer
from pagestitch.lib.s7_debug import CaptureDebugLogger, DebugScreenshotsProvider

from .providers import ContextBasedScaleProviderFactory, CutProvider, RegionProvider, ScaleProviderFactory
from .s31_viewport_capture import ViewportCapture
from .s32_chrome import PageStateScope
from .types import CaptureResult, CaptureSettings, CaptureState


class FullPageCapture:
    """
    Capture de la page entière (ou d'une frame/d'un élément) par tuiles.

    Étapes : IDLE -> MEASURING_PAGE -> PREPARING_CHROME -> CAPTURING_ORIGIN
    -> TILING_DECISION -> [CAPTURING_TILES -> STITCHING] -> RESTORING_CHROME -> DONE.
    Toute erreur passe par RESTORING_CHROME puis FAILED avant d'être propagée.

    Une instance ne doit servir qu'à une capture à la fois (la page est un état
    partagé : scroll, overflow, transform).
    """

    def __init__(
        self,
        driver: DriverApi,
        position_provider: Optional[PositionProviderApi] = None,
        settings: Optional[CaptureSettings] = None,
        scale_provider_factory: Optional[ScaleProviderFactory] = None,
        cut_provider: Optional[CutProvider] = None,
        region_provider: Optional[RegionProvider] = None,
        debug_screenshots: Optional[DebugScreenshotsProvider] = None,
        image_config: Optional[ImageConfig] = None,
        trace_logger: Optional[CaptureDebugLogger] = None,
        sizer: Optional[ViewportSizer] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.settings = settings or CaptureSettings()
        self.sleep = sleep
        if position_provider is None:
            if self.settings.use_css_transition:
                position_provider = CssTranslatePositionProvider(
                    driver, self.settings.scroll_stabilization, sleep
                )
            else:
                position_provider = ScrollPositionProvider(driver, self.settings.scroll_stabilization, sleep)
        self.position_provider = position_provider
        self.scale_provider_factory = scale_provider_factory
        self.cut_provider = cut_provider
        self.region_provider = region_provider
        self.debug_screenshots = debug_screenshots
        self.image_config = image_config
        self.trace_logger = trace_logger
        self.sizer = sizer or ViewportSizer(driver, sleep=sleep)

        self.state = CaptureState.IDLE
        self.states: List[CaptureState] = []
        self.warnings: List[CaptureError] = []

    # ------------------------------------------------------------------ #
    # Machine d'état                                                     #
    # ------------------------------------------------------------------ #

    def _set_state(self, state: CaptureState, message: str = "", **metadata: Any) -> None:
        self.state = state
        self.states.append(state)
        if self.trace_logger is not None:
            self.trace_logger.log_step(state.value, message, **metadata)

    def _warn(self, error: CaptureError) -> None:
        print(f"[CAPTURE] {error}")
        self.warnings.append(error)

    @staticmethod
    def _checkpoint(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise CaptureCancelled("Capture annulée")

    # ------------------------------------------------------------------ #
    # Mesures                                                            #
    # ------------------------------------------------------------------ #

    def _prepare_viewport(self) -> Optional[SizingResult]:
        target = self.settings.target_viewport
        if target is None:
            return None
        try:
            sizing = self.sizer.set_viewport_size(target)
        except MeasurementUnavailable as e:
            self._warn(e)
            return None
        try:
            sizing.raise_for_status()
        except ResizeUnachievable as e:
            self._warn(e)
        return sizing

    def _measure_entire_size(self, viewport_size: Size) -> Size:
        try:
            return self.position_provider.get_entire_size()
        except Exception as e:
            self._warn(MeasurementUnavailable(f"Taille de page indisponible, repli sur le viewport: {e}"))
            return viewport_size

    def _measure_device_pixel_ratio(self) -> float:
        try:
            return page_utils.get_device_pixel_ratio(self.driver)
        except Exception as e:
            self._warn(MeasurementUnavailable(f"Device pixel ratio indisponible, repli sur 1: {e}"))
            return 1.0

    def _move_to(self, requested: Point) -> Point:
        """Déplace le position provider ; retourne la position réellement atteinte."""
        try:
            self.position_provider.set_position(requested)
        except Exception as e:
            self._warn(ScrollFailure(f"Déplacement vers {requested.to_tuple()} impossible: {e}", requested))
        try:
            return self.position_provider.get_current_position()
        except Exception as e:
            self._warn(ScrollFailure(
                f"Position courante illisible après déplacement vers {requested.to_tuple()}: {e}",
                requested,
            ))
            return requested

    # ------------------------------------------------------------------ #
    # Capture                                                            #
    # ------------------------------------------------------------------ #

    def capture(self, cancel_event: Optional[threading.Event] = None) -> CaptureResult:
        """
        Capture la page.

        Args:
            cancel_event: si positionné, la capture s'interrompt au prochain point
                de suspension (avant un screenshot ou une tuile), restaure la page
                puis lève ``CaptureCancelled``.

        Returns:
            CaptureResult avec l'image finale, les tailles mesurées et l'historique.
        """
        self.state = CaptureState.IDLE
        self.states = [CaptureState.IDLE]
        self.warnings = []
        settings = self.settings

        def checkpoint() -> None:
            self._checkpoint(cancel_event)

        scope = PageStateScope(
            self.driver, self.position_provider, settings.overflow_stabilization, self.sleep
        )
        region_in_screenshot: Optional[Region] = None
        tile_positions: List[Point] = []
        failed = True
        try:
            self._set_state(CaptureState.MEASURING_PAGE)
            sizing = self._prepare_viewport()
            viewport_size = self.sizer.get_viewport_size()
            entire_size = self._measure_entire_size(viewport_size)
            device_pixel_ratio = self._measure_device_pixel_ratio()
            print(f"[CAPTURE] Page {entire_size.width}x{entire_size.height}, "
                  f"viewport {viewport_size.width}x{viewport_size.height}, dpr {device_pixel_ratio}")

            scale_provider_factory = self.scale_provider_factory or ContextBasedScaleProviderFactory(
                entire_size, viewport_size, device_pixel_ratio
            )
            viewport_capture = ViewportCapture(
                self.driver,
                viewport_size,
                settings,
                scale_provider_factory,
                self.cut_provider,
                self.debug_screenshots,
                self.image_config,
                self.sleep,
            )
            checkpoint()

            self._set_state(CaptureState.PREPARING_CHROME)
            if settings.should_hide_scrollbars:
                scope.hide_scrollbars(settings.use_css_transition)

            origin_position = ORIGIN
            if settings.full_page:
                scope.save_position()
                origin_position = self._move_to(ORIGIN)
                if origin_position != ORIGIN:
                    self._warn(ScrollFailure(
                        f"Origine non atteinte: {origin_position.to_tuple()}", ORIGIN, origin_position
                    ))

            self._set_state(CaptureState.CAPTURING_ORIGIN)
            probe: Optional[ImageBuffer] = None
            if self.region_provider is not None:
                probe = viewport_capture.capture(checkpoint=checkpoint)
                region_in_screenshot = self.region_provider.get_region(probe)
            crop_region = region_in_screenshot if settings.check_frame_or_element else None
            if probe is not None and crop_region is None:
                # Même screenshot non recadré : réutilisé tel quel.
                image = probe
            else:
                image = viewport_capture.capture(crop_region, checkpoint=checkpoint)

            self._set_state(CaptureState.TILING_DECISION, size=image.size.to_tuple())
            needs_tiles = (
                (settings.full_page or settings.check_frame_or_element)
                and not image.size.covers(entire_size)
            )
            if needs_tiles:
                self._set_state(CaptureState.CAPTURING_TILES)
                tiles = self._capture_tiles(
                    image, entire_size, origin_position, viewport_capture, crop_region, cancel_event
                )
                tile_positions = [tile.position for tile in tiles]

                self._set_state(CaptureState.STITCHING, tiles=len(tiles))
                image = stitch_tiles(entire_size, tiles, self.image_config)

            if not settings.check_frame_or_element and region_in_screenshot is not None:
                image = image.crop(region_in_screenshot)
            failed = False
        finally:
            self._set_state(CaptureState.RESTORING_CHROME)
            for failure in scope.restore():
                self._warn(failure)
            if failed:
                self._set_state(CaptureState.FAILED)

        self._set_state(CaptureState.DONE, size=image.size.to_tuple())
        if self.trace_logger is not None:
            self.trace_logger.save_session()

        return CaptureResult(
            image=image,
            entire_size=entire_size,
            viewport_size=viewport_size,
            device_pixel_ratio=device_pixel_ratio,
            region_in_screenshot=region_in_screenshot,
            tile_positions=tile_positions,
            sizing=sizing,
            warnings=list(self.warnings),
            states=list(self.states),
        )

    def _capture_tiles(
        self,
        origin_image: ImageBuffer,
        entire_size: Size,
        origin_position: Point,
        viewport_capture: ViewportCapture,
        crop_region: Optional[Region],
        cancel_event: Optional[threading.Event],
    ) -> List[Tile]:
        settings = self.settings
        part_size = Size(
            origin_image.width,
            max(origin_image.height - settings.max_scrollbar_size, settings.min_part_height),
        )
        page = Region(0, 0, entire_size.width, entire_size.height, CoordinatesType.CONTEXT_RELATIVE)
        parts = get_sub_regions(page, part_size)
        print(f"[CAPTURE] {len(parts)} tuiles de {part_size.width}x{part_size.height}")

        tiles: List[Tile] = []
        for index, part in enumerate(parts):
            self._checkpoint(cancel_event)

            if part.left == 0 and part.top == 0:
                tiles.append(Tile(part, origin_image, origin_position))
                self._log_tile(index, part.location, origin_position, origin_image, reused=True)
                continue

            achieved = self._move_to(part.location)
            part_image = viewport_capture.capture(crop_region, checkpoint=lambda: self._checkpoint(cancel_event))
            tiles.append(Tile(part, part_image, achieved))
            self._log_tile(index, part.location, achieved, part_image)

        return tiles

    def _log_tile(self, index: int, requested: Point, achieved: Point,
                  image: ImageBuffer, reused: bool = False) -> None:
        if self.trace_logger is None:
            return
        self.trace_logger.log_tile(
            index, requested.to_tuple(), achieved.to_tuple(), image.size.to_tuple(), reused
        )
