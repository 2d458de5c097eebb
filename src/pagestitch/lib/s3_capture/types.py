"""Types pour le module s3_capture."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from pagestitch.config import CAPTURE_CONFIG, WAIT_TIMES
from pagestitch.errors import CaptureError
from pagestitch.lib.s0_geometry import Point, Region, Size
from pagestitch.lib.s1_image import ImageBuffer, ImageConfig, Tile
from pagestitch.lib.s2_viewport import SizingResult


class CaptureState(Enum):
    """États de la machine de capture pleine page."""
    IDLE = "idle"
    MEASURING_PAGE = "measuring_page"
    PREPARING_CHROME = "preparing_chrome"
    CAPTURING_ORIGIN = "capturing_origin"
    TILING_DECISION = "tiling_decision"
    CAPTURING_TILES = "capturing_tiles"
    STITCHING = "stitching"
    RESTORING_CHROME = "restoring_chrome"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CaptureSettings:
    """Options d'une capture."""
    full_page: bool = True
    check_frame_or_element: bool = False
    hide_scrollbars: Optional[bool] = CAPTURE_CONFIG['hide_scrollbars']
    use_css_transition: bool = CAPTURE_CONFIG['use_css_transition']
    rotation_degrees: int = CAPTURE_CONFIG['rotation_degrees']
    automatic_rotation: bool = CAPTURE_CONFIG['automatic_rotation']
    automatic_rotation_degrees: int = CAPTURE_CONFIG['automatic_rotation_degrees']
    is_landscape: bool = False
    target_viewport: Optional[Size] = None
    min_part_height: int = CAPTURE_CONFIG['min_part_height']
    max_scrollbar_size: int = CAPTURE_CONFIG['max_scrollbar_size']
    wait_before_screenshots: float = WAIT_TIMES['before_screenshot']
    overflow_stabilization: float = WAIT_TIMES['overflow']
    scroll_stabilization: float = WAIT_TIMES['scroll']

    @property
    def should_hide_scrollbars(self) -> bool:
        if self.hide_scrollbars is None:
            return self.use_css_transition
        return self.hide_scrollbars


@dataclass
class CaptureRequest:
    """Demande de capture complète (point d'entrée ``capture_screenshot``)."""
    driver: Any
    settings: CaptureSettings = field(default_factory=CaptureSettings)
    position_provider: Any = None
    scale_provider_factory: Any = None
    cut_provider: Any = None
    region_provider: Any = None
    debug_screenshots: Any = None
    image_config: Optional[ImageConfig] = None
    trace_logger: Any = None


@dataclass
class CaptureResult:
    """Image finale et métadonnées de coordonnées."""
    image: ImageBuffer
    entire_size: Size
    viewport_size: Size
    device_pixel_ratio: float = 1.0
    region_in_screenshot: Optional[Region] = None
    tile_positions: List[Point] = field(default_factory=list)
    sizing: Optional[SizingResult] = None
    warnings: List[CaptureError] = field(default_factory=list)
    states: List[CaptureState] = field(default_factory=list)

    @property
    def tiled(self) -> bool:
        return len(self.tile_positions) > 0

    @property
    def tile_count(self) -> int:
        return len(self.tile_positions)

    @property
    def size(self) -> Size:
        return self.image.size


__all__ = [
    "CaptureState",
    "CaptureSettings",
    "CaptureRequest",
    "CaptureResult",
    "Tile",
]
