"""Module s3_capture : Capture pleine page par tuiles et assemblage."""

from __future__ import annotations

from selenium.webdriver.remote.webdriver import WebDriver

from pagestitch.config import DEBUG_CONFIG
from pagestitch.lib.s0_browser import SeleniumDriver
from pagestitch.lib.s7_debug import CaptureDebugLogger, create_debug_screenshots_provider

from .types import CaptureState, CaptureSettings, CaptureRequest, CaptureResult, Tile
from .providers import (
    ScaleProvider,
    NullScaleProviderFactory,
    FixedScaleProviderFactory,
    ContextBasedScaleProviderFactory,
    NullCutProvider,
    FixedCutProvider,
    FixedRegionProvider,
    ElementRegionProvider,
)
from .s31_viewport_capture import ViewportCapture
from .s32_chrome import PageStateScope
from .orchestrator import FullPageCapture


def capture_screenshot(request: CaptureRequest, cancel_event=None) -> CaptureResult:
    """
    Point d'entrée : exécute une capture décrite par ``request``.

    Sans provider explicite, les captures de debug et la trace structurée suivent
    ``DEBUG_CONFIG`` (désactivées par défaut).
    """
    driver = request.driver
    if isinstance(driver, WebDriver):
        driver = SeleniumDriver(driver)

    debug_screenshots = request.debug_screenshots or create_debug_screenshots_provider()
    trace_logger = request.trace_logger
    if trace_logger is None and DEBUG_CONFIG['trace_enabled']:
        trace_logger = CaptureDebugLogger()

    capture = FullPageCapture(
        driver,
        position_provider=request.position_provider,
        settings=request.settings,
        scale_provider_factory=request.scale_provider_factory,
        cut_provider=request.cut_provider,
        region_provider=request.region_provider,
        debug_screenshots=debug_screenshots,
        image_config=request.image_config,
        trace_logger=trace_logger,
    )
    return capture.capture(cancel_event)


__all__ = [
    # Types
    "CaptureState",
    "CaptureSettings",
    "CaptureRequest",
    "CaptureResult",
    "Tile",
    # Providers
    "ScaleProvider",
    "NullScaleProviderFactory",
    "FixedScaleProviderFactory",
    "ContextBasedScaleProviderFactory",
    "NullCutProvider",
    "FixedCutProvider",
    "FixedRegionProvider",
    "ElementRegionProvider",
    # Capture
    "ViewportCapture",
    "PageStateScope",
    "FullPageCapture",
    "capture_screenshot",
]
