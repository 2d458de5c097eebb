"""Module s7_debug : Captures de debug et trace structurée."""

from .debug_screenshots import (
    DebugScreenshotsProvider,
    NullDebugScreenshotsProvider,
    FileDebugScreenshotsProvider,
    create_debug_screenshots_provider,
)
from .logger import CaptureDebugLogger

__all__ = [
    "DebugScreenshotsProvider",
    "NullDebugScreenshotsProvider",
    "FileDebugScreenshotsProvider",
    "create_debug_screenshots_provider",
    "CaptureDebugLogger",
]
