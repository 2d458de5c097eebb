"""Sauvegarde des captures intermédiaires pour le debug."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from pagestitch.config import DEBUG_CONFIG, PATHS
from pagestitch.lib.s1_image import ImageBuffer


class DebugScreenshotsProvider:
    """Interface de sauvegarde des captures de debug (préfixe + répertoire)."""

    DEFAULT_PREFIX = DEBUG_CONFIG['debug_screenshots_prefix']
    DEFAULT_PATH = PATHS['debug_screenshots']

    def __init__(self, path: Optional[str] = None, prefix: Optional[str] = None):
        self.prefix = prefix or self.DEFAULT_PREFIX
        self.path = Path(path or self.DEFAULT_PATH)

    def save(self, image: ImageBuffer, suffix: str) -> Optional[str]:
        raise NotImplementedError


class NullDebugScreenshotsProvider(DebugScreenshotsProvider):
    """Ne sauvegarde rien."""

    def save(self, image: ImageBuffer, suffix: str) -> Optional[str]:
        return None


class FileDebugScreenshotsProvider(DebugScreenshotsProvider):
    """Sauvegarde chaque étape dans ``<path>/<prefix><horodatage>_<suffix>.png``."""

    def save(self, image: ImageBuffer, suffix: str) -> Optional[str]:
        filename = f"{self.prefix}{self._timestamp()}_{suffix}.png".replace(" ", "_")
        return image.save(self.path / filename)

    @staticmethod
    def _timestamp() -> str:
        return datetime.now().strftime("%Y_%m_%d_%H_%M_%S_%f")


def create_debug_screenshots_provider(
    enabled: bool = DEBUG_CONFIG['save_debug_screenshots'],
    path: Optional[str] = None,
    prefix: Optional[str] = None,
) -> DebugScreenshotsProvider:
    if enabled:
        return FileDebugScreenshotsProvider(path=path, prefix=prefix)
    return NullDebugScreenshotsProvider(path=path, prefix=prefix)
