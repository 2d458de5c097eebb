"""Types pour le module s0_browser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

from selenium.webdriver.remote.webdriver import WebDriver

from pagestitch.config import BROWSER_CONFIG, WAIT_TIMES
from pagestitch.lib.s0_geometry import Point, Size


@dataclass
class BrowserConfig:
    """Configuration du navigateur."""
    headless: bool = BROWSER_CONFIG['headless']
    maximize: bool = BROWSER_CONFIG['maximize']
    window_size: Optional[Tuple[int, int]] = BROWSER_CONFIG['window_size']
    user_agent: Optional[str] = BROWSER_CONFIG['user_agent']
    device_scale_factor: Optional[float] = BROWSER_CONFIG['device_scale_factor']
    page_load_timeout: int = WAIT_TIMES['page_load']


@dataclass
class BrowserHandle:
    """Chrome ouvert par ``BrowserManager`` ; ``close`` peut être rappelé sans effet."""
    driver: WebDriver
    is_started: bool = True

    def close(self) -> None:
        if self.is_started and self.driver is not None:
            self.driver.quit()
        self.is_started = False


class DriverApi(Protocol):
    """Capacités navigateur consommées par le pipeline de capture."""

    def execute_script(self, script: str, *args: Any) -> Any: ...

    def take_screenshot(self) -> bytes: ...

    def get_window_size(self) -> Size: ...

    def set_window_size(self, width: int, height: int) -> None: ...

    def set_window_position(self, x: int, y: int) -> None: ...

    def get_computed_style(self, element: Any, property_name: str) -> str: ...


class PositionProviderApi(Protocol):
    """Déplacement logique dans la page et sauvegarde/restauration de l'état."""

    def get_current_position(self) -> Point: ...

    def set_position(self, position: Point) -> None: ...

    def get_entire_size(self) -> Size: ...

    def get_state(self) -> Any: ...

    def restore_state(self, state: Any) -> None: ...
