"""Position providers : déplacement logique dans la page."""

from __future__ import annotations

import time
from typing import Callable, Dict

from pagestitch.config import WAIT_TIMES
from pagestitch.lib.s0_geometry import Point, Size

from . import page_utils
from .types import DriverApi


class ScrollPositionProvider:
    """Déplacement par ``window.scrollTo``."""

    def __init__(
        self,
        driver: DriverApi,
        stabilization_time: float = WAIT_TIMES['scroll'],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.stabilization_time = stabilization_time
        self.sleep = sleep

    def get_current_position(self) -> Point:
        return page_utils.get_current_scroll_position(self.driver)

    def set_position(self, position: Point) -> None:
        page_utils.set_current_scroll_position(self.driver, position, self.stabilization_time, self.sleep)

    def get_entire_size(self) -> Size:
        return page_utils.get_entire_size(self.driver)

    def get_state(self) -> Point:
        return self.get_current_position()

    def restore_state(self, state: Point) -> None:
        self.set_position(state)


class CssTranslatePositionProvider:
    """
    Déplacement par ``transform: translate(-x, -y)`` sur documentElement.

    Utile pour les pages qui réagissent au scroll (headers collants, lazy loading).
    La position courante est mémorisée localement : le transform ne modifie pas
    la position de scroll lue par le navigateur.
    """

    def __init__(
        self,
        driver: DriverApi,
        stabilization_time: float = WAIT_TIMES['transform'],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.stabilization_time = stabilization_time
        self.sleep = sleep
        self._last_position = Point(0, 0)

    def get_current_position(self) -> Point:
        return self._last_position

    def set_position(self, position: Point) -> None:
        page_utils.translate_to(self.driver, position, self.stabilization_time, self.sleep)
        self._last_position = position

    def get_entire_size(self) -> Size:
        return page_utils.get_entire_size(self.driver)

    def get_state(self) -> Dict[str, str]:
        return page_utils.get_current_transform(self.driver)

    def restore_state(self, state: Dict[str, str]) -> None:
        page_utils.set_transforms(self.driver, state, self.stabilization_time, self.sleep)
        self._last_position = Point(0, 0)
