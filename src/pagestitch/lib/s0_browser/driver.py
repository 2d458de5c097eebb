"""Adaptateur Selenium pour le pipeline de capture."""

from __future__ import annotations

from typing import Any

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from pagestitch.lib.s0_geometry import Size

from . import scripts


class SeleniumDriver:
    """Implémente ``DriverApi`` au-dessus d'un WebDriver Selenium."""

    def __init__(self, driver: WebDriver):
        self.driver = driver

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    def take_screenshot(self) -> bytes:
        return self.driver.get_screenshot_as_png()

    def get_window_size(self) -> Size:
        size = self.driver.get_window_size()
        return Size(int(size["width"]), int(size["height"]))

    def set_window_size(self, width: int, height: int) -> None:
        self.driver.set_window_size(width, height)

    def set_window_position(self, x: int, y: int) -> None:
        self.driver.set_window_position(x, y)

    def get_computed_style(self, element: Any, property_name: str) -> str:
        """Style calculé via JavaScript, repli sur ``value_of_css_property``."""
        try:
            value = self.driver.execute_script(scripts.JS_GET_COMPUTED_STYLE, element, property_name)
            if value is not None:
                return value
        except WebDriverException as e:
            print(f"[BROWSER] getComputedStyle échoué ({e}), repli sur value_of_css_property.")
        return element.value_of_css_property(property_name)
