"""Module s0_browser : Navigateur Selenium et capacités consommées par la capture."""

from .types import BrowserConfig, BrowserHandle, DriverApi, PositionProviderApi
from .driver import SeleniumDriver
from .browser import BrowserManager, open_page
from .positioning import ScrollPositionProvider, CssTranslatePositionProvider
from . import page_utils, scripts

__all__ = [
    "BrowserConfig",
    "BrowserHandle",
    "DriverApi",
    "PositionProviderApi",
    "SeleniumDriver",
    "BrowserManager",
    "open_page",
    "ScrollPositionProvider",
    "CssTranslatePositionProvider",
    "page_utils",
    "scripts",
]
