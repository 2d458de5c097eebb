import io
import re

import numpy as np
import pytest
from PIL import Image

from pagestitch.lib.s0_browser import scripts
from pagestitch.lib.s0_geometry import Point, Size


def make_page(width, height):
    """Page synthétique : chaque pixel est identifiable par sa position."""
    ys, xs = np.mgrid[0:height, 0:width]
    page = np.zeros((height, width, 3), dtype=np.uint8)
    page[..., 0] = xs % 256
    page[..., 1] = ys % 256
    page[..., 2] = (xs // 256 + 7 * (ys // 256)) % 256
    return page


def png_bytes(array):
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return buffer.getvalue()


def no_sleep(_seconds):
    pass


class FakeBrowser:
    """
    Navigateur simulé implémentant DriverApi.

    Le viewport vaut la fenêtre moins le chrome ; le scroll est borné à la page ;
    un transform translate(-x, -y) décale le contenu sans borne.
    """

    def __init__(self, page_size=(300, 500), window=(350, 300), chrome=(50, 100), dpr=1):
        self.page = make_page(*page_size)
        self.window = Size(*window)
        self.chrome = Size(*chrome)
        self.dpr = dpr
        self.scroll = Point(0, 0)
        self.transforms = {key: "" for key in scripts.JS_TRANSFORM_KEYS}
        self.overflow = ""
        self.body_overflow = ""
        self.window_limit = None
        self.window_position = None

        self.viewport_error = False
        self.entire_size_error = False
        self.dpr_error = False
        self.screenshot_error_after = None
        self.on_screenshot = None

        self.calls = []
        self.window_requests = []
        self.overflow_history = []
        self.screenshots = 0

    # --- Modèle -------------------------------------------------------- #

    def viewport_for(self, window):
        return Size(max(0, window.width - self.chrome.width), max(0, window.height - self.chrome.height))

    @property
    def viewport(self):
        return self.viewport_for(self.window)

    @property
    def page_size(self):
        return Size(self.page.shape[1], self.page.shape[0])

    @property
    def translate(self):
        match = re.match(r"translate\(-(\d+)px, -(\d+)px\)", self.transforms.get("transform") or "")
        if not match:
            return Point(0, 0)
        return Point(int(match.group(1)), int(match.group(2)))

    def _clamp_scroll(self, x, y):
        viewport = self.viewport
        max_x = max(0, self.page_size.width - viewport.width)
        max_y = max(0, self.page_size.height - viewport.height)
        return Point(min(max(0, int(x)), max_x), min(max(0, int(y)), max_y))

    # --- DriverApi ----------------------------------------------------- #

    def execute_script(self, script, *args):
        self.calls.append((script, args))
        if script == scripts.JS_GET_VIEWPORT_SIZE:
            if self.viewport_error:
                raise RuntimeError("javascript error")
            return [self.viewport.width, self.viewport.height]
        if script == scripts.JS_GET_CURRENT_SCROLL_POSITION:
            return [self.scroll.x, self.scroll.y]
        if script == scripts.JS_SET_SCROLL_POSITION:
            self.scroll = self._clamp_scroll(*args)
            return None
        if script == scripts.JS_GET_CONTENT_ENTIRE_SIZE:
            if self.entire_size_error:
                raise RuntimeError("document.body is null")
            return [max(self.page_size.width, self.viewport.width),
                    max(self.page_size.height, self.viewport.height)]
        if script == scripts.JS_GET_DEVICE_PIXEL_RATIO:
            if self.dpr_error:
                raise RuntimeError("devicePixelRatio unavailable")
            return self.dpr
        if script == scripts.JS_SET_OVERFLOW:
            original, self.overflow = self.overflow, args[0]
            self.overflow_history.append(("document", args[0]))
            return original
        if script == scripts.JS_SET_BODY_OVERFLOW:
            original, self.body_overflow = self.body_overflow, args[0]
            self.overflow_history.append(("body", args[0]))
            return original
        if script == scripts.JS_GET_IS_BODY_OVERFLOW_HIDDEN:
            return self.body_overflow == "hidden"
        if script == scripts.JS_GET_CURRENT_TRANSFORM:
            return {key: self.transforms.get(key, "") for key in args[0]}
        if script == scripts.JS_SET_TRANSFORMS:
            self.transforms.update(args[0])
            return None
        if script == scripts.JS_GET_ELEMENT_RECT:
            return dict(args[0]["rect"])
        if script == scripts.JS_GET_COMPUTED_STYLE:
            return args[0].get("style", {}).get(args[1])
        raise AssertionError(f"Script inattendu: {script[:40]!r}")

    def take_screenshot(self):
        if self.screenshot_error_after is not None and self.screenshots >= self.screenshot_error_after:
            raise RuntimeError("screenshot failed")
        self.screenshots += 1

        viewport = self.viewport
        offset = Point(self.scroll.x + self.translate.x, self.scroll.y + self.translate.y)
        frame = np.full((viewport.height, viewport.width, 3), 255, dtype=np.uint8)
        visible = self.page[offset.y:offset.y + viewport.height, offset.x:offset.x + viewport.width]
        frame[:visible.shape[0], :visible.shape[1]] = visible
        if self.dpr != 1:
            frame = np.repeat(np.repeat(frame, self.dpr, axis=0), self.dpr, axis=1)

        if self.on_screenshot is not None:
            self.on_screenshot(self.screenshots)
        return png_bytes(frame)

    def get_window_size(self):
        return self.window

    def set_window_size(self, width, height):
        self.window_requests.append(Size(width, height))
        if self.window_limit is not None:
            width = min(width, self.window_limit.width)
            height = min(height, self.window_limit.height)
        self.window = Size(width, height)
        self.scroll = self._clamp_scroll(self.scroll.x, self.scroll.y)

    def set_window_position(self, x, y):
        self.window_position = (x, y)

    def get_computed_style(self, element, property_name):
        return element.get("style", {}).get(property_name)


@pytest.fixture
def browser():
    return FakeBrowser()
