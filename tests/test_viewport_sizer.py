import pytest

from pagestitch.errors import MeasurementUnavailable, ResizeUnachievable
from pagestitch.lib.s0_geometry import Size
from pagestitch.lib.s2_viewport import SizingOutcome, ViewportSizer, set_viewport_size

from conftest import FakeBrowser, no_sleep


class QuirkyBrowser(FakeBrowser):
    """Le chrome varie avec la taille de fenêtre (zoom, arrondis)."""

    def __init__(self, width_quirk=None, height_quirk=None, **kwargs):
        super().__init__(page_size=(2000, 2000), window=(1050, 800), chrome=(50, 100), **kwargs)
        self.width_quirk = width_quirk or (lambda w: w - 50)
        self.height_quirk = height_quirk or (lambda h: h - 100)

    def viewport_for(self, window):
        return Size(self.width_quirk(window.width), self.height_quirk(window.height))


def _sizer(browser):
    return ViewportSizer(browser, sleep=no_sleep)


def test_already_sized_does_not_resize():
    browser = FakeBrowser(window=(1050, 800), chrome=(50, 100))

    result = _sizer(browser).set_viewport_size(Size(1000, 700))

    assert result.outcome is SizingOutcome.ALREADY_SIZED
    assert result.success
    assert result.measurements == 1
    assert browser.window_requests == []


def test_converges_with_single_resize():
    browser = FakeBrowser(window=(1050, 800), chrome=(50, 100))

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    assert result.outcome is SizingOutcome.CONVERGED
    assert result.viewport == Size(1024, 768)
    assert result.measurements == 2
    assert browser.window_requests == [Size(1074, 868)]
    assert browser.window_position == (0, 0)


def test_window_refusing_size_fails_after_retries():
    browser = FakeBrowser(window=(1050, 800), chrome=(50, 100))
    browser.window_limit = Size(1060, 850)

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    assert result.outcome is SizingOutcome.RESIZE_FAILED
    assert not result.success
    assert browser.window_requests == [Size(1074, 868)] * 3
    with pytest.raises(ResizeUnachievable) as excinfo:
        result.raise_for_status()
    assert excinfo.value.result is result


def test_ensure_viewport_size_raises():
    browser = FakeBrowser(window=(1050, 800), chrome=(50, 100))
    browser.window_limit = Size(1060, 850)

    with pytest.raises(ResizeUnachievable):
        _sizer(browser).ensure_viewport_size(Size(1024, 768))


def test_second_resize_absorbs_maximized_border():
    browser = QuirkyBrowser(height_quirk=lambda h: h - 100 if h < 868 else h - 90)

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    # 868 -> 778 (écart 10), puis 858 -> 758 : écart trop grand pour la recherche.
    assert result.outcome is SizingOutcome.DIFF_TOO_LARGE
    assert len(browser.window_requests) == 2


def test_stepwise_search_converges():
    browser = QuirkyBrowser(width_quirk=lambda w: w - 50 if w < 1073 else (w - 49 if w == 1073 else w - 48))

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    # 1074 -> 1026, 1072 -> 1022, puis pas à pas : 1073 -> 1024.
    assert result.outcome is SizingOutcome.CONVERGED
    assert result.viewport == Size(1024, 768)
    assert result.measurements == 4
    assert browser.window_requests[-1] == Size(1073, 868)


def test_stepwise_search_exhausts_budget():
    browser = QuirkyBrowser(width_quirk=lambda w: w - 50 if w < 1073 else (1023 if w == 1073 else w - 49))

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    # 1074 -> 1025, 1073 -> 1023, puis 1074 et 1075 : budget de 2 tentatives épuisé.
    assert result.outcome is SizingOutcome.SEARCH_EXHAUSTED
    assert not result.success
    assert result.viewport != Size(1024, 768)


def test_stepwise_search_detects_stall():
    browser = QuirkyBrowser(
        height_quirk=lambda h: h - 100 if h < 867 else (769 if h == 867 else h - 98)
    )

    result = _sizer(browser).set_viewport_size(Size(1024, 768))

    assert result.outcome is SizingOutcome.SEARCH_STALLED
    assert not result.success
    # Aucune taille de fenêtre n'est demandée deux fois de suite.
    requests = browser.window_requests
    assert all(a != b for a, b in zip(requests, requests[1:]))


def test_viewport_measurement_unavailable():
    browser = FakeBrowser()
    browser.viewport_error = True

    with pytest.raises(MeasurementUnavailable):
        _sizer(browser).set_viewport_size(Size(1024, 768))


def test_get_viewport_size_falls_back_to_window():
    browser = FakeBrowser(window=(1050, 800))
    browser.viewport_error = True

    assert _sizer(browser).get_viewport_size() == Size(1050, 800)


def test_functional_shortcut():
    browser = FakeBrowser(window=(1050, 800), chrome=(50, 100))
    result = set_viewport_size(browser, Size(1024, 768), sleep=no_sleep)
    assert result.success
