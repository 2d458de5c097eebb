"""Dimensionnement itératif du viewport par redimensionnement de la fenêtre."""

from __future__ import annotations

import time
from typing import Callable, Optional

from pagestitch.config import VIEWPORT_CONFIG, WAIT_TIMES
from pagestitch.lib.s0_browser import page_utils
from pagestitch.lib.s0_browser.types import DriverApi
from pagestitch.lib.s0_geometry import Size

from .types import SizingOutcome, SizingResult, ViewportTarget


class ViewportSizer:
    """
    Amène le viewport mesuré à une taille exacte.

    La taille du chrome navigateur (barres d'outils, scrollbars, bordures) est
    inconnue : elle est déduite de l'écart fenêtre/viewport à chaque mesure.
    """

    def __init__(
        self,
        driver: DriverApi,
        resize_retries: int = VIEWPORT_CONFIG['resize_retries'],
        max_diff: int = VIEWPORT_CONFIG['max_diff'],
        resize_settle_time: float = WAIT_TIMES['window_resize'],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.resize_retries = resize_retries
        self.max_diff = max_diff
        self.resize_settle_time = resize_settle_time
        self.sleep = sleep
        self._result: Optional[SizingResult] = None

    # ------------------------------------------------------------------ #
    # Mesures                                                            #
    # ------------------------------------------------------------------ #

    def get_viewport_size(self) -> Size:
        """Taille du viewport ; repli sur la taille fenêtre si la mesure JS échoue."""
        return page_utils.get_viewport_size_or_display_size(self.driver)

    def _measure(self, target: ViewportTarget) -> Size:
        target.viewport = page_utils.get_viewport_size(self.driver)
        self._result.measurements += 1
        self._result.viewport = target.viewport
        return target.viewport

    # ------------------------------------------------------------------ #
    # Redimensionnement de la fenêtre                                    #
    # ------------------------------------------------------------------ #

    def set_browser_size(self, required: Size) -> bool:
        """Redimensionne la fenêtre ; jusqu'à ``resize_retries`` tentatives."""
        if self._result is not None:
            self._result.resize_requests.append(required)

        for attempt in range(1, self.resize_retries + 1):
            self.driver.set_window_size(required.width, required.height)
            self.sleep(self.resize_settle_time)
            current = self.driver.get_window_size()
            if current == required:
                return True
            print(
                f"[VIEWPORT] Fenêtre {current.width}x{current.height} au lieu de "
                f"{required.width}x{required.height} (tentative {attempt}/{self.resize_retries})"
            )
        return False

    def _resize_by_viewport(self, target: ViewportTarget) -> bool:
        window = self.driver.get_window_size()
        target.window = window
        required_window = Size(
            window.width + (target.required.width - target.viewport.width),
            window.height + (target.required.height - target.viewport.height),
        )
        return self.set_browser_size(required_window)

    # ------------------------------------------------------------------ #
    # Convergence                                                        #
    # ------------------------------------------------------------------ #

    def set_viewport_size(self, required: Size) -> SizingResult:
        """
        Tente d'obtenir un viewport de taille ``required``.

        Ne lève pas d'exception en cas de non-convergence : l'issue est portée par
        le ``SizingResult`` retourné (voir ``raise_for_status``).

        Raises:
            MeasurementUnavailable: si le viewport ne peut pas être mesuré.
        """
        self._result = SizingResult(outcome=SizingOutcome.RESIZE_FAILED, required=required, viewport=required)
        try:
            target = ViewportTarget(required=required, viewport=required)
            self._measure(target)
            if target.matches:
                return self._finish(SizingOutcome.ALREADY_SIZED)

            # Fenêtre en (0, 0) : maximise la place disponible à l'écran.
            try:
                self.driver.set_window_position(0, 0)
            except Exception as e:
                print(f"[VIEWPORT] Impossible de déplacer la fenêtre en (0,0): {e}")

            if not self._resize_by_viewport(target):
                return self._finish(SizingOutcome.RESIZE_FAILED)
            if self._measure(target) == required:
                return self._finish(SizingOutcome.CONVERGED)

            # Seconde tentative : la bordure d'une fenêtre maximisée diffère parfois
            # de celle d'une fenêtre normale, faussant le premier calcul.
            if not self._resize_by_viewport(target):
                return self._finish(SizingOutcome.RESIZE_FAILED)
            if self._measure(target) == required:
                return self._finish(SizingOutcome.CONVERGED)

            if abs(target.width_diff) > self.max_diff or abs(target.height_diff) > self.max_diff:
                return self._finish(SizingOutcome.DIFF_TOO_LARGE)

            return self._finish(self._stepwise_search(target))
        finally:
            self._result = None

    def ensure_viewport_size(self, required: Size) -> SizingResult:
        """Comme ``set_viewport_size`` mais lève ``ResizeUnachievable`` en cas d'échec."""
        return self.set_viewport_size(required).raise_for_status()

    def _stepwise_search(self, target: ViewportTarget) -> SizingOutcome:
        """Ajuste la fenêtre pixel par pixel (écarts résiduels de zoom/arrondi)."""
        window = self.driver.get_window_size()
        width_diff = target.width_diff
        height_diff = target.height_diff
        width_step = -1 if width_diff > 0 else 1
        height_step = -1 if height_diff > 0 else 1

        # TODO: budget |dw| x |dh| x 2 non calibré ; le mesurer sur des écarts réels avant de le changer.
        retries_left = abs((width_diff or 1) * (height_diff or 1)) * 2
        width_change = 0
        height_change = 0
        last_request: Optional[Size] = None

        while True:
            # "<=" et non "<" : une tentative supplémentaire absorbe les arrondis.
            if abs(width_change) <= abs(width_diff) and target.viewport.width != target.required.width:
                width_change += width_step
            if abs(height_change) <= abs(height_diff) and target.viewport.height != target.required.height:
                height_change += height_step

            request = Size(window.width + width_change, window.height + height_change)
            if request == last_request:
                print("[VIEWPORT] Taille fenêtre inchangée mais viewport différent, arrêt de la recherche.")
                return SizingOutcome.SEARCH_STALLED

            self.set_browser_size(request)
            last_request = request
            if self._measure(target) == target.required:
                return SizingOutcome.CONVERGED

            retries_left -= 1
            in_range = abs(width_change) <= abs(width_diff) or abs(height_change) <= abs(height_diff)
            if not in_range or retries_left <= 0:
                return SizingOutcome.SEARCH_EXHAUSTED

    def _finish(self, outcome: SizingOutcome) -> SizingResult:
        result = self._result
        result.outcome = outcome
        if not outcome.success:
            print(
                f"[VIEWPORT] Échec du dimensionnement ({outcome.value}): viewport "
                f"{result.viewport.width}x{result.viewport.height}, requis "
                f"{result.required.width}x{result.required.height}"
            )
        return result


def set_viewport_size(driver: DriverApi, required: Size, **kwargs) -> SizingResult:
    """Raccourci fonctionnel autour de ``ViewportSizer``."""
    return ViewportSizer(driver, **kwargs).set_viewport_size(required)


