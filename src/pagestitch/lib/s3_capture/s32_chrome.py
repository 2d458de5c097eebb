"""Préparation et restauration de l'état de la page (overflow, position)."""

from __future__ import annotations

import time
from typing import Any, Callable, List, Optional

from pagestitch.errors import CaptureError
from pagestitch.lib.s0_browser import page_utils
from pagestitch.lib.s0_browser.types import DriverApi, PositionProviderApi

_UNSET = object()


class PageStateScope:
    """
    Mémorise les modifications apportées à la page pendant une capture.

    ``restore`` rejoue les restaurations dans l'ordre inverse de la préparation
    (overflow du body, overflow du document, état du position provider). Chaque
    étape est tentée indépendamment : un échec n'empêche pas les suivantes.
    """

    def __init__(
        self,
        driver: DriverApi,
        position_provider: Optional[PositionProviderApi] = None,
        stabilization_time: float = 0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.position_provider = position_provider
        self.stabilization_time = stabilization_time
        self.sleep = sleep
        self.original_overflow: Any = _UNSET
        self.original_body_overflow: Any = _UNSET
        self.original_position_state: Any = _UNSET

    def hide_scrollbars(self, use_css_transition: bool = False) -> None:
        self.original_overflow = page_utils.hide_scrollbars(
            self.driver, self.stabilization_time, self.sleep
        )
        if use_css_transition and page_utils.is_body_overflow_hidden(self.driver):
            self.original_body_overflow = page_utils.set_body_overflow(
                self.driver, "initial", self.stabilization_time, self.sleep
            )

    def save_position(self) -> None:
        if self.position_provider is not None:
            self.original_position_state = self.position_provider.get_state()

    def restore(self) -> List[CaptureError]:
        """Restaure l'état d'origine ; retourne les échecs rencontrés."""
        failures: List[CaptureError] = []

        if self.original_body_overflow is not _UNSET:
            try:
                page_utils.set_body_overflow(
                    self.driver, self.original_body_overflow, self.stabilization_time, self.sleep
                )
                self.original_body_overflow = _UNSET
            except Exception as e:
                print(f"[RESTAURATION] Erreur overflow body: {e}")
                failures.append(CaptureError(f"Restauration de l'overflow du body impossible: {e}"))

        if self.original_overflow is not _UNSET:
            try:
                page_utils.set_overflow(
                    self.driver, self.original_overflow, self.stabilization_time, self.sleep
                )
                self.original_overflow = _UNSET
            except Exception as e:
                print(f"[RESTAURATION] Erreur overflow document: {e}")
                failures.append(CaptureError(f"Restauration de l'overflow du document impossible: {e}"))

        if self.original_position_state is not _UNSET:
            try:
                self.position_provider.restore_state(self.original_position_state)
                self.original_position_state = _UNSET
            except Exception as e:
                print(f"[RESTAURATION] Erreur position: {e}")
                failures.append(CaptureError(f"Restauration de la position impossible: {e}"))

        return failures
