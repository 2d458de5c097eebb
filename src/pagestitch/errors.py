"""Exceptions du pipeline de capture."""

from __future__ import annotations

from typing import Any, Optional


class CaptureError(RuntimeError):
    """Erreur de base du pipeline de capture."""


class MeasurementUnavailable(CaptureError):
    """Une mesure (taille de page, ratio de pixels, viewport) est indisponible."""


class ResizeUnachievable(CaptureError):
    """La fenêtre/le viewport n'a pas pu atteindre la taille demandée."""

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class DecodeError(CaptureError):
    """Les octets de l'image ne sont pas décodables."""


class ScrollFailure(CaptureError):
    """Le position provider n'a pas pu atteindre la position demandée."""

    def __init__(self, message: str, requested: Any = None, achieved: Optional[Any] = None):
        super().__init__(message)
        self.requested = requested
        self.achieved = achieved


class CaptureCancelled(CaptureError):
    """Capture interrompue à un point de suspension (restauration effectuée)."""
