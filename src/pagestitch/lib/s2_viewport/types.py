"""Types pour le module s2_viewport."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pagestitch.errors import ResizeUnachievable
from pagestitch.lib.s0_geometry import Size


class SizingOutcome(Enum):
    """Issue d'un dimensionnement de viewport."""
    ALREADY_SIZED = "already_sized"
    CONVERGED = "converged"
    RESIZE_FAILED = "resize_failed"         # La fenêtre n'accepte pas la taille demandée
    DIFF_TOO_LARGE = "diff_too_large"       # Écart résiduel hors de la recherche pas à pas
    SEARCH_STALLED = "search_stalled"       # Deux tailles candidates identiques consécutives
    SEARCH_EXHAUSTED = "search_exhausted"   # Budget de tentatives épuisé

    @property
    def success(self) -> bool:
        return self in (SizingOutcome.ALREADY_SIZED, SizingOutcome.CONVERGED)

    @property
    def is_resize_failure(self) -> bool:
        return self is SizingOutcome.RESIZE_FAILED


@dataclass
class ViewportTarget:
    """État de travail d'une convergence (confiné à un seul appel)."""
    required: Size
    viewport: Size
    window: Optional[Size] = None

    @property
    def matches(self) -> bool:
        return self.viewport == self.required

    @property
    def width_diff(self) -> int:
        return self.viewport.width - self.required.width

    @property
    def height_diff(self) -> int:
        return self.viewport.height - self.required.height


@dataclass
class SizingResult:
    """Résultat d'un dimensionnement : issue, viewport atteint, historique."""
    outcome: SizingOutcome
    required: Size
    viewport: Size
    measurements: int = 0
    resize_requests: List[Size] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome.success

    def raise_for_status(self) -> "SizingResult":
        if not self.success:
            raise ResizeUnachievable(
                f"Viewport {self.viewport.width}x{self.viewport.height} au lieu de "
                f"{self.required.width}x{self.required.height} ({self.outcome.value})",
                result=self,
            )
        return self
