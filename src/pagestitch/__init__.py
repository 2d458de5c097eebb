"""pagestitch : capture pleine page et assemblage de captures navigateur."""

from .errors import (
    CaptureError,
    MeasurementUnavailable,
    ResizeUnachievable,
    DecodeError,
    ScrollFailure,
    CaptureCancelled,
)
from .lib.s3_capture import (
    CaptureRequest,
    CaptureResult,
    CaptureSettings,
    FullPageCapture,
    capture_screenshot,
)

__version__ = "0.1.0"

__all__ = [
    # Erreurs
    "CaptureError",
    "MeasurementUnavailable",
    "ResizeUnachievable",
    "DecodeError",
    "ScrollFailure",
    "CaptureCancelled",
    # Capture
    "CaptureRequest",
    "CaptureResult",
    "CaptureSettings",
    "FullPageCapture",
    "capture_screenshot",
    "__version__",
]
