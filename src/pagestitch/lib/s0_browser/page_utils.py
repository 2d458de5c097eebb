"""Lectures et réglages de la page via JavaScript."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

from pagestitch.errors import MeasurementUnavailable
from pagestitch.lib.s0_geometry import Point, Region, Size

from . import scripts
from .types import DriverApi


def execute_script(
    driver: DriverApi,
    script: str,
    *args: Any,
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Exécute ``script`` puis laisse éventuellement le navigateur se stabiliser."""
    result = driver.execute_script(script, *args)
    if stabilization_time:
        sleep(stabilization_time)
    return result


def _to_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def get_viewport_size(driver: DriverApi) -> Size:
    """Taille du viewport mesurée en JavaScript."""
    try:
        results = driver.execute_script(scripts.JS_GET_VIEWPORT_SIZE)
    except Exception as e:
        raise MeasurementUnavailable(f"Mesure du viewport impossible: {e}") from e

    if not results or len(results) < 2:
        raise MeasurementUnavailable(f"Réponse viewport invalide: {results!r}")
    width = _to_int(results[0], None)
    height = _to_int(results[1], None)
    if width is None or height is None:
        raise MeasurementUnavailable(f"Valeurs viewport non numériques: {results!r}")
    return Size(width, height)


def get_viewport_size_or_display_size(driver: DriverApi) -> Size:
    """Taille du viewport, ou taille de la fenêtre si la mesure JS échoue."""
    try:
        return get_viewport_size(driver)
    except MeasurementUnavailable as e:
        print(f"[VIEWPORT] Mesure JS du viewport échouée ({e}), utilisation de la taille fenêtre.")
        return driver.get_window_size()


def get_device_pixel_ratio(driver: DriverApi) -> float:
    try:
        value = driver.execute_script(scripts.JS_GET_DEVICE_PIXEL_RATIO)
        ratio = float(value)
    except Exception as e:
        raise MeasurementUnavailable(f"Ratio de pixels indisponible: {e}") from e
    if ratio <= 0:
        raise MeasurementUnavailable(f"Ratio de pixels invalide: {ratio}")
    return ratio


def get_current_scroll_position(driver: DriverApi) -> Point:
    results = driver.execute_script(scripts.JS_GET_CURRENT_SCROLL_POSITION)
    # Position introuvable : 0 par défaut.
    if not isinstance(results, (list, tuple)) or len(results) < 2:
        return Point(0, 0)
    return Point(_to_int(results[0]), _to_int(results[1]))


def set_current_scroll_position(
    driver: DriverApi,
    position: Point,
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    execute_script(
        driver,
        scripts.JS_SET_SCROLL_POSITION,
        int(position.x),
        int(position.y),
        stabilization_time=stabilization_time,
        sleep=sleep,
    )


def get_entire_size(driver: DriverApi) -> Size:
    try:
        results = driver.execute_script(scripts.JS_GET_CONTENT_ENTIRE_SIZE)
    except Exception as e:
        raise MeasurementUnavailable(f"Taille de page indisponible: {e}") from e
    if not results or len(results) < 2:
        raise MeasurementUnavailable(f"Réponse taille de page invalide: {results!r}")
    return Size(_to_int(results[0]), _to_int(results[1]))


def set_overflow(
    driver: DriverApi,
    value: Optional[str],
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """Modifie l'overflow de documentElement et retourne la valeur d'origine."""
    return execute_script(
        driver,
        scripts.JS_SET_OVERFLOW,
        value or "",
        stabilization_time=stabilization_time,
        sleep=sleep,
    )


def set_body_overflow(
    driver: DriverApi,
    value: Optional[str],
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """Modifie l'overflow du body et retourne la valeur d'origine."""
    return execute_script(
        driver,
        scripts.JS_SET_BODY_OVERFLOW,
        value or "",
        stabilization_time=stabilization_time,
        sleep=sleep,
    )


def hide_scrollbars(driver: DriverApi, stabilization_time: float = 0,
                    sleep: Callable[[float], None] = time.sleep) -> Optional[str]:
    return set_overflow(driver, "hidden", stabilization_time, sleep)


def is_body_overflow_hidden(driver: DriverApi) -> bool:
    return bool(driver.execute_script(scripts.JS_GET_IS_BODY_OVERFLOW_HIDDEN))


def get_current_transform(driver: DriverApi) -> Dict[str, str]:
    return driver.execute_script(scripts.JS_GET_CURRENT_TRANSFORM, list(scripts.JS_TRANSFORM_KEYS)) or {}


def set_transforms(
    driver: DriverApi,
    transforms: Dict[str, str],
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    execute_script(driver, scripts.JS_SET_TRANSFORMS, transforms,
                   stabilization_time=stabilization_time, sleep=sleep)


def set_transform(
    driver: DriverApi,
    transform: Optional[str],
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Applique ``transform`` à toutes les clés de transform connues."""
    transforms = {key: transform or "" for key in scripts.JS_TRANSFORM_KEYS}
    set_transforms(driver, transforms, stabilization_time, sleep)


def translate_to(
    driver: DriverApi,
    position: Point,
    stabilization_time: float = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    set_transform(driver, f"translate(-{position.x}px, -{position.y}px)", stabilization_time, sleep)


def _parse_px(value: Optional[str]) -> int:
    if value is None:
        raise ValueError("Valeur CSS absente")
    return int(round(float(str(value).strip().replace("px", "") or 0)))


def get_border_widths(driver: DriverApi, element: Any) -> Point:
    """Largeurs des bordures gauche/haut d'un élément (0 si illisibles)."""
    widths = []
    for prop in ("border-left-width", "border-top-width"):
        try:
            widths.append(_parse_px(driver.get_computed_style(element, prop)))
        except Exception as e:
            print(f"[BROWSER] Lecture de {prop} impossible ({e}), valeur par défaut 0.")
            widths.append(0)
    return Point(widths[0], widths[1])


def get_element_region(driver: DriverApi, element: Any, include_borders: bool = True) -> Region:
    """Région du contenu d'un élément, relative au viewport."""
    rect = driver.execute_script(scripts.JS_GET_ELEMENT_RECT, element)
    if not rect:
        raise MeasurementUnavailable("Rectangle de l'élément indisponible.")
    location = Point(int(round(rect["left"])), int(round(rect["top"])))
    if include_borders:
        borders = get_border_widths(driver, element)
        location = location.offset(borders.x, borders.y)
    return Region(location.x, location.y, int(round(rect["width"])), int(round(rect["height"])))
