"""Buffer image à décodage et ré-encodage paresseux."""

from __future__ import annotations

import math
import threading
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
from PIL import Image

from pagestitch.errors import DecodeError
from pagestitch.lib.s0_geometry import ORIGIN, Point, Region, Size

from .s11_codec import base64_to_bytes, decode_bytes, encode_image, read_size_from_header
from .types import DEFAULT_IMAGE_CONFIG, ImageConfig


_CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


class ImageBuffer:
    """
    Enveloppe une image encodée et, une fois décodée, sa grille de pixels.

    - Le décodage est différé jusqu'à la première opération sur les pixels.
    - L'encodage est différé jusqu'à la demande des octets.
    - Chaque transformation retourne un nouveau buffer ; l'instance d'origine
      n'est jamais modifiée et ne doit plus être considérée comme l'image courante.
    - Au plus un décodage et un encodage sont en cours par instance.

    Les coordonnées (left, top) situent l'image dans un canevas logique plus grand
    (ex. position de scroll d'une capture de viewport).
    """

    def __init__(
        self,
        data: Optional[bytes] = None,
        *,
        image: Optional[Image.Image] = None,
        config: Optional[ImageConfig] = None,
        coordinates: Point = ORIGIN,
    ):
        if data is None and image is None:
            raise ValueError("ImageBuffer requiert des octets encodés ou une image décodée.")
        self.config = config or DEFAULT_IMAGE_CONFIG
        self._encoded: Optional[bytes] = data
        self._decoded: Optional[Image.Image] = image
        self._size: Optional[Size] = Size(*image.size) if image is not None else None
        self._coordinates = coordinates
        self._decode_lock = threading.Lock()
        self._encode_lock = threading.Lock()
        self._stats = {"decodes": 0, "encodes": 0}

    # ------------------------------------------------------------------ #
    # Constructeurs                                                      #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_base64(cls, image64: str, config: Optional[ImageConfig] = None) -> "ImageBuffer":
        return cls(base64_to_bytes(image64), config=config)

    @classmethod
    def from_image(cls, image: Image.Image, config: Optional[ImageConfig] = None,
                   coordinates: Point = ORIGIN) -> "ImageBuffer":
        return cls(image=image, config=config, coordinates=coordinates)

    def _derive(self, image: Image.Image) -> "ImageBuffer":
        return ImageBuffer(image=image, config=self.config, coordinates=self._coordinates)

    def _copy(self) -> "ImageBuffer":
        """Copie sans décodage : les octets sont immuables et peuvent être partagés."""
        if self._encoded is not None:
            copy = ImageBuffer(self._encoded, config=self.config, coordinates=self._coordinates)
            copy._size = self._size
            return copy
        return self._derive(self._decoded.copy())

    # ------------------------------------------------------------------ #
    # Décodage / encodage                                                #
    # ------------------------------------------------------------------ #

    @property
    def is_decoded(self) -> bool:
        return self._decoded is not None

    @property
    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    def decode(self) -> None:
        """Décode les octets en grille de pixels (idempotent)."""
        if self._decoded is not None or not self.config.decode_enabled:
            return
        with self._decode_lock:
            if self._decoded is not None:
                return
            image = decode_bytes(self._encoded)
            self._stats["decodes"] += 1
            self._size = Size(*image.size)
            self._decoded = image

    def encode(self) -> None:
        """Encode la grille de pixels si aucun encodage à jour n'existe (idempotent)."""
        if self._encoded is not None:
            return
        with self._encode_lock:
            if self._encoded is not None:
                return
            data = encode_image(self._decoded, self.config.image_format)
            self._stats["encodes"] += 1
            self._encoded = data

    def to_bytes(self) -> bytes:
        self.encode()
        return self._encoded

    def image_data(self) -> Image.Image:
        """Grille de pixels décodée (à ne pas modifier)."""
        if not self.config.decode_enabled and self._decoded is None:
            raise DecodeError("Décodage désactivé par la configuration.")
        self.decode()
        return self._decoded

    def as_array(self) -> np.ndarray:
        return np.array(self.image_data())

    # ------------------------------------------------------------------ #
    # Dimensions et coordonnées                                          #
    # ------------------------------------------------------------------ #

    @property
    def size(self) -> Size:
        if self._size is None:
            try:
                self._size = read_size_from_header(self._encoded)
            except DecodeError:
                if not self.config.decode_enabled:
                    raise
                self.decode()
        return self._size

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    @property
    def coordinates(self) -> Point:
        return self._coordinates

    def set_coordinates(self, coordinates: Point) -> None:
        self._coordinates = coordinates

    # ------------------------------------------------------------------ #
    # Transformations                                                    #
    # ------------------------------------------------------------------ #

    def crop(self, region: Region) -> "ImageBuffer":
        """Recadre selon ``region`` (rognée aux bornes de l'image)."""
        if not self.config.decode_enabled:
            return self._copy()
        self.decode()

        bounds = Region(0, 0, self._size.width, self._size.height)
        clipped = bounds.intersect(region)
        if clipped.width == 0 or clipped.height == 0:
            raise ValueError(f"Région de recadrage hors de l'image: {region} (image {bounds.size.to_tuple()})")
        return self._derive(self._decoded.crop(clipped.to_box()))

    def scale(self, ratio: float) -> "ImageBuffer":
        if ratio == 1:
            return self._copy()
        if ratio <= 0:
            raise ValueError(f"Ratio d'échelle invalide: {ratio}")
        if not self.config.decode_enabled:
            return self._copy()
        self.decode()

        width = max(1, int(math.ceil(self._size.width * ratio)))
        height = max(1, int(math.ceil(self._size.height * ratio)))
        return self._derive(self._decoded.resize((width, height), Image.Resampling.BICUBIC))

    def rotate(self, degrees: int) -> "ImageBuffer":
        """Rotation dans le sens horaire par multiples de 90 degrés."""
        normalized = degrees % 360
        if normalized == 0:
            return self._copy()
        if normalized % 90 != 0:
            raise ValueError(f"Rotation non supportée: {degrees} (multiple de 90 attendu)")
        if not self.config.decode_enabled:
            return self._copy()
        self.decode()
        return self._derive(self._decoded.transpose(_CLOCKWISE_TRANSPOSE[normalized]))

    # ------------------------------------------------------------------ #
    # Persistance                                                        #
    # ------------------------------------------------------------------ #

    def save(self, path: Union[str, Path]) -> str:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.to_bytes())
        return str(target)

    def __repr__(self) -> str:
        size = f"{self._size.width}x{self._size.height}" if self._size else "?"
        return f"ImageBuffer(size={size}, decoded={self.is_decoded}, coordinates={self._coordinates.to_tuple()})"
