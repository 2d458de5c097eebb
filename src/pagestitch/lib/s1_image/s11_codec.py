"""Conversions octets encodés <-> image PIL."""

from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from pagestitch.errors import DecodeError
from pagestitch.lib.s0_geometry import Size


def decode_bytes(data: bytes) -> Image.Image:
    """Décode entièrement ``data`` en image RGB (fond blanc sous la transparence)."""
    if not data:
        raise DecodeError("Aucun octet à décoder.")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Image non décodable: {e}") from e

    if "A" in image.getbands():
        image = image.convert("RGBA")
        background = Image.new("RGBA", image.size, (255, 255, 255, 255))
        background.paste(image, mask=image.split()[-1])
        return background.convert("RGB")
    return image.convert("RGB")


def read_size_from_header(data: bytes) -> Size:
    """Lit les dimensions dans l'en-tête du conteneur, sans décoder les pixels."""
    if not data:
        raise DecodeError("Aucun octet pour lire l'en-tête.")
    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"En-tête illisible: {e}") from e
    return Size(width, height)


def encode_image(image: Image.Image, image_format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def base64_to_bytes(image64: str) -> bytes:
    if image64.startswith("data:"):
        image64 = image64.split(",", 1)[1]
    try:
        return base64.b64decode(image64)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Base64 invalide: {e}") from e
