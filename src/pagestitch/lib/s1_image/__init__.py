"""Module s1_image : Buffer image paresseux et assemblage."""

from .types import ImageConfig, Tile, DEFAULT_IMAGE_CONFIG
from .buffer import ImageBuffer
from .s11_codec import decode_bytes, encode_image, read_size_from_header
from .s12_stitcher import stitch_tiles

__all__ = [
    "ImageConfig",
    "Tile",
    "DEFAULT_IMAGE_CONFIG",
    "ImageBuffer",
    "decode_bytes",
    "encode_image",
    "read_size_from_header",
    "stitch_tiles",
]
