"""Atlas decoding and canvas encoding with Pillow."""

import io
from typing import Callable, Tuple

from PIL import Image

from .config import check_image_format
from .errors import AtlasDecodeFailure

# (rgba_bytes, width_px, height_px)
DecodedAtlas = Tuple[bytes, int, int]

AtlasDecoder = Callable[[bytes], DecodedAtlas]
ImageEncoder = Callable[[bytes, int, int, str], bytes]


def decode_atlas(data: bytes) -> DecodedAtlas:
    """Decode a compressed tile sheet into row-major RGBA bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = img.convert('RGBA')
            pixels = img.tobytes()
            width, height = img.size
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise AtlasDecodeFailure(f"Could not decode atlas image: {e}") from e
    return pixels, width, height


def encode_image(pixels: bytes, width: int, height: int, mode: str = 'RGB',
                 image_format: str = 'PNG') -> bytes:
    """Encode raw pixels into a lossless image container."""
    image_format = check_image_format(image_format)
    img = Image.frombytes(mode, (width, height), pixels)
    out = io.BytesIO()
    if image_format == 'WEBP':
        img.save(out, format='WEBP', lossless=True)
    else:
        img.save(out, format=image_format)
    return out.getvalue()
