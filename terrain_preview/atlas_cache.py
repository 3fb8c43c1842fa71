"""Per-theme cache of decoded tile sheets."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

import numpy as np

from .codec import AtlasDecoder, decode_atlas
from .errors import AtlasDecodeFailure
from .themes import ATLAS_WIDTH_PX, Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AtlasPixelBuffer:
    """A decoded tile sheet: flat row-major RGBA bytes."""
    pixels: bytes
    width: int      # px
    height: int     # px

    def __len__(self) -> int:
        return len(self.pixels)

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)


class AtlasCache:
    """Decodes each theme's atlas at most once and shares the result.

    A lock per theme guards decode-and-insert, so concurrent first requests
    for the same theme run the decoder exactly once. Different themes decode
    in parallel.
    """

    def __init__(self, source: Callable[[Theme], bytes], decoder: AtlasDecoder = decode_atlas):
        self._source = source
        self._decoder = decoder
        self._buffers: Dict[Theme, AtlasPixelBuffer] = {}
        self._locks: Dict[Theme, threading.Lock] = {theme: threading.Lock() for theme in Theme}
        self._count_lock = threading.Lock()
        self.decode_count = 0

    def __contains__(self, theme: Theme) -> bool:
        return theme in self._buffers

    def get_or_decode(self, theme: Theme) -> AtlasPixelBuffer:
        buffer = self._buffers.get(theme)
        if buffer is not None:
            return buffer
        with self._locks[theme]:
            buffer = self._buffers.get(theme)
            if buffer is None:
                buffer = self._decode(theme)
                self._buffers[theme] = buffer
        return buffer

    def warm(self, themes: Optional[Iterable[Theme]] = None) -> None:
        """Decode the given themes (all of them by default) ahead of rendering."""
        for theme in (Theme if themes is None else themes):
            self.get_or_decode(theme)

    def _decode(self, theme: Theme) -> AtlasPixelBuffer:
        source = self._source(theme)
        with self._count_lock:
            self.decode_count += 1
        pixels, width, height = self._decoder(source)

        if len(pixels) != width * height * 4:
            raise AtlasDecodeFailure(
                f"{theme.resource_name} atlas: {len(pixels)} bytes for {width}x{height} RGBA"
            )
        if width != ATLAS_WIDTH_PX:
            raise AtlasDecodeFailure(
                f"{theme.resource_name} atlas is {width}px wide, expected {ATLAS_WIDTH_PX}px"
            )

        logger.info("Decoded %s atlas: %dx%d", theme.resource_name, width, height)
        return AtlasPixelBuffer(pixels=bytes(pixels), width=width, height=height)
