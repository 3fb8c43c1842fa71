"""Synthetic terrain resources shared by the tests."""

import struct
import threading
import time
from pathlib import Path

import numpy as np
from PIL import Image

from terrain_preview.codec import decode_atlas
from terrain_preview.themes import ATLAS_WIDTH_PX, TILE_SIZE, Theme

ATLAS_ROWS = 2      # tile rows in the test atlases

# tile index -> atlas cell; index 2 points one row past the atlas
BADLANDS_TABLE = [5, 70, 128, 0, 127]
JUNGLE_TABLE = [0, 65]


def make_atlas(seed: int = 0) -> np.ndarray:
    """(64, 2048, 4) RGBA atlas whose every pixel is distinct within a tile
    and whose blue channel identifies the atlas cell."""
    ys, xs = np.mgrid[0:ATLAS_ROWS * TILE_SIZE, 0:ATLAS_WIDTH_PX]
    cell = xs // TILE_SIZE + (ys // TILE_SIZE) * 64
    atlas = np.empty(xs.shape + (4,), dtype=np.uint8)
    atlas[..., 0] = (xs + seed) % 256
    atlas[..., 1] = (ys * 3 + seed) % 256
    atlas[..., 2] = (cell + seed) % 256
    atlas[..., 3] = 255
    return atlas


def atlas_cell(atlas: np.ndarray, placement: int) -> np.ndarray:
    col, row = placement % 64, placement // 64
    return atlas[row * TILE_SIZE:(row + 1) * TILE_SIZE, col * TILE_SIZE:(col + 1) * TILE_SIZE, :3]


def write_theme(terrain_dir: Path, theme: Theme, table, atlas: np.ndarray) -> None:
    (terrain_dir / theme.placement_filename).write_bytes(struct.pack(f'<{len(table)}H', *table))
    atlas_path = terrain_dir / theme.atlas_filename
    atlas_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(atlas, 'RGBA').save(atlas_path, format='WEBP', lossless=True)


class CountingDecoder:
    """Wraps decode_atlas, counting calls; delay widens race windows."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, data: bytes):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return decode_atlas(data)
