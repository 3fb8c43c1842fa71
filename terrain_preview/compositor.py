"""Tile compositor: turns a tile-index grid into an encoded terrain image."""

import logging
import threading
from numbers import Integral
from typing import Optional, Sequence, Tuple

import numpy as np

from .atlas_cache import AtlasCache, AtlasPixelBuffer
from .codec import AtlasDecoder, ImageEncoder, decode_atlas, encode_image
from .config import RendererConfig, check_image_format
from .errors import InvalidDimensions, PixelAddressOutOfRange, TileIndexOutOfRange
from .resources import PlacementTable, TerrainResources
from .themes import ATLAS_COLS, ATLAS_WIDTH_PX, TILE_SIZE, ThemeLike, resolve_theme

logger = logging.getLogger(__name__)


def check_dimensions(grid_len: int, width: int, height: int) -> Tuple[int, int]:
    """Validate grid dimensions and return them as plain ints."""
    for dim in (width, height):
        if isinstance(dim, bool) or not isinstance(dim, Integral) or dim <= 0:
            raise InvalidDimensions(grid_len, width, height)
    # numpy scalars would wrap on multiplication
    width, height = int(width), int(height)
    if grid_len != width * height:
        raise InvalidDimensions(grid_len, width, height)
    return width, height


def copy_tile_checked(canvas: np.ndarray, atlas: AtlasPixelBuffer,
                      x: int, y: int, input_x: int, input_y: int) -> None:
    """Copy one tile pixel by pixel, bounds-checking every atlas read.

    Used for tiles that reach past the end of the atlas. Raises
    PixelAddressOutOfRange at the first pixel (rows then columns) whose RGB
    bytes are not all inside the buffer.
    """
    pixels = atlas.pixels
    output_x = x * TILE_SIZE
    output_y = y * TILE_SIZE

    for j in range(TILE_SIZE):
        for i in range(TILE_SIZE):
            p = ((input_x + i) + (input_y + j) * ATLAS_WIDTH_PX) * 4
            if p + 3 > len(pixels):
                logger.warning(
                    "INVALID PIXEL. x: %d, y: %d, j: %d, i: %d, output_x: %d, output_y: %d, "
                    "input_x: %d, input_y: %d, p: %d, atlas len: %d",
                    x, y, j, i, output_x, output_y, input_x, input_y, p, len(pixels),
                )
                raise PixelAddressOutOfRange(x, y, i, j, p, len(pixels))
            canvas[output_y + j, output_x + i] = (pixels[p], pixels[p + 1], pixels[p + 2])


def blit_tiles(canvas: np.ndarray, grid: Sequence[int], width: int, height: int,
               table: PlacementTable, atlas: AtlasPixelBuffer) -> None:
    """Copy one atlas tile into the canvas for every grid cell, row-major."""
    atlas_rgb = atlas.as_array()[:, :, :3]
    atlas_rows_px = atlas.height

    for y in range(height):
        for x in range(width):
            tile_index = int(grid[x + y * width])
            if not 0 <= tile_index < len(table):
                raise TileIndexOutOfRange(x, y, tile_index, len(table))

            placement = table[tile_index]
            input_x = (placement % ATLAS_COLS) * TILE_SIZE
            input_y = (placement // ATLAS_COLS) * TILE_SIZE

            if input_y + TILE_SIZE > atlas_rows_px:
                copy_tile_checked(canvas, atlas, x, y, input_x, input_y)
                continue

            output_x = x * TILE_SIZE
            output_y = y * TILE_SIZE
            canvas[output_y:output_y + TILE_SIZE, output_x:output_x + TILE_SIZE] = \
                atlas_rgb[input_y:input_y + TILE_SIZE, input_x:input_x + TILE_SIZE]


class Compositor:
    """Renders tile-index grids with one set of terrain resources.

    Holds the atlas cache, so build one Compositor per process (see
    default_compositor) and reuse it.
    """

    def __init__(self, resources: TerrainResources, atlas_cache: Optional[AtlasCache] = None,
                 encoder: Optional[ImageEncoder] = None, image_format: str = 'PNG'):
        self.resources = resources
        if atlas_cache is None:
            atlas_cache = AtlasCache(resources.atlas_source)
        self.atlas_cache = atlas_cache
        self.encoder = encoder
        self.image_format = check_image_format(image_format)

    @classmethod
    def from_config(cls, config: RendererConfig, decoder: AtlasDecoder = decode_atlas) -> "Compositor":
        resources = TerrainResources(config.terrain_dir)
        compositor = cls(
            resources,
            atlas_cache=AtlasCache(resources.atlas_source, decoder),
            image_format=config.image_format,
        )
        if config.eager:
            compositor.atlas_cache.warm()
        return compositor

    def compose(self, grid: Sequence[int], width: int, height: int, theme: ThemeLike) -> np.ndarray:
        """Composite the grid into a (height*32, width*32, 3) uint8 RGB canvas."""
        theme = resolve_theme(theme)
        width, height = check_dimensions(len(grid), width, height)

        table = self.resources.placement_table(theme)
        atlas = self.atlas_cache.get_or_decode(theme)

        logger.debug("Rendering %dx%d %s map", width, height, theme.resource_name)
        canvas = np.zeros((height * TILE_SIZE, width * TILE_SIZE, 3), dtype=np.uint8)
        blit_tiles(canvas, grid, width, height, table, atlas)
        return canvas

    def render(self, grid: Sequence[int], width: int, height: int, theme: ThemeLike) -> bytes:
        """Composite the grid and return it encoded as a lossless image."""
        canvas = self.compose(grid, width, height, theme)
        height_px, width_px, _ = canvas.shape
        if self.encoder is not None:
            return self.encoder(canvas.tobytes(), width_px, height_px, 'RGB')
        return encode_image(canvas.tobytes(), width_px, height_px, 'RGB', self.image_format)


_default_compositor: Optional[Compositor] = None
_default_lock = threading.Lock()


def default_compositor() -> Compositor:
    """Process-wide compositor built from RendererConfig.from_env()."""
    global _default_compositor
    with _default_lock:
        if _default_compositor is None:
            _default_compositor = Compositor.from_config(RendererConfig.from_env())
        return _default_compositor


def render(grid: Sequence[int], width: int, height: int, theme: ThemeLike) -> bytes:
    """Render a terrain preview with the process-wide compositor."""
    return default_compositor().render(grid, width, height, theme)
