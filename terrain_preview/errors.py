"""Exceptions raised while rendering terrain previews."""

from typing import Any


class RenderError(Exception):
    """Base class for every error the renderer raises."""


class InvalidDimensions(RenderError, ValueError):
    """Grid length does not match width * height, or a dimension is not positive."""

    def __init__(self, grid_len: int, width: Any, height: Any):
        self.grid_len = grid_len
        self.width = width
        self.height = height
        super().__init__(
            f"Grid of {grid_len} tiles does not fit {width}x{height}"
        )


class UnknownTheme(RenderError, ValueError):
    """Theme identifier outside the supported set."""

    def __init__(self, theme: Any):
        self.theme = theme
        super().__init__(f"Unknown terrain theme: {theme!r}")


class ResourceError(RenderError):
    """A bundled placement table or atlas file is missing or malformed."""


class AtlasDecodeFailure(RenderError):
    """Atlas source bytes could not be decoded into an RGBA buffer."""


class TileIndexOutOfRange(RenderError):
    """A grid cell references a tile index past the end of the placement table."""

    def __init__(self, x: int, y: int, tile_index: int, table_len: int):
        self.x = x
        self.y = y
        self.tile_index = tile_index
        self.table_len = table_len
        super().__init__(
            f"Tile index {tile_index} at ({x}, {y}) outside placement table "
            f"of {table_len} entries"
        )


class PixelAddressOutOfRange(RenderError):
    """Atlas offset computed for a pixel lies outside the decoded atlas.

    The placement table, the atlas and the tile index at (x, y) disagree.
    (i, j) is the pixel inside the tile, offset the byte offset into the atlas.
    """

    def __init__(self, x: int, y: int, i: int, j: int, offset: int, buffer_len: int):
        self.x = x
        self.y = y
        self.i = i
        self.j = j
        self.offset = offset
        self.buffer_len = buffer_len
        super().__init__(
            f"Invalid pixel at tile ({x}, {y}), pixel ({i}, {j}): "
            f"atlas offset {offset} outside buffer of {buffer_len} bytes"
        )
