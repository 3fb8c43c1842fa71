"""Composited terrain previews for tile-based maps."""

from .atlas_cache import AtlasCache, AtlasPixelBuffer
from .codec import decode_atlas, encode_image
from .compositor import Compositor, default_compositor, render
from .config import RendererConfig
from .errors import (
    AtlasDecodeFailure,
    InvalidDimensions,
    PixelAddressOutOfRange,
    RenderError,
    ResourceError,
    TileIndexOutOfRange,
    UnknownTheme,
)
from .resources import TerrainResources, decode_placement_table
from .themes import ATLAS_COLS, TILE_SIZE, Theme, resolve_theme

__all__ = [
    "ATLAS_COLS",
    "TILE_SIZE",
    "AtlasCache",
    "AtlasDecodeFailure",
    "AtlasPixelBuffer",
    "Compositor",
    "InvalidDimensions",
    "PixelAddressOutOfRange",
    "RenderError",
    "RendererConfig",
    "ResourceError",
    "TerrainResources",
    "Theme",
    "TileIndexOutOfRange",
    "UnknownTheme",
    "decode_atlas",
    "decode_placement_table",
    "default_compositor",
    "encode_image",
    "render",
    "resolve_theme",
]
