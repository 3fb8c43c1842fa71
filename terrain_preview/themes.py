"""Terrain themes and fixed tile geometry."""

from enum import Enum
from numbers import Integral
from typing import Union

from .errors import UnknownTheme

# === Geometry ===
TILE_SIZE = 32      # width/height of each tile in px, on the map and in the atlas
ATLAS_COLS = 64     # tiles per atlas row
ATLAS_WIDTH_PX = ATLAS_COLS * TILE_SIZE

ThemeLike = Union["Theme", str, int]


class Theme(Enum):
    """Terrain style of a map. Values are the era numbers stored in map files."""
    BADLANDS = 0
    PLATFORM = 1
    INSTALL = 2
    ASHWORLD = 3
    JUNGLE = 4
    DESERT = 5
    ICE = 6
    TWILIGHT = 7

    @property
    def resource_name(self) -> str:
        """Base name shared by the theme's placement table and atlas files."""
        return self.name.lower()

    @property
    def placement_filename(self) -> str:
        return f"{self.resource_name}.cv5.bin"

    @property
    def atlas_filename(self) -> str:
        return f"remaster/{self.resource_name}.webp"


def resolve_theme(theme: ThemeLike) -> Theme:
    """Accept a Theme, its name ("badlands") or its era number (0-7)."""
    if isinstance(theme, Theme):
        return theme
    # bool is an int subclass; True is not a theme
    if isinstance(theme, Integral) and not isinstance(theme, bool):
        try:
            return Theme(int(theme))
        except ValueError:
            raise UnknownTheme(theme) from None
    if isinstance(theme, str):
        key = theme.strip()
        if key.isdecimal():
            return resolve_theme(int(key))
        try:
            return Theme[key.upper()]
        except KeyError:
            raise UnknownTheme(theme) from None
    raise UnknownTheme(theme)
