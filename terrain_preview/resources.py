"""Loading of the per-theme placement tables and atlas source bytes."""

import logging
import struct
import threading
from pathlib import Path
from typing import Dict, Tuple

from .errors import ResourceError
from .themes import Theme

logger = logging.getLogger(__name__)

PlacementTable = Tuple[int, ...]


def decode_placement_table(data: bytes) -> PlacementTable:
    """Parse a cv5 placement blob: a flat array of little-endian u16.

    Entry n is the atlas cell for tile index n (col = v % 64, row = v // 64).
    """
    if len(data) % 2 != 0:
        raise ResourceError(f"Placement table size {len(data)} is not a multiple of 2")
    return tuple(value for (value,) in struct.iter_unpack('<H', data))


class TerrainResources:
    """Read-only access to the terrain files of one terrain directory.

    Placement tables are parsed once per theme and kept for the lifetime of
    the object. Atlas bytes are read on demand; decoding them is the job of
    AtlasCache.
    """

    def __init__(self, terrain_dir: Path):
        self.terrain_dir = Path(terrain_dir)
        self._tables: Dict[Theme, PlacementTable] = {}
        self._lock = threading.Lock()

    def _read(self, relative: str) -> bytes:
        path = self.terrain_dir / relative
        if not path.exists():
            raise ResourceError(f"Terrain resource missing: {path}")
        with open(path, 'rb') as f:
            return f.read()

    def placement_table(self, theme: Theme) -> PlacementTable:
        table = self._tables.get(theme)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(theme)
            if table is None:
                table = decode_placement_table(self._read(theme.placement_filename))
                logger.debug("Loaded %s placement table: %d entries", theme.resource_name, len(table))
                self._tables[theme] = table
        return table

    def atlas_source(self, theme: Theme) -> bytes:
        return self._read(theme.atlas_filename)
