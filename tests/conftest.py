from pathlib import Path

import numpy as np
import pytest

from terrain_preview.atlas_cache import AtlasCache
from terrain_preview.compositor import Compositor
from terrain_preview.resources import TerrainResources
from terrain_preview.themes import Theme
from tests.helpers import BADLANDS_TABLE, JUNGLE_TABLE, CountingDecoder, make_atlas, write_theme


@pytest.fixture(scope="session")
def badlands_atlas() -> np.ndarray:
    return make_atlas(seed=0)


@pytest.fixture(scope="session")
def jungle_atlas() -> np.ndarray:
    return make_atlas(seed=101)


@pytest.fixture
def terrain_dir(tmp_path, badlands_atlas, jungle_atlas) -> Path:
    write_theme(tmp_path, Theme.BADLANDS, BADLANDS_TABLE, badlands_atlas)
    write_theme(tmp_path, Theme.JUNGLE, JUNGLE_TABLE, jungle_atlas)
    return tmp_path


@pytest.fixture
def decoder() -> CountingDecoder:
    return CountingDecoder()


@pytest.fixture
def compositor(terrain_dir, decoder) -> Compositor:
    resources = TerrainResources(terrain_dir)
    return Compositor(resources, atlas_cache=AtlasCache(resources.atlas_source, decoder))
