import struct

import numpy as np
import pytest
from PIL import Image

from terrain_preview.errors import InvalidDimensions
from terrain_preview.render_map import main, read_map_grid
from tests.helpers import atlas_cell


def write_grid(path, values):
    path.write_bytes(struct.pack(f'<{len(values)}H', *values))
    return path


def test_read_map_grid(tmp_path):
    grid_path = write_grid(tmp_path / "map.bin", [0, 1, 513, 65535])
    assert read_map_grid(grid_path, 2, 2) == [0, 1, 513, 65535]


def test_read_map_grid_size_mismatch(tmp_path):
    grid_path = write_grid(tmp_path / "map.bin", [0, 1, 2])
    with pytest.raises(InvalidDimensions):
        read_map_grid(grid_path, 2, 2)


def test_main_writes_png(tmp_path, terrain_dir, badlands_atlas):
    grid_path = write_grid(tmp_path / "map.bin", [0, 1])
    output = tmp_path / "out" / "map.png"

    code = main([str(grid_path), "2", "1", "badlands", str(output), "--terrain-dir", str(terrain_dir)])

    assert code == 0
    with Image.open(output) as img:
        assert img.size == (64, 32)
        np.testing.assert_array_equal(np.asarray(img)[:, 32:], atlas_cell(badlands_atlas, 70))


def test_main_reports_render_errors(tmp_path, terrain_dir, capsys):
    grid_path = write_grid(tmp_path / "map.bin", [2])
    output = tmp_path / "map.png"

    code = main([str(grid_path), "1", "1", "0", str(output), "--terrain-dir", str(terrain_dir)])

    assert code == 1
    assert not output.exists()
    assert "Invalid pixel at tile (0, 0)" in capsys.readouterr().err


def test_main_unknown_theme(tmp_path, terrain_dir):
    grid_path = write_grid(tmp_path / "map.bin", [0])
    code = main([str(grid_path), "1", "1", "lava", str(tmp_path / "x.png"), "--terrain-dir", str(terrain_dir)])
    assert code == 1


def test_main_non_decimal_theme_digit(tmp_path, terrain_dir, capsys):
    grid_path = write_grid(tmp_path / "map.bin", [0])
    code = main([str(grid_path), "1", "1", "²", str(tmp_path / "x.png"), "--terrain-dir", str(terrain_dir)])
    assert code == 1
    assert "Unknown terrain theme" in capsys.readouterr().err


def test_main_unwritable_output(tmp_path, terrain_dir, capsys):
    grid_path = write_grid(tmp_path / "map.bin", [0])
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory")

    code = main([str(grid_path), "1", "1", "badlands", str(blocker / "map.png"), "--terrain-dir", str(terrain_dir)])

    assert code == 1
    assert "Error rendering" in capsys.readouterr().err
