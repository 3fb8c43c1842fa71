#!/usr/bin/env python3
"""
Terrain Preview Renderer
Renders a map's terrain layer (raw u16 tile indices) as a PNG preview.

Usage: terrain-preview GRID_BIN WIDTH HEIGHT THEME OUTPUT [--terrain-dir DIR]
"""

import argparse
import logging
import struct
import sys
from pathlib import Path
from typing import List

from .compositor import Compositor
from .config import IMAGE_FORMATS, RendererConfig
from .errors import InvalidDimensions, RenderError

logger = logging.getLogger(__name__)


def read_map_grid(grid_path: Path, width: int, height: int) -> List[int]:
    """Read a terrain layer file: width*height little-endian u16 tile indices."""
    with open(grid_path, 'rb') as f:
        data = f.read()

    expected_size = width * height * 2
    if len(data) != expected_size:
        raise InvalidDimensions(len(data) // 2, width, height)

    return list(struct.unpack(f'<{width * height}H', data))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a map's terrain layer as an image.")
    parser.add_argument("grid", type=Path, help="Raw terrain layer (u16 little-endian tile indices)")
    parser.add_argument("width", type=int, help="Map width in tiles")
    parser.add_argument("height", type=int, help="Map height in tiles")
    parser.add_argument("theme", help="Terrain theme name (badlands, jungle, ...) or era number")
    parser.add_argument("output", type=Path, help="Image file to write")
    parser.add_argument("--terrain-dir", type=Path, default=None,
                        help="Directory with <theme>.cv5.bin and remaster/<theme>.webp")
    parser.add_argument("--format", dest="image_format", default="PNG",
                        choices=IMAGE_FORMATS, help="Lossless output format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log atlas decodes and render sizes")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {"image_format": args.image_format}
    if args.terrain_dir is not None:
        overrides["terrain_dir"] = args.terrain_dir
    config = RendererConfig.from_env(**overrides)

    try:
        grid = read_map_grid(args.grid, args.width, args.height)
        compositor = Compositor.from_config(config)
        image = compositor.render(grid, args.width, args.height, args.theme)
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(image)
    except (RenderError, OSError) as e:
        print(f"Error rendering {args.grid}: {e}", file=sys.stderr)
        return 1

    logger.info("Saved %s (%d bytes)", args.output, len(image))
    return 0


if __name__ == "__main__":
    sys.exit(main())
