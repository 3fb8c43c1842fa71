"""Renderer configuration."""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Bundled placement tables (<theme>.cv5.bin) and atlases (remaster/<theme>.webp)
DEFAULT_TERRAIN_DIR = Path(__file__).parent / "terrain"
TERRAIN_DIR_ENV = "TERRAIN_PREVIEW_DIR"

# Lossless formats the encoder may emit
IMAGE_FORMATS = ("PNG", "WEBP")


def check_image_format(image_format: str) -> str:
    """Normalise a format name, refusing anything that is not lossless."""
    image_format = image_format.upper()
    if image_format not in IMAGE_FORMATS:
        raise ValueError(
            f"Unsupported image format {image_format!r}, expected one of {IMAGE_FORMATS}"
        )
    return image_format


@dataclass
class RendererConfig:
    terrain_dir: Path = field(default_factory=lambda: DEFAULT_TERRAIN_DIR)
    image_format: str = "PNG"
    eager: bool = False         # decode every atlas up front instead of on first use

    def __post_init__(self):
        self.terrain_dir = Path(self.terrain_dir)
        self.image_format = check_image_format(self.image_format)

    @classmethod
    def from_env(cls, **overrides) -> "RendererConfig":
        """Build a config, taking terrain_dir from $TERRAIN_PREVIEW_DIR when set."""
        env_dir = os.environ.get(TERRAIN_DIR_ENV)
        if env_dir and "terrain_dir" not in overrides:
            overrides["terrain_dir"] = Path(env_dir)
        return cls(**overrides)
