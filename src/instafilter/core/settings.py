"""
App Settings - User configuration saved between runs.

Settings live in ~/.config/instafilter/settings.json. A missing file means
defaults; the INSTAFILTER_ALBUM_DIR environment variable overrides the album
directory either way.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


CONFIG_PATH = Path.home() / ".config" / "instafilter" / "settings.json"
DEFAULT_ALBUM_DIR = Path.home() / "Pictures" / "Instafilter"
ALBUM_DIR_ENV = "INSTAFILTER_ALBUM_DIR"

SUPPORTED_FORMATS = ("png", "jpeg", "webp", "tiff", "bmp")


@dataclass
class AppSettings:
    """
    Application-level settings.

    Attributes:
        album_directory: Where saved photos are written
        output_format: Image format for saved photos
        output_quality: Quality for lossy formats (1-100)
        default_filter: Filter id selected at start-up
        preview_size: Longest edge of the live preview in pixels
    """
    album_directory: Path = field(default_factory=lambda: DEFAULT_ALBUM_DIR)
    output_format: str = "png"
    output_quality: int = 95
    default_filter: str = "sepia_tone"
    preview_size: int = 1024

    def __post_init__(self) -> None:
        self.album_directory = Path(self.album_directory).expanduser()
        self.output_format = self.output_format.lower().lstrip(".")
        if self.output_format == "jpg":
            self.output_format = "jpeg"
        if self.output_format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported output format: {self.output_format} "
                f"(expected one of {', '.join(SUPPORTED_FORMATS)})"
            )
        if not 1 <= int(self.output_quality) <= 100:
            raise ValueError(f"output_quality must be 1-100, got {self.output_quality}")

    @property
    def file_extension(self) -> str:
        return "jpg" if self.output_format == "jpeg" else self.output_format

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return {
            "album_directory": str(self.album_directory),
            "output_format": self.output_format,
            "output_quality": self.output_quality,
            "default_filter": self.default_filter,
            "preview_size": self.preview_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppSettings:
        """Create settings from dictionary."""
        return cls(
            album_directory=Path(data["album_directory"]) if data.get("album_directory") else DEFAULT_ALBUM_DIR,
            output_format=data.get("output_format", "png"),
            output_quality=data.get("output_quality", 95),
            default_filter=data.get("default_filter", "sepia_tone"),
            preview_size=data.get("preview_size", 1024),
        )


def load_settings(path: Path | None = None) -> AppSettings:
    """
    Load settings from disk.

    Args:
        path: Settings file, defaults to CONFIG_PATH

    Returns:
        Loaded settings, or defaults if the file does not exist

    Raises:
        ValueError: If the file is not valid settings JSON
    """
    path = Path(path) if path is not None else CONFIG_PATH

    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid settings file {path}: expected a JSON object")
        settings = AppSettings.from_dict(data)
        logger.debug(f"Loaded settings from {path}")
    else:
        settings = AppSettings()

    override = os.environ.get(ALBUM_DIR_ENV)
    if override:
        settings.album_directory = Path(override).expanduser()

    return settings


def save_settings(settings: AppSettings, path: Path | None = None) -> Path:
    """Write settings to disk, creating the directory if needed."""
    path = Path(path) if path is not None else CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)

    return path
