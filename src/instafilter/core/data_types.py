"""
Data Types - Image containers passed between the binder and the filters.

This module defines:
- ImageMetadata: Where an image came from and how it was filtered
- ImageData: Container for image pixels and metadata

Pixels are always stored as float32 HWC arrays in the range [0, 1] so
every filter sees the same layout regardless of the source file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import numpy as np
from numpy.typing import NDArray


@dataclass
class ImageMetadata:
    """Metadata associated with an image."""

    # Source information
    source_path: Path | None = None

    # Filter information (set on filter output)
    filter_id: str | None = None
    filter_params: dict[str, float] = field(default_factory=dict)

    # Image properties
    original_width: int | None = None
    original_height: int | None = None

    def copy(self) -> ImageMetadata:
        """Create a shallow copy of this metadata."""
        return ImageMetadata(
            source_path=self.source_path,
            filter_id=self.filter_id,
            filter_params=self.filter_params.copy(),
            original_width=self.original_width,
            original_height=self.original_height,
        )


@dataclass
class ImageData:
    """
    In-memory image buffer.

    Internally stores pixels as a numpy array in HWC format with
    float32 values in range [0, 1].

    Attributes:
        pixels: numpy array of shape (H, W, C) with float32 values [0, 1]
        metadata: Optional metadata about the image
    """
    pixels: NDArray[np.float32]
    metadata: ImageMetadata = field(default_factory=ImageMetadata)

    @classmethod
    def from_numpy(
        cls,
        array: NDArray,
        metadata: ImageMetadata | None = None
    ) -> ImageData:
        """
        Create ImageData from a numpy array.

        Handles various input formats:
        - uint8 [0, 255] -> float32 [0, 1]
        - float64 -> float32
        - HW or HWx1 (grayscale) -> RGB
        - HWx2 (grayscale + alpha) -> RGBA

        Raises:
            ValueError: If the array is not an image with 1-4 channels
        """
        arr = array.copy()

        if arr.dtype == np.uint8:
            arr = arr.astype(np.float32) / 255.0
        elif arr.dtype != np.float32:
            arr = arr.astype(np.float32)

        if arr.ndim == 2:
            arr = arr[..., None]
        elif arr.ndim != 3:
            raise ValueError(f"Expected a 2D or 3D array, got shape {arr.shape}")

        channels = arr.shape[2]
        if channels in (1, 2):
            # Grayscale -> RGB, keeping any alpha
            arr = np.concatenate([arr[..., :1]] * 3 + [arr[..., 1:]], axis=-1)
        elif channels not in (3, 4):
            raise ValueError(f"Expected 1 to 4 channels, got {channels}")

        return cls(pixels=arr, metadata=metadata or ImageMetadata())

    @classmethod
    def from_pil(cls, image, metadata: ImageMetadata | None = None) -> ImageData:
        """Create ImageData from a PIL Image."""
        from PIL import Image

        if not isinstance(image, Image.Image):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode == "LA" or (image.mode == "P" and "transparency" in image.info):
            image = image.convert("RGBA")
        elif image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGB")

        arr = np.array(image, dtype=np.float32) / 255.0

        meta = metadata or ImageMetadata()
        meta.original_width = image.width
        meta.original_height = image.height

        return cls(pixels=arr, metadata=meta)

    @classmethod
    def from_file(cls, path: str | Path, metadata: ImageMetadata | None = None) -> ImageData:
        """
        Create ImageData by loading an image from a file.

        Args:
            path: Path to the image file
            metadata: Optional metadata (source_path will be set automatically)

        Returns:
            ImageData with the loaded image
        """
        from PIL import Image

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")

        with Image.open(path) as image:
            image.load()

        meta = metadata or ImageMetadata()
        meta.source_path = path

        return cls.from_pil(image, meta)

    @classmethod
    def empty(cls, width: int, height: int, channels: int = 3) -> ImageData:
        """Create an empty (black) image of the given size."""
        arr = np.zeros((height, width, channels), dtype=np.float32)
        return cls(pixels=arr)

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        """Number of color channels (3 for RGB, 4 for RGBA)."""
        return self.pixels.shape[2] if self.pixels.ndim == 3 else 1

    @property
    def size(self) -> tuple[int, int]:
        """Image size as (width, height)."""
        return (self.width, self.height)

    @property
    def has_alpha(self) -> bool:
        """Check if image has an alpha channel."""
        return self.channels == 4

    def to_numpy(self, dtype: np.dtype = np.float32) -> NDArray:
        """
        Convert to numpy array.

        Args:
            dtype: Output dtype (float32, uint8, etc.)

        Returns:
            Array in HWC format
        """
        if dtype == np.uint8:
            return (self.pixels * 255).round().clip(0, 255).astype(np.uint8)
        return self.pixels.astype(dtype)

    def to_pil(self):
        """Convert to PIL Image."""
        from PIL import Image

        # uint8 HxWx3 maps to RGB, HxWx4 to RGBA
        return Image.fromarray(self.to_numpy(np.uint8))

    def thumbnail(self, max_size: int = 256) -> ImageData:
        """Create a thumbnail of this image."""
        from PIL import Image

        pil_image = self.to_pil()
        pil_image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

        # Keep the source dimensions rather than the thumbnail size
        meta = self.metadata.copy()
        if meta.original_width is None:
            meta.original_width = self.width
            meta.original_height = self.height

        return ImageData(pixels=np.asarray(pil_image, dtype=np.float32) / 255.0, metadata=meta)

    def copy(self) -> ImageData:
        """Create a copy of this image."""
        return ImageData(
            pixels=self.pixels.copy(),
            metadata=self.metadata.copy(),
        )
