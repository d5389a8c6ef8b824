"""
Pillow Runner - Evaluates filters with Pillow and numpy.

This module provides the FilterRunner class which handles:
- Converting between ImageData and PIL images
- Dispatching a FilterSelection to its implementation
- Recording the filter and its parameters on the output metadata

The runner is a pure function of (image, filter, parameters). Parameters the
filter does not declare are dropped before evaluation.
"""

from __future__ import annotations

import logging
from typing import Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageFilter

from instafilter.errors import FilterExecutionError, NoOutputError
from instafilter.filters.filter_registry import (
    PARAMETERS,
    FilterSelection,
    get_filter,
)

if TYPE_CHECKING:
    from instafilter.core.data_types import ImageData

logger = logging.getLogger(__name__)

# Fixed seed so crystallize output is repeatable for the same radius
_CRYSTALLIZE_SEED = 0x5EED

# Standard sepia colour matrix (rows produce R, G, B)
_SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float32)


RGB = NDArray[np.float32]


def _to_pil(rgb: RGB) -> Image.Image:
    return Image.fromarray((rgb * 255.0).round().clip(0, 255).astype(np.uint8))


def _from_pil(image: Image.Image) -> RGB:
    return np.asarray(image, dtype=np.float32) / 255.0


class FilterRunner:
    """
    Applies a single filter to an image.

    Usage:
        runner = FilterRunner()
        result = runner.apply_filter(image, FilterSelection.PIXELLATE, {"scale": 5.0})
    """

    def __init__(self):
        self._handlers: dict[FilterSelection, Callable[[RGB, dict[str, float]], RGB]] = {
            FilterSelection.CRYSTALLIZE: self._crystallize,
            FilterSelection.EDGES: self._edges,
            FilterSelection.GAUSSIAN_BLUR: self._gaussian_blur,
            FilterSelection.PIXELLATE: self._pixellate,
            FilterSelection.SEPIA_TONE: self._sepia_tone,
            FilterSelection.UNSHARP_MASK: self._unsharp_mask,
            FilterSelection.VIGNETTE: self._vignette,
            FilterSelection.NONE: self._identity,
        }

    def apply_filter(
        self,
        image: ImageData,
        selection: FilterSelection | str,
        params: dict[str, float] | None = None,
    ) -> ImageData:
        """
        Apply a filter to an image.

        Args:
            image: Input image as ImageData (left untouched)
            selection: Filter to evaluate
            params: Parameter values; undeclared names are ignored, missing
                ones fall back to defaults and the rest are clamped

        Returns:
            Filtered image as ImageData

        Raises:
            UnknownFilterError: If the filter is not registered
            InvalidParameterError: If a parameter value is NaN or infinite
            NoOutputError: If the image has no pixels to filter
            FilterExecutionError: If Pillow fails while filtering
        """
        from instafilter.core.data_types import ImageData

        spec = get_filter(selection)
        handler = self._handlers.get(spec.selection)
        if handler is None:
            raise FilterExecutionError(f"No implementation for filter: {spec.id}")

        if image.width == 0 or image.height == 0:
            raise NoOutputError(f"{spec.name} produced no output for an empty image")

        values = {name: PARAMETERS[name].default for name in spec.params}
        values.update(
            {
                name: PARAMETERS[name].clamp(value)
                for name, value in (params or {}).items()
                if spec.accepts(name)
            }
        )

        logger.debug(f"Applying {spec.id} with {values} to {image.width}x{image.height} image")

        rgb = image.pixels[..., :3]
        try:
            out = handler(rgb, values)
        except (OSError, TypeError, ValueError) as e:
            raise FilterExecutionError(f"{spec.name} failed: {e}") from e

        out = np.clip(out, 0.0, 1.0).astype(np.float32)
        if image.has_alpha:
            out = np.concatenate([out, image.pixels[..., 3:4]], axis=-1)

        meta = image.metadata.copy()
        meta.filter_id = spec.id
        meta.filter_params = dict(values)

        return ImageData(pixels=out, metadata=meta)

    # ------------------------------------------------------------------
    # Filter implementations. Each takes RGB float32 [0, 1] and returns RGB.
    # ------------------------------------------------------------------

    def _identity(self, rgb: RGB, params: dict[str, float]) -> RGB:
        return rgb.copy()

    def _crystallize(self, rgb: RGB, params: dict[str, float]) -> RGB:
        """
        Voronoi cells around one jittered seed per grid cell.

        Each pixel only needs to check the seeds of its own and the eight
        neighbouring grid cells. The image is labelled one row of cells at
        a time, so working memory stays proportional to that strip.
        """
        height, width = rgb.shape[:2]
        cell = max(1, int(round(params["radius"])))
        rows = -(-height // cell)
        cols = -(-width // cell)

        rng = np.random.default_rng(_CRYSTALLIZE_SEED)
        jitter = rng.random((rows, cols, 2), dtype=np.float32)
        seed_y = (np.arange(rows, dtype=np.float32)[:, None] + jitter[..., 0]) * cell
        seed_x = (np.arange(cols, dtype=np.float32)[None, :] + jitter[..., 1]) * cell

        # One colour per cell, sampled at its seed
        colours = rgb[
            np.floor(seed_y).astype(np.intp).clip(0, height - 1),
            np.floor(seed_x).astype(np.intp).clip(0, width - 1),
        ]

        # Ring of unreachable seeds so border cells need no bounds checks
        seed_y = np.pad(seed_y, 1, constant_values=np.inf)
        seed_x = np.pad(seed_x, 1, constant_values=np.inf)

        xs = np.arange(width, dtype=np.float32)
        col = (np.arange(width) // cell + 1).astype(np.int32)
        out = np.empty_like(rgb)

        for row in range(rows):
            top = row * cell
            bottom = min(top + cell, height)
            ys = np.arange(top, bottom, dtype=np.float32)[:, None]

            best = np.full((bottom - top, width), np.inf, dtype=np.float32)
            best_row = np.zeros(best.shape, dtype=np.int32)
            best_col = np.zeros(best.shape, dtype=np.int32)

            for dy in (-1, 0, 1):
                ny = row + 1 + dy
                for dx in (-1, 0, 1):
                    nx = col + dx
                    dist = (ys - seed_y[ny, nx]) ** 2 + (xs - seed_x[ny, nx]) ** 2
                    closer = dist < best
                    np.copyto(best, dist, where=closer)
                    np.copyto(best_row, ny, where=closer)
                    np.copyto(best_col, nx, where=closer)

            out[top:bottom] = colours[best_row - 1, best_col - 1]

        return out

    def _edges(self, rgb: RGB, params: dict[str, float]) -> RGB:
        edges = _from_pil(_to_pil(rgb).filter(ImageFilter.FIND_EDGES))
        return edges * params["intensity"]

    def _gaussian_blur(self, rgb: RGB, params: dict[str, float]) -> RGB:
        blurred = _to_pil(rgb).filter(ImageFilter.GaussianBlur(radius=params["radius"]))
        return _from_pil(blurred)

    def _pixellate(self, rgb: RGB, params: dict[str, float]) -> RGB:
        """Square blocks of `scale` pixels, each filled with its mean colour."""
        height, width = rgb.shape[:2]
        block = max(1, int(round(params["scale"])))
        rows = -(-height // block)
        cols = -(-width // block)

        # Zero-pad to whole blocks; partial blocks are averaged over real pixels only
        padded = np.zeros((rows * block, cols * block, rgb.shape[2]), dtype=np.float32)
        padded[:height, :width] = rgb
        sums = padded.reshape(rows, block, cols, block, -1).sum(axis=(1, 3))

        row_counts = np.minimum(block, height - np.arange(rows) * block)
        col_counts = np.minimum(block, width - np.arange(cols) * block)
        means = sums / np.outer(row_counts, col_counts)[..., None]

        large = means.repeat(block, axis=0).repeat(block, axis=1)
        return large[:height, :width].astype(np.float32)

    def _sepia_tone(self, rgb: RGB, params: dict[str, float]) -> RGB:
        sepia = rgb @ _SEPIA_MATRIX.T
        return rgb + (sepia - rgb) * params["intensity"]

    def _unsharp_mask(self, rgb: RGB, params: dict[str, float]) -> RGB:
        percent = max(0, int(round(params["intensity"] * 100)))
        sharpened = _to_pil(rgb).filter(
            ImageFilter.UnsharpMask(radius=params["radius"], percent=percent, threshold=0)
        )
        return _from_pil(sharpened)

    def _vignette(self, rgb: RGB, params: dict[str, float]) -> RGB:
        """
        Radial darkening towards the corners.

        At the largest radius the falloff starts at the centre; smaller
        radii push the clear area outwards.
        """
        height, width = rgb.shape[:2]
        ys, xs = np.mgrid[0:height, 0:width].astype(np.float32)
        cy = (height - 1) / 2.0
        cx = (width - 1) / 2.0
        dist = np.hypot(ys - cy, xs - cx)
        max_dist = max(float(np.hypot(cy, cx)), 1.0)

        reach = params["radius"] / PARAMETERS["radius"].max_value
        inner = max_dist * (1.0 - reach)
        weight = ((dist - inner) / max(max_dist - inner, 1e-6)).clip(0.0, 1.0) ** 2

        factor = 1.0 - params["intensity"] * weight
        return rgb * factor[..., None]
