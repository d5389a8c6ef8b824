"""
Image Saver - Writes finished photos into the album directory.

Completion is reported through optional success/error handlers, the
same way a platform photo library reports back to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from instafilter.core.data_types import ImageData
from instafilter.errors import SaveFailedError
from instafilter.core.settings import AppSettings

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
_NO_ALPHA_FORMATS = {"jpeg", "bmp"}


class ImageSaver:
    """
    Saves images to the photo album directory.

    Usage:
        saver = ImageSaver(settings)
        saver.success_handler = lambda path: print("Success")
        saver.error_handler = lambda error: print(f"Oops: {error}")
        saver.write_to_album(image)
    """

    def __init__(self, settings: AppSettings | None = None):
        self.settings = settings or AppSettings()
        self.success_handler: Callable[[Path], None] | None = None
        self.error_handler: Callable[[SaveFailedError], None] | None = None

    def _next_path(self, album: Path) -> Path:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        ext = self.settings.file_extension
        path = album / f"IMG_{stamp}.{ext}"
        counter = 1
        while path.exists():
            path = album / f"IMG_{stamp}_{counter}.{ext}"
            counter += 1
        return path

    def write_to_album(self, image: ImageData) -> Path | None:
        """
        Write an image into the album.

        Args:
            image: The image to save

        Returns:
            Path of the saved file, or None if the save failed and an
            error handler was notified

        Raises:
            SaveFailedError: If the save failed and no error handler is set
        """
        try:
            path = self._write(image)
        except SaveFailedError as error:
            logger.warning(f"Save failed: {error.__cause__}")
            if self.error_handler is None:
                raise
            self.error_handler(error)
            return None

        logger.info(f"Saved image to {path}")
        if self.success_handler is not None:
            self.success_handler(path)
        return path

    def _write(self, image: ImageData) -> Path:
        album = self.settings.album_directory
        fmt = self.settings.output_format

        try:
            album.mkdir(parents=True, exist_ok=True)
            path = self._next_path(album)

            pil_image = image.to_pil()
            if fmt in _NO_ALPHA_FORMATS and pil_image.mode != "RGB":
                pil_image = pil_image.convert("RGB")

            save_kwargs = {}
            if fmt in ("jpeg", "webp"):
                save_kwargs["quality"] = self.settings.output_quality

            pil_image.save(path, format=fmt.upper(), **save_kwargs)
        except (OSError, ValueError) as e:
            raise SaveFailedError(f"Could not save image to {album}: {e}") from e

        return path
