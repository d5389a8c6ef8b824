"""
Editor Session - The state behind the single filter screen.

An EditorSession ties together:
- the FilterParameterBinder (active filter, sliders, output)
- the ImageSaver (album writes)
- the alert currently shown to the user, if any

It holds no UI objects; a front end reads `processed_image`, `filter_label`
and `alert` and calls the methods below in response to user input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from instafilter.core.binder import FilterParameterBinder
from instafilter.core.data_types import ImageData
from instafilter.errors import FilterError, SaveFailedError
from instafilter.core.saver import ImageSaver
from instafilter.core.settings import AppSettings
from instafilter.filters.filter_registry import FilterSelection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Alert:
    """A message to show the user."""
    title: str
    message: str


NO_IMAGE_ALERT = Alert("No image to save", "Please, select an image!")


class EditorSession:
    """Load, filter and save one photo at a time."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        binder: FilterParameterBinder | None = None,
        saver: ImageSaver | None = None,
    ):
        self.settings = settings or AppSettings()
        self.binder = binder or FilterParameterBinder(self.settings.default_filter)
        self.saver = saver or ImageSaver(self.settings)
        self.alert: Alert | None = None
        self.last_saved_path: Path | None = None
        self.saver.error_handler = self._on_save_failed

    @property
    def filter_label(self) -> str:
        return self.binder.filter_label

    @property
    def processed_image(self) -> ImageData | None:
        return self.binder.output

    def preview(self) -> ImageData | None:
        """Processed image scaled down to the configured preview size."""
        image = self.processed_image
        if image is None:
            return None
        if max(image.size) <= self.settings.preview_size:
            return image
        return image.thumbnail(self.settings.preview_size)

    def dismiss_alert(self) -> None:
        self.alert = None

    def load_image(self, source: ImageData | str | Path) -> ImageData | None:
        """
        Load a picked image and filter it with the active filter.

        Sliders are reset to their defaults.
        """
        image = source if isinstance(source, ImageData) else ImageData.from_file(source)
        logger.debug(f"Loaded {image.width}x{image.height} image")
        return self._run(self.binder.set_input_image, image)

    def choose_filter(self, filter_id: FilterSelection | str) -> ImageData | None:
        return self._run(self.binder.select_filter, filter_id)

    def set_slider(self, name: str, value: float) -> ImageData | None:
        return self._run(self.binder.set_parameter, name, value)

    def save(self) -> Path | None:
        """
        Save the processed image to the album.

        Returns:
            The saved path, or None when there was nothing to save or the
            save failed (see `alert`)
        """
        image = self.processed_image
        if image is None:
            self.alert = NO_IMAGE_ALERT
            return None

        path = self.saver.write_to_album(image)
        if path is not None:
            self.last_saved_path = path
        return path

    def _on_save_failed(self, error: SaveFailedError) -> None:
        self.alert = Alert("Save failed", str(error))

    def _run(self, action, *args) -> ImageData | None:
        try:
            return action(*args)
        except FilterError as e:
            logger.warning(f"Filter error: {e}")
            self.alert = Alert("Filter failed", str(e))
            raise
