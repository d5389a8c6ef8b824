"""
Core module - Image data, the parameter binder, saving and settings.

This module provides the building blocks for Instafilter:
- Data Types: ImageData and its metadata
- Binder: FilterParameterBinder, the active filter and its sliders
- Saver: ImageSaver, writes results to the album directory
- Session: EditorSession, the state behind the filter screen
- Settings: AppSettings and its JSON persistence
"""

from instafilter.errors import (
    FilterError,
    FilterExecutionError,
    InvalidParameterError,
    NoInputImageError,
    NoOutputError,
    SaveFailedError,
    UnknownFilterError,
    UnknownParameterError,
)

from instafilter.core.data_types import (
    ImageData,
    ImageMetadata,
)

from instafilter.core.binder import FilterParameterBinder

from instafilter.core.saver import ImageSaver

from instafilter.core.session import (
    Alert,
    EditorSession,
)

from instafilter.core.settings import (
    AppSettings,
    load_settings,
    save_settings,
)


__all__ = [
    # instafilter.errors
    "FilterError",
    "FilterExecutionError",
    "InvalidParameterError",
    "NoInputImageError",
    "NoOutputError",
    "SaveFailedError",
    "UnknownFilterError",
    "UnknownParameterError",
    # data_types.py
    "ImageData",
    "ImageMetadata",
    # binder.py
    "FilterParameterBinder",
    # saver.py
    "ImageSaver",
    # session.py
    "Alert",
    "EditorSession",
    # settings.py
    "AppSettings",
    "load_settings",
    "save_settings",
]
