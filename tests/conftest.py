from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    """
    Ensure `src/` is on sys.path so tests can import `instafilter`
    without requiring an editable install.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"
    sys.path.insert(0, str(src_root))


@pytest.fixture
def gradient_pixels() -> np.ndarray:
    """32x32 RGB float image with a different value in every pixel."""
    ys, xs = np.mgrid[0:32, 0:32].astype(np.float32)
    return np.stack([xs / 31.0, ys / 31.0, (xs + ys) / 62.0], axis=-1)


@pytest.fixture
def sample_image(gradient_pixels):
    from instafilter.core.data_types import ImageData

    return ImageData.from_numpy(gradient_pixels)


@pytest.fixture
def photo_file(tmp_path, gradient_pixels) -> Path:
    """The gradient image written to disk as a PNG."""
    from PIL import Image

    path = tmp_path / "photo.png"
    Image.fromarray((gradient_pixels * 255).round().astype(np.uint8)).save(path)
    return path


@pytest.fixture(autouse=True)
def _no_album_override(monkeypatch):
    monkeypatch.delenv("INSTAFILTER_ALBUM_DIR", raising=False)
