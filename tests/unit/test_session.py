"""
Tests for the editor session.
"""

import pytest

from instafilter.core.session import NO_IMAGE_ALERT, Alert, EditorSession
from instafilter.core.settings import AppSettings
from instafilter.errors import InvalidParameterError, UnknownFilterError
from instafilter.filters.filter_registry import FilterSelection


@pytest.fixture
def session(tmp_path):
    return EditorSession(AppSettings(album_directory=tmp_path / "album"))


class TestEditorSession:
    """Tests for the load / filter / save flow."""

    def test_initial_state(self, session):
        assert session.processed_image is None
        assert session.alert is None
        assert session.filter_label == "Change filter"

    def test_default_filter_from_settings(self, tmp_path, sample_image):
        settings = AppSettings(album_directory=tmp_path, default_filter="vignette")
        session = EditorSession(settings)
        assert session.binder.selection is FilterSelection.VIGNETTE
        assert session.load_image(sample_image).metadata.filter_id == "vignette"

    def test_save_without_image_alerts(self, session):
        assert session.save() is None
        assert session.alert == NO_IMAGE_ALERT
        assert session.alert.title == "No image to save"
        assert session.alert.message == "Please, select an image!"

    def test_dismiss_alert(self, session):
        session.save()
        session.dismiss_alert()
        assert session.alert is None

    def test_load_image_from_path(self, session, photo_file):
        output = session.load_image(photo_file)
        assert output is not None
        assert session.processed_image is output
        assert output.metadata.source_path == photo_file

    def test_load_image_resets_sliders(self, session, sample_image):
        session.set_slider("intensity", 0.1)
        session.load_image(sample_image)
        assert session.binder.parameters["intensity"] == 1.0

    def test_choose_filter_updates_label(self, session, sample_image):
        session.load_image(sample_image)
        session.choose_filter("Unsharp Mask")
        assert session.filter_label == "Unsharp Mask"
        assert session.processed_image.metadata.filter_id == "unsharp_mask"

    def test_unknown_filter_alerts(self, session):
        with pytest.raises(UnknownFilterError):
            session.choose_filter("posterize")
        assert session.alert.title == "Filter failed"

    def test_non_finite_slider_alerts(self, session, sample_image):
        session.load_image(sample_image)
        with pytest.raises(InvalidParameterError):
            session.set_slider("scale", float("nan"))
        assert session.alert.title == "Filter failed"
        assert session.binder.parameters["scale"] == 10.0

    def test_set_slider(self, session, sample_image):
        session.load_image(sample_image)
        session.choose_filter("pixellate")
        output = session.set_slider("scale", 3)
        assert output.metadata.filter_params == {"scale": 3.0}

    def test_save(self, session, sample_image, tmp_path):
        session.load_image(sample_image)
        path = session.save()
        assert path is not None
        assert path.exists()
        assert path.parent == tmp_path / "album"
        assert session.last_saved_path == path
        assert session.alert is None

    def test_save_failure_alerts(self, tmp_path, sample_image):
        blocked = tmp_path / "blocked"
        blocked.write_text("x")
        session = EditorSession(AppSettings(album_directory=blocked))
        session.load_image(sample_image)
        assert session.save() is None
        assert isinstance(session.alert, Alert)
        assert session.alert.title == "Save failed"
        assert session.last_saved_path is None

    def test_preview_without_image(self, session):
        assert session.preview() is None

    def test_preview_scaled_down(self, tmp_path, sample_image):
        session = EditorSession(AppSettings(album_directory=tmp_path, preview_size=16))
        session.load_image(sample_image)
        assert max(session.preview().size) == 16
        assert session.processed_image.size == (32, 32)

    def test_preview_keeps_source_size(self, tmp_path, sample_image):
        session = EditorSession(AppSettings(album_directory=tmp_path, preview_size=16))
        session.load_image(sample_image)
        preview = session.preview()
        assert preview.metadata.original_width == 32
        assert preview.metadata.original_height == 32

    def test_preview_small_image_unchanged(self, session, sample_image):
        session.load_image(sample_image)
        assert session.preview() is session.processed_image
