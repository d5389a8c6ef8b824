"""Unit tests for the command line entry point."""

import pytest
from PIL import Image

from instafilter.main import build_parser, main


class TestCommandLine:
    """Tests for main()."""

    def test_list_filters(self, capsys):
        assert main(["--list-filters"]) == 0
        out = capsys.readouterr().out
        assert "pixellate" in out
        assert "Sepia Tone" in out

    def test_missing_input(self, capsys):
        assert main([]) == 1
        assert "input photo is required" in capsys.readouterr().out

    def test_nonexistent_input(self, tmp_path, capsys):
        code = main([str(tmp_path / "nope.png"), "--config", str(tmp_path / "none.json")])
        assert code == 1
        assert "Error" in capsys.readouterr().out

    def test_unknown_filter_rejected(self, photo_file):
        with pytest.raises(SystemExit):
            main([str(photo_file), "--filter", "posterize"])

    def test_filter_and_save(self, photo_file, tmp_path, capsys):
        album = tmp_path / "album"
        code = main([
            str(photo_file),
            "--filter", "pixellate",
            "--scale", "4",
            "--output", str(album),
            "--config", str(tmp_path / "none.json"),
        ])
        assert code == 0
        saved = list(album.iterdir())
        assert len(saved) == 1
        with Image.open(saved[0]) as image:
            assert image.size == (32, 32)
        assert "Pixellate: saved to" in capsys.readouterr().out

    def test_bad_config(self, photo_file, tmp_path, capsys):
        config = tmp_path / "settings.json"
        config.write_text("{", encoding="utf-8")
        assert main([str(photo_file), "--config", str(config)]) == 1
        assert "Invalid settings file" in capsys.readouterr().out

    def test_parser_has_slider_options(self):
        args = build_parser().parse_args(["photo.jpg", "--radius", "12.5"])
        assert args.radius == 12.5
        assert args.intensity is None
        assert args.scale is None

    def test_non_finite_slider(self, photo_file, tmp_path, capsys):
        code = main([
            str(photo_file),
            "--filter", "crystallize",
            "--radius", "nan",
            "--output", str(tmp_path / "album"),
            "--config", str(tmp_path / "none.json"),
        ])
        assert code == 1
        assert "must be a finite number" in capsys.readouterr().out
        assert not (tmp_path / "album").exists()
