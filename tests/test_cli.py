"""Tests for the command line entry point in main.py."""
from __future__ import annotations

import json

from PyQt6.QtGui import QImage

import main


class TestCli:
    def test_prints_descriptor_json(self, settings_manager, capsys):
        assert main.main(["ST2,#FF0000,LineJoin=Bogus"]) == main.EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["width"] == 2.0
        assert data["brush"] == {"type": "SolidColor", "color": "#FFFF0000", "opacity": 1.0}
        assert data["style"]["line_join"] == "Miter"
        assert data["used_defaults"] == ["style.line_join"]
        assert data["validation_count"] == 10

    def test_missing_brush(self, settings_manager, capsys):
        assert main.main(["STxyz"]) == main.EXIT_MARKUP_ERROR
        assert "Unable to create a valid brush" in capsys.readouterr().err

    def test_strict_flag(self, settings_manager, capsys):
        assert main.main(["ST2,#FF0000 junk"]) == main.EXIT_OK
        assert main.main(["ST2,#FF0000 junk", "--strict"]) == main.EXIT_MARKUP_ERROR

    def test_strict_from_settings(self, settings_manager):
        settings_manager.settings.parser.strict = True
        assert main.main(["ST2,#FF0000 junk"]) == main.EXIT_MARKUP_ERROR

    def test_render(self, settings_manager, qapp, tmp_path):
        out = tmp_path / "stroke.png"
        assert main.main(["ST4,LG0 0:#FF1E88E5 1:#FFD81B60", "--render", str(out)]) == main.EXIT_OK
        image = QImage(str(out))
        preview = settings_manager.settings.preview
        assert (image.width(), image.height()) == (preview.width, preview.height)

    def test_render_missing_image(self, settings_manager, qapp, tmp_path):
        settings_manager.settings.resources.image_dir = str(tmp_path)
        out = tmp_path / "stroke.png"
        assert main.main(["ST4,IM(nope.png)", "--render", str(out)]) == main.EXIT_RESOURCE_ERROR
        assert not out.exists()


class TestPreviewWindow:
    def test_updates_status(self, settings_manager, qapp):
        w = main.PreviewWindow(settings_manager, "ST2,#FF0000")
        assert w.preview.stroke is not None
        assert w.preview.stroke.width == 2.0

        w.edit.setText("STxyz")
        w.apply_markup()
        assert w.preview.stroke is None
        assert "Unable to create a valid brush" in w.statusBar().currentMessage()

        w.edit.setText("ST1,#000000,DashStyle=Nope")
        w.apply_markup()
        assert "style.dash_style" in w.statusBar().currentMessage()
        w.close()
