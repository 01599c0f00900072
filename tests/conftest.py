"""Shared fixtures for the stroke markup tests.

Qt runs on the offscreen platform so the suite works without a display.
"""
from __future__ import annotations

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from PyQt6.QtWidgets import QApplication  # noqa: E402

import settings  # noqa: E402
from settings import SettingsManager  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture()
def settings_manager(tmp_path, monkeypatch):
    """A SettingsManager rooted in a temporary config directory, installed as the singleton."""
    monkeypatch.setattr(settings.platformdirs, "user_config_dir", lambda app_name: str(tmp_path))
    sm = SettingsManager()
    monkeypatch.setattr(settings, "_settings_manager", sm)
    return sm
