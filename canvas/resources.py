"""
canvas/resources.py

Resource contexts: the capability the materializer uses to turn an image
URI into pixels.  A context is only used for the duration of one
``create_*`` call and is never retained.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QImage

from debug_trace import trace
from errors import ResourceLoadError
from settings import SettingsManager, get_settings


class ResourceContext(ABC):
    """Base resource context.  Subclasses implement ``load_image``."""

    @abstractmethod
    def load_image(self, uri: str) -> QImage:
        """Load the image referenced by *uri*.

        Raises:
            ResourceLoadError: If the image cannot be loaded.
        """


class FileResourceContext(ResourceContext):
    """Loads images from the filesystem.

    Relative paths resolve against *base_dir*; ``file:`` URLs are accepted.

    Args:
        base_dir: Directory for relative URIs. Defaults to the current
            working directory.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

    @classmethod
    def from_settings(cls, manager: Optional[SettingsManager] = None) -> "FileResourceContext":
        """Create a context rooted at the configured image directory."""
        manager = manager or get_settings()
        return cls(manager.get_image_dir())

    def resolve(self, uri: str) -> Path:
        """Map *uri* to a filesystem path."""
        if uri.startswith("file:"):
            return Path(QUrl(uri).toLocalFile())
        path = Path(uri)
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    def load_image(self, uri: str) -> QImage:
        if not uri:
            raise ResourceLoadError(uri, "empty image URI")
        path = self.resolve(uri)
        if not path.is_file():
            raise ResourceLoadError(uri, f"no such file: {path}")
        image = QImage(str(path))
        if image.isNull():
            raise ResourceLoadError(uri, f"unsupported or corrupt image: {path}")
        trace(f"Loaded image {path} ({image.width()}x{image.height()})", "RESOURCE")
        return image
