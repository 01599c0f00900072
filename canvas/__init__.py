"""
canvas package

Materializes parsed stroke markup into PyQt6 brushes and pens, and
previews the result.
"""

from canvas.resources import ResourceContext, FileResourceContext
from canvas.stroke import CanvasStroke
from canvas.materializer import create_brush, create_stroke
from canvas.view import StrokePreviewWidget, render_stroke_preview

__all__ = [
    "ResourceContext",
    "FileResourceContext",
    "CanvasStroke",
    "create_brush",
    "create_stroke",
    "StrokePreviewWidget",
    "render_stroke_preview",
]
