"""
canvas/view.py

Stroke preview: paints a sample path with a materialized stroke, either
into a widget (live preview) or into an offscreen QImage (--render).
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPainterPath
from PyQt6.QtWidgets import QWidget

from canvas.stroke import CanvasStroke
from settings import get_settings
from utils import hex_to_qcolor

# Margin around the sample path, in pixels
SAMPLE_MARGIN = 24.0


def sample_path(rect: QRectF) -> QPainterPath:
    """A zig-zag followed by a curve, exercising joins, caps and dashes."""
    m = SAMPLE_MARGIN
    w, h = rect.width(), rect.height()
    x0, y0 = rect.left(), rect.top()

    path = QPainterPath(QPointF(x0 + m, y0 + h * 0.7))
    path.lineTo(x0 + w * 0.22, y0 + h * 0.25)
    path.lineTo(x0 + w * 0.40, y0 + h * 0.75)
    path.cubicTo(
        QPointF(x0 + w * 0.55, y0 + h * 0.05),
        QPointF(x0 + w * 0.78, y0 + h * 0.95),
        QPointF(x0 + w - m, y0 + h * 0.35),
    )
    return path


def paint_stroke(painter: QPainter, rect: QRectF, stroke: Optional[CanvasStroke],
                 background: QColor) -> None:
    """Fill *rect* with *background* and draw the sample path with *stroke*."""
    painter.fillRect(rect, background)
    if stroke is None:
        return
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.setPen(stroke.to_pen())
    painter.drawPath(sample_path(rect))


def render_stroke_preview(stroke: CanvasStroke, width: int, height: int,
                          background: str = "#FFFFFF") -> QImage:
    """Render the sample path offscreen.

    Args:
        stroke: The materialized stroke.
        width: Image width in pixels.
        height: Image height in pixels.
        background: Markup hex color for the background.

    Returns:
        An ARGB32 image.
    """
    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    painter = QPainter(image)
    try:
        paint_stroke(painter, QRectF(0, 0, width, height), stroke,
                     hex_to_qcolor(background, QColor(Qt.GlobalColor.white)))
    finally:
        painter.end()
    return image


class StrokePreviewWidget(QWidget):
    """Widget that paints the sample path with the current stroke.

    Args:
        parent: Parent widget.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._stroke: Optional[CanvasStroke] = None
        preview = get_settings().settings.preview
        self._background = hex_to_qcolor(preview.background, QColor(Qt.GlobalColor.white))
        self.setMinimumSize(preview.width, preview.height)

    @property
    def stroke(self) -> Optional[CanvasStroke]:
        return self._stroke

    def set_stroke(self, stroke: Optional[CanvasStroke]) -> None:
        """Show *stroke* (``None`` clears the preview)."""
        self._stroke = stroke
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            paint_stroke(painter, QRectF(self.rect()), self._stroke, self._background)
        finally:
            painter.end()
