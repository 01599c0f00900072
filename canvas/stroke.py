"""
canvas/stroke.py

CanvasStroke: a materialized stroke (Qt brush + width + style) and its
conversion to a QPen.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QPen, QTransform

from models import (
    DEFAULT_STROKE_WIDTH,
    CapStyle,
    DashStyle,
    LineJoin,
    StrokeStyleDescriptor,
    TransformBehavior,
)


PEN_STYLES = {
    DashStyle.SOLID: Qt.PenStyle.SolidLine,
    DashStyle.DASH: Qt.PenStyle.DashLine,
    DashStyle.DOT: Qt.PenStyle.DotLine,
    DashStyle.DASH_DOT: Qt.PenStyle.DashDotLine,
    DashStyle.DASH_DOT_DOT: Qt.PenStyle.DashDotDotLine,
}

PEN_JOINS = {
    LineJoin.MITER: Qt.PenJoinStyle.MiterJoin,
    LineJoin.BEVEL: Qt.PenJoinStyle.BevelJoin,
    LineJoin.ROUND: Qt.PenJoinStyle.RoundJoin,
    LineJoin.MITER_OR_BEVEL: Qt.PenJoinStyle.SvgMiterJoin,
}

# Qt has no triangle cap; round is the closest shape
PEN_CAPS = {
    CapStyle.FLAT: Qt.PenCapStyle.FlatCap,
    CapStyle.SQUARE: Qt.PenCapStyle.SquareCap,
    CapStyle.ROUND: Qt.PenCapStyle.RoundCap,
    CapStyle.TRIANGLE: Qt.PenCapStyle.RoundCap,
}


@dataclass
class CanvasStroke:
    """A stroke ready for painting.

    Attributes:
        brush: The materialized brush.
        width: Stroke width in user units.
        style: Dash, join, cap and transform attributes.
    """
    brush: QBrush
    width: float = DEFAULT_STROKE_WIDTH
    style: StrokeStyleDescriptor = field(default_factory=StrokeStyleDescriptor)

    @property
    def transform(self) -> QTransform:
        """The brush transform."""
        return self.brush.transform()

    @transform.setter
    def transform(self, value: QTransform) -> None:
        self.brush.setTransform(value)

    def to_pen(self) -> QPen:
        """Build a QPen from the stroke.

        QPen has a single cap style, taken from ``start_cap``.
        """
        style = self.style
        pen = QPen(self.brush, self.width)
        pen.setJoinStyle(PEN_JOINS[style.line_join])
        pen.setCapStyle(PEN_CAPS[style.start_cap])
        pen.setMiterLimit(style.miter_limit)

        if style.custom_dash_style:
            # Dash pattern is in units of the pen width
            pen.setDashPattern(style.custom_dash_style)
        else:
            pen.setStyle(PEN_STYLES[style.dash_style])
        pen.setDashOffset(style.dash_offset)

        if style.transform_behavior is TransformBehavior.FIXED:
            pen.setCosmetic(True)
        elif style.transform_behavior is TransformBehavior.HAIRLINE:
            pen.setCosmetic(True)
            pen.setWidthF(0.0)
        return pen
