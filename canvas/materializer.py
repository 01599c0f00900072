"""
canvas/materializer.py

Turns parsed descriptors into Qt objects.

    create_brush(descriptor, context) -> QBrush
    create_stroke(descriptor, context) -> CanvasStroke

Stateless: the resource context is used only inside the call.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Type

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import (
    QBrush,
    QGradient,
    QImage,
    QLinearGradient,
    QPainter,
    QRadialGradient,
    QTransform,
)

from canvas.resources import ResourceContext
from canvas.stroke import CanvasStroke
from debug_trace import trace
from models import (
    BrushDescriptor,
    EdgeBehavior,
    GradientStop,
    ImageBrush,
    LinearGradientBrush,
    RadialGradientBrush,
    SolidColorBrush,
    StrokeDescriptor,
)
from utils import clamp01, qcolor_from_color


SPREADS = {
    EdgeBehavior.CLAMP: QGradient.Spread.PadSpread,
    EdgeBehavior.WRAP: QGradient.Spread.RepeatSpread,
    EdgeBehavior.MIRROR: QGradient.Spread.ReflectSpread,
}


def _apply_stops(gradient: QGradient, stops: List[GradientStop], opacity: float,
                 edge_behavior: EdgeBehavior) -> None:
    gradient.setStops([(clamp01(s.position), qcolor_from_color(s.color, opacity)) for s in stops])
    gradient.setSpread(SPREADS[edge_behavior])


def _create_solid(descriptor: SolidColorBrush, context: ResourceContext) -> QBrush:
    return QBrush(qcolor_from_color(descriptor.color, descriptor.opacity))


def _create_linear(descriptor: LinearGradientBrush, context: ResourceContext) -> QBrush:
    # Object bounding mode: (0,0)-(1,1) spans the painted shape.  The
    # gradient axis runs through the centre at the given angle.
    rad = math.radians(descriptor.angle)
    dx, dy = math.cos(rad) / 2.0, math.sin(rad) / 2.0
    gradient = QLinearGradient(QPointF(0.5 - dx, 0.5 - dy), QPointF(0.5 + dx, 0.5 + dy))
    gradient.setCoordinateMode(QGradient.CoordinateMode.ObjectBoundingMode)
    _apply_stops(gradient, descriptor.stops, descriptor.opacity, descriptor.edge_behavior)
    return QBrush(gradient)


def _create_radial(descriptor: RadialGradientBrush, context: ResourceContext) -> QBrush:
    cx, cy = descriptor.center
    rx, ry = descriptor.radii
    ox, oy = descriptor.origin_offset
    gradient = QRadialGradient(QPointF(cx, cy), rx, QPointF(cx + ox, cy + oy))
    gradient.setCoordinateMode(QGradient.CoordinateMode.LogicalMode)
    _apply_stops(gradient, descriptor.stops, descriptor.opacity, descriptor.edge_behavior)
    brush = QBrush(gradient)

    # QRadialGradient is circular; stretch Y about the centre for ellipses
    if rx > 0 and ry != rx:
        transform = QTransform()
        transform.translate(cx, cy)
        transform.scale(1.0, ry / rx)
        transform.translate(-cx, -cy)
        brush.setTransform(transform)
    return brush


def _create_image(descriptor: ImageBrush, context: ResourceContext) -> QBrush:
    image = context.load_image(descriptor.uri)
    opacity = clamp01(descriptor.opacity)
    if opacity < 1.0:
        baked = QImage(image.size(), QImage.Format.Format_ARGB32_Premultiplied)
        baked.fill(Qt.GlobalColor.transparent)
        painter = QPainter(baked)
        painter.setOpacity(opacity)
        painter.drawImage(0, 0, image)
        painter.end()
        image = baked
    return QBrush(image)


BRUSH_FACTORIES: Dict[Type, Callable[[BrushDescriptor, ResourceContext], QBrush]] = {
    SolidColorBrush: _create_solid,
    LinearGradientBrush: _create_linear,
    RadialGradientBrush: _create_radial,
    ImageBrush: _create_image,
}


def create_brush(descriptor: BrushDescriptor, context: ResourceContext) -> QBrush:
    """Create a QBrush for a brush descriptor.

    Args:
        descriptor: Any brush descriptor.
        context: Resource context (used by image brushes).

    Raises:
        ResourceLoadError: If an image brush's image cannot be loaded.
        TypeError: If *descriptor* is not a brush descriptor.
    """
    factory = BRUSH_FACTORIES.get(type(descriptor))
    if factory is None:
        raise TypeError(f"Not a brush descriptor: {type(descriptor).__name__}")
    trace(f"create_brush {descriptor.brush_type.value}", "MATERIALIZE")
    return factory(descriptor, context)


def create_stroke(descriptor: StrokeDescriptor, context: ResourceContext) -> CanvasStroke:
    """Create a CanvasStroke (brush + width + style) from a stroke descriptor."""
    return CanvasStroke(
        brush=create_brush(descriptor.brush, context),
        width=descriptor.width,
        style=descriptor.style,
    )
