"""
markup/brush.py

Brush elements (solid color, linear gradient, radial gradient, image) and
the resolution step that picks one reading of a brush clause.

Brush syntaxes overlap: a gradient stop or an image URI can contain a
perfectly valid ``#RRGGBB`` solid color.  ``resolve_brush`` therefore
searches the clause with every variant and keeps the element that
explains the most of it (highest validation count).  Ties go to the
variant declared first in ``BrushType``.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import Dict, List, Optional, Tuple, Type

from debug_trace import trace
from markup.element import MarkupElement
from markup.grammar import get_registry
from models import (
    TRANSPARENT,
    BrushDescriptor,
    BrushType,
    Color,
    EdgeBehavior,
    GradientStop,
    ImageBrush,
    LinearGradientBrush,
    RadialGradientBrush,
    SolidColorBrush,
)


class BrushElement(MarkupElement):
    """Abstract base for brush elements.

    Subclasses name the registry pattern used to find their syntax inside
    a brush clause and convert the parsed fields to a descriptor.

    Args:
        brush_data: The brush clause text.
    """

    brush_type: BrushType
    pattern_name: str

    def __init__(self, brush_data: str):
        super().__init__()
        self._opacity = 1.0
        self.initialize(get_registry().search(brush_data, self.pattern_name))

    @abstractmethod
    def to_descriptor(self) -> BrushDescriptor:
        """Build the brush descriptor from the parsed fields."""

    def create_brush(self, context):
        """Materialize this element into a QBrush using *context*."""
        from canvas.materializer import create_brush
        return create_brush(self.to_descriptor(), context)

    def _get_opacity(self, match: re.Match) -> None:
        if match.group("opacity") is not None:
            self._opacity = self._parse_float("opacity", match.group("opacity"), 1.0)


class SolidColorBrushElement(BrushElement):
    """``#RRGGBB`` / ``#AARRGGBB`` with optional ``O`` opacity."""

    brush_type = BrushType.SOLID_COLOR
    pattern_name = "solid_color"

    def __init__(self, brush_data: str):
        self._color = TRANSPARENT
        super().__init__(brush_data)

    def _get_attributes(self, match: re.Match) -> None:
        self._color = Color.from_hex(match.group("color"))
        self._parsed("color")
        self._get_opacity(match)

    def to_descriptor(self) -> SolidColorBrush:
        return SolidColorBrush(color=self._color, opacity=self._opacity)


class _GradientBrushElement(BrushElement):
    """Shared stop and edge-behavior handling for gradient brushes."""

    def __init__(self, brush_data: str):
        self._stops: List[GradientStop] = []
        self._edge_behavior = EdgeBehavior.CLAMP
        super().__init__(brush_data)

    def _get_edge_behavior(self, match: re.Match) -> None:
        edge = match.group("edge")
        if edge is not None:
            self._edge_behavior = self._parse_enum(
                "edge_behavior", EdgeBehavior, edge, EdgeBehavior.CLAMP, token=f"E{edge}")

    def _get_stops(self, match: re.Match) -> None:
        stops: List[GradientStop] = []
        for stop in get_registry().finditer(match.group("stops"), "gradient_stop"):
            if stop.group("color"):
                color = Color.from_hex(stop.group("color"))
            else:
                color = Color.from_hdr(*(float(stop.group(c)) for c in "xyzw"))
            stops.append(GradientStop(position=float(stop.group("position")), color=color))
        # Sort the stops based on their position
        self._stops = sorted(stops, key=lambda s: s.position)
        self._parsed("stops")


class LinearGradientBrushElement(_GradientBrushElement):
    """``LG angle [E edge] [O opacity] pos:#color ...``"""

    brush_type = BrushType.LINEAR_GRADIENT
    pattern_name = "linear_gradient"

    def __init__(self, brush_data: str):
        self._angle = 0.0
        super().__init__(brush_data)

    def _get_attributes(self, match: re.Match) -> None:
        self._angle = self._parse_float("angle", match.group("angle"), 0.0)
        self._get_edge_behavior(match)
        self._get_opacity(match)
        self._get_stops(match)

    def to_descriptor(self) -> LinearGradientBrush:
        return LinearGradientBrush(
            stops=list(self._stops),
            angle=self._angle,
            opacity=self._opacity,
            edge_behavior=self._edge_behavior,
        )


class RadialGradientBrushElement(_GradientBrushElement):
    """``RG cx cy rx ry [F ox oy] [E edge] [O opacity] pos:#color ...``"""

    brush_type = BrushType.RADIAL_GRADIENT
    pattern_name = "radial_gradient"

    def __init__(self, brush_data: str):
        self._center: Tuple[float, float] = (0.0, 0.0)
        self._radii: Tuple[float, float] = (0.0, 0.0)
        self._origin_offset: Tuple[float, float] = (0.0, 0.0)
        super().__init__(brush_data)

    def _get_attributes(self, match: re.Match) -> None:
        self._center = (
            self._parse_float("center_x", match.group("center_x"), 0.0),
            self._parse_float("center_y", match.group("center_y"), 0.0),
        )
        # Sanitize by taking the absolute value
        self._radii = (
            self._parse_float("radius_x", match.group("radius_x"), 0.0, absolute=True),
            self._parse_float("radius_y", match.group("radius_y"), 0.0, absolute=True),
        )
        if match.group("offset_x") is not None:
            self._origin_offset = (
                self._parse_float("offset_x", match.group("offset_x"), 0.0),
                self._parse_float("offset_y", match.group("offset_y"), 0.0),
            )
        self._get_edge_behavior(match)
        self._get_opacity(match)
        self._get_stops(match)

    def to_descriptor(self) -> RadialGradientBrush:
        return RadialGradientBrush(
            stops=list(self._stops),
            center=self._center,
            radii=self._radii,
            origin_offset=self._origin_offset,
            opacity=self._opacity,
            edge_behavior=self._edge_behavior,
        )


class ImageBrushElement(BrushElement):
    """``IM(uri) [O opacity]``"""

    brush_type = BrushType.IMAGE
    pattern_name = "image"

    def __init__(self, brush_data: str):
        self._uri = ""
        super().__init__(brush_data)

    def _get_attributes(self, match: re.Match) -> None:
        self._uri = match.group("uri").strip()
        self._parsed("uri")
        self._get_opacity(match)

    def to_descriptor(self) -> ImageBrush:
        return ImageBrush(uri=self._uri, opacity=self._opacity)


# Declaration order follows BrushType, which is the tie-break order.
BRUSH_ELEMENTS: Dict[BrushType, Type[BrushElement]] = {
    BrushType.SOLID_COLOR: SolidColorBrushElement,
    BrushType.LINEAR_GRADIENT: LinearGradientBrushElement,
    BrushType.RADIAL_GRADIENT: RadialGradientBrushElement,
    BrushType.IMAGE: ImageBrushElement,
}


def brush_candidates(brush_data: str) -> List[BrushElement]:
    """Build every brush variant that matches somewhere in *brush_data*.

    Returns:
        Successful elements in ``BrushType`` declaration order.
    """
    candidates = []
    for brush_type in BrushType:
        element = BRUSH_ELEMENTS[brush_type](brush_data)
        if element.success:
            candidates.append(element)
    return candidates


def resolve_brush(brush_data: Optional[str]) -> Optional[BrushElement]:
    """Pick the brush reading that explains the most of *brush_data*.

    Args:
        brush_data: The brush clause text (may be ``None`` or empty).

    Returns:
        The winning element, or ``None`` if no variant matches.
    """
    if not brush_data:
        return None

    best: Optional[BrushElement] = None
    for element in brush_candidates(brush_data):
        trace(f"brush candidate {element.brush_type.value}: weight {element.validation_count}", "PARSE")
        # Strictly greater: earlier-declared variants win ties
        if best is None or element.validation_count > best.validation_count:
            best = element
    return best
