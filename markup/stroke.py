"""
markup/stroke.py

Stroke element: the aggregate built from one ``ST width[,brush][,style]``
match.  Its validation count is the command marker weight plus the
weights of the width, brush and style it explains.
"""

from __future__ import annotations

import re
from typing import Optional

from errors import MissingBrushError
from markup.brush import BrushElement, resolve_brush
from markup.element import MarkupElement
from markup.grammar import get_registry
from markup.style import StrokeStyleElement
from models import StrokeDescriptor, StrokeStyleDescriptor
from settings import ParserSettings

# Weight of the two-character "ST" command marker
COMMAND_WEIGHT = 2


class StrokeElement(MarkupElement):
    """A stroke: width, brush and optional style.

    Args:
        match: Match of the ``stroke`` pattern (``None`` leaves the element empty).
        options: Parser options (default width, default miter limit).

    Raises:
        MissingBrushError: If the match carries no brush clause that any
            brush variant accepts.
    """

    def __init__(self, match: Optional[re.Match], options: Optional[ParserSettings] = None):
        super().__init__()
        self.options = options or ParserSettings()
        self.width: float = self.options.default_width
        self.brush: Optional[BrushElement] = None
        self.style: Optional[StrokeStyleElement] = None
        self._width_weight = 0
        self.initialize(match)

    def _get_attributes(self, match: re.Match) -> None:
        registry = get_registry()

        width_text = match.group("width")
        if registry.is_float(width_text):
            self.width = abs(float(width_text))
            self._width_weight = registry.meaningful_count(width_text)
            self._parsed("width")
        elif registry.meaningful_count(width_text):
            self._defaulted("width", width_text, self.options.default_width)

        self.brush = resolve_brush(match.group("brush"))
        if self.brush is None:
            raise MissingBrushError(match.string, match.group("brush") or "")

        if match.group("style") is not None:
            self.style = StrokeStyleElement(match.group("style"), self.options)

    def validate(self) -> int:
        if not self.success:
            return 0
        total = COMMAND_WEIGHT + self._width_weight + self.brush.validation_count
        if self.style is not None:
            total += self.style.validation_count
        return total

    @property
    def clause_separators(self) -> int:
        """Commas between the width, brush and style clauses."""
        return int(self.brush is not None) + int(self.style is not None)

    def to_descriptor(self) -> StrokeDescriptor:
        style = self.style.to_descriptor() if self.style is not None else StrokeStyleDescriptor(
            miter_limit=self.options.default_miter_limit)
        return StrokeDescriptor(
            width=self.width,
            brush=self.brush.to_descriptor(),
            style=style,
            validation_count=self.validation_count,
            outcomes=dict(self.outcomes),
        )

    def create_stroke(self, context):
        """Materialize this element into a CanvasStroke using *context*."""
        from canvas.materializer import create_stroke
        return create_stroke(self.to_descriptor(), context)
