"""
markup/style.py

Stroke style element: the comma-separated ``Key=Value`` clause that sets
dash style, joins, caps, miter limit, dash offset, transform behavior and
an optional custom dash array.

The style element never fails.  Unknown enum tokens and unparsable
numbers fall back to the field default and are recorded as
``USED_DEFAULT``.  When a key occurs more than once, the last occurrence
wins.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple, Type

from markup.element import MarkupElement
from markup.grammar import get_registry
from models import (
    CapStyle,
    DashStyle,
    LineJoin,
    StrokeStyleDescriptor,
    TransformBehavior,
)
from settings import ParserSettings


# Markup key -> (descriptor field, enum class, default)
ENUM_FIELDS: Dict[str, Tuple[str, Type, object]] = {
    "DashStyle": ("dash_style", DashStyle, DashStyle.SOLID),
    "LineJoin": ("line_join", LineJoin, LineJoin.MITER),
    "StartCap": ("start_cap", CapStyle, CapStyle.FLAT),
    "EndCap": ("end_cap", CapStyle, CapStyle.FLAT),
    "DashCap": ("dash_cap", CapStyle, CapStyle.FLAT),
    "TransformBehavior": ("transform_behavior", TransformBehavior, TransformBehavior.NORMAL),
}


class StrokeStyleElement(MarkupElement):
    """Stroke style clause.

    Args:
        style_data: The style clause text, e.g. ``"DashStyle=Dash,LineJoin=Round"``.
        options: Parser options (supplies the default miter limit).
    """

    def __init__(self, style_data: Optional[str], options: Optional[ParserSettings] = None):
        super().__init__()
        self.options = options or ParserSettings()
        self.values: Dict[str, object] = {
            field_name: default for field_name, _, default in ENUM_FIELDS.values()
        }
        self.values["miter_limit"] = self.options.default_miter_limit
        self.values["dash_offset"] = 0.0
        self.custom_dash_style: Optional[List[float]] = None
        self.initialize(get_registry().match(style_data or "", "style"))

    def _get_attributes(self, match: re.Match) -> None:
        registry = get_registry()
        for token in registry.finditer(match.group("style"), "style_token"):
            key = token.group("key")
            if key is None:
                self._get_custom_dash(token.group("custom_dash"))
            elif key in ENUM_FIELDS:
                field_name, enum_cls, default = ENUM_FIELDS[key]
                self.values[field_name] = self._parse_enum(
                    field_name, enum_cls, token.group("value"), default, token=token.group(0))
            elif key == "MiterLimit":
                self.values["miter_limit"] = self._parse_float(
                    "miter_limit", token.group("value"), self.options.default_miter_limit,
                    token=token.group(0), absolute=True)
            elif key == "DashOffset":
                self.values["dash_offset"] = self._parse_float(
                    "dash_offset", token.group("value"), 0.0, token=token.group(0))

    def _get_custom_dash(self, text: Optional[str]) -> None:
        dashes: List[float] = []
        for pair in get_registry().finditer(text or "", "dash_pair"):
            # Sizes are sanitized by taking the absolute value
            dashes.append(abs(float(pair.group("dash"))))
            dashes.append(abs(float(pair.group("space"))))
        if dashes:
            self.custom_dash_style = dashes
            self._parsed("custom_dash_style")

    def to_descriptor(self) -> StrokeStyleDescriptor:
        return StrokeStyleDescriptor(
            custom_dash_style=list(self.custom_dash_style) if self.custom_dash_style else None,
            outcomes=dict(self.outcomes),
            **self.values,
        )
