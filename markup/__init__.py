"""
markup package

Regex grammar, markup elements and the parse API for stroke markup.
"""

from markup.grammar import GrammarRegistry, get_registry, meaningful_count
from markup.element import MarkupElement
from markup.brush import (
    BrushElement,
    SolidColorBrushElement,
    LinearGradientBrushElement,
    RadialGradientBrushElement,
    ImageBrushElement,
    resolve_brush,
)
from markup.style import StrokeStyleElement
from markup.stroke import COMMAND_WEIGHT, StrokeElement
from markup.parser import (
    parse_stroke,
    parse_stroke_element,
    parse_brush,
    parse_brush_element,
    parse_stroke_style,
    parse_and_create_stroke,
)

__all__ = [
    "GrammarRegistry",
    "get_registry",
    "meaningful_count",
    "MarkupElement",
    "BrushElement",
    "SolidColorBrushElement",
    "LinearGradientBrushElement",
    "RadialGradientBrushElement",
    "ImageBrushElement",
    "resolve_brush",
    "StrokeStyleElement",
    "COMMAND_WEIGHT",
    "StrokeElement",
    "parse_stroke",
    "parse_stroke_element",
    "parse_brush",
    "parse_brush_element",
    "parse_stroke_style",
    "parse_and_create_stroke",
]
