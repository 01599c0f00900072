"""
markup/parser.py

Public parse API for stroke markup.

    parse_stroke("ST2,#FF0000,DashStyle=Dash")      -> StrokeDescriptor
    parse_brush("LG90 0:#FF000000 1:#FFFFFFFF")     -> BrushDescriptor
    parse_stroke_style("LineJoin=Round,MiterLimit=4") -> StrokeStyleDescriptor

Every call allocates fresh elements and descriptors; nothing is cached.
In strict mode (``ParserSettings.strict``) markup must be fully explained
by the parse: the validation count plus the clause separators must equal
the number of non-whitespace characters, and only one definition may be
present.
"""

from __future__ import annotations

import logging
from typing import Optional

from debug_trace import trace, trace_call
from errors import InvalidMarkupError, MissingBrushError
from markup.brush import BrushElement, resolve_brush
from markup.grammar import get_registry
from markup.stroke import StrokeElement
from markup.style import StrokeStyleElement
from models import BrushDescriptor, StrokeDescriptor, StrokeStyleDescriptor
from settings import ParserSettings

log = logging.getLogger(__name__)


def _check_single_definition(markup: str, pattern_name: str) -> None:
    definitions = sum(1 for _ in get_registry().finditer(markup, pattern_name))
    if definitions > 1:
        raise InvalidMarkupError(f"Multiple {pattern_name} definitions found ({definitions})", markup)


def _check_coverage(markup: str, explained: int) -> None:
    expected = get_registry().meaningful_count(markup)
    if explained != expected:
        raise InvalidMarkupError(
            f"Markup is not fully valid: {explained} of {expected} characters explained", markup)


@trace_call("PARSE")
def parse_stroke_element(markup: str, options: Optional[ParserSettings] = None) -> StrokeElement:
    """Parse stroke markup into a StrokeElement.

    Args:
        markup: Stroke markup, e.g. ``"ST2,#FF0000"``.
        options: Parser options. Defaults to ``ParserSettings()``.

    Returns:
        The stroke element.  It is empty (``success`` False) only when the
        markup does not start with the stroke command.

    Raises:
        MissingBrushError: If no brush variant accepts the brush clause.
        InvalidMarkupError: In strict mode, for unexplained characters or
            multiple definitions.
    """
    options = options or ParserSettings()
    registry = get_registry()

    element = StrokeElement(registry.match(markup, "stroke"), options)
    if not element.success:
        # No "ST" command: there is no stroke and therefore no brush
        raise MissingBrushError(markup)

    trace(f"stroke {markup!r}: weight {element.validation_count}", "PARSE")
    if options.strict:
        _check_single_definition(markup, "stroke")
        _check_coverage(markup, element.validation_count + element.clause_separators)
    return element


def parse_stroke(markup: str, options: Optional[ParserSettings] = None) -> StrokeDescriptor:
    """Parse stroke markup into a StrokeDescriptor.

    Args:
        markup: Stroke markup, e.g. ``"ST-4,#00FF00,DashStyle=Dash"``.
        options: Parser options. Defaults to ``ParserSettings()``.

    Raises:
        MissingBrushError: If the stroke has no constructible brush.
        InvalidMarkupError: In strict mode only.
    """
    descriptor = parse_stroke_element(markup, options).to_descriptor()
    defaults = descriptor.used_defaults()
    if defaults:
        log.debug("Stroke %r used defaults for: %s", markup, ", ".join(defaults))
    return descriptor


@trace_call("PARSE")
def parse_brush_element(markup: str, options: Optional[ParserSettings] = None) -> BrushElement:
    """Parse standalone brush markup into the best-matching brush element.

    Raises:
        MissingBrushError: If no brush variant matches the markup.
        InvalidMarkupError: In strict mode only.
    """
    options = options or ParserSettings()
    element = resolve_brush(markup)
    if element is None:
        raise MissingBrushError(markup, markup)

    if options.strict:
        _check_single_definition(markup, "brush")
        _check_coverage(markup, element.validation_count)
    return element


def parse_brush(markup: str, options: Optional[ParserSettings] = None) -> BrushDescriptor:
    """Parse standalone brush markup into a BrushDescriptor.

    Args:
        markup: Brush markup, e.g. ``"#80FF0000"`` or ``"IM(tile.png) O0.5"``.
        options: Parser options. Defaults to ``ParserSettings()``.
    """
    return parse_brush_element(markup, options).to_descriptor()


def parse_stroke_style(markup: str, options: Optional[ParserSettings] = None) -> StrokeStyleDescriptor:
    """Parse standalone stroke style markup.

    Never fails outside strict mode: markup that is not a style clause
    yields the default style.

    Raises:
        InvalidMarkupError: In strict mode, for unexplained characters.
    """
    options = options or ParserSettings()
    element = StrokeStyleElement(markup, options)
    if options.strict:
        _check_coverage(markup, element.validation_count)
    return element.to_descriptor()


def parse_and_create_stroke(context, markup: str, options: Optional[ParserSettings] = None):
    """Parse *markup* and materialize it into a CanvasStroke.

    Args:
        context: Resource context used for the duration of this call.
        markup: Stroke markup.
        options: Parser options. Defaults to ``ParserSettings()``.

    Returns:
        A CanvasStroke.
    """
    from canvas.materializer import create_stroke
    return create_stroke(parse_stroke(markup, options), context)
