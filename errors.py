"""
errors.py

Exception types raised by the stroke markup parser and the materializer.

Only structural problems surface as exceptions.  Malformed field values
(width, miter limit, enum tokens, ...) never raise; they fall back to the
field default and are reported through ``ParseOutcome.USED_DEFAULT``.
"""

from __future__ import annotations


class StrokeMarkupError(ValueError):
    """Base class for all stroke markup errors."""


class MissingBrushError(StrokeMarkupError):
    """Raised when a stroke (or brush markup) has no constructible brush.

    Args:
        markup: The markup text being parsed.
        brush_data: The brush clause that failed, if any was captured.
    """

    def __init__(self, markup: str, brush_data: str = ""):
        self.markup = markup
        self.brush_data = brush_data
        super().__init__(
            f"Unable to create a valid brush with the brush data '{brush_data}'\n"
            f"Markup: {markup}"
        )


class InvalidMarkupError(StrokeMarkupError):
    """Raised in strict mode when markup holds characters the parse did not explain,
    or defines more than one element where only one is allowed."""

    def __init__(self, message: str, markup: str):
        self.markup = markup
        super().__init__(f"{message}\nMarkup: {markup}")


class GrammarCompileError(RuntimeError):
    """A registry pattern failed to compile.  Indicates a grammar bug, never bad input."""

    def __init__(self, name: str, source: str, reason: str):
        self.name = name
        self.source = source
        super().__init__(f"Grammar pattern '{name}' failed to compile: {reason}")


class ResourceLoadError(StrokeMarkupError):
    """Raised when a resource context cannot realize a resource (e.g. an image)."""

    def __init__(self, uri: str, reason: str = ""):
        self.uri = uri
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to load resource '{uri}'{detail}")
