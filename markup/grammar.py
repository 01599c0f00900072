"""
markup/grammar.py

Grammar registry: the named regular expressions that make up the stroke
markup language, and the composed stroke / brush / style patterns built
from them.

Two flavours of each brush sub-pattern exist.  *Templates* contain no
named groups and are embedded into the composed patterns (Python does not
allow a group name twice in one pattern).  *Attribute* patterns carry the
named groups and are applied to a captured span to extract its fields.

Everything is compiled once, at import, into the module-level
``REGISTRY``.  The registry is never mutated afterwards, so concurrent
parses share it without locking.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, Optional, Pattern

from debug_trace import trace
from errors import GrammarCompileError


# ─────────────────────────────────────────────────────────
# Lexical building blocks
# ─────────────────────────────────────────────────────────

# Whitespace
SPACER = r"\s*"
# Clause / list separator
COMMA = r"\s*,\s*"
# Separator between the tokens of one brush
SEP = r"\s+"
# Numbers
FLOAT = r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
# Hexadecimal color: #RRGGBB or #AARRGGBB
HEX = r"[0-9a-fA-F]"
HEX_COLOR = rf"#(?:{HEX}{{8}}|{HEX}{{6}})(?!{HEX})"
# Enum token for gradient edge behavior (name or ordinal)
EDGE_TOKEN = r"[A-Za-z0-9]+"


# ─────────────────────────────────────────────────────────
# Brush templates (no named groups)
# ─────────────────────────────────────────────────────────

OPACITY = rf"{SEP}O{SPACER}{FLOAT}"
EDGE = rf"{SEP}E{SPACER}{EDGE_TOKEN}"
ORIGIN_OFFSET = rf"{SEP}F{SPACER}{FLOAT}{SEP}{FLOAT}"
# High dynamic range color: four floats, R G B A
HDR_COLOR = rf"{FLOAT}{SEP}{FLOAT}{SEP}{FLOAT}{SEP}{FLOAT}"
# position:#color or position:r g b a
GRADIENT_STOP = rf"{FLOAT}{SPACER}:{SPACER}(?:{HEX_COLOR}|{HDR_COLOR})"
GRADIENT_STOPS = rf"(?:{SEP}{GRADIENT_STOP})+"

# #RRGGBB [O opacity]
SOLID_COLOR = rf"{HEX_COLOR}(?:{OPACITY})?"
# LG angle [E edge] [O opacity] stop ...
LINEAR_GRADIENT = rf"LG{SPACER}{FLOAT}(?:{EDGE})?(?:{OPACITY})?{GRADIENT_STOPS}"
# RG cx cy rx ry [F ox oy] [E edge] [O opacity] stop ...
RADIAL_GRADIENT = (
    rf"RG{SPACER}{FLOAT}{SEP}{FLOAT}{SEP}{FLOAT}{SEP}{FLOAT}"
    rf"(?:{ORIGIN_OFFSET})?(?:{EDGE})?(?:{OPACITY})?{GRADIENT_STOPS}"
)
# IM(uri) [O opacity]
IMAGE = rf"IM{SPACER}\([^()]*\)(?:{OPACITY})?"

BRUSH = rf"(?:{SOLID_COLOR}|{LINEAR_GRADIENT}|{RADIAL_GRADIENT}|{IMAGE})"


# ─────────────────────────────────────────────────────────
# Stroke style templates
# ─────────────────────────────────────────────────────────

ENUM_STYLE_KEYS = ("DashStyle", "LineJoin", "StartCap", "EndCap", "DashCap", "TransformBehavior")
NUMERIC_STYLE_KEYS = ("MiterLimit", "DashOffset")
STYLE_KEY = "|".join(ENUM_STYLE_KEYS + NUMERIC_STYLE_KEYS)
# Values are tolerant: anything up to the next comma, validated later
STYLE_VALUE = r"[^,=]*"
# dash,space[,dash,space...]
CUSTOM_DASH = rf"{FLOAT}{COMMA}{FLOAT}(?:{COMMA}{FLOAT}{COMMA}{FLOAT})*"
STYLE_TOKEN = (
    rf"(?:(?:{STYLE_KEY}){SPACER}={SPACER}{STYLE_VALUE}"
    rf"|CustomDashStyle{SPACER}={SPACER}{CUSTOM_DASH})"
)
STROKE_STYLE = rf"{STYLE_TOKEN}(?:{COMMA}{STYLE_TOKEN})*"


# ─────────────────────────────────────────────────────────
# Stroke template
# ─────────────────────────────────────────────────────────

# Two-character stroke command marker
STROKE_COMMAND = "ST"
# Width is tolerant: anything up to the first comma
STROKE_WIDTH = r"[^,]*"


# ─────────────────────────────────────────────────────────
# Named patterns
# ─────────────────────────────────────────────────────────

PATTERN_SOURCES: Dict[str, str] = {
    # Composed patterns (matched from the start of the markup)
    "stroke": (
        rf"{SPACER}(?P<command>{STROKE_COMMAND}){SPACER}(?P<width>{STROKE_WIDTH})"
        rf"(?:{COMMA}(?P<brush>{BRUSH}))?"
        rf"(?:{COMMA}(?P<style>{STROKE_STYLE}))?{SPACER}"
    ),
    "brush": rf"{SPACER}(?P<brush>{BRUSH}){SPACER}",
    "style": rf"{SPACER}(?P<style>{STROKE_STYLE}){SPACER}",
    # Brush attribute patterns (searched inside a brush clause)
    "solid_color": rf"(?P<color>{HEX_COLOR})(?:{SEP}O{SPACER}(?P<opacity>{FLOAT}))?",
    "linear_gradient": (
        rf"LG{SPACER}(?P<angle>{FLOAT})"
        rf"(?:{SEP}E{SPACER}(?P<edge>{EDGE_TOKEN}))?"
        rf"(?:{SEP}O{SPACER}(?P<opacity>{FLOAT}))?"
        rf"(?P<stops>{GRADIENT_STOPS})"
    ),
    "radial_gradient": (
        rf"RG{SPACER}(?P<center_x>{FLOAT}){SEP}(?P<center_y>{FLOAT})"
        rf"{SEP}(?P<radius_x>{FLOAT}){SEP}(?P<radius_y>{FLOAT})"
        rf"(?:{SEP}F{SPACER}(?P<offset_x>{FLOAT}){SEP}(?P<offset_y>{FLOAT}))?"
        rf"(?:{SEP}E{SPACER}(?P<edge>{EDGE_TOKEN}))?"
        rf"(?:{SEP}O{SPACER}(?P<opacity>{FLOAT}))?"
        rf"(?P<stops>{GRADIENT_STOPS})"
    ),
    "image": rf"IM{SPACER}\((?P<uri>[^()]*)\)(?:{SEP}O{SPACER}(?P<opacity>{FLOAT}))?",
    "gradient_stop": (
        rf"(?P<position>{FLOAT}){SPACER}:{SPACER}"
        rf"(?:(?P<color>{HEX_COLOR})"
        rf"|(?P<x>{FLOAT}){SEP}(?P<y>{FLOAT}){SEP}(?P<z>{FLOAT}){SEP}(?P<w>{FLOAT}))"
    ),
    # Stroke style attribute patterns
    "style_token": (
        rf"(?P<key>{STYLE_KEY}){SPACER}={SPACER}(?P<value>{STYLE_VALUE})"
        rf"|CustomDashStyle{SPACER}={SPACER}(?P<custom_dash>{CUSTOM_DASH})"
    ),
    "dash_pair": rf"(?P<dash>{FLOAT}){COMMA}(?P<space>{FLOAT})",
    # Scalars
    "float": rf"{SPACER}{FLOAT}{SPACER}",
    "hex_color": HEX_COLOR,
    # Whitespace, used to count the meaningful characters of a span
    "validation": r"\s+",
}


class GrammarRegistry:
    """Compiled, read-only set of named patterns.

    Args:
        sources: Mapping of pattern name to regex source.

    Raises:
        GrammarCompileError: If any source fails to compile.
    """

    def __init__(self, sources: Dict[str, str]):
        compiled: Dict[str, Pattern[str]] = {}
        for name, source in sources.items():
            try:
                compiled[name] = re.compile(source)
            except re.error as e:
                raise GrammarCompileError(name, source, str(e)) from e
        self._patterns = compiled

    def __contains__(self, name: str) -> bool:
        return name in self._patterns

    def names(self):
        return tuple(self._patterns)

    def pattern(self, name: str) -> Pattern[str]:
        """Get the compiled pattern registered under *name*."""
        return self._patterns[name]

    def match(self, text: str, name: str = "stroke") -> Optional[re.Match]:
        """Match *text* from its start against the named pattern."""
        m = self._patterns[name].match(text)
        trace(f"match {name!r} on {text!r} -> {m.group(0)!r}" if m else f"match {name!r} on {text!r} -> None", "MATCH")
        return m

    def search(self, text: str, name: str) -> Optional[re.Match]:
        """Find the first occurrence of the named pattern anywhere in *text*."""
        return self._patterns[name].search(text)

    def finditer(self, text: str, name: str) -> Iterator[re.Match]:
        """Iterate over successive non-overlapping occurrences (repeated captures)."""
        return self._patterns[name].finditer(text)

    def meaningful_count(self, text: Optional[str]) -> int:
        """Number of non-whitespace characters in *text*."""
        if not text:
            return 0
        return len(self._patterns["validation"].sub("", text))

    def is_float(self, text: Optional[str]) -> bool:
        """True if *text* is exactly one markup number (surrounding whitespace allowed)."""
        return bool(text) and self._patterns["float"].fullmatch(text) is not None


REGISTRY = GrammarRegistry(PATTERN_SOURCES)
trace(f"Compiled {len(PATTERN_SOURCES)} grammar patterns", "GRAMMAR")


def get_registry() -> GrammarRegistry:
    """Return the process-wide grammar registry."""
    return REGISTRY


def meaningful_count(text: Optional[str]) -> int:
    """Number of non-whitespace characters in *text*."""
    return REGISTRY.meaningful_count(text)
