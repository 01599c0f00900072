"""
models.py

Data models and constants for stroke markup: enumerations, brush and
stroke descriptors, and per-field parse outcomes.

Descriptors are plain data.  They carry no Qt objects; the canvas
materializer turns them into QBrush / QPen values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Type, TypeVar, Union


# ----------------------------
# Enumerations
# ----------------------------
#
# Enum values are the markup tokens.  Lookup is case-sensitive; the
# integer ordinal (declaration position) is accepted as well.

class DashStyle(Enum):
    SOLID = "Solid"
    DASH = "Dash"
    DOT = "Dot"
    DASH_DOT = "DashDot"
    DASH_DOT_DOT = "DashDotDot"


class LineJoin(Enum):
    MITER = "Miter"
    BEVEL = "Bevel"
    ROUND = "Round"
    MITER_OR_BEVEL = "MiterOrBevel"


class CapStyle(Enum):
    FLAT = "Flat"
    SQUARE = "Square"
    ROUND = "Round"
    TRIANGLE = "Triangle"


class TransformBehavior(Enum):
    NORMAL = "Normal"
    FIXED = "Fixed"
    HAIRLINE = "Hairline"


class EdgeBehavior(Enum):
    """How a gradient extends past its first and last stop."""
    CLAMP = "Clamp"
    WRAP = "Wrap"
    MIRROR = "Mirror"


class BrushType(Enum):
    """Brush variants.  Declaration order breaks ties during brush resolution."""
    SOLID_COLOR = "SolidColor"
    LINEAR_GRADIENT = "LinearGradient"
    RADIAL_GRADIENT = "RadialGradient"
    IMAGE = "Image"


class ParseOutcome(Enum):
    """What happened to a field that was present in the markup."""
    PARSED = "parsed"
    USED_DEFAULT = "used_default"


E = TypeVar("E", bound=Enum)


def lookup_enum(enum_cls: Type[E], token: str) -> Optional[E]:
    """Resolve a markup token to an enum member.

    Args:
        enum_cls: The enum class to look the token up in.
        token: Member value (e.g. ``"Dash"``) or ordinal (e.g. ``"1"``).

    Returns:
        The member, or ``None`` if the token is not recognised.
    """
    token = (token or "").strip()
    for member in enum_cls:
        if member.value == token:
            return member
    # ASCII ordinals only; str.isdigit() also accepts "²"
    if token.isascii() and token.isdigit():
        members = list(enum_cls)
        index = int(token)
        if index < len(members):
            return members[index]
    return None


# ----------------------------
# Colors
# ----------------------------

@dataclass(frozen=True)
class Color:
    """An 8-bit ARGB color."""
    a: int = 255
    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Parse ``#RRGGBB`` or ``#AARRGGBB`` (alpha first).

        Raises:
            ValueError: If the string is not 6 or 8 hex digits.
        """
        digits = hex_color.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hexadecimal color: {hex_color!r}")
        values = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        if len(values) == 3:
            values.insert(0, 255)
        return cls(*values)

    @classmethod
    def from_hdr(cls, x: float, y: float, z: float, w: float) -> "Color":
        """Convert high dynamic range components (R, G, B, A order).

        Negative components are made absolute and anything above 1 is
        clamped to 1 before scaling to 0-255.
        """
        r, g, b, a = (int(min(abs(v) * 255.0, 255.0)) for v in (x, y, z, w))
        return cls(a, r, g, b)

    def to_hex(self) -> str:
        """Render as ``#AARRGGBB``."""
        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"


TRANSPARENT = Color(0, 0, 0, 0)


# ----------------------------
# Brush descriptors
# ----------------------------

@dataclass
class GradientStop:
    position: float
    color: Color


@dataclass
class SolidColorBrush:
    color: Color = TRANSPARENT
    opacity: float = 1.0
    brush_type = BrushType.SOLID_COLOR


@dataclass
class LinearGradientBrush:
    """Linear gradient along ``angle`` degrees across the painted shape's bounds."""
    stops: List[GradientStop] = field(default_factory=list)
    angle: float = 0.0
    opacity: float = 1.0
    edge_behavior: EdgeBehavior = EdgeBehavior.CLAMP
    brush_type = BrushType.LINEAR_GRADIENT


@dataclass
class RadialGradientBrush:
    """Elliptical radial gradient in user coordinates.

    ``origin_offset`` moves the gradient origin (focal point) relative to
    ``center``.
    """
    stops: List[GradientStop] = field(default_factory=list)
    center: Tuple[float, float] = (0.0, 0.0)
    radii: Tuple[float, float] = (0.0, 0.0)
    origin_offset: Tuple[float, float] = (0.0, 0.0)
    opacity: float = 1.0
    edge_behavior: EdgeBehavior = EdgeBehavior.CLAMP
    brush_type = BrushType.RADIAL_GRADIENT


@dataclass
class ImageBrush:
    uri: str = ""
    opacity: float = 1.0
    brush_type = BrushType.IMAGE


BrushDescriptor = Union[SolidColorBrush, LinearGradientBrush, RadialGradientBrush, ImageBrush]


# ----------------------------
# Stroke descriptors
# ----------------------------

DEFAULT_STROKE_WIDTH = 1.0
DEFAULT_MITER_LIMIT = 10.0


@dataclass
class StrokeStyleDescriptor:
    """Dash, join, cap and transform attributes of a stroke outline.

    ``custom_dash_style`` is ``None`` unless the markup supplied at least
    one valid dash/space pair; consumers then fall back to ``dash_style``.
    ``outcomes`` records, for each field present in the markup, whether it
    parsed or fell back to its default.  It does not affect equality.
    """
    dash_style: DashStyle = DashStyle.SOLID
    line_join: LineJoin = LineJoin.MITER
    miter_limit: float = DEFAULT_MITER_LIMIT
    dash_offset: float = 0.0
    start_cap: CapStyle = CapStyle.FLAT
    end_cap: CapStyle = CapStyle.FLAT
    dash_cap: CapStyle = CapStyle.FLAT
    transform_behavior: TransformBehavior = TransformBehavior.NORMAL
    custom_dash_style: Optional[List[float]] = None
    outcomes: Dict[str, ParseOutcome] = field(default_factory=dict, compare=False, repr=False)

    def used_defaults(self) -> List[str]:
        """Names of fields that were present but malformed."""
        return [k for k, v in self.outcomes.items() if v is ParseOutcome.USED_DEFAULT]


@dataclass
class StrokeDescriptor:
    """A fully parsed stroke: width, brush and style.

    Attributes:
        width: Stroke width, always >= 0.
        brush: The brush descriptor (never ``None``).
        style: Stroke style; all defaults when the markup had no style clause.
        validation_count: Weight of the markup explained by the parse.
        outcomes: Per-field parse outcomes for the stroke's own fields.
    """
    width: float = DEFAULT_STROKE_WIDTH
    brush: BrushDescriptor = field(default_factory=SolidColorBrush)
    style: StrokeStyleDescriptor = field(default_factory=StrokeStyleDescriptor)
    validation_count: int = field(default=0, compare=False)
    outcomes: Dict[str, ParseOutcome] = field(default_factory=dict, compare=False, repr=False)

    def used_defaults(self) -> List[str]:
        """Names of stroke and style fields that fell back to defaults."""
        own = [k for k, v in self.outcomes.items() if v is ParseOutcome.USED_DEFAULT]
        return own + [f"style.{name}" for name in self.style.used_defaults()]
