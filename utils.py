"""
utils.py

Utility functions for stroke markup: color conversion between the model
and Qt, clamping, and JSON-friendly descriptor dumps.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict

from PyQt6.QtGui import QColor

from models import Color


def clamp01(v: float) -> float:
    """Clamp a value into the [0, 1] range."""
    return max(0.0, min(1.0, float(v)))


def qcolor_from_color(color: Color, opacity: float = 1.0) -> QColor:
    """
    Convert a model Color to a QColor, folding *opacity* into alpha.

    Args:
        color: The ARGB color
        opacity: Multiplier for the alpha channel (clamped to [0, 1])

    Returns:
        The QColor
    """
    c = QColor(color.r, color.g, color.b, color.a)
    c.setAlphaF(c.alphaF() * clamp01(opacity))
    return c


def qcolor_to_hex(c: QColor, include_alpha: bool = False) -> str:
    """
    Convert a QColor to a hex string.

    Args:
        c: The QColor to convert
        include_alpha: If True, prefix the alpha channel (markup order)

    Returns:
        Hex string like "#RRGGBB" or "#AARRGGBB"
    """
    if include_alpha:
        return "#{:02X}{:02X}{:02X}{:02X}".format(c.alpha(), c.red(), c.green(), c.blue())
    return "#{:02X}{:02X}{:02X}".format(c.red(), c.green(), c.blue())


def hex_to_qcolor(s: str, fallback: QColor) -> QColor:
    """
    Parse a markup hex string to a QColor.

    Args:
        s: Hex string like "#RRGGBB" or "#AARRGGBB"
        fallback: Color to return if parsing fails

    Returns:
        Parsed QColor or fallback
    """
    if not s:
        return QColor(fallback)
    try:
        return qcolor_from_color(Color.from_hex(s))
    except ValueError:
        return QColor(fallback)


# Canonical key order for descriptor dumps
DESCRIPTOR_KEY_ORDER = ["type", "width", "brush", "style", "validation_count", "used_defaults"]


def _to_plain(value: Any) -> Any:
    if isinstance(value, Color):
        return value.to_hex()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        out = {}
        brush_type = getattr(value, "brush_type", None)
        if brush_type is not None:
            out["type"] = brush_type.value
        for f in fields(value):
            if f.name == "outcomes":
                continue
            out[f.name] = _to_plain(getattr(value, f.name))
        return out
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def descriptor_to_dict(descriptor: Any) -> Dict[str, Any]:
    """
    Convert a descriptor to a JSON-serializable dict.

    Colors become "#AARRGGBB" strings, enums their markup tokens.  Keys are
    emitted in canonical order; any others follow in declaration order.

    Args:
        descriptor: A stroke, brush or stroke style descriptor

    Returns:
        Plain dict suitable for json.dumps
    """
    plain = _to_plain(descriptor)
    if hasattr(descriptor, "used_defaults"):
        plain["used_defaults"] = descriptor.used_defaults()

    result = {}
    for key in DESCRIPTOR_KEY_ORDER:
        if key in plain:
            result[key] = plain[key]
    for key in plain:
        if key not in result:
            result[key] = plain[key]
    return result
