"""Tests for stroke parsing (markup/stroke.py, markup/parser.py).

Covers the stroke scenarios (solid, dashed, custom dash, missing brush,
unknown join), the validation count arithmetic, and strict mode.
"""
from __future__ import annotations

import pytest

from errors import InvalidMarkupError, MissingBrushError
from markup import COMMAND_WEIGHT, meaningful_count, parse_and_create_stroke, parse_stroke, parse_stroke_element
from models import (
    Color,
    DashStyle,
    ImageBrush,
    LineJoin,
    LinearGradientBrush,
    ParseOutcome,
    SolidColorBrush,
    StrokeStyleDescriptor,
)
from settings import ParserSettings

STRICT = ParserSettings(strict=True)

VALID_MARKUP = [
    "ST2,#FF0000",
    "ST-4,#00FF00,DashStyle=Dash",
    "ST1,#000000,CustomDashStyle=2,3,4,5",
    "ST 0.5 , #80FF0000 O0.5 , LineJoin=Round , MiterLimit=4",
    "ST2,LG45 E Wrap 0:#FF000000 1:#FFFFFFFF,StartCap=Round",
    "ST3,RG10 10 5 8 F1 1 0:#FF0000 1:#0000FF",
    "ST1,IM(tiles/#FF0000.png) O0.75,TransformBehavior=Fixed",
    "ST2,LG0 0:1 0 0 1 0.5:#FF00FF00 1:0 0 1 1",
]


# ─────────────────────────────────────────────────────────
# Scenarios
# ─────────────────────────────────────────────────────────


class TestStrokeScenarios:
    def test_solid_stroke(self):
        stroke = parse_stroke("ST2,#FF0000")
        assert stroke.width == 2.0
        assert stroke.brush == SolidColorBrush(color=Color(255, 255, 0, 0), opacity=1.0)
        assert stroke.style == StrokeStyleDescriptor()
        assert stroke.validation_count == COMMAND_WEIGHT + 1 + 7

    def test_negative_width_and_dash(self):
        stroke = parse_stroke("ST-4,#00FF00,DashStyle=Dash")
        assert stroke.width == 4.0
        assert stroke.brush.color == Color(255, 0, 255, 0)
        assert stroke.style.dash_style is DashStyle.DASH

    def test_custom_dash(self):
        stroke = parse_stroke("ST1,#000000,CustomDashStyle=2,3,4,5")
        assert stroke.style.custom_dash_style == [2.0, 3.0, 4.0, 5.0]

    def test_missing_brush(self):
        with pytest.raises(MissingBrushError) as exc:
            parse_stroke("STxyz")
        assert exc.value.markup == "STxyz"

    def test_invalid_brush_clause(self):
        with pytest.raises(MissingBrushError):
            parse_stroke("ST2,red")

    def test_no_command(self):
        with pytest.raises(MissingBrushError):
            parse_stroke("#FF0000")

    def test_unknown_join_defaults(self):
        stroke = parse_stroke("ST3,#0000FF,LineJoin=Bogus")
        assert stroke.width == 3.0
        assert stroke.style.line_join is LineJoin.MITER
        assert stroke.style.outcomes["line_join"] is ParseOutcome.USED_DEFAULT
        assert "style.line_join" in stroke.used_defaults()

    def test_gradient_brush(self):
        stroke = parse_stroke("ST2,LG45 0:#FF000000 1:#FFFFFFFF,LineJoin=Round")
        assert isinstance(stroke.brush, LinearGradientBrush)
        assert stroke.brush.angle == 45.0
        assert stroke.style.line_join is LineJoin.ROUND

    def test_image_brush_with_hex_in_uri(self):
        stroke = parse_stroke("ST1,IM(tiles/#FF0000.png)")
        assert stroke.brush == ImageBrush(uri="tiles/#FF0000.png")


# ─────────────────────────────────────────────────────────
# Width
# ─────────────────────────────────────────────────────────


class TestWidth:
    @pytest.mark.parametrize("text, expected", [("2", 2.0), ("-4", 4.0), ("0", 0.0), ("1.25", 1.25), ("-.5", 0.5), ("2.", 2.0)])
    def test_absolute_value(self, text, expected):
        assert parse_stroke(f"ST{text},#FF0000").width == expected

    def test_unparsable_width_defaults(self):
        stroke = parse_stroke("STabc,#FF0000")
        assert stroke.width == 1.0
        assert stroke.outcomes["width"] is ParseOutcome.USED_DEFAULT
        assert stroke.used_defaults() == ["width"]
        assert stroke.validation_count == COMMAND_WEIGHT + 7

    def test_default_width_from_options(self):
        assert parse_stroke("ST?,#FF0000", ParserSettings(default_width=3.0)).width == 3.0

    def test_empty_width_is_not_reported(self):
        stroke = parse_stroke("ST,#FF0000")
        assert stroke.width == 1.0
        assert stroke.outcomes == {}


# ─────────────────────────────────────────────────────────
# Validation count
# ─────────────────────────────────────────────────────────


class TestValidationCount:
    @pytest.mark.parametrize("markup", VALID_MARKUP)
    def test_aggregate_sum(self, markup):
        element = parse_stroke_element(markup)
        expected = COMMAND_WEIGHT + element._width_weight + element.brush.validation_count
        if element.style is not None:
            expected += element.style.validation_count
        assert element.validation_count == expected

    @pytest.mark.parametrize("markup", VALID_MARKUP)
    def test_valid_markup_is_fully_explained(self, markup):
        element = parse_stroke_element(markup)
        assert element.validation_count + element.clause_separators == meaningful_count(markup)

    def test_deterministic(self):
        for markup in VALID_MARKUP:
            first, second = parse_stroke(markup), parse_stroke(markup)
            assert first == second
            assert first.validation_count == second.validation_count

    def test_descriptors_are_not_shared(self):
        first = parse_stroke("ST1,#000000,CustomDashStyle=2,3")
        first.style.custom_dash_style.append(9.0)
        assert parse_stroke("ST1,#000000,CustomDashStyle=2,3").style.custom_dash_style == [2.0, 3.0]


# ─────────────────────────────────────────────────────────
# Strict mode
# ─────────────────────────────────────────────────────────


class TestStrictMode:
    @pytest.mark.parametrize("markup", VALID_MARKUP)
    def test_accepts_valid(self, markup):
        parse_stroke(markup, STRICT)

    def test_trailing_junk(self):
        assert parse_stroke("ST2,#FF0000 junk").width == 2.0
        with pytest.raises(InvalidMarkupError):
            parse_stroke("ST2,#FF0000 junk", STRICT)

    def test_multiple_definitions(self):
        with pytest.raises(InvalidMarkupError, match="Multiple"):
            parse_stroke("ST2,#FF0000 ST3,#00FF00", STRICT)

    def test_defaulted_width(self):
        with pytest.raises(InvalidMarkupError):
            parse_stroke("STabc,#FF0000", STRICT)

    def test_defaulted_style_value(self):
        with pytest.raises(InvalidMarkupError):
            parse_stroke("ST3,#0000FF,LineJoin=Bogus", STRICT)

    def test_missing_brush_still_reported(self):
        with pytest.raises(MissingBrushError):
            parse_stroke("STxyz", STRICT)


class TestParseAndCreate:
    def test_materializes(self, qapp):
        from canvas import FileResourceContext

        stroke = parse_and_create_stroke(FileResourceContext(), "ST2,#FF0000,DashStyle=Dot")
        assert stroke.width == 2.0
        assert stroke.style.dash_style is DashStyle.DOT
        assert stroke.brush.color().red() == 255
