"""Tests for canvas/materializer.py, canvas/stroke.py and canvas/resources.py.

Run headless (QT_QPA_PLATFORM=offscreen is set in conftest.py).
"""
from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QGradient, QImage, QTransform

from canvas import CanvasStroke, FileResourceContext, ResourceContext, create_brush, create_stroke, render_stroke_preview
from errors import ResourceLoadError
from markup import parse_stroke
from models import (
    CapStyle,
    Color,
    DashStyle,
    EdgeBehavior,
    GradientStop,
    ImageBrush,
    LineJoin,
    LinearGradientBrush,
    RadialGradientBrush,
    SolidColorBrush,
    StrokeStyleDescriptor,
    TransformBehavior,
)

RED = Color(255, 255, 0, 0)
BLUE = Color(255, 0, 0, 255)


@pytest.fixture()
def context(tmp_path):
    return FileResourceContext(tmp_path)


@pytest.fixture()
def red_png(tmp_path, qapp):
    image = QImage(4, 4, QImage.Format.Format_ARGB32)
    image.fill(QColor(255, 0, 0))
    path = tmp_path / "red.png"
    assert image.save(str(path))
    return path


def _stroke(**style) -> CanvasStroke:
    return CanvasStroke(brush=create_brush(SolidColorBrush(color=RED), None), width=3.0,
                        style=StrokeStyleDescriptor(**style))


# ─────────────────────────────────────────────────────────
# Brushes
# ─────────────────────────────────────────────────────────


class TestSolidBrush:
    def test_color(self, qapp, context):
        brush = create_brush(SolidColorBrush(color=RED), context)
        assert brush.style() == Qt.BrushStyle.SolidPattern
        assert brush.color() == QColor(255, 0, 0, 255)

    def test_opacity_folded_into_alpha(self, qapp, context):
        brush = create_brush(SolidColorBrush(color=RED, opacity=0.5), context)
        assert abs(brush.color().alpha() - 128) <= 1

    def test_opacity_clamped(self, qapp, context):
        assert create_brush(SolidColorBrush(color=RED, opacity=7.0), context).color().alpha() == 255
        assert create_brush(SolidColorBrush(color=RED, opacity=-1.0), context).color().alpha() == 0

    def test_not_a_descriptor(self, qapp, context):
        with pytest.raises(TypeError):
            create_brush("#FF0000", context)


class TestLinearBrush:
    def test_gradient(self, qapp, context):
        brush = create_brush(LinearGradientBrush(stops=[GradientStop(0.0, RED), GradientStop(1.0, BLUE)]), context)
        gradient = brush.gradient()
        assert gradient.type() == QGradient.Type.LinearGradient
        assert gradient.coordinateMode() == QGradient.CoordinateMode.ObjectBoundingMode
        assert gradient.spread() == QGradient.Spread.PadSpread
        stops = gradient.stops()
        assert [pos for pos, _ in stops] == [0.0, 1.0]
        assert stops[0][1] == QColor(255, 0, 0)

    def test_stop_positions_clamped(self, qapp, context):
        descriptor = LinearGradientBrush(stops=[GradientStop(-0.5, RED), GradientStop(1.5, BLUE)])
        stops = create_brush(descriptor, context).gradient().stops()
        assert [pos for pos, _ in stops] == [0.0, 1.0]

    def test_opacity_applied_to_stops(self, qapp, context):
        descriptor = LinearGradientBrush(stops=[GradientStop(0.0, RED), GradientStop(1.0, BLUE)], opacity=0.5)
        for _, color in create_brush(descriptor, context).gradient().stops():
            assert abs(color.alpha() - 128) <= 1

    @pytest.mark.parametrize("edge, spread", [
        (EdgeBehavior.CLAMP, QGradient.Spread.PadSpread),
        (EdgeBehavior.WRAP, QGradient.Spread.RepeatSpread),
        (EdgeBehavior.MIRROR, QGradient.Spread.ReflectSpread),
    ])
    def test_edge_behavior(self, qapp, context, edge, spread):
        descriptor = LinearGradientBrush(stops=[GradientStop(0.0, RED)], edge_behavior=edge)
        assert create_brush(descriptor, context).gradient().spread() == spread


class TestRadialBrush:
    def test_elliptical_transform(self, qapp, context):
        descriptor = RadialGradientBrush(
            stops=[GradientStop(0.0, RED), GradientStop(1.0, BLUE)],
            center=(10.0, 20.0), radii=(5.0, 10.0),
        )
        brush = create_brush(descriptor, context)
        assert brush.gradient().type() == QGradient.Type.RadialGradient
        transform = brush.transform()
        # Scaled about the centre: the centre is fixed, Y distances double
        assert transform.map(QPointF(10.0, 20.0)) == QPointF(10.0, 20.0)
        assert transform.map(QPointF(10.0, 25.0)) == QPointF(10.0, 30.0)

    def test_circle_has_identity_transform(self, qapp, context):
        descriptor = RadialGradientBrush(stops=[GradientStop(0.0, RED)], center=(1.0, 1.0), radii=(4.0, 4.0))
        assert create_brush(descriptor, context).transform().isIdentity()

    def test_zero_radius(self, qapp, context):
        descriptor = RadialGradientBrush(stops=[GradientStop(0.0, RED)], radii=(0.0, 3.0))
        assert create_brush(descriptor, context).transform().isIdentity()


class TestImageBrush:
    def test_texture(self, qapp, context, red_png):
        brush = create_brush(ImageBrush(uri=red_png.name), context)
        assert brush.style() == Qt.BrushStyle.TexturePattern
        assert brush.textureImage().width() == 4

    def test_opacity_baked_in(self, qapp, context, red_png):
        brush = create_brush(ImageBrush(uri=red_png.name, opacity=0.5), context)
        assert abs(brush.textureImage().pixelColor(0, 0).alpha() - 128) <= 2

    def test_absolute_path(self, qapp, red_png):
        brush = create_brush(ImageBrush(uri=str(red_png)), FileResourceContext("/nonexistent"))
        assert brush.style() == Qt.BrushStyle.TexturePattern

    def test_missing_image(self, qapp, context):
        with pytest.raises(ResourceLoadError) as exc:
            create_brush(ImageBrush(uri="missing.png"), context)
        assert exc.value.uri == "missing.png"

    def test_empty_uri(self, qapp, context):
        with pytest.raises(ResourceLoadError):
            create_brush(ImageBrush(), context)

    def test_corrupt_image(self, qapp, context, tmp_path):
        (tmp_path / "bad.png").write_bytes(b"not a png")
        with pytest.raises(ResourceLoadError):
            create_brush(ImageBrush(uri="bad.png"), context)


class TestResourceContext:
    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            ResourceContext()

    def test_from_settings(self, settings_manager, tmp_path):
        settings_manager.settings.resources.image_dir = str(tmp_path / "images")
        assert FileResourceContext.from_settings().base_dir == tmp_path / "images"

    def test_file_url(self, tmp_path):
        context = FileResourceContext()
        assert context.resolve((tmp_path / "a.png").as_uri()) == tmp_path / "a.png"


# ─────────────────────────────────────────────────────────
# Strokes and pens
# ─────────────────────────────────────────────────────────


class TestCreateStroke:
    def test_from_descriptor(self, qapp, context):
        descriptor = parse_stroke("ST-3,#0000FF,DashStyle=Dash")
        stroke = create_stroke(descriptor, context)
        assert stroke.width == 3.0
        assert stroke.style is descriptor.style
        assert stroke.brush.color() == QColor(0, 0, 255)

    def test_transform_property(self, qapp):
        stroke = _stroke()
        stroke.transform = QTransform.fromScale(2.0, 3.0)
        assert stroke.brush.transform().m11() == 2.0
        assert stroke.transform.m22() == 3.0


class TestPen:
    def test_defaults(self, qapp):
        pen = _stroke().to_pen()
        assert pen.widthF() == 3.0
        assert pen.style() == Qt.PenStyle.SolidLine
        assert pen.joinStyle() == Qt.PenJoinStyle.MiterJoin
        assert pen.capStyle() == Qt.PenCapStyle.FlatCap
        assert pen.miterLimit() == 10.0
        assert not pen.isCosmetic()

    @pytest.mark.parametrize("dash, pen_style", [
        (DashStyle.DASH, Qt.PenStyle.DashLine),
        (DashStyle.DOT, Qt.PenStyle.DotLine),
        (DashStyle.DASH_DOT, Qt.PenStyle.DashDotLine),
        (DashStyle.DASH_DOT_DOT, Qt.PenStyle.DashDotDotLine),
    ])
    def test_dash_style(self, qapp, dash, pen_style):
        assert _stroke(dash_style=dash).to_pen().style() == pen_style

    def test_custom_dash(self, qapp):
        pen = _stroke(dash_style=DashStyle.DOT, custom_dash_style=[2.0, 3.0, 4.0, 5.0], dash_offset=1.5).to_pen()
        assert pen.style() == Qt.PenStyle.CustomDashLine
        assert list(pen.dashPattern()) == [2.0, 3.0, 4.0, 5.0]
        assert pen.dashOffset() == 1.5

    def test_join_and_cap(self, qapp):
        pen = _stroke(line_join=LineJoin.MITER_OR_BEVEL, start_cap=CapStyle.TRIANGLE, miter_limit=4.0).to_pen()
        assert pen.joinStyle() == Qt.PenJoinStyle.SvgMiterJoin
        assert pen.capStyle() == Qt.PenCapStyle.RoundCap
        assert pen.miterLimit() == 4.0

    def test_fixed_is_cosmetic(self, qapp):
        pen = _stroke(transform_behavior=TransformBehavior.FIXED).to_pen()
        assert pen.isCosmetic()
        assert pen.widthF() == 3.0

    def test_hairline(self, qapp):
        pen = _stroke(transform_behavior=TransformBehavior.HAIRLINE).to_pen()
        assert pen.isCosmetic()
        assert pen.widthF() == 0.0


class TestRenderPreview:
    def test_render(self, qapp, context):
        stroke = create_stroke(parse_stroke("ST6,#FF0000"), context)
        image = render_stroke_preview(stroke, 200, 60, "#FFFFFFFF")
        assert (image.width(), image.height()) == (200, 60)
        assert image.pixelColor(0, 0) == QColor(255, 255, 255)
        # A point on the first segment of the sample path
        on_path = image.pixelColor(34, 28)
        assert on_path.red() > 200 and on_path.green() < 80
