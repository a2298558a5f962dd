import math

import pytest

from geolisp import evaluate_source
from geolisp.renderer import (
    CirclePrimitive,
    LinePrimitive,
    RenderOptions,
    TextPrimitive,
    diagram_bounds,
    point_label,
    render_values,
    value_primitives,
)
from geolisp.values import Angle, Circle, Lineseg, Point, Triangle

RIGHT_TRIANGLE = """
(setq A (point 0 0))
(setq B (point 0 3))
(setq C (point 4 0))
(triangle A B C)
"""


def _render(text, **kwargs):
    result = evaluate_source(text)
    return render_values(result.values, RenderOptions(**kwargs), result.names)


def test_triangle_draws_three_sides():
    diagram = _render(RIGHT_TRIANGLE)
    assert diagram.lines == [
        LinePrimitive(Point(0, 0), Point(0, 3)),
        LinePrimitive(Point(0, 3), Point(4, 0)),
        LinePrimitive(Point(4, 0), Point(0, 0)),
    ]
    assert diagram.circles == []
    assert diagram.texts == []


def test_triangle_labels_use_binding_names():
    diagram = _render(RIGHT_TRIANGLE, label=True)
    assert [t.text for t in diagram.texts] == ['A', 'B', 'C']
    centroid = (4 / 3, 1.0)
    for text in diagram.texts:
        dx, dy = text.direction
        assert math.hypot(dx, dy) == pytest.approx(1.0)
        away = (text.anchor.x - centroid[0], text.anchor.y - centroid[1])
        assert dx * away[0] + dy * away[1] > 0


def test_unnamed_points_are_labelled_by_coordinates():
    assert point_label(Point(1.234, -5), {}) == '(1.23, -5.0)'
    assert point_label(Point(1, 2), {Point(1, 2): 'P'}) == 'P'


def test_point_is_invisible_without_labels():
    assert value_primitives(Point(1, 2)) == []


def test_point_label_and_marker():
    options = RenderOptions(label=True, point_markers=True)
    prims = value_primitives(Point(1, 2), options, {Point(1, 2): 'P'})
    marker, text = prims
    assert isinstance(marker, CirclePrimitive) and marker.filled
    assert marker.center == Point(1, 2)
    assert marker.radius == pytest.approx(options.marker_radius / options.scale)
    assert isinstance(text, TextPrimitive) and text.text == 'P'


def test_markers_need_labels():
    assert value_primitives(Point(1, 2), RenderOptions(point_markers=True)) == []


def test_angle_draws_rays_and_measure():
    angle = Angle(Point(2, 0), Point(0, 0), Point(0, 2))
    prims = value_primitives(angle, RenderOptions(label=True))
    lines = [p for p in prims if isinstance(p, LinePrimitive)]
    (text,) = [p for p in prims if isinstance(p, TextPrimitive)]
    assert lines == [
        LinePrimitive(Point(0, 0), Point(2, 0)),
        LinePrimitive(Point(0, 0), Point(0, 2)),
    ]
    assert text.text == '90.0°'
    assert text.direction == pytest.approx((math.sqrt(0.5), math.sqrt(0.5)))


def test_unlabelled_angle_has_no_text():
    angle = Angle(Point(2, 0), Point(0, 0), Point(0, 2))
    assert len(value_primitives(angle)) == 2


@pytest.mark.parametrize("value", [3, 2.5, -1])
def test_numbers_render_nothing(value):
    assert value_primitives(value, RenderOptions(label=True)) == []


def test_lineseg_and_circle():
    assert value_primitives(Lineseg(Point(0, 0), Point(1, 1))) == [LinePrimitive(Point(0, 0), Point(1, 1))]
    assert value_primitives(Circle(Point(1, 1), 2)) == [CirclePrimitive(Point(1, 1), 2.0)]


def test_unknown_value_is_rejected():
    with pytest.raises(TypeError):
        value_primitives("not a value")


def test_values_render_in_order():
    diagram = render_values(
        [Circle(Point(0, 0), 1), 7, Triangle(Point(0, 0), Point(1, 0), Point(0, 1))],
    )
    kinds = [type(p).__name__ for p in diagram.primitives]
    assert kinds == ['CirclePrimitive', 'LinePrimitive', 'LinePrimitive', 'LinePrimitive']


def test_diagram_bounds_include_circles():
    diagram = render_values([Circle(Point(1, 1), 2), Lineseg(Point(0, 0), Point(5, 0))])
    assert diagram_bounds(diagram) == (-1.0, -1.0, 5.0, 3.0)
    assert diagram_bounds(render_values([])) is None
