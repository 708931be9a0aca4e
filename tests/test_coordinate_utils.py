"""Tests for display -> logical coordinate mapping"""

import math

from PyQt6.QtCore import QPointF, QRectF

from co_drawing.utils.coordinate_utils import CoordinateMapper, is_finite_point


def test_same_size_is_identity():
    mapper = CoordinateMapper(960, 540)
    point = mapper.map_to_logical(123.0, 45.5, QRectF(0, 0, 960, 540))
    assert (point.x(), point.y()) == (123.0, 45.5)


def test_half_size_display_doubles_coordinates():
    mapper = CoordinateMapper(960, 540)
    point = mapper.map_to_logical(100, 50, QRectF(0, 0, 480, 270))
    assert (point.x(), point.y()) == (200.0, 100.0)


def test_scale_factors_are_per_axis():
    mapper = CoordinateMapper(960, 540)
    assert mapper.scale_factors(QRectF(0, 0, 480, 540)) == (2.0, 1.0)


def test_mouse_offsets_ignore_rect_origin():
    mapper = CoordinateMapper(960, 540)
    point = mapper.map_to_logical(10, 10, QRectF(300, 200, 960, 540))
    assert (point.x(), point.y()) == (10.0, 10.0)


def test_touch_subtracts_rect_origin():
    mapper = CoordinateMapper(960, 540)
    point = mapper.map_touch_to_logical(350, 225, QRectF(300, 200, 480, 270))
    assert (point.x(), point.y()) == (100.0, 50.0)


def test_degenerate_rect_gives_nan():
    mapper = CoordinateMapper(960, 540)
    point = mapper.map_to_logical(10, 10, QRectF(0, 0, 0, 270))
    assert math.isnan(point.x())
    assert point.y() == 20.0
    assert not is_finite_point(point)


def test_is_finite_point():
    assert is_finite_point(QPointF(1.0, 2.0))
    assert not is_finite_point(QPointF(math.inf, 0.0))
