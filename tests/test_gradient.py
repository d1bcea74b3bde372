"""Tests for sdfui/gradient.py: parameterisation, interpolation, stops and geometry."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from sdfui import (
    BOTTOM_TO_TOP,
    LEFT_TO_RIGHT,
    RIGHT_TO_LEFT,
    TOP_TO_BOTTOM,
    ColorStop,
    LinearGradientSpec,
    RadialGradientSize,
    RadialGradientSpec,
    gradient_segments,
    gradient_t,
    interpolate_colors,
    linear_gradient_distance,
    linear_gradient_geometry,
    linear_gradient_specs,
    radial_gradient_distance,
    radial_gradient_extents,
    radial_gradient_specs,
    resolve_color_stops,
    three_stop_color,
)

RED = np.array([1.0, 0.0, 0.0, 1.0])
GREEN = np.array([0.0, 1.0, 0.0, 1.0])
BLUE = np.array([0.0, 0.0, 1.0, 1.0])
PURPLE = np.array([0.5, 0.0, 0.5, 1.0])


def _p(*xy) -> np.ndarray:
    return np.array([list(xy)], dtype=float)


def _points(stops):
    return [s.point for s in stops]


# ===========================================================================
# Gradient distances
# ===========================================================================

class TestGradientDistance:
    def test_linear_is_distance_to_line(self):
        d = linear_gradient_distance(_p(3.0, -4.0), (0.0, 0.0), (1.0, 0.0))
        npt.assert_allclose(d, [4.0])

    def test_linear_ignores_position_along_line(self):
        p = np.array([[0.0, 2.0], [10.0, 2.0], [-7.0, 2.0]])
        npt.assert_allclose(linear_gradient_distance(p, (0.0, 0.0), (1.0, 0.0)), 2.0)

    def test_radial_scales_y(self):
        d = radial_gradient_distance(_p(4.0, 3.0), (1.0, 1.0), 2.0)
        npt.assert_allclose(d, [5.0])

    def test_gradient_t(self):
        npt.assert_allclose(gradient_t(np.array([20.0, 25.0, 30.0]), 20.0, 30.0), [0.0, 0.5, 1.0])


# ===========================================================================
# Interpolation
# ===========================================================================

class TestInterpolateColors:
    def test_before_span_not_filled(self):
        t = gradient_t(np.array([-10.0]), 0.0, 100.0)
        npt.assert_allclose(interpolate_colors(t, RED, BLUE, False, False), [np.zeros(4)])

    def test_middle_of_span(self):
        t = gradient_t(np.array([50.0]), 0.0, 100.0)
        npt.assert_allclose(interpolate_colors(t, RED, BLUE, False, False), [PURPLE])

    def test_exact_linear_blend(self):
        t = np.array([0.1, 0.25, 0.7, 0.99])
        expected = RED * (1.0 - t[:, None]) + BLUE * t[:, None]
        npt.assert_allclose(interpolate_colors(t, RED, BLUE), expected, atol=1e-12)

    def test_endpoints_are_inside(self):
        c = interpolate_colors(np.array([0.0, 1.0]), RED, BLUE, False, False)
        npt.assert_allclose(c, [RED, BLUE])

    @pytest.mark.parametrize("fill_before", [True, False])
    @pytest.mark.parametrize("fill_after", [True, False])
    def test_fill_rules(self, fill_before, fill_after):
        c = interpolate_colors(np.array([-0.5, 1.5]), RED, BLUE, fill_before, fill_after)
        npt.assert_allclose(c[0], RED if fill_before else np.zeros(4))
        npt.assert_allclose(c[1], BLUE if fill_after else np.zeros(4))

    def test_shape(self):
        assert interpolate_colors(np.zeros((3, 5)), RED, BLUE).shape == (3, 5, 4)


class TestThreeStopColor:
    def test_default_mid_stop(self):
        d = np.array([25.0, 50.0, 75.0])
        c = three_stop_color(d, 0.0, 100.0, RED, BLUE)
        npt.assert_allclose(c, [[0.75, 0.0, 0.25, 1.0], PURPLE, [0.25, 0.0, 0.75, 1.0]])

    def test_explicit_mid_stop(self):
        d = np.array([0.0, 20.0, 60.0, 100.0])
        c = three_stop_color(d, 0.0, 100.0, RED, BLUE, mid_len=20.0, mid_color=GREEN)
        npt.assert_allclose(c, [RED, GREEN, [0.0, 0.5, 0.5, 1.0], BLUE])

    def test_fill_rules_apply_to_outer_ends(self):
        d = np.array([-5.0, 120.0])
        c = three_stop_color(d, 0.0, 100.0, RED, BLUE, fill_before=False, fill_after=True)
        npt.assert_allclose(c, [np.zeros(4), BLUE])


# ===========================================================================
# Gradient specs
# ===========================================================================

class TestLinearGradientSpec:
    def test_direction_is_normalised(self):
        g = LinearGradientSpec((0.0, 0.0), (3.0, 4.0), 0.0, 1.0, RED, BLUE)
        npt.assert_allclose(g.direction, [0.6, 0.8])

    def test_color_at(self):
        g = LinearGradientSpec((0.0, 50.0), (1.0, 0.0), 0.0, 100.0, RED, BLUE)
        npt.assert_allclose(g.color_at(_p(0.0, 0.0)), [PURPLE])

    def test_empty_span_rejected(self):
        with pytest.raises(ValueError):
            LinearGradientSpec((0.0, 0.0), (1.0, 0.0), 5.0, 5.0, RED, BLUE)

    def test_zero_direction_rejected(self):
        with pytest.raises(ValueError):
            LinearGradientSpec((0.0, 0.0), (0.0, 0.0), 0.0, 1.0, RED, BLUE)


class TestRadialGradientSpec:
    def test_color_at(self):
        g = RadialGradientSpec((0.0, 0.0), 1.0, 0.0, 10.0, RED, BLUE)
        npt.assert_allclose(g.color_at(np.array([[5.0, 0.0], [0.0, -10.0]])), [PURPLE, BLUE])

    def test_empty_span_rejected(self):
        with pytest.raises(ValueError):
            RadialGradientSpec((0.0, 0.0), 1.0, 3.0, 3.0, RED, BLUE)


# ===========================================================================
# Color stops
# ===========================================================================

class TestResolveColorStops:
    def test_evenly_spaced(self):
        stops = resolve_color_stops([ColorStop(RED), ColorStop(GREEN), ColorStop(BLUE)], 100.0)
        npt.assert_allclose(_points(stops), [0.0, 50.0, 100.0])

    def test_auto_stops_between_explicit(self):
        stops = [ColorStop(RED), ColorStop(GREEN, 30.0), ColorStop(BLUE),
                 ColorStop(RED), ColorStop(GREEN)]
        npt.assert_allclose(_points(resolve_color_stops(stops, 100.0)),
                            [0.0, 30.0, 30.0 + 70.0 / 3.0, 30.0 + 140.0 / 3.0, 100.0])

    def test_positions_never_decrease(self):
        stops = [ColorStop(RED, 50.0), ColorStop(GREEN, 20.0), ColorStop(BLUE)]
        npt.assert_allclose(_points(resolve_color_stops(stops, 100.0)), [50.0, 50.0, 100.0])

    def test_negative_first_stop_moves_to_zero(self):
        stops = [ColorStop(RED, -10.0), ColorStop(BLUE)]
        npt.assert_allclose(_points(resolve_color_stops(stops, 40.0)), [0.0, 40.0])

    def test_negative_middle_stop_is_automatic(self):
        stops = [ColorStop(RED, 0.0), ColorStop(GREEN, -5.0), ColorStop(BLUE)]
        npt.assert_allclose(_points(resolve_color_stops(stops, 100.0)), [0.0, 50.0, 100.0])

    def test_negative_last_stop_moves_to_length(self):
        stops = [ColorStop(RED), ColorStop(BLUE, -1.0)]
        npt.assert_allclose(_points(resolve_color_stops(stops, 80.0)), [0.0, 80.0])

    def test_single_stop_is_doubled(self):
        stops = resolve_color_stops([ColorStop(RED)], 100.0)
        assert len(stops) == 2
        npt.assert_allclose(_points(stops), [0.0, 0.0])
        npt.assert_allclose(stops[1].color, RED)

    def test_empty(self):
        assert resolve_color_stops([], 100.0) == []


class TestGradientSegments:
    def test_fill_flags(self):
        stops = resolve_color_stops([ColorStop(RED), ColorStop(GREEN), ColorStop(BLUE)], 100.0)
        segs = gradient_segments(stops)
        assert len(segs) == 2
        assert (segs[0].fill_before, segs[0].fill_after) == (True, False)
        assert (segs[1].fill_before, segs[1].fill_after) == (False, True)
        assert (segs[0].start_len, segs[0].end_len) == (0.0, 50.0)
        npt.assert_allclose(segs[1].end_color, BLUE)

    def test_single_segment_fills_both_ends(self):
        segs = gradient_segments(resolve_color_stops([ColorStop(RED), ColorStop(BLUE)], 10.0))
        assert len(segs) == 1
        assert segs[0].fill_before and segs[0].fill_after

    def test_hard_stop_is_skipped(self):
        stops = [ColorStop(RED, 0.0), ColorStop(GREEN, 50.0),
                 ColorStop(BLUE, 50.0), ColorStop(RED, 100.0)]
        segs = gradient_segments(resolve_color_stops(stops, 100.0))
        assert [(s.start_len, s.end_len) for s in segs] == [(0.0, 50.0), (50.0, 100.0)]
        npt.assert_allclose(segs[1].start_color, BLUE)

    def test_coincident_stops_collapse_to_hard_edge(self):
        segs = gradient_segments([ColorStop(RED, 5.0), ColorStop(BLUE, 5.0)])
        assert len(segs) == 1
        assert segs[0].start_len == 5.0
        assert segs[0].end_len > 5.0
        assert segs[0].fill_before and segs[0].fill_after


# ===========================================================================
# Gradient geometry
# ===========================================================================

class TestLinearGradientGeometry:
    SIZE = (100.0, 60.0)

    @pytest.mark.parametrize("angle, length", [
        (BOTTOM_TO_TOP, 60.0),
        (LEFT_TO_RIGHT, 100.0),
        (TOP_TO_BOTTOM, 60.0),
        (RIGHT_TO_LEFT, 100.0),
        (-LEFT_TO_RIGHT, 100.0),
    ])
    def test_axis_aligned_lengths(self, angle, length):
        _, span = linear_gradient_geometry(angle, self.SIZE)
        npt.assert_allclose(span, length, atol=1e-9)

    def test_start_corner(self):
        focal, _ = linear_gradient_geometry(0.3, self.SIZE)
        npt.assert_allclose(focal, [-50.0, 30.0])
        focal, _ = linear_gradient_geometry(math.pi + 0.3, self.SIZE)
        npt.assert_allclose(focal, [50.0, -30.0])

    def test_node_on_one_side(self):
        angle = 0.7
        focal, span = linear_gradient_geometry(angle, self.SIZE)
        direction = (math.cos(angle), math.sin(angle))
        corners = np.array([[-50.0, -30.0], [50.0, -30.0], [50.0, 30.0], [-50.0, 30.0]])
        d = linear_gradient_distance(corners, focal, direction)
        assert d.max() == pytest.approx(span)
        assert d.min() == pytest.approx(0.0, abs=1e-9)

    def test_specs_cover_node(self):
        specs = linear_gradient_specs(LEFT_TO_RIGHT, self.SIZE, [ColorStop(RED), ColorStop(BLUE)])
        assert len(specs) == 1
        assert specs[0].start_len == 0.0
        npt.assert_allclose(specs[0].end_len, 100.0, atol=1e-9)
        p = np.array([[-50.0, 0.0], [0.0, 10.0], [50.0, -20.0]])
        npt.assert_allclose(specs[0].color_at(p), [RED, PURPLE, BLUE], atol=1e-9)


class TestRadialGradientExtents:
    HALF = (50.0, 30.0)

    def test_centred(self):
        npt.assert_allclose(
            radial_gradient_extents((0.0, 0.0), self.HALF, RadialGradientSize.CLOSEST_SIDE, True),
            [30.0, 30.0])
        npt.assert_allclose(
            radial_gradient_extents((0.0, 0.0), self.HALF, RadialGradientSize.CLOSEST_SIDE, False),
            [50.0, 30.0])
        npt.assert_allclose(
            radial_gradient_extents((0.0, 0.0), self.HALF, RadialGradientSize.FARTHEST_CORNER),
            [math.hypot(50.0, 30.0)] * 2)

    def test_off_centre(self):
        c = (10.0, 0.0)
        npt.assert_allclose(
            radial_gradient_extents(c, self.HALF, RadialGradientSize.CLOSEST_SIDE, False),
            [40.0, 30.0])
        npt.assert_allclose(
            radial_gradient_extents(c, self.HALF, RadialGradientSize.FARTHEST_SIDE, False),
            [60.0, 30.0])
        npt.assert_allclose(
            radial_gradient_extents(c, self.HALF, RadialGradientSize.CLOSEST_CORNER, True),
            [50.0, 50.0])
        npt.assert_allclose(
            radial_gradient_extents(c, self.HALF, RadialGradientSize.FARTHEST_SIDE, True),
            [60.0, 60.0])

    def test_elliptical_specs(self):
        specs = radial_gradient_specs((0.0, 0.0), self.HALF, [ColorStop(RED), ColorStop(BLUE)],
                                      RadialGradientSize.CLOSEST_SIDE, circle=False)
        assert len(specs) == 1
        npt.assert_allclose(specs[0].radius_ratio, 50.0 / 30.0)
        npt.assert_allclose(specs[0].end_len, 50.0)
        p = np.array([[50.0, 0.0], [0.0, 30.0], [25.0, 0.0]])
        npt.assert_allclose(specs[0].color_at(p), [BLUE, BLUE, PURPLE], atol=1e-9)

    def test_explicit_ellipse(self):
        specs = radial_gradient_specs((0.0, 0.0), self.HALF, [ColorStop(RED), ColorStop(BLUE)],
                                      extents=(40.0, 20.0))
        npt.assert_allclose(specs[0].radius_ratio, 2.0)
        npt.assert_allclose(specs[0].end_len, 40.0)
        p = np.array([[40.0, 0.0], [0.0, 20.0], [0.0, 10.0]])
        npt.assert_allclose(specs[0].color_at(p), [BLUE, BLUE, PURPLE], atol=1e-9)

    def test_explicit_circle_radius(self):
        specs = radial_gradient_specs((10.0, 0.0), self.HALF, [ColorStop(RED), ColorStop(BLUE)],
                                      RadialGradientSize.CLOSEST_SIDE, circle=False, extents=25.0)
        npt.assert_allclose(specs[0].radius_ratio, 1.0)
        npt.assert_allclose(specs[0].end_len, 25.0)

    def test_negative_extents_rejected(self):
        with pytest.raises(ValueError):
            radial_gradient_specs((0.0, 0.0), self.HALF, [ColorStop(RED)], extents=(-1.0, 5.0))
