"""Linear and radial gradients.

A gradient maps each sample to a scalar *gradient distance* (perpendicular
distance from a line, or elliptical radius from a centre), normalises it
against a ``[start_len, end_len]`` span and interpolates between two
colors.  Multi-stop gradients are split into consecutive two-stop segments
(:func:`gradient_segments`); only the first segment fills before its span
and only the last fills after it, so stacking the segments with
:func:`~sdfui.shading.blend_over` reproduces the whole ramp.

Colors are straight-alpha RGBA arrays of shape ``(..., 4)``.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

from ._common import TRANSPARENT, _F, as_vec2, as_vec4, dot, length, mix, safe_div

logger = logging.getLogger(__name__)

__all__ = [
    "BOTTOM_TO_TOP", "LEFT_TO_RIGHT", "TOP_TO_BOTTOM", "RIGHT_TO_LEFT",
    "linear_gradient_distance",
    "radial_gradient_distance",
    "gradient_t",
    "interpolate_colors",
    "three_stop_color",
    "LinearGradientSpec",
    "RadialGradientSpec",
    "ColorStop",
    "GradientSegment",
    "resolve_color_stops",
    "gradient_segments",
    "linear_gradient_geometry",
    "RadialGradientSize",
    "radial_gradient_extents",
    "linear_gradient_specs",
    "radial_gradient_specs",
]

# Named angles for linear gradients (radians, y grows downward).
BOTTOM_TO_TOP = 0.0
LEFT_TO_RIGHT = 0.5 * math.pi
TOP_TO_BOTTOM = math.pi
RIGHT_TO_LEFT = 1.5 * math.pi

# Span given to a gradient whose stops all coincide; renders as a hard edge.
_HARD_STOP_SPAN = 1e-6


# ===========================================================================
# Parameterisation
# ===========================================================================

def linear_gradient_distance(
    p: _F, focal_point: Sequence[float] | _F, direction: Sequence[float] | _F
) -> _F:
    """Distance from *p* to the line through *focal_point* along unit *direction*."""
    o = as_vec2(focal_point)
    d = as_vec2(direction)
    projection = o + d * dot(p - o, d)[..., None]
    return length(p - projection)


def radial_gradient_distance(
    p: _F, center: Sequence[float] | _F, radius_ratio: float
) -> _F:
    """Elliptical radius of *p* about *center*, y scaled by *radius_ratio*."""
    return length((p - as_vec2(center)) * np.array([1.0, radius_ratio]))


def gradient_t(distance: _F, start_len: float, end_len: float) -> _F:
    """Normalise *distance* so *start_len* maps to 0 and *end_len* to 1.

    ``start_len == end_len`` is a caller precondition violation; the result
    is then non-finite.
    """
    return (np.asarray(distance, dtype=float) - start_len) / (end_len - start_len)


def interpolate_colors(
    t: _F,
    start_color: Sequence[float] | _F,
    end_color: Sequence[float] | _F,
    fill_before: bool = True,
    fill_after: bool = True,
) -> _F:
    """Color at gradient parameter *t*.

    ``t < 0`` gives *start_color* if *fill_before* else transparent;
    ``t > 1`` gives *end_color* if *fill_after* else transparent; the closed
    interval ``[0, 1]`` is the exact linear blend.
    """
    t = np.asarray(t, dtype=float)[..., None]
    start = as_vec4(start_color)
    end = as_vec4(end_color)
    before = start if fill_before else TRANSPARENT
    after = end if fill_after else TRANSPARENT
    inside = mix(start, end, t)
    return np.where(t < 0.0, before, np.where(t > 1.0, after, inside))


def three_stop_color(
    distance: _F,
    start_len: float,
    end_len: float,
    start_color: Sequence[float] | _F,
    end_color: Sequence[float] | _F,
    fill_before: bool = True,
    fill_after: bool = True,
    mid_len: float | None = None,
    mid_color: Sequence[float] | _F | None = None,
) -> _F:
    """Piecewise blend over ``[start, mid]`` and ``[mid, end]``.

    *mid_len* defaults to the middle of the span and *mid_color* to the
    average of the two end colors.  *mid_len* must differ from both ends.
    """
    if mid_len is None:
        mid_len = 0.5 * (start_len + end_len)
    if mid_color is None:
        mid_color = 0.5 * (as_vec4(start_color) + as_vec4(end_color))
    t_first = gradient_t(distance, start_len, mid_len)
    first = interpolate_colors(t_first, start_color, mid_color, fill_before, True)
    second = interpolate_colors(
        gradient_t(distance, mid_len, end_len), mid_color, end_color, True, fill_after
    )
    return np.where((t_first <= 1.0)[..., None], first, second)


# ===========================================================================
# Gradient specs
# ===========================================================================

def _check_span(start_len: float, end_len: float) -> None:
    if start_len == end_len:
        raise ValueError(
            f"gradient span is empty: start_len == end_len == {start_len}"
        )


@dataclass(frozen=True, eq=False)
class LinearGradientSpec:
    """One two-color linear gradient segment."""

    focal_point: _F
    direction: _F
    start_len: float
    end_len: float
    start_color: _F
    end_color: _F
    fill_before: bool = True
    fill_after: bool = True

    def __post_init__(self) -> None:
        _check_span(self.start_len, self.end_len)
        direction = as_vec2(self.direction)
        norm = float(np.hypot(*direction))
        if norm == 0.0:
            raise ValueError("gradient direction must be non-zero")
        object.__setattr__(self, "focal_point", as_vec2(self.focal_point))
        object.__setattr__(self, "direction", direction / norm)
        object.__setattr__(self, "start_color", as_vec4(self.start_color))
        object.__setattr__(self, "end_color", as_vec4(self.end_color))

    def distance(self, p: _F) -> _F:
        return linear_gradient_distance(p, self.focal_point, self.direction)

    def color_at(self, p: _F) -> _F:
        t = gradient_t(self.distance(p), self.start_len, self.end_len)
        return interpolate_colors(
            t, self.start_color, self.end_color, self.fill_before, self.fill_after
        )


@dataclass(frozen=True, eq=False)
class RadialGradientSpec:
    """One two-color radial gradient segment."""

    center: _F
    radius_ratio: float
    start_len: float
    end_len: float
    start_color: _F
    end_color: _F
    fill_before: bool = True
    fill_after: bool = True

    def __post_init__(self) -> None:
        _check_span(self.start_len, self.end_len)
        object.__setattr__(self, "center", as_vec2(self.center))
        object.__setattr__(self, "start_color", as_vec4(self.start_color))
        object.__setattr__(self, "end_color", as_vec4(self.end_color))

    def distance(self, p: _F) -> _F:
        return radial_gradient_distance(p, self.center, self.radius_ratio)

    def color_at(self, p: _F) -> _F:
        t = gradient_t(self.distance(p), self.start_len, self.end_len)
        return interpolate_colors(
            t, self.start_color, self.end_color, self.fill_before, self.fill_after
        )


# ===========================================================================
# Color stops
# ===========================================================================

@dataclass(frozen=True, eq=False)
class ColorStop:
    """A gradient stop; ``point=None`` is positioned automatically."""

    color: _F
    point: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_vec4(self.color))


class GradientSegment(NamedTuple):
    start_color: _F
    start_len: float
    end_color: _F
    end_len: float
    fill_before: bool
    fill_after: bool


def resolve_color_stops(stops: Sequence[ColorStop], length: float) -> list[ColorStop]:
    """Give every stop a concrete position along a gradient of *length*.

    A negative position counts as automatic.  The first stop defaults to 0
    and the last to *length*; explicit positions are raised so they never
    decrease; runs of automatic stops are spread evenly between their
    neighbours.  A lone stop is doubled.
    """
    if not stops:
        return []

    points: list[float | None] = [
        None if s.point is None or s.point < 0.0 else float(s.point) for s in stops
    ]
    colors = [s.color for s in stops]
    if points[0] is None:
        points[0] = 0.0
    if len(stops) == 1:
        return [ColorStop(colors[0], points[0]), ColorStop(colors[0], points[0])]
    if points[-1] is None:
        points[-1] = length

    current = 0.0
    for i, point in enumerate(points):
        if point is not None:
            current = max(point, current)
            points[i] = current

    i = 1
    while i < len(points) - 1:
        if points[i] is not None:
            i += 1
            continue
        j = i + 1
        while points[j] is None:
            j += 1
        step = (points[j] - points[i - 1]) / (1 + j - i)
        value = points[i - 1]
        while i < j:
            value += step
            points[i] = value
            i += 1

    return [ColorStop(c, p) for c, p in zip(colors, points)]


def gradient_segments(stops: Sequence[ColorStop]) -> list[GradientSegment]:
    """Split resolved *stops* into two-stop segments.

    Zero-length segments (hard stops) are dropped; if nothing is left the
    gradient collapses to a hard edge at the shared position.
    """
    pairs = []
    for start, end in zip(stops, stops[1:]):
        if start.point == end.point:
            logger.debug("skipping zero-length gradient segment at %s", start.point)
            continue
        pairs.append((start, end))

    if not pairs:
        if not stops:
            return []
        first, last = stops[0], stops[-1]
        return [
            GradientSegment(first.color, first.point, last.color,
                            first.point + _HARD_STOP_SPAN, True, True)
        ]

    last_index = len(pairs) - 1
    return [
        GradientSegment(start.color, start.point, end.color, end.point,
                        i == 0, i == last_index)
        for i, (start, end) in enumerate(pairs)
    ]


# ===========================================================================
# Gradient geometry
# ===========================================================================

def linear_gradient_geometry(angle: float, size: Sequence[float] | _F) -> tuple[_F, float]:
    """Focal point and total length of a linear gradient at *angle* over a node.

    The gradient line runs along ``(cos angle, sin angle)`` through the node
    corner from which the whole node lies on one side; the length is twice
    the line's distance from the node centre.  Positions are relative to the
    node centre.
    """
    half = 0.5 * as_vec2(size)
    direction = np.array([math.cos(angle), math.sin(angle)])
    quadrant = math.floor((angle % (2.0 * math.pi)) / (0.5 * math.pi) + 1e-9) % 4
    corner = {
        0: (-1.0, 1.0),
        1: (-1.0, -1.0),
        2: (1.0, -1.0),
    }.get(quadrant, (1.0, 1.0))
    focal_point = np.array(corner) * half
    span = 2.0 * float(linear_gradient_distance(np.zeros(2), focal_point, direction))
    return focal_point, span


class RadialGradientSize(enum.Enum):
    """Where a radial gradient's ending shape meets the node."""

    CLOSEST_SIDE = "closest_side"
    CLOSEST_CORNER = "closest_corner"
    FARTHEST_SIDE = "farthest_side"
    FARTHEST_CORNER = "farthest_corner"


def radial_gradient_extents(
    center: Sequence[float] | _F,
    half_size: Sequence[float] | _F,
    size: RadialGradientSize = RadialGradientSize.FARTHEST_CORNER,
    circle: bool = True,
) -> _F:
    """Horizontal and vertical radii of the ending shape.

    *center* is relative to the node centre; the node spans
    ``[-half_size, half_size]``.
    """
    c = as_vec2(center)
    half = as_vec2(half_size)
    to_min = np.abs(c + half)
    to_max = np.abs(c - half)
    near = np.minimum(to_min, to_max)
    far = np.maximum(to_min, to_max)

    if size is RadialGradientSize.CLOSEST_SIDE:
        return np.full(2, near.min()) if circle else near
    if size is RadialGradientSize.FARTHEST_SIDE:
        return np.full(2, far.max()) if circle else far
    offset = near if size is RadialGradientSize.CLOSEST_CORNER else far
    return np.full(2, float(np.hypot(*offset))) if circle else offset


def linear_gradient_specs(
    angle: float,
    size: Sequence[float] | _F,
    stops: Sequence[ColorStop],
) -> list[LinearGradientSpec]:
    """Two-stop linear specs for a multi-stop gradient across a node of *size*."""
    focal_point, total = linear_gradient_geometry(angle, size)
    direction = np.array([math.cos(angle), math.sin(angle)])
    return [
        LinearGradientSpec(focal_point, direction, seg.start_len, seg.end_len,
                           seg.start_color, seg.end_color, seg.fill_before, seg.fill_after)
        for seg in gradient_segments(resolve_color_stops(stops, total))
    ]


def radial_gradient_specs(
    center: Sequence[float] | _F,
    half_size: Sequence[float] | _F,
    stops: Sequence[ColorStop],
    size: RadialGradientSize = RadialGradientSize.FARTHEST_CORNER,
    circle: bool = True,
    extents: float | Sequence[float] | None = None,
) -> list[RadialGradientSpec]:
    """Two-stop radial specs; stop positions are measured along the x radius.

    *extents* gives the ending shape directly, either a circle radius or an
    ``(rx, ry)`` ellipse, and then *size* and *circle* are ignored.
    """
    if extents is None:
        extents = radial_gradient_extents(center, half_size, size, circle)
    else:
        extents = np.broadcast_to(np.asarray(extents, dtype=float), (2,))
        if (extents < 0.0).any():
            raise ValueError(f"radial gradient extents must be non-negative, got {extents}")
    ratio = float(safe_div(extents[0], extents[1]))
    return [
        RadialGradientSpec(center, ratio, seg.start_len, seg.end_len,
                           seg.start_color, seg.end_color, seg.fill_before, seg.fill_after)
        for seg in gradient_segments(resolve_color_stops(stops, float(extents[0])))
    ]
