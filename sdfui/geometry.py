"""Node geometry, inset border boxes and the distance compositor.

A UI node is a rounded rectangle with four corner radii and four per-edge
inset widths.  The insets carve an inner rounded box out of the node; the
region between the two boundaries is the border band.  :func:`node_distance`
is the one entry point that turns a node and a sample array into the pair
of signed distances every shader consumes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

import numpy as np

from ._common import _F, as_vec2, as_vec4, clamp, mix, op_intersection, op_subtraction
from .primitives import clamp_corner_radii, sd_rounded_box

__all__ = [
    "Box",
    "NodeGeometry",
    "Distance",
    "BorderRadiusPolicy",
    "inset_box",
    "inner_corner_radii",
    "sd_inset_rounded_box_clamped",
    "sd_inset_rounded_box",
    "node_distance",
]


# ===========================================================================
# Value types
# ===========================================================================

@dataclass(frozen=True, eq=False)
class Box:
    """Axis-aligned box given by its *center* and *half_size*."""

    center: _F = field(default_factory=lambda: np.zeros(2))
    half_size: _F = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec2(self.center))
        object.__setattr__(self, "half_size", as_vec2(self.half_size))


@dataclass(frozen=True, eq=False)
class NodeGeometry:
    """One rounded rectangle and its border band.

    Parameters
    ----------
    size:
        Full width and height of the node.
    corner_radii:
        ``(top_left, top_right, bottom_right, bottom_left)``.  Out-of-range
        values are accepted and clamped on use.
    inset:
        Border widths ``(left, top, right, bottom)``.  May be asymmetric and
        may exceed the half-size.
    """

    size: _F
    corner_radii: _F = field(default_factory=lambda: np.zeros(4))
    inset: _F = field(default_factory=lambda: np.zeros(4))

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", as_vec2(self.size))
        object.__setattr__(self, "corner_radii", as_vec4(self.corner_radii))
        object.__setattr__(self, "inset", as_vec4(self.inset))

    @property
    def half_size(self) -> _F:
        return 0.5 * self.size

    @property
    def clamped_radii(self) -> _F:
        """Corner radii clamped into ``[0, min(half_size)]``."""
        return clamp_corner_radii(self.corner_radii, self.half_size)

    @property
    def box(self) -> Box:
        return Box(np.zeros(2), self.half_size)

    @property
    def inner_box(self) -> Box:
        return inset_box(self.box, self.inset)


class Distance(NamedTuple):
    """Signed distances to the outer edge, the border band and the inner box."""

    edge: _F
    border: _F
    inner: _F

    def band_at_edge(self, tolerance: float = 1e-6) -> _F:
        """Where the border band has positive width along the nearest edge.

        Beyond the outer edge the inner box trails the edge by the local
        inset, so a flush inner box means that side has no border.
        """
        return self.inner > self.edge + tolerance


class BorderRadiusPolicy(enum.Enum):
    """How the inner (border-adjusted) corner radii are derived."""

    #: Canonical: degenerate-corner rule plus clamp into the inner box.
    CLAMPED = "clamped"
    #: :attr:`CLAMPED` plus the seam correction for unequal adjacent insets.
    CLAMPED_WITH_SEAM_CORRECTION = "clamped_with_seam_correction"
    #: Cheap approximation, see :func:`sd_inset_rounded_box`.
    UNCLAMPED = "unclamped"


# ===========================================================================
# Inset box
# ===========================================================================

def inset_box(box: Box, inset: Sequence[float] | _F) -> Box:
    """Shrink *box* by per-edge *inset* ``(left, top, right, bottom)``.

    The half-size loses half of each axis' total inset; the centre moves
    away from the thicker edge so the inner box stays flush with every
    inset.  The half-size may come out negative; callers floor it.
    """
    left, top, right, bottom = as_vec4(inset)
    half_size = box.half_size - 0.5 * np.array([left + right, top + bottom])
    center = box.center + 0.5 * np.array([left - right, top - bottom])
    return Box(center, half_size)


def _adjacent_insets(inset: Sequence[float] | _F) -> tuple[_F, _F]:
    """Horizontal and vertical inset next to each corner, ordered TL, TR, BR, BL."""
    left, top, right, bottom = as_vec4(inset)
    return np.array([left, right, right, left]), np.array([top, top, bottom, bottom])


def inner_corner_radii(
    corner_radii: Sequence[float] | _F,
    inset: Sequence[float] | _F,
    inner_half_size: Sequence[float] | _F,
) -> _F:
    """Corner radii of the inner box, clamped.

    Each radius loses the larger of its two adjacent insets.  When those
    insets straddle zero (one ``<= 0``, the other ``> 0``) and sum to
    ``<= 0`` the inner corner is exactly square.  Results are clamped into
    ``[0, min(inner_half_size)]`` with the half-size floored at zero.
    """
    r = as_vec4(corner_radii)
    a, b = _adjacent_insets(inset)
    reduced = r - np.maximum(a, b)
    straddle = ((a <= 0.0) & (b > 0.0)) | ((b <= 0.0) & (a > 0.0))
    reduced = np.where(straddle & (a + b <= 0.0), 0.0, reduced)
    limit = np.min(np.maximum(as_vec2(inner_half_size), 0.0))
    return clamp(reduced, 0.0, limit)


# ===========================================================================
# Inner distances
# ===========================================================================

def sd_inset_rounded_box_clamped(
    p: _F,
    half_size: Sequence[float] | _F,
    corner_radii: Sequence[float] | _F,
    inset: Sequence[float] | _F,
) -> _F:
    """Signed distance to the inner box of a node with border *inset*.

    Outer radii are clamped to the outer box, then reduced and clamped by
    :func:`inner_corner_radii`.  An inset that swallows the whole node gives
    a zero-size inner box, never a negative one.
    """
    outer = Box(np.zeros(2), half_size)
    inner = inset_box(outer, inset)
    inner_half = np.maximum(inner.half_size, 0.0)
    radii = inner_corner_radii(clamp_corner_radii(corner_radii, outer.half_size), inset, inner_half)
    return sd_rounded_box(p - inner.center, inner_half, radii)


def sd_inset_rounded_box(
    p: _F,
    half_size: Sequence[float] | _F,
    corner_radii: Sequence[float] | _F,
    inset: Sequence[float] | _F,
) -> _F:
    """Unclamped approximation of :func:`sd_inset_rounded_box_clamped`.

    Radii are only reduced by the larger adjacent inset and floored at zero;
    there is no upper clamp and no square-corner rule.  Exact for symmetric
    insets whose inner radius fits the inner box.  Otherwise an inner corner
    can overshoot its box by up to ``r - min(inner_half_size)`` and a
    straddling corner keeps a spurious rounding.
    """
    outer = Box(np.zeros(2), half_size)
    inner = inset_box(outer, inset)
    inner_half = np.maximum(inner.half_size, 0.0)
    a, b = _adjacent_insets(inset)
    radii = np.maximum(clamp_corner_radii(corner_radii, outer.half_size) - np.maximum(a, b), 0.0)
    return sd_rounded_box(p - inner.center, inner_half, radii)


def _seam_corrected(p: _F, internal: _F, external: _F, inset: _F) -> _F:
    """Keep the border at least ``min(inset_x, inset_y)`` thick in lopsided quadrants."""
    left, top, right, bottom = inset
    right_side = (p[..., 0] > 0.0).astype(float)
    lower_side = (p[..., 1] > 0.0).astype(float)
    inset_x = mix(left, right, right_side)
    inset_y = mix(top, bottom, lower_side)
    tightened = op_intersection(internal, external + np.minimum(inset_x, inset_y))
    unequal = (inset_x != inset_y).astype(float)
    return mix(internal, tightened, unequal)


# ===========================================================================
# Compositor
# ===========================================================================

def node_distance(
    p: _F,
    geometry: NodeGeometry,
    policy: BorderRadiusPolicy = BorderRadiusPolicy.CLAMPED_WITH_SEAM_CORRECTION,
) -> Distance:
    """Edge and border-band distances of *geometry* at points *p*.

    ``border = max(edge, -inner)``: the band is the outer box minus the
    inner box, so it is negative exactly where the border colour applies.
    """
    half_size = geometry.half_size
    radii = geometry.clamped_radii
    edge = sd_rounded_box(p, half_size, radii)
    if policy is BorderRadiusPolicy.UNCLAMPED:
        internal = sd_inset_rounded_box(p, half_size, radii, geometry.inset)
    else:
        internal = sd_inset_rounded_box_clamped(p, half_size, radii, geometry.inset)
    if policy is BorderRadiusPolicy.CLAMPED_WITH_SEAM_CORRECTION:
        internal = _seam_corrected(p, internal, edge, geometry.inset)
    return Distance(edge, op_subtraction(internal, edge), internal)
