"""Dashed outlines: arc-length along a rounded rectangle's perimeter.

The perimeter is walked clockwise on screen (y grows downward) starting
from the middle of the left edge, one quadrant at a time::

    0 = top-left, 1 = top-right, 2 = bottom-right, 3 = bottom-left

Inside a quadrant the path is a straight leg, a quarter arc of the
quadrant's corner radius, then a second straight leg ending at the middle
of the next edge.  A sample's arc-length position is the length of the
preceding quadrants plus its position along the current one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ._common import _F, as_vec2, mix
from .primitives import clamp_corner_radii

logger = logging.getLogger(__name__)

__all__ = [
    "DashSpec",
    "quadrant_index",
    "quadrant_lengths",
    "perimeter_length",
    "perimeter_position",
    "rescale_dashes",
    "dash_mask",
]


@dataclass(frozen=True)
class DashSpec:
    """On/off lengths of a dashed outline, measured along the perimeter."""

    dash_length: float
    break_length: float

    def __post_init__(self) -> None:
        if self.dash_length < 0.0 or self.break_length < 0.0:
            raise ValueError(
                f"dash and break lengths must be non-negative, got "
                f"({self.dash_length}, {self.break_length})"
            )
        if self.dash_length + self.break_length <= 0.0:
            raise ValueError("dash_length + break_length must be positive")

    @property
    def period(self) -> float:
        return self.dash_length + self.break_length

    def fitted(self, perimeter: float) -> DashSpec:
        """Copy rescaled so a whole number of periods tiles *perimeter*."""
        dash, brk, _ = rescale_dashes(perimeter, self.dash_length, self.break_length)
        return DashSpec(dash, brk)


def quadrant_index(p: _F) -> _F:
    """Quadrant of each point: 0 TL, 1 TR, 2 BR, 3 BL (integer array)."""
    right = (p[..., 0] > 0.0).astype(int)
    bottom = (p[..., 1] > 0.0).astype(int)
    return right + bottom * (3 - 2 * right)


def quadrant_lengths(
    half_size: Sequence[float] | _F, corner_radii: Sequence[float] | _F
) -> _F:
    """Path length of each quadrant: two straight legs plus a quarter arc."""
    half = as_vec2(half_size)
    r = clamp_corner_radii(corner_radii, half)
    return (half[0] - r) + (half[1] - r) + r * (0.5 * math.pi)


def perimeter_length(
    half_size: Sequence[float] | _F, corner_radii: Sequence[float] | _F
) -> float:
    return float(np.sum(quadrant_lengths(half_size, corner_radii)))


def perimeter_position(
    p: _F,
    half_size: Sequence[float] | _F,
    corner_radii: Sequence[float] | _F,
) -> _F:
    """Arc-length position of each point projected onto the perimeter.

    Points in a rounded-corner region are placed by their angle about the
    arc centre; the rest by their distance along the nearer straight edge.
    """
    half = as_vec2(half_size)
    radii = clamp_corner_radii(corner_radii, half)
    lengths = quadrant_lengths(half, radii)
    offsets = np.concatenate([[0.0], np.cumsum(lengths)[:3]])

    q = quadrant_index(p)
    r = radii[q]

    # Fold every quadrant onto one frame: c1 is the axis normal to the first
    # leg, c2 runs along it.
    odd = (q % 2).astype(float)
    a = np.abs(p)
    c1 = mix(a[..., 0], a[..., 1], odd)
    c2 = mix(a[..., 1], a[..., 0], odd)
    h1 = mix(half[0], half[1], odd)
    h2 = mix(half[1], half[0], odd)

    first_leg = h2 - r
    second_leg = h1 - r
    dx = c1 - second_leg
    dy = c2 - first_leg

    arc = first_leg + r * np.arctan2(dy, dx)
    along_first = np.minimum(c2, first_leg)
    along_second = first_leg + r * (0.5 * math.pi) + np.clip(second_leg - c1, 0.0, second_leg)
    straight = np.where(h1 - c1 <= h2 - c2, along_first, along_second)
    position = np.where((dx > 0.0) & (dy > 0.0), arc, straight)
    return offsets[q] + position


def rescale_dashes(
    perimeter: float, dash_length: float, break_length: float
) -> tuple[float, float, int]:
    """Stretch dash and break so ``segments`` whole periods fill *perimeter*.

    ``segments = max(1, floor(perimeter / period))``; both lengths are scaled
    by ``perimeter / (segments * period)``.  A non-positive perimeter leaves
    the lengths unchanged.
    """
    period = dash_length + break_length
    if perimeter <= 0.0:
        return dash_length, break_length, 1
    segments = max(1, math.floor(perimeter / period))
    scale = perimeter / (segments * period)
    logger.debug("dash pattern: %d segments, scale %.6f", segments, scale)
    return dash_length * scale, break_length * scale, segments


def dash_mask(t: _F, dash_length: float, break_length: float) -> _F:
    """True where arc-length *t* falls on a dash (``t mod period <= dash``)."""
    return np.mod(t, dash_length + break_length) <= dash_length
