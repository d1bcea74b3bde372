"""Gaussian-blurred rounded boxes (soft drop shadows).

The blurred coverage of a rounded box is a 2-D convolution with a Gaussian.
Along x the box, at a fixed height, is a single interval, whose blurred
coverage has a closed form as a difference of two error functions.  Along
y the integral is taken numerically: a few midpoint strips across ±3 sigma,
each weighted by the Gaussian.

Reference: Evan Wallace, "Fast Rounded Rectangle Shadows".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ._common import _F, as_vec2, as_vec4, clamp
from .config import MIN_SIGMA
from .geometry import NodeGeometry
from .primitives import clamp_corner_radii, select_corner_radius

__all__ = [
    "erf",
    "gaussian",
    "rounded_box_shadow",
    "BoxShadow",
]


def erf(x: _F) -> _F:
    """Vectorised error function (Abramowitz & Stegun 7.1.27, |error| < 5e-4)."""
    x = np.asarray(x, dtype=float)
    s = np.sign(x)
    a = np.abs(x)
    r1 = 1.0 + (0.278393 + (0.230389 + (0.000972 + 0.078108 * a) * a) * a) * a
    r2 = r1 * r1
    return s - s / (r2 * r2)


def gaussian(x: _F, sigma: float) -> _F:
    """Normal probability density with standard deviation *sigma*."""
    return np.exp(-(x * x) / (2.0 * sigma * sigma)) / (math.sqrt(2.0 * math.pi) * sigma)


def _blurred_row(x: _F, y: _F, sigma: float, corner: _F, half_size: _F) -> _F:
    """Blurred coverage along x of the box's horizontal slice at height *y*."""
    d = np.minimum(half_size[1] - corner - np.abs(y), 0.0)
    c = half_size[0] - corner + np.sqrt(np.maximum(0.0, corner * corner - d * d))
    scale = math.sqrt(0.5) / sigma
    lower = 0.5 + 0.5 * erf((x - c) * scale)
    upper = 0.5 + 0.5 * erf((x + c) * scale)
    return upper - lower


def rounded_box_shadow(
    p: _F,
    half_size: Sequence[float] | _F,
    corner_radii: Sequence[float] | _F,
    sigma: float,
    samples: int = 4,
    min_sigma: float = MIN_SIGMA,
) -> _F:
    """Coverage in ``[0, 1]`` of a rounded box blurred by a Gaussian of *sigma*.

    *p* is relative to the box centre.  *sigma* is floored at *min_sigma*, so
    a zero blur gives a (numerically) sharp box instead of a division by zero.
    """
    sigma = max(float(sigma), min_sigma)
    half = np.maximum(as_vec2(half_size), 0.0)
    corner = select_corner_radius(p, clamp_corner_radii(corner_radii, half))
    x = p[..., 0]
    y = p[..., 1]

    start = clamp(-3.0 * sigma, y - half[1], y + half[1])
    end = clamp(3.0 * sigma, y - half[1], y + half[1])
    step = (end - start) / samples
    offset = start + 0.5 * step

    value = np.zeros_like(x, dtype=float)
    for _ in range(samples):
        value += _blurred_row(x, y - offset, sigma, corner, half) * gaussian(offset, sigma) * step
        offset = offset + step
    return value


@dataclass(frozen=True, eq=False)
class BoxShadow:
    """Drop shadow cast by a node.

    The shadow box is the node grown by *spread_radius* on every side
    (rounded corners grow with it, square ones stay square) and moved by
    ``(x_offset, y_offset)``.
    *blur_radius* is the Gaussian sigma.
    """

    color: _F = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))
    x_offset: float = 0.0
    y_offset: float = 0.0
    spread_radius: float = 0.0
    blur_radius: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_vec4(self.color))

    @property
    def offset(self) -> _F:
        return np.array([self.x_offset, self.y_offset])

    def shadow_geometry(self, node: NodeGeometry) -> NodeGeometry:
        """Geometry of the shadow box, relative to its own centre."""
        size = np.maximum(node.size + 2.0 * self.spread_radius, 0.0)
        radii = node.clamped_radii
        radii = np.where(radii > 0.0, radii + self.spread_radius, 0.0)
        return NodeGeometry(size, clamp_corner_radii(radii, 0.5 * size))

    def coverage(self, p: _F, node: NodeGeometry, samples: int = 4,
                 min_sigma: float = MIN_SIGMA) -> _F:
        """Shadow coverage at *p*, relative to the casting node's centre."""
        geometry = self.shadow_geometry(node)
        return rounded_box_shadow(
            p - self.offset, geometry.half_size, geometry.corner_radii,
            self.blur_radius, samples, min_sigma,
        )
