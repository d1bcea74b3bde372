"""Box and rounded-box signed distances.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A point array *p*
has shape ``(..., 2)`` and is relative to the box centre; scalar results
have shape ``(...,)``.

Coordinates follow UI convention (y grows downward), so the "top" corners
are the ones with negative y.  Corner radii are ordered
``(top_left, top_right, bottom_right, bottom_left)``.

Formulas are adapted from Inigo Quilez's distance function reference:
https://iquilezles.org/articles/distfunctions2d/
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ._common import _F, as_vec2, as_vec4, clamp, length, mix


def sd_box(p: _F, half_size: Sequence[float] | _F) -> _F:
    """Axis-aligned box with half-extents *half_size*."""
    d = np.abs(p) - as_vec2(half_size)
    return length(np.maximum(d, 0.0)) + np.minimum(np.maximum(d[..., 0], d[..., 1]), 0.0)


def clamp_corner_radii(
    corner_radii: Sequence[float] | _F, half_size: Sequence[float] | _F
) -> _F:
    """Clamp each radius into ``[0, min(half_size)]`` (half-size floored at 0)."""
    limit = np.min(np.maximum(as_vec2(half_size), 0.0))
    return clamp(as_vec4(corner_radii), 0.0, limit)


def select_corner_radius(p: _F, corner_radii: Sequence[float] | _F) -> _F:
    """Pick the radius of the corner whose quadrant contains each point.

    Bottom pair when ``p.y > 0`` else top pair; right value when ``p.x > 0``
    else left value.  Blends with 0/1 weights instead of branching, so every
    point runs the same arithmetic.
    """
    r = as_vec4(corner_radii)
    right = (p[..., 0] > 0.0).astype(float)
    bottom = (p[..., 1] > 0.0).astype(float)
    top_pair = mix(r[0], r[1], right)
    bottom_pair = mix(r[3], r[2], right)
    return mix(top_pair, bottom_pair, bottom)


def sd_rounded_box(
    p: _F,
    half_size: Sequence[float] | _F,
    corner_radii: Sequence[float] | _F,
) -> _F:
    """Rounded box with per-corner radii.

    Radii are used as given; pass them through :func:`clamp_corner_radii`
    when they may be negative or larger than the box.  With all radii at
    zero this is exactly :func:`sd_box`.
    """
    b = as_vec2(half_size)
    radius = select_corner_radius(p, corner_radii)
    corner_to_point = np.abs(p) - b
    q = corner_to_point + radius[..., None]
    return (
        length(np.maximum(q, 0.0))
        + np.minimum(np.maximum(q[..., 0], q[..., 1]), 0.0)
        - radius
    )
