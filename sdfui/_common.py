"""Shared vector and scalar helpers used across sdfui.

This module provides:

* **Type alias**: :data:`_F`
* **Vector constructors**: :func:`vec2`, :func:`as_vec2`, :func:`as_vec4`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`clamp`,
  :func:`saturate`, :func:`mix`, :func:`smoothstep`, :func:`safe_div`
* **Set operators** on signed distances: :func:`op_intersection`,
  :func:`op_subtraction`

Names mirror the shading-language builtins they stand in for, so the
distance code reads the same as the per-pixel formulas it evaluates.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

TRANSPARENT: _F = np.zeros(4)
TRANSPARENT.flags.writeable = False

__all__ = [
    "_F",
    "TRANSPARENT",
    "vec2", "as_vec2", "as_vec4",
    "length", "dot", "clamp", "saturate", "mix", "smoothstep", "safe_div",
    "op_intersection", "op_subtraction",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


def as_vec2(v: float | Sequence[float] | _F) -> _F:
    """Coerce a scalar or pair into a float ``(2,)`` array."""
    return np.broadcast_to(np.asarray(v, dtype=float), (2,)).copy()


def as_vec4(v: float | Sequence[float] | _F) -> _F:
    """Coerce a scalar or 4-sequence into a float ``(4,)`` array."""
    return np.broadcast_to(np.asarray(v, dtype=float), (4,)).copy()


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def saturate(x: _F) -> _F:
    """Clamp *x* element-wise to ``[0, 1]``."""
    return clamp(x, 0.0, 1.0)


def mix(a: _F, b: _F, t: _F) -> _F:
    """Linear blend ``a * (1 - t) + b * t``."""
    return a * (1.0 - t) + b * t


def smoothstep(edge0: float, edge1: float, x: _F) -> _F:
    """Hermite step from 0 at *edge0* to 1 at *edge1*."""
    t = saturate((x - edge0) / (edge1 - edge0))
    return t * t * (3.0 - 2.0 * t)


def safe_div(n: _F, d: _F, eps: float = 1e-12) -> _F:
    """Division that avoids exact zero in the denominator."""
    return n / np.where(np.abs(d) < eps, np.sign(d) * eps + eps, d)


# ===========================================================================
# Set operators on signed distances
# ===========================================================================

def op_intersection(d1: _F, d2: _F) -> _F:
    """Intersection of two SDFs: ``max(d1, d2)``."""
    return np.maximum(d1, d2)


def op_subtraction(d1: _F, d2: _F) -> _F:
    """Subtract *d1* from *d2*: ``max(-d1, d2)``."""
    return np.maximum(-d1, d2)
