"""Coverage from signed distance.

Three policies map a signed distance *d* to an opacity:

* ``FIXED``      - ``mix(0, alpha, 1 - smoothstep(0, width, d))``
* ``DERIVATIVE`` - ``alpha * saturate(0.5 - d / fwidth(d))``
* ``DISABLED``   - hard step at ``d = 0``

All three give full *alpha* for ``d <= -width``, zero for ``d >= width``
and are monotonically non-increasing in between.
"""

from __future__ import annotations

import enum

import numpy as np

from ._common import _F, mix, saturate, smoothstep

__all__ = ["AntialiasMode", "DEFAULT_AA_WIDTH", "fwidth", "coverage"]

#: Fixed transition width, in sample (pixel) units.
DEFAULT_AA_WIDTH = 1.0

# Floor for derivative widths; flat regions degrade to a hard step.
_MIN_AA_WIDTH = 1e-6


class AntialiasMode(enum.Enum):
    FIXED = "fixed"
    DERIVATIVE = "derivative"
    DISABLED = "disabled"


def fwidth(d: _F, default: float = DEFAULT_AA_WIDTH) -> _F:
    """Screen-space rate of change ``|dd/dx| + |dd/dy|``.

    *d* is read as an image over its last two axes (rows = y, columns = x),
    one sample per pixel.  Arrays that cannot be differentiated that way
    (fewer than two axes, or an axis of length one) get *default*.
    """
    d = np.asarray(d, dtype=float)
    if d.ndim < 2 or min(d.shape[-2:]) < 2:
        return np.full(d.shape, default)
    dy, dx = np.gradient(d, axis=(-2, -1))
    return np.abs(dx) + np.abs(dy)


def coverage(
    d: _F,
    alpha: float | _F = 1.0,
    mode: AntialiasMode = AntialiasMode.DERIVATIVE,
    width: float | _F | None = None,
) -> _F:
    """Opacity of a sample at signed distance *d*, scaled by *alpha*.

    *width* overrides the transition width: the fixed width for ``FIXED``,
    the per-sample derivative for ``DERIVATIVE`` (computed with
    :func:`fwidth` when omitted).  Ignored for ``DISABLED``.
    """
    d = np.asarray(d, dtype=float)
    if mode is AntialiasMode.DISABLED:
        return np.where(d <= 0.0, alpha, 0.0)
    if mode is AntialiasMode.FIXED:
        w = DEFAULT_AA_WIDTH if width is None else width
        return mix(0.0, alpha, 1.0 - smoothstep(0.0, w, d))
    w = fwidth(d) if width is None else width
    return alpha * saturate(0.5 - d / np.maximum(w, _MIN_AA_WIDTH))
