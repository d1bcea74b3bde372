"""Grid sampling utilities: evaluate primitives over a pixel grid."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence, Tuple

import numpy as np

from ._common import _F, vec2
from .config import ShadingConfig
from .shading import Instance, TextureSampler, blend_over, shade

logger = logging.getLogger(__name__)

_Bounds2D = Tuple[Tuple[float, float], Tuple[float, float]]
_Resolution2D = Tuple[int, int]


def sample_grid(bounds: _Bounds2D, resolution: _Resolution2D) -> _F:
    """Cell-centred sample points over *bounds*.

    Parameters
    ----------
    bounds:
        ``((x0, x1), (y0, y1))`` extents, relative to the primitive centre.
    resolution:
        ``(nx, ny)`` number of pixels along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(ny, nx, 2)``, row-major (y first, growing downward).
    """
    (x0, x1), (y0, y1) = bounds
    nx, ny = resolution

    xs = np.linspace(x0, x1, nx, endpoint=False) + (x1 - x0) / (2.0 * nx)
    ys = np.linspace(y0, y1, ny, endpoint=False) + (y1 - y0) / (2.0 * ny)

    Y, X = np.meshgrid(ys, xs, indexing="ij")
    return vec2(X, Y)


def render_layers(
    instances: Sequence[Instance],
    bounds: _Bounds2D,
    resolution: _Resolution2D,
    texture: Optional[TextureSampler] = None,
    config: Optional[ShadingConfig] = None,
    background: Optional[Sequence[float]] = None,
) -> _F:
    """Shade *instances* in order and stack them with straight-alpha "over".

    Returns an ``(ny, nx, 4)`` image; *background* defaults to transparent.
    """
    p = sample_grid(bounds, resolution)
    image = np.zeros(p.shape[:-1] + (4,))
    if background is not None:
        image[...] = np.asarray(background, dtype=float)
    for instance in instances:
        image = blend_over(image, shade(p, instance, texture, config))
    return image


def save_npy(path: str | os.PathLike, image: _F) -> None:
    """Write a rendered ``(h, w, 4)`` RGBA *image* to *path* as ``.npy``.

    Missing parent directories are created.
    """
    image = np.asarray(image, dtype=float)
    if image.ndim != 3 or image.shape[-1] != 4:
        raise ValueError(f"expected an (h, w, 4) RGBA image, got shape {image.shape}")
    os.makedirs(os.path.dirname(os.fspath(path)) or ".", exist_ok=True)
    np.save(path, image)
    logger.debug("saved %dx%d image to %s", image.shape[1], image.shape[0], path)
