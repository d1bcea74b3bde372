"""Per-primitive shaders: distances in, straight-alpha RGBA out.

Every shader takes a sample array *p* of shape ``(..., 2)``, relative to the
primitive's centre, and returns colors of shape ``(..., 4)`` where ``rgb``
is the unmodified source color and ``a`` is coverage times source alpha.
Samples with zero coverage come back as exact ``(0, 0, 0, 0)``.

Primitive kinds
---------------
- :class:`NodeInstance`         - fill and optional border band
- :class:`GradientInstance`     - linear or radial gradient fill or border
- :class:`DashedBorderInstance` - dashed outline
- :class:`ShadowInstance`       - blurred box shadow

:func:`shade` dispatches on the instance kind.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

import numpy as np

from ._common import TRANSPARENT, _F, as_vec2, as_vec4, safe_div
from .antialias import AntialiasMode, coverage
from .config import ShadingConfig
from .dashed import DashSpec, dash_mask, perimeter_length, perimeter_position
from .geometry import NodeGeometry, node_distance
from .gradient import LinearGradientSpec, RadialGradientSpec, gradient_t, interpolate_colors
from .shadow import BoxShadow

__all__ = [
    "UiFlag",
    "PrimitiveFlags",
    "ClipRect",
    "clip",
    "blend_over",
    "TextureSampler",
    "Instance",
    "NodeInstance",
    "GradientInstance",
    "DashedBorderInstance",
    "ShadowInstance",
    "gradient_instances",
    "shade_node",
    "shade_gradient",
    "shade_dashed_border",
    "shade_box_shadow",
    "shade",
]

#: ``sample(uv) -> rgba`` over ``(..., 2)`` uv arrays.
TextureSampler = Callable[[_F], _F]

GradientSpec = Union[LinearGradientSpec, RadialGradientSpec]

_UNIT_UV_RECT = (0.0, 0.0, 1.0, 1.0)


# ===========================================================================
# Flags
# ===========================================================================

class UiFlag(enum.IntFlag):
    """Packed per-instance flag word, as written by the host."""

    TEXTURED = 1
    BOX_SHADOW = 2
    DISABLE_AA = 4
    RIGHT_VERTEX = 8
    BOTTOM_VERTEX = 16
    BORDER = 32
    FILL_START = 64
    FILL_END = 128


@dataclass(frozen=True)
class PrimitiveFlags:
    """Unpacked :class:`UiFlag` word, passed explicitly to the shaders."""

    textured: bool = False
    box_shadow: bool = False
    disable_aa: bool = False
    border: bool = False
    fill_start: bool = False
    fill_end: bool = False
    right_vertex: bool = False
    bottom_vertex: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> PrimitiveFlags:
        word = UiFlag(bits)
        return cls(**{name: bool(word & flag) for name, flag in _FLAG_FIELDS})

    def to_bits(self) -> int:
        word = UiFlag(0)
        for name, flag in _FLAG_FIELDS:
            if getattr(self, name):
                word |= flag
        return int(word)

    def vertex_offset(self, size: Sequence[float] | _F) -> _F:
        """Quad corner this vertex sits on, relative to the node centre."""
        sign = np.array([1.0 if self.right_vertex else -1.0,
                         1.0 if self.bottom_vertex else -1.0])
        return 0.5 * sign * as_vec2(size)


_FLAG_FIELDS = (
    ("textured", UiFlag.TEXTURED),
    ("box_shadow", UiFlag.BOX_SHADOW),
    ("disable_aa", UiFlag.DISABLE_AA),
    ("border", UiFlag.BORDER),
    ("fill_start", UiFlag.FILL_START),
    ("fill_end", UiFlag.FILL_END),
    ("right_vertex", UiFlag.RIGHT_VERTEX),
    ("bottom_vertex", UiFlag.BOTTOM_VERTEX),
)


# ===========================================================================
# Clipping and blending
# ===========================================================================

@dataclass(frozen=True, eq=False)
class ClipRect:
    """Axis-aligned clip rectangle in the primitive's local space."""

    min: _F
    max: _F

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", as_vec2(self.min))
        object.__setattr__(self, "max", as_vec2(self.max))

    def contains(self, position: _F) -> _F:
        """Min edges inclusive, max edges exclusive."""
        return np.all((position >= self.min) & (position < self.max), axis=-1)


def clip(color: _F, position: _F, rect: Optional[ClipRect]) -> _F:
    """Transparent wherever *position* lies outside *rect*."""
    if rect is None:
        return color
    return np.where(rect.contains(position)[..., None], color, TRANSPARENT)


def blend_over(dst: _F, src: _F) -> _F:
    """Straight-alpha "source over destination"."""
    src_a = src[..., 3:4]
    dst_a = dst[..., 3:4] * (1.0 - src_a)
    out_a = src_a + dst_a
    rgb = safe_div(src[..., :3] * src_a + dst[..., :3] * dst_a, out_a)
    rgb = np.where(out_a > 0.0, rgb, 0.0)
    return np.concatenate([rgb, out_a], axis=-1)


# ===========================================================================
# Instances
# ===========================================================================

@dataclass(frozen=True, eq=False)
class NodeInstance:
    """A solid (optionally textured) node with an optional border band.

    *uv_rect* is ``(u_min, v_min, u_size, v_size)`` of the texture region
    mapped onto the node.
    """

    geometry: NodeGeometry
    color: _F
    border_color: _F = field(default_factory=lambda: TRANSPARENT.copy())
    flags: PrimitiveFlags = PrimitiveFlags()
    textured_border: bool = False
    uv_rect: Sequence[float] = _UNIT_UV_RECT
    clip: Optional[ClipRect] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_vec4(self.color))
        object.__setattr__(self, "border_color", as_vec4(self.border_color))


@dataclass(frozen=True, eq=False)
class GradientInstance:
    """One gradient segment drawn over a node's fill or border band.

    The shader reads FILL_START/FILL_END from *flags*.  Left as ``None``,
    *flags* takes them from the spec's ``fill_before``/``fill_after``.
    """

    geometry: NodeGeometry
    gradient: GradientSpec
    flags: Optional[PrimitiveFlags] = None
    uv_rect: Sequence[float] = _UNIT_UV_RECT
    clip: Optional[ClipRect] = None

    def __post_init__(self) -> None:
        if self.flags is None:
            flags = PrimitiveFlags(fill_start=self.gradient.fill_before,
                                   fill_end=self.gradient.fill_after)
            object.__setattr__(self, "flags", flags)


@dataclass(frozen=True, eq=False)
class DashedBorderInstance:
    """Dashed outline of width *line_thickness* along the node's edge.

    Only the size and corner radii of *geometry* are used; the band is the
    outermost *line_thickness* of the node.
    """

    geometry: NodeGeometry
    color: _F
    line_thickness: float
    dash: DashSpec
    flags: PrimitiveFlags = PrimitiveFlags(border=True)
    clip: Optional[ClipRect] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_vec4(self.color))


@dataclass(frozen=True, eq=False)
class ShadowInstance:
    """Box shadow cast by *geometry*."""

    geometry: NodeGeometry
    shadow: BoxShadow
    flags: PrimitiveFlags = PrimitiveFlags(box_shadow=True)
    clip: Optional[ClipRect] = None


def gradient_instances(
    geometry: NodeGeometry,
    specs: Sequence[GradientSpec],
    border: bool = False,
    textured: bool = False,
    uv_rect: Sequence[float] = _UNIT_UV_RECT,
    clip_rect: Optional[ClipRect] = None,
) -> list[GradientInstance]:
    """Wrap gradient segments as instances; FILL_START/FILL_END follow each spec."""
    return [
        GradientInstance(
            geometry,
            spec,
            PrimitiveFlags(textured=textured, border=border,
                           fill_start=spec.fill_before, fill_end=spec.fill_after),
            uv_rect,
            clip_rect,
        )
        for spec in specs
    ]


# ===========================================================================
# Helpers
# ===========================================================================

def _sample_texture(
    texture: Optional[TextureSampler], p: _F, size: _F, uv_rect: Sequence[float]
) -> _F:
    """Texture color at every sample; white when there is no texture.

    Always evaluated for the whole sample array, before any selection.
    """
    if texture is None:
        return np.ones(p.shape[:-1] + (4,))
    u_min, v_min, u_size, v_size = as_vec4(uv_rect)
    uv = np.array([u_min, v_min]) + (safe_div(p, size) + 0.5) * np.array([u_size, v_size])
    return np.asarray(texture(uv), dtype=float)


def _coverage(d: _F, alpha: float | _F, flags: PrimitiveFlags, config: ShadingConfig) -> _F:
    mode = AntialiasMode.DISABLED if flags.disable_aa else config.antialias
    width = config.aa_width if mode is AntialiasMode.FIXED else None
    return coverage(d, alpha, mode, width)


def _with_coverage(color: _F, d: _F, flags: PrimitiveFlags, config: ShadingConfig) -> _F:
    rgba = np.array(np.broadcast_to(color, d.shape + (4,)), dtype=float)
    rgba[..., 3] = _coverage(d, rgba[..., 3], flags, config)
    return rgba


def _finish(rgba: _F, p: _F, clip_rect: Optional[ClipRect]) -> _F:
    rgba = np.where(rgba[..., 3:4] > 0.0, rgba, TRANSPARENT)
    return clip(rgba, p, clip_rect)


# ===========================================================================
# Shaders
# ===========================================================================

def shade_node(
    p: _F,
    node: NodeInstance,
    texture: Optional[TextureSampler] = None,
    config: Optional[ShadingConfig] = None,
) -> _F:
    """Border band, else fill, else transparent.

    Inside the band the border color takes the band's coverage; inside the
    fill the fill color takes the edge coverage.  Beyond the outer edge the
    antialiased fringe comes from the border only along sides that carry a
    band, and from the fill along sides whose inset is zero.
    """
    if config is None:
        config = ShadingConfig()
    flags = node.flags
    tex = _sample_texture(texture, p, node.geometry.size, node.uv_rect)
    dist = node_distance(p, node.geometry, config.radius_policy)

    fill = node.color * tex if flags.textured else node.color
    fill_rgba = _with_coverage(fill, dist.edge, flags, config)
    if not flags.border:
        return _finish(fill_rgba, p, node.clip)

    border = node.border_color * tex if node.textured_border else node.border_color
    border_rgba = _with_coverage(border, dist.border, flags, config)
    in_fill = (dist.edge <= 0.0) & (dist.border > 0.0)
    in_fill |= (dist.edge > 0.0) & ~dist.band_at_edge()
    return _finish(np.where(in_fill[..., None], fill_rgba, border_rgba), p, node.clip)


def shade_gradient(
    p: _F,
    instance: GradientInstance,
    texture: Optional[TextureSampler] = None,
    config: Optional[ShadingConfig] = None,
) -> _F:
    """Gradient color masked by the border band (BORDER) or the node edge.

    Outside the span the color extends only where FILL_START or FILL_END is
    set in the instance flags.
    """
    if config is None:
        config = ShadingConfig()
    flags = instance.flags
    tex = _sample_texture(texture, p, instance.geometry.size, instance.uv_rect)
    dist = node_distance(p, instance.geometry, config.radius_policy)

    g = instance.gradient
    t = gradient_t(g.distance(p), g.start_len, g.end_len)
    color = interpolate_colors(t, g.start_color, g.end_color, flags.fill_start, flags.fill_end)
    if flags.textured:
        color = color * tex
    if not flags.border:
        return _finish(_with_coverage(color, dist.edge, flags, config), p, instance.clip)
    rgba = _with_coverage(color, dist.border, flags, config)
    rgba[..., 3] = np.where((dist.edge > 0.0) & ~dist.band_at_edge(), 0.0, rgba[..., 3])
    return _finish(rgba, p, instance.clip)


def shade_dashed_border(
    p: _F,
    instance: DashedBorderInstance,
    config: Optional[ShadingConfig] = None,
) -> _F:
    """Outline band, drawn only where the perimeter position is on a dash.

    Arc-length is measured on the band's centre line and the dash pattern
    is fitted to that line's length.
    """
    if config is None:
        config = ShadingConfig()
    thickness = instance.line_thickness
    geometry = NodeGeometry(instance.geometry.size, instance.geometry.corner_radii,
                            [thickness] * 4)
    dist = node_distance(p, geometry, config.radius_policy)

    mid_half = np.maximum(geometry.half_size - 0.5 * thickness, 0.0)
    mid_radii = np.maximum(geometry.clamped_radii - 0.5 * thickness, 0.0)
    t = perimeter_position(p, mid_half, mid_radii)
    dash = instance.dash.fitted(perimeter_length(mid_half, mid_radii))
    on_dash = dash_mask(t, dash.dash_length, dash.break_length)

    rgba = _with_coverage(instance.color, dist.border, instance.flags, config)
    rgba[..., 3] *= on_dash
    return _finish(rgba, p, instance.clip)


def shade_box_shadow(
    p: _F,
    instance: ShadowInstance,
    config: Optional[ShadingConfig] = None,
) -> _F:
    """Shadow color with alpha scaled by the blurred box coverage."""
    if config is None:
        config = ShadingConfig()
    shadow = instance.shadow
    value = shadow.coverage(p, instance.geometry, config.shadow_samples, config.min_sigma)
    rgba = np.array(np.broadcast_to(shadow.color, value.shape + (4,)), dtype=float)
    rgba[..., 3] *= value
    return _finish(rgba, p, instance.clip)


Instance = Union[NodeInstance, GradientInstance, DashedBorderInstance, ShadowInstance]


def shade(
    p: _F,
    instance: Instance,
    texture: Optional[TextureSampler] = None,
    config: Optional[ShadingConfig] = None,
) -> _F:
    """Evaluate the shader matching the kind of *instance*."""
    if isinstance(instance, NodeInstance):
        return shade_node(p, instance, texture, config)
    if isinstance(instance, GradientInstance):
        return shade_gradient(p, instance, texture, config)
    if isinstance(instance, DashedBorderInstance):
        return shade_dashed_border(p, instance, config)
    if isinstance(instance, ShadowInstance):
        return shade_box_shadow(p, instance, config)
    raise TypeError(f"unsupported primitive instance: {type(instance).__name__}")
