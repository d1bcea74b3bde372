"""
sdfui - Signed-distance shading for rounded-rectangle UI primitives
===================================================================

Per-pixel shading math for axis-aligned rounded rectangles: antialiased
edges, uniform or non-uniform borders, linear and radial gradients, dashed
outlines and soft box shadows, evaluated with NumPy over arrays of sample
points.

Implemented features
--------------------
- Distances: :func:`sd_rounded_box`, :func:`inset_box`,
  :func:`sd_inset_rounded_box_clamped`, :func:`node_distance`
- Coverage: :func:`coverage` (fixed, derivative or disabled antialiasing)
- Gradients: :class:`LinearGradientSpec`, :class:`RadialGradientSpec`,
  color-stop resolution and segmentation
- Dashes: :func:`perimeter_position`, :func:`rescale_dashes`
- Shadows: :func:`rounded_box_shadow`, :class:`BoxShadow`
- Shaders: :func:`shade` and the per-kind ``shade_*`` functions
- Grid rendering: :func:`render_layers`, :func:`sample_grid`

Quick start
-----------

::

    from sdfui import NodeGeometry, NodeInstance, PrimitiveFlags, render_layers

    node = NodeInstance(
        NodeGeometry(size=(120, 60), corner_radii=12, inset=(4, 2, 4, 2)),
        color=(0.2, 0.4, 0.9, 1.0),
        border_color=(1.0, 1.0, 1.0, 1.0),
        flags=PrimitiveFlags(border=True),
    )
    image = render_layers([node], ((-70, 70), (-40, 40)), (140, 80))
"""

from ._common import TRANSPARENT
from .primitives import (
    sd_box,
    sd_rounded_box,
    select_corner_radius,
    clamp_corner_radii,
)
from .geometry import (
    Box,
    NodeGeometry,
    Distance,
    BorderRadiusPolicy,
    inset_box,
    inner_corner_radii,
    sd_inset_rounded_box_clamped,
    sd_inset_rounded_box,
    node_distance,
)
from .antialias import AntialiasMode, DEFAULT_AA_WIDTH, fwidth, coverage
from .config import ShadingConfig, MIN_SIGMA
from .gradient import (
    BOTTOM_TO_TOP,
    LEFT_TO_RIGHT,
    TOP_TO_BOTTOM,
    RIGHT_TO_LEFT,
    linear_gradient_distance,
    radial_gradient_distance,
    gradient_t,
    interpolate_colors,
    three_stop_color,
    LinearGradientSpec,
    RadialGradientSpec,
    ColorStop,
    GradientSegment,
    resolve_color_stops,
    gradient_segments,
    linear_gradient_geometry,
    RadialGradientSize,
    radial_gradient_extents,
    linear_gradient_specs,
    radial_gradient_specs,
)
from .dashed import (
    DashSpec,
    quadrant_index,
    quadrant_lengths,
    perimeter_length,
    perimeter_position,
    rescale_dashes,
    dash_mask,
)
from .shadow import erf, gaussian, rounded_box_shadow, BoxShadow
from .shading import (
    UiFlag,
    PrimitiveFlags,
    ClipRect,
    clip,
    blend_over,
    NodeInstance,
    GradientInstance,
    DashedBorderInstance,
    ShadowInstance,
    gradient_instances,
    shade_node,
    shade_gradient,
    shade_dashed_border,
    shade_box_shadow,
    shade,
)
from .grid import sample_grid, render_layers, save_npy

__version__ = "0.1.0"

__all__ = [
    "TRANSPARENT",

    # Distances
    "sd_box",
    "sd_rounded_box",
    "select_corner_radius",
    "clamp_corner_radii",
    "Box",
    "NodeGeometry",
    "Distance",
    "BorderRadiusPolicy",
    "inset_box",
    "inner_corner_radii",
    "sd_inset_rounded_box_clamped",
    "sd_inset_rounded_box",
    "node_distance",

    # Coverage
    "AntialiasMode",
    "DEFAULT_AA_WIDTH",
    "fwidth",
    "coverage",

    # Configuration
    "ShadingConfig",
    "MIN_SIGMA",

    # Gradients
    "BOTTOM_TO_TOP",
    "LEFT_TO_RIGHT",
    "TOP_TO_BOTTOM",
    "RIGHT_TO_LEFT",
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

    # Dashes
    "DashSpec",
    "quadrant_index",
    "quadrant_lengths",
    "perimeter_length",
    "perimeter_position",
    "rescale_dashes",
    "dash_mask",

    # Shadows
    "erf",
    "gaussian",
    "rounded_box_shadow",
    "BoxShadow",

    # Shaders
    "UiFlag",
    "PrimitiveFlags",
    "ClipRect",
    "clip",
    "blend_over",
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

    # Grid utilities
    "sample_grid",
    "render_layers",
    "save_npy",
]
