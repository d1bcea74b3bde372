"""Render a page of sample UI primitives with sdfui.

Usage::

    python scripts/gallery_ui.py                   # saves gallery_ui.png
    python scripts/gallery_ui.py --out my_file.png # custom output path
    python scripts/gallery_ui.py --npy-dir raw/     # also keep each panel as .npy

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from sdfui import (
    BoxShadow,
    ColorStop,
    DashedBorderInstance,
    DashSpec,
    LEFT_TO_RIGHT,
    NodeGeometry,
    NodeInstance,
    PrimitiveFlags,
    RadialGradientSize,
    ShadowInstance,
    gradient_instances,
    linear_gradient_specs,
    radial_gradient_specs,
    render_layers,
    save_npy,
)

logger = logging.getLogger("gallery_ui")

_BOUNDS = ((-80.0, 80.0), (-60.0, 60.0))
_RES    = (320, 240)
_BACKGROUND = (0.07, 0.07, 0.07, 1.0)

_WHITE = (1.0, 1.0, 1.0, 1.0)
_CORAL = (0.94, 0.5, 0.5, 1.0)
_NAVY  = (0.1, 0.15, 0.45, 1.0)
_GOLD  = (1.0, 0.8, 0.2, 1.0)


# ---------------------------------------------------------------------------
# Primitive catalogue: (label, [instances])
# ---------------------------------------------------------------------------

def _make_panels() -> list[tuple[str, list]]:
    box = NodeGeometry((120.0, 80.0), (16.0, 16.0, 16.0, 16.0))
    lopsided = NodeGeometry((120.0, 80.0), (30.0, 4.0, 30.0, 4.0), (14.0, 4.0, 2.0, 10.0))
    stops = [ColorStop(_CORAL), ColorStop(_GOLD), ColorStop(_NAVY)]

    panels = [
        ("Fill", [NodeInstance(box, _CORAL)]),
        ("Uniform border", [
            NodeInstance(NodeGeometry(box.size, box.corner_radii, 6.0), _NAVY, _WHITE,
                         PrimitiveFlags(border=True)),
        ]),
        ("Uneven border", [
            NodeInstance(lopsided, _NAVY, _GOLD, PrimitiveFlags(border=True)),
        ]),
        ("Linear gradient", gradient_instances(
            box, linear_gradient_specs(LEFT_TO_RIGHT + 0.4, box.size, stops))),
        ("Radial gradient", gradient_instances(
            box, radial_gradient_specs((-20.0, -10.0), box.half_size, stops,
                                       RadialGradientSize.FARTHEST_CORNER, circle=False))),
        ("Left border only", [
            NodeInstance(NodeGeometry(box.size, box.corner_radii, (8.0, 0.0, 0.0, 0.0)),
                         _CORAL, _WHITE, PrimitiveFlags(border=True)),
        ]),
        ("Ellipse gradient", gradient_instances(
            box, radial_gradient_specs((0.0, 0.0), box.half_size, stops, extents=(60.0, 25.0)))),
        ("Dashed outline", [
            DashedBorderInstance(box, _WHITE, 4.0, DashSpec(14.0, 8.0)),
        ]),
        ("Box shadow", [
            ShadowInstance(box, BoxShadow((0.0, 0.0, 0.0, 0.9), 6.0, 8.0, 2.0, 8.0)),
            NodeInstance(box, _CORAL),
        ]),
    ]
    return panels


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _slug(label: str) -> str:
    return "_".join(label.lower().split())


def render_gallery(
    panels: list[tuple[str, list]],
    out_path: str,
    ncols: int = 4,
    npy_dir: str | None = None,
) -> None:
    nrows = (len(panels) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 2.6),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (label, instances) in zip(axes, panels):
        logger.debug("rendering %s", label)
        image = render_layers(instances, _BOUNDS, _RES, background=_BACKGROUND)
        if npy_dir is not None:
            save_npy(os.path.join(npy_dir, _slug(label) + ".npy"), image)
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(label, color="white", fontsize=8, pad=3)
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")
        ax.imshow(np.clip(image, 0.0, 1.0), interpolation="nearest")

    # Hide unused axes
    for ax in axes[len(panels):]:
        ax.set_visible(False)

    fig.suptitle("sdfui - UI primitive gallery", color="white", fontsize=12, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render sample sdfui primitives to a PNG gallery.")
    parser.add_argument("--out", default="gallery_ui.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=4, help="Number of columns (default 4)")
    parser.add_argument("--npy-dir", default=None,
                        help="Also save each panel's raw RGBA array into this directory")
    parser.add_argument("--verbose", action="store_true", help="Log each panel as it renders")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    render_gallery(_make_panels(), args.out, ncols=args.cols, npy_dir=args.npy_dir)


if __name__ == "__main__":
    main()
