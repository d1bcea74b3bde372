"""Shading configuration shared by every primitive shader."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .antialias import DEFAULT_AA_WIDTH, AntialiasMode
from .geometry import BorderRadiusPolicy

__all__ = ["ShadingConfig", "MIN_SIGMA"]

#: Smallest Gaussian sigma the shadow evaluator will use.
MIN_SIGMA = 0.01


@dataclass(frozen=True)
class ShadingConfig:
    """Configuration for primitive shading.

    Passed as ``config=`` to the shaders; ``None`` means these defaults.
    """

    # Edge coverage
    antialias: AntialiasMode = AntialiasMode.DERIVATIVE
    aa_width: float = DEFAULT_AA_WIDTH

    # Border band
    radius_policy: BorderRadiusPolicy = BorderRadiusPolicy.CLAMPED_WITH_SEAM_CORRECTION

    # Box shadow quadrature
    shadow_samples: int = 4
    min_sigma: float = MIN_SIGMA

    def __post_init__(self) -> None:
        if not self.aa_width > 0.0:
            raise ValueError(f"aa_width must be positive, got {self.aa_width}")
        if self.shadow_samples < 1:
            raise ValueError(f"shadow_samples must be at least 1, got {self.shadow_samples}")
        if not self.min_sigma > 0.0:
            raise ValueError(f"min_sigma must be positive, got {self.min_sigma}")

    def replace(self, **changes) -> ShadingConfig:
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)
