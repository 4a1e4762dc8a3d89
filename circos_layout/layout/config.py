"""Layout constants and the process-wide default configuration."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LayoutConfig:
    """Gap fractions and ring radii used by every layout stage.

    Gaps are turn fractions reserved once per node. Outer arcs occupy radii
    ``[outer_radius - ring_width, outer_radius]`` and inner arcs
    ``[inner_radius - ring_width, inner_radius]``.
    """

    outer_gap: float = 0.01
    inner_gap: float = 0.015
    center: Tuple[float, float] = (0.0, 0.0)
    outer_radius: float = 1.0
    inner_radius: float = 0.6
    ring_width: float = 0.05

    def __post_init__(self) -> None:
        for name in ("outer_gap", "inner_gap", "outer_radius", "inner_radius", "ring_width"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
        if self.outer_gap < 0 or self.inner_gap < 0:
            raise ValueError("gaps must be non-negative")
        if self.ring_width <= 0:
            raise ValueError("ring_width must be positive")
        if not self.ring_width < self.inner_radius < self.outer_radius - self.ring_width:
            raise ValueError(
                "radii must satisfy ring_width < inner_radius < outer_radius - ring_width "
                f"(got ring_width={self.ring_width}, inner_radius={self.inner_radius}, "
                f"outer_radius={self.outer_radius})"
            )
        if len(self.center) != 2:
            raise ValueError("center must be an (x, y) pair")
        object.__setattr__(self, "center", (float(self.center[0]), float(self.center[1])))

    @property
    def outer_band(self) -> Tuple[float, float]:
        return (self.outer_radius - self.ring_width, self.outer_radius)

    @property
    def inner_band(self) -> Tuple[float, float]:
        return (self.inner_radius - self.ring_width, self.inner_radius)


_LAYOUT_CONFIG = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    return copy.deepcopy(_LAYOUT_CONFIG)


def set_layout_config(config: LayoutConfig) -> None:
    global _LAYOUT_CONFIG
    if not isinstance(config, LayoutConfig):
        raise TypeError("config must be a LayoutConfig")
    _LAYOUT_CONFIG = copy.deepcopy(config)


__all__ = ["LayoutConfig", "get_layout_config", "set_layout_config"]
