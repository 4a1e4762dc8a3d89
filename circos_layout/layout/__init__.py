"""Circular layout stages: outer ring, inner ring, ribbons."""

from .config import LayoutConfig, get_layout_config, set_layout_config
from .inner import partition_inner
from .outer import partition_outer
from .result import LayoutResult, compute_layout
from .ribbon import ribbon_segments, sample_curve, svg_path_d, synthesize_curves
from .types import (
    ArcTo,
    ClosePath,
    Curve,
    InnerArc,
    MoveTo,
    OuterArc,
    PathSegment,
    QuadTo,
    polar_point,
)

__all__ = [
    "LayoutConfig",
    "get_layout_config",
    "set_layout_config",
    "partition_outer",
    "partition_inner",
    "synthesize_curves",
    "ribbon_segments",
    "svg_path_d",
    "sample_curve",
    "LayoutResult",
    "compute_layout",
    "OuterArc",
    "InnerArc",
    "Curve",
    "PathSegment",
    "MoveTo",
    "ArcTo",
    "QuadTo",
    "ClosePath",
    "polar_point",
]
