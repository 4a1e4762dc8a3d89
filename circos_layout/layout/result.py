"""Layout pipeline and its immutable result."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..graph import EdgeId, Graph, NodeId
from ..logging_utils import apply_debug_logging
from .config import LayoutConfig, get_layout_config
from .inner import partition_inner
from .outer import partition_outer
from .ribbon import svg_path_d, synthesize_curves
from .types import ArcTo, ClosePath, Curve, InnerArc, MoveTo, OuterArc, PathSegment, QuadTo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    """Everything a renderer needs, in normalized unit-circle space.

    Computed once per :class:`Graph`; read as often as needed.
    """

    graph: Graph
    config: LayoutConfig
    outer_arcs: Tuple[OuterArc, ...]
    inner_arcs: Tuple[InnerArc, ...]
    curves: Tuple[Curve, ...]

    @property
    def model(self) -> List[Tuple[NodeId, float]]:
        """``(node id, node weight)`` pairs in node order."""
        return self.graph.model

    def outer_arc_of(self, node_id: NodeId) -> OuterArc:
        for arc in self.outer_arcs:
            if arc.node == node_id:
                return arc
        raise KeyError(f'no outer arc for node "{node_id}"')

    def inner_arcs_of(self, node_id: NodeId) -> List[InnerArc]:
        return [arc for arc in self.inner_arcs if arc.node == node_id]

    def curve_of(self, edge_id: EdgeId) -> Curve:
        for curve in self.curves:
            if curve.edge == edge_id:
                return curve
        raise KeyError(f'no curve for edge "{edge_id}"')

    def closure(self) -> float:
        """Outer spans plus one outer gap per node; 1.0 for normalized input."""
        return math.fsum(arc.span for arc in self.outer_arcs) + self.config.outer_gap * len(self.outer_arcs)

    def summary(self) -> str:
        return (
            f"LayoutResult(outer={len(self.outer_arcs)}, inner={len(self.inner_arcs)}, "
            f"curves={len(self.curves)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready description of the layout."""
        return {
            "model": [{"name": node_id, "value": weight} for node_id, weight in self.model],
            "outer_arcs": [
                {
                    "node": arc.node,
                    "start": arc.start,
                    "end": arc.end,
                    "r0": arc.inner_radius,
                    "r": arc.outer_radius,
                    "cx": arc.cx,
                    "cy": arc.cy,
                }
                for arc in self.outer_arcs
            ],
            "inner_arcs": [
                {
                    "node": arc.node,
                    "far": arc.far,
                    "edge": arc.edge,
                    "end_kind": arc.end_kind,
                    "start": arc.start,
                    "end": arc.end,
                    "r0": arc.inner_radius,
                    "r": arc.outer_radius,
                    "cx": arc.cx,
                    "cy": arc.cy,
                }
                for arc in self.inner_arcs
            ],
            "curves": [
                {
                    "edge": curve.edge,
                    "source": curve.source_arc.node,
                    "target": curve.target_arc.node,
                    "segments": [_segment_to_dict(seg) for seg in curve.segments],
                    "d": svg_path_d(curve),
                }
                for curve in self.curves
            ],
        }


def _segment_to_dict(seg: PathSegment) -> Dict[str, Any]:
    if isinstance(seg, MoveTo):
        return {"op": "move", "point": list(seg.point)}
    if isinstance(seg, ArcTo):
        return {
            "op": "arc",
            "center": list(seg.center),
            "radius": seg.radius,
            "start": seg.start,
            "end": seg.end,
            "point": list(seg.point),
        }
    if isinstance(seg, QuadTo):
        return {"op": "quad", "control": list(seg.control), "point": list(seg.point)}
    if isinstance(seg, ClosePath):
        return {"op": "close"}
    raise TypeError(f"unknown path segment {seg!r}")


def compute_layout(graph: Graph, config: Optional[LayoutConfig] = None) -> LayoutResult:
    """Run the outer, inner and ribbon stages on ``graph``.

    Either a complete result is returned or the first stage error propagates.
    """

    config = config or get_layout_config()
    outer_arcs = partition_outer(graph, config)
    inner_arcs = partition_inner(graph, outer_arcs, config)
    curves = synthesize_curves(graph, inner_arcs)
    result = LayoutResult(graph, config, tuple(outer_arcs), tuple(inner_arcs), tuple(curves))

    closure = result.closure()
    total = graph.total_weight()
    if graph.edges and not math.isclose(total, 1.0, rel_tol=1e-9, abs_tol=1e-12):
        logger.warning(
            "Edge weights sum to %.9g, not 1; the outer ring covers %.9g of the turn",
            total,
            closure,
        )
    logger.info("Layout complete: %s", result.summary())
    return result


apply_debug_logging(globals(), logger=logger)
