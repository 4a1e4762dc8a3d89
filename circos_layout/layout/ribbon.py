"""Ribbon synthesis: one closed path per edge between its two inner arcs."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..errors import SectorNotFound
from ..graph import Edge, EdgeId, Graph, NodeId
from ..logging_utils import apply_debug_logging
from .types import TAU, ArcTo, ClosePath, Curve, EndKind, InnerArc, MoveTo, PathSegment, Point, QuadTo

logger = logging.getLogger(__name__)

_ArcKey = Tuple[NodeId, NodeId, EdgeId, EndKind]


def _index_arcs(inner_arcs: Sequence[InnerArc]) -> Dict[_ArcKey, InnerArc]:
    index: Dict[_ArcKey, InnerArc] = {}
    for arc in inner_arcs:
        index.setdefault((arc.node, arc.far, arc.edge, arc.end_kind), arc)
    return index


def _find_arc(index: Dict[_ArcKey, InnerArc], edge: Edge, home: NodeId, far: NodeId, end_kind: EndKind) -> InnerArc:
    arc = index.get((home, far, edge.id, end_kind))
    if arc is None:
        raise SectorNotFound(edge.id, home, far, end_kind)
    return arc


def ribbon_segments(source_arc: InnerArc, target_arc: InnerArc) -> Tuple[PathSegment, ...]:
    """Closed contour hugging both arcs, joined by quadratics through the centre."""

    center = source_arc.center
    s_start, s_end = source_arc.boundary_points()
    t_start, t_end = target_arc.boundary_points()
    return (
        MoveTo(s_start),
        ArcTo(center, source_arc.inner_radius, source_arc.start, source_arc.end, s_end),
        QuadTo(center, t_start),
        ArcTo(center, target_arc.inner_radius, target_arc.start, target_arc.end, t_end),
        QuadTo(center, s_start),
        ClosePath(),
    )


def synthesize_curves(graph: Graph, inner_arcs: Sequence[InnerArc]) -> List[Curve]:
    """Build one :class:`Curve` per edge of ``graph``, in edge order.

    The source end of an edge is the arc on ``edge.source`` facing
    ``edge.target`` (taken from the source's out-edges); the target end is the
    arc on ``edge.target`` facing ``edge.source`` (from its in-edges). A
    missing arc means the inner ring was built from a different graph and
    raises :class:`SectorNotFound`.
    """

    index = _index_arcs(inner_arcs)
    curves: List[Curve] = []
    for edge in graph.edges:
        source_arc = _find_arc(index, edge, edge.source, edge.target, "out")
        target_arc = _find_arc(index, edge, edge.target, edge.source, "in")
        curves.append(Curve(edge.id, source_arc, target_arc, ribbon_segments(source_arc, target_arc)))

    logger.info("Synthesized %d ribbon(s)", len(curves))
    return curves


def _fmt(value: float) -> str:
    formatted = f"{value:.6f}".rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def svg_path_d(curve: Curve, scale: float = 1.0) -> str:
    """SVG path data for ``curve``, coordinates multiplied by ``scale``.

    Arcs sweep in the direction of increasing angle, which is SVG's
    ``sweep-flag=1``.
    """

    def pt(p: Point) -> str:
        return f"{_fmt(p[0] * scale)} {_fmt(p[1] * scale)}"

    parts: List[str] = []
    for seg in curve.segments:
        if isinstance(seg, MoveTo):
            parts.append(f"M {pt(seg.point)}")
        elif isinstance(seg, ArcTo):
            r = _fmt(seg.radius * scale)
            large = 1 if seg.end - seg.start > 0.5 else 0
            parts.append(f"A {r} {r} 0 {large} 1 {pt(seg.point)}")
        elif isinstance(seg, QuadTo):
            parts.append(f"Q {pt(seg.control)} {pt(seg.point)}")
        elif isinstance(seg, ClosePath):
            parts.append("Z")
    return " ".join(parts)


def _arc_points(seg: ArcTo, n: int) -> np.ndarray:
    angles = np.linspace(seg.start, seg.end, n) * TAU
    cx, cy = seg.center
    return np.column_stack([cx + seg.radius * np.cos(angles), cy + seg.radius * np.sin(angles)])


def _quad_points(p0: Point, control: Point, p1: Point, n: int) -> np.ndarray:
    t = np.linspace(0.0, 1.0, n)[:, None]
    a, c, b = np.asarray(p0), np.asarray(control), np.asarray(p1)
    return (1 - t) ** 2 * a + 2 * (1 - t) * t * c + t**2 * b


def sample_curve(curve: Curve, arc_points: int = 16, curve_points: int = 24) -> np.ndarray:
    """Approximate ``curve`` by a closed polyline of shape ``(N, 2)``.

    Consecutive pieces share their joint point, so it appears only once; the
    last row repeats the first.
    """

    if arc_points < 2 or curve_points < 2:
        raise ValueError("arc_points and curve_points must both be >= 2")

    chunks: List[np.ndarray] = []
    current: Point = (math.nan, math.nan)
    origin: Point = current
    for seg in curve.segments:
        if isinstance(seg, MoveTo):
            current = origin = seg.point
            chunks.append(np.asarray([seg.point], dtype=float))
        elif isinstance(seg, ArcTo):
            chunks.append(_arc_points(seg, arc_points)[1:])
            current = seg.point
        elif isinstance(seg, QuadTo):
            chunks.append(_quad_points(current, seg.control, seg.point, curve_points)[1:])
            current = seg.point
        elif isinstance(seg, ClosePath) and current != origin:
            chunks.append(np.asarray([origin], dtype=float))
            current = origin
    return np.vstack(chunks)


apply_debug_logging(globals(), logger=logger)
