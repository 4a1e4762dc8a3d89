"""Inner ring: one sub-arc per (node, incident edge) pair."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import MissingOuterArc
from ..graph import Graph, NodeId
from ..logging_utils import apply_debug_logging
from .config import LayoutConfig, get_layout_config
from .types import InnerArc, OuterArc

logger = logging.getLogger(__name__)


def partition_inner(
    graph: Graph,
    outer_arcs: Sequence[OuterArc],
    config: Optional[LayoutConfig] = None,
) -> List[InnerArc]:
    """Lay out the inner band, node by node, edge by edge.

    Each edge takes ``weight / 2 * scale`` at both of its endpoints, where
    ``scale = 1 - inner_gap * len(graph)``. A node's sub-arcs follow
    :meth:`Graph.edges_of` (in-edges, then out-edges) with no space between
    them. The cursor restarts at the start of each node's outer arc, so a group
    stays inside its parent whenever ``inner_gap >= outer_gap``; whatever is
    left of the parent span serves as the trailing inner gap.
    """

    config = config or get_layout_config()
    by_node: Dict[NodeId, OuterArc] = {arc.node: arc for arc in outer_arcs}
    gap = config.inner_gap
    scale = 1.0 - gap * len(graph)
    r0, r1 = config.inner_band
    cx, cy = config.center
    if gap < config.outer_gap:
        logger.warning(
            "Inner gap %.6g is smaller than outer gap %.6g; inner groups may overrun their outer arcs",
            gap,
            config.outer_gap,
        )

    arcs: List[InnerArc] = []
    for node in graph.nodes:
        parent = by_node.get(node.id)
        if parent is None:
            raise MissingOuterArc(node.id)

        in_edges = graph.in_edges(node.id)
        out_edges = graph.out_edges(node.id)
        group_start = cursor = parent.start
        for edge in in_edges:
            end = cursor + edge.weight / 2.0 * scale
            arcs.append(InnerArc(node.id, edge.source, edge.id, "in", parent, cursor, end, r0, r1, cx, cy))
            cursor = end
        for edge in out_edges:
            end = cursor + edge.weight / 2.0 * scale
            arcs.append(InnerArc(node.id, edge.target, edge.id, "out", parent, cursor, end, r0, r1, cx, cy))
            cursor = end

        logger.debug(
            "Node %s: %d inner arc(s) over [%.6g, %.6g) inside outer [%.6g, %.6g)",
            node.id,
            len(in_edges) + len(out_edges),
            group_start,
            cursor,
            parent.start,
            parent.end,
        )

    logger.info("Inner ring: %d arc(s) for %d edge(s)", len(arcs), len(graph.edges))
    return arcs


apply_debug_logging(globals(), logger=logger)
