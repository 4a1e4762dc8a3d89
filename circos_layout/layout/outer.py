"""Outer ring: one arc per node, sized by node weight."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..graph import Graph
from ..logging_utils import apply_debug_logging
from .config import LayoutConfig, get_layout_config
from .types import OuterArc

logger = logging.getLogger(__name__)


def partition_outer(graph: Graph, config: Optional[LayoutConfig] = None) -> List[OuterArc]:
    """Divide the full turn among the nodes of ``graph`` in node order.

    Every node consumes ``config.outer_gap`` after its arc, and the remaining
    ``1 - outer_gap * len(graph)`` is shared in proportion to node weight. When
    edge weights sum to 1 the arcs plus gaps cover exactly one turn. A node
    with zero weight still gets a (zero-width) arc and its gap.
    """

    config = config or get_layout_config()
    gap = config.outer_gap
    scale = 1.0 - gap * len(graph)
    if scale < 0:
        logger.warning(
            "Outer gaps (%d x %.6g) exceed the full turn; arcs will run backwards",
            len(graph),
            gap,
        )
    r0, r1 = config.outer_band
    cx, cy = config.center

    arcs: List[OuterArc] = []
    cursor = 0.0
    for node_id, weight in graph.model:
        end = cursor + weight * scale
        arcs.append(OuterArc(node_id, cursor, end, r0, r1, cx, cy))
        cursor = end + gap

    logger.info("Outer ring: %d arc(s), cursor closed at %.9g", len(arcs), cursor)
    return arcs


apply_debug_logging(globals(), logger=logger)
