"""Immutable weighted graph used as layout input."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from .errors import DuplicateEdgeId, InvalidEdgeWeight, UnknownNodeReference

logger = logging.getLogger(__name__)

NodeId = str
EdgeId = str


@dataclass(frozen=True)
class Node:
    id: NodeId


@dataclass(frozen=True)
class Edge:
    """Weighted connection between two nodes.

    ``source``/``target`` are node ids, not node objects; adjacency lives in
    the owning :class:`Graph`.
    """

    id: EdgeId
    source: NodeId
    target: NodeId
    weight: float

    @property
    def is_loop(self) -> bool:
        return self.source == self.target

    def other(self, node_id: NodeId) -> NodeId:
        """Return the endpoint opposite to ``node_id``."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        raise KeyError(f'node "{node_id}" is not an endpoint of edge "{self.id}"')


EdgeLike = Union[Edge, Mapping[str, Any]]


class Graph:
    """Nodes and edges in insertion order plus a per-node incidence index.

    Instances are produced by :class:`GraphBuilder` (or :func:`build_graph`)
    and never change afterwards.
    """

    __slots__ = ("_nodes", "_edges", "_in_index", "_out_index", "_weights")

    def __init__(
        self,
        nodes: Mapping[NodeId, Node],
        edges: Mapping[EdgeId, Edge],
        in_index: Mapping[NodeId, Tuple[EdgeId, ...]],
        out_index: Mapping[NodeId, Tuple[EdgeId, ...]],
    ) -> None:
        self._nodes: Dict[NodeId, Node] = dict(nodes)
        self._edges: Dict[EdgeId, Edge] = dict(edges)
        self._in_index: Dict[NodeId, Tuple[EdgeId, ...]] = dict(in_index)
        self._out_index: Dict[NodeId, Tuple[EdgeId, ...]] = dict(out_index)
        self._weights: Dict[NodeId, float] = {
            node_id: math.fsum(edge.weight for edge in self.edges_of(node_id)) / 2.0
            for node_id in self._nodes
        }

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges.values())

    @property
    def node_ids(self) -> Tuple[NodeId, ...]:
        return tuple(self._nodes)

    @property
    def model(self) -> List[Tuple[NodeId, float]]:
        """``(node id, node weight)`` pairs in node order."""
        return [(node_id, self._weights[node_id]) for node_id in self._nodes]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def node(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def edge(self, edge_id: EdgeId) -> Edge:
        return self._edges[edge_id]

    def in_edges(self, node_id: NodeId) -> List[Edge]:
        """Edges whose target is ``node_id``, in insertion order."""
        self._require(node_id)
        return [self._edges[eid] for eid in self._in_index.get(node_id, ())]

    def out_edges(self, node_id: NodeId) -> List[Edge]:
        """Edges whose source is ``node_id``, in insertion order."""
        self._require(node_id)
        return [self._edges[eid] for eid in self._out_index.get(node_id, ())]

    def edges_of(self, node_id: NodeId) -> List[Edge]:
        """In-edges followed by out-edges.

        This order drives the placement of a node's inner arcs, so it must
        stay stable. A self-loop appears twice, once in each half.
        """
        return self.in_edges(node_id) + self.out_edges(node_id)

    def weight(self, node_id: NodeId) -> float:
        """Half the summed weight of every edge incident to ``node_id``."""
        self._require(node_id)
        return self._weights[node_id]

    def total_weight(self) -> float:
        return math.fsum(edge.weight for edge in self._edges.values())

    def _require(self, node_id: NodeId) -> None:
        if node_id not in self._nodes:
            raise KeyError(f'unknown node "{node_id}"')


class GraphBuilder:
    """Collects nodes and edges and validates them in one :meth:`build` step."""

    def __init__(self) -> None:
        self._node_ids: Dict[NodeId, None] = {}
        self._edges: List[Edge] = []

    def add_node(self, node_id: NodeId) -> bool:
        """Add ``node_id`` if not yet present. Returns ``True`` if added."""
        node_id = str(node_id)
        if node_id in self._node_ids:
            return False
        self._node_ids[node_id] = None
        return True

    def add_nodes(self, node_ids: Iterable[NodeId]) -> "GraphBuilder":
        for node_id in node_ids:
            self.add_node(node_id)
        return self

    def add_edge(
        self,
        edge_id: EdgeId,
        source: NodeId,
        target: NodeId,
        weight: float,
    ) -> "GraphBuilder":
        self._edges.append(Edge(str(edge_id), str(source), str(target), weight))
        return self

    def add_edges(self, edges: Iterable[EdgeLike]) -> "GraphBuilder":
        for item in edges:
            self._edges.append(_coerce_edge(item))
        return self

    def build(self) -> Graph:
        nodes = {node_id: Node(node_id) for node_id in self._node_ids}
        edges: Dict[EdgeId, Edge] = {}
        in_index: Dict[NodeId, List[EdgeId]] = {}
        out_index: Dict[NodeId, List[EdgeId]] = {}

        for edge in self._edges:
            if edge.id in edges:
                raise DuplicateEdgeId(edge.id)
            if edge.source not in nodes:
                raise UnknownNodeReference(edge.id, edge.source, "source")
            if edge.target not in nodes:
                raise UnknownNodeReference(edge.id, edge.target, "target")
            edge = replace(edge, weight=_checked_weight(edge))
            edges[edge.id] = edge
            out_index.setdefault(edge.source, []).append(edge.id)
            in_index.setdefault(edge.target, []).append(edge.id)

        graph = Graph(
            nodes,
            edges,
            {key: tuple(value) for key, value in in_index.items()},
            {key: tuple(value) for key, value in out_index.items()},
        )
        logger.debug("Built %r", graph)
        return graph


def _checked_weight(edge: Edge) -> float:
    value = edge.weight
    if isinstance(value, bool):
        raise InvalidEdgeWeight(edge.id, value)
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise InvalidEdgeWeight(edge.id, value) from None
    if not math.isfinite(weight) or weight < 0:
        raise InvalidEdgeWeight(edge.id, value)
    return weight


def _coerce_edge(item: EdgeLike) -> Edge:
    if isinstance(item, Edge):
        return item
    try:
        edge_id = item["id"]
        source = item["source"]
        target = item["target"]
    except KeyError as exc:
        raise TypeError(f"edge description is missing key {exc.args[0]!r}: {item!r}") from None
    weight = item.get("weight", item.get("value"))
    return Edge(str(edge_id), str(source), str(target), weight)  # type: ignore[arg-type]


def build_graph(node_ids: Iterable[NodeId], edges: Iterable[EdgeLike]) -> Graph:
    """Assemble a :class:`Graph` from node ids and edge descriptions.

    Raises :class:`UnknownNodeReference` when an edge endpoint is missing from
    ``node_ids``; no graph is produced in that case.
    """

    builder = GraphBuilder().add_nodes(node_ids).add_edges(edges)
    graph = builder.build()
    logger.info(
        "Graph ready: %d node(s), %d edge(s), total weight %.6g",
        len(graph),
        len(graph.edges),
        graph.total_weight(),
    )
    return graph


__all__ = [
    "NodeId",
    "EdgeId",
    "Node",
    "Edge",
    "Graph",
    "GraphBuilder",
    "build_graph",
]
