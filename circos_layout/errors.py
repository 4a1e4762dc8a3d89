"""Exception hierarchy shared by the graph model, ingestion and layout stages."""

from __future__ import annotations

from typing import Optional


class CircosError(Exception):
    """Base class for every error raised by :mod:`circos_layout`."""


class GraphError(CircosError, ValueError):
    """Raised when graph input cannot be assembled into a :class:`Graph`."""


class UnknownNodeReference(GraphError):
    """An edge names a source or target that is not in the node set."""

    def __init__(self, edge_id: str, node_id: str, role: str = "endpoint") -> None:
        self.edge_id = edge_id
        self.node_id = node_id
        self.role = role
        super().__init__(f'edge "{edge_id}" references unknown {role} node "{node_id}"')


class DuplicateEdgeId(GraphError):
    def __init__(self, edge_id: str) -> None:
        self.edge_id = edge_id
        super().__init__(f'duplicate edge id "{edge_id}"')


class InvalidEdgeWeight(GraphError):
    def __init__(self, edge_id: str, weight: object) -> None:
        self.edge_id = edge_id
        self.weight = weight
        super().__init__(f'edge "{edge_id}" has invalid weight {weight!r} (expected a finite number >= 0)')


class LayoutInvariantError(CircosError, RuntimeError):
    """Internal inconsistency between layout stages; never recovered from."""


class MissingOuterArc(LayoutInvariantError):
    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f'outer arc not found for node "{node_id}"')


class SectorNotFound(LayoutInvariantError):
    def __init__(self, edge_id: str, home: str, far: str, end_kind: Optional[str] = None) -> None:
        self.edge_id = edge_id
        self.home = home
        self.far = far
        self.end_kind = end_kind
        side = f" ({end_kind} side)" if end_kind else ""
        super().__init__(f'inner arc not found for edge "{edge_id}" {home} -> {far}{side}')


class MatrixError(CircosError, ValueError):
    """Raised when a weight matrix or graph description is malformed."""


__all__ = [
    "CircosError",
    "GraphError",
    "UnknownNodeReference",
    "DuplicateEdgeId",
    "InvalidEdgeWeight",
    "LayoutInvariantError",
    "MissingOuterArc",
    "SectorNotFound",
    "MatrixError",
]
