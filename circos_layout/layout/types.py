"""Geometry records produced by the layout stages.

All coordinates live in the normalized unit-circle space: angles are turn
fractions (``0`` is 0°, ``1`` is 360°) and points are ``(x, y)`` pairs around
the layout centre, roughly within ``[-1, 1]``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Tuple, Union

from ..graph import EdgeId, NodeId

Point = Tuple[float, float]
EndKind = Literal["in", "out"]

TAU = 2.0 * math.pi


def fraction_to_radians(fraction: float) -> float:
    return fraction * TAU


def polar_point(center: Point, radius: float, fraction: float) -> Point:
    """Point at ``fraction`` of a turn on the circle ``(center, radius)``."""
    angle = fraction_to_radians(fraction)
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


@dataclass(frozen=True)
class OuterArc:
    """Ring sector owned by a single node."""

    node: NodeId
    start: float
    end: float
    inner_radius: float
    outer_radius: float
    cx: float = 0.0
    cy: float = 0.0

    @property
    def span(self) -> float:
        return self.end - self.start

    @property
    def mid(self) -> float:
        return (self.start + self.end) / 2.0

    @property
    def center(self) -> Point:
        return (self.cx, self.cy)


@dataclass(frozen=True)
class InnerArc:
    """Sub-arc of ``node`` reserved for one incident edge.

    ``far`` is the opposite endpoint of ``edge``. ``end_kind`` records whether
    the arc came from the node's in-edge list or out-edge list, which is what
    tells the two ends of a self-loop apart.
    """

    node: NodeId
    far: NodeId
    edge: EdgeId
    end_kind: EndKind
    parent: OuterArc
    start: float
    end: float
    inner_radius: float
    outer_radius: float
    cx: float = 0.0
    cy: float = 0.0

    @property
    def span(self) -> float:
        return self.end - self.start

    @property
    def mid(self) -> float:
        return (self.start + self.end) / 2.0

    @property
    def center(self) -> Point:
        return (self.cx, self.cy)

    def boundary_points(self) -> Tuple[Point, Point]:
        """Start and end points of the span on the arc's inner radius."""
        return (
            polar_point(self.center, self.inner_radius, self.start),
            polar_point(self.center, self.inner_radius, self.end),
        )


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class ArcTo:
    """Counter-clockwise circular arc from turn fraction ``start`` to ``end``."""

    center: Point
    radius: float
    start: float
    end: float
    point: Point

    @property
    def start_point(self) -> Point:
        return polar_point(self.center, self.radius, self.start)


@dataclass(frozen=True)
class QuadTo:
    control: Point
    point: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathSegment = Union[MoveTo, ArcTo, QuadTo, ClosePath]


@dataclass(frozen=True)
class Curve:
    """Closed ribbon joining the two inner arcs of ``edge``."""

    edge: EdgeId
    source_arc: InnerArc
    target_arc: InnerArc
    segments: Tuple[PathSegment, ...]

    @property
    def start_point(self) -> Point:
        return self.segments[0].point  # type: ignore[union-attr]

    def arcs(self) -> Tuple[ArcTo, ...]:
        return tuple(seg for seg in self.segments if isinstance(seg, ArcTo))


__all__ = [
    "Point",
    "EndKind",
    "TAU",
    "fraction_to_radians",
    "polar_point",
    "OuterArc",
    "InnerArc",
    "MoveTo",
    "ArcTo",
    "QuadTo",
    "ClosePath",
    "PathSegment",
    "Curve",
]
