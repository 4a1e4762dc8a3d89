"""TikZ renderer for circos layouts."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..layout.result import LayoutResult
from ..layout.types import ArcTo, ClosePath, MoveTo, PathSegment, QuadTo
from .utils import color_name, latex_escape

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

DEGREES_PER_TURN = 360.0
EPS_SPAN = 1e-9
LABEL_OFFSET_CM = 0.25

# Default categorical palette (the ECharts series colors).
DEFAULT_PALETTE: Tuple[str, ...] = (
    "5470C6",
    "91CC75",
    "FAC858",
    "EE6666",
    "73C0DE",
    "3BA272",
    "FC8452",
    "9A60B4",
    "EA7CCC",
)

standalone_tpl = r"""\documentclass[border=4pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage{tikz}
\tikzset{
  cs/outer/.style={draw=white, line width=0.3pt},
  cs/inner/.style={draw=white, line width=0.2pt},
  cs/ribbon/.style={draw=none},
  cs/label/.style={font=\footnotesize, inner sep=1pt},
  cs/title/.style={font=\bfseries, anchor=south},
}
\begin{document}
%s
\end{document}
"""


@dataclass
class SectorSpec:
    """Ring sector in surface units (cm), angles in degrees."""

    node: str
    color: str
    center: Point
    start_deg: float
    end_deg: float
    r0: float
    r1: float
    level: str  # "outer" or "inner"


@dataclass
class RibbonSpec:
    edge: str
    color: str
    segments: List[PathSegment]


@dataclass
class LabelSpec:
    node: str
    text: str
    position: Point
    anchor_deg: float


@dataclass
class RenderPlan:
    colors: Dict[str, str]
    sectors: List[SectorSpec] = field(default_factory=list)
    ribbons: List[RibbonSpec] = field(default_factory=list)
    labels: List[LabelSpec] = field(default_factory=list)
    title: Optional[str] = None
    title_position: Point = (0.0, 0.0)
    notes: List[str] = field(default_factory=list)


def generate_tikz_document(
    result: LayoutResult,
    *,
    title: Optional[str] = None,
    radius_cm: float = 4.0,
    palette: Optional[Sequence[str]] = None,
    labels: bool = True,
    ribbon_opacity: float = 0.6,
) -> str:
    """Render a standalone LaTeX document holding the diagram."""

    tikz_code = generate_tikz_code(
        result,
        radius_cm=radius_cm,
        palette=palette,
        labels=labels,
        ribbon_opacity=ribbon_opacity,
        title=title,
    )
    return standalone_tpl % tikz_code


def generate_tikz_code(
    result: LayoutResult,
    *,
    radius_cm: float = 4.0,
    palette: Optional[Sequence[str]] = None,
    labels: bool = True,
    ribbon_opacity: float = 0.6,
    title: Optional[str] = None,
) -> str:
    """Generate a ``tikzpicture`` for ``result`` scaled to ``radius_cm``."""

    if not isinstance(result, LayoutResult):
        raise TypeError("result must be an instance of LayoutResult")
    if radius_cm <= 0 or not math.isfinite(radius_cm):
        raise ValueError("radius_cm must be a positive finite number")
    if not 0.0 <= ribbon_opacity <= 1.0:
        raise ValueError("ribbon_opacity must lie in [0, 1]")

    node_ids = [node_id for node_id, _ in result.model]
    colors = _assign_colors(node_ids, DEFAULT_PALETTE if palette is None else palette)
    plan = _build_render_plan(result, radius_cm, colors, labels=labels, title=title)
    for note in plan.notes:
        logger.debug("TikZ render note: %s", note)
    return _emit_tikz_picture(plan, ribbon_opacity)


# ---------------------------------------------------------------------------
# Render plan construction
# ---------------------------------------------------------------------------

def _assign_colors(node_ids: Sequence[str], palette: Sequence[str]) -> Dict[str, str]:
    if not palette:
        raise ValueError("palette must contain at least one color")
    cleaned = [str(entry).lstrip("#").upper() for entry in palette]
    for entry in cleaned:
        if len(entry) != 6 or any(ch not in "0123456789ABCDEF" for ch in entry):
            raise ValueError(f"palette entries must be 6-digit hex colors, got {entry!r}")
    return {node_id: cleaned[idx % len(cleaned)] for idx, node_id in enumerate(node_ids)}


def _scale_point(p: Point, scale: float) -> Point:
    return (p[0] * scale, p[1] * scale)


def _scale_segment(seg: PathSegment, scale: float) -> PathSegment:
    if isinstance(seg, MoveTo):
        return MoveTo(_scale_point(seg.point, scale))
    if isinstance(seg, ArcTo):
        return ArcTo(
            _scale_point(seg.center, scale),
            seg.radius * scale,
            seg.start,
            seg.end,
            _scale_point(seg.point, scale),
        )
    if isinstance(seg, QuadTo):
        return QuadTo(_scale_point(seg.control, scale), _scale_point(seg.point, scale))
    return seg


def _build_render_plan(
    result: LayoutResult,
    radius_cm: float,
    colors: Dict[str, str],
    *,
    labels: bool,
    title: Optional[str],
) -> RenderPlan:
    plan = RenderPlan(colors=colors)
    color_names = {node_id: color_name(idx) for idx, node_id in enumerate(colors)}

    for level, arcs in (("outer", result.outer_arcs), ("inner", result.inner_arcs)):
        for arc in arcs:
            if arc.span <= EPS_SPAN:
                plan.notes.append(f"skip zero-width {level} arc of {arc.node}")
                continue
            plan.sectors.append(
                SectorSpec(
                    node=arc.node,
                    color=color_names[arc.node],
                    center=_scale_point(arc.center, radius_cm),
                    start_deg=arc.start * DEGREES_PER_TURN,
                    end_deg=arc.end * DEGREES_PER_TURN,
                    r0=arc.inner_radius * radius_cm,
                    r1=arc.outer_radius * radius_cm,
                    level=level,
                )
            )

    for curve in result.curves:
        if curve.source_arc.span <= EPS_SPAN and curve.target_arc.span <= EPS_SPAN:
            plan.notes.append(f"skip zero-weight ribbon {curve.edge}")
            continue
        plan.ribbons.append(
            RibbonSpec(
                edge=curve.edge,
                color=color_names[curve.source_arc.node],
                segments=[_scale_segment(seg, radius_cm) for seg in curve.segments],
            )
        )

    if labels:
        for arc in result.outer_arcs:
            if arc.span <= EPS_SPAN:
                continue
            angle = arc.mid * 2.0 * math.pi
            r = arc.outer_radius * radius_cm + LABEL_OFFSET_CM
            cx, cy = _scale_point(arc.center, radius_cm)
            plan.labels.append(
                LabelSpec(
                    node=arc.node,
                    text=latex_escape(arc.node),
                    position=(cx + r * math.cos(angle), cy + r * math.sin(angle)),
                    anchor_deg=(arc.mid * DEGREES_PER_TURN + 180.0) % DEGREES_PER_TURN,
                )
            )

    if title:
        plan.title = latex_escape(title)
        top = max((arc.outer_radius for arc in result.outer_arcs), default=1.0)
        cx, cy = _scale_point(result.config.center, radius_cm)
        plan.title_position = (cx, cy + top * radius_cm + 3 * LABEL_OFFSET_CM)

    return plan


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------

def _emit_tikz_picture(plan: RenderPlan, ribbon_opacity: float) -> str:
    lines: List[str] = ["\\begin{tikzpicture}"]

    for idx, (node_id, hex_color) in enumerate(plan.colors.items()):
        lines.append(f"  \\definecolor{{{color_name(idx)}}}{{HTML}}{{{hex_color}}}")
    if plan.colors:
        lines.append("")

    for sector in plan.sectors:
        lines.append(f"  {_sector_path(sector)}")
    if plan.sectors:
        lines.append("")

    for ribbon in plan.ribbons:
        body = _ribbon_path(ribbon.segments)
        lines.append(
            f"  \\fill[cs/ribbon, {ribbon.color}, fill opacity={_format_float(ribbon_opacity)}] {body};"
        )
    if plan.ribbons:
        lines.append("")

    for label in plan.labels:
        x, y = label.position
        lines.append(
            "  \\node[cs/label, anchor={anchor}] at ({x}, {y}) {{{text}}};".format(
                anchor=_format_float(label.anchor_deg),
                x=_format_float(x),
                y=_format_float(y),
                text=label.text,
            )
        )
    if plan.title:
        x, y = plan.title_position
        lines.append(f"  \\node[cs/title] at ({_format_float(x)}, {_format_float(y)}) {{{plan.title}}};")

    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def _coord(p: Point) -> str:
    return f"({_format_float(p[0])}, {_format_float(p[1])})"


def _arc_op(start_deg: float, end_deg: float, radius: float) -> str:
    return (
        f"arc[start angle={_format_float(start_deg)}, end angle={_format_float(end_deg)}, "
        f"radius={_format_float(radius)}]"
    )


def _polar(center: Point, radius: float, deg: float) -> Point:
    rad = math.radians(deg)
    return (center[0] + radius * math.cos(rad), center[1] + radius * math.sin(rad))


def _sector_path(sector: SectorSpec) -> str:
    outer_start = _polar(sector.center, sector.r1, sector.start_deg)
    inner_end = _polar(sector.center, sector.r0, sector.end_deg)
    return (
        f"\\fill[cs/{sector.level}, {sector.color}] {_coord(outer_start)} "
        f"{_arc_op(sector.start_deg, sector.end_deg, sector.r1)} -- {_coord(inner_end)} "
        f"{_arc_op(sector.end_deg, sector.start_deg, sector.r0)} -- cycle;"
    )


def _quad_as_cubic(p0: Point, control: Point, p1: Point) -> Tuple[Point, Point]:
    c1 = (p0[0] + 2.0 / 3.0 * (control[0] - p0[0]), p0[1] + 2.0 / 3.0 * (control[1] - p0[1]))
    c2 = (p1[0] + 2.0 / 3.0 * (control[0] - p1[0]), p1[1] + 2.0 / 3.0 * (control[1] - p1[1]))
    return c1, c2


def _ribbon_path(segments: Sequence[PathSegment]) -> str:
    tokens: List[str] = []
    current: Point = (0.0, 0.0)
    for seg in segments:
        if isinstance(seg, MoveTo):
            tokens.append(_coord(seg.point))
            current = seg.point
        elif isinstance(seg, ArcTo):
            tokens.append(
                _arc_op(seg.start * DEGREES_PER_TURN, seg.end * DEGREES_PER_TURN, seg.radius)
            )
            current = seg.point
        elif isinstance(seg, QuadTo):
            c1, c2 = _quad_as_cubic(current, seg.control, seg.point)
            tokens.append(f".. controls {_coord(c1)} and {_coord(c2)} .. {_coord(seg.point)}")
            current = seg.point
        elif isinstance(seg, ClosePath):
            tokens.append("-- cycle")
    return " ".join(tokens)


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
