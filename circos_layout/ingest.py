"""Turn weight matrices and JSON graph descriptions into layout input."""

from __future__ import annotations

import csv
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .errors import MatrixError
from .graph import Graph, NodeId, build_graph

logger = logging.getLogger(__name__)

MatrixRows = Sequence[Sequence[Any]]

# Gene expression sample: five genes measured under four conditions.
SAMPLE_MATRIX: List[List[Any]] = [
    ["Gene", "Con1", "Con2", "Treat1", "Treat2"],
    ["Gene1", 87332, 87643, 84969, 87234],
    ["Gene2", 75643, 79184, 77444, 76810],
    ["Gene3", 87332, 87643, 84969, 87234],
    ["Gene4", 75643, 79184, 77444, 76810],
    ["Gene5", 87332, 87643, 84969, 87234],
]


@dataclass
class GraphInput:
    """Node ids and edge descriptions ready for :func:`build_graph`."""

    node_ids: List[NodeId] = field(default_factory=list)
    edges: List[Dict[str, Any]] = field(default_factory=list)

    def build(self) -> Graph:
        return build_graph(self.node_ids, self.edges)

    def normalized(self) -> "GraphInput":
        """Copy whose edge weights are divided by their total."""
        weights = [
            _cell_value(edge.get("weight"), f"[edge {edge.get('id', idx)}]")
            for idx, edge in enumerate(self.edges)
        ]
        total = math.fsum(weights)
        if total <= 0:
            raise MatrixError("edge weights sum to zero; cannot normalize")
        edges = [dict(edge, weight=w / total) for edge, w in zip(self.edges, weights)]
        return GraphInput(list(self.node_ids), edges)


def _cell_value(raw: Any, where: str) -> float:
    if isinstance(raw, bool):
        raise MatrixError(f"{where} expected a number, got {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise MatrixError(f"{where} expected a number, got {raw!r}") from None
    if not math.isfinite(value) or value < 0:
        raise MatrixError(f"{where} weight must be a finite number >= 0, got {raw!r}")
    return value


def parse_matrix(rows: MatrixRows) -> GraphInput:
    """Build a normalized :class:`GraphInput` from a labelled weight matrix.

    ``rows[0]`` is the header ``[corner, col_1, ..., col_n]``; every following
    row is ``[row_id, v_1, ..., v_n]``. Node ids are the row ids followed by
    the column ids (repeats keep their first position). Each cell becomes an
    edge ``row_id -> col_id`` with id ``"0"``, ``"1"``, ... in row-major order
    and weight ``cell / sum(all cells)``.
    """

    if len(rows) < 2:
        raise MatrixError("matrix needs a header row and at least one data row")
    header = [str(cell).strip() for cell in rows[0]]
    columns = header[1:]
    if not columns:
        raise MatrixError("matrix header has no column ids")

    row_ids: List[str] = []
    values: List[List[float]] = []
    for r, row in enumerate(rows[1:], start=2):
        if len(row) != len(header):
            raise MatrixError(f"[row {r}] expected {len(header)} cells, got {len(row)}")
        row_ids.append(str(row[0]).strip())
        values.append([_cell_value(raw, f"[row {r}, col {c}]") for c, raw in enumerate(row[1:], start=2)])

    total = math.fsum(v for row in values for v in row)
    if total <= 0:
        raise MatrixError("matrix weights sum to zero; nothing to lay out")

    node_ids = list(dict.fromkeys(row_ids + columns))
    edges: List[Dict[str, Any]] = []
    for source, row_values in zip(row_ids, values):
        for target, value in zip(columns, row_values):
            edges.append(
                {"id": str(len(edges)), "source": source, "target": target, "weight": value / total}
            )

    logger.info(
        "Parsed %dx%d matrix: %d node(s), %d edge(s), raw total %.6g",
        len(row_ids),
        len(columns),
        len(node_ids),
        len(edges),
        total,
    )
    return GraphInput(node_ids, edges)


def read_matrix_csv(path: Union[str, Path], delimiter: str = ",") -> GraphInput:
    with open(path, newline="", encoding="utf-8") as fin:
        rows = [row for row in csv.reader(fin, delimiter=delimiter) if any(cell.strip() for cell in row)]
    return parse_matrix(rows)


def read_graph_json(path: Union[str, Path]) -> GraphInput:
    """Read ``{"nodes": [...], "edges": [...]}``; nodes are ids or ``{"id": ...}``."""

    with open(path, encoding="utf-8") as fin:
        try:
            payload = json.load(fin)
        except json.JSONDecodeError as exc:
            raise MatrixError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise MatrixError(f"{path}: expected a JSON object with 'nodes' and 'edges'")
    for key in ("nodes", "edges"):
        if not isinstance(payload.get(key, []), list):
            raise MatrixError(f"{path}: '{key}' must be a list, got {type(payload[key]).__name__}")

    node_ids: List[NodeId] = []
    for item in payload.get("nodes", []):
        if isinstance(item, dict):
            if "id" not in item:
                raise MatrixError(f"{path}: node entry without 'id': {item!r}")
            item = item["id"]
        node_ids.append(str(item))

    edges: List[Dict[str, Any]] = []
    for idx, item in enumerate(payload.get("edges", [])):
        if not isinstance(item, dict):
            raise MatrixError(f"{path}: edge #{idx} is not an object")
        missing = [key for key in ("source", "target") if key not in item]
        if missing:
            raise MatrixError(f"{path}: edge #{idx} is missing {', '.join(missing)}")
        edges.append(
            {
                "id": str(item.get("id", idx)),
                "source": str(item["source"]),
                "target": str(item["target"]),
                "weight": item.get("weight", item.get("value")),
            }
        )

    logger.info("Read graph from %s: %d node(s), %d edge(s)", path, len(node_ids), len(edges))
    return GraphInput(node_ids, edges)


def load_graph_input(path: Union[str, Path]) -> GraphInput:
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return read_matrix_csv(path)
    if suffix == ".tsv":
        return read_matrix_csv(path, delimiter="\t")
    if suffix == ".json":
        return read_graph_json(path)
    raise MatrixError(f"unsupported input type {suffix or '(none)'!r}; expected .csv, .tsv or .json")


__all__ = [
    "SAMPLE_MATRIX",
    "GraphInput",
    "parse_matrix",
    "read_matrix_csv",
    "read_graph_json",
    "load_graph_input",
]
