import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from circos_layout import (
    CircosError,
    LayoutConfig,
    SAMPLE_MATRIX,
    compute_layout,
    generate_tikz_document,
    load_graph_input,
    parse_matrix,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _write_text(path_value: str, text: str, what: str) -> Path:
    output_path = Path(path_value)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Writing %s to %s", what, output_path)
    output_path.write_text(text, encoding="utf-8")
    return output_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out a weighted graph as a circos chord diagram")
    parser.add_argument(
        "path",
        nargs="?",
        help="Weight matrix (.csv/.tsv) or graph description (.json); omit to use the sample matrix",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--outer-gap",
        type=float,
        default=LayoutConfig.outer_gap,
        help=f"Gap after each outer arc, as a turn fraction (default: {LayoutConfig.outer_gap})",
    )
    parser.add_argument(
        "--inner-gap",
        type=float,
        default=LayoutConfig.inner_gap,
        help=f"Gap after each node's inner arcs (default: {LayoutConfig.inner_gap})",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Divide JSON edge weights by their total before layout",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document to the given path",
    )
    parser.add_argument(
        "--json-output-path",
        help="Write the layout geometry as JSON to the given path",
    )
    parser.add_argument("--title", help="Diagram title for the TikZ document")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        if args.path:
            logger.info("Reading graph input from %s", args.path)
            graph_input = load_graph_input(args.path)
        else:
            logger.info("No input given; using the built-in sample matrix")
            graph_input = parse_matrix(SAMPLE_MATRIX)
        if args.normalize:
            graph_input = graph_input.normalized()
        graph = graph_input.build()
        config = LayoutConfig(outer_gap=args.outer_gap, inner_gap=args.inner_gap)
        result = compute_layout(graph, config)
    except (CircosError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1)

    print(f"Nodes: {len(graph)}  Edges: {len(graph.edges)}")
    print("Outer arcs:")
    for (node_id, weight), arc in zip(result.model, result.outer_arcs):
        print(f"  {node_id}: weight={weight:.6f} [{arc.start:.6f}, {arc.end:.6f})")
    print(f"Inner arcs: {len(result.inner_arcs)}")
    print(f"Ribbons: {len(result.curves)}")
    print(f"Closure: {result.closure():.9f}")

    if args.json_output_path:
        path = _write_text(args.json_output_path, json.dumps(result.to_dict(), indent=2), "layout JSON")
        print(f"Layout JSON written to {path}")

    if args.tikz_output_path:
        document = generate_tikz_document(result, title=args.title)
        path = _write_text(args.tikz_output_path, document, "TikZ document")
        print(f"TikZ document written to {path}")


if __name__ == "__main__":
    main(sys.argv[1:])
