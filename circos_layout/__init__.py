from .errors import (
    CircosError,
    GraphError,
    UnknownNodeReference,
    DuplicateEdgeId,
    InvalidEdgeWeight,
    LayoutInvariantError,
    MissingOuterArc,
    SectorNotFound,
    MatrixError,
)
from .graph import Node, Edge, Graph, GraphBuilder, build_graph
from .ingest import (
    SAMPLE_MATRIX,
    GraphInput,
    parse_matrix,
    read_matrix_csv,
    read_graph_json,
    load_graph_input,
)
from .layout import (
    LayoutConfig,
    get_layout_config,
    set_layout_config,
    partition_outer,
    partition_inner,
    synthesize_curves,
    svg_path_d,
    sample_curve,
    compute_layout,
    LayoutResult,
    OuterArc,
    InnerArc,
    Curve,
    MoveTo,
    ArcTo,
    QuadTo,
    ClosePath,
)
from .tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape

__version__ = "0.1.0"

__all__ = [
    'CircosError',
    'GraphError',
    'UnknownNodeReference',
    'DuplicateEdgeId',
    'InvalidEdgeWeight',
    'LayoutInvariantError',
    'MissingOuterArc',
    'SectorNotFound',
    'MatrixError',
    'Node',
    'Edge',
    'Graph',
    'GraphBuilder',
    'build_graph',
    'SAMPLE_MATRIX',
    'GraphInput',
    'parse_matrix',
    'read_matrix_csv',
    'read_graph_json',
    'load_graph_input',
    'LayoutConfig',
    'get_layout_config',
    'set_layout_config',
    'partition_outer',
    'partition_inner',
    'synthesize_curves',
    'svg_path_d',
    'sample_curve',
    'compute_layout',
    'LayoutResult',
    'OuterArc',
    'InnerArc',
    'Curve',
    'MoveTo',
    'ArcTo',
    'QuadTo',
    'ClosePath',
    'generate_tikz_code',
    'generate_tikz_document',
    'latex_escape',
]
