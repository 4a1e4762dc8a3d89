import json
import math

import pytest

from circos_layout.errors import MatrixError, UnknownNodeReference
from circos_layout.ingest import (
    SAMPLE_MATRIX,
    GraphInput,
    load_graph_input,
    parse_matrix,
    read_graph_json,
    read_matrix_csv,
)


def test_parse_sample_matrix():
    graph_input = parse_matrix(SAMPLE_MATRIX)

    assert graph_input.node_ids == [
        'Gene1', 'Gene2', 'Gene3', 'Gene4', 'Gene5', 'Con1', 'Con2', 'Treat1', 'Treat2',
    ]
    assert len(graph_input.edges) == 20
    assert [e['id'] for e in graph_input.edges] == [str(i) for i in range(20)]
    first = graph_input.edges[0]
    assert (first['source'], first['target']) == ('Gene1', 'Con1')
    total = sum(sum(row[1:]) for row in SAMPLE_MATRIX[1:])
    assert first['weight'] == pytest.approx(87332 / total)
    assert math.fsum(e['weight'] for e in graph_input.edges) == pytest.approx(1.0)


def test_square_matrix_collapses_shared_ids_into_self_loops():
    graph = parse_matrix([['', 'A', 'B'], ['A', 0, 1], ['B', 3, 0]]).build()

    assert graph.node_ids == ('A', 'B')
    assert len(graph.edges) == 4
    assert graph.edge('0').is_loop
    assert graph.edge('0').weight == 0.0
    assert graph.edge('2').weight == pytest.approx(0.75)


@pytest.mark.parametrize(
    'rows, message',
    [
        ([['corner', 'A']], 'header row and at least one data row'),
        ([['corner'], ['x']], 'no column ids'),
        ([['corner', 'A', 'B'], ['x', 1]], 'expected 3 cells'),
        ([['corner', 'A'], ['x', 'many']], 'expected a number'),
        ([['corner', 'A'], ['x', -1]], 'finite number >= 0'),
        ([['corner', 'A'], ['x', 0]], 'sum to zero'),
    ],
)
def test_malformed_matrices(rows, message):
    with pytest.raises(MatrixError) as exc:
        parse_matrix(rows)

    assert message in str(exc.value)


def test_read_matrix_csv(tmp_path):
    path = tmp_path / 'matrix.csv'
    path.write_text('Gene,Con1,Con2\nGene1, 1, 3\n\nGene2,2,2\n', encoding='utf-8')

    graph_input = read_matrix_csv(path)

    assert graph_input.node_ids == ['Gene1', 'Gene2', 'Con1', 'Con2']
    assert [e['weight'] for e in graph_input.edges] == pytest.approx([0.125, 0.375, 0.25, 0.25])


def test_load_graph_input_dispatches_on_suffix(tmp_path):
    tsv = tmp_path / 'matrix.tsv'
    tsv.write_text('g\tA\nB\t5\n', encoding='utf-8')

    graph = load_graph_input(tsv).build()

    assert graph.node_ids == ('B', 'A')
    assert graph.edge('0').weight == 1.0

    with pytest.raises(MatrixError, match='unsupported input type'):
        load_graph_input(tmp_path / 'matrix.xlsx')


def test_read_graph_json(tmp_path):
    path = tmp_path / 'graph.json'
    path.write_text(
        json.dumps(
            {
                'nodes': [{'id': 'A'}, 'B'],
                'edges': [
                    {'id': 'x', 'source': 'A', 'target': 'B', 'weight': 2},
                    {'source': 'B', 'target': 'A', 'value': 6},
                ],
            }
        ),
        encoding='utf-8',
    )

    graph_input = read_graph_json(path)
    assert graph_input.node_ids == ['A', 'B']
    assert [e['id'] for e in graph_input.edges] == ['x', '1']

    graph = graph_input.normalized().build()
    assert graph.edge('x').weight == pytest.approx(0.25)
    assert graph.edge('1').weight == pytest.approx(0.75)


def test_read_graph_json_rejects_bad_payloads(tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('{"nodes": ["A"], "edges": [{"source": "A"}]}', encoding='utf-8')
    with pytest.raises(MatrixError, match='missing target'):
        read_graph_json(bad)

    broken = tmp_path / 'broken.json'
    broken.write_text('{not json', encoding='utf-8')
    with pytest.raises(MatrixError, match='invalid JSON'):
        read_graph_json(broken)


def test_graph_input_build_propagates_unknown_nodes():
    graph_input = GraphInput(['A'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 1.0}])

    with pytest.raises(UnknownNodeReference):
        graph_input.build()


def test_normalized_rejects_zero_total():
    graph_input = GraphInput(['A', 'B'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 0}])

    with pytest.raises(MatrixError):
        graph_input.normalized()


@pytest.mark.parametrize(
    'payload, key',
    [
        ({'nodes': 'AB', 'edges': []}, 'nodes'),
        ({'nodes': ['A', 'B'], 'edges': {'0': {'source': 'A', 'target': 'B'}}}, 'edges'),
    ],
)
def test_read_graph_json_requires_lists(tmp_path, payload, key):
    path = tmp_path / 'graph.json'
    path.write_text(json.dumps(payload), encoding='utf-8')

    with pytest.raises(MatrixError, match=f"'{key}' must be a list"):
        read_graph_json(path)
