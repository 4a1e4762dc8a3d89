from __future__ import annotations

import json
import logging
import math

import pytest

from circos_layout import (
    LayoutConfig,
    LayoutResult,
    SAMPLE_MATRIX,
    build_graph,
    compute_layout,
    get_layout_config,
    parse_matrix,
    set_layout_config,
    svg_path_d,
)


def _sample_result() -> LayoutResult:
    return compute_layout(parse_matrix(SAMPLE_MATRIX).build())


def test_two_node_scenario() -> None:
    graph = build_graph(['A', 'B'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 1.0}])
    result = compute_layout(graph)

    a, b = result.outer_arcs
    assert (a.start, a.end) == pytest.approx((0.0, 0.49))
    assert (b.start, b.end) == pytest.approx((0.5, 0.99))
    assert [arc.node for arc in result.inner_arcs] == ['A', 'B']
    assert len(result.curves) == 1
    assert result.model == [('A', 0.5), ('B', 0.5)]


def test_sample_matrix_scenario() -> None:
    result = _sample_result()

    assert len(result.outer_arcs) == 9
    assert len(result.curves) == 20
    assert len(result.inner_arcs) == 40
    assert result.closure() == pytest.approx(1.0, abs=1e-12)
    for gene in ('Gene1', 'Gene2', 'Gene3', 'Gene4', 'Gene5'):
        assert len(result.inner_arcs_of(gene)) == 4
    for condition in ('Con1', 'Con2', 'Treat1', 'Treat2'):
        assert len(result.inner_arcs_of(condition)) == 5


def test_isolated_node_scenario() -> None:
    graph = build_graph(['A', 'B', 'C'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 1.0}])
    result = compute_layout(graph)

    assert result.outer_arc_of('C').span == 0.0
    assert result.inner_arcs_of('C') == []
    assert result.closure() == pytest.approx(1.0)


def test_layout_is_deterministic() -> None:
    first = _sample_result()
    second = _sample_result()

    assert first.outer_arcs == second.outer_arcs
    assert first.inner_arcs == second.inner_arcs
    assert [c.segments for c in first.curves] == [c.segments for c in second.curves]
    assert [svg_path_d(c) for c in first.curves] == [svg_path_d(c) for c in second.curves]


def test_result_lookups() -> None:
    result = _sample_result()

    assert result.outer_arc_of('Con1').node == 'Con1'
    assert result.curve_of('0').source_arc.node == 'Gene1'
    assert result.curve_of('0').target_arc.node == 'Con1'
    with pytest.raises(KeyError):
        result.outer_arc_of('missing')
    with pytest.raises(KeyError):
        result.curve_of('missing')


def test_result_is_immutable() -> None:
    result = _sample_result()

    with pytest.raises(AttributeError):
        result.curves = ()  # type: ignore[misc]
    with pytest.raises(AttributeError):
        result.outer_arcs[0].start = 0.5  # type: ignore[misc]
    assert isinstance(result.outer_arcs, tuple)


def test_to_dict_is_json_serializable() -> None:
    data = json.loads(json.dumps(_sample_result().to_dict()))

    assert [entry['name'] for entry in data['model']][:2] == ['Gene1', 'Gene2']
    assert len(data['outer_arcs']) == 9
    assert len(data['inner_arcs']) == 40
    assert [seg['op'] for seg in data['curves'][0]['segments']] == [
        'move',
        'arc',
        'quad',
        'arc',
        'quad',
        'close',
    ]
    assert data['curves'][0]['d'].startswith('M ')


def test_unnormalized_weights_warn(caplog) -> None:
    graph = build_graph(['A', 'B'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 4.0}])

    with caplog.at_level(logging.WARNING, logger='circos_layout'):
        result = compute_layout(graph)

    assert 'Edge weights sum to 4' in caplog.text
    assert not math.isclose(result.closure(), 1.0)


def test_default_config_is_used_and_replaceable() -> None:
    graph = build_graph(['A', 'B'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 1.0}])
    original = get_layout_config()
    try:
        set_layout_config(LayoutConfig(outer_gap=0.05, inner_gap=0.02))
        result = compute_layout(graph)
        assert result.config.outer_gap == 0.05
        assert result.outer_arcs[0].end == pytest.approx(0.45)
    finally:
        set_layout_config(original)
    assert get_layout_config() == LayoutConfig()


@pytest.mark.parametrize(
    'kwargs',
    [
        {'outer_gap': -0.01},
        {'inner_gap': float('nan')},
        {'ring_width': 0.0},
        {'inner_radius': 0.97},
        {'inner_radius': 0.04},
        {'center': (0.0,)},
    ],
)
def test_invalid_config_is_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        LayoutConfig(**kwargs)


def test_custom_center_moves_geometry() -> None:
    graph = build_graph(['A', 'B'], [{'id': '0', 'source': 'A', 'target': 'B', 'weight': 1.0}])
    result = compute_layout(graph, LayoutConfig(center=(2.0, -1.0)))

    curve = result.curves[0]
    assert curve.source_arc.center == (2.0, -1.0)
    assert curve.start_point == pytest.approx((2.0 + 0.55, -1.0))
    assert curve.segments[2].control == (2.0, -1.0)
