import logging

import numpy as np
import pytest

from circos_layout import SAMPLE_MATRIX, compute_layout, parse_matrix
from circos_layout.logging_utils import _safe_repr, apply_debug_logging, debug_log_call


def test_debug_log_call_logs_entry_and_exit(caplog):
    logger = logging.getLogger("circos_layout.tests.tracing")

    @debug_log_call(logger)
    def add(a, b=0):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="circos_layout.tests.tracing"):
        assert add(2, b=3) == 5

    assert "Entering" in caplog.text and "add" in caplog.text
    assert "kwargs={b=3}" in caplog.text
    assert "-> 5" in caplog.text


def test_debug_log_call_is_silent_above_debug(caplog):
    logger = logging.getLogger("circos_layout.tests.quiet")

    @debug_log_call(logger)
    def boom():
        raise RuntimeError("nope")

    with caplog.at_level(logging.INFO, logger="circos_layout.tests.quiet"):
        with pytest.raises(RuntimeError):
            boom()

    assert caplog.text == ""


def test_apply_debug_logging_wraps_public_functions_only():
    def public():
        return 1

    def _private():
        return 2

    public.__module__ = "fake_module"
    _private.__module__ = "fake_module"
    namespace = {"__name__": "fake_module", "public": public, "_private": _private}

    apply_debug_logging(namespace)

    assert getattr(namespace["public"], "_debug_logging_wrapped", False)
    assert namespace["_private"] is _private
    assert namespace["public"]() == 1


def test_safe_repr_summarizes_arrays_and_layout_records():
    assert _safe_repr(np.zeros((3, 2))).startswith("ndarray(shape=(3, 2)")

    result = compute_layout(parse_matrix(SAMPLE_MATRIX).build())
    assert _safe_repr(result) == "LayoutResult(outer=9, inner=40, curves=20)"
    assert _safe_repr(result.graph) == "Graph(nodes=9, edges=20)"
    assert _safe_repr(result.outer_arcs[0]).startswith("OuterArc(Gene1, [0, ")
    assert _safe_repr(list(result.curves)).endswith("... +16]")


def test_layout_stages_trace_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="circos_layout"):
        compute_layout(parse_matrix(SAMPLE_MATRIX).build())

    assert "Entering partition_outer" in caplog.text
    assert "Exiting synthesize_curves" in caplog.text
