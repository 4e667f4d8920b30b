"""Tests for centralized logging behavior and configuration."""

import logging
from io import StringIO

import pytest

from linkbudget.logging import (
    DEFAULT_FORMAT,
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    log_trace,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Reset logging state before and after each test to avoid cross-test bleed."""
    reset_logging()
    yield
    reset_logging()


def test_effective_levels_enable_disable():
    """INFO by default, DEBUG after enable, back to INFO after disable."""
    logger = get_logger("linkbudget.test")

    capture = StringIO()
    handler = logging.StreamHandler(capture)
    handler.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(handler)

    logger.info("info-1")
    assert "info-1" in capture.getvalue()

    capture.seek(0)
    capture.truncate(0)
    logger.debug("debug-1")
    assert "debug-1" not in capture.getvalue()

    enable_debug_logging()
    logger.debug("debug-2")
    assert "debug-2" in capture.getvalue()

    capture.seek(0)
    capture.truncate(0)
    disable_debug_logging()
    logger.debug("debug-3")
    assert "debug-3" not in capture.getvalue()

    logger.removeHandler(handler)


def test_global_level_propagates_to_children_and_new_loggers():
    """Changing global level updates existing and new child loggers."""
    logger1 = get_logger("linkbudget.algorithms.direct")
    logger2 = get_logger("linkbudget.calculator")

    assert logger1.getEffectiveLevel() == logging.INFO
    assert logger2.getEffectiveLevel() == logging.INFO

    set_global_log_level(logging.WARNING)
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert logger2.getEffectiveLevel() == logging.WARNING

    logger3 = get_logger("linkbudget.cli")
    assert logger3.getEffectiveLevel() == logging.WARNING


def test_setup_root_logger_idempotent_no_duplicate_handlers():
    """Repeated setup should not accumulate handlers."""
    capture = StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(capture))

    root_logger = logging.getLogger("linkbudget")
    assert len(root_logger.handlers) == 1

    setup_root_logger(level=logging.DEBUG)
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO

    set_global_log_level(logging.ERROR)
    assert root_logger.level == logging.ERROR


def test_custom_format_string_applied():
    capture = StringIO()
    fmt = "LEVEL:%(levelname)s|NAME:%(name)s|MSG:%(message)s"
    setup_root_logger(
        level=logging.INFO, format_string=fmt, handler=logging.StreamHandler(capture)
    )

    get_logger("linkbudget.test.format").info("hello")
    out = capture.getvalue()
    assert "LEVEL:INFO" in out
    assert "NAME:linkbudget.test.format" in out
    assert "MSG:hello" in out


def test_calculation_failures_are_logged(sample_document):
    """A per-edge computation failure is reported through the package logger."""
    from linkbudget.calculator import calculate_document

    capture = StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(capture))

    sample_document["nodes"] += [{"id": "x1"}, {"id": "x2"}]
    sample_document["edges"].append(
        {"id": "bad", "source": "x1", "target": "x2", "link_type": "Smoke signal"}
    )
    report = calculate_document(sample_document)

    assert len(report.errors) == 1
    assert "Calculation failed for edge 'bad'" in capture.getvalue()


def test_default_format_tags_logger_name():
    capture = StringIO()
    setup_root_logger(handler=logging.StreamHandler(capture))

    get_logger("linkbudget.calculator").warning("edge skipped")
    assert "WARNING [linkbudget.calculator] edge skipped" in capture.getvalue()
    assert "[%(name)s]" in DEFAULT_FORMAT


def test_log_trace_renders_aligned_table():
    capture = StringIO()
    setup_root_logger(
        level=logging.DEBUG,
        format_string="%(message)s",
        handler=logging.StreamHandler(capture),
    )

    log_trace(
        get_logger("linkbudget.trace"),
        "Chain complete",
        ["#", "Hop", "Loss (dB)"],
        [(1, "A -> B", 5.0), (2, "B -> Cabinet", 0.125)],
    )

    lines = capture.getvalue().splitlines()
    assert lines[0] == "Chain complete"
    assert lines[1].split() == ["#", "Hop", "Loss", "(dB)"]
    assert lines[2].split() == ["1", "A", "->", "B", "5.00"]
    assert lines[3].split() == ["2", "B", "->", "Cabinet", "0.12"]
    assert lines[1].index("Loss") == lines[2].index("5.00")


def test_log_trace_is_skipped_below_level():
    capture = StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(capture))

    log_trace(get_logger("linkbudget.trace"), "hidden", ["a"], [(1,)])
    assert capture.getvalue() == ""


def test_chain_trace_lists_every_segment(make_node, make_edge):
    from linkbudget.algorithms.chain import chain_link_budget
    from linkbudget.graph.topology import build_topology_graph

    capture = StringIO()
    setup_root_logger(
        level=logging.DEBUG,
        format_string="%(message)s",
        handler=logging.StreamHandler(capture),
    )
    nodes = [make_node("A"), make_node("B", "Patch panel"), make_node("C")]
    edges = [
        make_edge("e1", "A", "B", "Optical", {"Range (km)": 10}),
        make_edge("e2", "C", "B", "Optical", {"Range (km)": 10}),
    ]
    chain_link_budget(
        nodes[0],
        nodes[2],
        make_edge("req", "A", "C"),
        build_topology_graph(nodes, edges),
    )

    out = capture.getvalue()
    assert "Chain complete: 20.00 dBm -> 15.00 dBm" in out
    assert "forward" in out and "reverse" in out
