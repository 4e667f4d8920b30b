"""Command-line interface for linkbudget."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, NoReturn, Optional

import jsonschema
import yaml

from linkbudget.calculator import calculate
from linkbudget.defaults import available_link_types, get_default_params
from linkbudget.dsl.loader import load_topology_yaml
from linkbudget.graph.topology import TopologyGraph
from linkbudget.logging import get_logger, set_global_log_level
from linkbudget.model.equipment import EquipmentCatalog, load_default_catalog
from linkbudget.model.network import Topology
from linkbudget.results.link import CalculationReport
from linkbudget.types.base import LinkType
from linkbudget.validation import TopologyValidationError, validate_topology

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Optional clipping width for cells

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = []
    for col_idx in range(len(clipped_headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = []
    lines.append(format_row(clipped_headers))
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in clipped_rows:
        lines.append(format_row(row))

    return "\n".join(lines)


def _format_number(value: Any, digits: int = 2) -> str:
    """Return a float rounded for display, or ``str(value)`` when not numeric."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)
    return f"{v:.{digits}f}"


def _format_cost(value: Any) -> str:
    """Return cost formatted with up to three decimals.

    Examples:
        0.1 -> "0.1"; 10.0 -> "10"; 1234.567 -> "1,234.567".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)

    s = f"{v:,.3f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _format_duration(seconds: float) -> str:
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _load_catalog(path: Optional[Path]) -> EquipmentCatalog:
    """Return the packaged catalog, extended by the YAML file at ``path``."""
    catalog = load_default_catalog()
    if path is not None:
        logger.info(f"Merging equipment catalog from: {path}")
        catalog.merge(EquipmentCatalog.from_yaml(path.read_text()))
    return catalog


def _load_topology(path: Path) -> Topology:
    logger.info(f"Loading topology from: {path}")
    return load_topology_yaml(path.read_text())


def _fail(message: str, details: Optional[List[str]] = None) -> NoReturn:
    logger.error(message)
    print(f"❌ ERROR: {message}")
    for detail in details or []:
        print(f"   - {detail}")
    sys.exit(1)


def _summary_rows(report: CalculationReport) -> List[List[str]]:
    rows = []
    for outcome in report:
        if not outcome.ok:
            rows.append([outcome.edge_id, "-", "-", "-", "-", "-", "-", outcome.error])
            continue
        result = outcome.result
        kind = f"chain ({result.segment_count})" if result.is_chain_link else "direct"
        rows.append(
            [
                outcome.edge_id,
                result.link_type.value,
                _format_number(result.loss),
                _format_number(result.received_power),
                _format_number(result.snr_db),
                _format_number(result.capacity),
                _format_number(result.latency),
                kind,
            ]
        )
    return rows


def _calculate_topology(
    path: Path,
    results_path: Optional[Path],
    stdout: bool,
    catalog_path: Optional[Path] = None,
) -> None:
    """Calculate a topology file and export results as JSON.

    Args:
        path: Topology YAML or JSON file.
        results_path: Optional file where JSON results are written.
        stdout: Whether to also print the JSON results to stdout.
        catalog_path: Optional YAML file with extra equipment definitions.
    """
    _start_time = perf_counter()

    try:
        topology = _load_topology(path)
        catalog = _load_catalog(catalog_path)
        report = calculate(topology, catalog=catalog)
    except FileNotFoundError as e:
        _fail(f"File not found: {e.filename}")
    except TopologyValidationError as e:
        _fail("Topology failed validation", e.details)
    except jsonschema.ValidationError as e:
        _fail(f"Invalid topology document: {e.message}")
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"Failed to load topology: {type(e).__name__}: {e}")

    print(
        f"✅ Computed {len(report)} {_plural(len(report), 'edge')}: "
        f"{len(report.successes)} ok, {len(report.errors)} failed"
    )
    table = _format_table(
        [
            "Edge",
            "Type",
            "Loss (dB)",
            "Rx (dBm)",
            "SNR (dB)",
            "Capacity (Mbps)",
            "Latency (ms)",
            "Path",
        ],
        _summary_rows(report),
        max_col_width=48,
    )
    if table:
        print(table)
    print(f"   Total cost: {_format_cost(report.total_cost)}")

    json_str = json.dumps(report.to_dict(), indent=2, allow_nan=False)
    if results_path is not None:
        results_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing results to: {results_path}")
        results_path.write_text(json_str)
        print(f"✅ Results written to: {results_path}")
    if stdout:
        print(json_str)

    logger.info(
        f"Calculation completed in {_format_duration(perf_counter() - _start_time)}"
    )


def _show_defaults(link_type: str) -> None:
    """Print the default parameter set of ``link_type`` as JSON."""
    params = get_default_params(link_type)
    if params is None:
        known = ", ".join(available_link_types())
        _fail(f"Unknown link type '{link_type}'. Known types: {known}")
    print(json.dumps(params, indent=2, ensure_ascii=False))


def _inspect_topology(path: Path, catalog_path: Optional[Path] = None) -> None:
    """Print counts, node classifications and validation findings.

    Exits with status 1 when the file cannot be loaded or a business rule is
    broken.
    """
    try:
        topology = _load_topology(path)
        catalog = _load_catalog(catalog_path)
    except FileNotFoundError as e:
        _fail(f"File not found: {e.filename}")
    except jsonschema.ValidationError as e:
        _fail(f"Invalid topology document: {e.message}")
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"Failed to load topology: {type(e).__name__}: {e}")

    graph = TopologyGraph.from_topology(topology)
    n_nodes = len(topology.nodes)
    n_edges = len(topology.edges)
    print("TOPOLOGY")
    print(f"   Nodes: {n_nodes}")
    print(f"   Edges: {n_edges}")

    node_rows = []
    for node in topology.nodes.values():
        labels = catalog.classify(node).labels()
        node_rows.append(
            [
                node.id,
                node.label,
                node.equipment_type or "-",
                ", ".join(labels) or "-",
                str(len(graph.connections(node.id))),
            ]
        )
    if node_rows:
        print()
        print(
            _format_table(
                ["Node", "Label", "Equipment", "Capabilities", "Degree"],
                node_rows,
                max_col_width=32,
            )
        )

    edge_rows = []
    for edge in topology.iter_edges():
        try:
            technology = edge.technology.value
        except ValueError:
            technology = f"{edge.link_type} (unknown)"
        dangling = edge.source not in graph or edge.target not in graph
        edge_rows.append(
            [
                edge.id,
                edge.source,
                edge.target,
                technology,
                "missing endpoint" if dangling else "ok",
            ]
        )
    if edge_rows:
        print()
        print(
            _format_table(
                ["Edge", "Source", "Target", "Link type", "Status"],
                edge_rows,
                max_col_width=32,
            )
        )

    findings = validate_topology(topology)
    print()
    if findings:
        _fail(
            f"{len(findings)} validation {_plural(len(findings), 'error')}",
            findings,
        )
    print("✅ Topology is valid")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``linkbudget`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="linkbudget",
        description="Compute link budgets and capacities for network topologies.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{calculate,defaults,inspect}",
        help="Available commands",
    )

    calc_parser = subparsers.add_parser(
        "calculate", help="Compute every edge of a topology"
    )
    calc_parser.add_argument(
        "topology", type=Path, help="Path to topology YAML or JSON"
    )
    calc_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Write JSON results to this file",
    )
    calc_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print JSON results to stdout",
    )

    defaults_parser = subparsers.add_parser(
        "defaults", help="Show default parameters for a link type"
    )
    defaults_parser.add_argument(
        "link_type",
        help=f"Link type (one of: {', '.join(lt.value for lt in LinkType)})",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Inspect and validate a topology"
    )
    inspect_parser.add_argument(
        "topology", type=Path, help="Path to topology YAML or JSON"
    )

    for p in (calc_parser, inspect_parser):
        p.add_argument(
            "--catalog",
            type=Path,
            default=None,
            help="Equipment catalog YAML merged over the packaged one",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "calculate":
        _calculate_topology(
            path=args.topology,
            results_path=args.results,
            stdout=args.stdout,
            catalog_path=args.catalog,
        )
    elif args.command == "defaults":
        _show_defaults(args.link_type)
    elif args.command == "inspect":
        _inspect_topology(args.topology, args.catalog)


if __name__ == "__main__":
    main()
