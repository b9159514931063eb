"""
Command-line interface for module graph v1.0.

This module provides the ``module-graph`` command, which builds the
dependency graph from cached (or freshly fetched) module metadata and
writes full.txt, filtered.txt and deps.txt.
"""

import argparse
import logging
import sys
from typing import List, Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from module_graph.exceptions import GraphIntegrityError, ModuleGraphError
from module_graph.models.config import (
    DEFAULT_COMMON_PLATFORM,
    DEFAULT_FILTER_TARGET,
    DEFAULT_GRAPH_NAME,
    DEFAULT_ORGANIZATION_GROUP,
    DEFAULT_REPO_URL,
    GraphConfig,
)
from module_graph.pipeline import RunResult, run
from module_graph.version import __version__

HAS_COLOR = True


def print_success(msg: str) -> None:
    """Print success message."""
    if HAS_COLOR:
        print(f"{Fore.GREEN}[OK] {msg}{Style.RESET_ALL}")
    else:
        print(f"[OK] {msg}")


def print_error(msg: str) -> None:
    """Print error message."""
    if HAS_COLOR:
        print(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}", file=sys.stderr)
    else:
        print(f"[ERROR] {msg}", file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    if HAS_COLOR:
        print(f"{Fore.YELLOW}[WARN] {msg}{Style.RESET_ALL}")
    else:
        print(f"[WARN] {msg}")


def print_info(msg: str) -> None:
    """Print info message."""
    if HAS_COLOR:
        print(f"{Fore.CYAN}{msg}{Style.RESET_ALL}")
    else:
        print(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="module-graph",
        description="Module dependency graph builder - v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build reports from the local metadata cache
  %(prog)s

  # Refresh the cache from Maven Central first
  %(prog)s --fetch

  # Filtered graph around another module
  %(prog)s --filter-target mvvm-core --summary
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument(
        "--metadata-dir",
        "-m",
        default="metadata",
        help="Directory of cached metadata documents (default: metadata)",
    )
    input_group.add_argument(
        "--fetch",
        action="store_true",
        help="Fetch the latest metadata from the repository and refresh the cache",
    )
    input_group.add_argument(
        "--repo-url",
        default=DEFAULT_REPO_URL,
        help=f"Maven repository root (default: {DEFAULT_REPO_URL})",
    )
    input_group.add_argument(
        "--workers",
        type=int,
        default=8,
        help="Parallel fetch threads (default: 8)",
    )

    # === Graph parameters ===
    graph_group = parser.add_argument_group("Graph Options")
    graph_group.add_argument(
        "--group",
        "-g",
        default=DEFAULT_ORGANIZATION_GROUP,
        help=f"Organization group to model (default: {DEFAULT_ORGANIZATION_GROUP})",
    )
    graph_group.add_argument(
        "--filter-target",
        "-t",
        default=DEFAULT_FILTER_TARGET,
        help=f"Module the filtered graph is built around (default: {DEFAULT_FILTER_TARGET})",
    )
    graph_group.add_argument(
        "--common-platform",
        default=DEFAULT_COMMON_PLATFORM,
        help=f"Platform type of cross-platform variants (default: {DEFAULT_COMMON_PLATFORM})",
    )
    graph_group.add_argument(
        "--qualified-ids",
        action="store_true",
        help="Use group:module as node id instead of the module name",
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--output-dir",
        "-o",
        default="output",
        help="Directory for full.txt, filtered.txt and deps.txt (default: output)",
    )
    output_group.add_argument(
        "--graph-name",
        default=DEFAULT_GRAPH_NAME,
        help=f"Name of the emitted digraph (default: {DEFAULT_GRAPH_NAME})",
    )
    output_group.add_argument(
        "--summary",
        action="store_true",
        help="Print a table of modules with their dependency counts",
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    output_group.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        # Reports from the metadata cache
        module-graph

        # Refresh the cache from the repository
        module-graph --fetch

        # Different filter target and group
        module-graph --group dev.icerock.moko --filter-target mvvm-core
    """
    args = build_parser().parse_args(argv)

    global HAS_COLOR
    if args.no_color:
        HAS_COLOR = False
    else:
        init(autoreset=True)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")
    if args.verbose:
        logging.getLogger("module_graph").setLevel(logging.DEBUG)

    try:
        config = GraphConfig(
            organization_group=args.group,
            common_platform=args.common_platform,
            filter_target=args.filter_target,
            graph_name=args.graph_name,
            qualified_ids=args.qualified_ids,
            metadata_dir=args.metadata_dir,
            output_dir=args.output_dir,
            repo_url=args.repo_url,
            fetch=args.fetch,
            fetch_workers=args.workers,
        )
    except (TypeError, ValueError) as e:
        print_error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        if config.fetch:
            print_info(f"Fetching metadata from: {config.repo_root}")
        else:
            print_info(f"Reading metadata from: {config.metadata_dir}")

        result = run(config)

        print_success(
            f"Graph complete! {len(result.nodes)} modules, "
            f"{len(result.filtered)} depend on '{config.filter_target}'."
        )
        for path in (
            result.reports.full,
            result.reports.filtered,
            result.reports.dependencies,
        ):
            print_info(f"  {path}")

        if result.cycles:
            print_warning(f"{len(result.cycles)} dependency cycle(s):")
            for cycle in result.cycles:
                print(f"  {' -> '.join(cycle + cycle[:1])}")

        if args.summary:
            show_summary(result)

    except GraphIntegrityError as e:
        print_error(f"Inconsistent metadata: {e}")
        sys.exit(1)
    except ModuleGraphError as e:
        print_error(f"Module graph failed: {e}")
        sys.exit(1)


def show_summary(result: RunResult) -> None:
    """Print one row per module with its direct and transitive counts,
    followed by the whole-graph statistics."""
    rows = []
    for node in result.nodes:
        transitive = result.resolver.transitive_dependencies(node)
        rows.append(
            [
                node.path,
                ", ".join(node.platforms),
                len(node.dependencies),
                len(transitive),
            ]
        )
    print()
    print(
        tabulate(
            rows,
            headers=["Module", "Platforms", "Direct", "Transitive"],
            tablefmt="simple",
        )
    )

    stats = result.statistics
    if not stats:
        return
    max_depth = stats["max_depth"]
    print()
    print(
        tabulate(
            [
                ["Modules", stats["total_nodes"]],
                ["Edges", stats["total_edges"]],
                ["Roots", ", ".join(stats["roots"]) or "-"],
                ["Leaves", ", ".join(stats["leaves"]) or "-"],
                ["Longest chain", "-" if max_depth is None else max_depth],
                ["Acyclic", "yes" if stats["is_dag"] else "no"],
            ],
            tablefmt="plain",
        )
    )


if __name__ == "__main__":
    main()
