"""
Command-line interface for the social network explorer.

Provides the interactive menu and one-shot commands for
connection trees, friend suggestions and influence rankings.
"""

import argparse
import sys
from dataclasses import replace
from typing import Callable, Optional, TextIO

import structlog

from .config import NetworkConfig
from .errors import SocialNetworkError
from .logging_config import configure_logging
from .network.graph import SocialGraph, NOT_FOUND
from .network.loader import load_from_csv
from .analysis.report import NetworkReporter

logger = structlog.get_logger(__name__)

CHOICE_CONNECTIONS = "1"
CHOICE_SUGGESTIONS = "2"
CHOICE_INFLUENTIAL = "3"

MENU = (
    "\nWhat would you like to do today?\n"
    "1: Find a user's connections\n"
    "2: Get friend suggestions\n"
    "3: See influential users in your circle\n"
)

HANDLE_PROMPTS = {
    CHOICE_CONNECTIONS: "Enter the handle to search: ",
    CHOICE_SUGGESTIONS: "Enter your handle to get friend suggestions: ",
}

HANDLE_NOT_FOUND = "User handle not found."
INVALID_CHOICE = "Invalid choice. Please try again."


def build_graph(config: NetworkConfig) -> SocialGraph:
    """Create a graph and load the configured data file into it."""
    graph = SocialGraph()
    load_from_csv(graph, config.data_file, config.delimiter)
    return graph


def _write_lines(lines, out: TextIO) -> None:
    for line in lines:
        print(line, file=out)


def dispatch(
    graph: SocialGraph,
    choice: str,
    handle: Optional[str],
    config: NetworkConfig,
    out: TextIO = sys.stdout,
    top: Optional[int] = None,
) -> int:
    """
    Run one menu action against a graph.

    Returns 0 on success and 1 when the handle is unknown or the
    choice is invalid.
    """
    reporter = NetworkReporter(graph)

    if choice == CHOICE_INFLUENTIAL:
        _write_lines(reporter.format_influential_users(top=top), out)
        return 0

    if choice not in (CHOICE_CONNECTIONS, CHOICE_SUGGESTIONS):
        print(INVALID_CHOICE, file=out)
        return 1

    user_id = graph.get_user_id_by_handle(handle or "")
    if user_id is NOT_FOUND:
        logger.debug("handle_not_found", handle=handle)
        print(HANDLE_NOT_FOUND, file=out)
        return 1

    if choice == CHOICE_CONNECTIONS:
        _write_lines(reporter.format_connection_tree(user_id, config.max_depth), out)
    else:
        _write_lines(reporter.format_suggestions(user_id), out)
    return 0


def run_interactive(
    graph: SocialGraph,
    config: NetworkConfig,
    read_line: Callable[[], str] = input,
    out: TextIO = sys.stdout,
) -> int:
    """Menu loop: ask for an action, run it, ask whether to continue."""

    def ask(prompt: str) -> str:
        print(prompt, end="", file=out)
        out.flush()
        return read_line().strip()

    try:
        while True:
            print(MENU, end="", file=out)
            choice = ask("Enter your choice: ")[:1]

            handle = None
            if choice in HANDLE_PROMPTS:
                # Handles contain no whitespace; extra words are ignored
                words = ask(HANDLE_PROMPTS[choice]).split()
                handle = words[0] if words else ""

            dispatch(graph, choice, handle, config, out)

            answer = ask("\nDo you want to continue? (Y/N): ")
            if answer[:1] not in ("Y", "y"):
                break
    except EOFError:
        print(file=out)

    return 0


def run_summary(graph: SocialGraph, out: TextIO = sys.stdout) -> int:
    """Print a summary report of the network."""
    print(NetworkReporter(graph).create_summary_report(), file=out)
    return 0


def run_plot(graph: SocialGraph, output: str, out: TextIO = sys.stdout) -> int:
    """Save a degree distribution chart, or its data as JSON."""
    reporter = NetworkReporter(graph)
    result = reporter.plot_degree_distribution(save_path=output)

    if isinstance(result, dict):
        reporter.export_plot_data(result, output)
        print(f"matplotlib not available, plot data saved to: {output}", file=out)
    else:
        print(f"Plot saved to: {output}", file=out)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="social-network",
        description="""
Social Network Explorer

Loads users and their connections from a CSV file
(id,name,handle[,neighbor_id...]) and explores the resulting graph.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-f", "--data-file",
        type=str,
        default=None,
        help="CSV file with users and connections (default: users.csv)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version information",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "interactive",
        help="Run the interactive menu",
    )

    connections_parser = subparsers.add_parser(
        "connections",
        help="Show a user's connection tree",
    )
    connections_parser.add_argument("handle", help="User handle")
    connections_parser.add_argument(
        "-d", "--depth",
        type=int,
        default=None,
        help="Maximum tree depth (default: 2)",
    )

    suggest_parser = subparsers.add_parser(
        "suggest",
        help="Suggest friends by mutual connections",
    )
    suggest_parser.add_argument("handle", help="User handle")

    influential_parser = subparsers.add_parser(
        "influential",
        help="Rank users by number of connections",
    )
    influential_parser.add_argument(
        "-n", "--top",
        type=int,
        default=None,
        help="Only show the top N users",
    )

    subparsers.add_parser(
        "summary",
        help="Print network statistics",
    )

    plot_parser = subparsers.add_parser(
        "plot",
        help="Save a degree distribution chart",
    )
    plot_parser.add_argument(
        "-o", "--output",
        type=str,
        default="degree_distribution.png",
        help="Output file (default: degree_distribution.png)",
    )

    return parser


def resolve_config(args: argparse.Namespace) -> NetworkConfig:
    """Apply command-line overrides on top of the environment config."""
    overrides = {"verbose": args.verbose, "log_json": args.log_json}
    if args.data_file:
        overrides["data_file"] = args.data_file
    if getattr(args, "depth", None) is not None:
        overrides["max_depth"] = args.depth
    return replace(NetworkConfig.from_env(), **overrides)


def main(argv=None, out: TextIO = sys.stdout) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"Social Network Explorer v{__version__}", file=out)
        return 0

    if args.command is None:
        parser.print_help(file=out)
        return 0

    try:
        config = resolve_config(args)
        configure_logging(verbose=config.verbose, log_json=config.log_json)
        graph = build_graph(config)
    except SocialNetworkError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.command == "interactive":
        return run_interactive(graph, config, out=out)
    if args.command == "connections":
        return dispatch(graph, CHOICE_CONNECTIONS, args.handle, config, out)
    if args.command == "suggest":
        return dispatch(graph, CHOICE_SUGGESTIONS, args.handle, config, out)
    if args.command == "influential":
        return dispatch(graph, CHOICE_INFLUENTIAL, None, config, out, top=args.top)
    if args.command == "summary":
        return run_summary(graph, out)
    return run_plot(graph, args.output, out)


if __name__ == "__main__":
    sys.exit(main())
