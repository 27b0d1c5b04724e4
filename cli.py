#!/usr/bin/env python3
"""
Resource Mover CLI

A tool for moving Android resources out of a module into the modules that
use them, and for deleting resources that nothing references.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from exporters import to_json
from model.errors import ResourceMoverError
from model.report import RunReport
from model.resource_type import ResourceType, classify, derive_type_filter
from runner import ProgressLogger, load_config, run_move, run_remove


ALL_TYPE_NAMES = ", ".join(t.raw_name for t in ResourceType)


def resource_type_arg(value: str) -> ResourceType:
    """argparse type for resource type names."""
    resource_type = classify(value)
    if resource_type is None:
        raise argparse.ArgumentTypeError(
            f"{value} is not a valid android resource, pick from [{ALL_TYPE_NAMES}]."
        )
    return resource_type


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s", "--source",
        type=Path,
        required=True,
        help="Source module directory",
    )
    
    parser.add_argument(
        "-d", "--dependency",
        type=Path,
        action="append",
        default=[],
        dest="dependencies",
        help="Module that depends on the source module (repeatable)",
    )
    
    parser.add_argument(
        "-i", "--include",
        type=resource_type_arg,
        action="append",
        default=[],
        help="Resource type to operate on (repeatable)",
    )
    
    parser.add_argument(
        "-e", "--exclude",
        type=resource_type_arg,
        action="append",
        default=[],
        help="Resource type to leave alone (repeatable)",
    )
    
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=None,
        help="Maximum number of rounds (default: 10)",
    )
    
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: .resmover.yaml/.yml/.json in the current directory)",
    )
    
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a JSON report of the run to this file",
    )
    
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every file that is scanned or edited",
    )


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="resmover",
        description="Move resources between modules or remove unused resources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  resmover move -s core -o feature-a -o feature-b -d app
  resmover move -s core -o feature-a -i drawable -i layout
  resmover remove -s core -d app -e id --skip '^keep_'
        """,
    )
    
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    move_parser = subparsers.add_parser(
        "move",
        help="Moves resources from one module to many destination modules",
    )
    _add_common_arguments(move_parser)
    move_parser.add_argument(
        "-o", "--output",
        type=Path,
        action="append",
        default=[],
        dest="outputs",
        help="Module to move resources to (repeatable)",
    )
    
    remove_parser = subparsers.add_parser(
        "remove",
        help="Removes unused resources from specified module",
    )
    _add_common_arguments(remove_parser)
    remove_parser.add_argument(
        "--skip",
        type=str,
        default=None,
        help="Regular expression pattern for resource names to skip deleting",
    )
    
    return parser.parse_args(args)


def run(parsed: argparse.Namespace) -> RunReport:
    """Execute a parsed command. Raises ResourceMoverError on failure."""
    config = load_config(parsed.config)
    
    type_filter = derive_type_filter(parsed.include, parsed.exclude)
    max_rounds = parsed.max_rounds if parsed.max_rounds is not None else config.max_rounds
    progress = ProgressLogger(color=config.color and not parsed.no_color)
    
    if parsed.command == "move":
        return run_move(
            source=parsed.source,
            destinations=parsed.outputs,
            protected=parsed.dependencies,
            type_filter=type_filter,
            max_rounds=max_rounds,
            progress=progress,
            source_extensions=config.source_extensions,
        )
    
    ignore_pattern = parsed.skip if parsed.skip is not None else config.ignore_pattern
    return run_remove(
        target=parsed.source,
        protected=parsed.dependencies,
        type_filter=type_filter,
        max_rounds=max_rounds,
        ignore_pattern=ignore_pattern,
        progress=progress,
        source_extensions=config.source_extensions,
    )


def main(args: Optional[List[str]] = None):
    """Main entry point."""
    parsed = parse_args(args)
    
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    
    try:
        report = run(parsed)
    except ResourceMoverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    if parsed.report:
        try:
            output_path = Path(parsed.report)
            output_path.write_text(to_json(report, root=Path.cwd()), encoding="utf-8")
            print(f"Report written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing report: {e}", file=sys.stderr)
            return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
