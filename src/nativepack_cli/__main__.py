"""
nativepack CLI entry point.

Usage:
    nativepack classify GRAPH [--entry NAME] [--local-chunk NAME ...]
    nativepack bundle GRAPH --platform NAME --bundle-output PATH [options]
    nativepack --help
    nativepack --version
"""

import argparse
import sys
from pathlib import Path

from nativepack_cli.commands import bundle_command, classify_command
from nativepack_core.utils import configure_logging


def _add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--entry", help="Entry chunk name (default: main)")
    parser.add_argument(
        "--local-chunk",
        action="append",
        dest="local_chunks",
        metavar="NAME",
        help="Chunk name to ship locally (repeatable)",
    )
    parser.add_argument(
        "--local-pattern",
        action="append",
        dest="local_patterns",
        metavar="REGEX",
        help="Regular expression of chunk names to ship locally (repeatable)",
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="nativepack", description="Split bundler output into local and remote chunks"
    )

    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument("--log-level", help="Log level (default: NATIVEPACK_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # classify command
    classify_parser = subparsers.add_parser(
        "classify", help="Print the Local/Remote partition of a chunk graph"
    )
    classify_parser.add_argument("graph", type=Path, help="Graph description JSON file")
    _add_rule_arguments(classify_parser)

    # bundle command
    bundle_parser = subparsers.add_parser(
        "bundle", help="Inject the chunk manifest and copy chunks to their destinations"
    )
    bundle_parser.add_argument("graph", type=Path, help="Graph description JSON file")
    bundle_parser.add_argument("--platform", required=True, help="Target platform")
    bundle_parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Project root relative paths are resolved against (default: current directory)",
    )
    bundle_parser.add_argument("--bundle-output", required=True, help="Entry bundle destination")
    bundle_parser.add_argument("--sourcemap-output", help="Entry source map destination")
    bundle_parser.add_argument("--assets-dest", help="Directory for local assets")
    bundle_parser.add_argument("--remote-chunks-output", help="Directory for remote chunks")
    _add_rule_arguments(bundle_parser)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(level=args.log_level)

    if args.command == "classify":
        success = classify_command(args.graph, args.entry, args.local_chunks, args.local_patterns)
    else:
        success = bundle_command(
            graph_path=args.graph,
            platform=args.platform,
            root=args.root,
            bundle_output=args.bundle_output,
            sourcemap_output=args.sourcemap_output,
            assets_dest=args.assets_dest,
            remote_chunks_output=args.remote_chunks_output,
            entry=args.entry,
            local_chunks=args.local_chunks,
            local_patterns=args.local_patterns,
        )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
