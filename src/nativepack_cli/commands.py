"""
CLI command implementations.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import asyncio
import json
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from nativepack_core.build import BuildPipeline, Compilation
from nativepack_core.classification import Rule, RuleSet, classify
from nativepack_core.exceptions import NativepackError
from nativepack_core.graph import load_graph
from nativepack_core.models import BundleArguments, CliArguments, CliConfig, CliOptions
from nativepack_core.models import OutputPluginConfig
from nativepack_core.plugin import OutputPlugin


def build_rules(literals: Optional[List[str]], patterns: Optional[List[str]]) -> RuleSet:
    """Combine --local-chunk and --local-pattern values into one rule set."""
    rules = [Rule.literal(value) for value in literals or []]
    rules += [Rule.pattern(value) for value in patterns or []]
    return RuleSet(rules)


def classify_command(
    graph_path: Path,
    entry: Optional[str],
    local_chunks: Optional[List[str]],
    local_patterns: Optional[List[str]],
) -> bool:
    """
    Print the Local/Remote partition of a graph description as JSON.

    Returns:
        True if successful, False otherwise
    """
    try:
        graph, _ = load_graph(graph_path)
        rules = build_rules(local_chunks, local_patterns)
        if entry:
            classification = classify(graph, rules, entry)
        else:
            classification = classify(graph, rules)
    except NativepackError as e:
        print(f"❌ Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return False

    print(json.dumps(classification.to_dict(), indent=2))
    return True


def bundle_command(
    graph_path: Path,
    platform: str,
    root: Path,
    bundle_output: str,
    sourcemap_output: Optional[str],
    assets_dest: Optional[str],
    remote_chunks_output: Optional[str],
    entry: Optional[str],
    local_chunks: Optional[List[str]],
    local_patterns: Optional[List[str]],
) -> bool:
    """
    Run classification, manifest injection and distribution for a graph
    description whose assets already sit in its output directory.

    The output directory is only read. Assets are emitted into a temporary
    staging directory and distributed from there, so the same build can be
    bundled again.

    Returns:
        True if successful, False otherwise
    """
    try:
        graph, output_path = load_graph(graph_path)
        compilation = Compilation.from_output_dir(graph, output_path)

        config = OutputPluginConfig(
            platform=platform,
            local_chunks=build_rules(local_chunks, local_patterns),
            remote_chunks_output=remote_chunks_output,
            entry=entry,
        )
        cli_options = CliOptions(
            config=CliConfig(root=str(root)),
            arguments=CliArguments(
                bundle=BundleArguments(
                    platform=platform,
                    bundle_output=bundle_output,
                    sourcemap_output=sourcemap_output,
                    assets_dest=assets_dest,
                )
            ),
        )
        plugin = OutputPlugin(config, cli_options=cli_options)
        with tempfile.TemporaryDirectory(prefix="nativepack-") as staging:
            compilation.output_path = Path(staging)
            asyncio.run(BuildPipeline().use(plugin).run(compilation))
    except NativepackError as e:
        print(f"❌ Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return False

    report = plugin.last_report
    summary = {
        "classification": plugin.last_classification.to_dict(),
        "local_files": [str(p) for p in report.local],
        "remote_files": [str(p) for p in report.remote],
        "remote_skipped": report.remote_skipped,
    }
    print(json.dumps(summary, indent=2))
    return True
