"""
Unit tests for runtime manifest rendering and injection.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import json

import pytest

from nativepack_core.build import Compilation
from nativepack_core.classification import (
    RuleSet,
    classify,
    inject_manifest,
    render_manifest,
    shift_mappings,
)
from nativepack_core.exceptions import ManifestError
from nativepack_core.graph import ChunkGraph


def _single_chunk_graph(files=("index.bundle",)):
    graph = ChunkGraph()
    main = graph.add_chunk(name="main", files=list(files))
    graph.add_group([main], name="main", initial=True)
    return graph


class TestRenderManifest:
    """Test the declaration text."""

    def test_exact_format(self):
        assert render_manifest(["main", "vendor"]) == 'var __CHUNKS__={"local":["main","vendor"]};\n'

    def test_single_chunk(self):
        assert render_manifest(["main"]) == 'var __CHUNKS__={"local":["main"]};\n'

    def test_null_identity(self):
        assert render_manifest(["main", None]) == 'var __CHUNKS__={"local":["main",null]};\n'

    def test_non_ascii_kept(self):
        assert render_manifest(["écran"]) == 'var __CHUNKS__={"local":["écran"]};\n'


class TestInjectManifest:
    """Test inject_manifest on in-memory compilations."""

    def test_prepends_to_bytes_asset(self, app_graph):
        compilation = Compilation(app_graph, assets={"index.bundle": b"console.log(1);"})
        classification = classify(app_graph, RuleSet.of(["settings"]))

        injection = inject_manifest(compilation, classification)

        expected = b'var __CHUNKS__={"local":["main","settings","vendor","utils"]};\nconsole.log(1);'
        assert compilation.get_asset("index.bundle") == expected
        assert injection.asset_name == "index.bundle"
        assert injection.line_offset == 1
        assert injection.prefix_bytes == len(injection.prefix.encode("utf-8"))
        assert injection.source_map is None

    def test_prepends_to_str_asset(self):
        graph = _single_chunk_graph()
        compilation = Compilation(graph, assets={"index.bundle": "run();"})

        inject_manifest(compilation, classify(graph, RuleSet()))

        assert compilation.get_asset("index.bundle") == 'var __CHUNKS__={"local":["main"]};\nrun();'

    def test_uses_first_file_only(self):
        graph = _single_chunk_graph(files=("index.bundle", "extra.js"))
        compilation = Compilation(graph, assets={"index.bundle": b"a", "extra.js": b"b"})

        inject_manifest(compilation, classify(graph, RuleSet()))

        assert compilation.get_asset("extra.js") == b"b"

    def test_other_assets_untouched(self, app_graph):
        assets = {"index.bundle": b"entry", "vendor.chunk.bundle": b"vendor"}
        compilation = Compilation(app_graph, assets=assets)

        inject_manifest(compilation, classify(app_graph, RuleSet()))

        assert compilation.get_asset("vendor.chunk.bundle") == b"vendor"

    def test_deterministic(self, app_graph):
        first = Compilation(app_graph, assets={"index.bundle": b"x"})
        second = Compilation(app_graph, assets={"index.bundle": b"x"})

        inject_manifest(first, classify(app_graph, RuleSet()))
        inject_manifest(second, classify(app_graph, RuleSet()))

        assert first.get_asset("index.bundle") == second.get_asset("index.bundle")

    def test_entry_without_files_fails(self):
        graph = _single_chunk_graph(files=())
        compilation = Compilation(graph)

        with pytest.raises(ManifestError) as exc_info:
            inject_manifest(compilation, classify(graph, RuleSet()))

        assert exc_info.value.error_code == "MANIFEST_001"

    def test_missing_asset_fails(self):
        graph = _single_chunk_graph()
        compilation = Compilation(graph)

        with pytest.raises(ManifestError) as exc_info:
            inject_manifest(compilation, classify(graph, RuleSet()))

        assert exc_info.value.error_code == "MANIFEST_002"
        assert exc_info.value.details["asset"] == "index.bundle"


class TestSourceMapShift:
    """Test shifting of the entry asset's source map."""

    def test_shifts_plain_map(self):
        graph = _single_chunk_graph()
        source_map = {"version": 3, "sources": ["a.js"], "mappings": "AAAA;AACA"}
        compilation = Compilation(
            graph,
            assets={"index.bundle": b"a\nb", "index.bundle.map": json.dumps(source_map).encode()},
        )

        injection = inject_manifest(compilation, classify(graph, RuleSet()))

        shifted = json.loads(compilation.get_asset("index.bundle.map"))
        assert shifted["mappings"] == ";AAAA;AACA"
        assert shifted["sources"] == ["a.js"]
        assert injection.source_map == "index.bundle.map"

    def test_keeps_str_map_as_str(self):
        graph = _single_chunk_graph()
        compilation = Compilation(
            graph,
            assets={"index.bundle": "a", "index.bundle.map": '{"version":3,"mappings":"AAAA"}'},
        )

        inject_manifest(compilation, classify(graph, RuleSet()))

        shifted = compilation.get_asset("index.bundle.map")
        assert isinstance(shifted, str)
        assert json.loads(shifted)["mappings"] == ";AAAA"

    def test_invalid_map_skipped(self):
        graph = _single_chunk_graph()
        compilation = Compilation(
            graph, assets={"index.bundle": b"a", "index.bundle.map": b"not json"}
        )

        injection = inject_manifest(compilation, classify(graph, RuleSet()))

        assert compilation.get_asset("index.bundle.map") == b"not json"
        assert injection.source_map is None

    def test_shift_mappings_index_map(self):
        source_map = {
            "version": 3,
            "sections": [
                {"offset": {"line": 0, "column": 0}, "map": {}},
                {"offset": {"line": 10, "column": 4}, "map": {}},
            ],
        }

        shifted = shift_mappings(source_map, 2)

        assert [s["offset"]["line"] for s in shifted["sections"]] == [2, 12]
        assert shifted["sections"][1]["offset"]["column"] == 4
        assert source_map["sections"][0]["offset"]["line"] == 0

    def test_shift_mappings_missing_mappings(self):
        assert shift_mappings({"version": 3}, 1)["mappings"] == ";"
