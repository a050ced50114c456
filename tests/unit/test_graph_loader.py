"""
Unit tests for the graph description loader.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import json

import pytest

from nativepack_core.exceptions import GraphError
from nativepack_core.graph import graph_from_dict, load_graph


@pytest.fixture
def description():
    return {
        "output_path": "dist",
        "chunks": [
            {"id": 0, "name": "main", "files": ["index.bundle"], "requires": ["vendor"]},
            {"id": 1, "name": "vendor", "files": ["vendor.chunk.bundle"]},
            {"id": 7, "files": ["7.chunk.bundle"], "auxiliary_files": ["assets/a.png"]},
        ],
        "chunk_groups": [
            {"name": "main", "initial": True, "chunks": ["main"], "children": ["lazy"]},
            {"name": "lazy", "chunks": [7]},
        ],
    }


class TestGraphFromDict:
    """Test graph_from_dict()."""

    def test_builds_chunks_in_order(self, description):
        graph, output_path = graph_from_dict(description)

        assert [c.identity for c in graph] == ["main", "vendor", "7"]
        assert output_path == "dist"
        assert graph.chunk("7").auxiliary_files == ["assets/a.png"]

    def test_requirements_resolved(self, description):
        graph, _ = graph_from_dict(description)

        main = graph.chunk("main")
        assert main.requires == [graph.chunk("vendor").index]
        assert graph.initial_closure(main) == frozenset({0, 1})

    def test_groups_and_children(self, description):
        graph, _ = graph_from_dict(description)

        main_group, lazy_group = graph.groups
        assert main_group.is_initial
        assert main_group.children == [lazy_group.index]
        assert graph.group_chunks(lazy_group) == [graph.chunk("7")]

    def test_named_chunk_referenced_by_id(self):
        graph, _ = graph_from_dict(
            {
                "chunks": [
                    {"id": 0, "name": "main", "files": ["index.bundle"], "requires": [1]},
                    {"id": 1, "name": "vendor", "files": ["vendor.chunk.bundle"]},
                ],
                "chunk_groups": [{"initial": True, "chunks": [0]}],
            }
        )

        main = graph.chunk("main")
        assert graph.group_chunks(graph.groups[0]) == [main]
        assert main.requires == [graph.chunk("vendor").index]

    def test_empty_description(self):
        graph, output_path = graph_from_dict({})

        assert len(graph) == 0
        assert output_path is None

    def test_unknown_chunk_reference(self, description):
        description["chunks"][0]["requires"] = ["missing"]

        with pytest.raises(GraphError) as exc_info:
            graph_from_dict(description)

        assert exc_info.value.error_code == "GRAPH_002"

    def test_unknown_child_group(self, description):
        description["chunk_groups"][0]["children"] = ["nope"]

        with pytest.raises(GraphError) as exc_info:
            graph_from_dict(description)

        assert exc_info.value.error_code == "GRAPH_002"
        assert exc_info.value.details == {"group": "nope"}

    def test_duplicate_identity(self, description):
        description["chunks"].append({"name": "main"})

        with pytest.raises(GraphError) as exc_info:
            graph_from_dict(description)

        assert exc_info.value.error_code == "GRAPH_001"

    def test_malformed_description(self):
        with pytest.raises(GraphError) as exc_info:
            graph_from_dict({"chunks": "not-a-list"})

        assert exc_info.value.error_code == "GRAPH_003"


class TestLoadGraph:
    """Test load_graph() from files."""

    def test_output_path_relative_to_file(self, tmp_path, description):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps(description), encoding="utf-8")

        graph, output_path = load_graph(path)

        assert len(graph) == 3
        assert output_path == (tmp_path / "dist").resolve()

    def test_output_path_defaults_to_file_directory(self, tmp_path, description):
        del description["output_path"]
        path = tmp_path / "graph.json"
        path.write_text(json.dumps(description), encoding="utf-8")

        _, output_path = load_graph(path)

        assert output_path == tmp_path.resolve()

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphError) as exc_info:
            load_graph(tmp_path / "missing.json")

        assert exc_info.value.error_code == "GRAPH_003"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_invalid_content(self, tmp_path, content):
        path = tmp_path / "graph.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(GraphError) as exc_info:
            load_graph(path)

        assert exc_info.value.error_code == "GRAPH_003"
