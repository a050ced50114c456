"""
Pytest configuration and fixtures for all tests.

Provides shared logging setup and chunk graph builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from pathlib import Path

import pytest

from nativepack_core.build import Compilation
from nativepack_core.graph import ChunkGraph
from nativepack_core.logging_service import LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    if not LoggingService.is_configured():
        LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before each test."""
    LoggingService._configured = False
    LoggingService._log_level = "INFO"
    LoggingService._config = None
    LoggingService._loggers = {}
    LoggingService._sensitive_keys = set()

    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    LoggingService._configured = False
    LoggingService._loggers = {}


@pytest.fixture
def app_graph() -> ChunkGraph:
    """
    Typical app graph:

    - initial group "main": main + vendor (vendor needed at start)
    - async group "settings": settings, needs shared "utils"
    - async group "profile": profile, needs shared "utils"
    - async group "detail": detail
    """
    graph = ChunkGraph()
    main = graph.add_chunk(name="main", id=0, files=["index.bundle"])
    vendor = graph.add_chunk(name="vendor", id=1, files=["vendor.chunk.bundle"])
    settings_chunk = graph.add_chunk(
        name="settings", id=2, files=["settings.chunk.bundle"], auxiliary_files=["assets/gear.png"]
    )
    profile = graph.add_chunk(name="profile", id=3, files=["profile.chunk.bundle"])
    utils = graph.add_chunk(name="utils", id=4, files=["utils.chunk.bundle"])
    detail = graph.add_chunk(name="detail", id=5, files=["detail.chunk.bundle"])

    entry_group = graph.add_group([main, vendor], name="main", initial=True)
    graph.add_requirement(settings_chunk, utils)
    graph.add_requirement(profile, utils)
    graph.add_group([settings_chunk], name="settings", parent=entry_group)
    graph.add_group([profile], name="profile", parent=entry_group)
    graph.add_group([utils], name="utils", parent=entry_group)
    graph.add_group([detail], name="detail", parent=entry_group)
    return graph


def _write_assets(output_path: Path, graph: ChunkGraph) -> Compilation:
    output_path.mkdir(parents=True, exist_ok=True)
    for chunk in graph:
        for name in list(chunk.files) + list(chunk.auxiliary_files):
            path = output_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"/* {chunk.identity}:{name} */\n", encoding="utf-8")
    return Compilation.from_output_dir(graph, output_path)


@pytest.fixture
def make_compilation(tmp_path):
    """Factory writing every file a graph references below tmp_path/dist."""

    def _make(graph: ChunkGraph, subdir: str = "dist") -> Compilation:
        return _write_assets(tmp_path / subdir, graph)

    return _make


@pytest.fixture
def app_compilation(make_compilation, app_graph) -> Compilation:
    """app_graph with its files written to tmp_path/dist."""
    return make_compilation(app_graph)
