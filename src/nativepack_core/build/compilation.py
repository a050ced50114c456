"""
Compilation - one build's chunk graph plus its in-memory asset store.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

import structlog

from nativepack_core.exceptions import ConfigurationError
from nativepack_core.graph.chunk_graph import ChunkGraph

logger = structlog.get_logger(__name__)

AssetSource = Union[str, bytes]


class Compilation:
    """
    Result of a bundler run: the chunk graph and the assets it emitted.

    Assets are keyed by file name relative to ``output_path`` and stay in
    memory until write_assets() emits them.

    Attributes:
        graph: Chunk graph of this build
        output_path: Directory the bundler writes assets into (may be None
            when the host did not configure one)
    """

    def __init__(
        self,
        graph: ChunkGraph,
        output_path: Optional[Path] = None,
        assets: Optional[Dict[str, AssetSource]] = None,
    ) -> None:
        self.graph = graph
        self.output_path = output_path
        self._assets: Dict[str, AssetSource] = dict(assets or {})

    @classmethod
    def from_output_dir(cls, graph: ChunkGraph, output_path: Path) -> "Compilation":
        """
        Load every file the graph references from an already-populated
        output directory. Files that do not exist are skipped.
        """
        assets: Dict[str, AssetSource] = {}
        for chunk in graph:
            names = list(chunk.files) + list(chunk.auxiliary_files)
            names += [f"{name}.map" for name in chunk.files]
            for name in names:
                path = output_path / name
                if name not in assets and path.is_file():
                    assets[name] = path.read_bytes()

        logger.debug("assets_loaded", output_path=str(output_path), assets=len(assets))
        return cls(graph, output_path=output_path, assets=assets)

    def has_asset(self, name: str) -> bool:
        return name in self._assets

    def get_asset(self, name: str) -> AssetSource:
        return self._assets[name]

    def emit_asset(self, name: str, source: AssetSource) -> None:
        self._assets[name] = source

    def update_asset(self, name: str, updater: Callable[[AssetSource], AssetSource]) -> None:
        """
        Replace an asset's content with ``updater(current)``.

        Raises:
            KeyError: If the asset does not exist
        """
        self._assets[name] = updater(self._assets[name])

    def asset_names(self) -> Iterator[str]:
        return iter(self._assets)

    def write_assets(self) -> List[Path]:
        """
        Write all assets below output_path.

        Raises:
            ConfigurationError: If the compilation has no output path
        """
        if self.output_path is None:
            raise ConfigurationError(
                "Cannot infer output path from compilation",
                error_code="CFG_003",
            )

        written: List[Path] = []
        for name, source in self._assets.items():
            path = self.output_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(source, bytes):
                path.write_bytes(source)
            else:
                path.write_text(source, encoding="utf-8")
            written.append(path)

        logger.debug("assets_written", output_path=str(self.output_path), count=len(written))
        return written
