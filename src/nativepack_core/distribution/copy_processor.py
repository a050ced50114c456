"""
AssetsCopyProcessor - copies a chunk's emitted files to their destinations.

Chunks are enqueued first; execute() then hands back one awaitable per
queued copy. Copies run in worker threads, bounded by a semaphore.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, List, Optional, Set

import structlog

from nativepack_core.config import settings
from nativepack_core.exceptions import ConfigurationError
from nativepack_core.graph.chunk_graph import Chunk

logger = structlog.get_logger(__name__)

SOURCE_MAP_SUFFIX = ".map"


@dataclass(frozen=True)
class CopyTask:
    """One file copy."""

    source: Path
    destination: Path
    chunk: Optional[str] = None


class AssetsCopyProcessor:
    """
    Routes chunk files to one destination layout and copies them.

    Routing:
        - entry chunk primary file -> ``bundle_output``
        - entry chunk primary source map -> ``sourcemap_output``
        - other chunk files -> ``bundle_output_dir``
        - other source maps -> directory of ``sourcemap_output``, or
          ``bundle_output_dir`` when no source map path is set
        - auxiliary files -> ``assets_dest``, relative path kept

    A destination is written at most once per processor.

    Example:
        ```python
        processor = AssetsCopyProcessor(
            platform="ios",
            output_path=Path("/app/dist"),
            bundle_output_dir=Path("/app/remote"),
            assets_dest=Path("/app/remote"),
        )
        processor.enqueue_chunk(chunk, is_entry=False)
        await asyncio.gather(*processor.execute())
        ```
    """

    def __init__(
        self,
        *,
        platform: str,
        output_path: Path,
        bundle_output_dir: Path,
        assets_dest: Path,
        bundle_output: Optional[Path] = None,
        sourcemap_output: Optional[Path] = None,
        max_concurrency: Optional[int] = None,
    ) -> None:
        if max_concurrency is None:
            max_concurrency = settings.max_concurrent_copies
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

        self.platform = platform
        self.output_path = output_path
        self.bundle_output = bundle_output
        self.bundle_output_dir = bundle_output_dir
        self.sourcemap_output = sourcemap_output
        self.assets_dest = assets_dest
        self._max_concurrency = max_concurrency
        self._queue: List[CopyTask] = []
        self._sources: Set[Path] = set()
        self._destinations: Set[Path] = set()

    @property
    def queued(self) -> List[CopyTask]:
        return list(self._queue)

    def enqueue_chunk(self, chunk: Chunk, *, is_entry: bool) -> None:
        """
        Queue every file of ``chunk``.

        Raises:
            ConfigurationError: If ``is_entry`` is set but the processor has
                no bundle output
        """
        if is_entry and self.bundle_output is None:
            raise ConfigurationError(
                f"Cannot place entry chunk {chunk.identity!r}: no bundle output configured",
                error_code="CFG_002",
            )

        sourcemap_dir = (
            self.sourcemap_output.parent if self.sourcemap_output else self.bundle_output_dir
        )

        for position, name in enumerate(chunk.files):
            primary = is_entry and position == 0
            if name.endswith(SOURCE_MAP_SUFFIX):
                self._add(chunk, name, sourcemap_dir / name)
                continue

            self._add(chunk, name, self.bundle_output if primary else self.bundle_output_dir / name)

            map_name = f"{name}{SOURCE_MAP_SUFFIX}"
            if (self.output_path / map_name).is_file():
                if primary and self.sourcemap_output is not None:
                    self._add(chunk, map_name, self.sourcemap_output)
                else:
                    self._add(chunk, map_name, sourcemap_dir / map_name)

        for name in chunk.auxiliary_files:
            if name.endswith(SOURCE_MAP_SUFFIX):
                self._add(chunk, name, sourcemap_dir / name)
            else:
                self._add(chunk, name, self.assets_dest / name)

    def execute(self) -> List[Awaitable[Path]]:
        """
        Return one awaitable per queued copy; nothing runs until awaited.

        Each awaitable resolves to the destination path or raises the
        copy's error.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)
        logger.debug(
            "copy_processor_execute",
            platform=self.platform,
            copies=len(self._queue),
        )
        return [self._copy(task, semaphore) for task in self._queue]

    def _add(self, chunk: Chunk, name: str, destination: Path) -> None:
        source = self.output_path / name
        if source in self._sources or destination in self._destinations:
            return
        self._sources.add(source)
        self._destinations.add(destination)
        self._queue.append(CopyTask(source=source, destination=destination, chunk=chunk.identity))

    async def _copy(self, task: CopyTask, semaphore: asyncio.Semaphore) -> Path:
        async with semaphore:
            await asyncio.to_thread(_copy_file, task.source, task.destination)
        logger.debug(
            "file_copied",
            chunk=task.chunk,
            source=str(task.source),
            destination=str(task.destination),
        )
        return task.destination


def _copy_file(source: Path, destination: Path) -> None:
    if source == destination:
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
