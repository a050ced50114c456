"""
Distribution orchestrator.

Places every classified chunk at its final destination: Local chunks into
the native package layout, Remote chunks into the remote output directory
when one is configured.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import structlog

from nativepack_core.build.compilation import Compilation
from nativepack_core.classification.models import Classification
from nativepack_core.distribution.copy_processor import AssetsCopyProcessor, CopyTask
from nativepack_core.distribution.paths import OutputPaths
from nativepack_core.exceptions import ConfigurationError, DistributionError

logger = structlog.get_logger(__name__)


@dataclass
class DistributionReport:
    """Destinations written by one distribution run."""

    local: List[Path] = field(default_factory=list)
    remote: List[Path] = field(default_factory=list)
    remote_skipped: bool = False


async def distribute(
    compilation: Compilation,
    classification: Classification,
    paths: OutputPaths,
    platform: str,
    max_concurrency: Optional[int] = None,
) -> DistributionReport:
    """
    Copy Local and Remote chunks to their destinations concurrently.

    The Remote invocation is skipped entirely when
    ``paths.remote_chunks_output`` is None. All copies are awaited before
    returning, failed or not.

    Raises:
        ConfigurationError: If the compilation has no output path
        DistributionError: If any copy failed
    """
    if compilation.output_path is None:
        raise ConfigurationError(
            "Cannot infer output path from compilation",
            error_code="CFG_003",
        )

    local = AssetsCopyProcessor(
        platform=platform,
        output_path=compilation.output_path,
        bundle_output=paths.bundle_output,
        bundle_output_dir=paths.bundle_output_dir,
        sourcemap_output=paths.sourcemap_output,
        assets_dest=paths.assets_dest,
        max_concurrency=max_concurrency,
    )
    for chunk in classification.local:
        local.enqueue_chunk(chunk, is_entry=chunk == classification.entry)

    remote: Optional[AssetsCopyProcessor] = None
    if paths.remote_chunks_output is not None:
        remote = AssetsCopyProcessor(
            platform=platform,
            output_path=compilation.output_path,
            bundle_output_dir=paths.remote_chunks_output,
            assets_dest=paths.remote_chunks_output,
            max_concurrency=max_concurrency,
        )
        for chunk in classification.remote:
            remote.enqueue_chunk(chunk, is_entry=False)

    tasks: List[CopyTask] = local.queued + (remote.queued if remote else [])
    awaitables = local.execute() + (remote.execute() if remote else [])

    start = time.perf_counter()
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    duration_ms = (time.perf_counter() - start) * 1000

    failures = []
    for task, result in zip(tasks, results):
        if isinstance(result, Exception):
            failures.append(
                {
                    "source": str(task.source),
                    "destination": str(task.destination),
                    "error": str(result),
                }
            )
        elif isinstance(result, BaseException):
            raise result

    if failures:
        logger.error("distribution_failed", failed=len(failures), total=len(tasks))
        raise DistributionError(
            f"{len(failures)} of {len(tasks)} file copies failed",
            error_code="DIST_001",
            details={"failures": failures},
            original_exception=next(r for r in results if isinstance(r, Exception)),
        )

    report = DistributionReport(
        local=[task.destination for task in local.queued],
        remote=[task.destination for task in remote.queued] if remote else [],
        remote_skipped=remote is None,
    )
    logger.info(
        "distribution_complete",
        platform=platform,
        local_files=len(report.local),
        remote_files=len(report.remote),
        remote_skipped=report.remote_skipped,
        duration_ms=round(duration_ms, 2),
    )
    return report
