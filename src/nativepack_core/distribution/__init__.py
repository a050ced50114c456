"""
Distribution module for nativepack.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from nativepack_core.distribution.copy_processor import AssetsCopyProcessor, CopyTask
from nativepack_core.distribution.orchestrator import DistributionReport, distribute
from nativepack_core.distribution.paths import (
    OutputPaths,
    output_paths_from_cli,
    resolve_output_paths,
)

__all__ = [
    "AssetsCopyProcessor",
    "CopyTask",
    "DistributionReport",
    "distribute",
    "OutputPaths",
    "output_paths_from_cli",
    "resolve_output_paths",
]
