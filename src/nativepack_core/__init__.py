"""
nativepack core.

Decides which bundler chunks ship inside a native application package and
which are hosted remotely. Contains:
- Chunk graph arena and loader
- Entry resolution, Local/Remote classification, shared-chunk resolution
- Runtime manifest injection
- Build stage hooks and the OutputPlugin
- Distribution of chunk files to their destinations
- Exception hierarchy, configuration, logging

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from .config import NativepackSettings, get_config_summary, settings
from .exceptions import (
    ConfigurationError,
    DistributionError,
    EntryResolutionError,
    GraphError,
    ManifestError,
    NativepackError,
    ValidationError,
)
from .logging_service import LoggingConfig, LoggingService


def __getattr__(name):
    """Lazy import for components to avoid circular imports."""
    if name == "OutputPlugin":
        from .plugin import OutputPlugin

        return OutputPlugin
    elif name == "OutputPluginConfig":
        from .models import OutputPluginConfig

        return OutputPluginConfig
    elif name == "BuildPipeline":
        from .build import BuildPipeline

        return BuildPipeline
    elif name == "Compilation":
        from .build import Compilation

        return Compilation
    elif name == "ChunkGraph":
        from .graph import ChunkGraph

        return ChunkGraph
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Exceptions
    "NativepackError",
    "ValidationError",
    "ConfigurationError",
    "EntryResolutionError",
    "GraphError",
    "ManifestError",
    "DistributionError",
    # Configuration
    "NativepackSettings",
    "settings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
    # Components
    "OutputPlugin",
    "OutputPluginConfig",
    "BuildPipeline",
    "Compilation",
    "ChunkGraph",
]
