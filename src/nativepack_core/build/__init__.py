"""
Build host module for nativepack.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from nativepack_core.build.compilation import AssetSource, Compilation
from nativepack_core.build.hooks import AsyncHook, BuildHooks, BuildPipeline, SyncHook

__all__ = [
    "AssetSource",
    "Compilation",
    "BuildHooks",
    "BuildPipeline",
    "SyncHook",
    "AsyncHook",
]
