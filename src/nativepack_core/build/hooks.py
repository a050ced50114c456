"""
Build pipeline hooks.

Two ordered stages are exposed to plugins:

- ``process_assets``: synchronous, runs while assets are still mutable
- ``after_emit``: asynchronous, runs once assets are on disk

``failed`` is called with the compilation and the error when either stage
or asset emission raises.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, List, Protocol, Tuple

import structlog

from nativepack_core.build.compilation import Compilation

logger = structlog.get_logger(__name__)


class SyncHook:
    """Hook whose taps run synchronously in registration order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: List[Tuple[str, Callable[..., Any]]] = []

    def tap(self, plugin_name: str, callback: Callable[..., Any]) -> None:
        self._taps.append((plugin_name, callback))

    @property
    def taps(self) -> List[str]:
        return [name for name, _ in self._taps]

    def call(self, *args: Any) -> None:
        for plugin_name, callback in self._taps:
            logger.debug("hook_tap_started", hook=self.name, plugin=plugin_name)
            callback(*args)


class AsyncHook:
    """Hook whose taps are awaited one after another in registration order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: List[Tuple[str, Callable[..., Awaitable[Any]]]] = []

    def tap_promise(self, plugin_name: str, callback: Callable[..., Awaitable[Any]]) -> None:
        self._taps.append((plugin_name, callback))

    @property
    def taps(self) -> List[str]:
        return [name for name, _ in self._taps]

    async def call(self, *args: Any) -> None:
        for plugin_name, callback in self._taps:
            logger.debug("hook_tap_started", hook=self.name, plugin=plugin_name)
            await callback(*args)


class BuildHooks:
    """Registration points of a build pipeline."""

    def __init__(self) -> None:
        self.process_assets = SyncHook("process_assets")
        self.after_emit = AsyncHook("after_emit")
        self.failed = SyncHook("failed")


class BuildPlugin(Protocol):
    def apply(self, pipeline: "BuildPipeline") -> None: ...


class BuildPipeline:
    """
    Minimal host for build plugins.

    run() drives one compilation through the stages in a fixed order:
    process_assets taps, asset emission, then after_emit taps. A failing
    stage aborts the run: failed taps are called, then the error propagates.

    Example:
        ```python
        pipeline = BuildPipeline()
        OutputPlugin(OutputPluginConfig(platform="ios")).apply(pipeline)
        await pipeline.run(compilation)
        ```
    """

    def __init__(self) -> None:
        self.hooks = BuildHooks()

    def use(self, *plugins: BuildPlugin) -> "BuildPipeline":
        for plugin in plugins:
            plugin.apply(self)
        return self

    async def run(self, compilation: Compilation) -> None:
        try:
            self.hooks.process_assets.call(compilation)
            written = compilation.write_assets()
            logger.info("assets_emitted", count=len(written))
            await self.hooks.after_emit.call(compilation)
        except Exception as e:
            logger.warning("build_failed", error=type(e).__name__)
            self.hooks.failed.call(compilation, e)
            raise
