"""
OutputPlugin - decides which chunks ship inside the native package.

Taps two build stages:

1. ``process_assets``: classify chunks into Local/Remote and inject the
   runtime manifest into the entry bundle.
2. ``after_emit``: copy Local chunks into the native package layout and
   Remote chunks into the remote output directory.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from nativepack_core.build.compilation import Compilation
from nativepack_core.build.hooks import BuildPipeline
from nativepack_core.classification.classifier import classify
from nativepack_core.classification.manifest import ManifestInjection, inject_manifest
from nativepack_core.classification.models import Classification
from nativepack_core.config import settings
from nativepack_core.distribution.orchestrator import DistributionReport, distribute
from nativepack_core.distribution.paths import OutputPaths, output_paths_from_cli
from nativepack_core.exceptions import ConfigurationError, NativepackError
from nativepack_core.logging_service import LoggingService
from nativepack_core.models import CliOptions, OutputPluginConfig, read_cli_options

logger = structlog.get_logger(__name__)

PLUGIN_NAME = "OutputPlugin"


class OutputPlugin:
    """
    Build plugin placing bundler output where a native app build expects it.

    The plugin is a no-op when there is no build invocation descriptor,
    when the invocation is not a bundling command, or when a development
    server is running.

    Attributes:
        config: Validated plugin configuration
        last_classification: Partition computed by the latest build
        last_injection: Manifest injected by the latest build
        last_report: Distribution report of the latest build

    Example:
        ```python
        plugin = OutputPlugin({"platform": "android", "localChunks": ["settings"]})
        pipeline = BuildPipeline().use(plugin)
        await pipeline.run(compilation)
        ```
    """

    def __init__(
        self,
        config: Union[OutputPluginConfig, Mapping[str, Any]],
        *,
        cli_options: Optional[CliOptions] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize OutputPlugin.

        Args:
            config: Plugin options (model or mapping with snake_case or
                camelCase keys)
            cli_options: Invocation descriptor; read from ``env`` when omitted
            env: Environment to read the descriptor from (default: os.environ)

        Raises:
            ConfigurationError: If the options are invalid or platform is missing
        """
        if not isinstance(config, OutputPluginConfig):
            try:
                config = OutputPluginConfig.model_validate(dict(config))
            except PydanticValidationError as e:
                raise ConfigurationError(
                    f"Invalid {PLUGIN_NAME} options",
                    error_code="CFG_005",
                    details={"errors": e.errors(include_url=False, include_context=False)},
                    original_exception=e,
                ) from e

        if not config.platform.strip():
            raise ConfigurationError(
                f"Missing `platform` option in {PLUGIN_NAME}",
                error_code="CFG_001",
            )

        self.config = config
        self._cli_options = cli_options
        self._env = env
        self._classifications: Dict[Compilation, Classification] = {}
        self.last_classification: Optional[Classification] = None
        self.last_injection: Optional[ManifestInjection] = None
        self.last_report: Optional[DistributionReport] = None

    @property
    def entry_name(self) -> str:
        """Configured entry name; only an unset entry falls back to settings."""
        if self.config.entry is None:
            return settings.default_entry
        return self.config.entry

    def apply(self, pipeline: BuildPipeline) -> None:
        """
        Register the plugin's stage callbacks, unless the build is bypassed.

        Raises:
            ConfigurationError: If the descriptor is malformed or lacks a
                bundle output path
        """
        cli_options = self._cli_options or read_cli_options(self._env)

        bypass_reason = None
        if cli_options is None:
            bypass_reason = "no_invocation_descriptor"
        elif cli_options.is_start or not cli_options.is_bundle:
            bypass_reason = "not_bundling"
        elif self.config.dev_server_enabled:
            bypass_reason = "dev_server_enabled"

        if bypass_reason is not None:
            logger.debug("output_plugin_bypassed", reason=bypass_reason)
            return

        paths = output_paths_from_cli(cli_options, self.config.remote_chunks_output)
        logger.debug("output_paths_detected", **paths.to_dict())

        pipeline.hooks.process_assets.tap(PLUGIN_NAME, self.process_assets)
        pipeline.hooks.after_emit.tap_promise(
            PLUGIN_NAME, lambda compilation: self.after_emit(compilation, paths)
        )
        pipeline.hooks.failed.tap(PLUGIN_NAME, self.discard)

    def process_assets(self, compilation: Compilation) -> Classification:
        """
        Classify the compilation's chunks and inject the runtime manifest.

        Raises:
            EntryResolutionError: If the entry chunk cannot be inferred
            ManifestError: If the entry asset cannot be rewritten
        """
        try:
            classification = classify(compilation.graph, self.config.local_chunks, self.entry_name)
            injection = inject_manifest(compilation, classification)
        except NativepackError as e:
            self._log_failure(e, "process_assets")
            raise

        self._classifications[compilation] = classification
        self.last_classification = classification
        self.last_injection = injection
        return classification

    async def after_emit(self, compilation: Compilation, paths: OutputPaths) -> DistributionReport:
        """
        Copy classified chunks to their destinations.

        Raises:
            ConfigurationError: If process_assets did not run for this
                compilation, or the compilation has no output path
            DistributionError: If any copy failed
        """
        classification = self._classifications.pop(compilation, None)
        if classification is None:
            raise ConfigurationError(
                "after_emit ran before chunks were classified",
                error_code="CFG_006",
            )

        try:
            report = await distribute(compilation, classification, paths, self.config.platform)
        except NativepackError as e:
            self._log_failure(e, "after_emit")
            raise

        self.last_report = report
        return report

    def discard(self, compilation: Compilation, error: BaseException) -> None:
        """Forget the classification of a build that failed before after_emit."""
        if self._classifications.pop(compilation, None) is not None:
            logger.debug("classification_discarded", error=type(error).__name__)

    def _log_failure(self, error: NativepackError, stage: str) -> None:
        LoggingService.log_error(
            error,
            error.correlation_id,
            context={"stage": stage, "plugin": PLUGIN_NAME, "details": error.details},
            logger_name=__name__,
        )
