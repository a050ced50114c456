"""
Configuration models for the output plugin and the build invocation descriptor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import json
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from nativepack_core.classification.rules import RuleSet
from nativepack_core.config import settings
from nativepack_core.exceptions import ConfigurationError


class OutputPluginConfig(BaseModel):
    """
    OutputPlugin configuration options.

    Attributes:
        platform: Target application platform (required, non-empty)
        dev_server_enabled: Whether a development server is running
        local_chunks: Rule(s) marking chunks bundled into the native package;
            every chunk not matched becomes remote
        remote_chunks_output: Directory for remote chunks and their assets.
            When unset, remote files stay where the bundler wrote them
        entry: Entry chunk name (settings.default_entry when unset)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    platform: str = ""
    dev_server_enabled: bool = False
    local_chunks: RuleSet = Field(default_factory=RuleSet)
    remote_chunks_output: Optional[str] = None
    entry: Optional[str] = None

    @field_validator("local_chunks", mode="before")
    @classmethod
    def coerce_local_chunks(cls, v: Any) -> RuleSet:
        """Accept a single rule or a list of rules."""
        return RuleSet.of(v)


class BundleArguments(BaseModel):
    """Arguments of a bundling command."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    platform: Optional[str] = None
    bundle_output: Optional[str] = None
    sourcemap_output: Optional[str] = None
    assets_dest: Optional[str] = None


class CliConfig(BaseModel):
    """Project-level configuration of the invocation."""

    model_config = ConfigDict(extra="ignore")

    root: str


class CliArguments(BaseModel):
    """Command arguments; exactly one command key is normally present."""

    model_config = ConfigDict(extra="allow")

    bundle: Optional[BundleArguments] = None
    start: Optional[Dict[str, Any]] = None


class CliOptions(BaseModel):
    """
    Build invocation descriptor.

    Serialized as JSON into an environment variable by whatever launched
    the bundler, e.g.::

        {"config": {"root": "/app"},
         "arguments": {"bundle": {"bundleOutput": "build/index.bundle"}}}
    """

    model_config = ConfigDict(extra="ignore")

    config: CliConfig
    arguments: CliArguments

    @property
    def is_start(self) -> bool:
        """True when the invocation runs the development server."""
        return self.arguments.start is not None

    @property
    def is_bundle(self) -> bool:
        return self.arguments.bundle is not None


def read_cli_options(
    env: Optional[Mapping[str, str]] = None,
    key: Optional[str] = None,
) -> Optional[CliOptions]:
    """
    Decode the invocation descriptor from the environment.

    Returns:
        CliOptions, or None when the variable is unset or holds JSON null

    Raises:
        ConfigurationError: If the variable holds malformed JSON or an
            unexpected structure
    """
    if env is None:
        env = os.environ
    if key is None:
        key = settings.cli_options_env_key

    raw = env.get(key)
    if raw is None:
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {key}: {e.msg}",
            error_code="CFG_004",
            original_exception=e,
        ) from e

    if data is None:
        return None

    try:
        return CliOptions.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Malformed build invocation descriptor in {key}",
            error_code="CFG_004",
            details={"errors": e.errors(include_url=False, include_context=False)},
            original_exception=e,
        ) from e
