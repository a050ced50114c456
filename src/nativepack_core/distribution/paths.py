"""
Destination path resolution.

Every relative path is rooted at the build's configured project root,
never at the process working directory.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from nativepack_core.exceptions import ConfigurationError
from nativepack_core.models import CliOptions

PathLike = Union[str, Path]


@dataclass(frozen=True)
class OutputPaths:
    """
    Absolute destinations for one build.

    Attributes:
        bundle_output: Entry bundle file
        bundle_output_dir: Directory of the entry bundle; other Local chunks land here
        sourcemap_output: Entry bundle source map
        assets_dest: Directory for Local auxiliary assets
        remote_chunks_output: Directory for Remote chunks, None to leave them in place
    """

    bundle_output: Path
    bundle_output_dir: Path
    sourcemap_output: Path
    assets_dest: Path
    remote_chunks_output: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bundle_output": str(self.bundle_output),
            "sourcemap_output": str(self.sourcemap_output),
            "assets_dest": str(self.assets_dest),
            "remote_chunks_output": (
                str(self.remote_chunks_output) if self.remote_chunks_output else None
            ),
        }


def _rooted(root: Path, value: PathLike) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return root / path


def resolve_output_paths(
    root: PathLike,
    bundle_output: Optional[PathLike],
    sourcemap_output: Optional[PathLike] = None,
    assets_dest: Optional[PathLike] = None,
    remote_chunks_output: Optional[PathLike] = None,
) -> OutputPaths:
    """
    Resolve destinations against ``root``.

    Defaults: the source map goes to ``<bundle_output>.map``; assets go
    next to the bundle.

    Raises:
        ConfigurationError: If no bundle output is given
    """
    if not bundle_output:
        raise ConfigurationError(
            "Missing bundle output path in build invocation",
            error_code="CFG_002",
        )

    root_path = Path(root).resolve()
    bundle = _rooted(root_path, bundle_output)
    bundle_dir = bundle.parent

    if sourcemap_output:
        sourcemap = _rooted(root_path, sourcemap_output)
    else:
        sourcemap = bundle.with_name(f"{bundle.name}.map")

    assets = _rooted(root_path, assets_dest) if assets_dest else bundle_dir
    remote = _rooted(root_path, remote_chunks_output) if remote_chunks_output else None

    return OutputPaths(
        bundle_output=bundle,
        bundle_output_dir=bundle_dir,
        sourcemap_output=sourcemap,
        assets_dest=assets,
        remote_chunks_output=remote,
    )


def output_paths_from_cli(
    options: CliOptions, remote_chunks_output: Optional[PathLike] = None
) -> OutputPaths:
    """
    Resolve destinations from a bundling invocation descriptor.

    Raises:
        ConfigurationError: If the invocation is not a bundling command or
            has no bundle output
    """
    args = options.arguments.bundle
    if args is None:
        raise ConfigurationError(
            "Build invocation is not a bundling command",
            error_code="CFG_004",
        )

    return resolve_output_paths(
        options.config.root,
        args.bundle_output,
        sourcemap_output=args.sourcemap_output,
        assets_dest=args.assets_dest,
        remote_chunks_output=remote_chunks_output,
    )
