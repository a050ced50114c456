"""
Unit tests for destination path resolution.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from pathlib import Path

import pytest

from nativepack_core.distribution import output_paths_from_cli, resolve_output_paths
from nativepack_core.exceptions import ConfigurationError
from nativepack_core.models import CliOptions


class TestResolveOutputPaths:
    """Test resolve_output_paths()."""

    def test_defaults(self, tmp_path):
        paths = resolve_output_paths(tmp_path, "build/index.bundle")

        bundle = tmp_path.resolve() / "build" / "index.bundle"
        assert paths.bundle_output == bundle
        assert paths.bundle_output_dir == bundle.parent
        assert paths.sourcemap_output == bundle.parent / "index.bundle.map"
        assert paths.assets_dest == bundle.parent
        assert paths.remote_chunks_output is None

    def test_relative_paths_rooted_at_root_not_cwd(self, tmp_path, monkeypatch):
        root = tmp_path / "project"
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        paths = resolve_output_paths(
            root,
            "out/main.bundle",
            sourcemap_output="maps/main.map",
            assets_dest="res",
            remote_chunks_output="remote",
        )

        base = root.resolve()
        assert paths.sourcemap_output == base / "maps" / "main.map"
        assert paths.assets_dest == base / "res"
        assert paths.remote_chunks_output == base / "remote"

    def test_absolute_paths_kept(self, tmp_path):
        absolute = tmp_path / "abs" / "index.bundle"

        paths = resolve_output_paths("/unused-root", absolute)

        assert paths.bundle_output == absolute

    @pytest.mark.parametrize("bundle_output", [None, ""])
    def test_missing_bundle_output(self, tmp_path, bundle_output):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_output_paths(tmp_path, bundle_output)

        assert exc_info.value.error_code == "CFG_002"

    def test_to_dict(self, tmp_path):
        paths = resolve_output_paths(tmp_path, "index.bundle")

        data = paths.to_dict()
        assert data["bundle_output"] == str(tmp_path.resolve() / "index.bundle")
        assert data["remote_chunks_output"] is None


class TestOutputPathsFromCli:
    """Test output_paths_from_cli()."""

    def test_bundle_invocation(self, tmp_path):
        options = CliOptions.model_validate(
            {
                "config": {"root": str(tmp_path)},
                "arguments": {"bundle": {"bundleOutput": "ios/main.jsbundle"}},
            }
        )

        paths = output_paths_from_cli(options, remote_chunks_output="build/remote")

        assert paths.bundle_output == tmp_path.resolve() / "ios" / "main.jsbundle"
        assert paths.remote_chunks_output == tmp_path.resolve() / "build" / "remote"

    def test_not_a_bundle_invocation(self):
        options = CliOptions.model_validate({"config": {"root": "/app"}, "arguments": {}})

        with pytest.raises(ConfigurationError) as exc_info:
            output_paths_from_cli(options)

        assert exc_info.value.error_code == "CFG_004"

    def test_bundle_without_output(self):
        options = CliOptions.model_validate(
            {"config": {"root": "/app"}, "arguments": {"bundle": {"platform": "ios"}}}
        )

        with pytest.raises(ConfigurationError) as exc_info:
            output_paths_from_cli(options)

        assert exc_info.value.error_code == "CFG_002"


def test_paths_are_path_objects(tmp_path):
    paths = resolve_output_paths(str(tmp_path), "index.bundle")

    assert isinstance(paths.bundle_output, Path)
