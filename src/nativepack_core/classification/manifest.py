"""
Runtime manifest injection.

Prepends a global declaration listing the Local chunks to the entry
chunk's primary artifact, e.g.::

    var __CHUNKS__={"local":["main","vendor"]};

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from nativepack_core.build.compilation import AssetSource, Compilation
from nativepack_core.classification.models import Classification
from nativepack_core.exceptions import ManifestError

logger = structlog.get_logger(__name__)

CHUNKS_GLOBAL = "__CHUNKS__"


@dataclass(frozen=True)
class ManifestInjection:
    """
    What was injected and where.

    Attributes:
        asset_name: Mutated asset (entry chunk's first file)
        prefix: Injected text, trailing newline included
        prefix_bytes: UTF-8 length of ``prefix``
        line_offset: Lines added in front of the original content
        source_map: Name of the source map that was shifted, if any
    """

    asset_name: str
    prefix: str
    prefix_bytes: int
    line_offset: int
    source_map: Optional[str] = None


def render_manifest(local_chunks: List[Optional[str]]) -> str:
    """Render the declaration for the given Local chunk identities."""
    payload = json.dumps({"local": local_chunks}, separators=(",", ":"), ensure_ascii=False)
    return f"var {CHUNKS_GLOBAL}={payload};\n"


def inject_manifest(compilation: Compilation, classification: Classification) -> ManifestInjection:
    """
    Prepend the runtime manifest to the entry chunk's primary artifact.

    The rest of the artifact is preserved byte-for-byte. A sibling
    ``<asset>.map`` JSON source map is shifted by the injected line count.
    Must run once per build: a second run prepends a second declaration.

    Raises:
        ManifestError: If the entry chunk has no files or its primary
            asset is missing from the compilation
    """
    entry = classification.entry
    if not entry.files:
        raise ManifestError(
            f"Entry chunk {entry.identity!r} has no output files",
            error_code="MANIFEST_001",
            details={"entry": entry.identity},
        )

    asset_name = entry.files[0]
    if not compilation.has_asset(asset_name):
        raise ManifestError(
            f"Entry asset {asset_name!r} is missing from the compilation",
            error_code="MANIFEST_002",
            details={"entry": entry.identity, "asset": asset_name},
        )

    prefix = render_manifest(classification.local_identities)
    compilation.update_asset(asset_name, lambda source: _prepend(prefix, source))

    line_offset = prefix.count("\n")
    map_name = f"{asset_name}.map"
    shifted = None
    if compilation.has_asset(map_name):
        shifted = _shift_source_map(compilation, map_name, line_offset)

    injection = ManifestInjection(
        asset_name=asset_name,
        prefix=prefix,
        prefix_bytes=len(prefix.encode("utf-8")),
        line_offset=line_offset,
        source_map=shifted,
    )
    logger.info(
        "manifest_injected",
        asset=asset_name,
        local=classification.local_identities,
        prefix_bytes=injection.prefix_bytes,
        source_map=shifted,
    )
    return injection


def shift_mappings(source_map: Dict[str, Any], lines: int) -> Dict[str, Any]:
    """
    Return a copy of ``source_map`` whose generated lines start ``lines`` later.

    Plain maps get ``lines`` empty segments in front of ``mappings``;
    index maps get every section offset moved down.
    """
    shifted = dict(source_map)
    if "sections" in shifted:
        sections = []
        for section in shifted["sections"]:
            section = dict(section)
            offset = dict(section.get("offset", {}))
            offset["line"] = offset.get("line", 0) + lines
            section["offset"] = offset
            sections.append(section)
        shifted["sections"] = sections
    else:
        shifted["mappings"] = ";" * lines + shifted.get("mappings", "")
    return shifted


def _prepend(prefix: str, source: AssetSource) -> AssetSource:
    if isinstance(source, bytes):
        return prefix.encode("utf-8") + source
    return prefix + source


def _shift_source_map(compilation: Compilation, map_name: str, lines: int) -> Optional[str]:
    raw = compilation.get_asset(map_name)
    try:
        source_map = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning("source_map_not_shifted", asset=map_name, error=str(e))
        return None

    if not isinstance(source_map, dict):
        logger.warning("source_map_not_shifted", asset=map_name, error="not a JSON object")
        return None

    rendered = json.dumps(shift_mappings(source_map, lines), separators=(",", ":"))
    compilation.emit_asset(map_name, rendered.encode("utf-8") if isinstance(raw, bytes) else rendered)
    return map_name
