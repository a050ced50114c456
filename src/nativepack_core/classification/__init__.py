"""
Chunk classification module for nativepack.

Entry resolution, Local/Remote partitioning, shared-chunk resolution and
runtime manifest injection.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from nativepack_core.classification.classifier import classify, classify_chunks
from nativepack_core.classification.entry_resolver import (
    DEFAULT_ENTRY_NAME,
    EntryPoint,
    resolve_entry,
)
from nativepack_core.classification.manifest import (
    CHUNKS_GLOBAL,
    ManifestInjection,
    inject_manifest,
    render_manifest,
    shift_mappings,
)
from nativepack_core.classification.models import (
    ChunkLocation,
    Classification,
    PartialClassification,
)
from nativepack_core.classification.rules import Rule, RuleKind, RuleSet, rule_matches
from nativepack_core.classification.shared_resolver import resolve_shared

__all__ = [
    "classify",
    "classify_chunks",
    "resolve_shared",
    "resolve_entry",
    "EntryPoint",
    "DEFAULT_ENTRY_NAME",
    "inject_manifest",
    "render_manifest",
    "shift_mappings",
    "ManifestInjection",
    "CHUNKS_GLOBAL",
    "ChunkLocation",
    "Classification",
    "PartialClassification",
    "Rule",
    "RuleKind",
    "RuleSet",
    "rule_matches",
]
