"""
Local/Remote chunk classifier.

First pass over the chunk graph: tags every non-shared chunk Local or Remote
and collects shared chunks for the second pass.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Dict

import structlog

from nativepack_core.classification.entry_resolver import DEFAULT_ENTRY_NAME, resolve_entry
from nativepack_core.classification.models import Classification, PartialClassification
from nativepack_core.classification.rules import RuleSet
from nativepack_core.classification.shared_resolver import resolve_shared
from nativepack_core.graph.chunk_graph import Chunk, ChunkGraph

logger = structlog.get_logger(__name__)


def classify_chunks(graph: ChunkGraph, entry: Chunk, rules: RuleSet) -> PartialClassification:
    """
    Run the first classification pass.

    For each chunk in graph order: chunks already recorded as shared are
    skipped; the rest record their initial-closure peers as shared, then are
    tagged Local when they are the entry chunk or match ``rules`` and Remote
    otherwise.

    A chunk tagged here and only later found in another chunk's closure is
    moved to the shared set, so no chunk carries two tags. The entry chunk
    is never deferred: it is always tagged Local here.

    Args:
        graph: Chunk graph
        entry: Resolved entry chunk
        rules: Local-chunk rule set

    Returns:
        PartialClassification with the deferred shared chunks
    """
    shared: Dict[int, Chunk] = {}
    tagged: Dict[int, bool] = {}

    for chunk in graph:
        if chunk.index in shared:
            continue

        for index in sorted(graph.initial_closure(chunk)):
            if index in (chunk.index, entry.index) or index in shared:
                continue
            shared[index] = graph.chunk(index)

        if chunk == entry:
            tagged[chunk.index] = True
        else:
            tagged[chunk.index] = rules.matches(chunk.identity)

    partial = PartialClassification(entry=entry, shared=list(shared.values()))
    for index, is_local in tagged.items():
        if index in shared:
            continue
        if is_local:
            partial.local.append(graph.chunk(index))
        else:
            partial.remote.append(graph.chunk(index))

    return partial


def classify(
    graph: ChunkGraph,
    rules: RuleSet,
    entry_name: str = DEFAULT_ENTRY_NAME,
) -> Classification:
    """
    Resolve the entry chunk and partition the whole graph.

    Raises:
        EntryResolutionError: If the entry chunk cannot be found
    """
    entry_point = resolve_entry(graph, entry_name)
    partial = classify_chunks(graph, entry_point.chunk, rules)
    classification = resolve_shared(graph, partial, rules)

    logger.info(
        "chunks_classified",
        entry=entry_point.chunk.identity,
        local=classification.local_identities,
        remote=classification.remote_identities,
        shared=len(partial.shared),
    )
    return classification
