"""
Shared-artifact resolution (second classification pass).

A shared chunk becomes Local when any chunk already tagged Local needs it
at initial load; otherwise the local-chunk rules decide.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import structlog

from nativepack_core.classification.models import Classification, PartialClassification
from nativepack_core.classification.rules import RuleSet
from nativepack_core.graph.chunk_graph import ChunkGraph

logger = structlog.get_logger(__name__)


def resolve_shared(
    graph: ChunkGraph, partial: PartialClassification, rules: RuleSet
) -> Classification:
    """
    Resolve deferred chunks into Local or Remote.

    Single non-recursive pass in discovery order. A shared chunk promoted to
    Local counts as Local for the shared chunks resolved after it, but
    earlier decisions are not revisited.

    Args:
        graph: Graph the partial classification was computed from
        partial: First-pass result
        rules: Local-chunk rule set

    Returns:
        Complete Classification
    """
    local = list(partial.local)
    remote = list(partial.remote)

    for shared in partial.shared:
        required_by_local = any(
            shared.index in graph.initial_closure(chunk) for chunk in local
        )
        is_local = required_by_local or rules.matches(shared.identity)
        if is_local:
            local.append(shared)
        else:
            remote.append(shared)

        logger.debug(
            "shared_chunk_resolved",
            chunk=shared.identity,
            local=is_local,
            required_by_local=required_by_local,
        )

    return Classification(entry=partial.entry, local=local, remote=remote)
