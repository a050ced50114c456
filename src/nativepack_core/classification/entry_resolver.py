"""
Entry resolution: find the initial chunk group and the entry chunk in it.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from dataclasses import dataclass

from nativepack_core.exceptions import EntryResolutionError
from nativepack_core.graph.chunk_graph import Chunk, ChunkGraph, ChunkGroup

DEFAULT_ENTRY_NAME = "main"


@dataclass(frozen=True)
class EntryPoint:
    """The initial chunk group and the entry chunk inside it."""

    group: ChunkGroup
    chunk: Chunk


def resolve_entry(graph: ChunkGraph, entry_name: str = DEFAULT_ENTRY_NAME) -> EntryPoint:
    """
    Locate the entry chunk.

    Only the first initial chunk group is searched, and the chunk must
    match by name (ids are not considered).

    Raises:
        EntryResolutionError: If there is no initial group or no chunk in it
            is named ``entry_name``
    """
    group = next((g for g in graph.groups if g.is_initial), None)
    if group is None:
        raise EntryResolutionError(
            "Cannot infer entry chunk: compilation has no initial chunk group",
            error_code="ENTRY_001",
            details={"entry": entry_name},
        )

    for chunk in graph.group_chunks(group):
        if chunk.name == entry_name:
            return EntryPoint(group=group, chunk=chunk)

    raise EntryResolutionError(
        f"Cannot infer entry chunk: no chunk named {entry_name!r} in the initial chunk group",
        error_code="ENTRY_002",
        details={
            "entry": entry_name,
            "group": group.name,
            "candidates": [c.identity for c in graph.group_chunks(group)],
        },
    )
