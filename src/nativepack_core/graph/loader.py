"""
Graph description loader.

Reads a JSON description of a compilation result (chunks, chunk groups,
output path) and builds a ChunkGraph from it.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import structlog
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from nativepack_core.exceptions import GraphError
from nativepack_core.graph.chunk_graph import ChunkGraph, ChunkGroup

logger = structlog.get_logger(__name__)


class ChunkSpec(BaseModel):
    """One chunk in a graph description."""

    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    auxiliary_files: List[str] = Field(default_factory=list)
    requires: List[Union[str, int]] = Field(default_factory=list)


class ChunkGroupSpec(BaseModel):
    """One chunk group; ``chunks`` and ``children`` reference by identity."""

    name: Optional[str] = None
    initial: bool = False
    chunks: List[Union[str, int]] = Field(default_factory=list)
    children: List[str] = Field(default_factory=list)


class GraphDescription(BaseModel):
    """Top-level graph description document."""

    output_path: Optional[str] = None
    chunks: List[ChunkSpec] = Field(default_factory=list)
    chunk_groups: List[ChunkGroupSpec] = Field(default_factory=list)


def graph_from_dict(data: Dict[str, Any]) -> Tuple[ChunkGraph, Optional[str]]:
    """
    Build a ChunkGraph from a parsed description.

    Chunk references are names or ids. A reference is stringified and
    matched against chunk identities first, then against chunk ids, so a
    named chunk can be referenced by its id.

    Returns:
        Tuple of (graph, output_path as written in the description)

    Raises:
        GraphError: If the description is malformed or references unknown chunks
    """
    try:
        description = GraphDescription.model_validate(data)
    except PydanticValidationError as e:
        raise GraphError(
            f"Malformed graph description: {e.error_count()} error(s)",
            error_code="GRAPH_003",
            original_exception=e,
        ) from e

    graph = ChunkGraph()
    for spec in description.chunks:
        graph.add_chunk(
            name=spec.name,
            id=spec.id,
            files=spec.files,
            auxiliary_files=spec.auxiliary_files,
        )

    for spec, chunk in zip(description.chunks, graph.chunks):
        for ref in spec.requires:
            graph.add_requirement(chunk, _ref(ref))

    groups: Dict[str, ChunkGroup] = {}
    for spec in description.chunk_groups:
        group = graph.add_group([_ref(r) for r in spec.chunks], name=spec.name, initial=spec.initial)
        if spec.name:
            groups[spec.name] = group

    for spec, group in zip(description.chunk_groups, graph.groups):
        for child_name in spec.children:
            if child_name not in groups:
                raise GraphError(
                    f"Unknown chunk group: {child_name!r}",
                    error_code="GRAPH_002",
                    details={"group": child_name},
                )
            group.children.append(groups[child_name].index)

    logger.debug(
        "graph_loaded",
        chunks=len(graph),
        chunk_groups=len(graph.groups),
    )
    return graph, description.output_path


def load_graph(path: Path) -> Tuple[ChunkGraph, Path]:
    """
    Load a graph description file.

    The output path defaults to the description's directory and, when
    relative, is resolved against it.

    Raises:
        GraphError: If the file cannot be read or parsed
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise GraphError(
            f"Cannot read graph description {path}: {e}",
            error_code="GRAPH_003",
            original_exception=e,
        ) from e

    if not isinstance(data, dict):
        raise GraphError("Graph description must be a JSON object", error_code="GRAPH_003")

    graph, output_path = graph_from_dict(data)
    base_dir = path.resolve().parent
    resolved = base_dir / output_path if output_path else base_dir
    return graph, resolved.resolve()


def _ref(value: Union[str, int]) -> str:
    return str(value)
