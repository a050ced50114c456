"""
ChunkGraph - Arena view over a bundler compilation result.

Chunks and chunk groups are stored in flat lists and reference each other
by integer index, so chunks shared by many groups never form owning cycles.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Union

from nativepack_core.exceptions import GraphError

ChunkRef = Union["Chunk", int, str]


@dataclass
class Chunk:
    """
    A unit of bundled output.

    Attributes:
        index: Position in the owning graph's arena
        id: Bundler-assigned chunk id (string or number)
        name: Chunk name, if the bundler named it
        files: Emitted output files, primary file first
        auxiliary_files: Assets emitted on behalf of the chunk
        requires: Arena indices of chunks this chunk needs for its initial load
        groups: Arena indices of groups containing this chunk
    """

    index: int
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    files: List[str] = field(default_factory=list)
    auxiliary_files: List[str] = field(default_factory=list)
    requires: List[int] = field(default_factory=list)
    groups: List[int] = field(default_factory=list)

    @property
    def identity(self) -> Optional[str]:
        """Name, falling back to the stringified id. None when neither is set."""
        if self.name is not None:
            return self.name
        if self.id is not None:
            return str(self.id)
        return None

    def __hash__(self) -> int:
        return hash(self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return False
        return self.index == other.index


@dataclass
class ChunkGroup:
    """Ordered set of chunks loaded together as one unit."""

    index: int
    name: Optional[str] = None
    is_initial: bool = False
    chunks: List[int] = field(default_factory=list)
    children: List[int] = field(default_factory=list)


class ChunkGraph:
    """
    Read-mostly arena of chunks and chunk groups.

    Built once per compilation through add_chunk/add_group/add_requirement,
    then queried by the classification passes. Iteration order is insertion
    order, which keeps classification output deterministic.

    Example:
        ```python
        graph = ChunkGraph()
        main = graph.add_chunk(name="main", files=["index.bundle"])
        vendor = graph.add_chunk(name="vendor", files=["vendor.chunk.bundle"])
        graph.add_requirement(main, vendor)
        graph.add_group([main], name="main", initial=True)
        ```
    """

    def __init__(self) -> None:
        self._chunks: List[Chunk] = []
        self._groups: List[ChunkGroup] = []
        self._by_identity: Dict[str, int] = {}
        self._by_id: Dict[str, int] = {}
        self._closures: Dict[int, FrozenSet[int]] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_chunk(
        self,
        name: Optional[str] = None,
        id: Optional[Union[str, int]] = None,
        files: Iterable[str] = (),
        auxiliary_files: Iterable[str] = (),
    ) -> Chunk:
        """
        Append a chunk to the arena.

        Raises:
            GraphError: If another chunk already has the same identity or id
        """
        chunk = Chunk(
            index=len(self._chunks),
            id=id,
            name=name,
            files=_unique(files),
            auxiliary_files=_unique(auxiliary_files),
        )
        identity = chunk.identity
        if identity is not None and identity in self._by_identity:
            raise GraphError(
                f"Duplicate chunk identity: {identity!r}",
                error_code="GRAPH_001",
                details={"identity": identity},
            )
        if id is not None and str(id) in self._by_id:
            raise GraphError(
                f"Duplicate chunk id: {id!r}",
                error_code="GRAPH_001",
                details={"id": str(id)},
            )

        if identity is not None:
            self._by_identity[identity] = chunk.index
        if id is not None:
            self._by_id[str(id)] = chunk.index

        self._chunks.append(chunk)
        self._closures.clear()
        return chunk

    def add_group(
        self,
        chunks: Sequence[ChunkRef],
        name: Optional[str] = None,
        initial: bool = False,
        parent: Optional[ChunkGroup] = None,
    ) -> ChunkGroup:
        """Append a chunk group; optionally link it as a child of ``parent``."""
        group = ChunkGroup(index=len(self._groups), name=name, is_initial=initial)
        for ref in chunks:
            chunk = self.chunk(ref)
            if chunk.index in group.chunks:
                continue
            group.chunks.append(chunk.index)
            chunk.groups.append(group.index)

        if parent is not None:
            parent.children.append(group.index)

        self._groups.append(group)
        self._closures.clear()
        return group

    def add_requirement(self, chunk: ChunkRef, required: ChunkRef) -> None:
        """Record that ``chunk`` needs ``required`` to be present at initial load."""
        source = self.chunk(chunk)
        target = self.chunk(required)
        if target.index not in source.requires:
            source.requires.append(target.index)
            self._closures.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def chunk(self, ref: ChunkRef) -> Chunk:
        """
        Look up a chunk by Chunk, arena index or string.

        Strings match the identity first, then the stringified chunk id, so a
        named chunk can still be referenced by its id.

        Raises:
            GraphError: If the reference does not resolve
        """
        if isinstance(ref, Chunk):
            if ref.index < len(self._chunks) and self._chunks[ref.index] is ref:
                return ref
        elif isinstance(ref, int) and not isinstance(ref, bool):
            if 0 <= ref < len(self._chunks):
                return self._chunks[ref]
        elif isinstance(ref, str):
            if ref in self._by_identity:
                return self._chunks[self._by_identity[ref]]
            if ref in self._by_id:
                return self._chunks[self._by_id[ref]]

        raise GraphError(
            f"Unknown chunk reference: {ref!r}",
            error_code="GRAPH_002",
            details={"reference": repr(ref)},
        )

    def group(self, index: int) -> ChunkGroup:
        return self._groups[index]

    @property
    def chunks(self) -> List[Chunk]:
        return list(self._chunks)

    @property
    def groups(self) -> List[ChunkGroup]:
        return list(self._groups)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def group_chunks(self, group: ChunkGroup) -> List[Chunk]:
        return [self._chunks[i] for i in group.chunks]

    def initial_closure(self, chunk: ChunkRef) -> FrozenSet[int]:
        """
        Arena indices of every chunk ``chunk`` needs at initial load.

        Includes the chunk itself, all chunks of the initial groups it
        belongs to (following initial child groups), and everything reachable
        through explicit requirement edges.
        """
        start = self.chunk(chunk)
        cached = self._closures.get(start.index)
        if cached is not None:
            return cached

        found = {start.index}
        group_queue = list(start.groups)
        seen_groups = set(group_queue)
        while group_queue:
            group = self._groups[group_queue.pop(0)]
            if not group.is_initial:
                continue
            found.update(group.chunks)
            for child in group.children:
                if child not in seen_groups:
                    seen_groups.add(child)
                    group_queue.append(child)

        pending = list(found)
        while pending:
            for required in self._chunks[pending.pop()].requires:
                if required not in found:
                    found.add(required)
                    pending.append(required)

        closure = frozenset(found)
        self._closures[start.index] = closure
        return closure


def _unique(values: Iterable[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result
