"""
Classification result types.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from nativepack_core.graph.chunk_graph import Chunk


class ChunkLocation(str, Enum):
    """Where a chunk ships."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass
class PartialClassification:
    """
    Output of the first classification pass.

    Attributes:
        entry: The entry chunk
        local: Chunks tagged Local, in graph order
        remote: Chunks tagged Remote, in graph order
        shared: Chunks deferred to the shared-artifact pass, in discovery order
    """

    entry: Chunk
    local: List[Chunk] = field(default_factory=list)
    remote: List[Chunk] = field(default_factory=list)
    shared: List[Chunk] = field(default_factory=list)


@dataclass
class Classification:
    """
    Final Local/Remote partition of a chunk graph.

    Every chunk appears in exactly one of ``local`` and ``remote``.
    """

    entry: Chunk
    local: List[Chunk] = field(default_factory=list)
    remote: List[Chunk] = field(default_factory=list)

    def location_of(self, chunk: Chunk) -> Optional[ChunkLocation]:
        if chunk in self.local:
            return ChunkLocation.LOCAL
        if chunk in self.remote:
            return ChunkLocation.REMOTE
        return None

    @property
    def local_identities(self) -> List[Optional[str]]:
        """Identities of Local chunks in classification order."""
        return [chunk.identity for chunk in self.local]

    @property
    def remote_identities(self) -> List[Optional[str]]:
        return [chunk.identity for chunk in self.remote]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry": self.entry.identity,
            "local": self.local_identities,
            "remote": self.remote_identities,
        }
