"""
Chunk graph module for nativepack.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from nativepack_core.graph.chunk_graph import Chunk, ChunkGraph, ChunkGroup
from nativepack_core.graph.loader import GraphDescription, graph_from_dict, load_graph

__all__ = [
    "Chunk",
    "ChunkGroup",
    "ChunkGraph",
    "GraphDescription",
    "graph_from_dict",
    "load_graph",
]
