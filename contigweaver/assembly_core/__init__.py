"""
Assembly Core module for ContigWeaver.

This module provides the graph-based contig reconstruction engine:
- Overlap (de Bruijn style) multigraph construction from reads
- Exhaustive path enumeration with per-path edge disjointness
- Overlap collapsing of edge paths into contig strings
- Batch collection and streaming delivery of contigs
"""

from .dbg_engine_module import (
    OverlapGraph,
    OverlapGraphBuilder,
    OverlapNode,
    OverlapEdge,
    DisplayEdge,
    build_graph_from_reads,
    coerce_edge,
    make_graph,
    reads_to_kmers,
    to_graph,
)

from .path_enumerator_module import (
    PathEnumerator,
    PathLimit,
    PathRecord,
    assemble_path,
    collapse,
    enumerate_paths,
)

from .contig_collector import (
    ContigCollector,
    assemble_reads,
    collect_contigs,
    get_contigs,
)

from .contig_stream_module import (
    ChannelClosed,
    ChannelFailed,
    ContigChannel,
    ContigFound,
    ContigWorker,
    StreamEnd,
    StreamStart,
    drain,
    stream_contigs,
)

__all__ = [
    # Graph construction
    "OverlapGraph",
    "OverlapGraphBuilder",
    "OverlapNode",
    "OverlapEdge",
    "DisplayEdge",
    "build_graph_from_reads",
    "coerce_edge",
    "make_graph",
    "reads_to_kmers",
    "to_graph",
    # Enumeration
    "PathEnumerator",
    "PathLimit",
    "PathRecord",
    "assemble_path",
    "collapse",
    "enumerate_paths",
    # Batch
    "ContigCollector",
    "assemble_reads",
    "collect_contigs",
    "get_contigs",
    # Streaming
    "ChannelClosed",
    "ChannelFailed",
    "ContigChannel",
    "ContigFound",
    "ContigWorker",
    "StreamEnd",
    "StreamStart",
    "drain",
    "stream_contigs",
]
