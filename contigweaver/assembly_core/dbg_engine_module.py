#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

De Bruijn Graph (DBG) Engine for ContigWeaver.
- Splits reads into overlapping k-mers (stride 1, duplicates kept)
- Builds the prefix -> suffix overlap map of (k-1)-mers
- Converts the overlap map into a directed multigraph with one edge per
  k-mer occurrence, so parallel edges and self-loops stay traversable
- Collapses parallel occurrences into display edges with multiplicities

Author: ContigWeaver Development Team
License: MIT
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterable, Mapping, Union
from collections import Counter
import logging

from contigweaver.utils.sequence_utils import extract_kmers

logger = logging.getLogger(__name__)


# ============================================================================
# Core Data Structures
# ============================================================================

@dataclass(frozen=True)
class OverlapNode:
    """
    Node in the overlap graph.

    The label is a (k-1)-mer taken from the prefix or suffix of a k-mer.
    """
    id: int
    label: str


@dataclass(frozen=True)
class OverlapEdge:
    """
    Edge in the overlap graph.

    Represents one k-mer occurrence joining its prefix node to its suffix
    node. Two occurrences of the same k-mer are two edges with distinct ids.
    """
    id: int
    from_id: int  # Source node ID
    to_id: int  # Target node ID
    label: str  # K-mer spelled by this edge
    multiplicity: int = 1  # Occurrences sharing this (from, to, label)

    @property
    def is_self_loop(self) -> bool:
        return self.from_id == self.to_id


@dataclass(frozen=True)
class DisplayEdge:
    """Parallel occurrences of one k-mer collapsed into a single drawable edge."""
    id: int
    from_id: int
    to_id: int
    label: str
    multiplicity: int

    @property
    def display_label(self) -> str:
        if self.multiplicity == 1:
            return self.label
        return f"{self.label} ({self.multiplicity})"


EdgeLike = Union[OverlapEdge, Mapping[str, Any]]


def coerce_edge(edge: EdgeLike) -> OverlapEdge:
    """
    Accept an OverlapEdge or a plain ``{id, from, to, label}`` mapping.

    Mappings may also use ``from_id``/``to_id`` and may carry a ``count`` or
    ``multiplicity``.
    """
    if isinstance(edge, OverlapEdge):
        return edge

    from_id = edge['from'] if 'from' in edge else edge['from_id']
    to_id = edge['to'] if 'to' in edge else edge['to_id']
    multiplicity = edge.get('multiplicity', edge.get('count', 1)) or 1
    return OverlapEdge(
        id=int(edge['id']),
        from_id=int(from_id),
        to_id=int(to_id),
        label=str(edge.get('label') or ''),
        multiplicity=int(multiplicity),
    )


@dataclass
class OverlapGraph:
    """
    Directed overlap multigraph.

    ``out_edges`` is the adjacency index: node id -> outgoing edge ids in
    insertion order. It is only updated through ``add_edge`` so it never
    drifts from ``edges``. A node appears in ``out_edges`` once it gains its
    first outgoing edge, which fixes the order of traversal starts.
    """
    nodes: Dict[int, OverlapNode] = field(default_factory=dict)
    edges: Dict[int, OverlapEdge] = field(default_factory=dict)
    out_edges: Dict[int, List[int]] = field(default_factory=dict)
    k: Optional[int] = None

    @classmethod
    def from_edges(cls, edges: Iterable[EdgeLike], k: Optional[int] = None) -> "OverlapGraph":
        """
        Build a graph directly from an edge list.

        Node labels are inferred from edge labels (prefix for the source,
        suffix for the target) when not already known.
        """
        graph = cls(k=k)
        for raw in edges:
            edge = coerce_edge(raw)
            if edge.from_id not in graph.nodes:
                graph.add_node(OverlapNode(id=edge.from_id, label=edge.label[:-1]))
            if edge.to_id not in graph.nodes:
                graph.add_node(OverlapNode(id=edge.to_id, label=edge.label[1:]))
            graph.add_edge(edge)
        return graph

    def add_node(self, node: OverlapNode):
        """Add a node to the graph."""
        self.nodes[node.id] = node

    def add_edge(self, edge: OverlapEdge):
        """Add an edge and index it under its source node."""
        if edge.id in self.edges:
            raise ValueError(f"Duplicate edge id {edge.id}")
        self.edges[edge.id] = edge
        self.out_edges.setdefault(edge.from_id, []).append(edge.id)

    def outgoing(self, node_id: int) -> List[OverlapEdge]:
        """Outgoing edges of a node, in insertion order."""
        return [self.edges[eid] for eid in self.out_edges.get(node_id, [])]

    def out_degree(self, node_id: int) -> int:
        return len(self.out_edges.get(node_id, []))

    def starting_nodes(self) -> List[int]:
        """Nodes with at least one outgoing edge, in first-seen order."""
        return [node_id for node_id, eids in self.out_edges.items() if eids]

    def display_edges(self) -> List[DisplayEdge]:
        """
        Collapse occurrences sharing (from, to, label) into display edges.

        Display ids are dense and follow first-occurrence order.
        """
        merged: Dict[tuple, List[int]] = {}
        for edge in self.edges.values():
            key = (edge.from_id, edge.to_id, edge.label)
            merged.setdefault(key, []).append(edge.id)

        return [
            DisplayEdge(id=i, from_id=f, to_id=t, label=label, multiplicity=len(ids))
            for i, ((f, t, label), ids) in enumerate(merged.items())
        ]

    def __len__(self) -> int:
        return len(self.edges)


# ============================================================================
# Graph construction
# ============================================================================

def reads_to_kmers(k: int, reads: Iterable[str]) -> List[str]:
    """
    Split every read into its k-mers.

    Output follows read order, then position order. Duplicates are kept and
    reads shorter than k contribute nothing.
    """
    kmers: List[str] = []
    for read in reads:
        kmers.extend(extract_kmers(read, k))
    return kmers


def make_graph(kmers: Iterable[str]) -> Dict[str, List[str]]:
    """
    Build the overlap map: prefix (k-1)-mer -> list of suffix (k-1)-mers.

    Repeated k-mers append repeated targets. Every suffix is present as a
    key so dead-end nodes are represented by an empty list.
    """
    overlap_map: Dict[str, List[str]] = {}

    for kmer in kmers:
        left = kmer[:-1]
        right = kmer[1:]

        overlap_map.setdefault(left, []).append(right)
        overlap_map.setdefault(right, [])

    return overlap_map


def to_graph(overlap_map: Mapping[str, List[str]], k: Optional[int] = None) -> OverlapGraph:
    """
    Convert an overlap map into an OverlapGraph.

    Node ids follow key order. Each target in each list becomes its own edge,
    labelled with the first character of the source followed by the target,
    which recovers the original k-mer.
    """
    keys = list(overlap_map.keys())
    node_ids = {label: i for i, label in enumerate(keys)}

    graph = OverlapGraph(k=k)
    for label in keys:
        graph.add_node(OverlapNode(id=node_ids[label], label=label))

    triples = []
    for source in keys:
        for target in overlap_map[source]:
            if target not in node_ids:
                # Targets missing from the key set get appended as new nodes
                node_ids[target] = len(node_ids)
                graph.add_node(OverlapNode(id=node_ids[target], label=target))
            triples.append((node_ids[source], node_ids[target], source[:1] + target))

    multiplicity = Counter(triples)
    for edge_id, (from_id, to_id, label) in enumerate(triples):
        graph.add_edge(OverlapEdge(
            id=edge_id,
            from_id=from_id,
            to_id=to_id,
            label=label,
            multiplicity=multiplicity[(from_id, to_id, label)],
        ))

    return graph


class OverlapGraphBuilder:
    """
    Builder class for constructing overlap graphs from reads.

    Runs the three construction stages and logs their sizes.
    """

    def __init__(self, k: int):
        """
        Initialize graph builder.

        Args:
            k: K-mer size; nodes are (k-1)-mers
        """
        self.k = k

    def build_from_reads(self, reads: List[str]) -> OverlapGraph:
        """
        Build an overlap graph from raw reads.

        Args:
            reads: Read sequences

        Returns:
            OverlapGraph with one edge per k-mer occurrence

        Algorithm:
            1. Extract every k-mer from every read
            2. Record prefix -> suffix overlaps
            3. Number nodes and edges
        """
        logger.info(f"Building overlap graph from {len(reads)} reads (k={self.k})")

        kmers = reads_to_kmers(self.k, reads)
        logger.info(f"Extracted {len(kmers)} {self.k}-mers ({len(set(kmers))} distinct)")

        return self.build_from_kmers(kmers)

    def build_from_kmers(self, kmers: List[str]) -> OverlapGraph:
        overlap_map = make_graph(kmers)
        graph = to_graph(overlap_map, k=self.k)
        logger.info(f"Built overlap graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return graph


def build_graph_from_reads(reads: List[str], k: int) -> OverlapGraph:
    """
    Convenience function to build an overlap graph from reads.

    Args:
        reads: Read sequences
        k: K-mer size

    Returns:
        OverlapGraph
    """
    return OverlapGraphBuilder(k).build_from_reads(reads)

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
