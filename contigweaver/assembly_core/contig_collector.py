#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

Contig collection and batch assembly.

Turns the raw stream of assembled path strings into the final contig list:
deduplicated, stripped of anything no longer than one k-mer, and ordered by
descending length with lexicographic tie-breaking.

Author: ContigWeaver Development Team
License: MIT
"""

from typing import Iterable, List, Optional, Union
import logging

from contigweaver.assembly_core.dbg_engine_module import (
    EdgeLike,
    OverlapGraph,
    OverlapGraphBuilder,
)
from contigweaver.assembly_core.path_enumerator_module import PathEnumerator

logger = logging.getLogger(__name__)


def contig_sort_key(contig: str):
    """Longest first, then alphabetical."""
    return (-len(contig), contig)


def collect_contigs(contigs: Iterable[str], k: int) -> List[str]:
    """
    Deduplicate, filter and order assembled contigs.

    Args:
        contigs: Assembled strings in any order, duplicates allowed
        k: K-mer size; contigs of length <= k are dropped

    Returns:
        Sorted list of distinct contigs longer than k
    """
    distinct = {contig for contig in contigs if len(contig) > k}
    return sorted(distinct, key=contig_sort_key)


class ContigCollector:
    """
    Incremental collector for streamed contigs.

    Mirrors ``collect_contigs`` but accepts contigs one at a time so a
    consumer can show a valid partial result while a run is still going.
    """

    def __init__(self, k: int):
        self.k = k
        self._seen = set()
        self._received = 0

    def reset(self):
        self._seen.clear()
        self._received = 0

    def add(self, contig: str) -> bool:
        """Add one contig; returns True if it changed the result."""
        self._received += 1
        if len(contig) <= self.k or contig in self._seen:
            return False
        self._seen.add(contig)
        return True

    def extend(self, contigs: Iterable[str]) -> int:
        return sum(1 for contig in contigs if self.add(contig))

    @property
    def received(self) -> int:
        """Number of contigs offered, including rejected ones."""
        return self._received

    def snapshot(self) -> List[str]:
        """Current result, sorted the same way as the batch result."""
        return sorted(self._seen, key=contig_sort_key)

    def __len__(self) -> int:
        return len(self._seen)


def as_graph(graph_or_edges: Union[OverlapGraph, Iterable[EdgeLike]], k: int) -> OverlapGraph:
    if isinstance(graph_or_edges, OverlapGraph):
        return graph_or_edges
    return OverlapGraph.from_edges(graph_or_edges, k=k)


def get_contigs(
    graph_or_edges: Union[OverlapGraph, Iterable[EdgeLike]],
    k: int,
    max_paths: Optional[int] = None
) -> List[str]:
    """
    Batch mode: enumerate every path and return the final contig list.

    Args:
        graph_or_edges: An OverlapGraph or a list of ``{id, from, to, label}`` edges
        k: K-mer size
        max_paths: Optional enumeration ceiling

    Returns:
        Sorted contigs longer than k

    Example:
        >>> get_contigs([
        ...     {'id': 0, 'from': 0, 'to': 1, 'label': 'AAB'},
        ...     {'id': 1, 'from': 1, 'to': 2, 'label': 'ABC'},
        ... ], 3)
        ['AABC']
    """
    graph = as_graph(graph_or_edges, k)
    enumerator = PathEnumerator(graph, k, max_paths=max_paths)

    paths = 0
    contigs = set()
    for record in enumerator.iter_paths():
        paths += 1
        contigs.add(record.contig)

    result = collect_contigs(contigs, k)
    logger.info(
        f"Enumerated {paths} paths -> {len(contigs)} distinct strings, "
        f"{len(result)} contigs longer than k={k}"
    )
    return result


def assemble_reads(
    reads: List[str],
    k: int,
    max_paths: Optional[int] = None
) -> List[str]:
    """
    Full batch pipeline: reads -> k-mers -> overlap graph -> contigs.

    Args:
        reads: Read sequences
        k: K-mer size
        max_paths: Optional enumeration ceiling

    Returns:
        Sorted contigs longer than k
    """
    graph = OverlapGraphBuilder(k).build_from_reads(reads)
    return get_contigs(graph, k, max_paths=max_paths)

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
