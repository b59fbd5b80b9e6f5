#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

Path enumeration over the overlap multigraph.

Every node with outgoing edges starts its own depth-first walk. A walk may
revisit nodes but never reuses an edge id inside one path, which is what
lets cycles, self-loops and parallel edges terminate. A path is recorded at
true dead ends and again each time the walk backs out of a node, so every
prefix ending at a branch point is reported alongside the maximal paths.

The walk keeps an explicit frame stack instead of recursing, so deep graphs
do not hit the interpreter recursion limit.

Author: ContigWeaver Development Team
License: MIT
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple
import logging

from contigweaver.assembly_core.dbg_engine_module import OverlapEdge, OverlapGraph

logger = logging.getLogger(__name__)


# ============================================================================
# Contig assembly
# ============================================================================

def collapse(contig: str, label: str, k: int) -> str:
    """
    Append the part of ``label`` that extends past the (k-1)-base overlap.

    >>> collapse("AAB", "ABC", 3)
    'AABC'
    """
    return contig + label[max(k - 1, 0):]


def assemble_path(edges: Sequence[OverlapEdge], k: int) -> str:
    """
    Spell out the sequence of an edge path.

    The first edge contributes its whole label; each later edge is collapsed
    onto the running contig in path order.
    """
    contig = ''
    for i, edge in enumerate(edges):
        contig = edge.label if i == 0 else collapse(contig, edge.label, k)
    return contig


# ============================================================================
# Enumeration ceiling
# ============================================================================

class PathLimit:
    """
    Ceiling on the number of paths one enumeration run may accept.

    ``max_paths=None`` means unbounded. Subclasses can override ``accept``
    to apply a different budget.
    """

    def __init__(self, max_paths: Optional[int] = None):
        if max_paths is not None and max_paths < 0:
            raise ValueError(f"max_paths must be >= 0, got {max_paths}")
        self.max_paths = max_paths
        self.count = 0
        self.exhausted = False

    def reset(self):
        self.count = 0
        self.exhausted = False

    def accept(self) -> bool:
        """Count one more path, or refuse it once the ceiling is reached."""
        if self.exhausted:
            return False
        if self.max_paths is not None and self.count >= self.max_paths:
            self.exhausted = True
            logger.warning(
                f"Path ceiling of {self.max_paths} reached; "
                f"stopping enumeration with a partial result"
            )
            return False
        self.count += 1
        return True

    def __repr__(self) -> str:
        return f"PathLimit(max_paths={self.max_paths}, count={self.count})"


# ============================================================================
# Path enumeration
# ============================================================================

@dataclass(frozen=True)
class PathRecord:
    """One emitted path and the contig it spells."""
    start_node: int
    edge_ids: Tuple[int, ...]
    contig: str

    @property
    def signature(self) -> str:
        return ','.join(str(eid) for eid in self.edge_ids)

    def __len__(self) -> int:
        return len(self.edge_ids)


@dataclass
class _Frame:
    node: int
    edges: List[OverlapEdge]
    cursor: int = 0


@dataclass
class _WalkState:
    """Mutable state owned by a single walk from one starting node."""
    start: int
    visited: Set[int] = field(default_factory=set)
    path: List[int] = field(default_factory=list)
    contigs: List[str] = field(default_factory=list)  # contigs[i] spells path[:i + 1]
    memo: Set[str] = field(default_factory=set)


class PathEnumerator:
    """
    Exhaustive edge-disjoint-per-path DFS over an OverlapGraph.

    Args:
        graph: Graph to walk; must not be mutated while a walk is running
        k: K-mer size used to collapse edge labels
        max_paths: Optional ceiling on accepted paths per run
        limit: Custom PathLimit; takes precedence over ``max_paths``
    """

    def __init__(
        self,
        graph: OverlapGraph,
        k: int,
        max_paths: Optional[int] = None,
        limit: Optional[PathLimit] = None
    ):
        self.graph = graph
        self.k = k
        self.limit = limit if limit is not None else PathLimit(max_paths)

    def iter_paths(self) -> Iterator[PathRecord]:
        """
        Yield paths from every starting node in turn.

        The signature memo is per starting node; the same contig can be
        yielded by walks rooted at different nodes.
        """
        self.limit.reset()
        starts = self.graph.starting_nodes()
        logger.debug(f"Enumerating paths from {len(starts)} starting nodes")

        for start in starts:
            yield from self._walk(start)
            if self.limit.exhausted:
                break

    def iter_paths_from(self, start: int) -> Iterator[PathRecord]:
        """Yield the paths of a single walk rooted at ``start``."""
        self.limit.reset()
        return self._walk(start)

    def find_paths(self) -> List[PathRecord]:
        """Run the full enumeration and return every emitted path."""
        return list(self.iter_paths())

    def _walk(self, start: int) -> Iterator[PathRecord]:
        state = _WalkState(start=start)
        stack = [_Frame(start, self.graph.outgoing(start))]
        emitted = 0

        while stack and not self.limit.exhausted:
            frame = stack[-1]
            edge = self._next_unvisited(frame, state.visited)

            if edge is None:
                # Branch exhausted: report the path ending here, then back out
                stack.pop()
                record = self._record(state)
                if record is not None:
                    emitted += 1
                    yield record
                if stack:
                    self._retreat(state)
                continue

            self._advance(state, edge)
            next_edges = self.graph.outgoing(edge.to_id)

            if not next_edges:
                # True dead end
                record = self._record(state)
                if record is not None:
                    emitted += 1
                    yield record
                self._retreat(state)
            else:
                stack.append(_Frame(edge.to_id, next_edges))

        logger.debug(f"Walk from node {start} emitted {emitted} paths")

    @staticmethod
    def _next_unvisited(frame: _Frame, visited: Set[int]) -> Optional[OverlapEdge]:
        while frame.cursor < len(frame.edges):
            edge = frame.edges[frame.cursor]
            frame.cursor += 1
            if edge.id not in visited:
                return edge
        return None

    def _advance(self, state: _WalkState, edge: OverlapEdge):
        if state.contigs:
            contig = collapse(state.contigs[-1], edge.label, self.k)
        else:
            contig = edge.label
        state.visited.add(edge.id)
        state.path.append(edge.id)
        state.contigs.append(contig)

    @staticmethod
    def _retreat(state: _WalkState):
        edge_id = state.path.pop()
        state.contigs.pop()
        state.visited.discard(edge_id)

    def _record(self, state: _WalkState) -> Optional[PathRecord]:
        if not state.path:
            return None
        signature = ','.join(str(eid) for eid in state.path)
        if signature in state.memo:
            return None
        if not self.limit.accept():
            return None
        state.memo.add(signature)
        return PathRecord(
            start_node=state.start,
            edge_ids=tuple(state.path),
            contig=state.contigs[-1],
        )


def enumerate_paths(
    graph: OverlapGraph,
    k: int,
    max_paths: Optional[int] = None
) -> List[PathRecord]:
    """
    Convenience function returning every path of ``graph``.

    Args:
        graph: Overlap graph
        k: K-mer size
        max_paths: Optional enumeration ceiling

    Returns:
        PathRecords in discovery order
    """
    return PathEnumerator(graph, k, max_paths=max_paths).find_paths()

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
