#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Assembly Export: contig FASTA, GFA graph export and statistics JSON.

Author: ContigWeaver Development Team
License: MIT
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from contigweaver.assembly_core.dbg_engine_module import OverlapGraph
from contigweaver.io.io_core_module import write_fasta
from contigweaver.utils.sequence_utils import calculate_gc_content

logger = logging.getLogger(__name__)


# ============================================================================
#                           GFA RECORDS
# ============================================================================

@dataclass
class GFASegment:
    """GFA segment (S line) for one overlap graph node."""
    name: str
    sequence: str

    def to_gfa_line(self) -> str:
        seq = self.sequence or "*"
        return f"S\t{self.name}\t{seq}\tLN:i:{len(self.sequence)}"


@dataclass
class GFALink:
    """GFA link (L line) for one display edge."""
    from_name: str
    to_name: str
    overlap: int
    multiplicity: int = 1

    def to_gfa_line(self) -> str:
        return (
            f"L\t{self.from_name}\t+\t{self.to_name}\t+\t{self.overlap}M"
            f"\tKC:i:{self.multiplicity}"
        )


def generate_node_name(node_id: int) -> str:
    """
    Generate an external node name from the internal node ID.

    Example:
        >>> generate_node_name(3)
        'node-3'
    """
    return f"node-{node_id}"


def export_graph_to_gfa(graph: OverlapGraph, output_path: str | Path) -> None:
    """
    Export the overlap graph to GFA v1.

    Parallel k-mer occurrences are written once, with their multiplicity in
    the KC tag. Adjacent (k-1)-mer nodes overlap by k-2 bases.

    Args:
        graph: Overlap graph
        output_path: Path to output GFA file
    """
    output_path = Path(output_path)
    logger.info(f"Exporting graph to GFA: {output_path}")

    node_len = max((len(node.label) for node in graph.nodes.values()), default=1)
    overlap = max((graph.k - 2) if graph.k is not None else node_len - 1, 0)

    segments = [
        GFASegment(name=generate_node_name(node_id), sequence=node.label)
        for node_id, node in graph.nodes.items()
    ]
    links = [
        GFALink(
            from_name=generate_node_name(edge.from_id),
            to_name=generate_node_name(edge.to_id),
            overlap=overlap,
            multiplicity=edge.multiplicity,
        )
        for edge in graph.display_edges()
    ]

    with open(output_path, 'w') as f:
        f.write("H\tVN:Z:1.0\n")

        for seg in segments:
            f.write(seg.to_gfa_line() + "\n")

        for link in links:
            f.write(link.to_gfa_line() + "\n")

    logger.info(f"GFA export complete: {len(segments)} segments, {len(links)} links")


# ============================================================================
#                    ASSEMBLY SEQUENCE EXPORT
# ============================================================================

def write_contigs_fasta(
    contigs: list[str],
    output_path: str | Path,
    line_width: int = 80
) -> None:
    """
    Export assembled contigs to FASTA format.

    Contigs are named ``contig_<n>`` (1-based) in the order given, so a
    sorted batch result keeps its order in the file.

    Args:
        contigs: Contig sequences
        output_path: Path to output FASTA file
        line_width: Number of bases per line (0 = no wrapping)
    """
    output_path = Path(output_path)
    logger.info(f"Writing {len(contigs)} contigs to {output_path}")

    records = ((f"contig_{i}", seq) for i, seq in enumerate(contigs, start=1))
    write_fasta(records, output_path, line_width=line_width)

    logger.info(f"Exported {len(contigs)} contigs ({sum(len(s) for s in contigs):,} bp)")


def calculate_assembly_stats(contigs: list[str]) -> dict[str, Any]:
    """
    Compute standard contig metrics.

    - Number of contigs, total length
    - N50/L50
    - Longest/shortest contig
    - GC content (percent)
    """
    lengths = sorted((len(c) for c in contigs), reverse=True)
    total = sum(lengths)

    stats: dict[str, Any] = {
        'num_contigs': len(lengths),
        'total_length': total,
        'max_contig_length': lengths[0] if lengths else 0,
        'min_contig_length': lengths[-1] if lengths else 0,
        'n50': 0,
        'l50': 0,
    }

    cumsum = 0
    for i, length in enumerate(lengths):
        cumsum += length
        if cumsum >= total / 2:
            stats['n50'] = length
            stats['l50'] = i + 1
            break

    stats['gc_content'] = calculate_gc_content(''.join(contigs)) * 100
    return stats


def export_assembly_stats(
    contigs: list[str],
    output_path: str | Path,
    graph: OverlapGraph | None = None
) -> dict[str, Any]:
    """
    Calculate and export assembly statistics to JSON.

    Args:
        contigs: Final contig list
        output_path: Path to output JSON file
        graph: Optional graph; adds node/edge counts

    Returns:
        Dictionary of statistics
    """
    output_path = Path(output_path)
    stats = calculate_assembly_stats(contigs)

    if graph is not None:
        stats['num_nodes'] = len(graph.nodes)
        stats['num_edges'] = len(graph.edges)
        stats['num_distinct_edges'] = len(graph.display_edges())

    with open(output_path, 'w') as f:
        json.dump(stats, f, indent=2)

    logger.info(f"Assembly statistics exported to {output_path}")
    logger.info(f"  Total length: {stats['total_length']:,} bp")
    logger.info(f"  N50: {stats['n50']:,} bp")

    return stats
