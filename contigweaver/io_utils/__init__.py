"""
Export utilities for ContigWeaver: contig FASTA, GFA and statistics.
"""

from .assembly_export import (
    calculate_assembly_stats,
    export_assembly_stats,
    export_graph_to_gfa,
    write_contigs_fasta,
)

__all__ = [
    "calculate_assembly_stats",
    "export_assembly_stats",
    "export_graph_to_gfa",
    "write_contigs_fasta",
]
