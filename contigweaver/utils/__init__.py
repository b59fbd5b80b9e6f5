"""
Utilities module for ContigWeaver.

This module provides small sequence helpers shared by the assembly core,
the read simulator and the CLI.
"""

from .sequence_utils import (
    extract_kmers,
    shortest_read_length,
    longest_read_length,
    calculate_gc_content,
)

__all__ = [
    "extract_kmers",
    "shortest_read_length",
    "longest_read_length",
    "calculate_gc_content",
]
