"""
ContigWeaver v0.1.0

Sequence utility functions for ContigWeaver.

Provides common sequence manipulation and analysis functions.
"""

from typing import List


def extract_kmers(sequence: str, k: int) -> List[str]:
    """
    Extract all k-mers from a sequence.

    Case is preserved; k-mers are taken with a stride of one.

    Args:
        sequence: DNA sequence string
        k: K-mer size

    Returns:
        List of k-mer strings (empty if k <= 0 or k > len(sequence))

    Example:
        >>> extract_kmers("ATCGATCG", 3)
        ['ATC', 'TCG', 'CGA', 'GAT', 'ATC', 'TCG']
    """
    if k <= 0 or k > len(sequence):
        return []

    kmers = []

    for i in range(len(sequence) - k + 1):
        kmers.append(sequence[i:i + k])

    return kmers


def shortest_read_length(reads: List[str]) -> int:
    """Length of the shortest read, or 0 when there are no reads."""
    if not reads:
        return 0
    return min(len(read) for read in reads)


def longest_read_length(reads: List[str]) -> int:
    """Length of the longest read, or 0 when there are no reads."""
    if not reads:
        return 0
    return max(len(read) for read in reads)


def calculate_gc_content(sequence: str) -> float:
    """
    Calculate GC content of a DNA sequence.

    Args:
        sequence: DNA sequence string

    Returns:
        GC content as fraction (0.0 to 1.0)

    Example:
        >>> calculate_gc_content("ATGC")
        0.5
    """
    if not sequence:
        return 0.0

    sequence = sequence.upper()
    gc_count = sequence.count('G') + sequence.count('C')

    return gc_count / len(sequence)


__all__ = [
    'extract_kmers',
    'shortest_read_length',
    'longest_read_length',
    'calculate_gc_content',
]
