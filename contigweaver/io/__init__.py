"""
Read I/O module for ContigWeaver.

Handles loading reads from FASTA, FASTQ and plain text files and writing
sequences back out as FASTA.
"""

from .io_core_module import (
    detect_format,
    iter_sequences,
    read_sequences,
    write_fasta,
    write_reads_fasta,
)

__all__ = [
    "detect_format",
    "iter_sequences",
    "read_sequences",
    "write_fasta",
    "write_reads_fasta",
]
