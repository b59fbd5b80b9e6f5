#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for ContigWeaver.

Consolidated module containing:
- Read loading from FASTA, FASTQ or plain text (one read per line)
- FASTA writing for reads and contigs

FASTA and FASTQ parsing goes through Biopython; gzip input is detected
from the file suffix.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from Bio import SeqIO

logger = logging.getLogger(__name__)

FASTA_SUFFIXES = ('.fa', '.fasta', '.fna', '.fas')
FASTQ_SUFFIXES = ('.fq', '.fastq')


# =============================================================================
# SECTION 2: FILE HANDLING
# =============================================================================

def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.

    Args:
        filepath: Path to file

    Returns:
        True if file is gzipped
    """
    filepath = Path(filepath)
    return filepath.suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open file with automatic gzip detection.

    Args:
        filepath: Path to file
        mode: File mode ('r' or 'w')

    Returns:
        File handle
    """
    filepath = Path(filepath)

    if is_gzipped(filepath):
        if 'r' in mode:
            return gzip.open(filepath, 'rt')
        else:
            return gzip.open(filepath, 'wt')
    else:
        return open(filepath, mode)


def detect_format(filepath: Union[str, Path]) -> str:
    """
    Guess the sequence format from the file name.

    Returns:
        'fasta', 'fastq' or 'text'
    """
    filepath = Path(filepath)
    suffixes = [s.lower() for s in filepath.suffixes]
    if suffixes and suffixes[-1] in ('.gz', '.gzip'):
        suffixes = suffixes[:-1]
    suffix = suffixes[-1] if suffixes else ''

    if suffix in FASTA_SUFFIXES:
        return 'fasta'
    if suffix in FASTQ_SUFFIXES:
        return 'fastq'
    return 'text'


# =============================================================================
# SECTION 3: READ LOADING
# =============================================================================

def iter_sequences(
    filepath: Union[str, Path],
    fmt: Optional[str] = None
) -> Iterator[Tuple[str, str]]:
    """
    Yield (id, sequence) pairs from a read file.

    Plain text files hold one read per line; blank lines and lines starting
    with '#' are skipped and ids are assigned as ``read_<n>``.

    Args:
        filepath: Path to the read file (can be gzipped)
        fmt: 'fasta', 'fastq' or 'text'; detected from the suffix if None

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Read file not found: {filepath}")

    fmt = fmt or detect_format(filepath)

    with open_file(filepath, 'r') as handle:
        if fmt in ('fasta', 'fastq'):
            for record in SeqIO.parse(handle, fmt):
                yield record.id, str(record.seq)
        else:
            n = 0
            for line in handle:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                n += 1
                yield f"read_{n}", line


def read_sequences(
    filepath: Union[str, Path],
    fmt: Optional[str] = None,
    min_length: int = 0
) -> List[str]:
    """
    Load read sequences from a FASTA, FASTQ or plain text file.

    Args:
        filepath: Path to the read file
        fmt: Explicit format, or None to detect from the suffix
        min_length: Drop reads shorter than this

    Returns:
        List of sequences in file order
    """
    reads = [seq for _, seq in iter_sequences(filepath, fmt) if len(seq) >= min_length]
    logger.info(f"Loaded {len(reads)} reads from {filepath}")
    return reads


# =============================================================================
# SECTION 4: FASTA WRITING
# =============================================================================

def write_fasta(
    records: Iterable[Tuple[str, str]],
    filepath: Union[str, Path],
    compress: bool = False,
    line_width: int = 80
) -> int:
    """
    Write (id, sequence) records to a FASTA file.

    Args:
        records: Iterable of (id, sequence) pairs
        filepath: Output FASTA file path
        compress: Whether to gzip compress output
        line_width: Number of bases per line (0 = no wrapping)

    Returns:
        Number of sequences written
    """
    filepath = Path(filepath)

    # Add .gz extension if compressing
    if compress and not is_gzipped(filepath):
        filepath = Path(str(filepath) + '.gz')

    # Create output directory if needed
    filepath.parent.mkdir(parents=True, exist_ok=True)

    count = 0

    with open_file(filepath, 'w') as handle:
        for record_id, sequence in records:
            handle.write(f">{record_id}\n")

            if line_width > 0:
                for i in range(0, len(sequence), line_width):
                    handle.write(sequence[i:i + line_width] + '\n')
            else:
                handle.write(sequence + '\n')

            count += 1

    return count


def write_reads_fasta(
    reads: Iterable[str],
    filepath: Union[str, Path],
    line_width: int = 0
) -> int:
    """
    Write reads as FASTA with ``Read_<n>`` headers (1-based).

    Returns:
        Number of reads written
    """
    records = ((f"Read_{i}", read) for i, read in enumerate(reads, start=1))
    count = write_fasta(records, filepath, line_width=line_width)
    logger.info(f"Wrote {count} reads to {filepath}")
    return count
