"""
Read simulation for ContigWeaver: random genomes and sampled reads.
"""

from .read_simulator import (
    ReadSimConfig,
    generate_random_dna,
    make_reads,
    shuffle_string,
    simulate_reads,
    split_string_randomly,
)

__all__ = [
    "ReadSimConfig",
    "generate_random_dna",
    "make_reads",
    "shuffle_string",
    "simulate_reads",
    "split_string_randomly",
]
