"""
Synthetic Read Simulator

Generates toy inputs for the contig engine:
- Random DNA genomes
- Error-free reads sampled by cutting the genome in two at a random point
- Optional noise reads cut from shuffled copies of the genome

Every function takes an optional ``random.Random`` so runs can be seeded.
"""

from __future__ import annotations
import random
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

DNA_BASES = 'ACTG'


# ============================================================================
#                           CONFIGURATION
# ============================================================================

@dataclass
class ReadSimConfig:
    """Configuration for synthetic read generation."""
    genome_length: int = 40
    num_reads: int = 20  # Reads sampled from the genome
    min_read_length: int = 8  # Shorter pieces are discarded
    noise_reads: int = 0  # Extra reads from shuffled genomes

    # Random seed for reproducibility
    random_seed: Optional[int] = None


# ============================================================================
#                           GENERATORS
# ============================================================================

def generate_random_dna(length: int, rng: Optional[random.Random] = None) -> str:
    """Random sequence over A, C, T, G."""
    rng = rng or random.Random()
    return ''.join(rng.choice(DNA_BASES) for _ in range(length))


def split_string_randomly(
    s: str,
    n: int,
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Cut ``s`` at up to n-1 random interior points.

    Cut points are drawn independently, so coinciding draws yield fewer
    than n pieces. Pieces are returned in order and always rejoin to ``s``.

    Raises:
        ValueError: If n is not between 1 and len(s)
    """
    if n <= 0 or n > len(s):
        raise ValueError("Number of pieces must be between 1 and the length of the string")

    rng = rng or random.Random()
    cuts = sorted({rng.randint(1, len(s) - 1) for _ in range(n - 1)})
    bounds = [0] + cuts + [len(s)]

    return [s[bounds[i]:bounds[i + 1]] for i in range(len(bounds) - 1)]


def shuffle_string(s: str, rng: Optional[random.Random] = None) -> str:
    """Random permutation of the characters of ``s``."""
    rng = rng or random.Random()
    chars = list(s)
    rng.shuffle(chars)
    return ''.join(chars)


def make_reads(
    genome: str,
    n: int,
    min_read_length: int,
    noise_reads: int = 0,
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Sample reads by repeatedly cutting the genome in two.

    Pieces shorter than ``min_read_length`` are discarded. Sampling stops
    once at least ``n`` reads exist (a final cut may add one extra), then
    noise reads from shuffled genomes are appended until ``noise_reads``
    reads beyond ``n`` exist.

    Raises:
        ValueError: If no cut of the genome can satisfy ``min_read_length``
    """
    if (n > 0 or noise_reads > 0) and (len(genome) < 2 or min_read_length > len(genome) - 1):
        raise ValueError(
            f"Cannot cut reads of length >= {min_read_length} "
            f"from a genome of length {len(genome)}"
        )

    rng = rng or random.Random()
    result: List[str] = []

    while len(result) < n:
        result.extend(p for p in split_string_randomly(genome, 2, rng) if len(p) >= min_read_length)

    while len(result) - n < noise_reads:
        shuffled = shuffle_string(genome, rng)
        result.extend(p for p in split_string_randomly(shuffled, 2, rng) if len(p) >= min_read_length)

    return result


def simulate_reads(config: ReadSimConfig) -> Tuple[str, List[str]]:
    """
    Generate a random genome and sample reads from it.

    Args:
        config: Simulation parameters

    Returns:
        (genome, reads)
    """
    rng = random.Random(config.random_seed)
    genome = generate_random_dna(config.genome_length, rng)
    reads = make_reads(
        genome,
        config.num_reads,
        config.min_read_length,
        config.noise_reads,
        rng,
    )
    logger.info(
        f"Simulated {len(reads)} reads from a {len(genome)} bp genome "
        f"({config.noise_reads} noise)"
    )
    return genome, reads
