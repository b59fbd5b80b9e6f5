#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for synthetic read generation.

Author: ContigWeaver Development Team
License: MIT
"""

import random

import pytest
from contigweaver.simulation.read_simulator import (
    DNA_BASES,
    ReadSimConfig,
    generate_random_dna,
    make_reads,
    shuffle_string,
    simulate_reads,
    split_string_randomly,
)


class TestGenerators:
    """Test genome and string helpers."""

    def test_random_dna_alphabet(self):
        genome = generate_random_dna(200, random.Random(1))
        assert len(genome) == 200
        assert set(genome) <= set(DNA_BASES)

    def test_random_dna_seeded(self):
        assert generate_random_dna(50, random.Random(3)) == generate_random_dna(50, random.Random(3))

    def test_split_rejoins(self):
        """Test pieces are in order and rejoin to the input."""
        rng = random.Random(5)
        for n in range(1, 10):
            pieces = split_string_randomly("ACGTACGTAC", n, rng)
            assert "".join(pieces) == "ACGTACGTAC"
            assert 1 <= len(pieces) <= n
            assert all(pieces)

    def test_split_single_piece(self):
        assert split_string_randomly("ACGT", 1) == ["ACGT"]

    @pytest.mark.parametrize("n", [0, -1, 5])
    def test_split_invalid_count(self, n):
        with pytest.raises(ValueError, match="between 1 and the length"):
            split_string_randomly("ACGT", n)

    def test_shuffle_is_permutation(self):
        shuffled = shuffle_string("AACCGGTT", random.Random(2))
        assert sorted(shuffled) == sorted("AACCGGTT")


class TestMakeReads:
    """Test read sampling."""

    def test_reads_are_genome_prefixes_or_suffixes(self):
        genome = generate_random_dna(40, random.Random(11))
        reads = make_reads(genome, 20, 8, rng=random.Random(11))

        assert len(reads) >= 20
        for read in reads:
            assert len(read) >= 8
            assert genome.startswith(read) or genome.endswith(read)

    def test_noise_reads_added(self):
        genome = generate_random_dna(30, random.Random(4))
        reads = make_reads(genome, 5, 5, noise_reads=3, rng=random.Random(4))

        assert len(reads) >= 8

    def test_zero_reads(self):
        assert make_reads("ACGT", 0, 10) == []

    def test_impossible_min_length(self):
        with pytest.raises(ValueError):
            make_reads("ACGTACGT", 5, 8)

    def test_genome_too_short(self):
        with pytest.raises(ValueError):
            make_reads("A", 1, 1)


class TestSimulateReads:
    """Test the end-to-end simulator."""

    def test_seeded_run_reproducible(self):
        config = ReadSimConfig(genome_length=30, num_reads=6, min_read_length=5, random_seed=42)
        assert simulate_reads(config) == simulate_reads(config)

    def test_default_config(self):
        genome, reads = simulate_reads(ReadSimConfig(random_seed=0))

        assert len(genome) == 40
        assert len(reads) >= 20
        assert all(len(r) >= 8 for r in reads)

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
