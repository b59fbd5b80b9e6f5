#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ContigWeaver Development Team
License: MIT
"""

import pytest
from pathlib import Path
import tempfile
import shutil


def edge(edge_id, from_id, to_id, label):
    """Plain edge mapping in the shape interactive hosts send."""
    return {"id": edge_id, "from": from_id, "to": to_id, "label": label}


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="contigweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def linear_edges():
    """AA -> AB -> BC."""
    return [edge(0, 0, 1, "AAB"), edge(1, 1, 2, "ABC")]


@pytest.fixture
def branching_edges():
    """AA -> AB, then AB branches to BC and BD."""
    return [edge(0, 0, 1, "AAB"), edge(1, 1, 2, "ABC"), edge(2, 1, 3, "ABD")]


@pytest.fixture
def disjoint_edges():
    """Two components; CDE on its own is never longer than k."""
    return [edge(0, 0, 1, "AAB"), edge(1, 1, 2, "ABC"), edge(2, 3, 4, "CDE")]


@pytest.fixture
def cycle_edges():
    """Three-node cycle AT -> TG -> GA -> AT."""
    return [edge(0, 0, 1, "ATG"), edge(1, 1, 2, "TGA"), edge(2, 2, 0, "GAT")]


@pytest.fixture
def self_loop_edges():
    """AA loops on itself, then exits to AB."""
    return [edge(0, 0, 0, "AAA"), edge(1, 0, 1, "AAB")]


@pytest.fixture
def single_edge():
    """One k-mer only."""
    return [edge(0, 0, 1, "AAB")]


@pytest.fixture
def simple_fasta():
    """Generate simple FASTA reads for testing."""
    return ">read1\nAABC\n>read2\nABD\n"


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1
AABC
+
IIII
@read2
ABD
+
III
"""


@pytest.fixture
def reads_file(temp_output_dir):
    """Plain text reads file (one read per line) spelling a branching graph."""
    path = temp_output_dir / "reads.txt"
    path.write_text("AABC\nABD\n")
    return path

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
