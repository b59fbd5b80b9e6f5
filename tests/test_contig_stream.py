#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for streaming contig discovery and the background worker.

Author: ContigWeaver Development Team
License: MIT
"""

import queue

import pytest
from contigweaver.assembly_core.contig_collector import ContigCollector, collect_contigs, get_contigs
from contigweaver.assembly_core.contig_stream_module import (
    ChannelClosed,
    ChannelFailed,
    ContigChannel,
    ContigFound,
    ContigWorker,
    StreamEnd,
    StreamStart,
    drain,
    stream_contigs,
)
from contigweaver.assembly_core.dbg_engine_module import build_graph_from_reads


def found(messages):
    return [m.contig for m in messages if isinstance(m, ContigFound)]


class TestStreamContigs:
    """Test the message sequence of one run."""

    def test_message_framing(self, linear_edges):
        """Test exactly one start, contigs in discovery order, one end."""
        messages = list(stream_contigs(linear_edges, 3))

        assert messages[0] == StreamStart(k=3)
        assert messages[-1] == StreamEnd(paths=3, truncated=False)
        assert found(messages) == ["AABC", "AAB", "ABC"]

    @pytest.mark.parametrize("fixture_name, expected", [
        ("branching_edges", ["AABC", "AABD", "AAB", "ABC", "ABD"]),
        ("disjoint_edges", ["AABC", "AAB", "ABC", "CDE"]),
        ("cycle_edges", ["ATGAT", "ATGA", "ATG", "TGATG", "TGAT", "TGA", "GATGA", "GATG", "GAT"]),
        ("self_loop_edges", ["AAAB", "AAA", "AAB"]),
        ("single_edge", ["AAB"]),
    ])
    def test_discovery_order(self, request, fixture_name, expected):
        """Test streamed contigs are unfiltered and unsorted."""
        edges = request.getfixturevalue(fixture_name)
        assert found(stream_contigs(edges, 3)) == expected

    @pytest.mark.parametrize("fixture_name", [
        "linear_edges", "branching_edges", "disjoint_edges",
        "cycle_edges", "self_loop_edges", "single_edge",
    ])
    def test_stream_agrees_with_batch(self, request, fixture_name):
        """Test collecting a stream gives exactly the batch result."""
        edges = request.getfixturevalue(fixture_name)
        assert collect_contigs(found(stream_contigs(edges, 3)), 3) == get_contigs(edges, 3)

    def test_empty_graph(self):
        messages = list(stream_contigs([], 3))
        assert messages == [StreamStart(k=3), StreamEnd(paths=0, truncated=False)]

    def test_truncated_run(self, cycle_edges):
        messages = list(stream_contigs(cycle_edges, 3, max_paths=2))

        assert found(messages) == ["ATGAT", "ATGA"]
        assert messages[-1] == StreamEnd(paths=2, truncated=True)


class TestContigChannel:
    """Test the producer/consumer channel."""

    def test_ordered_delivery(self):
        channel = ContigChannel()
        channel.send(StreamStart(k=3))
        channel.send(ContigFound("AABC"))
        channel.send(StreamEnd(paths=1))

        assert list(channel) == [StreamStart(k=3), ContigFound("AABC"), StreamEnd(paths=1)]

    def test_send_after_close(self):
        channel = ContigChannel()
        channel.close()

        assert channel.closed
        with pytest.raises(ChannelClosed):
            channel.send(ContigFound("AABC"))

    def test_receive_after_close(self):
        channel = ContigChannel()
        channel.send(ContigFound("AABC"))
        channel.close()

        with pytest.raises(ChannelClosed):
            channel.receive()

    def test_receive_timeout(self):
        channel = ContigChannel(poll_interval=0.01)
        with pytest.raises(queue.Empty):
            channel.receive(timeout=0.05)

    def test_iteration_stops_when_closed(self):
        channel = ContigChannel()
        channel.send(StreamStart(k=3))
        channel.close()

        assert list(channel) == []

    def test_failed_channel_raises(self):
        """Test a recorded producer error is raised instead of ending quietly."""
        channel = ContigChannel()
        error = ValueError("bad edge")
        channel.fail(error)

        assert channel.closed
        assert channel.error is error
        with pytest.raises(ChannelFailed) as excinfo:
            list(channel)
        assert excinfo.value.__cause__ is error


class TestContigWorker:
    """Test running enumeration on a background thread."""

    def test_worker_matches_batch(self, cycle_edges):
        worker = ContigWorker()
        channel = worker.submit(cycle_edges, 3)

        assert drain(channel, 3) == get_contigs(cycle_edges, 3)
        assert worker.join(timeout=5)
        assert not worker.busy

    def test_worker_message_order(self, branching_edges):
        worker = ContigWorker()
        messages = list(worker.submit(branching_edges, 3))

        assert isinstance(messages[0], StreamStart)
        assert isinstance(messages[-1], StreamEnd)
        assert found(messages) == ["AABC", "AABD", "AAB", "ABC", "ABD"]

    def test_submit_snapshots_edges(self, linear_edges):
        """Test later mutation of the caller's list does not reach the run."""
        worker = ContigWorker()
        edges = list(linear_edges)
        channel = worker.submit(edges, 3)
        edges.clear()

        assert drain(channel, 3) == ["AABC"]

    def test_resubmit_supersedes(self, linear_edges):
        """Test a new submission closes the previous run's channel."""
        dense = build_graph_from_reads(["A" * 12], k=3).edges.values()
        worker = ContigWorker(queue_size=1)

        stale = worker.submit(dense, 3)
        current = worker.submit(linear_edges, 3)

        assert stale.closed
        assert not current.closed
        assert drain(current, 3) == ["AABC"]
        assert list(stale) == []
        assert worker.join(timeout=5)

    def test_cancel(self, cycle_edges):
        worker = ContigWorker(queue_size=1)
        channel = worker.submit(cycle_edges, 3)
        worker.cancel()

        assert channel.closed
        assert worker.join(timeout=5)

    def test_max_paths(self, cycle_edges):
        worker = ContigWorker(max_paths=2)
        messages = list(worker.submit(cycle_edges, 3))

        assert messages[-1] == StreamEnd(paths=2, truncated=True)

    def test_failed_run_reaches_consumer(self):
        """Test a crash in the worker thread surfaces on the consuming side."""
        edges = [
            {"id": 0, "from": 0, "to": 1, "label": "AAB"},
            {"id": 0, "from": 1, "to": 2, "label": "ABC"},
        ]
        worker = ContigWorker()
        channel = worker.submit(edges, 3)

        with pytest.raises(ChannelFailed, match="Duplicate edge id 0"):
            list(channel)
        assert isinstance(channel.error, ValueError)
        assert worker.join(timeout=5)

    def test_drain_propagates_failure(self):
        edges = [
            {"id": 0, "from": 0, "to": 1, "label": "AAB"},
            {"id": 0, "from": 1, "to": 2, "label": "ABC"},
        ]
        with pytest.raises(ChannelFailed):
            drain(ContigWorker().submit(edges, 3), 3)


class TestDrain:
    """Test the host-side consumer."""

    def test_updates_only_on_change(self, self_loop_edges):
        """Test on_update fires once per new contig longer than k."""
        updates = []
        worker = ContigWorker()
        result = drain(worker.submit(self_loop_edges, 3), 3, on_update=updates.append)

        assert result == ["AAAB"]
        assert updates == [["AAAB"]]

    def test_partial_results_are_sorted(self, cycle_edges):
        updates = []
        drain(ContigWorker().submit(cycle_edges, 3), 3, on_update=updates.append)

        assert updates[0] == ["ATGAT"]
        assert updates[1] == ["ATGAT", "ATGA"]
        assert updates[-1] == get_contigs(cycle_edges, 3)
        for snapshot in updates:
            assert snapshot == sorted(snapshot, key=lambda c: (-len(c), c))

    def test_stream_start_resets_collector(self, linear_edges):
        collector = ContigCollector(3)
        collector.add("ZZZZ")

        result = drain(ContigWorker().submit(linear_edges, 3), 3, collector=collector)
        assert result == ["AABC"]

    def test_closed_channel_returns_partial(self):
        channel = ContigChannel()
        channel.send(StreamStart(k=3))
        channel.send(ContigFound("AABC"))
        channel.send(ContigFound("AABD"))

        collector = ContigCollector(3)
        updates = []

        def close_after_first(snapshot):
            updates.append(snapshot)
            channel.close()

        result = drain(channel, 3, on_update=close_after_first, collector=collector)
        assert result == ["AABC"]
        assert updates == [["AABC"]]

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
