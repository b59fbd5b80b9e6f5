#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ContigWeaver v0.1.0

Streaming contig discovery.

The same walk as batch mode, but each contig is surfaced the moment its path
is recorded. A run produces exactly one ``StreamStart``, any number of
``ContigFound`` messages (unfiltered, unsorted, in discovery order) and one
``StreamEnd``.

``ContigWorker`` moves a run onto a background thread and hands the consumer
a ``ContigChannel``. Submitting a new run closes the previous run's channel;
the stale producer stops at its next send and its remaining output is lost.
There is no other cancellation mechanism. A run that crashes records its
exception on the channel, and the consumer receives it as ``ChannelFailed``.

Author: ContigWeaver Development Team
License: MIT
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Union
import logging
import queue
import threading
import time

from contigweaver.assembly_core.contig_collector import ContigCollector, as_graph
from contigweaver.assembly_core.dbg_engine_module import EdgeLike, OverlapGraph, coerce_edge
from contigweaver.assembly_core.path_enumerator_module import PathEnumerator

logger = logging.getLogger(__name__)


# ============================================================================
# Messages
# ============================================================================

@dataclass(frozen=True)
class StreamStart:
    """Sent once before any contig."""
    k: int


@dataclass(frozen=True)
class ContigFound:
    """One contig, in discovery order."""
    contig: str


@dataclass(frozen=True)
class StreamEnd:
    """Sent once after every starting node has been walked."""
    paths: int
    truncated: bool = False


StreamMessage = Union[StreamStart, ContigFound, StreamEnd]


def stream_contigs(
    graph_or_edges: Union[OverlapGraph, Iterable[EdgeLike]],
    k: int,
    max_paths: Optional[int] = None
) -> Iterator[StreamMessage]:
    """
    Walk the graph and yield stream messages as paths are discovered.

    Args:
        graph_or_edges: An OverlapGraph or a list of ``{id, from, to, label}`` edges
        k: K-mer size
        max_paths: Optional enumeration ceiling

    Yields:
        StreamStart, then ContigFound per recorded path, then StreamEnd
    """
    graph = as_graph(graph_or_edges, k)
    enumerator = PathEnumerator(graph, k, max_paths=max_paths)

    yield StreamStart(k=k)

    paths = 0
    for record in enumerator.iter_paths():
        paths += 1
        yield ContigFound(contig=record.contig)

    yield StreamEnd(paths=paths, truncated=enumerator.limit.exhausted)


# ============================================================================
# Channel
# ============================================================================

class ChannelClosed(Exception):
    """Raised when sending to or receiving from a closed channel."""
    pass


class ChannelFailed(Exception):
    """Raised on the consumer side when the producing run crashed."""
    pass


class ContigChannel:
    """
    Ordered message queue between one producer and one consumer.

    ``maxsize=0`` gives an unbounded channel. Closing is one-way and wakes a
    producer blocked on a full queue within ``poll_interval`` seconds.
    """

    def __init__(self, maxsize: int = 0, poll_interval: float = 0.05):
        self._queue: "queue.Queue[StreamMessage]" = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self._error: Optional[BaseException] = None
        self.poll_interval = poll_interval

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def close(self):
        self._closed.set()

    def fail(self, error: BaseException):
        """Record why the producer stopped, then close."""
        self._error = error
        self._closed.set()

    def send(self, message: StreamMessage):
        while True:
            if self._closed.is_set():
                raise ChannelClosed("channel closed")
            try:
                self._queue.put(message, timeout=self.poll_interval)
                return
            except queue.Full:
                continue

    def receive(self, timeout: Optional[float] = None) -> StreamMessage:
        """
        Block until a message arrives.

        Raises:
            ChannelFailed: if the producer recorded an error
            ChannelClosed: if the channel was closed
            queue.Empty: if ``timeout`` elapsed first
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if self._closed.is_set():
                self._raise_closed()
            wait = self.poll_interval
            if deadline is not None:
                wait = min(wait, max(deadline - time.monotonic(), 0.0))
            try:
                return self._queue.get(timeout=wait)
            except queue.Empty:
                if deadline is not None and time.monotonic() >= deadline:
                    raise

    def _raise_closed(self):
        if self._error is not None:
            raise ChannelFailed(f"contig run failed: {self._error}") from self._error
        raise ChannelClosed("channel closed")

    def __iter__(self) -> Iterator[StreamMessage]:
        """
        Yield messages up to and including StreamEnd.

        Stops early if the channel was closed; a failed run raises
        ChannelFailed instead.
        """
        while True:
            try:
                message = self.receive()
            except ChannelClosed:
                return
            yield message
            if isinstance(message, StreamEnd):
                return


# ============================================================================
# Background worker
# ============================================================================

def _produce(edges: List, k: int, max_paths: Optional[int], channel: ContigChannel):
    try:
        for message in stream_contigs(edges, k, max_paths=max_paths):
            channel.send(message)
    except ChannelClosed:
        logger.debug("Contig run superseded; producer exiting")
    except Exception as e:
        logger.exception("Contig run failed")
        channel.fail(e)


class ContigWorker:
    """
    Runs one contig enumeration at a time on a background thread.

    Only the most recent submission is authoritative: ``submit`` closes the
    channel of any run still in flight before starting a new one.
    """

    def __init__(self, max_paths: Optional[int] = None, queue_size: int = 0):
        self.max_paths = max_paths
        self.queue_size = queue_size
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._channel: Optional[ContigChannel] = None
        self._runs = 0

    def submit(self, edges: Iterable[EdgeLike], k: int) -> ContigChannel:
        """
        Start a run over a snapshot of ``edges``.

        Returns:
            The channel carrying this run's messages
        """
        snapshot = [coerce_edge(edge) for edge in edges]

        with self._lock:
            self._close_current()
            self._runs += 1
            channel = ContigChannel(maxsize=self.queue_size)
            thread = threading.Thread(
                target=_produce,
                args=(snapshot, k, self.max_paths, channel),
                name=f"contig-worker-{self._runs}",
                daemon=True,
            )
            self._thread = thread
            self._channel = channel

        logger.info(f"(Re-)starting contig worker: {len(snapshot)} edges, k={k}")
        thread.start()
        return channel

    def cancel(self):
        """Abandon the current run, if any."""
        with self._lock:
            self._close_current()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the current producer thread; returns True if it finished."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    @property
    def busy(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _close_current(self):
        if self._channel is not None and not self._channel.closed:
            logger.debug("Closing channel of superseded contig run")
            self._channel.close()


def drain(
    channel: ContigChannel,
    k: int,
    on_update: Optional[Callable[[List[str]], None]] = None,
    collector: Optional[ContigCollector] = None
) -> List[str]:
    """
    Consume a channel the way an interactive host does.

    The collected result is reset on StreamStart. Each ContigFound that
    changes the result triggers ``on_update`` with the current sorted
    snapshot. The function returns on StreamEnd, or early with the partial
    result if the channel is closed. A crashed run raises ChannelFailed.
    """
    collector = collector if collector is not None else ContigCollector(k)

    for message in channel:
        if isinstance(message, StreamStart):
            collector.reset()
        elif isinstance(message, ContigFound):
            if collector.add(message.contig) and on_update is not None:
                on_update(collector.snapshot())
        elif isinstance(message, StreamEnd):
            logger.info(
                f"Contig stream finished: {message.paths} paths, {len(collector)} contigs"
                + (" (truncated)" if message.truncated else "")
            )

    return collector.snapshot()

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
