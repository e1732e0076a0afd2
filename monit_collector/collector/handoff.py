"""
Hand-off Queue

The single channel between request workers and the consumer loop.

BACKPRESSURE:
=============
Capacity is small and fixed. A worker publishing into a full queue blocks
until the consumer takes a document, so a slow consumer throttles intake
instead of growing a backlog. Every publish is bounded by a timeout so a
stalled consumer cannot pin all request workers forever.

ORDERING:
=========
FIFO for publishes that complete in order. Workers racing each other
get no relative ordering guarantee.
"""

from __future__ import annotations
from typing import Iterator, Optional
import logging
import queue

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.document import Document

logger = logging.getLogger(__name__)

_CLOSED = object()


class HandoffQueue:
    """Bounded, blocking queue of Documents with an end-of-stream marker."""

    def __init__(self, capacity: int = 1, channel: Optional[queue.Queue] = None):
        if channel is None:
            if capacity < 1:
                raise ValueError("capacity must be at least 1")
            channel = queue.Queue(maxsize=capacity)
        self._channel = channel

    @property
    def channel(self) -> queue.Queue:
        return self._channel

    def publish(self, document: Document, timeout: Optional[float] = None) -> Result:
        """
        Block until the consumer has room for `document`.

        Returns Result.failure(PUBLISH_TIMEOUT) if no room frees up in time;
        the document is then NOT enqueued.
        """
        try:
            self._channel.put(document, block=True, timeout=timeout)
        except queue.Full:
            logger.warning(
                "Hand-off queue full for %.1fs, dropping notification %s",
                timeout, document.id
            )
            return Result.failure(Error.create(
                ErrorCode.PUBLISH_TIMEOUT,
                f"Consumer did not accept notification within {timeout}s",
                document_id=document.id,
            ))
        return Result.success(document)

    def get(self, timeout: Optional[float] = None) -> Optional[Document]:
        """
        Take the next document. None once the queue is closed.

        Raises queue.Empty if `timeout` expires first.
        """
        item = self._channel.get(block=True, timeout=timeout)
        if item is _CLOSED:
            return None
        return item

    def close(self) -> None:
        """Signal end of stream. Blocks while the queue is full."""
        self._channel.put(_CLOSED)

    def drain(self) -> Iterator[Document]:
        """Yield documents in queue order until close() is called."""
        while True:
            document = self.get()
            if document is None:
                return
            yield document

    def qsize(self) -> int:
        return self._channel.qsize()
