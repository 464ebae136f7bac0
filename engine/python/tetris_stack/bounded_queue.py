"""Fixed-capacity circular queue of upcoming pieces.

Pieces are stored in a list of ``capacity`` slots addressed by head and
tail indices that wrap modulo the capacity, so neither enqueue nor
dequeue shifts the remaining pieces.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from tetris_stack.errors import QueueEmpty, QueueFull
from tetris_stack.piece import Piece

logger = logging.getLogger(__name__)


class BoundedQueue:
    """FIFO ring buffer of pieces."""

    def __init__(self, capacity: int):
        """Initialize an empty queue.

        Args:
            capacity: Maximum number of pieces held at once (must be > 0)
        """
        if capacity <= 0:
            raise ValueError(f"Queue capacity must be > 0, got {capacity}")
        self._capacity = capacity
        self._slots: List[Optional[Piece]] = [None] * capacity
        self._head = 0  # index of the next piece to dequeue
        self._tail = 0  # index of the next free slot
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_empty(self) -> bool:
        return self._size == 0

    def is_full(self) -> bool:
        return self._size == self._capacity

    def enqueue(self, piece: Piece) -> None:
        """Insert a piece at the tail.

        Args:
            piece: Piece to append

        Raises:
            QueueFull: If the queue is at capacity
        """
        if self.is_full():
            raise QueueFull(f"Queue is full (capacity {self._capacity})")
        self._slots[self._tail] = piece
        self._tail = (self._tail + 1) % self._capacity
        self._size += 1
        logger.debug("enqueue %s (size=%d)", piece, self._size)

    def dequeue(self) -> Piece:
        """Remove and return the head piece.

        Returns:
            The oldest piece in the queue

        Raises:
            QueueEmpty: If the queue holds no pieces
        """
        if self.is_empty():
            raise QueueEmpty("Queue is empty")
        piece = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self._capacity
        self._size -= 1
        logger.debug("dequeue %s (size=%d)", piece, self._size)
        return piece

    def peek(self) -> Piece:
        """Return the head piece without removing it.

        Raises:
            QueueEmpty: If the queue holds no pieces
        """
        if self.is_empty():
            raise QueueEmpty("Queue is empty")
        return self._slots[self._head]

    def snapshot(self) -> Tuple[Piece, ...]:
        """Pieces from head to tail; the queue is left untouched."""
        return tuple(self)

    def __iter__(self) -> Iterator[Piece]:
        idx = self._head
        for _ in range(self._size):
            yield self._slots[idx]
            idx = (idx + 1) % self._capacity

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"BoundedQueue(size={self._size}, capacity={self._capacity})"
