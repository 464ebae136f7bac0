"""Fixed-capacity reserve stack."""

import logging
from typing import List, Tuple

from tetris_stack.errors import StackEmpty, StackFull
from tetris_stack.piece import Piece

logger = logging.getLogger(__name__)


class BoundedStack:
    """LIFO container of pieces with a hard capacity."""

    def __init__(self, capacity: int):
        """Initialize an empty stack.

        Args:
            capacity: Maximum number of pieces held at once (must be > 0)
        """
        if capacity <= 0:
            raise ValueError(f"Stack capacity must be > 0, got {capacity}")
        self._capacity = capacity
        self._items: List[Piece] = []  # bottom at index 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    def push(self, piece: Piece) -> None:
        """Place a piece on top.

        Raises:
            StackFull: If the stack is at capacity
        """
        if self.is_full():
            raise StackFull(f"Stack is full (capacity {self._capacity})")
        self._items.append(piece)
        logger.debug("push %s (size=%d)", piece, len(self._items))

    def pop(self) -> Piece:
        """Remove and return the top piece.

        Raises:
            StackEmpty: If the stack holds no pieces
        """
        if self.is_empty():
            raise StackEmpty("Stack is empty")
        piece = self._items.pop()
        logger.debug("pop %s (size=%d)", piece, len(self._items))
        return piece

    def peek(self) -> Piece:
        """Return the top piece without removing it.

        Raises:
            StackEmpty: If the stack holds no pieces
        """
        if self.is_empty():
            raise StackEmpty("Stack is empty")
        return self._items[-1]

    def snapshot(self) -> Tuple[Piece, ...]:
        """Pieces from top to bottom; the stack is left untouched."""
        return tuple(reversed(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"BoundedStack(size={len(self._items)}, capacity={self._capacity})"
