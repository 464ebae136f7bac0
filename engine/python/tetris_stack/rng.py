"""Piece generator with an owned sequence counter.

Two dealing rules are supported:

- ``uniform``: every piece kind is drawn independently and uniformly.
- ``bag``: all kinds are shuffled into a bag and dealt out before the
  bag is refilled, so every kind appears once per bag.
"""

import random
import time
from typing import List, Optional, Sequence

from tetris_stack.piece import DEFAULT_KINDS, PIECE_KINDS, Piece

PIECE_RULES = ("uniform", "bag")


class PieceGenerator:
    """Produces pieces with strictly increasing sequence ids."""

    def __init__(
        self,
        seed: Optional[int] = None,
        kinds: Sequence[str] = DEFAULT_KINDS,
        rule: str = "uniform",
    ):
        """Initialize the generator.

        Args:
            seed: Random seed for reproducibility (None seeds from the clock)
            kinds: Piece kinds to deal from
            rule: Dealing rule, "uniform" or "bag"
        """
        kinds = tuple(kinds)
        if not kinds:
            raise ValueError("kinds must not be empty")
        if len(set(kinds)) != len(kinds):
            raise ValueError(f"Duplicate piece kinds: {kinds}")
        for kind in kinds:
            if kind not in PIECE_KINDS:
                raise ValueError(f"Invalid piece kind: {kind}")
        if rule not in PIECE_RULES:
            raise ValueError(f"Unknown piece rule: {rule}")

        self.kinds = kinds
        self.rule = rule
        self.reset(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the generator and restart the sequence counter.

        Args:
            seed: New random seed (None seeds from the clock)
        """
        if seed is None:
            seed = time.time_ns()
        self.seed = seed
        self.rng = random.Random(seed)
        self.bag: List[str] = []
        self._next_id = 0

    @property
    def next_id(self) -> int:
        """Sequence id the next generated piece will receive."""
        return self._next_id

    def _refill_bag(self) -> None:
        self.bag = list(self.kinds)
        self.rng.shuffle(self.bag)

    def _next_kind(self) -> str:
        if self.rule == "uniform":
            return self.rng.choice(self.kinds)
        if not self.bag:
            self._refill_bag()
        return self.bag.pop()

    def generate(self) -> Piece:
        """Create the next piece and advance the counter.

        Returns:
            New piece with the next sequence id
        """
        piece = Piece(self._next_kind(), self._next_id)
        self._next_id += 1
        return piece

    def peek(self, count: int) -> List[str]:
        """Peek at the next N piece kinds without consuming them.

        Args:
            count: Number of kinds to look ahead

        Returns:
            List of piece kinds in dealing order
        """
        temp_bag = self.bag.copy()
        temp_rng = random.Random()
        temp_rng.setstate(self.rng.getstate())

        result = []
        for _ in range(count):
            if self.rule == "uniform":
                result.append(temp_rng.choice(self.kinds))
                continue
            if not temp_bag:
                temp_bag = list(self.kinds)
                temp_rng.shuffle(temp_bag)
            result.append(temp_bag.pop())

        return result
