"""Game controller: moves pieces between the next-queue and the reserve stack.

Every transition (play, reserve, use_reserved) ends by refilling the queue
to capacity, so callers always observe a full queue afterwards.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from tetris_stack.bounded_queue import BoundedQueue
from tetris_stack.bounded_stack import BoundedStack
from tetris_stack.config import GameConfig
from tetris_stack.errors import QueueEmpty, ReserveUnavailable, StackEmpty
from tetris_stack.piece import Piece
from tetris_stack.rng import PieceGenerator

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """Result of a single transition."""
    PLAYED = "played"
    NOTHING_TO_PLAY = "nothing_to_play"
    RESERVED = "reserved"
    RESERVE_FULL = "reserve_full"
    NOTHING_TO_RESERVE = "nothing_to_reserve"
    USED = "used"
    NOTHING_RESERVED = "nothing_reserved"


# Outcomes where a piece actually moved
SUCCESS_KINDS = (OutcomeKind.PLAYED, OutcomeKind.RESERVED, OutcomeKind.USED)

MESSAGES = {
    OutcomeKind.PLAYED: "Played piece {piece}.",
    OutcomeKind.NOTHING_TO_PLAY: "Queue empty. No piece to play.",
    OutcomeKind.RESERVED: "Reserved piece {piece}.",
    OutcomeKind.RESERVE_FULL: "Reserve full. Cannot reserve more pieces.",
    OutcomeKind.NOTHING_TO_RESERVE: "Queue empty. No piece to reserve.",
    OutcomeKind.USED: "Used reserved piece {piece}.",
    OutcomeKind.NOTHING_RESERVED: "Reserve empty. No reserved piece to use.",
}


@dataclass(frozen=True)
class Outcome:
    """What a transition did, and the piece it moved if any."""
    kind: OutcomeKind
    piece: Optional[Piece] = None

    @property
    def ok(self) -> bool:
        return self.kind in SUCCESS_KINDS

    def message(self) -> str:
        """Human-readable description of the outcome."""
        return MESSAGES[self.kind].format(piece=self.piece)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "ok": self.ok,
            "piece": self.piece.to_dict() if self.piece else None,
            "message": self.message(),
        }


@dataclass
class ControllerState:
    """Read-only snapshot of both containers."""
    queue: Tuple[Piece, ...]
    stack: Tuple[Piece, ...]
    queue_capacity: int
    stack_capacity: Optional[int]
    next_id: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary for serialization."""
        return {
            "queue": [p.to_dict() for p in self.queue],
            "stack": [p.to_dict() for p in self.stack],
            "queue_capacity": self.queue_capacity,
            "stack_capacity": self.stack_capacity,
            "next_id": self.next_id,
        }


class GameController:
    """Owns one queue, an optional reserve stack, and the piece generator."""

    def __init__(
        self,
        queue: BoundedQueue,
        generator: PieceGenerator,
        stack: Optional[BoundedStack] = None,
    ):
        """Wrap existing containers without filling them.

        Use ``startup`` or ``from_config`` to get a controller whose queue
        starts full.

        Args:
            queue: Next-piece queue
            generator: Source of new pieces
            stack: Reserve stack (None for the queue-only variant)
        """
        self.queue = queue
        self.generator = generator
        self.stack = stack

    @classmethod
    def startup(
        cls,
        queue_capacity: int = 5,
        stack_capacity: Optional[int] = 3,
        generator: Optional[PieceGenerator] = None,
    ) -> "GameController":
        """Build a controller with a full queue and an empty reserve.

        Args:
            queue_capacity: Size of the next-piece queue
            stack_capacity: Size of the reserve stack (None disables it)
            generator: Piece source (defaults to a clock-seeded generator)

        Returns:
            Ready controller
        """
        stack = BoundedStack(stack_capacity) if stack_capacity is not None else None
        controller = cls(
            BoundedQueue(queue_capacity),
            generator if generator is not None else PieceGenerator(),
            stack,
        )
        controller.refill()
        logger.info(
            "Controller started: queue_capacity=%d, stack_capacity=%s",
            queue_capacity,
            stack_capacity,
        )
        return controller

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameController":
        """Build a controller from a validated config."""
        config.validate()
        generator = PieceGenerator(
            seed=config.seed, kinds=config.kinds, rule=config.piece_rule
        )
        return cls.startup(config.queue_capacity, config.stack_capacity, generator)

    @property
    def has_reserve(self) -> bool:
        return self.stack is not None

    def refill(self) -> List[Piece]:
        """Enqueue new pieces until the queue is full.

        Returns:
            Pieces added, in insertion order
        """
        added = []
        while not self.queue.is_full():
            piece = self.generator.generate()
            self.queue.enqueue(piece)
            added.append(piece)
        return added

    def _finish(self, outcome: Outcome) -> Outcome:
        self.refill()
        logger.debug("%s -> %s", outcome.kind.value, outcome.piece)
        return outcome

    def _require_reserve(self) -> BoundedStack:
        if self.stack is None:
            raise ReserveUnavailable("This game has no reserve stack")
        return self.stack

    def play(self) -> Outcome:
        """Play the piece at the head of the queue."""
        try:
            piece = self.queue.dequeue()
        except QueueEmpty:
            return self._finish(Outcome(OutcomeKind.NOTHING_TO_PLAY))
        return self._finish(Outcome(OutcomeKind.PLAYED, piece))

    def reserve(self) -> Outcome:
        """Move the head of the queue onto the reserve stack.

        Raises:
            ReserveUnavailable: If the controller has no reserve stack
        """
        stack = self._require_reserve()
        if stack.is_full():
            return self._finish(Outcome(OutcomeKind.RESERVE_FULL))
        if self.queue.is_empty():
            return self._finish(Outcome(OutcomeKind.NOTHING_TO_RESERVE))

        # Stack has room, so the push below cannot fail after the dequeue
        piece = self.queue.dequeue()
        stack.push(piece)
        return self._finish(Outcome(OutcomeKind.RESERVED, piece))

    def use_reserved(self) -> Outcome:
        """Consume the piece on top of the reserve stack.

        Raises:
            ReserveUnavailable: If the controller has no reserve stack
        """
        stack = self._require_reserve()
        try:
            piece = stack.pop()
        except StackEmpty:
            return self._finish(Outcome(OutcomeKind.NOTHING_RESERVED))
        return self._finish(Outcome(OutcomeKind.USED, piece))

    def queue_view(self) -> Tuple[Piece, ...]:
        """Queue contents from head to tail."""
        return self.queue.snapshot()

    def stack_view(self) -> Tuple[Piece, ...]:
        """Reserve contents from top to bottom (empty without a reserve)."""
        if self.stack is None:
            return ()
        return self.stack.snapshot()

    def state(self) -> ControllerState:
        """Snapshot of both containers."""
        return ControllerState(
            queue=self.queue_view(),
            stack=self.stack_view(),
            queue_capacity=self.queue.capacity,
            stack_capacity=self.stack.capacity if self.stack is not None else None,
            next_id=self.generator.next_id,
        )
