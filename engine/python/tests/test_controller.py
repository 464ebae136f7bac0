"""Tests for the game controller transitions."""

import random

import pytest

from tetris_stack.bounded_queue import BoundedQueue
from tetris_stack.bounded_stack import BoundedStack
from tetris_stack.config import GameConfig
from tetris_stack.controller import GameController, OutcomeKind
from tetris_stack.errors import ReserveUnavailable
from tetris_stack.rng import PieceGenerator


def ids(pieces):
    return [p.sequence_id for p in pieces]


def make_controller(seed=1, queue_capacity=5, stack_capacity=3):
    return GameController.startup(queue_capacity, stack_capacity, PieceGenerator(seed))


def test_startup_fills_queue():
    """Startup fills the queue and leaves the reserve empty."""
    controller = make_controller()

    assert ids(controller.queue_view()) == [0, 1, 2, 3, 4]
    assert controller.stack_view() == ()
    assert controller.has_reserve
    assert controller.generator.next_id == 5


def test_play_returns_head_and_refills():
    """Playing removes the head and appends a fresh piece."""
    controller = make_controller()

    outcome = controller.play()
    assert outcome.kind == OutcomeKind.PLAYED
    assert outcome.ok
    assert outcome.piece.sequence_id == 0
    assert ids(controller.queue_view()) == [1, 2, 3, 4, 5]


def test_end_to_end_play_then_three_reserves():
    """Play once, then reserve three times."""
    controller = make_controller()

    assert controller.play().piece.sequence_id == 0
    reserved = [controller.reserve() for _ in range(3)]

    assert [o.kind for o in reserved] == [OutcomeKind.RESERVED] * 3
    assert [o.piece.sequence_id for o in reserved] == [1, 2, 3]
    assert ids(controller.stack_view()) == [3, 2, 1]
    assert ids(controller.queue_view()) == [4, 5, 6, 7, 8]


def test_reserve_moves_piece_atomically():
    """A reserved piece is in the stack and no longer in the queue."""
    controller = make_controller()
    head = controller.queue_view()[0]

    outcome = controller.reserve()

    assert outcome.piece == head
    assert head in controller.stack_view()
    assert head not in controller.queue_view()
    assert len(controller.queue_view()) == 5


def test_reserve_full_changes_nothing():
    """Reserving into a full stack leaves both containers untouched."""
    controller = make_controller()
    for _ in range(3):
        controller.reserve()

    queue_before = controller.queue_view()
    stack_before = controller.stack_view()
    next_id_before = controller.generator.next_id

    outcome = controller.reserve()

    assert outcome.kind == OutcomeKind.RESERVE_FULL
    assert outcome.piece is None
    assert not outcome.ok
    assert controller.queue_view() == queue_before
    assert controller.stack_view() == stack_before
    assert controller.generator.next_id == next_id_before


def test_use_reserved_pops_top():
    """Using the reserve consumes the most recently reserved piece."""
    controller = make_controller()
    controller.reserve()
    controller.reserve()

    outcome = controller.use_reserved()

    assert outcome.kind == OutcomeKind.USED
    assert outcome.piece.sequence_id == 1
    assert ids(controller.stack_view()) == [0]
    assert len(controller.queue_view()) == 5


def test_use_reserved_empty():
    """Using an empty reserve reports it and keeps the queue full."""
    controller = make_controller()
    queue_before = controller.queue_view()

    outcome = controller.use_reserved()

    assert outcome.kind == OutcomeKind.NOTHING_RESERVED
    assert outcome.piece is None
    assert controller.queue_view() == queue_before


def test_play_on_empty_queue():
    """Playing with an empty queue reports nothing to play, then refills."""
    generator = PieceGenerator(3)
    controller = GameController(BoundedQueue(5), generator, BoundedStack(3))
    assert controller.queue.is_empty()

    outcome = controller.play()

    assert outcome.kind == OutcomeKind.NOTHING_TO_PLAY
    assert outcome.piece is None
    assert ids(controller.queue_view()) == [0, 1, 2, 3, 4]


def test_reserve_on_empty_queue():
    """Reserving with an empty queue reports nothing to reserve."""
    controller = GameController(BoundedQueue(5), PieceGenerator(3), BoundedStack(3))

    outcome = controller.reserve()

    assert outcome.kind == OutcomeKind.NOTHING_TO_RESERVE
    assert controller.stack_view() == ()
    assert len(controller.queue_view()) == 5


def test_reserve_full_checked_before_empty_queue():
    """A full reserve is reported even when the queue is empty."""
    stack = BoundedStack(1)
    controller = GameController(BoundedQueue(2), PieceGenerator(0), stack)
    controller.refill()
    controller.reserve()
    controller.queue.dequeue()
    controller.queue.dequeue()

    assert controller.reserve().kind == OutcomeKind.RESERVE_FULL


def test_basic_variant_has_no_reserve():
    """The queue-only variant refuses reserve operations."""
    controller = make_controller(stack_capacity=None)

    assert not controller.has_reserve
    assert controller.stack_view() == ()
    with pytest.raises(ReserveUnavailable):
        controller.reserve()
    with pytest.raises(ReserveUnavailable):
        controller.use_reserved()

    assert controller.play().kind == OutcomeKind.PLAYED


def test_outcome_messages():
    """Outcomes render a message naming the moved piece."""
    controller = make_controller()
    outcome = controller.play()

    assert outcome.message() == f"Played piece {outcome.piece.label()}."
    assert outcome.to_dict()["piece"] == outcome.piece.to_dict()
    assert controller.use_reserved().message() == "Reserve empty. No reserved piece to use."


def test_state_to_dict():
    """State snapshot serializes both containers."""
    controller = make_controller()
    controller.reserve()

    state = controller.state().to_dict()

    assert [p["id"] for p in state["queue"]] == [1, 2, 3, 4, 5]
    assert [p["id"] for p in state["stack"]] == [0]
    assert state["queue_capacity"] == 5
    assert state["stack_capacity"] == 3
    assert state["next_id"] == 6


def test_from_config():
    """Controllers built from config honour capacities and seed."""
    controller = GameController.from_config(GameConfig(queue_capacity=4, stack_capacity=2, seed=9))
    replay = GameController.from_config(GameConfig(queue_capacity=4, stack_capacity=2, seed=9))

    assert len(controller.queue_view()) == 4
    assert controller.stack.capacity == 2
    assert controller.queue_view() == replay.queue_view()


@pytest.mark.parametrize("seed", range(10))
def test_random_interleaving_keeps_invariants(seed):
    """Sizes stay bounded, the queue stays full and ids stay unique."""
    rng = random.Random(seed)
    controller = make_controller(seed=seed)
    operations = [controller.play, controller.reserve, controller.use_reserved]
    seen = set(ids(controller.queue_view()))
    last_id = max(seen)

    for _ in range(200):
        rng.choice(operations)()

        queue = controller.queue_view()
        stack = controller.stack_view()
        assert len(queue) == 5, "Queue should be refilled after every transition"
        assert 0 <= len(stack) <= 3

        held = ids(queue) + ids(stack)
        assert len(held) == len(set(held)), "A piece may only be held once"
        assert ids(queue) == sorted(ids(queue)), "Queue holds pieces in creation order"

        for piece_id in ids(queue):
            if piece_id not in seen:
                assert piece_id > last_id, "New ids must be strictly increasing"
                last_id = piece_id
                seen.add(piece_id)


def test_long_session_keeps_no_extra_state():
    """Transitions leave only the containers and generator on the controller."""
    controller = make_controller()
    for _ in range(1000):
        controller.play()
        controller.reserve()
        controller.use_reserved()

    assert set(vars(controller)) == {"queue", "generator", "stack"}
    assert len(controller.queue_view()) == 5
    assert len(controller.stack_view()) <= 3
