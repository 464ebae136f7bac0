"""Runner for driving a controller through command sequences."""

import random
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

from tetris_stack.config import GameConfig
from tetris_stack.controller import GameController, Outcome
from tetris_stack.piece import Piece


class Command(Enum):
    """Transitions a session can issue."""
    PLAY = "play"
    RESERVE = "reserve"
    USE_RESERVED = "use_reserved"


@dataclass
class SessionStats:
    """Statistics for a single session."""

    seed: Optional[int]
    commands: int = 0
    outcome_counts: Dict[str, int] = field(default_factory=dict)
    pieces_generated: int = 0
    final_queue: List[Piece] = field(default_factory=list)
    final_stack: List[Piece] = field(default_factory=list)
    outcomes: List[Outcome] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "seed": self.seed,
            "commands": self.commands,
            "outcome_counts": dict(self.outcome_counts),
            "pieces_generated": self.pieces_generated,
            "final_queue": [p.to_dict() for p in self.final_queue],
            "final_stack": [p.to_dict() for p in self.final_stack],
        }


def execute(controller: GameController, command: Command) -> Outcome:
    """Apply one command to a controller."""
    if command is Command.PLAY:
        return controller.play()
    if command is Command.RESERVE:
        return controller.reserve()
    return controller.use_reserved()


class Runner:
    """Runs command sequences against fresh controllers."""

    def __init__(self, config: Optional[GameConfig] = None, verbose: bool = False):
        """Initialize runner.

        Args:
            config: Game settings (defaults to the intermediate variant)
            verbose: Print a summary line after each session
        """
        self.config = (config or GameConfig.intermediate()).validate()
        self.verbose = verbose

    def available_commands(self) -> List[Command]:
        if self.config.has_reserve:
            return list(Command)
        return [Command.PLAY]

    def run_commands(
        self, commands: Iterable[Command], controller: Optional[GameController] = None
    ) -> SessionStats:
        """Run commands in order and collect statistics.

        Args:
            commands: Commands to issue
            controller: Controller to drive (a fresh one from config if None)

        Returns:
            Session statistics
        """
        if controller is None:
            controller = GameController.from_config(self.config)

        stats = SessionStats(seed=controller.generator.seed)
        counts: Counter = Counter()

        for command in commands:
            outcome = execute(controller, command)
            counts[outcome.kind.value] += 1
            stats.outcomes.append(outcome)
            stats.commands += 1

        stats.outcome_counts = dict(counts)
        stats.pieces_generated = controller.generator.next_id
        stats.final_queue = list(controller.queue_view())
        stats.final_stack = list(controller.stack_view())

        if self.verbose:
            print(
                f"Session {stats.seed}: {stats.commands} commands, "
                f"{stats.pieces_generated} pieces generated, "
                f"outcomes {stats.outcome_counts}"
            )

        return stats

    def run_random(self, num_commands: int, seed: int) -> SessionStats:
        """Run uniformly random commands with a reproducible seed.

        Args:
            num_commands: Number of commands to issue
            seed: Seed for both the command chooser and the piece generator

        Returns:
            Session statistics
        """
        chooser = random.Random(seed)
        choices = self.available_commands()
        commands = [chooser.choice(choices) for _ in range(num_commands)]

        controller = GameController.from_config(replace(self.config, seed=seed))
        return self.run_commands(commands, controller)
