"""Game configuration and the two named variants."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from tetris_stack.piece import DEFAULT_KINDS, PIECE_KINDS
from tetris_stack.rng import PIECE_RULES

DEFAULT_QUEUE_CAPACITY = 5
DEFAULT_STACK_CAPACITY = 3

# Upper bounds keep a single refill cheap
MAX_QUEUE_CAPACITY = 64
MAX_STACK_CAPACITY = 64


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class GameConfig:
    """Settings needed to start a controller.

    ``stack_capacity=None`` selects the basic variant (queue only); any
    positive value enables the reserve stack.
    """

    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    stack_capacity: Optional[int] = DEFAULT_STACK_CAPACITY
    kinds: Tuple[str, ...] = DEFAULT_KINDS
    piece_rule: str = "uniform"
    seed: Optional[int] = None

    @classmethod
    def basic(cls, seed: Optional[int] = None) -> "GameConfig":
        """Queue-only variant."""
        return cls(stack_capacity=None, seed=seed)

    @classmethod
    def intermediate(cls, seed: Optional[int] = None) -> "GameConfig":
        """Queue plus reserve stack variant."""
        return cls(seed=seed)

    @property
    def has_reserve(self) -> bool:
        return self.stack_capacity is not None

    def validate(self) -> "GameConfig":
        """Check the settings and return self.

        Raises:
            ValueError: If any setting is out of range
        """
        if not _is_int(self.queue_capacity) or not 0 < self.queue_capacity <= MAX_QUEUE_CAPACITY:
            raise ValueError(
                f"queue_capacity must be an integer in 1..{MAX_QUEUE_CAPACITY}, got {self.queue_capacity!r}"
            )
        if self.stack_capacity is not None and (
            not _is_int(self.stack_capacity) or not 0 < self.stack_capacity <= MAX_STACK_CAPACITY
        ):
            raise ValueError(
                f"stack_capacity must be an integer in 1..{MAX_STACK_CAPACITY} or None, got {self.stack_capacity!r}"
            )
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer or None, got {self.seed!r}")
        if not self.kinds:
            raise ValueError("kinds must not be empty")
        for kind in self.kinds:
            if kind not in PIECE_KINDS:
                raise ValueError(f"Invalid piece kind: {kind}")
        if self.piece_rule not in PIECE_RULES:
            raise ValueError(f"Unknown piece rule: {self.piece_rule}")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Build a validated config from a mapping, ignoring unset keys.

        Args:
            data: Mapping with any of the dataclass field names

        Returns:
            Validated config
        """
        kwargs: Dict[str, Any] = {}
        for name in ("queue_capacity", "piece_rule", "seed"):
            if data.get(name) is not None:
                kwargs[name] = data[name]
        # An explicit null stack_capacity selects the basic variant
        if "stack_capacity" in data:
            kwargs["stack_capacity"] = data["stack_capacity"]
        if data.get("kinds"):
            if not isinstance(data["kinds"], (list, tuple)):
                raise ValueError(f"kinds must be a list of piece kinds, got {data['kinds']!r}")
            kwargs["kinds"] = tuple(data["kinds"])
        return cls(**kwargs).validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "queue_capacity": self.queue_capacity,
            "stack_capacity": self.stack_capacity,
            "kinds": list(self.kinds),
            "piece_rule": self.piece_rule,
            "seed": self.seed,
        }
