"""Piece values that travel through the next-queue and the reserve stack.

A piece carries only its tetromino label and the sequence id it received
when it was generated. Geometry lives elsewhere.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

# Labels dealt by default
DEFAULT_KINDS: Tuple[str, ...] = ("I", "O", "T", "L")

# Every label a generator may be configured with
PIECE_KINDS: Tuple[str, ...] = ("I", "O", "T", "S", "Z", "J", "L")


@dataclass(frozen=True)
class Piece:
    """An immutable tetromino value with a unique sequence id."""

    kind: str
    sequence_id: int

    def __post_init__(self):
        if self.kind not in PIECE_KINDS:
            raise ValueError(f"Invalid piece kind: {self.kind}")
        if self.sequence_id < 0:
            raise ValueError(f"Invalid sequence id: {self.sequence_id}")

    def label(self) -> str:
        """Short display form, e.g. ``[T 0]``."""
        return f"[{self.kind} {self.sequence_id}]"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"kind": self.kind, "id": self.sequence_id}

    def __str__(self) -> str:
        return self.label()
