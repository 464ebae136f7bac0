"""Protocol data classes for WebSocket communication."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Literal
from enum import Enum


class MessageType(str, Enum):
    """WebSocket message types."""
    HELLO = "hello"
    RESET = "reset"
    COMMAND = "command"
    STATE = "state"
    ERROR = "error"


@dataclass
class HelloRequest:
    """Client hello message."""
    type: Literal["hello"] = "hello"
    version: str = "s1.0.0"


@dataclass
class HelloResponse:
    """Server hello response."""
    type: Literal["hello"] = "hello"
    version: str = "s1.0.0"
    server: str = "tetris-stack-py"


@dataclass
class ResetRequest:
    """Request to start a new game.

    Omitted capacities fall back to the intermediate variant; an explicit
    ``stack_capacity: null`` selects the queue-only variant.
    """
    seed: Optional[int] = None
    queue_capacity: Optional[int] = None
    stack_capacity: Optional[int] = 3
    kinds: Optional[List[str]] = None
    piece_rule: Optional[str] = None
    type: Literal["reset"] = "reset"


@dataclass
class CommandRequest:
    """Request to run one transition: play, reserve or use_reserved."""
    command: str
    type: Literal["command"] = "command"


@dataclass
class StateResponse:
    """Game state after a reset or command."""
    data: Dict[str, Any]  # ControllerState.to_dict()
    outcome: Optional[Dict[str, Any]]  # Outcome.to_dict(), None after reset
    info: Dict[str, Any]
    type: Literal["state"] = "state"


@dataclass
class ErrorResponse:
    """Error response."""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    type: Literal["error"] = "error"


class ErrorCode:
    """Standard error codes."""
    INVALID_MESSAGE = "INVALID_MESSAGE"
    INVALID_COMMAND = "INVALID_COMMAND"
    GAME_NOT_INITIALIZED = "GAME_NOT_INITIALIZED"
    RESERVE_UNAVAILABLE = "RESERVE_UNAVAILABLE"


def parse_message(data: Dict[str, Any]) -> Any:
    """Parse incoming WebSocket message.

    Args:
        data: JSON message dict

    Returns:
        Parsed message object

    Raises:
        ValueError: If message type is invalid or fields don't match
    """
    if not isinstance(data, dict):
        raise ValueError("Message must be a JSON object")

    msg_type = data.get("type")

    try:
        if msg_type == MessageType.HELLO:
            return HelloRequest(**data)
        elif msg_type == MessageType.RESET:
            return ResetRequest(**data)
        elif msg_type == MessageType.COMMAND:
            return CommandRequest(**data)
    except TypeError as e:
        raise ValueError(f"Malformed {msg_type} message: {e}") from e

    raise ValueError(f"Unknown message type: {msg_type}")


def to_dict(obj: Any) -> Dict[str, Any]:
    """Convert dataclass to dict for JSON serialization.

    Args:
        obj: Dataclass instance

    Returns:
        Dictionary representation
    """
    return asdict(obj)
