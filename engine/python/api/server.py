"""FastAPI WebSocket server for Tetris Stack."""

import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from tetris_stack.config import GameConfig
from tetris_stack.controller import GameController
from tetris_stack.errors import ReserveUnavailable
from tetris_stack.runner import Command, execute
from api.protocol import (
    HelloRequest,
    HelloResponse,
    ResetRequest,
    CommandRequest,
    StateResponse,
    ErrorResponse,
    ErrorCode,
    parse_message,
    to_dict,
)

app = FastAPI(title="Tetris Stack API", version="0.1.0")

# Enable CORS for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],  # Vite default ports
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class GameSession:
    """Manages the controller for a single connection."""

    def __init__(self):
        self.controller: Optional[GameController] = None
        self.config: Optional[GameConfig] = None

    @property
    def initialized(self) -> bool:
        return self.controller is not None

    def reset(self, request: ResetRequest) -> StateResponse:
        """Start a new game.

        Args:
            request: Reset message with optional seed and capacities

        Returns:
            Initial state response

        Raises:
            ValueError: If the requested settings are invalid
        """
        self.config = GameConfig.from_dict(
            {
                "seed": request.seed,
                "queue_capacity": request.queue_capacity,
                "stack_capacity": request.stack_capacity,
                "kinds": request.kinds,
                "piece_rule": request.piece_rule,
            }
        )
        self.controller = GameController.from_config(self.config)

        return StateResponse(
            data=self.controller.state().to_dict(),
            outcome=None,
            info={"event": "reset", "seed": self.controller.generator.seed},
        )

    def command(self, name: str) -> StateResponse:
        """Run one transition.

        Args:
            name: Command value ("play", "reserve", "use_reserved")

        Returns:
            State response carrying the outcome

        Raises:
            RuntimeError: If game not initialized
            ValueError: If the command is unknown
            ReserveUnavailable: If a reserve command is sent to a queue-only game
        """
        if self.controller is None:
            raise RuntimeError("Game not initialized. Send reset first.")

        try:
            command = Command(name)
        except ValueError:
            raise ValueError(f"Invalid command: {name}")

        outcome = execute(self.controller, command)

        return StateResponse(
            data=self.controller.state().to_dict(),
            outcome=outcome.to_dict(),
            info={"event": "command", "command": command.value},
        )


def error_message(code: str, message: str) -> str:
    return json.dumps(to_dict(ErrorResponse(code=code, message=message)))


def handle_message(session: GameSession, message: Any) -> str:
    """Dispatch a parsed message and return the JSON reply."""
    if isinstance(message, HelloRequest):
        return json.dumps(to_dict(HelloResponse()))

    if isinstance(message, ResetRequest):
        try:
            response = session.reset(message)
        except ValueError as e:
            return error_message(ErrorCode.INVALID_MESSAGE, str(e))
        logger.info(f"[WS] Reset: config={session.config.to_dict()}")
        return json.dumps(to_dict(response))

    if isinstance(message, CommandRequest):
        try:
            response = session.command(message.command)
        except RuntimeError as e:
            return error_message(ErrorCode.GAME_NOT_INITIALIZED, str(e))
        except ReserveUnavailable as e:
            return error_message(ErrorCode.RESERVE_UNAVAILABLE, str(e))
        except ValueError as e:
            return error_message(ErrorCode.INVALID_COMMAND, str(e))
        logger.info(f"[WS] Command {message.command}: {response.outcome['kind']}")
        return json.dumps(to_dict(response))

    return error_message(ErrorCode.INVALID_MESSAGE, f"Unknown message type: {type(message)}")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "tetris-stack-api", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for game communication."""
    await websocket.accept()
    session = GameSession()
    logger.info("[WS] Client connected")

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = parse_message(json.loads(data))
            except json.JSONDecodeError as e:
                await websocket.send_text(error_message(ErrorCode.INVALID_MESSAGE, f"Invalid JSON: {e}"))
                continue
            except ValueError as e:
                await websocket.send_text(error_message(ErrorCode.INVALID_MESSAGE, str(e)))
                continue

            await websocket.send_text(handle_message(session, message))

    except WebSocketDisconnect:
        logger.info("[WS] Client disconnected")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
