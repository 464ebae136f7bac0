"""Text rendering and the numbered-menu command loop."""

import logging
from typing import Callable, Dict, List, Sequence

from tetris_stack.controller import GameController, Outcome
from tetris_stack.piece import Piece

logger = logging.getLogger(__name__)

QUIT = "0"


def format_pieces(pieces: Sequence[Piece]) -> str:
    """Render pieces as ``[T 0] [O 1] ...`` or ``(empty)``."""
    if not pieces:
        return "(empty)"
    return " ".join(p.label() for p in pieces)


def render_state(controller: GameController) -> List[str]:
    """Lines describing the queue and, if present, the reserve stack."""
    lines = [
        "Piece queue",
        format_pieces(controller.queue_view()),
    ]
    if controller.has_reserve:
        lines.append(f"Reserve stack (top -> bottom): {format_pieces(controller.stack_view())}")
    return lines


def menu_options(controller: GameController) -> Dict[str, str]:
    """Menu choices available for this controller's variant."""
    options = {"1": "Play piece"}
    if controller.has_reserve:
        options["2"] = "Reserve piece (move from queue to reserve)"
        options["3"] = "Use reserved piece"
    options[QUIT] = "Quit"
    return options


def handle_choice(controller: GameController, choice: str) -> Outcome:
    """Run the transition bound to a menu choice.

    Raises:
        KeyError: If the choice is not a transition of this variant
    """
    actions: Dict[str, Callable[[], Outcome]] = {"1": controller.play}
    if controller.has_reserve:
        actions["2"] = controller.reserve
        actions["3"] = controller.use_reserved
    return actions[choice]()


def run_console(
    controller: GameController,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Drive the controller from a text menu until the player quits.

    Args:
        controller: Controller to drive
        read: Prompt-and-read function (EOFError ends the loop)
        write: Line output function

    Returns:
        Number of transitions executed
    """
    title = "Tetris Stack - Piece Manager"
    title += " (Queue + Reserve)" if controller.has_reserve else " (Queue)"
    write(title)
    for line in render_state(controller):
        write(line)

    options = menu_options(controller)
    transitions = 0

    while True:
        write("")
        write("Options:")
        for key, text in options.items():
            write(f"{key} - {text}")

        try:
            choice = read("Choice: ").strip()
        except EOFError:
            choice = QUIT

        if choice == QUIT:
            write("Exiting...")
            break
        if choice not in options:
            # Malformed and out-of-range input are treated alike
            write("Invalid option.")
            continue

        outcome = handle_choice(controller, choice)
        transitions += 1
        logger.debug("Menu choice %s -> %s", choice, outcome.kind.value)
        write(outcome.message())
        for line in render_state(controller):
            write(line)

    return transitions
