#!/usr/bin/env python3
"""Play Tetris Stack from the terminal.

Usage:
    python play_console.py [basic|intermediate] [seed]
"""

import logging
import sys

from tetris_stack.config import GameConfig
from tetris_stack.console import run_console
from tetris_stack.controller import GameController


def main():
    """Start a console session."""
    logging.basicConfig(level=logging.WARNING)

    variant = sys.argv[1] if len(sys.argv) > 1 else "intermediate"
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None

    if variant == "basic":
        config = GameConfig.basic(seed=seed)
    elif variant == "intermediate":
        config = GameConfig.intermediate(seed=seed)
    else:
        print(f"Unknown variant: {variant} (expected basic or intermediate)")
        sys.exit(2)

    run_console(GameController.from_config(config))


if __name__ == "__main__":
    main()
