# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import argparse
import logging
from pathlib import Path
from typing import Any

from tiles2048.config import SessionConfig
from tiles2048.envs import GameSession
from tiles2048.utils import QUIT_KEY, RESET_KEY, key_to_direction
from tiles2048.utils.windows import WindowBoard


def redraw(window: WindowBoard, session: GameSession):
    """
    Redraw the game board.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    session: GameSession
        Game session to draw
    """
    window.show_tiles(session.tiles, session.score, session.best_score, session.is_game_over)


def key_handler(session: GameSession, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    session: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    if event.key == QUIT_KEY:
        window.close()
        return None

    if event.key == RESET_KEY:
        session.reset()
        return None

    # ##: No move is sent once the game is over.
    direction = key_to_direction(event.key)
    if direction is not None and not session.is_game_over:
        session.move(direction)
    return None


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Play 2048 with the keyboard.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the tile spawner.")
    parser.add_argument(
        "--best-score-file",
        type=Path,
        default=Path.home() / ".tiles2048" / "best_score.json",
        help="JSON file holding the best score.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every move.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    game = GameSession.from_config(SessionConfig(seed=args.seed, best_score_path=args.best_score_file))
    window_board = WindowBoard(title="2048 Game")

    game.register_observer(lambda current: redraw(window_board, current))
    window_board.register_key_handler(lambda event: key_handler(game, window_board, event))

    redraw(window_board, game)

    # Blocking event loop
    window_board.show(block=True)
