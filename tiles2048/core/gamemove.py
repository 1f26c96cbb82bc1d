"""
Terminal-state detection for the 2048 game.
"""

from collections.abc import Sequence

from numpy import any as np_any

from tiles2048.core.gameboard import occupancy
from tiles2048.core.tile import GRID_SIZE, Tile


def has_any_legal_move(board: Sequence[Tile]) -> bool:
    """
    Check whether the player can still act on the board.

    Parameters
    ----------
    board : Sequence[Tile]
        Tiles of the board.

    Returns
    -------
    bool
        False only when every cell is occupied and no two orthogonal neighbours share a value.

    Notes
    -----
    A board with an empty cell always has a legal move, even if every slide in some direction
    is blocked.
    """
    if len(board) < GRID_SIZE * GRID_SIZE:
        return True

    grid = occupancy(board)
    return bool(np_any(grid[:-1] == grid[1:]) or np_any(grid[:, :-1] == grid[:, 1:]))


def is_done(board: Sequence[Tile]) -> bool:
    """Check if the game has ended, the board being full with no equal neighbours."""
    return not has_any_legal_move(board)
