"""
Shared builders for the tests.
"""

from collections.abc import Sequence

from tiles2048.core.gameboard import empty_cells
from tiles2048.core.tile import Tile
from tiles2048.envs.spawner import TileSpawner


def make_board(cells: dict[tuple[int, int], int]) -> list[Tile]:
    """Build a board sorted by position from a ``{(row, col): value}`` mapping."""
    return [Tile(value=value, position=position) for position, value in sorted(cells.items())]


def as_cells(board: Sequence[Tile]) -> dict[tuple[int, int], int]:
    """Reduce a board to its ``{(row, col): value}`` mapping."""
    return {tile.position: tile.value for tile in board}


class FixedSpawner(TileSpawner):
    """Spawner placing a tile of fixed value into the first empty cell, in row-major order."""

    def __init__(self, value: int = 2):
        super().__init__(seed=0)
        self.value = value
        self.calls = 0

    def spawn(self, board: Sequence[Tile]) -> Tile:
        cells = empty_cells(board)
        if not cells:
            raise ValueError('No empty cell to spawn a tile into')
        self.calls += 1
        return Tile(value=self.value, position=cells[0], is_new=True)
