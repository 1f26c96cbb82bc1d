"""Random placement of new tiles after a move."""

import logging
from collections.abc import Sequence

from numpy.random import PCG64DXSM, Generator, default_rng

from tiles2048.core.gameboard import TILE_SPAWN_PROBS, empty_cells
from tiles2048.core.tile import Tile

logger = logging.getLogger(__name__)

# ##>: Pre-computed tile values and probabilities for fast sampling.
_TILE_VALUES = list(TILE_SPAWN_PROBS)
_TILE_PROBS = list(TILE_SPAWN_PROBS.values())


class TileSpawner:
    """
    Source of new tiles.

    Picks an empty cell uniformly at random and a value of 2 (90%) or 4 (10%). Subclasses may
    override ``spawn`` to provide a deterministic sequence.
    """

    def __init__(self, seed: int | None = None, generator: Generator | None = None):
        """
        Initialize the spawner.

        Parameters
        ----------
        seed : int, optional
            Random number generator seed for reproducibility.
        generator : Generator, optional
            Generator to draw from. Takes precedence over ``seed``.
        """
        if generator is not None:
            self._rng = generator
        elif seed is not None:
            self._rng = default_rng(seed)
        else:
            self._rng = default_rng(PCG64DXSM())

    def spawn(self, board: Sequence[Tile]) -> Tile:
        """
        Create a new tile in a random empty cell of the board.

        Parameters
        ----------
        board : Sequence[Tile]
            Tiles already on the board. Not modified.

        Returns
        -------
        Tile
            The new tile, flagged ``is_new``.

        Raises
        ------
        ValueError
            If the board has no empty cell.
        """
        cells = empty_cells(board)
        if not cells:
            raise ValueError(f'No empty cell to spawn a tile into ({len(board)} tiles on board)')

        row, col = cells[int(self._rng.integers(len(cells)))]
        value = int(self._rng.choice(_TILE_VALUES, p=_TILE_PROBS))
        logger.debug('Spawned %d at (%d, %d)', value, row, col)
        return Tile(value=value, position=(row, col), is_new=True)
