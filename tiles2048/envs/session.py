"""2048 game session: authoritative state wrapped around the pure grid engine."""

import logging
from collections.abc import Callable

from numpy import ndarray

from tiles2048.config import SessionConfig
from tiles2048.core.gameboard import clear_hints, occupancy, transform
from tiles2048.core.gamemove import has_any_legal_move
from tiles2048.core.tile import GRID_SIZE, Direction, Tile
from tiles2048.envs.spawner import TileSpawner
from tiles2048.storage import BestScoreStore, JsonBestScoreStore, MemoryBestScoreStore

logger = logging.getLogger(__name__)


class GameSession:
    """
    2048 game session.

    This class owns the tiles, the cumulative score, the best score and the game-over flag. It applies
    engine moves, spawns a tile after every move that changes the board and detects the end of the game.
    """

    def __init__(
        self,
        spawner: TileSpawner | None = None,
        store: BestScoreStore | None = None,
        initial_tiles: int = 2,
    ):
        """
        Initialize the session and deal a fresh board.

        Parameters
        ----------
        spawner : TileSpawner, optional
            Source of new tiles (default is an unseeded ``TileSpawner``).
        store : BestScoreStore, optional
            Best score persistence (default keeps the best score in memory).
        initial_tiles : int, optional
            Number of tiles on a fresh board (default is 2).

        Raises
        ------
        ValueError
            If ``initial_tiles`` is not between 1 and ``GRID_SIZE ** 2``.
        """
        if not 1 <= initial_tiles <= GRID_SIZE * GRID_SIZE:
            raise ValueError(f'initial_tiles must be in [1, {GRID_SIZE * GRID_SIZE}], got {initial_tiles}')

        self._spawner = spawner if spawner is not None else TileSpawner()
        self._store = store if store is not None else MemoryBestScoreStore()
        self._initial_tiles = initial_tiles
        self._observers: list[Callable[['GameSession'], None]] = []

        self._tiles: list[Tile] = []
        self._score = 0
        self._game_over = False
        self._best_score = self._load_best_score()

        self.reset()

    @classmethod
    def from_config(cls, config: SessionConfig) -> 'GameSession':
        """Build a session from a configuration."""
        store = JsonBestScoreStore(config.best_score_path) if config.best_score_path else MemoryBestScoreStore()
        return cls(spawner=TileSpawner(seed=config.seed), store=store, initial_tiles=config.initial_tiles)

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """Tiles currently on the board, sorted by position."""
        return tuple(self._tiles)

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def is_game_over(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True once a move left a full board without equal neighbours, until the next reset.
        """
        return self._game_over

    @property
    def observation(self) -> ndarray:
        """
        Get the current state of the game board.

        Returns
        -------
        ndarray
            The tile values as a 2D numpy array, 0 for empty cells.
        """
        return occupancy(self._tiles)

    def register_observer(self, callback: Callable[['GameSession'], None]) -> None:
        """
        Register a function called with the session after every accepted move and every reset.

        Parameters
        ----------
        callback : Callable
            Function receiving the session.
        """
        self._observers.append(callback)

    def reset(self) -> tuple[Tile, ...]:
        """
        Discard the current game and deal a new board.

        Returns
        -------
        tuple[Tile, ...]
            The tiles of the new board.

        Notes
        -----
        - The best score is kept across games.
        - Each initial tile is a 2 (90%) or a 4 (10%).
        """
        tiles: list[Tile] = []
        for _ in range(self._initial_tiles):
            tiles.append(self._spawner.spawn(tiles))
        tiles.sort(key=lambda tile: tile.position)

        self._tiles = tiles
        self._score = 0
        self._game_over = False
        logger.info('New game started with %d tiles', len(tiles))

        self._notify()
        return self.tiles

    def move(self, direction: Direction | str) -> tuple[tuple[Tile, ...], int, bool]:
        """
        Apply a move to the board.

        Parameters
        ----------
        direction : Direction | str
            Direction of the move.

        Returns
        -------
        tuple[tuple[Tile, ...], int, bool]
            A tuple containing:
            - The tiles after the move
            - The score gained by this move
            - Whether the game is over

        Raises
        ------
        ValueError
            If the direction is not one of the four legal values. The state is left untouched.

        Notes
        -----
        - A move that changes nothing is ignored: no score, no new tile.
        - Moves are ignored once the game is over.
        - Merged tiles keep ``is_merging`` and the new tile keeps ``is_new`` until the next move.
        """
        direction = Direction.parse(direction)

        if self._game_over:
            logger.debug('Ignoring %s: game is over', direction.value)
            return self.tiles, 0, True

        moved, gained = transform(clear_hints(self._tiles), direction)

        # ##: Positions only decide whether the board changed.
        if [tile.position for tile in moved] == [tile.position for tile in self._tiles]:
            logger.debug('Ignoring %s: board unchanged', direction.value)
            return self.tiles, 0, False

        # ##: Fill randomly one cell.
        moved.append(self._spawner.spawn(moved))
        moved.sort(key=lambda tile: tile.position)

        self._tiles = moved
        self._score += gained
        self._update_best_score()

        if not has_any_legal_move(self._tiles):
            self._game_over = True
            logger.info('Game over with score %d', self._score)

        self._notify()
        return self.tiles, gained, self._game_over

    def render(self) -> None:
        """
        Render the game board. This method prints the score and the current board to the console.
        """
        print(f'score={self._score} best={self._best_score}')
        for row in self.observation.tolist():
            print(' \t'.join(map(str, row)))

    def _update_best_score(self) -> None:
        if self._score > self._best_score:
            self._best_score = self._score
            logger.info('New best score: %d', self._best_score)
            try:
                self._store.save(self._best_score)
            except OSError as error:
                logger.warning('Best score %d kept in memory only: %s', self._best_score, error)

    def _load_best_score(self) -> int:
        try:
            return self._store.load()
        except OSError as error:
            logger.warning('Best score unavailable, starting from 0: %s', error)
            return 0

    def _notify(self) -> None:
        for callback in self._observers:
            callback(self)
