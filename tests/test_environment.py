"""
Tests for the 2048 game session.

Tests cover the session interface, tile spawning, score and best score bookkeeping,
game termination and the integration between GameSession and the grid engine.
"""

import tempfile
from pathlib import Path
from unittest import TestCase, main

import numpy as np

from tests.helpers import FixedSpawner, as_cells, make_board
from tiles2048.config import SessionConfig
from tiles2048.core import GRID_SIZE, Direction, occupancy
from tiles2048.envs import GameSession, TileSpawner
from tiles2048.storage import BestScoreStore, MemoryBestScoreStore


class BrokenStore(BestScoreStore):
    """Store whose storage is gone."""

    def load(self) -> int:
        raise OSError('storage unavailable')

    def save(self, value: int) -> None:
        raise OSError('disk gone')


class TestSessionInterface(TestCase):
    """Test GameSession API and state management."""

    def setUp(self):
        """Initialize a session with a deterministic spawner before each test."""
        self.spawner = FixedSpawner()
        self.session = GameSession(spawner=self.spawner)

    def test_reset_state_initialization(self):
        """Reset deals exactly 2 tiles and zeroes the score."""
        tiles = self.session.reset()

        # ##>: Exactly 2 tiles after reset.
        self.assertEqual(len(tiles), 2)
        self.assertEqual(len(self.session.tiles), 2)

        # ##>: Score resets to zero.
        self.assertEqual(self.session.score, 0)

        # ##>: Game not finished after reset.
        self.assertFalse(self.session.is_game_over)

    def test_observation(self):
        """Observation is the dense value grid of the tiles."""
        self.session._tiles = make_board({(1, 2): 8})
        obs = self.session.observation

        self.assertEqual(obs.shape, (GRID_SIZE, GRID_SIZE))
        self.assertEqual(obs[1, 2], 8)
        self.assertEqual(np.count_nonzero(obs), 1)

    def test_invalid_direction(self):
        """An unknown direction raises and leaves the state alone."""
        before = self.session.tiles
        with self.assertRaises(ValueError):
            self.session.move('sideways')
        self.assertEqual(self.session.tiles, before)
        self.assertEqual(self.spawner.calls, 2)

    def test_initial_tiles_range(self):
        """A fresh board needs between 1 and 16 tiles."""
        for count in (0, -1, GRID_SIZE * GRID_SIZE + 1):
            with self.assertRaises(ValueError):
                GameSession(spawner=FixedSpawner(), initial_tiles=count)

        full = GameSession(spawner=FixedSpawner(), initial_tiles=GRID_SIZE * GRID_SIZE)
        self.assertEqual(len(full.tiles), GRID_SIZE * GRID_SIZE)


class TestSessionScenarios(TestCase):
    """Scenarios on hand-made boards."""

    def setUp(self):
        self.spawner = FixedSpawner()
        self.session = GameSession(spawner=self.spawner)

    def test_single_merge(self):
        """Merging two 2s scores 4 and spawns one tile."""
        self.session._tiles = make_board({(0, 0): 2, (0, 1): 2})

        tiles, gained, done = self.session.move(Direction.LEFT)

        self.assertEqual(gained, 4)
        self.assertEqual(self.session.score, 4)
        self.assertFalse(done)

        # ##>: Merged tile at the wall, new tile in the first free cell.
        self.assertEqual(as_cells(tiles), {(0, 0): 4, (0, 1): 2})
        self.assertTrue(tiles[0].is_merging)
        self.assertTrue(tiles[1].is_new)

    def test_chain_non_merge(self):
        """The third equal tile does not merge with the result."""
        self.session._tiles = make_board({(0, 0): 2, (0, 1): 2, (0, 2): 2})

        tiles, gained, _ = self.session.move('left')

        self.assertEqual(gained, 4)
        cells = as_cells(tiles)
        self.assertEqual(cells[(0, 0)], 4)
        self.assertEqual(cells[(0, 1)], 2)
        self.assertEqual(len(tiles), 3)

    def test_blocked_move_is_noop(self):
        """A move that changes nothing neither scores nor spawns."""
        self.session._tiles = make_board({(0, 0): 2, (0, 1): 4, (0, 2): 2, (0, 3): 4})
        self.session._score = 16
        calls = self.spawner.calls
        before = self.session.tiles

        tiles, gained, done = self.session.move(Direction.LEFT)

        self.assertEqual(gained, 0)
        self.assertFalse(done)
        self.assertEqual(self.session.score, 16)
        self.assertEqual(tiles, before)
        self.assertEqual(self.spawner.calls, calls)

    def test_hints_cleared_on_next_move(self):
        """Hints of the previous turn are gone after the next move."""
        self.session._tiles = make_board({(0, 0): 2, (0, 1): 2})
        tiles, _, _ = self.session.move(Direction.LEFT)
        merged_id, spawned_id = tiles[0].id, tiles[1].id

        tiles, _, _ = self.session.move(Direction.DOWN)
        by_cell = {tile.position: tile for tile in tiles}

        # ##>: Slid tiles keep their identity but lose their hints.
        self.assertEqual(by_cell[(3, 0)].id, merged_id)
        self.assertFalse(by_cell[(3, 0)].is_merging)
        self.assertEqual(by_cell[(3, 1)].id, spawned_id)
        self.assertFalse(by_cell[(3, 1)].is_new)

        # ##>: Only the new spawn carries is_new.
        self.assertEqual([tile.position for tile in tiles if tile.is_new], [(0, 0)])

    def test_game_over(self):
        """Filling the last cell without equal neighbours ends the game."""
        rows = [[0, 4, 8, 16], [32, 64, 128, 256], [2, 4, 8, 16], [32, 64, 128, 256]]
        self.session._tiles = make_board({(r, c): v for r, row in enumerate(rows) for c, v in enumerate(row) if v})

        tiles, gained, done = self.session.move(Direction.LEFT)

        self.assertEqual(gained, 0)
        self.assertTrue(done)
        self.assertTrue(self.session.is_game_over)
        self.assertEqual(len(tiles), GRID_SIZE * GRID_SIZE)
        self.assertEqual(as_cells(tiles)[(0, 3)], 2)

        # ##>: Further moves are ignored.
        calls = self.spawner.calls
        after, gained, done = self.session.move(Direction.RIGHT)
        self.assertEqual(after, tiles)
        self.assertEqual(gained, 0)
        self.assertTrue(done)
        self.assertEqual(self.spawner.calls, calls)

        # ##>: Reset starts a fresh game.
        self.session.reset()
        self.assertFalse(self.session.is_game_over)
        self.assertEqual(self.session.score, 0)
        self.assertEqual(len(self.session.tiles), 2)

    def test_observers(self):
        """Observers hear about accepted moves and resets, not about no-ops."""
        seen = []
        self.session.register_observer(lambda current: seen.append(current.score))

        self.session._tiles = make_board({(0, 0): 2, (0, 1): 2})
        self.session.move(Direction.LEFT)
        self.session.move(Direction.LEFT)
        self.session.reset()

        self.assertEqual(seen, [4, 0])


class TestBestScore(TestCase):
    """Best score ratchet and persistence."""

    def test_best_score_loaded_and_kept(self):
        """A lower score does not replace a stored best score."""
        store = MemoryBestScoreStore(100)
        session = GameSession(spawner=FixedSpawner(), store=store)
        self.assertEqual(session.best_score, 100)

        session._tiles = make_board({(0, 0): 2, (0, 1): 2})
        session.move(Direction.LEFT)

        self.assertEqual(session.best_score, 100)
        self.assertEqual(store.load(), 100)

    def test_best_score_ratchet(self):
        """A higher score becomes the best score and is stored, and survives a reset."""
        store = MemoryBestScoreStore()
        session = GameSession(spawner=FixedSpawner(), store=store)

        session._tiles = make_board({(0, 0): 8, (0, 1): 8})
        session.move(Direction.LEFT)

        self.assertEqual(session.best_score, 16)
        self.assertEqual(store.load(), 16)

        session.reset()
        self.assertEqual(session.score, 0)
        self.assertEqual(session.best_score, 16)

    def test_from_config_persists(self):
        """Sessions built from the same configuration share the best score file."""
        with tempfile.TemporaryDirectory() as folder:
            config = SessionConfig(seed=7, best_score_path=Path(folder) / 'best.json')

            session = GameSession.from_config(config)
            session._tiles = make_board({(2, 2): 32, (2, 3): 32})
            session.move(Direction.RIGHT)

            self.assertEqual(GameSession.from_config(config).best_score, 64)

    def test_unusable_best_score_path(self):
        """A best score file that cannot be opened does not prevent playing."""
        with tempfile.TemporaryDirectory() as folder:
            config = SessionConfig(best_score_path=Path(folder) / ('x' * 300))

            with self.assertLogs('tiles2048.storage.best_score', level='WARNING'):
                session = GameSession.from_config(config)
            self.assertEqual(session.best_score, 0)
            self.assertEqual(len(session.tiles), 2)

    def test_failing_store(self):
        """A store that cannot be read or written leaves the move complete."""
        seen = []
        with self.assertLogs('tiles2048.envs.session', level='WARNING'):
            session = GameSession(spawner=FixedSpawner(), store=BrokenStore())
        session.register_observer(lambda current: seen.append(current.score))
        self.assertEqual(session.best_score, 0)

        session._tiles = make_board({(0, 0): 2, (0, 1): 2})
        with self.assertLogs('tiles2048.envs.session', level='WARNING'):
            tiles, gained, done = session.move(Direction.LEFT)

        # ##>: Move fully applied, best score kept in memory, observers told.
        self.assertEqual(gained, 4)
        self.assertFalse(done)
        self.assertEqual(len(tiles), 2)
        self.assertEqual(session.best_score, 4)
        self.assertEqual(seen, [4])

    def test_game_over_with_failing_store(self):
        """Game over is still detected when saving the best score fails."""
        rows = [[4, 8, 16, 16], [32, 64, 128, 256], [2, 4, 8, 16], [32, 64, 128, 256]]
        with self.assertLogs('tiles2048.envs.session', level='WARNING'):
            session = GameSession(spawner=FixedSpawner(), store=BrokenStore())
        session._tiles = make_board({(r, c): v for r, row in enumerate(rows) for c, v in enumerate(row) if v})

        with self.assertLogs('tiles2048.envs.session', level='WARNING'):
            _, gained, done = session.move(Direction.LEFT)

        self.assertEqual(gained, 32)
        self.assertTrue(done)


class TestRandomPlay(TestCase):
    """Invariants held along seeded random games."""

    def test_seed_reproducibility(self):
        """Same seed produces identical initial boards."""
        first = GameSession(spawner=TileSpawner(seed=42))
        second = GameSession(spawner=TileSpawner(seed=42))
        self.assertEqual(as_cells(first.tiles), as_cells(second.tiles))

    def test_initial_values(self):
        """Initial tiles are 2s or 4s flagged as new."""
        session = GameSession(spawner=TileSpawner(seed=3))
        for tile in session.tiles:
            self.assertIn(tile.value, (2, 4))
            self.assertTrue(tile.is_new)

    def test_invariants_along_game(self):
        """Occupancy holds and the score never decreases."""
        generator = np.random.default_rng(0)
        directions = list(Direction)
        session = GameSession(spawner=TileSpawner(seed=0))

        previous = 0
        for _ in range(500):
            if session.is_game_over:
                break
            before = len(session.tiles)
            tiles, gained, _ = session.move(directions[int(generator.integers(4))])

            # ##>: occupancy raises on collisions.
            occupancy(tiles)
            self.assertLessEqual(len(tiles), GRID_SIZE * GRID_SIZE)
            self.assertEqual(session.score, previous + gained)
            self.assertGreaterEqual(session.score, previous)
            self.assertLessEqual(len(tiles), before + 1)
            previous = session.score


if __name__ == "__main__":
    main()
