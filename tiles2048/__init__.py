# -*- coding: utf-8 -*-
"""
Tile-based implementation of the 2048 game: a pure grid engine and a stateful game session.
"""

from tiles2048.core import GRID_SIZE, Direction, Tile, has_any_legal_move, transform
from tiles2048.envs import GameSession, TileSpawner

__all__ = ["GRID_SIZE", "Direction", "Tile", "transform", "has_any_legal_move", "GameSession", "TileSpawner"]
