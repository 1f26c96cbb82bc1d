# -*- coding: utf-8 -*-
"""
This module provides the grid engine of a 2048-like game working on positioned tiles.

It includes the tile and direction types, the pure slide-and-merge transformation,
occupancy helpers and the terminal-state check.
"""

from .gameboard import TILE_SPAWN_PROBS, clear_hints, empty_cells, merge_line, occupancy, transform
from .gamemove import has_any_legal_move, is_done
from .tile import GRID_SIZE, Direction, Tile, new_tile_id

__all__ = [
    "GRID_SIZE",
    "TILE_SPAWN_PROBS",
    "Direction",
    "Tile",
    "new_tile_id",
    "transform",
    "merge_line",
    "occupancy",
    "empty_cells",
    "clear_hints",
    "has_any_legal_move",
    "is_done",
]
