# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game session.

This module provides the `GameSession` class, which holds the game state and applies moves, and the
`TileSpawner` class, which places new tiles.
"""

from .session import GameSession
from .spawner import TileSpawner

__all__ = ["GameSession", "TileSpawner"]
