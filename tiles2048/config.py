# -*- coding: utf-8 -*-
"""
Game session configuration.
"""
from dataclasses import dataclass
from pathlib import Path


@dataclass
class SessionConfig:
    """Data needed to build a game session."""

    initial_tiles: int = 2  # Tiles placed on a fresh board
    seed: int | None = None  # Spawner seed, None for entropy
    best_score_path: Path | None = None  # JSON file for the best score, None keeps it in memory
