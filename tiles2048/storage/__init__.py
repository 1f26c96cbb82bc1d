# -*- coding: utf-8 -*-
"""
Best-score persistence backends.
"""

from .best_score import BEST_SCORE_KEY, BestScoreStore, JsonBestScoreStore, MemoryBestScoreStore

__all__ = ["BEST_SCORE_KEY", "BestScoreStore", "JsonBestScoreStore", "MemoryBestScoreStore"]
