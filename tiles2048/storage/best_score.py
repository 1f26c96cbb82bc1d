"""
Persistence of the best score across games and process restarts.

Stores never raise on I/O problems: a failed read yields 0 and a failed write is logged and
dropped, so the game keeps running on its in-memory best score.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = '2048-best-score'


class BestScoreStore(ABC):
    """Key-value storage for a single integer: the best score."""

    @abstractmethod
    def load(self) -> int:
        """Read the stored best score, 0 when nothing is stored."""

    @abstractmethod
    def save(self, value: int) -> None:
        """Persist a new best score."""


class MemoryBestScoreStore(BestScoreStore):
    """Keep the best score in process only."""

    def __init__(self, value: int = 0):
        self._value = value

    def load(self) -> int:
        return self._value

    def save(self, value: int) -> None:
        self._value = value


class JsonBestScoreStore(BestScoreStore):
    """
    Keep the best score in a small JSON file.

    Parameters
    ----------
    path : str | Path
        Location of the JSON file. Parent directories are created on first save.
    key : str, optional
        Key under which the score is stored (default is ``'2048-best-score'``).
    """

    def __init__(self, path: str | Path, key: str = BEST_SCORE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        try:
            with self.path.open('r', encoding='utf-8') as file_h:
                data = json.load(file_h)
            return max(int(data.get(self.key, 0)), 0)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, AttributeError) as error:
            logger.warning('Cannot read best score from %s: %s', self.path, error)
            return 0

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open('w', encoding='utf-8') as file_h:
                json.dump({self.key: int(value)}, file_h)
        except OSError as error:
            logger.warning('Cannot write best score to %s: %s', self.path, error)
