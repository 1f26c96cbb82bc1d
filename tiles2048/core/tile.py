"""
Tile and direction types shared by the grid engine and the game session.
"""

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

# ##>: Side of the square grid. Only the classic 4x4 board is supported.
GRID_SIZE = 4


def new_tile_id() -> str:
    """Generate a fresh opaque identifier for a tile."""
    return uuid4().hex[:12]


class Direction(str, Enum):
    """
    Direction of a move.

    LEFT/RIGHT move along rows, UP/DOWN move along columns.
    """

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def is_horizontal(self) -> bool:
        """True when the move slides tiles along rows."""
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_reverse(self) -> bool:
        """True when tiles pack toward the highest index (right or bottom wall)."""
        return self in (Direction.RIGHT, Direction.DOWN)

    @classmethod
    def parse(cls, value: 'Direction | str') -> 'Direction':
        """
        Convert a direction or its string value into a ``Direction``.

        Parameters
        ----------
        value : Direction | str
            A member of the enum or one of ``'up'``, ``'down'``, ``'left'``, ``'right'``.

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the value is not one of the four directions.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unknown direction: {value!r}') from None


@dataclass(frozen=True)
class Tile:
    """
    A numbered tile positioned on the grid.

    Attributes
    ----------
    value : int
        Power of two carried by the tile.
    position : tuple[int, int]
        Cell occupied by the tile, as ``(row, col)``.
    id : str
        Identifier stable for the lifetime of the tile. Merges and spawns create new ids.
    is_new : bool
        Rendering hint: the tile was spawned this turn.
    is_merging : bool
        Rendering hint: the tile was produced by a merge this turn.
    """

    value: int
    position: tuple[int, int]
    id: str = field(default_factory=new_tile_id)
    is_new: bool = False
    is_merging: bool = False

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def col(self) -> int:
        return self.position[1]
