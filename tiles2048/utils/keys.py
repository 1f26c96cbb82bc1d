"""Mapping of keyboard keys to moves."""

from tiles2048.core.tile import Direction

# ##>: Matplotlib key names for arrows and the WASD cluster.
KEY_DIRECTIONS: dict[str, Direction] = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
    'w': Direction.UP,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'd': Direction.RIGHT,
}

RESET_KEY = 'backspace'
QUIT_KEY = 'escape'


def key_to_direction(key: str | None) -> Direction | None:
    """
    Translate a key name into a direction.

    Parameters
    ----------
    key : str | None
        Key name as reported by the window backend.

    Returns
    -------
    Direction | None
        The matching direction, None for keys that are not bound to a move.
    """
    if key is None:
        return None
    return KEY_DIRECTIONS.get(key.lower())
