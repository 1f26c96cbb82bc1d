"""
Grid transition engine for the 2048 game, working on a set of positioned tiles.
"""

from collections.abc import Sequence
from dataclasses import replace

from numpy import int64, ndarray, zeros

from tiles2048.core.tile import GRID_SIZE, Direction, Tile, new_tile_id

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


def occupancy(board: Sequence[Tile]) -> ndarray:
    """
    Build the dense value grid of a board.

    Parameters
    ----------
    board : Sequence[Tile]
        Tiles of the board.

    Returns
    -------
    ndarray
        A ``GRID_SIZE x GRID_SIZE`` array holding tile values, 0 for empty cells.

    Raises
    ------
    ValueError
        If the board holds too many tiles, a tile lies outside the grid or two tiles
        share a cell.
    """
    if len(board) > GRID_SIZE * GRID_SIZE:
        raise ValueError(f'Board holds {len(board)} tiles, at most {GRID_SIZE * GRID_SIZE} allowed')

    grid = zeros((GRID_SIZE, GRID_SIZE), dtype=int64)
    for tile in board:
        row, col = tile.position
        if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
            raise ValueError(f'Tile {tile.id} lies outside the grid at {tile.position}')
        if grid[row, col] != 0:
            raise ValueError(f'Two tiles share the cell {tile.position}')
        grid[row, col] = tile.value
    return grid


def empty_cells(board: Sequence[Tile]) -> list[tuple[int, int]]:
    """
    List the cells not occupied by any tile, in row-major order.

    Parameters
    ----------
    board : Sequence[Tile]
        Tiles of the board.

    Returns
    -------
    list[tuple[int, int]]
        Free cells as ``(row, col)``.
    """
    taken = {tile.position for tile in board}
    return [(row, col) for row in range(GRID_SIZE) for col in range(GRID_SIZE) if (row, col) not in taken]


def clear_hints(board: Sequence[Tile]) -> list[Tile]:
    """Return the board with the ``is_new`` and ``is_merging`` hints switched off."""
    return [replace(tile, is_new=False, is_merging=False) if tile.is_new or tile.is_merging else tile for tile in board]


def merge_line(line: Sequence[Tile]) -> tuple[int, list[Tile]]:
    """
    Merge adjacent equal tiles of a line, already ordered from the wall outward.

    Parameters
    ----------
    line : Sequence[Tile]
        Tiles of one row or column, first tile being the closest to the wall.

    Returns
    -------
    score : int
        The total score obtained from merging.
    merged_line : list[Tile]
        The tiles after merging, in the same order. Positions are not updated.

    Notes
    -----
    - Merging occurs from the start of the line towards the end.
    - A tile produced by a merge is never merged again within the same call.
    """
    result = []
    score = 0

    i = 0
    while i < len(line):
        current = line[i]
        if i + 1 < len(line) and line[i + 1].value == current.value:
            merged = current.value * 2
            result.append(Tile(value=merged, position=current.position, id=new_tile_id(), is_merging=True))
            score += merged
            i += 2
        else:
            result.append(current)
            i += 1

    return score, result


def transform(board: Sequence[Tile], direction: Direction | str) -> tuple[list[Tile], int]:
    """
    Slide and merge every line of the board toward a wall, without spawning a tile.

    Parameters
    ----------
    board : Sequence[Tile]
        Tiles of the current board. Not modified.
    direction : Direction | str
        Direction of the move.

    Returns
    -------
    new_board : list[Tile]
        The tiles after the move, sorted by ``(row, col)``.
    score : int
        The sum of the values produced by merges.

    Raises
    ------
    ValueError
        If the direction is not one of the four legal values.

    Notes
    -----
    - Lines are rows for left/right and columns for up/down.
    - Tiles nearest the destination wall are processed first and anchor the line.
    - The cross-axis coordinate of a tile never changes.
    """
    direction = Direction.parse(direction)
    horizontal = direction.is_horizontal
    reverse = direction.is_reverse

    result: list[Tile] = []
    score = 0

    for index in range(GRID_SIZE):
        # ##: Collect the line and order it from the destination wall outward.
        line = [tile for tile in board if (tile.row if horizontal else tile.col) == index]
        line.sort(key=lambda tile: tile.col if horizontal else tile.row, reverse=reverse)

        line_score, merged_line = merge_line(line)
        score += line_score

        # ##: Pack the merged tiles against the wall.
        for rank, tile in enumerate(merged_line):
            slot = GRID_SIZE - 1 - rank if reverse else rank
            position = (index, slot) if horizontal else (slot, index)
            result.append(tile if tile.position == position else replace(tile, position=position))

    result.sort(key=lambda tile: tile.position)
    return result, score
