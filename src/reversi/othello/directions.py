from __future__ import annotations

from itertools import count
from typing import Iterator, Optional

ROWS = 8
COLS = 8

# (row delta, column delta)
DIRECTIONS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]


def step(
    index: int,
    direction: tuple[int, int],
    distance: int = 1,
    width: int = COLS,
    height: int = ROWS,
) -> Optional[int]:
    """
    Returns the index reached by moving `distance` squares from `index` in
    `direction`, or None if that would leave the board.

    Rows and columns are checked separately, so a horizontal step can never
    wrap into the neighbouring row.
    """
    assert index in range(width * height)

    dy, dx = direction
    y = index // width + dy * distance
    x = index % width + dx * distance

    if y not in range(height) or x not in range(width):
        return None

    return y * width + x


def ray(
    index: int,
    direction: tuple[int, int],
    width: int = COLS,
    height: int = ROWS,
) -> Iterator[int]:
    """Yields the squares from `index` outwards in `direction`, excluding `index`."""
    for distance in count(1):
        next_index = step(index, direction, distance, width, height)
        if next_index is None:
            return
        yield next_index


def neighbours(index: int, width: int = COLS, height: int = ROWS) -> list[int]:
    result: list[int] = []
    for direction in DIRECTIONS:
        neighbour = step(index, direction, 1, width, height)
        if neighbour is not None:
            result.append(neighbour)
    return result
