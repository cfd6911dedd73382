from typing import Iterable, List

import numpy as np

from .errors import InvariantViolation
from .model import Cell, Coordinate

# Up, Down, Left, Right
_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Arena:
    """Static wall/space grid. The outer ring is always wall."""

    def __init__(self, rows: Iterable[Iterable[Cell]]):
        self.walls = np.array(
            [[cell is Cell.WALL for cell in row] for row in rows], dtype=bool
        )

    @property
    def height(self) -> int:
        return self.walls.shape[0]

    @property
    def width(self) -> int:
        return self.walls.shape[1] if self.walls.ndim == 2 else 0

    def cell(self, coord: Coordinate) -> Cell:
        return Cell.WALL if self.walls[coord.row, coord.col] else Cell.SPACE

    def is_wall(self, coord: Coordinate) -> bool:
        return bool(self.walls[coord.row, coord.col])

    def get_adjacent(self, coord: Coordinate) -> List[Coordinate]:
        """Return the open neighbours of coord in Up, Down, Left, Right order."""
        row, col = coord
        if row <= 0 or row >= self.height - 1 or col <= 0 or col >= self.width - 1:
            raise InvariantViolation(f"cannot get adjacent cells, coord out of bounds: {coord}")
        adjacent = []
        for dr, dc in _OFFSETS:
            nr, nc = row + dr, col + dc
            if not self.walls[nr, nc]:
                adjacent.append(Coordinate(nr, nc))
        return adjacent
