"""Shortest-path search over the open, unoccupied cells of an arena."""

import heapq
from typing import Container, Dict, Optional

from .arena import Arena
from .errors import InvariantViolation
from .model import Coordinate, Link


class PathFinder:
    """
    Dijkstra from a source cell, recording for each reachable cell the
    predecessor on its best path.

    Every edge costs one step, so the queue is keyed on (steps, coord). A
    cell's predecessor is only replaced by one with fewer steps, or by one
    with equal steps that comes first in reading order. The source maps to
    None.
    """

    def __init__(self, source: Coordinate, arena: Arena, occupied: Container[Coordinate]):
        self.source = source
        self.paths: Dict[Coordinate, Optional[Link]] = {source: None}

        open_set = [Link(0, source)]
        while open_set:
            link = heapq.heappop(open_set)
            for coord in arena.get_adjacent(link.coord):
                # Occupied tiles block movement
                if coord == source or coord in occupied:
                    continue
                existing = self.paths.get(coord)
                if existing is None or link < existing:
                    self.paths[coord] = link
                    heapq.heappush(open_set, Link(link.steps + 1, coord))

    def __contains__(self, coord: Coordinate) -> bool:
        return coord in self.paths

    def steps_to(self, coord: Coordinate) -> int:
        """Number of steps from the source to a reachable coord."""
        if coord not in self.paths:
            raise InvariantViolation(f"coord is not reachable from {self.source}: {coord}")
        link = self.paths[coord]
        return 0 if link is None else link.steps + 1

    def get_first_step_toward(self, target: Coordinate) -> Coordinate:
        """Walk the predecessor chain back from target; return the cell next to the source."""
        if target not in self.paths:
            raise InvariantViolation(f"target is not reachable from {self.source}: {target}")
        link = self.paths[target]
        while link is not None and link.steps != 0:
            target = link.coord
            link = self.paths[target]
        return target
