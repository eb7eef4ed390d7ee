"""
Reachability checks and exit selection.

BFS runs over path cells with 4-directional adjacency. Exit selection retries
a bounded number of times and then forces a fallback cell, so generation never
hands back a level whose exit cannot be reached from the start.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Sequence

from maze_escape.core.grid import ORTHOGONAL_DIRECTIONS, CellType, Grid, Position

logger = logging.getLogger(__name__)

MAX_EXIT_ATTEMPTS = 10


@dataclass(frozen=True)
class ExitSelection:
    """Outcome of exit selection."""
    position: Position
    attempts: int
    used_fallback: bool = False


def _walkable_neighbors(grid: Grid, pos: Position) -> list[Position]:
    neighbors = []
    for direction in ORTHOGONAL_DIRECTIONS:
        nxt = pos.move(direction)
        if grid.is_path(nxt.x, nxt.y):
            neighbors.append(nxt)
    return neighbors


def path_exists(grid: Grid, start: Position, end: Position) -> bool:
    """
    Check whether end is reachable from start through path cells.

    Does not mutate the grid, so repeated calls give the same answer.
    """
    if not grid.is_path(start.x, start.y) or not grid.is_path(end.x, end.y):
        return False
    if start == end:
        return True

    queue = deque([start])
    visited = {start}

    while queue:
        pos = queue.popleft()
        for nxt in _walkable_neighbors(grid, pos):
            if nxt in visited:
                continue
            if nxt == end:
                return True
            visited.add(nxt)
            queue.append(nxt)

    return False


def shortest_path(grid: Grid, start: Position, end: Position) -> list[Position]:
    """
    Find the shortest walk from start to end.

    Returns:
        Positions including both endpoints, or [] if unreachable.
    """
    if not grid.is_path(start.x, start.y) or not grid.is_path(end.x, end.y):
        return []
    if start == end:
        return [start]

    queue = deque([start])
    previous: dict[Position, Position] = {}
    visited = {start}

    while queue:
        pos = queue.popleft()
        for nxt in _walkable_neighbors(grid, pos):
            if nxt in visited:
                continue
            previous[nxt] = pos
            if nxt == end:
                path = [end]
                while path[-1] != start:
                    path.append(previous[path[-1]])
                path.reverse()
                return path
            visited.add(nxt)
            queue.append(nxt)

    return []


def reachable_cells(grid: Grid, start: Position) -> set[Position]:
    """Flood fill the path component containing start."""
    if not grid.is_path(start.x, start.y):
        return set()

    queue = deque([start])
    visited = {start}
    while queue:
        pos = queue.popleft()
        for nxt in _walkable_neighbors(grid, pos):
            if nxt not in visited:
                visited.add(nxt)
                queue.append(nxt)
    return visited


def fallback_exit(grid: Grid) -> Position:
    """The cell just inside the bottom-right corner."""
    return Position(max(grid.width - 2, 0), max(grid.height - 2, 0))


def select_exit(
    grid: Grid,
    start: Position,
    path_cells: Sequence[Position],
    rng: random.Random,
    max_attempts: int = MAX_EXIT_ATTEMPTS,
) -> ExitSelection:
    """
    Choose an exit reachable from start.

    The first candidate is the last path cell in row-major order, which sits
    in the far corner from a top-left start. Failing that, candidates are
    resampled uniformly from the other path cells up to ``max_attempts``
    times. If every attempt fails the bottom-right inner cell is forced to a
    path and used unconditionally.

    Args:
        grid: Carved grid.
        start: Player start position.
        path_cells: Path cells in row-major order.
        rng: Random source for resampling.
        max_attempts: Resampling budget.

    Returns:
        ExitSelection with the chosen position.
    """
    candidates = [pos for pos in path_cells if pos != start] or list(path_cells)
    exit_pos = candidates[-1] if candidates else fallback_exit(grid)

    attempts = 0
    while not path_exists(grid, start, exit_pos) and attempts < max_attempts:
        if not candidates:
            break
        exit_pos = candidates[rng.randrange(len(candidates))]
        attempts += 1

    if path_exists(grid, start, exit_pos):
        return ExitSelection(position=exit_pos, attempts=attempts)

    exit_pos = fallback_exit(grid)
    cell = grid.cell_at(exit_pos.x, exit_pos.y)
    if cell is not None:
        cell.type = CellType.PATH
    logger.warning(
        f"No reachable exit after {attempts} attempts, "
        f"forcing fallback exit at ({exit_pos.x}, {exit_pos.y})"
    )
    return ExitSelection(position=exit_pos, attempts=attempts, used_fallback=True)
