"""
Randomized recursive-backtracking maze carver.

Carving steps two cells at a time so that the cell in between becomes the
passage that is knocked through. The result is a perfect maze: path cells form
a spanning tree with exactly one simple route between any two of them.

An explicit stack replaces recursion so large grids do not hit Python's
recursion limit. Each frame holds a cell, its shuffled 2-step neighbours and a
cursor into that list, which keeps carving order and random draws identical to
the recursive formulation.
"""

import random
from typing import Optional

from maze_escape.core.grid import Cell, Grid

# 2-step offsets in up, right, down, left order
CARVE_STEPS = ((0, -2), (2, 0), (0, 2), (-2, 0))

SEED_X = 1
SEED_Y = 1


def unvisited_neighbors(grid: Grid, cell: Cell) -> list[Cell]:
    """Get unvisited cells two steps away along the four cardinal axes."""
    neighbors = []
    for dx, dy in CARVE_STEPS:
        neighbor = grid.cell_at(cell.x + dx, cell.y + dy)
        if neighbor is not None and not neighbor.visited:
            neighbors.append(neighbor)
    return neighbors


def _enter(grid: Grid, cell: Cell, rng: random.Random) -> list:
    """Mark a cell carved and build its stack frame."""
    cell.carve()
    neighbors = unvisited_neighbors(grid, cell)
    rng.shuffle(neighbors)
    return [cell, neighbors, 0]


def carve_maze(grid: Grid, rng: Optional[random.Random] = None) -> int:
    """
    Carve a perfect maze into an all-wall grid in place.

    Args:
        grid: Grid to mutate. Expected to have odd width and height.
        rng: Random source. Defaults to a fresh ``random.Random()``.

    Returns:
        Number of cells carved.
    """
    rng = rng or random.Random()

    seed = grid.cell_at(SEED_X, SEED_Y)
    if seed is None:
        return 0

    carved = 1
    stack = [_enter(grid, seed, rng)]

    while stack:
        frame = stack[-1]
        current, neighbors, cursor = frame

        if cursor >= len(neighbors):
            stack.pop()
            continue

        frame[2] = cursor + 1
        neighbor = neighbors[cursor]
        # Another branch may have reached this neighbour since the shuffle
        if neighbor.visited:
            continue

        wall_x = current.x + (neighbor.x - current.x) // 2
        wall_y = current.y + (neighbor.y - current.y) // 2
        wall = grid.cell_at(wall_x, wall_y)
        if wall is not None:
            wall.carve()
            carved += 1

        stack.append(_enter(grid, neighbor, rng))
        carved += 1

    return carved
