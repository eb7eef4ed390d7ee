"""Read-only movement queries used by the game loop."""

from dataclasses import dataclass
from typing import Optional

from maze_escape.core.grid import Cell, Direction, Grid, Position
from maze_escape.core.items import Locker
from maze_escape.core.maze_generator import MazeData


def cell_at(grid: Grid, x: int, y: int) -> Optional[Cell]:
    """Get the cell at (x, y), or None if out of bounds."""
    return grid.cell_at(x, y)


def orthogonal_neighbors(grid: Grid, x: int, y: int) -> list[Cell]:
    """Get the in-bounds cells up, right, down and left of (x, y)."""
    return grid.orthogonal_neighbors(x, y)


def is_valid_move(grid: Grid, x: int, y: int) -> bool:
    """Check if (x, y) is inside the grid and not a wall."""
    cell = grid.cell_at(x, y)
    return cell is not None and cell.is_path


def lockers_near(maze: MazeData, position: Position, radius: int = 1) -> list[Locker]:
    """Get lockers within ``radius`` cells of position, diagonals included."""
    return [
        locker for locker in maze.lockers
        if abs(locker.x - position.x) <= radius and abs(locker.y - position.y) <= radius
    ]


@dataclass
class Firewall:
    """A patrolling hazard."""
    position: Position
    direction: Direction

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.value,
        }


def step_firewall(grid: Grid, firewall: Firewall) -> bool:
    """
    Advance a firewall one cell along its direction.

    A firewall facing a wall or the grid edge reverses direction and stays
    where it is for this tick.

    Returns:
        True if the firewall moved.
    """
    target = firewall.position.move(firewall.direction)
    if is_valid_move(grid, target.x, target.y):
        firewall.position = target
        return True
    firewall.direction = firewall.direction.opposite
    return False
