"""
Grid model for generated mazes.

A grid is a row-major ``rows[y][x]`` array of cells. Every cell starts as a
wall; the carver turns some of them into paths. Exit, chip, firewall and
locker markers are flags layered on top of path cells, not separate types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class CellType(Enum):
    """Types of cells in the grid."""
    WALL = "wall"
    PATH = "path"


class Direction(Enum):
    """Movement directions."""
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """Get the reverse direction."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.RIGHT: Direction.LEFT,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
        }
        return opposites[self]


# Fixed neighbour order: up, right, down, left
ORTHOGONAL_DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


@dataclass(frozen=True)
class Position:
    """2D position in the grid."""
    x: int
    y: int

    def move(self, direction: Direction) -> "Position":
        """Return new position after moving in direction."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass
class Cell:
    """One grid position and the markers placed on it."""
    x: int
    y: int
    type: CellType = CellType.WALL
    visited: bool = False
    is_exit: bool = False
    has_chip: bool = False
    has_firewall: bool = False
    has_locker: bool = False
    locker_id: Optional[str] = None

    @property
    def is_path(self) -> bool:
        return self.type == CellType.PATH

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def carve(self) -> None:
        """Turn this cell into a visited path cell."""
        self.type = CellType.PATH
        self.visited = True

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {
            "x": self.x,
            "y": self.y,
            "type": self.type.value,
        }
        if self.is_exit:
            result["is_exit"] = True
        if self.has_chip:
            result["has_chip"] = True
        if self.has_firewall:
            result["has_firewall"] = True
        if self.has_locker:
            result["has_locker"] = True
            result["locker_id"] = self.locker_id
        return result


class Grid:
    """
    Fixed-size two-dimensional array of cells addressed ``[y][x]``.

    Queries never raise for coordinates outside the grid: ``cell_at``
    returns None and ``orthogonal_neighbors`` skips them.
    """

    def __init__(self, width: int, height: int):
        """
        Allocate an all-wall grid.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self.rows: list[list[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self.rows:
            yield from row

    def is_in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at (x, y), or None if out of bounds."""
        if not self.is_in_bounds(x, y):
            return None
        return self.rows[y][x]

    def orthogonal_neighbors(self, x: int, y: int) -> list[Cell]:
        """Get the in-bounds cells above, right of, below and left of (x, y)."""
        neighbors = []
        for direction in ORTHOGONAL_DIRECTIONS:
            dx, dy = direction.delta
            cell = self.cell_at(x + dx, y + dy)
            if cell is not None:
                neighbors.append(cell)
        return neighbors

    def path_cells(self) -> list[Cell]:
        """All path cells in row-major order."""
        return [cell for cell in self if cell.is_path]

    def is_path(self, x: int, y: int) -> bool:
        """Check if (x, y) is an in-bounds path cell."""
        cell = self.cell_at(x, y)
        return cell is not None and cell.is_path

    def to_list(self) -> list[list[dict]]:
        """Convert to nested lists of cell dictionaries."""
        return [[cell.to_dict() for cell in row] for row in self.rows]
