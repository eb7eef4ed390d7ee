"""
Maze Escape Maze Generator

Single entry point for building a level:
- Allocate an odd-sized all-wall grid
- Carve a perfect maze with randomized recursive backtracking
- Pick a start and a reachable exit
- Scatter chips, firewalls and lockers on the remaining path cells

Every call returns a fresh MazeData that is treated as read-only afterwards.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from maze_escape.core.carver import carve_maze
from maze_escape.core.grid import Grid, Position
from maze_escape.core.items import Locker, place_items
from maze_escape.core.verifier import select_exit

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 21
DEFAULT_HEIGHT = 21
MIN_DIMENSION = 3


class MazeGenerationError(Exception):
    """Exception raised when a maze cannot be generated."""

    pass


class InvalidMazeDimensionsError(MazeGenerationError):
    """Exception raised for dimensions too small to carve."""

    pass


@dataclass(frozen=True)
class MazeData:
    """A finished maze and the positions of everything placed on it."""
    grid: Grid
    player_start: Position
    exit: Position
    chips: tuple[Position, ...] = ()
    firewalls: tuple[Position, ...] = ()
    lockers: tuple[Locker, ...] = ()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def locker_by_id(self, locker_id: str) -> Optional[Locker]:
        """Get a locker by id."""
        for locker in self.lockers:
            if locker.id == locker_id:
                return locker
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "grid": self.grid.to_list(),
            "player_start": self.player_start.to_dict(),
            "exit": self.exit.to_dict(),
            "chips": [pos.to_dict() for pos in self.chips],
            "firewalls": [pos.to_dict() for pos in self.firewalls],
            "lockers": [locker.to_dict() for locker in self.lockers],
        }


def coerce_dimension(value: int) -> int:
    """Bump even dimensions to the next odd value."""
    return value + 1 if value % 2 == 0 else value


def generate_maze(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    rng: Optional[random.Random] = None,
) -> MazeData:
    """
    Generate a solvable maze level.

    Args:
        width: Requested number of columns. Even values are bumped by one.
        height: Requested number of rows. Even values are bumped by one.
        rng: Random source used for every draw in this call. Pass a seeded
            ``random.Random`` for reproducible layouts.

    Returns:
        MazeData for the new level.

    Raises:
        InvalidMazeDimensionsError: If either dimension is below 3.
    """
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise InvalidMazeDimensionsError(
            f"Maze dimensions must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, "
            f"got {width}x{height}"
        )

    rng = rng or random.Random()
    maze_width = coerce_dimension(width)
    maze_height = coerce_dimension(height)

    grid = Grid(maze_width, maze_height)
    carved = carve_maze(grid, rng)

    path_cells = [cell.position for cell in grid.path_cells()]
    player_start = path_cells[0] if path_cells else Position(1, 1)

    selection = select_exit(grid, player_start, path_cells, rng)
    exit_pos = selection.position
    grid.rows[exit_pos.y][exit_pos.x].is_exit = True

    items = place_items(grid, rng)

    logger.debug(
        f"Generated {maze_width}x{maze_height} maze: {carved} path cells, "
        f"exit ({exit_pos.x}, {exit_pos.y}) after {selection.attempts} retries, "
        f"{len(items.chips)} chips, {len(items.firewalls)} firewalls, "
        f"{len(items.lockers)} lockers"
    )

    return MazeData(
        grid=grid,
        player_start=player_start,
        exit=exit_pos,
        chips=tuple(items.chips),
        firewalls=tuple(items.firewalls),
        lockers=tuple(items.lockers),
    )
