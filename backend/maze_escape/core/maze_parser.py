"""
Maze text codec for Maze Escape.

Renders finished mazes to a character grid and parses them back.

Maze Format:
    S = Player start
    E = Exit (goal)
    X = Wall (impassable)
    . = Open path
    C = Chip (collectible)
    F = Firewall (patrolling hazard, starting position)
    L = Locker (puzzle-gated cell)
"""

from pathlib import Path
from typing import Optional

from maze_escape.core.grid import CellType, Grid, Position
from maze_escape.core.items import Locker, locker_id_for
from maze_escape.core.maze_generator import MazeData
from maze_escape.core.verifier import path_exists

WALL_CHAR = "X"
PATH_CHAR = "."
START_CHAR = "S"
EXIT_CHAR = "E"
CHIP_CHAR = "C"
FIREWALL_CHAR = "F"
LOCKER_CHAR = "L"

VALID_CHARS = {
    WALL_CHAR,
    PATH_CHAR,
    START_CHAR,
    EXIT_CHAR,
    CHIP_CHAR,
    FIREWALL_CHAR,
    LOCKER_CHAR,
}


class MazeParseError(Exception):
    """Exception raised when maze text cannot be parsed."""

    pass


class MazeValidationError(Exception):
    """Exception raised when parsed maze text is not a playable maze."""

    pass


def render_maze_text(maze: MazeData) -> str:
    """
    Render a maze as text, one line per row.

    The start and exit markers win over anything else on their cells, so an
    item sharing a cell with the start or exit is not written and does not
    come back from parse_maze_text. A maze whose start is also its exit
    (a 3x3 grid) renders without an exit marker and cannot be parsed back.
    """
    lines = []
    for row in maze.grid.rows:
        line = ""
        for cell in row:
            if cell.x == maze.player_start.x and cell.y == maze.player_start.y:
                line += START_CHAR
            elif not cell.is_path:
                line += WALL_CHAR
            elif cell.is_exit:
                line += EXIT_CHAR
            elif cell.has_chip:
                line += CHIP_CHAR
            elif cell.has_firewall:
                line += FIREWALL_CHAR
            elif cell.has_locker:
                line += LOCKER_CHAR
            else:
                line += PATH_CHAR
        lines.append(line)
    return "\n".join(lines)


def parse_maze_text(maze_text: str) -> MazeData:
    """
    Parse maze text into MazeData.

    Args:
        maze_text: Multi-line string representing the maze grid.

    Returns:
        MazeData with grid, start, exit and items.

    Raises:
        MazeParseError: If the text is empty or rows differ in length.
        MazeValidationError: If the maze is not playable.
    """
    if not maze_text or not maze_text.strip():
        raise MazeParseError("Maze text is empty")

    lines = maze_text.strip("\r\n").split("\n")
    lines = [line.rstrip("\r") for line in lines]

    width = len(lines[0])
    for y, line in enumerate(lines):
        if len(line) != width:
            raise MazeParseError(
                f"Row {y} has length {len(line)}, expected {width}"
            )

    grid = Grid(width, len(lines))
    start_pos: Optional[Position] = None
    exit_pos: Optional[Position] = None
    chips: list[Position] = []
    firewalls: list[Position] = []
    lockers: list[Locker] = []

    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            if char not in VALID_CHARS:
                raise MazeValidationError(
                    f"Invalid character '{char}' at position ({x}, {y}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}"
                )

            cell = grid.rows[y][x]
            if char == WALL_CHAR:
                continue
            cell.type = CellType.PATH
            pos = Position(x, y)

            if char == START_CHAR:
                if start_pos is not None:
                    raise MazeValidationError(
                        f"Multiple start positions found: "
                        f"first at ({start_pos.x}, {start_pos.y}), second at ({x}, {y})"
                    )
                start_pos = pos
            elif char == EXIT_CHAR:
                if exit_pos is not None:
                    raise MazeValidationError(
                        f"Multiple exit positions found: "
                        f"first at ({exit_pos.x}, {exit_pos.y}), second at ({x}, {y})"
                    )
                exit_pos = pos
                cell.is_exit = True
            elif char == CHIP_CHAR:
                cell.has_chip = True
                chips.append(pos)
            elif char == FIREWALL_CHAR:
                cell.has_firewall = True
                firewalls.append(pos)
            elif char == LOCKER_CHAR:
                cell.has_locker = True
                cell.locker_id = locker_id_for(x, y)
                lockers.append(Locker(x, y, cell.locker_id))

    if start_pos is None:
        raise MazeValidationError("Maze must have a start position (S)")

    if exit_pos is None:
        raise MazeValidationError("Maze must have an exit position (E)")

    if not path_exists(grid, start_pos, exit_pos):
        raise MazeValidationError("Exit is not reachable from the start position")

    return MazeData(
        grid=grid,
        player_start=start_pos,
        exit=exit_pos,
        chips=tuple(chips),
        firewalls=tuple(firewalls),
        lockers=tuple(lockers),
    )


def load_maze_file(file_path: Path | str) -> MazeData:
    """
    Load and parse a maze file from the filesystem.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the maze cannot be parsed.
        MazeValidationError: If the maze is invalid.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        maze_text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e

    return parse_maze_text(maze_text)


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid.
    """
    try:
        parse_maze_text(maze_text)
        return True, None
    except (MazeParseError, MazeValidationError) as e:
        return False, str(e)
