# Core module
from .grid import Cell, CellType, Direction, Grid, Position
from .maze_generator import (
    InvalidMazeDimensionsError,
    MazeData,
    MazeGenerationError,
    generate_maze,
)
from .movement import cell_at, is_valid_move, orthogonal_neighbors
from .verifier import path_exists, shortest_path
from .maze_parser import (
    MazeParseError,
    MazeValidationError,
    parse_maze_text,
    render_maze_text,
    load_maze_file,
    validate_maze_text,
)
from .game_engine import GameEngine, GameSession, GameSessionError

__all__ = [
    "Cell",
    "CellType",
    "Direction",
    "Grid",
    "Position",
    "InvalidMazeDimensionsError",
    "MazeData",
    "MazeGenerationError",
    "generate_maze",
    "cell_at",
    "is_valid_move",
    "orthogonal_neighbors",
    "path_exists",
    "shortest_path",
    "MazeParseError",
    "MazeValidationError",
    "parse_maze_text",
    "render_maze_text",
    "load_maze_file",
    "validate_maze_text",
    "GameEngine",
    "GameSession",
    "GameSessionError",
]
