"""Maze schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field

from maze_escape.config import MIN_PLAYABLE_DIMENSION, get_settings
from maze_escape.core.maze_generator import MazeData
from maze_escape.core.maze_parser import render_maze_text

MAX_DIMENSION = get_settings().max_maze_dimension


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    x: int
    y: int


class LockerPosition(MazePosition):
    """Schema for a locker and its id."""

    id: str


class MazeGenerateRequest(BaseModel):
    """Schema for generating a maze. Even dimensions are bumped to odd."""

    width: Optional[int] = Field(None, ge=MIN_PLAYABLE_DIMENSION, le=MAX_DIMENSION)
    height: Optional[int] = Field(None, ge=MIN_PLAYABLE_DIMENSION, le=MAX_DIMENSION)
    seed: Optional[int] = None


class MazeDetail(BaseModel):
    """Schema for a generated maze."""

    width: int
    height: int
    grid_data: str
    player_start: MazePosition
    exit: MazePosition
    chips: list[MazePosition]
    firewalls: list[MazePosition]
    lockers: list[LockerPosition]

    @classmethod
    def from_maze(cls, maze: MazeData) -> "MazeDetail":
        """Build the response from core maze data."""
        return cls(
            width=maze.width,
            height=maze.height,
            grid_data=render_maze_text(maze),
            player_start=MazePosition(x=maze.player_start.x, y=maze.player_start.y),
            exit=MazePosition(x=maze.exit.x, y=maze.exit.y),
            chips=[MazePosition(x=pos.x, y=pos.y) for pos in maze.chips],
            firewalls=[MazePosition(x=pos.x, y=pos.y) for pos in maze.firewalls],
            lockers=[
                LockerPosition(x=locker.x, y=locker.y, id=locker.id)
                for locker in maze.lockers
            ],
        )


class MazeValidateRequest(BaseModel):
    """Schema for validating maze text."""

    grid_data: str = Field(..., min_length=1)


class MazeValidateResponse(BaseModel):
    """Schema for maze validation result."""

    valid: bool
    error: Optional[str] = None
