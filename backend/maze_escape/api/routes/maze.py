"""Maze routes for generating and validating mazes."""

from fastapi import APIRouter, Request

from maze_escape.api.deps import GameServiceDep, limiter
from maze_escape.config import get_settings
from maze_escape.core.maze_parser import validate_maze_text
from maze_escape.schemas.maze import (
    MazeDetail,
    MazeGenerateRequest,
    MazeValidateRequest,
    MazeValidateResponse,
)

settings = get_settings()

router = APIRouter(prefix="/maze", tags=["Mazes"])


@router.post(
    "/generate",
    response_model=MazeDetail,
)
@limiter.limit(f"{settings.rate_limit_generate}/minute")
async def generate(
    request: Request,
    maze_request: MazeGenerateRequest,
    service: GameServiceDep,
) -> MazeDetail:
    """Generate a new maze.

    Even dimensions are bumped to the next odd value. Pass a seed to get the
    same layout back on every call.
    """
    maze = service.generate(
        width=maze_request.width,
        height=maze_request.height,
        seed=maze_request.seed,
    )
    return MazeDetail.from_maze(maze)


@router.post(
    "/validate",
    response_model=MazeValidateResponse,
)
async def validate(request: MazeValidateRequest) -> MazeValidateResponse:
    """Check that maze text parses and its exit is reachable."""
    is_valid, error = validate_maze_text(request.grid_data)
    return MazeValidateResponse(valid=is_valid, error=error)
