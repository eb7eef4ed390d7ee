"""Session routes for playing a maze."""

import logging

from fastapi import APIRouter, Response, status

from maze_escape.api.deps import GameServiceDep
from maze_escape.core.grid import Direction
from maze_escape.core.maze_parser import parse_maze_text
from maze_escape.schemas.maze import MazeDetail, MazePosition
from maze_escape.schemas.session import (
    FirewallState,
    FirewallTickResponse,
    LookResponse,
    MoveRequest,
    MoveResponse,
    PuzzleAnswerRequest,
    PuzzleAnswerResponse,
    PuzzleResponse,
    SessionCreateRequest,
    SessionResponse,
    SessionState,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Sessions"])


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    request: SessionCreateRequest,
    service: GameServiceDep,
) -> SessionResponse:
    """Create a new game session.

    Generates a fresh maze, or parses ``grid_data`` when given, and places
    the player on its start cell.
    """
    custom_maze = parse_maze_text(request.grid_data) if request.grid_data else None
    engine, session = service.create_session(
        width=request.width,
        height=request.height,
        seed=request.seed,
        puzzle_difficulty=request.puzzle_difficulty,
        maze=custom_maze,
    )
    state = SessionState.from_session(engine, session)
    return SessionResponse(**state.model_dump(), maze=MazeDetail.from_maze(engine.maze))


@router.get(
    "/{session_id}",
    response_model=SessionState,
)
async def get_session(
    session_id: str,
    service: GameServiceDep,
) -> SessionState:
    """Get session state by ID."""
    engine = service.get_engine(session_id)
    session = engine.refresh(session_id)
    return SessionState.from_session(engine, session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def end_session(
    session_id: str,
    service: GameServiceDep,
) -> Response:
    """Abandon a session."""
    service.end_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{session_id}/move",
    response_model=MoveResponse,
)
async def move(
    session_id: str,
    request: MoveRequest,
    service: GameServiceDep,
) -> MoveResponse:
    """Move the player one cell."""
    engine = service.get_engine(session_id)
    move_result = engine.move(session_id, Direction(request.direction))

    if move_result.status in ("completed", "timeout"):
        logger.info(
            f"Session {session_id} finished: {move_result.status} "
            f"after {move_result.moves} moves"
        )

    return MoveResponse(
        status=move_result.status,
        position=MazePosition(x=move_result.position.x, y=move_result.position.y),
        moves=move_result.moves,
        time_left=move_result.time_left,
        chip_collected=move_result.chip_collected,
        hit_firewall=move_result.hit_firewall,
        message=move_result.message,
    )


@router.post(
    "/{session_id}/look",
    response_model=LookResponse,
)
async def look(
    session_id: str,
    service: GameServiceDep,
) -> LookResponse:
    """Look at the four surrounding cells and the current one."""
    engine = service.get_engine(session_id)
    look_result = engine.look(session_id)
    return LookResponse(**look_result.to_dict())


@router.post(
    "/{session_id}/tick",
    response_model=FirewallTickResponse,
)
async def tick(
    session_id: str,
    service: GameServiceDep,
) -> FirewallTickResponse:
    """Advance every firewall one patrol step.

    Clients call this on their own fixed interval.
    """
    engine = service.get_engine(session_id)
    firewalls = engine.tick_firewalls(session_id)
    return FirewallTickResponse(
        firewalls=[FirewallState(**fw.to_dict()) for fw in firewalls],
    )


@router.post(
    "/{session_id}/lockers/{locker_id}/puzzle",
    response_model=PuzzleResponse,
)
async def request_puzzle(
    session_id: str,
    locker_id: str,
    service: GameServiceDep,
) -> PuzzleResponse:
    """Get the puzzle for a locker next to the player."""
    engine = service.get_engine(session_id)
    puzzle = engine.request_puzzle(session_id, locker_id)
    return PuzzleResponse(
        id=puzzle.id,
        locker_id=locker_id,
        type=puzzle.type.value,
        question=puzzle.question,
        time_limit=puzzle.time_limit,
    )


@router.post(
    "/{session_id}/lockers/{locker_id}/solve",
    response_model=PuzzleAnswerResponse,
)
async def solve_puzzle(
    session_id: str,
    locker_id: str,
    request: PuzzleAnswerRequest,
    service: GameServiceDep,
) -> PuzzleAnswerResponse:
    """Answer a locker puzzle. Wrong answers cost time."""
    engine = service.get_engine(session_id)
    result = engine.solve_puzzle(session_id, locker_id, request.answer)
    return PuzzleAnswerResponse(
        locker_id=result.locker_id,
        solved=result.solved,
        time_left=result.time_left,
        message=result.message,
    )
