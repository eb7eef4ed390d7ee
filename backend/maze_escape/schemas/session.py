"""Session schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field

from maze_escape.config import MIN_PLAYABLE_DIMENSION
from maze_escape.core.game_engine import GameEngine, GameSession
from maze_escape.schemas.maze import MAX_DIMENSION, MazeDetail, MazePosition


class SessionCreateRequest(BaseModel):
    """Schema for creating a new session."""

    width: Optional[int] = Field(None, ge=MIN_PLAYABLE_DIMENSION, le=MAX_DIMENSION)
    height: Optional[int] = Field(None, ge=MIN_PLAYABLE_DIMENSION, le=MAX_DIMENSION)
    seed: Optional[int] = None
    puzzle_difficulty: Optional[str] = Field(None, pattern="^(easy|medium|hard)$")
    grid_data: Optional[str] = Field(
        None,
        min_length=1,
        description="Play this maze text instead of generating one",
    )


class FirewallState(BaseModel):
    """Schema for a patrolling firewall."""

    x: int
    y: int
    direction: str


class SessionState(BaseModel):
    """Schema for session state."""

    id: str
    status: str  # active, completed, failed, abandoned
    current_position: MazePosition
    moves: int
    time_left: float
    penalty_seconds: int
    collected_chips: list[MazePosition]
    unlocked_lockers: list[str]
    firewalls: list[FirewallState]

    @classmethod
    def from_session(cls, engine: GameEngine, session: GameSession) -> "SessionState":
        """Build the response from engine state."""
        return cls(
            id=session.session_id,
            status=session.status,
            current_position=MazePosition(x=session.position.x, y=session.position.y),
            moves=session.moves,
            time_left=engine.time_left(session),
            penalty_seconds=session.penalty_seconds,
            collected_chips=[
                MazePosition(x=pos.x, y=pos.y)
                for pos in sorted(session.collected_chips, key=lambda p: (p.y, p.x))
            ],
            unlocked_lockers=sorted(session.unlocked_lockers),
            firewalls=[FirewallState(**fw.to_dict()) for fw in session.firewalls],
        )


class SessionResponse(SessionState):
    """Schema for a newly created session, including its maze."""

    maze: MazeDetail


class MoveRequest(BaseModel):
    """Schema for move request."""

    direction: str = Field(..., pattern="^(up|right|down|left)$")


class MoveResponse(BaseModel):
    """Schema for move response."""

    status: str  # moved, blocked, locked, completed, timeout
    position: MazePosition
    moves: int
    time_left: float
    chip_collected: bool = False
    hit_firewall: bool = False
    message: Optional[str] = None


class LookResponse(BaseModel):
    """Schema for look response."""

    up: str
    right: str
    down: str
    left: str
    current: str


class FirewallTickResponse(BaseModel):
    """Schema for firewall positions after a patrol step."""

    firewalls: list[FirewallState]


class PuzzleResponse(BaseModel):
    """Schema for a locker puzzle. The answer is never sent."""

    id: str
    locker_id: str
    type: str
    question: str
    time_limit: int


class PuzzleAnswerRequest(BaseModel):
    """Schema for answering a locker puzzle."""

    answer: str = Field(..., max_length=200)


class PuzzleAnswerResponse(BaseModel):
    """Schema for the outcome of a puzzle answer."""

    locker_id: str
    solved: bool
    time_left: float
    message: Optional[str] = None
