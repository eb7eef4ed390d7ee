"""
Maze Escape Game Engine

Drives play on one generated maze:
- Player movement with wall and locked-locker blocking
- Chip collection
- Firewall patrol ticks and collision penalties
- Locker puzzles
- Time budget and exit detection

The maze itself is never mutated here. Collected chips, unlocked lockers and
firewall positions live on the session.
"""

import random
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

from maze_escape.core.grid import ORTHOGONAL_DIRECTIONS, Direction, Position
from maze_escape.core.items import Locker
from maze_escape.core.maze_generator import MazeData
from maze_escape.core.maze_parser import render_maze_text
from maze_escape.core.movement import Firewall, is_valid_move, lockers_near, step_firewall
from maze_escape.core.puzzles import (
    Puzzle,
    PuzzleDifficulty,
    generate_random_puzzle,
    get_puzzle_by_difficulty,
    validate_answer,
)

SessionStatus = Literal["active", "completed", "failed", "abandoned"]

DEFAULT_TIME_LIMIT = 120
DEFAULT_FIREWALL_PENALTY = 10
DEFAULT_PUZZLE_PENALTY = 10


class GameSessionError(Exception):
    """Base exception for invalid game actions."""

    pass


class SessionNotFoundError(GameSessionError):
    """Exception raised for unknown session ids."""

    pass


class SessionNotActiveError(GameSessionError):
    """Exception raised when acting on a finished session."""

    pass


class LockerNotFoundError(GameSessionError):
    """Exception raised for unknown locker ids."""

    pass


class LockerError(GameSessionError):
    """Exception raised for locker actions that are not allowed right now."""

    pass


@dataclass
class GameSession:
    """Current state of one player's run."""
    session_id: str
    position: Position
    started_at: float
    firewalls: list[Firewall] = field(default_factory=list)
    puzzle_difficulty: Optional[PuzzleDifficulty] = None
    status: SessionStatus = "active"
    moves: int = 0
    penalty_seconds: int = 0
    collected_chips: set[Position] = field(default_factory=set)
    unlocked_lockers: set[str] = field(default_factory=set)
    pending_puzzles: dict[str, Puzzle] = field(default_factory=dict)
    finished_at: Optional[float] = None


@dataclass
class MoveResult:
    """Result of a move action."""
    status: Literal["moved", "blocked", "locked", "completed", "timeout"]
    position: Position
    moves: int
    time_left: float
    chip_collected: bool = False
    hit_firewall: bool = False
    message: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {
            "status": self.status,
            "position": self.position.to_dict(),
            "moves": self.moves,
            "time_left": self.time_left,
            "chip_collected": self.chip_collected,
            "hit_firewall": self.hit_firewall,
        }
        if self.message:
            result["message"] = self.message
        return result


@dataclass
class LookResult:
    """Result of a look action."""
    up: str
    right: str
    down: str
    left: str
    current: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "up": self.up,
            "right": self.right,
            "down": self.down,
            "left": self.left,
            "current": self.current,
        }


@dataclass
class PuzzleResult:
    """Result of answering a locker puzzle."""
    locker_id: str
    solved: bool
    time_left: float
    message: Optional[str] = None


class GameEngine:
    """
    Game engine for one Maze Escape level.

    Example usage:
        engine = GameEngine(generate_maze(21, 21))
        session = engine.create_session()

        # Look is free
        surroundings = engine.look(session.session_id)

        result = engine.move(session.session_id, Direction.RIGHT)

        # Firewalls advance on the caller's fixed interval
        engine.tick_firewalls(session.session_id)
    """

    def __init__(
        self,
        maze: MazeData,
        time_limit: int = DEFAULT_TIME_LIMIT,
        firewall_penalty: int = DEFAULT_FIREWALL_PENALTY,
        puzzle_penalty: int = DEFAULT_PUZZLE_PENALTY,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the engine for a finished maze.

        Args:
            maze: Generated or parsed maze.
            time_limit: Seconds each session has to reach the exit.
            firewall_penalty: Seconds lost when stepping onto a firewall.
            puzzle_penalty: Seconds lost for a wrong puzzle answer.
            rng: Random source for firewall headings and puzzles.
            clock: Monotonic time source in seconds.
        """
        self.maze = maze
        self.time_limit = time_limit
        self.firewall_penalty = firewall_penalty
        self.puzzle_penalty = puzzle_penalty
        self._rng = rng or random.Random()
        self._clock = clock

        # Active sessions
        self._sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        session_id: Optional[str] = None,
        puzzle_difficulty: Optional[PuzzleDifficulty | str] = None,
    ) -> GameSession:
        """
        Create a new session at the maze start.

        Args:
            session_id: Optional custom session ID. If not provided, generates one.
            puzzle_difficulty: Difficulty for locker puzzles. None mixes all kinds.

        Returns:
            GameSession for the new run, already completed when the start
            is the exit.
        """
        if session_id is None:
            session_id = f"sess_{uuid.uuid4().hex[:12]}"

        firewalls = [
            Firewall(position=pos, direction=self._rng.choice(ORTHOGONAL_DIRECTIONS))
            for pos in self.maze.firewalls
        ]

        state = GameSession(
            session_id=session_id,
            position=self.maze.player_start,
            started_at=self._clock(),
            firewalls=firewalls,
            puzzle_difficulty=(
                PuzzleDifficulty(puzzle_difficulty) if puzzle_difficulty else None
            ),
        )
        if state.position == self.maze.exit:
            # Single-cell mazes start on the exit
            self._finish(state, "completed")
        self._sessions[session_id] = state
        return state

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get session state by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """End and remove a session."""
        state = self._sessions.pop(session_id, None)
        if state is None:
            return False
        if state.status == "active":
            state.status = "abandoned"
            state.finished_at = self._clock()
        return True

    def time_left(self, state: GameSession) -> float:
        """Seconds remaining for a session, never negative."""
        now = state.finished_at if state.finished_at is not None else self._clock()
        elapsed = now - state.started_at
        return max(0.0, self.time_limit - elapsed - state.penalty_seconds)

    def _finish(self, state: GameSession, status: SessionStatus) -> None:
        state.status = status
        state.finished_at = self._clock()

    def _check_timeout(self, state: GameSession) -> bool:
        """Fail an active session whose time has run out."""
        if state.status == "active" and self.time_left(state) <= 0:
            self._finish(state, "failed")
            return True
        return False

    def _require_session(self, session_id: str) -> GameSession:
        state = self._sessions.get(session_id)
        if state is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return state

    def _require_active(self, session_id: str) -> GameSession:
        state = self._require_session(session_id)
        if state.status != "active":
            raise SessionNotActiveError(f"Session is not active (status: {state.status})")
        return state

    def refresh(self, session_id: str) -> GameSession:
        """Get a session after applying any pending timeout."""
        state = self._require_session(session_id)
        self._check_timeout(state)
        return state

    def _is_locked(self, state: GameSession, pos: Position) -> bool:
        cell = self.maze.grid.cell_at(pos.x, pos.y)
        return (
            cell is not None
            and cell.has_locker
            and cell.locker_id not in state.unlocked_lockers
        )

    def _describe(self, state: GameSession, pos: Position) -> str:
        """Describe a cell as the player sees it."""
        cell = self.maze.grid.cell_at(pos.x, pos.y)
        if cell is None:
            return "out_of_bounds"
        if not cell.is_path:
            return "wall"
        if cell.is_exit:
            return "exit"
        if any(fw.position == pos for fw in state.firewalls):
            return "firewall"
        if self._is_locked(state, pos):
            return "locker"
        if cell.has_chip and pos not in state.collected_chips:
            return "chip"
        return "path"

    def look(self, session_id: str) -> LookResult:
        """
        Look at surrounding cells. Does not use a move.

        Raises:
            SessionNotFoundError: If session not found.
            SessionNotActiveError: If session already finished.
        """
        state = self._require_active(session_id)
        pos = state.position
        return LookResult(
            up=self._describe(state, pos.move(Direction.UP)),
            right=self._describe(state, pos.move(Direction.RIGHT)),
            down=self._describe(state, pos.move(Direction.DOWN)),
            left=self._describe(state, pos.move(Direction.LEFT)),
            current=self._describe(state, pos),
        )

    def move(self, session_id: str, direction: Direction) -> MoveResult:
        """
        Move the player one cell.

        Args:
            session_id: Active session ID.
            direction: Direction to move.

        Returns:
            MoveResult with new state.

        Raises:
            SessionNotFoundError: If session not found.
            SessionNotActiveError: If session already finished.
        """
        state = self._require_active(session_id)

        if self._check_timeout(state):
            return MoveResult(
                status="timeout",
                position=state.position,
                moves=state.moves,
                time_left=0.0,
                message="Time is up!",
            )

        target = state.position.move(direction)

        if not is_valid_move(self.maze.grid, target.x, target.y):
            return MoveResult(
                status="blocked",
                position=state.position,
                moves=state.moves,
                time_left=self.time_left(state),
                message=f"Cannot move {direction.value} - wall blocking",
            )

        if self._is_locked(state, target):
            return MoveResult(
                status="locked",
                position=state.position,
                moves=state.moves,
                time_left=self.time_left(state),
                message="Locker is locked - solve its puzzle first",
            )

        state.position = target
        state.moves += 1

        chip_collected = False
        cell = self.maze.grid.rows[target.y][target.x]
        if cell.has_chip and target not in state.collected_chips:
            state.collected_chips.add(target)
            chip_collected = True

        hit_firewall = any(fw.position == target for fw in state.firewalls)
        if hit_firewall:
            state.penalty_seconds += self.firewall_penalty

        if target == self.maze.exit:
            self._finish(state, "completed")
            return MoveResult(
                status="completed",
                position=target,
                moves=state.moves,
                time_left=self.time_left(state),
                chip_collected=chip_collected,
                hit_firewall=hit_firewall,
                message="You escaped the maze!",
            )

        if self._check_timeout(state):
            return MoveResult(
                status="timeout",
                position=target,
                moves=state.moves,
                time_left=0.0,
                chip_collected=chip_collected,
                hit_firewall=hit_firewall,
                message="Time is up!",
            )

        return MoveResult(
            status="moved",
            position=target,
            moves=state.moves,
            time_left=self.time_left(state),
            chip_collected=chip_collected,
            hit_firewall=hit_firewall,
        )

    def tick_firewalls(self, session_id: str) -> list[Firewall]:
        """Advance every firewall one patrol step."""
        state = self._require_active(session_id)
        for firewall in state.firewalls:
            step_firewall(self.maze.grid, firewall)
        return state.firewalls

    def _require_locker(self, state: GameSession, locker_id: str) -> Locker:
        locker = self.maze.locker_by_id(locker_id)
        if locker is None:
            raise LockerNotFoundError(f"Locker not found: {locker_id}")
        if locker_id in state.unlocked_lockers:
            raise LockerError(f"Locker already unlocked: {locker_id}")
        return locker

    def request_puzzle(self, session_id: str, locker_id: str) -> Puzzle:
        """
        Get the puzzle guarding a locker next to the player.

        Asking again before answering returns the same puzzle.

        Raises:
            LockerNotFoundError: If the locker does not exist.
            LockerError: If the locker is unlocked or not within reach.
        """
        state = self._require_active(session_id)
        locker = self._require_locker(state, locker_id)

        if locker not in lockers_near(self.maze, state.position):
            raise LockerError(f"Locker {locker_id} is out of reach")

        puzzle = state.pending_puzzles.get(locker_id)
        if puzzle is None:
            if state.puzzle_difficulty is None:
                puzzle = generate_random_puzzle(self._rng)
            else:
                puzzle = get_puzzle_by_difficulty(state.puzzle_difficulty, self._rng)
            state.pending_puzzles[locker_id] = puzzle
        return puzzle

    def solve_puzzle(self, session_id: str, locker_id: str, answer: str) -> PuzzleResult:
        """
        Answer a locker puzzle.

        A correct answer unlocks the locker. A wrong answer costs time and
        discards the puzzle, so a fresh one must be requested.

        Raises:
            LockerNotFoundError: If the locker does not exist.
            LockerError: If no puzzle was requested for the locker.
        """
        state = self._require_active(session_id)
        self._require_locker(state, locker_id)

        puzzle = state.pending_puzzles.pop(locker_id, None)
        if puzzle is None:
            raise LockerError(f"No puzzle requested for locker {locker_id}")

        if validate_answer(puzzle, answer):
            state.unlocked_lockers.add(locker_id)
            return PuzzleResult(
                locker_id=locker_id,
                solved=True,
                time_left=self.time_left(state),
                message="Access granted",
            )

        state.penalty_seconds += self.puzzle_penalty
        self._check_timeout(state)
        return PuzzleResult(
            locker_id=locker_id,
            solved=False,
            time_left=self.time_left(state),
            message="Access denied",
        )

    def get_maze_info(self) -> dict:
        """Get maze metadata."""
        return {
            "width": self.maze.width,
            "height": self.maze.height,
            "player_start": self.maze.player_start.to_dict(),
            "exit": self.maze.exit.to_dict(),
            "chips": len(self.maze.chips),
            "firewalls": len(self.maze.firewalls),
            "lockers": len(self.maze.lockers),
        }

    def visualize(self, session_id: Optional[str] = None) -> str:
        """
        Generate ASCII visualization of the maze.

        Args:
            session_id: If provided, shows player and firewall positions.

        Returns:
            ASCII string representation.
        """
        lines = [list(line) for line in render_maze_text(self.maze).split("\n")]
        state = self._sessions.get(session_id) if session_id else None
        if state:
            for pos in self.maze.firewalls:
                lines[pos.y][pos.x] = "."
            for firewall in state.firewalls:
                lines[firewall.position.y][firewall.position.x] = "F"
            for pos in state.collected_chips:
                lines[pos.y][pos.x] = "."
            lines[state.position.y][state.position.x] = "@"
        return "\n".join("".join(line) for line in lines)
