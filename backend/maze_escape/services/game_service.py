"""Game service keeping live sessions in process memory."""

import logging
import random
from collections import OrderedDict
from typing import Optional

from maze_escape.config import Settings, get_settings
from maze_escape.core.game_engine import GameEngine, GameSession, SessionNotFoundError
from maze_escape.core.maze_generator import MazeData, generate_maze

logger = logging.getLogger(__name__)


class GameService:
    """
    Service creating one maze and engine per game session.

    Sessions are not persisted. When ``max_active_sessions`` is reached the
    oldest session is evicted to make room.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._engines: OrderedDict[str, GameEngine] = OrderedDict()

    def generate(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> MazeData:
        """
        Generate a maze with configured defaults.

        Args:
            width: Requested width, or the configured default.
            height: Requested height, or the configured default.
            seed: Optional seed for a reproducible layout.
        """
        width = width or self.settings.default_maze_width
        height = height or self.settings.default_maze_height
        rng = random.Random(seed) if seed is not None else None
        return generate_maze(width, height, rng=rng)

    def create_session(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        seed: Optional[int] = None,
        puzzle_difficulty: Optional[str] = None,
        maze: Optional[MazeData] = None,
    ) -> tuple[GameEngine, GameSession]:
        """
        Start a new game.

        Args:
            width: Requested width when generating.
            height: Requested height when generating.
            seed: Seed for the maze layout, firewall headings and puzzles.
            puzzle_difficulty: Locker puzzle tier, or the configured default.
            maze: Play this maze instead of generating one.

        Returns:
            Tuple of (engine, session).
        """
        if maze is None:
            maze = self.generate(width, height, seed)
        rng = random.Random(seed) if seed is not None else None

        engine = GameEngine(
            maze,
            time_limit=self.settings.time_limit_seconds,
            firewall_penalty=self.settings.firewall_penalty_seconds,
            puzzle_penalty=self.settings.puzzle_penalty_seconds,
            rng=rng,
        )
        session = engine.create_session(
            puzzle_difficulty=puzzle_difficulty or self.settings.puzzle_difficulty,
        )

        while len(self._engines) >= self.settings.max_active_sessions:
            evicted_id, _ = self._engines.popitem(last=False)
            logger.warning(f"Session limit reached, evicted session {evicted_id}")

        self._engines[session.session_id] = engine
        logger.info(
            f"Created session {session.session_id} on "
            f"{maze.width}x{maze.height} maze"
        )
        return engine, session

    def get_engine(self, session_id: str) -> GameEngine:
        """
        Get the engine running a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        engine = self._engines.get(session_id)
        if engine is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return engine

    def end_session(self, session_id: str) -> None:
        """
        Abandon and forget a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        engine = self._engines.pop(session_id, None)
        if engine is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        engine.end_session(session_id)
        logger.info(f"Ended session {session_id}")

    @property
    def active_sessions(self) -> int:
        return len(self._engines)


# Singleton instance
_game_service: Optional[GameService] = None


def get_game_service() -> GameService:
    """Get singleton game service."""
    global _game_service
    if _game_service is None:
        _game_service = GameService()
    return _game_service
