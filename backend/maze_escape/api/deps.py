"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends
from slowapi import Limiter
from slowapi.util import get_remote_address

from maze_escape.config import get_settings
from maze_escape.services.game_service import GameService, get_game_service

settings = get_settings()

# Rate limiter shared by the app and decorated routes
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Type aliases for cleaner route signatures
GameServiceDep = Annotated[GameService, Depends(get_game_service)]
