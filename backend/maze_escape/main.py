"""Maze Escape API - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from maze_escape.api.deps import limiter
from maze_escape.api.routes import maze, session
from maze_escape.config import get_settings
from maze_escape.core.game_engine import (
    GameSessionError,
    LockerNotFoundError,
    SessionNotFoundError,
)
from maze_escape.core.maze_generator import MazeGenerationError
from maze_escape.core.maze_parser import MazeParseError, MazeValidationError
from maze_escape.services.game_service import get_game_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("maze_escape")

settings = get_settings()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors."""
    logger.warning(
        f"Rate limit exceeded for {request.client.host if request.client else 'unknown'} "
        f"on {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded. Please slow down.",
            "retry_after": str(exc.detail),
        },
    )


def game_session_error_handler(request: Request, exc: GameSessionError):
    """Map engine errors to 404 for unknown ids and 400 otherwise."""
    if isinstance(exc, (SessionNotFoundError, LockerNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def maze_error_handler(request: Request, exc: Exception):
    """Reject mazes that cannot be generated or parsed."""
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests with correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        # Add request ID to request state for use in handlers
        request.state.request_id = request_id

        logger.info(
            f"[{request_id}] --> {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] <-- {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Maze Escape API...")
    yield
    logger.info(
        f"Shutting down Maze Escape API "
        f"({get_game_service().active_sessions} sessions discarded)"
    )


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Procedural maze-escape game",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(GameSessionError, game_session_error_handler)
app.add_exception_handler(MazeGenerationError, maze_error_handler)
app.add_exception_handler(MazeParseError, maze_error_handler)
app.add_exception_handler(MazeValidationError, maze_error_handler)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - configured based on environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


@app.get("/config")
async def get_config() -> dict:
    """Get frontend configuration."""
    return {
        "default_maze_width": settings.default_maze_width,
        "default_maze_height": settings.default_maze_height,
        "max_maze_dimension": settings.max_maze_dimension,
        "time_limit_seconds": settings.time_limit_seconds,
        "debug": settings.debug,
    }


# Include routers
app.include_router(maze.router, prefix="/v1")
app.include_router(session.router, prefix="/v1")
