"""ScoreGuard - anti-cheat and leaderboard backend for the arcade shooter

The browser client plays unobserved; the server only times each session
and refuses results that could not have been scored in that time.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scoreguard.application.use_cases.game_use_cases import ExpireOldSessionsUseCase
from scoreguard.core.clock import Clock, SystemClock
from scoreguard.core.config import settings
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy
from scoreguard.infrastructure.database.connection import create_tables
from scoreguard.infrastructure.sessions.memory_session_store import InMemorySessionStore
from scoreguard.infrastructure.sessions.session_sweeper import SessionSweeper

# Import routers
from scoreguard.presentation.api.auth import router as auth_router
from scoreguard.presentation.api.games import router as games_router
from scoreguard.presentation.api.leaderboard import router as leaderboard_router
from scoreguard.presentation.api.scores import router as scores_router
from scoreguard.presentation.schemas.common_schemas import HealthCheckResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and run the session sweeper for the life of the process"""
    create_tables()
    app.state.session_sweeper.start()
    try:
        yield
    finally:
        await app.state.session_sweeper.stop()


def create_application(clock: Optional[Clock] = None) -> FastAPI:
    """Create and configure FastAPI application"""

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),  # Console output
        ],
    )

    # Set specific loggers
    logging.getLogger("scoreguard").setLevel(logging.INFO)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    app = FastAPI(
        title=settings.app_name,
        description="Session-based score validation and leaderboard for the arcade shooter",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Session state is owned by this app instance
    app.state.clock = clock or SystemClock()
    app.state.validation_policy = ValidationPolicy.from_settings(settings)
    app.state.session_store = InMemorySessionStore(app.state.clock)
    expire_sessions = ExpireOldSessionsUseCase(
        app.state.session_store, settings.session_timeout_seconds
    )
    app.state.session_sweeper = SessionSweeper(
        expire_sessions.execute, settings.session_sweep_interval_seconds
    )
    logger.info(f"Validation policy: {app.state.validation_policy}")

    # Include routers
    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(games_router, prefix="/games", tags=["Game Sessions"])
    app.include_router(scores_router, prefix="/scores", tags=["Scores"])
    app.include_router(leaderboard_router, prefix="/leaderboard", tags=["Leaderboard"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.app_name}!",
            "description": "Start a session, play, report your score",
            "version": settings.version,
            "docs": "/docs",
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health_check() -> HealthCheckResponse:
        """Health check endpoint"""
        return HealthCheckResponse(
            app=settings.app_name,
            version=settings.version,
            timestamp=datetime.utcnow().isoformat() + "Z",
            active_sessions=len(app.state.session_store),
        )

    return app


# Create FastAPI app
app = create_application()


def start() -> None:
    """Start the server"""
    uvicorn.run(
        "scoreguard.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info",
    )
