"""macmaint API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MacMaintError → structured JSON responses
    - Executor, environment and dispatch built once on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Dispatch stored on app.state so tests can swap in a scripted executor
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from macmaint.api.error_handlers import register_error_handlers
from macmaint.api.routes import health, mcp, tools
from macmaint.config import get_settings
from macmaint.infrastructure.command_executor import SubprocessExecutor
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.infrastructure.observability import setup_logging
from macmaint.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    env = EnvironmentContext.from_process(settings.home_override)
    executor = SubprocessExecutor(settings.command_timeout_seconds)
    app.state.executor = executor
    app.state.dispatch = ToolDispatch(executor, env, settings)
    logger.info(f"macmaint API started (home={env.home})")
    yield
    logger.info("macmaint API shutting down")


app = FastAPI(title="macmaint API", version="0.1.0", lifespan=lifespan)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tools.router)
app.include_router(mcp.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
