"""Application factory and context for the Hold'em trainer API.

This module provides a factory for creating the FastAPI app without
import-time side effects. Runtime state lives in an ``AppContext`` instead
of module-level globals, so each test can build an app around a fresh
context.

Usage:
------
    # For production (uses default settings from environment)
    app = create_app()

    # For testing (custom configuration)
    app = create_app(context=AppContext(production_mode=False))
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.logging_config import configure_logging
from backend.table_registry import TableRegistry
from holdem import __version__
from holdem.poker.strategy.ranges import RangeRegistry


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    range_registry: RangeRegistry = field(default_factory=RangeRegistry)
    table_registry: Optional[TableRegistry] = None  # Created from range_registry when omitted

    # Configuration
    server_version: str = __version__
    production_mode: bool = field(
        default_factory=lambda: os.getenv("HOLDEM_PRODUCTION", "false").lower() == "true"
    )
    allowed_origins: List[str] = field(
        default_factory=lambda: os.getenv("HOLDEM_ALLOWED_ORIGINS", "*").split(",")
    )

    server_start_time: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("holdem.backend"))

    def __post_init__(self):
        if self.table_registry is None:
            self.table_registry = TableRegistry(range_registry=self.range_registry)

    def get_server_info(self) -> dict:
        return {
            "version": self.server_version,
            "uptime_seconds": time.time() - self.server_start_time,
            "table_count": self.table_registry.table_count,
            "range_count": len(self.range_registry.names()),
        }


def create_app(
    *,
    production_mode: Optional[bool] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        production_mode: Override production mode (default: from HOLDEM_PRODUCTION env var)
        context: Pre-configured AppContext (for testing). If None, creates a new one.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging(extra_loggers=("backend",))

    if context is None:
        context = AppContext()
    if production_mode is not None:
        context.production_mode = production_mode
    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context
        ctx.logger.info("Setting up API routers...")
        _setup_routers(app, ctx)
        ctx.logger.info(f"Hold'em trainer API {ctx.server_version} ready")
        yield
        ctx.logger.info(f"Shutting down with {ctx.table_registry.table_count} open tables")

    app = FastAPI(
        title="Texas Hold'em Trainer API",
        version=context.server_version,
        lifespan=lifespan,
        docs_url=None if context.production_mode else "/docs",
        redoc_url=None if context.production_mode else "/redoc",
    )

    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins if context.production_mode else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return context.get_server_info()

    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers import ranges, tables

    app.include_router(tables.setup_router(ctx.table_registry))
    app.include_router(ranges.setup_router(ctx.range_registry))
    ctx.logger.info("All API routers configured successfully")
