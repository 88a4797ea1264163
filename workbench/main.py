"""FastAPI entry-point exposing orchestrator controls."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from workbench.api.agents import router as agents_router
from workbench.api.routing import router as routing_router
from workbench.api.tools import router as tools_router
from workbench.api.workflows import router as workflows_router
from workbench.config import config, configure_logging
from workbench.runtime import get_orchestrator

logger = logging.getLogger("workbench.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    configure_logging(config.log_level)
    logger.info("Starting workbench orchestrator (%s, %s executor)", config.environment, config.executor)
    get_orchestrator().initialize()
    yield


app = FastAPI(title="Agent Workbench Orchestrator", lifespan=lifespan)
app.include_router(agents_router)
app.include_router(tools_router)
app.include_router(workflows_router)
app.include_router(routing_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "initialized": get_orchestrator().initialized}
