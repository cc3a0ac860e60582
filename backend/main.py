"""
File Diff Backend - FastAPI Application Entry Point
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, diff
from services.config_manager import ConfigManager, get_file_diff_config

logging.basicConfig(
    level=os.environ.get("FILE_DIFF_LOG_LEVEL", "INFO").upper(),
    format="[%(name)s] %(levelname)s %(message)s",
)
logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("Starting File Diff Backend...")
    config_manager = ConfigManager.get_instance()
    logger.info("ConfigManager initialized (%s)", config_manager.config_file)

    settings = get_file_diff_config(config_manager)
    logger.info("Diff backend: %s, highlighter: %s", settings.diff_backend, settings.highlighter)

    yield
    logger.info("Shutting down File Diff Backend...")


app = FastAPI(
    title="File Diff Backend",
    description="Line diffing, folding and confirm/cancel handling for file diff previews",
    version="1.0.0",
    lifespan=lifespan,
)

# The diff view runs locally in the desktop shell
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "file-diff-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))
