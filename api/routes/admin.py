"""Admin routes: indexing triggers, repository status and store statistics."""
import asyncio
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from models import ActionResponse, EmbeddingStatsResponse, RepositoryStatus
from operations.index_orchestrator import merged_into_running
from routes.deps import get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"status": "error", "message": message})


def _started(run, started_message: str, merged_message: str) -> ActionResponse:
    if merged_into_running(run):
        return ActionResponse(status="success", message=merged_message)
    return ActionResponse(status="success", message=started_message)


@router.post("/reindex", response_model=ActionResponse)
async def reindex(request: Request):
    """Purge and rebuild every repository in the background

    Returns immediately. While a run is active the request is merged into it
    and nothing is purged.
    """
    logger.info("Manual repository reindex requested")
    try:
        run = get_app_state(request).trigger_reindex()
    except Exception as e:
        logger.exception("Failed to start repository reindexing")
        return _error(f"Failed to start reindexing: {e}")
    return _started(run, "Repository reindexing started",
                    "Repository indexing already in progress; reindex request merged into the current run")


@router.post("/initialize", response_model=ActionResponse)
async def initialize(request: Request):
    """Index every repository in the background unless a run is active"""
    logger.info("Repository initialization requested")
    try:
        run = get_app_state(request).trigger_initialize()
    except Exception as e:
        logger.exception("Failed to initialize repository")
        return _error(f"Failed to initialize repository: {e}")
    return _started(run, "Repository initialization started",
                    "Repository indexing already in progress; initialize request merged into the current run")


@router.get("/status", response_model=List[RepositoryStatus])
async def repository_status(request: Request):
    """Per-repository indexing status"""
    try:
        return get_app_state(request).get_status()
    except Exception as e:
        logger.exception("Failed to get repository status")
        raise HTTPException(status_code=500, detail=f"Failed to get repository status: {e}")


@router.get("/embeddings/stats", response_model=EmbeddingStatsResponse)
async def embedding_stats(request: Request):
    """Chunk count and store size on disk"""
    try:
        stats = await asyncio.to_thread(get_app_state(request).get_store_stats)
    except Exception as e:
        logger.exception("Failed to get embedding stats")
        raise HTTPException(status_code=500, detail=f"Failed to get embedding stats: {e}")
    return EmbeddingStatsResponse(count=stats.count, size_bytes=stats.size_bytes, size_mb=stats.size_mb)
