"""Health routes."""
import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from models import HealthResponse
from routes.deps import get_app_state

router = APIRouter()


def _up(flag: bool) -> str:
    return "UP" if flag else "DOWN"


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """
    Health check endpoint

    200 with status UP when the generative engine answers, 503 otherwise.
    """
    app_state = get_app_state(request)
    engine_healthy = await asyncio.to_thread(app_state.is_engine_healthy)

    body = HealthResponse(
        status=_up(engine_healthy),
        services={
            "ollama": _up(engine_healthy),
            "embeddingStore": "UP",
            "application": "UP",
        }
    )
    return JSONResponse(status_code=200 if engine_healthy else 503, content=body.model_dump())
