import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_state import AppState
from startup.manager import StartupManager
from routes.health import router as health_router
from routes.chat import router as chat_router
from routes.admin import router as admin_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

# Global state
state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan"""
    manager = StartupManager(state)
    await manager.initialize()
    yield
    _cleanup()


def _cleanup():
    """Cleanup resources using Law of Demeter compliant delegation"""
    state.close_all_resources()


app = FastAPI(
    title="Documentation Assistant API",
    description="RAG chatbot over documentation hosted in GitHub repositories",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Store state in app for route access
app.state.app_state = state

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(admin_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
