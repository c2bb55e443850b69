"""Route dependencies

Handlers reach the application only through AppState's boundary
operations (handle_query, trigger_reindex, get_status, ...).
"""
from fastapi import Request

from app_state import AppState


def get_app_state(request: Request) -> AppState:
    """AppState attached to the FastAPI app by main.py"""
    return request.app.state.app_state
