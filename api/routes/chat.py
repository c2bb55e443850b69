"""Chat routes."""
import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from models import ChatRequest, ChatResponse
from routes.deps import get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat")


@router.post("/message", response_model=ChatResponse)
async def send_message(chat_request: ChatRequest, request: Request):
    """Answer a question from the indexed documentation

    A failed answer is still a ChatResponse, returned with status 500.
    """
    logger.info(f"Received chat message from session: {chat_request.session_id}")
    app_state = get_app_state(request)
    response = await asyncio.to_thread(
        app_state.handle_query,
        chat_request.message,
        chat_request.session_id,
        chat_request.include_context,
        chat_request.fast_mode,
        chat_request.full_content,
    )
    status_code = 200 if response.success else 500
    return JSONResponse(status_code=status_code, content=response.model_dump(by_alias=True))
