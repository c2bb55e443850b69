"""Chat query handling - the boundary between callers and the RAG core.

Every exception is caught here and turned into a failed ChatResponse;
nothing propagates to the transport layer.
"""
import logging
import time
import uuid
from typing import Optional

from models import ChatRequest, ChatResponse
from operations.direct_file import is_direct_file_request, render_file
from operations.prompt_builder import PromptBuilder
from operations.retrieval_cascade import RetrievalCascade
from operations.source_labels import SourceLabelSanitizer

logger = logging.getLogger(__name__)

GENERIC_ERROR = "I apologize, but I encountered an error while processing your request. Please try again."
NO_MATCHING_FILE = "No matching file found for your request."
DIRECT_FILE_ERROR = "Failed to retrieve file content. Please try again."
DIRECT_FILE_MODEL = "Direct File Content"


class ChatExecutor:
    """Answers questions from stored documentation.

    Args:
        cascade: RetrievalCascade over the document store
        engine: Generative engine (generate, model_name)
        prompt_builder: Renders the grounding prompt
        sanitizer: Maps chunk paths to caller-visible labels
    """

    def __init__(self, cascade: RetrievalCascade, engine,
                 prompt_builder: Optional[PromptBuilder] = None,
                 sanitizer: Optional[SourceLabelSanitizer] = None):
        self.cascade = cascade
        self.engine = engine
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.sanitizer = sanitizer or SourceLabelSanitizer()

    def execute(self, request: ChatRequest) -> ChatResponse:
        return self.handle_query(
            request.message,
            session_id=request.session_id,
            include_context=request.include_context,
            fast_mode=request.fast_mode,
            full_content=request.full_content,
        )

    def handle_query(self, message: str, session_id: Optional[str] = None,
                     include_context: bool = True, fast_mode: bool = True,
                     full_content: bool = False) -> ChatResponse:
        started = time.monotonic()
        session_id = session_id or str(uuid.uuid4())
        try:
            logger.info(f"Processing message for session: {session_id}")
            if is_direct_file_request(message):
                return self._handle_direct_file(message, session_id, started)

            chunks = []
            if include_context:
                chunks = self.cascade.retrieve(message, fast_mode=fast_mode,
                                               full_content=full_content)

            prompt = self.prompt_builder.build(message, chunks)
            answer = self.engine.generate(prompt)

            elapsed = self._elapsed_ms(started)
            logger.info(f"Successfully processed message in {elapsed}ms")
            return ChatResponse.ok(answer, session_id, elapsed,
                                   self.sanitizer.labels(chunks), self.engine.model_name)
        except Exception:
            logger.exception(f"Failed to process message for session: {session_id}")
            return ChatResponse.error(GENERIC_ERROR, session_id)

    def _handle_direct_file(self, message: str, session_id: str, started: float) -> ChatResponse:
        """Return a whole stored file; the engine is never called"""
        logger.info(f"Handling direct file request for: {message}")
        try:
            chunks = self.cascade.best_file(message)
        except Exception:
            logger.exception("Failed to handle direct file request")
            return ChatResponse.error(DIRECT_FILE_ERROR, session_id)

        content = render_file(chunks)
        if content is None:
            return ChatResponse.error(NO_MATCHING_FILE, session_id)

        elapsed = self._elapsed_ms(started)
        logger.info(f"Successfully handled direct file request in {elapsed}ms")
        return ChatResponse.ok(content, session_id, elapsed,
                               self.sanitizer.labels(chunks), DIRECT_FILE_MODEL)

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
