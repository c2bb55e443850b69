from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional

MAX_MESSAGE_LENGTH = 5000


class CamelModel(BaseModel):
    """Wire models use camelCase names; Python code uses snake_case"""
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(CamelModel):
    message: str = Field(..., max_length=MAX_MESSAGE_LENGTH, description="The user question")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    include_context: bool = Field(default=True, alias="includeContext",
                                  description="Retrieve documentation context")
    fast_mode: bool = Field(default=True, alias="fastMode",
                            description="Skip the deep fallback searches")
    full_content: bool = Field(default=False, alias="fullContent",
                               description="Ground the answer in the whole best-matching file")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class ChatResponse(CamelModel):
    response: Optional[str] = None
    session_id: str = Field(..., alias="sessionId")
    response_time_ms: int = Field(default=0, alias="responseTimeMs")
    source_files: List[str] = Field(default_factory=list, alias="sourceFiles")
    model_used: Optional[str] = Field(default=None, alias="modelUsed")
    success: bool = True
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    @classmethod
    def ok(cls, response: str, session_id: str, response_time_ms: int,
           source_files: List[str], model_used: str) -> 'ChatResponse':
        return cls(response=response, session_id=session_id, response_time_ms=response_time_ms,
                   source_files=source_files, model_used=model_used)

    @classmethod
    def error(cls, message: str, session_id: str) -> 'ChatResponse':
        return cls(session_id=session_id, success=False, error_message=message)


class RepositoryStatus(CamelModel):
    repository_owner: str = Field(..., alias="repositoryOwner")
    repository_name: str = Field(..., alias="repositoryName")
    branch_name: str = Field(..., alias="branchName")
    full_name: str = Field(..., alias="fullName")
    indexing_in_progress: bool = Field(..., alias="indexingInProgress")
    last_index_time: int = Field(default=0, alias="lastIndexTime",
                                 description="Epoch milliseconds of the last finished run")


class EmbeddingStatsResponse(CamelModel):
    count: int
    size_bytes: int = Field(..., alias="sizeBytes")
    size_mb: str = Field(..., alias="sizeMB")


class ActionResponse(BaseModel):
    status: str
    message: str


class HealthResponse(BaseModel):
    status: str
    services: Dict[str, str]
