"""
Configuration constants for the documentation assistant
"""
from pathlib import Path
from dataclasses import dataclass, field
from typing import List

from domain_models import RepositoryRef

# Model dimension mapping
MODEL_DIMENSIONS = {
    "sentence-transformers/all-MiniLM-L6-v2": 384,
    "sentence-transformers/all-mpnet-base-v2": 768,
    "BAAI/bge-small-en-v1.5": 384,
    "BAAI/bge-base-en-v1.5": 768,
    "nomic-ai/nomic-embed-text-v1.5": 768,
}

DEFAULT_STORE_PATH = Path.home() / ".ai-chatbot" / "embeddings" / "chunks.db"

@dataclass
class ChunkConfig:
    """Text chunking configuration"""
    size: int = 1000
    overlap: int = 200

@dataclass
class DatabaseConfig:
    """Document store configuration (SQLite).

    path may be ":memory:" for tests; size on disk is then reported as unknown.
    """
    path: str = str(DEFAULT_STORE_PATH)
    check_same_thread: bool = False

@dataclass
class ModelConfig:
    """Embedding model configuration"""
    name: str = "sentence-transformers/all-MiniLM-L6-v2"
    batch_size: int = 32

    def get_embedding_dim(self) -> int:
        """Get embedding dimension for configured model"""
        return MODEL_DIMENSIONS.get(self.name, 384)

@dataclass
class SourceConfig:
    """Remote repository host configuration"""
    base_url: str = "https://api.github.com"
    token: str = ""
    repositories: List[RepositoryRef] = field(default_factory=list)
    timeout_seconds: float = 30.0

@dataclass
class GenerationConfig:
    """Generative engine (Ollama) configuration"""
    base_url: str = "http://localhost:11434"
    model: str = "llama3.2:3b"
    connect_timeout: float = 30.0
    generate_timeout: float = 600.0
    health_timeout: float = 10.0
    temperature: float = 0.1
    top_p: float = 0.9
    context_window: int = 8192
    # Short prompts get a smaller token budget to speed up generation
    short_prompt_chars: int = 1200
    short_prompt_tokens: int = 512
    long_prompt_tokens: int = 2048

@dataclass
class IndexingConfig:
    """Indexing run configuration"""
    batch_size: int = 10
    schedule_seconds: float = 6 * 60 * 60
    clean_on_startup: bool = True
    scheduler_enabled: bool = True
    progress_log_every: int = 20

@dataclass
class RetrievalConfig:
    """Retrieval cascade limits, thresholds and hybrid weights"""
    fast_limit: int = 6
    deep_limit: int = 25
    fast_threshold: float = 0.6
    deep_threshold: float = 0.7
    relevance_limit: int = 25
    keyword_limit: int = 50
    semantic_weight: float = 0.7
    keyword_weight: float = 0.3

@dataclass
class Config:
    """Main configuration container"""
    chunks: ChunkConfig
    database: DatabaseConfig
    model: ModelConfig
    source: SourceConfig
    generation: GenerationConfig
    indexing: IndexingConfig
    retrieval: RetrievalConfig

    @classmethod
    def from_env(cls) -> 'Config':
        """Create config from environment - delegates to EnvironmentConfigLoader"""
        from environment_config_loader import EnvironmentConfigLoader
        return EnvironmentConfigLoader().load()

# Default instance
default_config = Config.from_env()
