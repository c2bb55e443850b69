"""
Environment configuration loader.

Fixes Feature Envy: Logic for reading environment variables
lives with the data source (environment) rather than in Config dataclass.
"""
import os
from typing import List

from config import (
    Config, ChunkConfig, DatabaseConfig, ModelConfig, SourceConfig,
    GenerationConfig, IndexingConfig, RetrievalConfig, DEFAULT_STORE_PATH
)
from domain_models import RepositoryRef

class EnvironmentConfigLoader:
    """Loads configuration from environment variables.

    Single Responsibility: Environment access logic.
    """

    def load(self) -> Config:
        """Create Config from environment variables"""
        return Config(
            chunks=self._load_chunk_config(),
            database=self._load_database_config(),
            model=self._load_model_config(),
            source=self._load_source_config(),
            generation=self._load_generation_config(),
            indexing=self._load_indexing_config(),
            retrieval=self._load_retrieval_config()
        )

    def _load_chunk_config(self) -> ChunkConfig:
        """Load chunking configuration from environment"""
        return ChunkConfig(
            size=self._get_int("CHUNK_SIZE", 1000),
            overlap=self._get_int("CHUNK_OVERLAP", 200)
        )

    def _load_database_config(self) -> DatabaseConfig:
        """Load document store configuration from environment"""
        return DatabaseConfig(
            path=os.path.expanduser(
                self._get_optional("EMBEDDING_STORE_PATH", str(DEFAULT_STORE_PATH))
            )
        )

    def _load_model_config(self) -> ModelConfig:
        """Load embedding model configuration from environment"""
        return ModelConfig(
            name=self._get_optional("MODEL_NAME", ModelConfig.name),
            batch_size=self._get_int("EMBEDDING_BATCH_SIZE", 32)
        )

    def _load_source_config(self) -> SourceConfig:
        """Load repository host configuration from environment"""
        return SourceConfig(
            base_url=self._get_optional("GITHUB_BASE_URL", SourceConfig.base_url).rstrip("/"),
            token=self._get_optional("GITHUB_TOKEN", ""),
            repositories=self.parse_repositories(self._get_optional("GITHUB_REPOSITORIES", "")),
            timeout_seconds=self._get_float("GITHUB_TIMEOUT_SECONDS", 30.0)
        )

    def _load_generation_config(self) -> GenerationConfig:
        """Load Ollama configuration from environment"""
        return GenerationConfig(
            base_url=self._get_optional("OLLAMA_URL", GenerationConfig.base_url).rstrip("/"),
            model=self._get_optional("OLLAMA_MODEL", GenerationConfig.model),
            generate_timeout=self._get_float("OLLAMA_GENERATE_TIMEOUT", 600.0),
            health_timeout=self._get_float("OLLAMA_HEALTH_TIMEOUT", 10.0)
        )

    def _load_indexing_config(self) -> IndexingConfig:
        """Load indexing configuration from environment"""
        return IndexingConfig(
            batch_size=self._get_int("INDEXING_BATCH_SIZE", 10),
            schedule_seconds=self._get_float("INDEXING_SCHEDULE_SECONDS", 6 * 60 * 60),
            clean_on_startup=self._get_bool("CLEAN_ON_STARTUP", True),
            scheduler_enabled=self._get_bool("SCHEDULER_ENABLED", True)
        )

    def _load_retrieval_config(self) -> RetrievalConfig:
        """Load retrieval weights from environment"""
        return RetrievalConfig(
            semantic_weight=self._get_float("HYBRID_SEMANTIC_WEIGHT", 0.7),
            keyword_weight=self._get_float("HYBRID_KEYWORD_WEIGHT", 0.3)
        )

    @staticmethod
    def parse_repositories(value: str) -> List[RepositoryRef]:
        """Parse "owner/name[@branch]" entries separated by commas.

        Branch defaults to "main". Malformed entries raise ValueError so that
        a typo in the environment fails fast at startup.
        """
        repositories = []
        for entry in value.split(","):
            entry = entry.strip()
            if not entry:
                continue
            repositories.append(RepositoryRef.parse(entry))
        return repositories

    def _get_optional(self, key: str, default: str) -> str:
        """Get optional string environment variable"""
        return os.getenv(key, default)

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable"""
        value = os.getenv(key, str(default).lower())
        return value.lower() == "true"

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable"""
        value = os.getenv(key, str(default))
        return int(value)

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable"""
        value = os.getenv(key, str(default))
        return float(value)
