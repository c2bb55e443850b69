"""Component factory for creating application objects"""

from config import default_config
from ingestion.chunking import TextChunker
from ingestion.database import DocumentStore
from operations.document_indexer import DocumentIndexer
from operations.index_orchestrator import IndexOrchestrator
from operations.model_loader import ModelLoader
from operations.query_executor import ChatExecutor
from operations.retrieval_cascade import RetrievalCascade
from pipeline.embedders import SentenceTransformerEmbedder
from services.ollama_client import OllamaService
from services.source_provider import GitHubSourceProvider


class ComponentFactory:
    """Creates application components

    Design principles:
    - Single responsibility: object creation
    - Small methods
    - Dependency injection pattern
    """

    def __init__(self, config=default_config):
        self.config = config

    def create_embedder(self):
        """Load the sentence-transformers model behind EmbedderInterface"""
        model = ModelLoader.load(self.config.model.name)
        return SentenceTransformerEmbedder(model, batch_size=self.config.model.batch_size)

    def create_store(self, embedder):
        return DocumentStore(embedder, config=self.config.database,
                             retrieval=self.config.retrieval)

    def create_source_provider(self):
        return GitHubSourceProvider(self.config.source)

    def create_engine(self):
        return OllamaService(self.config.generation)

    def create_orchestrator(self, provider, store):
        chunker = TextChunker(size=self.config.chunks.size, overlap=self.config.chunks.overlap)
        return IndexOrchestrator(
            provider,
            DocumentIndexer(store, chunker),
            store,
            self.config.source.repositories,
            config=self.config.indexing
        )

    def create_cascade(self, store):
        return RetrievalCascade(store, self.config.retrieval)

    def create_executor(self, cascade, engine):
        return ChatExecutor(cascade, engine)
