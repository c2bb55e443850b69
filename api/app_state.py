from typing import List

from models import ChatResponse, RepositoryStatus
from value_objects import StoreStats


class CoreServices:
    """Core service dependencies

    Holds fundamental services needed throughout the application.
    Focused on storage, ML models and the external collaborators.
    """

    def __init__(self):
        self.model = None
        self.embedder = None
        self.store = None  # DocumentStore (thread-safe via RLock)
        self.source_provider = None
        self.engine = None


class QueryServices:
    """Query-related services

    Separated from CoreServices to maintain SRP.
    """

    def __init__(self):
        self.cascade = None
        self.executor = None


class IndexingComponents:
    """Indexing orchestrator and its scheduler"""

    def __init__(self):
        self.orchestrator = None
        self.scheduler = None


class AppState:
    """Application state container

    Composes focused state objects; delegation methods hide the internal
    structure from route handlers (Law of Demeter).
    """

    def __init__(self):
        self.core = CoreServices()
        self.query = QueryServices()
        self.indexing = IndexingComponents()

    # === Service Access Delegation (for route handlers) ===

    def get_store(self):
        """Get document store"""
        return self.core.store

    def get_engine(self):
        """Get generative engine"""
        return self.core.engine

    def get_orchestrator(self):
        """Get indexing orchestrator"""
        return self.indexing.orchestrator

    # === Boundary operations ===

    def handle_query(self, message: str, session_id=None, include_context: bool = True,
                     fast_mode: bool = True, full_content: bool = False) -> ChatResponse:
        """Answer a chat message (never raises)"""
        return self.query.executor.handle_query(
            message, session_id=session_id, include_context=include_context,
            fast_mode=fast_mode, full_content=full_content
        )

    def trigger_reindex(self):
        """Start a forced reindex; returns the run's Future"""
        return self.indexing.orchestrator.reindex()

    def trigger_initialize(self):
        """Start indexing unless already running; returns the run's Future"""
        return self.indexing.orchestrator.initialize()

    def get_status(self) -> List[RepositoryStatus]:
        """Per-repository indexing status"""
        return [
            RepositoryStatus(
                repository_owner=s['owner'],
                repository_name=s['name'],
                branch_name=s['branch'],
                full_name=s['full_name'],
                indexing_in_progress=s['indexing_in_progress'],
                last_index_time=s['last_index_time'],
            )
            for s in self.indexing.orchestrator.repository_status()
        ]

    def get_store_stats(self) -> StoreStats:
        """Chunk count and on-disk size of the document store"""
        store = self.core.store
        return StoreStats(count=store.count(), size_bytes=store.size_on_disk_bytes())

    def is_indexing_in_progress(self) -> bool:
        """Check if indexing is currently in progress"""
        orchestrator = self.indexing.orchestrator
        return bool(orchestrator and orchestrator.is_indexing_in_progress())

    def is_engine_healthy(self) -> bool:
        return bool(self.core.engine and self.core.engine.health_check())

    # === Lifecycle Management Delegation ===

    def stop_scheduler(self):
        """Stop periodic indexing"""
        if self.indexing.scheduler:
            self.indexing.scheduler.stop()

    def stop_indexing(self):
        """Release indexing worker threads"""
        if self.indexing.orchestrator:
            self.indexing.orchestrator.shutdown()

    def close_store(self):
        """Close document store connection"""
        if self.core.store:
            self.core.store.close()

    def close_all_resources(self):
        """Stop background work, then close the store"""
        self.stop_scheduler()
        self.stop_indexing()
        self.close_store()
