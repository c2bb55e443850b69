"""Startup manager - orchestrates application initialization.

Order matters: configuration is validated before any component starts, and
the startup purge completes before the service accepts traffic.
"""
import asyncio
import logging

from app_state import AppState
from config import default_config
from startup.component_factory import ComponentFactory
from startup.config_validator import ConfigValidator
from startup.scheduler import IndexingScheduler

logger = logging.getLogger(__name__)


class StartupManager:
    """Manages application startup.

    Phases:
    - Configuration: validate config
    - Component: embedding model, document store, source provider, engine
    - Query: retrieval cascade, chat executor
    - Indexing: startup purge or initial run, periodic scheduler
    """

    def __init__(self, app_state: AppState, config=default_config, factory: ComponentFactory = None):
        self.state = app_state
        self.config = config
        self.factory = factory or ComponentFactory(config)

    async def initialize(self):
        """Initialize all components"""
        logger.info("Initializing documentation assistant...")
        self._validate_config()
        self._init_components()
        self._init_query_services()
        self._init_orchestrator()
        await self._prepare_index()
        self._start_scheduler()
        logger.info("Documentation assistant ready")

    # ============ Configuration Phase ============

    def _validate_config(self):
        """Validate configuration before startup"""
        ConfigValidator(self.config).validate()
        logger.info("Configuration validated")

    # ============ Component Phase ============

    def _init_components(self):
        core = self.state.core
        core.embedder = self.factory.create_embedder()
        core.store = self.factory.create_store(core.embedder)
        core.source_provider = self.factory.create_source_provider()
        core.engine = self.factory.create_engine()
        logger.info(f"Document store ready: {self.config.database.path}")

    # ============ Query Phase ============

    def _init_query_services(self):
        self.state.query.cascade = self.factory.create_cascade(self.state.core.store)
        self.state.query.executor = self.factory.create_executor(
            self.state.query.cascade, self.state.core.engine
        )

    # ============ Indexing Phase ============

    def _init_orchestrator(self):
        self.state.indexing.orchestrator = self.factory.create_orchestrator(
            self.state.core.source_provider, self.state.core.store
        )

    async def _prepare_index(self):
        """Purge and rebuild synchronously, or start a background run"""
        orchestrator = self.state.indexing.orchestrator
        if self.config.indexing.clean_on_startup:
            await asyncio.to_thread(orchestrator.purge_on_startup)
        else:
            logger.info("cleanOnStartup disabled: starting background indexing")
            orchestrator.initialize()

    def _start_scheduler(self):
        if not self.config.indexing.scheduler_enabled:
            logger.info("Indexing scheduler disabled")
            return
        scheduler = IndexingScheduler(
            self.state.indexing.orchestrator, self.config.indexing.schedule_seconds
        )
        self.state.indexing.scheduler = scheduler
        scheduler.start()
