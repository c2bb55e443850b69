"""Indexing orchestrator - keeps the document store in sync with the sources.

Runs are single-flight: the IDLE -> RUNNING transition is a compare-and-set
under a lock, so concurrent triggers (manual initialize/reindex and the
scheduler) collapse into the run already in flight.
"""
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum
from typing import List, Optional

from config import default_config, IndexingConfig
from domain_models import FileRef, RepositoryRef
from value_objects import IndexingStats, ProcessingResult

logger = logging.getLogger(__name__)


class IndexingStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"


def _completed(result=None) -> Future:
    future = Future()
    future.set_result(result)
    return future


def merged_into_running(future: Future) -> bool:
    """True for the handle returned when a trigger found a run already in flight"""
    return future.done() and future.result() is None


class IndexOrchestrator:
    """Orchestrates full indexing runs over every configured repository

    Args:
        provider: Source provider (list_all_files, list_files, is_text_file, fetch_content)
        indexer: DocumentIndexer turning SourceFile into stored chunks
        store: DocumentStore (purge)
        repositories: Configured RepositoryRef list
        config: IndexingConfig (batch size, schedule period, startup purge)
        clock: Wall clock in seconds (injected by tests)
    """

    def __init__(self, provider, indexer, store, repositories: List[RepositoryRef],
                 config: IndexingConfig = default_config.indexing, clock=time.time):
        self.provider = provider
        self.indexer = indexer
        self.store = store
        self.repositories = list(repositories)
        self.config = config
        self._clock = clock
        self._lock = threading.Lock()
        self._status = IndexingStatus.IDLE
        self._last_index_timestamp = 0.0
        self._runner = ThreadPoolExecutor(max_workers=1, thread_name_prefix="indexing-run")
        self._file_pool = ThreadPoolExecutor(
            max_workers=max(1, config.batch_size), thread_name_prefix="indexing-file"
        )

    # === State ===

    @property
    def status(self) -> IndexingStatus:
        return self._status

    def is_indexing_in_progress(self) -> bool:
        return self._status is IndexingStatus.RUNNING

    @property
    def last_index_timestamp(self) -> float:
        """Epoch seconds of the last finished run (0 if none yet)"""
        return self._last_index_timestamp

    def _try_acquire(self) -> bool:
        with self._lock:
            if self._status is IndexingStatus.RUNNING:
                return False
            self._status = IndexingStatus.RUNNING
            return True

    def _release(self):
        with self._lock:
            self._status = IndexingStatus.IDLE
            self._last_index_timestamp = self._clock()

    # === Triggers ===

    def initialize(self) -> Future:
        """Start a run unless one is already in flight (then a completed no-op)."""
        return self._start(force=False)

    def reindex(self) -> Future:
        """Start a forced run: purge every repository, then rebuild.

        While a run is active this collapses into a completed no-op like
        initialize(); merged_into_running() tells the two cases apart.
        """
        return self._start(force=True)

    def scheduled_tick(self) -> Optional[Future]:
        """Called by the scheduler every schedule period"""
        if self.is_indexing_in_progress():
            return None
        if self._clock() - self._last_index_timestamp <= self.config.schedule_seconds:
            return None
        logger.info("Starting scheduled repository re-indexing")
        return self.initialize()

    def _start(self, force: bool) -> Future:
        if not self._try_acquire():
            logger.info("Repository indexing already in progress")
            return _completed()
        try:
            return self._runner.submit(self._run, force)
        except RuntimeError:
            # Executor already shut down
            self._release()
            raise

    # === Startup purge ===

    def purge_on_startup(self):
        """Purge and rebuild every repository synchronously (if configured).

        Per-repository failures are logged and never abort startup.
        """
        if not self.config.clean_on_startup:
            logger.info("cleanOnStartup disabled: retaining existing embeddings")
            return
        if not self._try_acquire():
            logger.info("Repository indexing already in progress, skipping startup purge")
            return

        logger.info("cleanOnStartup enabled: purging existing embeddings before indexing")
        try:
            for repository in self.repositories:
                try:
                    self.store.purge(repository.owner, repository.name)
                    files = self._text_files(self.provider.list_files(repository))
                    stats = self._process_all(files, time.monotonic())
                    logger.info(f"Rebuilt {repository.full_name}: {stats}")
                except Exception as e:
                    logger.warning(f"Failed purge for {repository.full_name}: {e}", exc_info=True)
        finally:
            self._release()

    # === Run ===

    def _run(self, force: bool) -> IndexingStats:
        started = time.monotonic()
        stats = IndexingStats()
        try:
            logger.info(
                f"Starting repository indexing for {len(self.repositories)} repositories "
                f"(force: {force})"
            )
            if force:
                for repository in self.repositories:
                    self.store.purge(repository.owner, repository.name)

            all_files = self.provider.list_all_files()
            logger.info(f"Found {len(all_files)} files across all repositories")
            text_files = self._text_files(all_files)
            logger.info(f"Processing {len(text_files)} text files")

            stats = self._process_all(text_files, started)
            logger.info(
                f"Repository indexing completed in {stats.duration_ms}ms. "
                f"Processed: {stats.processed}, Failed: {stats.failed}"
            )
        except Exception:
            logger.exception("Repository indexing failed")
        finally:
            self._release()
        return stats

    def _text_files(self, files: List[FileRef]) -> List[FileRef]:
        return [f for f in files if self.provider.is_text_file(f.path)]

    def _process_all(self, files: List[FileRef], started: float) -> IndexingStats:
        """Process files in sequential batches; files within a batch run concurrently"""
        processed = failed = 0
        batch_size = max(1, self.config.batch_size)
        every = max(1, self.config.progress_log_every)

        for start in range(0, len(files), batch_size):
            batch = files[start:start + batch_size]
            futures = [self._file_pool.submit(self._process_file, f) for f in batch]
            wait(futures)

            before = processed
            for future in futures:
                if future.result().succeeded:
                    processed += 1
                else:
                    failed += 1

            if processed // every > before // every or start + batch_size >= len(files):
                logger.info(f"Processed {processed}/{len(files)} files ({failed} failed)")

        duration_ms = int((time.monotonic() - started) * 1000)
        return IndexingStats(processed=processed, failed=failed,
                             total=len(files), duration_ms=duration_ms)

    def _process_file(self, file_ref: FileRef) -> ProcessingResult:
        """Fetch, chunk and store one file; never raises"""
        try:
            repository = self._resolve_repository(file_ref)
            source = self.provider.fetch_content(repository, file_ref.path)
        except Exception as e:
            logger.warning(
                f"Failed to get content for file: {file_ref.path} "
                f"from repository: {file_ref.repository_full_name}: {e}"
            )
            return ProcessingResult.failure(file_ref.path, str(e))

        try:
            return self.indexer.index_file(source)
        except Exception as e:
            logger.warning(
                f"Failed to process file: {file_ref.path} "
                f"from repository: {file_ref.repository_full_name}: {e}"
            )
            return ProcessingResult.failure(file_ref.path, str(e))

    def _resolve_repository(self, file_ref: FileRef) -> RepositoryRef:
        """Configured repository owning the file, else the first configured one"""
        for repository in self.repositories:
            if repository.full_name == file_ref.repository_full_name:
                return repository
        return self.repositories[0]

    # === Reporting ===

    def repository_status(self) -> List[dict]:
        """Per-repository status snapshot (never blocks on a running run)"""
        in_progress = self.is_indexing_in_progress()
        last = int(self._last_index_timestamp * 1000)
        return [
            {
                'owner': repo.owner,
                'name': repo.name,
                'branch': repo.branch,
                'full_name': repo.full_name,
                'indexing_in_progress': in_progress,
                'last_index_time': last,
            }
            for repo in self.repositories
        ]

    def shutdown(self, wait_for_run: bool = False):
        """Stop accepting runs and release worker threads"""
        self._runner.shutdown(wait=wait_for_run)
        self._file_pool.shutdown(wait=wait_for_run)
