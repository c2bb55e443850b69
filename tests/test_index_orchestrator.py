"""
Tests for IndexOrchestrator - single-flight runs, batching, failure isolation
"""
import threading
from unittest.mock import Mock

import pytest

from config import IndexingConfig
from domain_models import RepositoryRef
from operations.document_indexer import DocumentIndexer
from operations.index_orchestrator import IndexOrchestrator, IndexingStatus, merged_into_running
from ingestion.chunking import TextChunker
from value_objects import IndexingStats

WAIT = 10


class EventLog:
    """Wraps a store and records purge/upsert order"""

    def __init__(self, store):
        self.store = store
        self.events = []
        self._lock = threading.Lock()

    def purge(self, owner, name):
        with self._lock:
            self.events.append(('purge', f"{owner}/{name}"))
        return self.store.purge(owner, name)

    def upsert_chunks(self, file_path, repository, chunks, content_hash=None):
        with self._lock:
            self.events.append(('upsert', repository.full_name))
        return self.store.upsert_chunks(file_path, repository, chunks, content_hash=content_hash)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def make_orchestrator(store, source_provider, repo, other_repo, clock):
    created = []

    def factory(target_store=None, provider=None, **config_overrides):
        target_store = target_store or store
        config = IndexingConfig(**{'batch_size': 10, 'schedule_seconds': 21600, **config_overrides})
        orchestrator = IndexOrchestrator(
            provider or source_provider,
            DocumentIndexer(target_store, TextChunker(size=200, overlap=20)),
            target_store,
            [repo, other_repo],
            config=config,
            clock=clock,
        )
        created.append(orchestrator)
        return orchestrator

    yield factory
    for orchestrator in created:
        orchestrator.shutdown(wait_for_run=True)


def _chunk_indexes_by_file(store):
    by_file = {}
    for chunk in store.all_chunks():
        by_file.setdefault((chunk.repository_full_name, chunk.file_path), []).append(chunk.chunk_index)
    return by_file


class TestInitialize:

    def test_indexes_every_text_file(self, make_orchestrator, source_provider, store, repo, other_repo):
        source_provider.add(repo, "install.md", "Install steps. " * 40)
        source_provider.add(other_repo, "guide.txt", "Guide text")
        source_provider.add(repo, "logo.png", "binary")

        stats = make_orchestrator().initialize().result(timeout=WAIT)

        assert isinstance(stats, IndexingStats)
        assert (stats.processed, stats.failed, stats.total) == (2, 0, 2)
        assert "logo.png" not in source_provider.fetched
        files = _chunk_indexes_by_file(store)
        assert set(files) == {("acme/docs", "install.md"), ("acme/guides", "guide.txt")}

    def test_chunk_indexes_contiguous_across_batches(self, make_orchestrator, source_provider, store, repo):
        for n in range(23):
            source_provider.add(repo, f"doc{n}.md", f"Document {n}. " * (n + 5))

        make_orchestrator(batch_size=4).initialize().result(timeout=WAIT)

        files = _chunk_indexes_by_file(store)
        assert len(files) == 23
        for indexes in files.values():
            assert sorted(indexes) == list(range(len(indexes)))

    def test_failed_file_does_not_abort_run(self, make_orchestrator, source_provider, store, repo):
        source_provider.add(repo, "a.md", "alpha")
        source_provider.add(repo, "b.md", "beta")
        source_provider.add(repo, "c.md", "gamma")
        source_provider.failing.add("b.md")

        stats = make_orchestrator().initialize().result(timeout=WAIT)

        assert (stats.processed, stats.failed) == (2, 1)
        assert {path for _, path in _chunk_indexes_by_file(store)} == {"a.md", "c.md"}

    def test_processing_error_counted_as_failure(self, make_orchestrator, source_provider, repo):
        source_provider.add(repo, "a.md", "alpha")
        broken_store = Mock()
        broken_store.upsert_chunks.side_effect = RuntimeError("disk full")

        stats = make_orchestrator(target_store=broken_store).initialize().result(timeout=WAIT)

        assert (stats.processed, stats.failed) == (0, 1)

    def test_unknown_repository_falls_back_to_first(self, make_orchestrator, source_provider, store):
        stranger = RepositoryRef(owner="someone", name="else")
        source_provider.files[(stranger.full_name, "a.md")] = "alpha"
        source_provider.files[("acme/docs", "a.md")] = "alpha"

        make_orchestrator().initialize().result(timeout=WAIT)

        assert {c.repository_full_name for c in store.all_chunks()} == {"acme/docs"}

    def test_batch_concurrency_is_bounded(self, store, repo, other_repo, make_orchestrator):
        from tests.fakes import StubSourceProvider
        slow = StubSourceProvider([repo, other_repo], delay=0.02)
        for n in range(25):
            slow.add(repo, f"doc{n}.md", f"content {n}")

        stats = make_orchestrator(provider=slow, batch_size=5).initialize().result(timeout=WAIT)

        assert stats.processed == 25
        assert 1 < slow.max_in_flight <= 5

    def test_run_level_failure_resets_state(self, make_orchestrator, clock):
        provider = Mock()
        provider.list_all_files.side_effect = ConnectionError("GitHub unreachable")
        orchestrator = make_orchestrator(provider=provider)
        clock.now = 5000.0

        stats = orchestrator.initialize().result(timeout=WAIT)

        assert stats == IndexingStats()
        assert orchestrator.status is IndexingStatus.IDLE
        assert orchestrator.last_index_timestamp == 5000.0


class TestSingleFlight:

    def test_concurrent_initialize_runs_once(self, store, repo, other_repo, make_orchestrator):
        from tests.fakes import StubSourceProvider
        slow = StubSourceProvider([repo, other_repo], delay=0.05)
        for n in range(6):
            slow.add(repo, f"doc{n}.md", f"content {n}")
        orchestrator = make_orchestrator(provider=slow)

        barrier = threading.Barrier(4)
        futures = []

        def trigger():
            barrier.wait()
            futures.append(orchestrator.initialize())

        threads = [threading.Thread(target=trigger) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        results = [f.result(timeout=WAIT) for f in futures]

        assert slow.list_calls == 1
        assert sorted(slow.fetched) == sorted(f"doc{n}.md" for n in range(6))
        assert sum(1 for r in results if r is not None) == 1

    def test_reindex_while_running_is_noop(self, store, repo, other_repo, make_orchestrator):
        from tests.fakes import StubSourceProvider
        slow = StubSourceProvider([repo, other_repo], delay=0.1)
        slow.add(repo, "a.md", "alpha")
        orchestrator = make_orchestrator(provider=slow)

        first = orchestrator.initialize()
        second = orchestrator.reindex()

        assert merged_into_running(second)
        assert not merged_into_running(first)
        assert first.result(timeout=WAIT).processed == 1
        assert not merged_into_running(first)
        assert slow.list_calls == 1

    def test_in_progress_flag_visible_during_run(self, make_orchestrator, repo, other_repo):
        from tests.fakes import StubSourceProvider
        slow = StubSourceProvider([repo, other_repo], delay=0.1)
        slow.add(repo, "a.md", "alpha")
        orchestrator = make_orchestrator(provider=slow)

        future = orchestrator.initialize()

        assert orchestrator.is_indexing_in_progress() is True
        future.result(timeout=WAIT)
        assert orchestrator.is_indexing_in_progress() is False


class TestReindex:

    def test_reindex_removes_stale_chunks(self, make_orchestrator, source_provider, store, repo):
        store.upsert_chunks("deleted.md", repo, [(0, "stale content")])
        source_provider.add(repo, "kept.md", "fresh content")

        make_orchestrator().reindex().result(timeout=WAIT)

        assert {c.file_path for c in store.all_chunks()} == {"kept.md"}

    def test_reindex_leaves_unconfigured_repositories(self, make_orchestrator, source_provider, store):
        outsider = RepositoryRef(owner="other", name="repo")
        store.upsert_chunks("x.md", outsider, [(0, "outside")])

        make_orchestrator().reindex().result(timeout=WAIT)

        assert [c.repository_full_name for c in store.all_chunks()] == ["other/repo"]

    def test_purges_complete_before_any_write(self, make_orchestrator, source_provider, store, repo, other_repo):
        source_provider.add(repo, "a.md", "alpha")
        source_provider.add(other_repo, "b.md", "beta")
        log = EventLog(store)

        make_orchestrator(target_store=log).reindex().result(timeout=WAIT)

        kinds = [kind for kind, _ in log.events]
        assert kinds[:2] == ['purge', 'purge']
        assert kinds.count('upsert') == 2
        assert 'purge' not in kinds[2:]

    def test_initialize_does_not_purge(self, make_orchestrator, source_provider, store):
        log = EventLog(store)

        make_orchestrator(target_store=log).initialize().result(timeout=WAIT)

        assert ('purge', 'acme/docs') not in log.events


class TestScheduledTick:

    def test_skips_when_last_run_is_recent(self, make_orchestrator, clock):
        orchestrator = make_orchestrator()
        orchestrator.initialize().result(timeout=WAIT)
        clock.now += 60

        assert orchestrator.scheduled_tick() is None

    def test_runs_when_period_elapsed(self, make_orchestrator, source_provider, repo, clock):
        source_provider.add(repo, "a.md", "alpha")
        orchestrator = make_orchestrator()
        orchestrator.initialize().result(timeout=WAIT)
        clock.now += 21601

        future = orchestrator.scheduled_tick()

        assert future is not None
        assert future.result(timeout=WAIT).processed == 1
        assert orchestrator.last_index_timestamp == clock.now

    def test_skips_while_running(self, make_orchestrator, repo, other_repo, clock):
        from tests.fakes import StubSourceProvider
        slow = StubSourceProvider([repo, other_repo], delay=0.1)
        slow.add(repo, "a.md", "alpha")
        orchestrator = make_orchestrator(provider=slow)
        clock.now = 100000.0

        running = orchestrator.initialize()

        assert orchestrator.scheduled_tick() is None
        running.result(timeout=WAIT)


class TestPurgeOnStartup:

    def test_disabled_keeps_existing_chunks(self, make_orchestrator, store, repo):
        store.upsert_chunks("old.md", repo, [(0, "kept")])

        make_orchestrator(clean_on_startup=False).purge_on_startup()

        assert store.count() == 1

    def test_purges_and_rebuilds_each_repository(self, make_orchestrator, source_provider, store, repo, other_repo, clock):
        store.upsert_chunks("old.md", repo, [(0, "stale")])
        source_provider.add(repo, "a.md", "alpha")
        source_provider.add(other_repo, "b.md", "beta")
        log = EventLog(store)
        orchestrator = make_orchestrator(target_store=log)

        orchestrator.purge_on_startup()

        assert {c.file_path for c in store.all_chunks()} == {"a.md", "b.md"}
        assert log.events == [
            ('purge', 'acme/docs'), ('upsert', 'acme/docs'),
            ('purge', 'acme/guides'), ('upsert', 'acme/guides'),
        ]
        assert orchestrator.last_index_timestamp == clock.now
        assert orchestrator.is_indexing_in_progress() is False

    def test_repository_failure_does_not_abort_startup(self, make_orchestrator, source_provider, store, repo, other_repo):
        source_provider.add(other_repo, "b.md", "beta")
        original = source_provider.list_files

        def list_files(repository):
            if repository == repo:
                raise ConnectionError("listing failed")
            return original(repository)

        source_provider.list_files = list_files

        make_orchestrator().purge_on_startup()

        assert {c.file_path for c in store.all_chunks()} == {"b.md"}


class TestRepositoryStatus:

    def test_status_per_repository(self, make_orchestrator, clock):
        orchestrator = make_orchestrator()
        clock.now = 12.5
        orchestrator.initialize().result(timeout=WAIT)

        status = orchestrator.repository_status()

        assert [s['full_name'] for s in status] == ["acme/docs", "acme/guides"]
        assert status[1]['branch'] == "develop"
        assert status[0]['indexing_in_progress'] is False
        assert status[0]['last_index_time'] == 12500
