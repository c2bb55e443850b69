"""
Pytest configuration and shared fixtures

Common fixtures used across multiple test files are defined here.
"""
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add api directory to path for imports
api_path = Path(__file__).parent.parent / "api"
if not api_path.exists():
    # Running in Docker where api contents are at /app directly
    api_path = Path(__file__).parent.parent
sys.path.insert(0, str(api_path))

from tests.fakes import FakeEmbedder, RecordingEngine, StubSourceProvider  # noqa: E402


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def repo():
    from domain_models import RepositoryRef
    return RepositoryRef(owner="acme", name="docs", branch="main")


@pytest.fixture
def other_repo():
    from domain_models import RepositoryRef
    return RepositoryRef(owner="acme", name="guides", branch="develop")


# =============================================================================
# Collaborator Fakes
# =============================================================================

@pytest.fixture
def fake_embedder():
    """Deterministic bag-of-words embedder (no model download)"""
    return FakeEmbedder()


@pytest.fixture
def engine():
    """Generative engine stub recording every prompt"""
    return RecordingEngine()


@pytest.fixture
def source_provider(repo, other_repo):
    """Source provider stub serving files from memory"""
    return StubSourceProvider([repo, other_repo])


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def store(fake_embedder):
    """In-memory document store"""
    from config import DatabaseConfig
    from ingestion.database import DocumentStore

    document_store = DocumentStore(fake_embedder, config=DatabaseConfig(path=":memory:"))
    yield document_store
    document_store.close()


@pytest.fixture
def file_store(fake_embedder, tmp_path):
    """On-disk document store in a temporary directory"""
    from config import DatabaseConfig
    from ingestion.database import DocumentStore

    path = tmp_path / "store" / "chunks.db"
    document_store = DocumentStore(fake_embedder, config=DatabaseConfig(path=str(path)))
    yield document_store
    document_store.close()


# =============================================================================
# Common Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_app_state():
    """Create mock AppState exposing the boundary operations.

    Use this fixture when testing route modules.
    """
    state = Mock()
    state.handle_query = Mock()
    state.trigger_reindex = Mock()
    state.trigger_initialize = Mock()
    state.get_status = Mock(return_value=[])
    state.get_store_stats = Mock()
    state.is_engine_healthy = Mock(return_value=True)
    state.is_indexing_in_progress = Mock(return_value=False)
    return state
