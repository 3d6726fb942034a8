"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root, src and this directory to Python path for imports
project_root = Path(__file__).parent.parent
for _path in (project_root, project_root / "src", Path(__file__).parent):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    from api.config import create_db
    create_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(in_memory_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=in_memory_engine)


# ----- Key-value store, provider and studio -----
@pytest.fixture
def memory_store():
    from infra.storage.memory_store import InMemoryKeyValueStore
    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(memory_store):
    from api.services.persistence import PersistenceAdapter
    return PersistenceAdapter(memory_store)


@pytest.fixture
def notifications():
    from api.services.notification_service import NotificationCenter
    return NotificationCenter()


@pytest.fixture
def llm():
    from fakes import ScriptedLLM
    return ScriptedLLM()


@pytest.fixture
def studio(llm, memory_store):
    """Fully wired Studio over the scripted provider and an in-memory store."""
    from api.bootstrap import build_studio
    return build_studio(llm, memory_store)


@pytest.fixture
def curriculum():
    from api.schemas.curriculum_schemas import Curriculum
    from fakes import MOCK_CURRICULUM
    return Curriculum.model_validate(MOCK_CURRICULUM)
