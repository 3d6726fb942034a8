"""
Integration test fixtures. FastAPI TestClient over a Studio wired to the
scripted provider and a SQLite-backed key-value store.
"""
import pytest


@pytest.fixture
def sql_store(session_factory):
    from infra.storage.sql_store import SqlKeyValueStore
    return SqlKeyValueStore(session_factory)


@pytest.fixture
def sql_studio(llm, sql_store):
    from api.bootstrap import build_studio
    return build_studio(llm, sql_store)


@pytest.fixture
def api_client(sql_studio):
    """FastAPI TestClient over the SQL-backed studio."""
    from fastapi.testclient import TestClient
    from api.api import create_app
    app = create_app(studio=sql_studio)
    with TestClient(app) as client:
        yield client
