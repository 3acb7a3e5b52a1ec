"""
NoteKeep — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── state_path:  Location of a not-yet-existing state file under tmp_path
    ├── state_file:  StateFile bound to state_path
    ├── note_store:  NoteStore over state_file (fresh lock, empty collection)
    └── test_client: HTTPX AsyncClient for the app, with get_note_store
                     overridden to return note_store
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["NOTES_FILE"] = os.path.join(
    tempfile.mkdtemp(prefix="notekeep_test_"), "notes.json"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeep.services.note_store import NoteStore, get_note_store
from notekeep.services.state_file import StateFile


@pytest.fixture
def state_path(tmp_path):
    """Path for the state file; the file itself is not created."""
    return tmp_path / "data" / "notes.json"


@pytest.fixture
def state_file(state_path):
    return StateFile(state_path)


@pytest.fixture
def note_store(state_file):
    return NoteStore(state_file)


@pytest_asyncio.fixture
async def test_client(note_store):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 404
    """
    from notekeep.main import app

    app.dependency_overrides[get_note_store] = lambda: note_store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
