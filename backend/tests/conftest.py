"""
NoteShelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_storage: In-memory NoteStorage fake (no disk)
    ├── sequential_ids: Deterministic id generator (note-1, note-2, ...)
    ├── fake_clock: Timestamp source that advances one second per call
    ├── repository: NoteRepository over memory_storage
    ├── notes_dir / file_storage: Real directory-backed storage under tmp_path
    └── test_client: HTTPX AsyncClient wired to the app with a file-backed
                     repository in notes_dir
"""

import itertools
import os
import tempfile
from typing import Dict, List, Optional

# Override settings for testing BEFORE any app imports
os.environ["NOTES_DIR"] = tempfile.mkdtemp(prefix="noteshelf_test_")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteshelf.exceptions import FileStorageError
from noteshelf.services.note_repository import NoteRepository, get_note_repository
from noteshelf.services.storage import FileNoteStorage, NoteStorage


class MemoryNoteStorage(NoteStorage):
    """Dict-backed NoteStorage; ``files`` maps key → stored text."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})

    async def list_keys(self) -> List[str]:
        return sorted(self.files)

    async def read_key(self, key: str) -> str:
        if key not in self.files:
            raise FileStorageError(message="Could not read note file", context={"key": key})
        return self.files[key]

    async def write_key(self, key: str, text: str) -> None:
        self.files[key] = text

    async def delete_key(self, key: str) -> None:
        if key not in self.files:
            raise FileStorageError(message="Could not delete note file", context={"key": key})
        del self.files[key]


class FakeClock:
    """Returns 2024-01-15T12:00:01.000Z, ...:02.000Z, ... on successive calls."""

    def __init__(self):
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"2024-01-15T12:{self.calls // 60:02d}:{self.calls % 60:02d}.000Z"


@pytest.fixture
def memory_storage():
    return MemoryNoteStorage()


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"note-{next(counter)}"


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def repository(memory_storage, sequential_ids, fake_clock):
    return NoteRepository(memory_storage, generate_id=sequential_ids, clock=fake_clock)


@pytest.fixture
def notes_dir(tmp_path):
    """Path of the notes directory; not created until storage first touches it."""
    return tmp_path / "notes"


@pytest.fixture
def file_storage(notes_dir):
    return FileNoteStorage(str(notes_dir))


@pytest_asyncio.fixture
async def test_client(file_storage):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    The note repository dependency is overridden to use ``file_storage``.
    """
    from noteshelf.main import app

    repo = NoteRepository(file_storage)
    app.dependency_overrides[get_note_repository] = lambda: repo
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
