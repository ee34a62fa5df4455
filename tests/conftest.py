from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from services.api.main import app, get_store
from services.api.storage import MemoryAnalysisStore

SAMPLES = Path(__file__).parent / "samples"


@pytest.fixture
def sample():
    """Loader for snippets under tests/samples."""

    def _read(name: str) -> str:
        return (SAMPLES / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def store():
    return MemoryAnalysisStore()


@pytest.fixture
def api_client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
